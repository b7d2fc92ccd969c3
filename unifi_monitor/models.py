"""Catalog data model.

Products are kept as received from the storefront (``raw``) so they can be
forwarded verbatim, while the typed fields drive the normalized snapshot
format.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

DEFAULT_CURRENCY = "USD"


@dataclass
class DisplayPrice:
    amount: Any = None
    currency: str = DEFAULT_CURRENCY


@dataclass
class ProductVariant:
    id: Optional[str]
    display_price: DisplayPrice = field(default_factory=DisplayPrice)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ProductVariant":
        price = data.get("displayPrice") or {}
        if not isinstance(price, Mapping):
            price = {}
        return cls(
            id=data.get("id"),
            display_price=DisplayPrice(
                amount=price.get("amount"),
                currency=price.get("currency") or DEFAULT_CURRENCY,
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "displayPrice": {
                "amount": self.display_price.amount,
                "currency": self.display_price.currency or DEFAULT_CURRENCY,
            },
        }


@dataclass
class Product:
    id: str
    title: Optional[str] = None
    short_description: Optional[str] = None
    slug: Optional[str] = None
    thumbnail_url: str = ""
    variants: List[ProductVariant] = field(default_factory=list)
    raw: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Product":
        """Build a Product from a storefront or snapshot entry.

        Raises ValueError when the entry has no usable ``id``.
        """
        pid = data.get("id")
        if pid is None or pid == "":
            raise ValueError("product entry has no id")

        thumbnail = data.get("thumbnail") or {}
        if not isinstance(thumbnail, Mapping):
            thumbnail = {}
        variants = data.get("variants") or []
        if not isinstance(variants, list):
            variants = []

        return cls(
            id=str(pid),
            title=data.get("title"),
            short_description=data.get("shortDescription"),
            slug=data.get("slug"),
            thumbnail_url=thumbnail.get("url") or "",
            variants=[
                ProductVariant.from_dict(v) for v in variants if isinstance(v, Mapping)
            ],
            raw=dict(data),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Return the normalized snapshot form of this product."""
        return {
            "id": self.id,
            "title": self.title,
            "shortDescription": self.short_description,
            "slug": self.slug,
            "thumbnail": {"url": self.thumbnail_url or ""},
            "variants": [v.to_dict() for v in self.variants],
        }

    def payload(self) -> Dict[str, Any]:
        """Full product as fetched; falls back to the normalized form."""
        return dict(self.raw) if self.raw else self.to_dict()


__all__ = ["DEFAULT_CURRENCY", "DisplayPrice", "ProductVariant", "Product"]
