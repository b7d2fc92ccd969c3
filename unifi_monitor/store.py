"""JSON snapshot persistence for the known-product set."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Union

from .config import PRODUCTS_FILE
from .models import Product

logger = logging.getLogger(__name__)


class SnapshotStore:
    """Known products keyed by id, mirrored to a single JSON array on disk.

    Entries are append-only: once an id is recorded it is never replaced
    or removed. The store has a single writer (the scheduler's cycle), so
    no locking is done here.
    """

    def __init__(self, path: Union[str, Path, None] = None):
        self.path = Path(path or PRODUCTS_FILE)
        self._products: Dict[str, Product] = {}

    def __len__(self) -> int:
        return len(self._products)

    def __contains__(self, product_id: object) -> bool:
        return product_id in self._products

    def __iter__(self) -> Iterator[Product]:
        return iter(self._products.values())

    def has(self, product_id: str) -> bool:
        return product_id in self._products

    def get(self, product_id: str) -> Optional[Product]:
        return self._products.get(product_id)

    def products(self) -> List[Product]:
        return list(self._products.values())

    def add(self, product: Product) -> bool:
        """Record a product unless its id is already known. Returns True if added."""
        if product.id in self._products:
            return False
        self._products[product.id] = product
        return True

    def load(self) -> int:
        """Populate the store from the snapshot file.

        A missing file means no known products. Unreadable or malformed
        files are logged and treated the same way.
        """
        if not self.path.exists():
            logger.info("No snapshot at %s; starting with an empty product set.", self.path)
            return 0

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            logger.exception("Failed to load snapshot %s; treating as empty.", self.path)
            return 0

        if not isinstance(data, list):
            logger.error("Snapshot %s is not a JSON array; treating as empty.", self.path)
            return 0

        loaded = 0
        for entry in data:
            if not isinstance(entry, dict):
                logger.warning("Skipping non-object snapshot entry: %r", entry)
                continue
            try:
                product = Product.from_dict(entry)
            except ValueError:
                logger.warning("Skipping snapshot entry without id: %r", entry)
                continue
            self._products[product.id] = product
            loaded += 1

        logger.info("Loaded %d known products from %s", loaded, self.path)
        return loaded

    def save(self) -> None:
        """Overwrite the snapshot file with every known product, normalized.

        The write is a direct whole-file write, not an atomic replace.
        """
        logger.info("Saving %d known products to %s", len(self._products), self.path)
        rows = [p.to_dict() for p in self._products.values()]
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(rows, indent=2), encoding="utf-8")


__all__ = ["SnapshotStore"]
