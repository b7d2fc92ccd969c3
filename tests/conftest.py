"""Shared test fixtures."""

import pytest

from unifi_monitor import config
from unifi_monitor.models import Product
from unifi_monitor.store import SnapshotStore


@pytest.fixture(autouse=True)
def no_retries(monkeypatch):
    """Fail HTTP calls on the first error so tests never sleep in back-off."""
    monkeypatch.setattr(config, "HTTP_MAX_ATTEMPTS", 1)


@pytest.fixture
def snapshot_path(tmp_path):
    return tmp_path / "products.json"


@pytest.fixture
def store(snapshot_path):
    return SnapshotStore(snapshot_path)


def make_product_dict(pid, **overrides):
    data = {
        "id": pid,
        "title": f"Product {pid}",
        "shortDescription": f"Short {pid}",
        "slug": f"product-{pid.lower()}",
        "thumbnail": {"url": f"https://cdn.example.com/{pid}.png"},
        "variants": [
            {"id": f"{pid}-1", "displayPrice": {"amount": 9900, "currency": "USD"}},
        ],
    }
    data.update(overrides)
    return data


def make_product(pid, **overrides):
    return Product.from_dict(make_product_dict(pid, **overrides))


def category_payload(*subcategories):
    """Build a /_next/data body with one subcategory per list of product dicts."""
    return {
        "pageProps": {
            "subCategories": [{"id": f"sub-{i}", "products": list(items)} for i, items in enumerate(subcategories)]
        }
    }
