from __future__ import annotations

from typing import Iterable, List

from .models import Product
from .store import SnapshotStore


def find_new_products(products: Iterable[Product], store: SnapshotStore) -> List[Product]:
    """Return products whose id is not yet known, in fetch order.

    Each new product is recorded in ``store`` as soon as it is seen, so a
    repeat later in the same batch (or a later batch in the same cycle)
    is not reported twice. Known products are never updated.
    """
    new_products: List[Product] = []
    for product in products:
        if store.add(product):
            new_products.append(product)
    return new_products


__all__ = ["find_new_products"]
