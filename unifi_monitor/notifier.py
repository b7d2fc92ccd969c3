"""New-product notifier.

Hands every newly discovered product to a sink. By default the sink is
the in-process inbox of the inbound endpoint; with NOTIFY_MODE=http the
full product JSON is POSTed to NOTIFY_URL instead.
"""
from __future__ import annotations

import logging
from typing import Iterable, Optional

import requests

from .config import NOTIFY_MODE, NOTIFY_URL
from .models import Product
from .server import ProductInbox
from .utils import get_http_session, retryable_request

logger = logging.getLogger(__name__)


@retryable_request
def _post(session: requests.Session, url: str, **kwargs) -> requests.Response:
    return session.post(url, **kwargs)


class InboxNotifier:
    """Deliver products straight to a ProductInbox in this process."""

    def __init__(self, inbox: ProductInbox):
        self.inbox = inbox

    def notify(self, product: Product) -> None:
        logger.info("Delivering product %s to local inbox", product.id)
        self.inbox.deliver(product.payload())

    def close(self) -> None:
        pass


class HttpNotifier:
    """POST products as JSON to an HTTP endpoint (expects 201)."""

    def __init__(self, url: str = NOTIFY_URL, session: Optional[requests.Session] = None):
        self.url = url
        self._own_session = session is None
        self.session = session or get_http_session()

    def notify(self, product: Product) -> None:
        logger.info("POSTing product: %s", product.id)
        _post(self.session, self.url, json=product.payload())

    def close(self) -> None:
        if self._own_session:
            self.session.close()


def build_notifier(mode: str = NOTIFY_MODE, inbox: Optional[ProductInbox] = None):
    if mode == "http":
        return HttpNotifier()
    if mode == "local":
        if inbox is None:
            raise ValueError("local notify mode needs a ProductInbox")
        return InboxNotifier(inbox)
    raise ValueError(f"unknown notify mode: {mode!r}")


def send_notifications(products: Iterable[Product], notifier) -> int:
    """Notify each product in turn; failures are logged and skipped.

    Returns the number of products delivered.
    """
    delivered = 0
    for product in products:
        try:
            notifier.notify(product)
            delivered += 1
        except Exception:
            logger.exception("Failed to deliver product %s", product.id)
    return delivered


__all__ = ["InboxNotifier", "HttpNotifier", "build_notifier", "send_notifications"]
