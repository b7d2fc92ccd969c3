"""Fetch-diff-notify cycle and its fixed-delay scheduler."""

from __future__ import annotations

import logging
import threading
from typing import List, Optional, Sequence

import requests

from . import config, scraper
from .diff import find_new_products
from .models import Product
from .notifier import send_notifications
from .store import SnapshotStore
from .utils import get_http_session

logger = logging.getLogger(__name__)


class Scheduler:
    """Owns the known-product store and drives monitoring cycles.

    The next cycle starts ``interval`` seconds after the previous one
    finished, whatever its outcome.
    """

    def __init__(
        self,
        store: SnapshotStore,
        notifier,
        *,
        categories: Optional[Sequence[str]] = None,
        interval: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.store = store
        self.notifier = notifier
        self.categories: List[str] = list(categories if categories is not None else config.CATEGORIES)
        self.interval = config.INTERVAL_SECONDS if interval is None else interval
        self._own_session = session is None
        self.session = session or get_http_session()
        self._stop = threading.Event()
        self.cycles = 0

    def run_cycle(self) -> List[Product]:
        """Resolve the build ID, sweep every category, notify and save.

        Returns the products that were new in this cycle.
        """
        self.cycles += 1
        logger.info("Starting cycle %d over %d categories", self.cycles, len(self.categories))

        try:
            build_id = scraper.fetch_build_id(session=self.session)
        except scraper.BuildIDNotFound as e:
            logger.error("Monitor error: %s", e)
            return []
        except Exception:
            logger.exception("Monitor error: could not resolve build ID")
            return []

        new_products: List[Product] = []
        for category in self.categories:
            products = scraper.fetch_category(build_id, category, session=self.session)
            fresh = find_new_products(products, self.store)
            if fresh:
                logger.info("Found %d new products in %s", len(fresh), category)
                send_notifications(fresh, self.notifier)
                new_products.extend(fresh)

        if new_products:
            try:
                self.store.save()
            except OSError:
                logger.exception("Failed to write snapshot %s", self.store.path)
        else:
            logger.info("No new products this cycle.")
        return new_products

    def run_forever(self) -> None:
        logger.info(
            "Monitoring %s every %ss",
            ", ".join(self.categories),
            self.interval,
        )
        while not self._stop.is_set():
            try:
                self.run_cycle()
            except Exception:
                logger.exception("Unexpected error during cycle %d", self.cycles)
            if self._stop.wait(self.interval):
                break
        logger.info("Scheduler stopped after %d cycles", self.cycles)

    def stop(self) -> None:
        self._stop.set()

    def close(self) -> None:
        self.stop()
        if self._own_session:
            self.session.close()


__all__ = ["Scheduler"]
