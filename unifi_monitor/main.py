from __future__ import annotations

import logging

from . import config
from .monitor import Scheduler
from .notifier import build_notifier
from .server import ProductServer
from .store import SnapshotStore


def setup_logging() -> None:
    level = getattr(logging, config.LOG_LEVEL.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def main() -> None:
    """Start the product endpoint and run the monitoring loop until interrupted."""
    config.validate()
    setup_logging()
    logger = logging.getLogger(__name__)

    store = SnapshotStore(config.PRODUCTS_FILE)
    store.load()

    server = ProductServer(config.HOST, config.PORT)
    server.start()

    notifier = build_notifier(config.NOTIFY_MODE, server.inbox)
    scheduler = Scheduler(store, notifier)

    logger.info(
        "Starting UniFi store monitor (%d known products, notify=%s)",
        len(store),
        config.NOTIFY_MODE,
    )
    try:
        scheduler.run_forever()
    except KeyboardInterrupt:
        logger.info("Interrupted; shutting down.")
    finally:
        scheduler.close()
        notifier.close()
        server.stop()


if __name__ == "__main__":
    main()
