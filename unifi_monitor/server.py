"""
Inbound product endpoint.

Lightweight HTTP server that acknowledges products posted to
``/api/products``. Received products are kept in a small in-memory inbox;
the known-product snapshot is never touched from here.
"""

from __future__ import annotations

import collections
import json
import logging
import threading
import time
from http.server import HTTPServer, BaseHTTPRequestHandler
from typing import Any, Deque, Dict, List, Optional
from urllib.parse import urlparse

from . import config

logger = logging.getLogger(__name__)


class ProductInbox:
    """Thread-safe record of products handed to the endpoint."""

    def __init__(self, maxlen: int = 500):
        self._lock = threading.Lock()
        self._recent: Deque[Dict[str, Any]] = collections.deque(maxlen=maxlen)
        self.received = 0

    def deliver(self, product: Dict[str, Any]) -> None:
        with self._lock:
            self._recent.append(product)
            self.received += 1
        logger.info("Received product %s (%s)", product.get("id"), product.get("title") or "untitled")

    def recent(self) -> List[Dict[str, Any]]:
        with self._lock:
            return list(self._recent)


class ProductRequestHandler(BaseHTTPRequestHandler):
    server: "_InboxHTTPServer"

    def log_message(self, format, *args):
        """Route access logs through logging instead of stderr."""
        logger.debug("%s - %s", self.address_string(), format % args)

    def do_POST(self):
        path = urlparse(self.path).path
        if path != "/api/products":
            self._send_json(404, {"error": "not found"})
            return

        length = int(self.headers.get("Content-Length") or 0)
        body = self.rfile.read(length) if length else b""
        try:
            product = json.loads(body or b"null")
        except ValueError:
            self._send_json(400, {"error": "invalid JSON"})
            return
        if not isinstance(product, dict):
            self._send_json(400, {"error": "expected a JSON object"})
            return

        self.server.inbox.deliver(product)
        self._send_json(201, {"status": "ok"})

    def do_GET(self):
        path = urlparse(self.path).path
        if path in ("/", "/health"):
            self._send_json(200, {
                "status": "running",
                "received_products": self.server.inbox.received,
                "timestamp": time.time(),
            })
        else:
            self._send_json(404, {"error": "not found"})

    def _send_json(self, status: int, payload: Dict[str, Any]) -> None:
        body = json.dumps(payload).encode()
        self.send_response(status)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)


class _InboxHTTPServer(HTTPServer):
    def __init__(self, address, handler, inbox: ProductInbox):
        super().__init__(address, handler)
        self.inbox = inbox


class ProductServer:
    """Runs the inbound endpoint on a daemon thread."""

    def __init__(
        self,
        host: str = config.HOST,
        port: int = config.PORT,
        inbox: Optional[ProductInbox] = None,
    ):
        self.host = host
        self.port = port
        self.inbox = inbox or ProductInbox()
        self.server: Optional[_InboxHTTPServer] = None
        self.server_thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self.server is not None

    @property
    def base_url(self) -> str:
        return f"http://{self.host}:{self.port}"

    def start(self) -> str:
        """Start the server and return its base URL."""
        if self.server is not None:
            return self.base_url

        self.server = _InboxHTTPServer((self.host, self.port), ProductRequestHandler, self.inbox)
        # Port 0 binds an ephemeral port; report the real one.
        self.port = self.server.server_address[1]
        self.server_thread = threading.Thread(
            target=self.server.serve_forever, name="product-endpoint", daemon=True
        )
        self.server_thread.start()
        logger.info("Server running on %s", self.base_url)
        return self.base_url

    def stop(self) -> None:
        if self.server is None:
            return
        self.server.shutdown()
        self.server.server_close()
        self.server = None
        logger.info("Product endpoint stopped")


__all__ = ["ProductInbox", "ProductRequestHandler", "ProductServer"]
