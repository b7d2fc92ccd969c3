"""Tests for unifi_monitor/notifier.py"""

from unittest.mock import MagicMock

import pytest
import requests

from unifi_monitor.notifier import (HttpNotifier, InboxNotifier, build_notifier,
                                    send_notifications)
from unifi_monitor.server import ProductInbox

from tests.conftest import make_product


class TestHttpNotifier:
    def test_posts_full_payload(self):
        session = MagicMock(spec=requests.Session)
        session.post.return_value = MagicMock(status_code=201)
        notifier = HttpNotifier("http://localhost:3001/api/products", session=session)
        product = make_product("A", collectionSlug="wifi")

        notifier.notify(product)

        args, kwargs = session.post.call_args
        assert args[0] == "http://localhost:3001/api/products"
        assert kwargs["json"]["id"] == "A"
        assert kwargs["json"]["collectionSlug"] == "wifi"

    def test_does_not_close_borrowed_session(self):
        session = MagicMock(spec=requests.Session)
        HttpNotifier("http://x", session=session).close()
        session.close.assert_not_called()


class TestInboxNotifier:
    def test_delivers_to_inbox(self):
        inbox = ProductInbox()
        InboxNotifier(inbox).notify(make_product("A"))

        assert inbox.received == 1
        assert inbox.recent()[0]["id"] == "A"


class TestSendNotifications:
    def test_failure_does_not_block_later_products(self):
        notifier = MagicMock()
        notifier.notify.side_effect = [None, requests.ConnectionError("refused"), None]

        delivered = send_notifications([make_product(p) for p in "ABC"], notifier)

        assert delivered == 2
        assert [c.args[0].id for c in notifier.notify.call_args_list] == ["A", "B", "C"]


class TestBuildNotifier:
    def test_local_mode(self):
        assert isinstance(build_notifier("local", ProductInbox()), InboxNotifier)

    def test_http_mode(self):
        notifier = build_notifier("http")
        try:
            assert isinstance(notifier, HttpNotifier)
        finally:
            notifier.close()

    def test_local_mode_requires_inbox(self):
        with pytest.raises(ValueError):
            build_notifier("local")

    def test_unknown_mode(self):
        with pytest.raises(ValueError):
            build_notifier("carrier-pigeon", ProductInbox())
