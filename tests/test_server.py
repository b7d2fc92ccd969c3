"""Tests for unifi_monitor/server.py"""

import pytest
import requests

from unifi_monitor.server import ProductServer


@pytest.fixture
def server():
    srv = ProductServer(host="127.0.0.1", port=0)
    srv.start()
    yield srv
    srv.stop()


def test_post_product_acknowledged(server):
    resp = requests.post(f"{server.base_url}/api/products", json={"id": "A", "title": "Switch"}, timeout=5)

    assert resp.status_code == 201
    assert resp.json() == {"status": "ok"}
    assert server.inbox.received == 1
    assert server.inbox.recent()[0]["id"] == "A"


def test_invalid_json_rejected(server):
    resp = requests.post(
        f"{server.base_url}/api/products",
        data=b"{not json",
        headers={"Content-Type": "application/json"},
        timeout=5,
    )

    assert resp.status_code == 400
    assert server.inbox.received == 0


def test_non_object_rejected(server):
    resp = requests.post(f"{server.base_url}/api/products", json=["A"], timeout=5)
    assert resp.status_code == 400


def test_health(server):
    requests.post(f"{server.base_url}/api/products", json={"id": "A"}, timeout=5)

    resp = requests.get(f"{server.base_url}/health", timeout=5)

    assert resp.status_code == 200
    assert resp.json()["received_products"] == 1


def test_unknown_path(server):
    assert requests.get(f"{server.base_url}/nope", timeout=5).status_code == 404
    assert requests.post(f"{server.base_url}/nope", json={}, timeout=5).status_code == 404


def test_start_is_idempotent(server):
    assert server.start() == server.base_url
