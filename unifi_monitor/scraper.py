from __future__ import annotations

import logging
import re
from typing import Any, List, Optional

import requests
from bs4 import BeautifulSoup

from .config import (
    HOME_URL,
    DATA_BASE_URL,
    STORE_REGION,
    STORE_LANGUAGE,
)
from .models import Product
from .utils import HTTPError, get_http_session, retryable_request

logger = logging.getLogger(__name__)

# Next.js publishes a per-deployment manifest under the build ID.
_BUILD_ID_RE = re.compile(r"https://[^/\"'\s]+/_next/static/([a-zA-Z0-9]+)/_ssgManifest\.js")


class BuildIDNotFound(LookupError):
    """Raised when the storefront HTML carries no recognizable build ID."""


@retryable_request
def _get(session: requests.Session, url: str, **kwargs: Any) -> requests.Response:
    """Thin wrapper around session.get with retry policy from utils.retryable_request."""
    return session.get(url, **kwargs)


def _build_category_endpoint(build_id: str, base_url: str, region: str, language: str) -> str:
    return f"{base_url.rstrip('/')}/_next/data/{build_id}/{region}/{language}.json"


def extract_build_id(html: str) -> str:
    """Pull the build ID out of storefront HTML.

    Script tags are checked first; the raw body is searched as a fallback
    because the manifest URL may also appear in preload links or inline JS.
    """
    soup = BeautifulSoup(html or "", "html.parser")
    for tag in soup.find_all("script", src=True):
        m = _BUILD_ID_RE.search(tag.get("src") or "")
        if m:
            return m.group(1)

    m = _BUILD_ID_RE.search(html or "")
    if not m:
        raise BuildIDNotFound("Build ID not found in HTML response")
    return m.group(1)


def fetch_build_id(
    home_url: str = HOME_URL,
    session: Optional[requests.Session] = None,
) -> str:
    """Resolve the storefront's current build ID from its home page.

    Transport errors propagate, as does BuildIDNotFound.
    """
    close_session = False
    if session is None:
        session = get_http_session()
        close_session = True

    try:
        logger.debug("Fetching build ID from %s", home_url)
        resp = _get(session, home_url)
        build_id = extract_build_id(resp.text)
        logger.info("Resolved build ID %s", build_id)
        return build_id
    finally:
        if close_session:
            session.close()


def parse_category_products(data: Any) -> List[Product]:
    """Flatten ``pageProps.subCategories[*].products`` into one list, keeping order."""
    page_props = data.get("pageProps") if isinstance(data, dict) else None
    sub_categories = (page_props or {}).get("subCategories") if isinstance(page_props, dict) else None
    if not isinstance(sub_categories, list):
        return []

    products: List[Product] = []
    for sc in sub_categories:
        items = sc.get("products") if isinstance(sc, dict) else None
        if not isinstance(items, list):
            continue
        for item in items:
            if not isinstance(item, dict):
                continue
            try:
                products.append(Product.from_dict(item))
            except ValueError:
                logger.debug("Skipping product without id in %s", sc.get("id") or "subcategory")
    return products


def fetch_category(
    build_id: str,
    category: str,
    *,
    base_url: str = DATA_BASE_URL,
    region: str = STORE_REGION,
    language: str = STORE_LANGUAGE,
    session: Optional[requests.Session] = None,
) -> List[Product]:
    """Fetch every product listed under one category.

    Any transport or decoding failure is logged and yields an empty list,
    so one bad category does not stop the others.
    """
    close_session = False
    if session is None:
        session = get_http_session()
        close_session = True

    url = _build_category_endpoint(build_id, base_url, region, language)
    params = {"category": category, "store": region, "language": language}

    try:
        logger.debug("Category fetch: %s %s", url, params)
        resp = _get(session, url, params=params)
        products = parse_category_products(resp.json())
        logger.info("Fetched %d products for category %s", len(products), category)
        return products
    except (requests.RequestException, HTTPError, ValueError) as e:
        logger.error("Error fetching products for category %s: %s", category, e)
        return []
    finally:
        if close_session:
            session.close()


__all__ = [
    "BuildIDNotFound",
    "extract_build_id",
    "fetch_build_id",
    "parse_category_products",
    "fetch_category",
]
