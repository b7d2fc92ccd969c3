"""Configuration loader.

Reads environment variables and `.env` to configure the service.
"""

from __future__ import annotations

import os
from typing import Optional, List
from pathlib import Path
from urllib.parse import urlparse

from dotenv import load_dotenv

# Load variables from a .env file if present (project root).
load_dotenv(dotenv_path=Path(__file__).resolve().parents[1] / ".env")


def _get_env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.environ.get(name, default)


def _parse_int(value: Optional[str], default: int) -> int:
    try:
        return int(value) if value is not None else default
    except ValueError:
        return default


def _parse_float(value: Optional[str], default: float) -> float:
    try:
        return float(value) if value is not None else default
    except ValueError:
        return default


def _get_list(name: str) -> list[str]:
    raw = _get_env(name, "") or ""
    return [s.strip() for s in raw.split(",") if s.strip()]


# ---- Storefront ---------------------------------------------------------------

# Home page that embeds the current build ID in its asset URLs.
HOME_URL: str = _get_env("UNIFI_HOME_URL", "https://store.ui.com/us/en")


def _origin(url: str) -> str:
    parsed = urlparse(url)
    return f"{parsed.scheme}://{parsed.netloc}"


# Base for the /_next/data endpoint. Defaults to the home page's origin.
DATA_BASE_URL: str = (_get_env("UNIFI_DATA_BASE_URL") or _origin(HOME_URL)).rstrip("/")

STORE_REGION: str = _get_env("STORE_REGION", "us")
STORE_LANGUAGE: str = _get_env("STORE_LANGUAGE", "en")

DEFAULT_CATEGORIES: List[str] = [
    "all-switching",
    "all-unifi-cloud-gateways",
    "all-wifi",
    "all-cameras-nvrs",
    "all-door-access",
    "all-cloud-keys-gateways",
    "all-power-tech",
    "all-integrations",
    "accessories-cables-dacs",
]

# Comma-separated override; traversed in the given order every cycle.
CATEGORIES: List[str] = _get_list("CATEGORIES") or list(DEFAULT_CATEGORIES)

# ---- Loop & HTTP ----------------------------------------------------------------

# Delay between the end of one cycle and the start of the next.
INTERVAL_SECONDS: float = _parse_float(_get_env("INTERVAL_SECONDS"), 30.0)

HTTP_TIMEOUT_SECONDS: float = _parse_float(_get_env("HTTP_TIMEOUT_SECONDS"), 30.0)

# Attempts per request before the error is surfaced to the caller.
HTTP_MAX_ATTEMPTS: int = _parse_int(_get_env("HTTP_MAX_ATTEMPTS"), 3)

# ---- Inbound endpoint & notifications ---------------------------------------

HOST: str = _get_env("HOST", "127.0.0.1")
PORT: int = _parse_int(_get_env("PORT"), 3001)

# "local" hands products to the in-process inbox; "http" POSTs them to NOTIFY_URL.
NOTIFY_MODE: str = (_get_env("NOTIFY_MODE", "local") or "local").strip().lower()
NOTIFY_URL: str = _get_env("NOTIFY_URL") or f"http://localhost:{PORT}/api/products"

# ---- Snapshot ------------------------------------------------------------------

PRODUCTS_FILE: str = _get_env(
    "PRODUCTS_FILE", str(Path(__file__).resolve().parent / "products.json")
)

# Logging level: DEBUG, INFO, WARNING, ERROR.
LOG_LEVEL: str = _get_env("LOG_LEVEL", "INFO")

NOTIFY_MODES = ("local", "http")


# ---- Validation --------------------------------------------------------------

def validate() -> None:
    """Validate configuration parameters."""
    if NOTIFY_MODE not in NOTIFY_MODES:
        raise RuntimeError(
            f"NOTIFY_MODE must be one of {', '.join(NOTIFY_MODES)} (got {NOTIFY_MODE!r})."
        )
    if not CATEGORIES:
        raise RuntimeError("At least one category must be configured.")
    if INTERVAL_SECONDS <= 0:
        raise RuntimeError("INTERVAL_SECONDS must be positive.")


__all__ = [
    # Storefront
    "HOME_URL",
    "DATA_BASE_URL",
    "STORE_REGION",
    "STORE_LANGUAGE",
    "DEFAULT_CATEGORIES",
    "CATEGORIES",
    # Loop & HTTP
    "INTERVAL_SECONDS",
    "HTTP_TIMEOUT_SECONDS",
    "HTTP_MAX_ATTEMPTS",
    # Inbound & notify
    "HOST",
    "PORT",
    "NOTIFY_MODE",
    "NOTIFY_URL",
    # Snapshot
    "PRODUCTS_FILE",
    "LOG_LEVEL",
    # Helpers
    "validate",
]
