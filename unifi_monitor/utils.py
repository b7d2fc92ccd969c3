"""Helper utilities.

This module centralises common helper functions such as creating a
configured HTTP session and applying retry policies to network calls.
"""

from __future__ import annotations

import functools
import logging
from typing import Any, Callable

import requests
from requests import Response
from tenacity import (Retrying, after_log, retry_if_exception_type,
                      stop_after_attempt, wait_exponential)

from . import config


logger = logging.getLogger(__name__)


def get_http_session() -> requests.Session:
    """Return a new HTTP session with sensible defaults.

    The storefront serves its home page and data endpoint to regular
    browsers, so the session carries a browser-like User-Agent. Caller is
    responsible for closing the session.
    """
    session = requests.Session()
    session.headers.update(
        {
            "User-Agent": "Mozilla/5.0 (compatible; UniFiStoreMonitor/1.0; +https://github.com/)",
            "Accept": "text/html,application/json;q=0.9,*/*;q=0.8",
        }
    )
    return session


class HTTPError(Exception):
    """Raised when an HTTP request fails after retries."""


def _raise_for_status(resp: Response) -> None:
    try:
        resp.raise_for_status()
    except requests.RequestException as e:
        raise HTTPError(str(e)) from e


def retryable_request(method: Callable[..., Response]) -> Callable[..., Response]:
    """Apply retry logic to an HTTP call.

    The decorated function must accept a `requests.Session` as its first
    argument, followed by URL and optional kwargs, and return a
    `requests.Response`. Network errors and non-2xx responses are retried
    up to ``config.HTTP_MAX_ATTEMPTS`` times with exponential back-off
    between 1 and 10 seconds; the last error is re-raised. A request
    timeout of ``config.HTTP_TIMEOUT_SECONDS`` is applied unless the
    caller passes one.
    """

    def _attempt(session: requests.Session, url: str, **kwargs: Any) -> Response:
        response = method(session, url, **kwargs)
        _raise_for_status(response)
        return response

    @functools.wraps(method)
    def wrapper(session: requests.Session, url: str, **kwargs: Any) -> Response:
        kwargs.setdefault("timeout", config.HTTP_TIMEOUT_SECONDS)
        retrying = Retrying(
            reraise=True,
            stop=stop_after_attempt(max(1, config.HTTP_MAX_ATTEMPTS)),
            wait=wait_exponential(multiplier=1, min=1, max=10),
            retry=(
                retry_if_exception_type(requests.RequestException)
                | retry_if_exception_type(HTTPError)
            ),
            after=after_log(logger, logging.WARNING),
        )
        return retrying(_attempt, session, url, **kwargs)

    return wrapper


__all__ = ["get_http_session", "retryable_request", "HTTPError"]
