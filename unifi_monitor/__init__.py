"""
UniFi store monitor package.

This package contains modules for polling the UniFi online store catalog,
persisting seen products to a JSON snapshot, notifying about new ones and
coordinating the monitoring loop. See README.md for details.
"""

__all__ = [
    "config",
    "diff",
    "main",
    "models",
    "monitor",
    "notifier",
    "scraper",
    "server",
    "store",
    "utils",
]
