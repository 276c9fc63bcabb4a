"""
Short-lived storage for the full health report.

Monitors poll the private endpoint frequently; the report is kept in the
Django cache for a few seconds so external services are not probed on every
request.
"""

from __future__ import annotations

from typing import Any

from django.core.cache import cache

REPORT_CACHE_KEY = "status:health-full"
DEFAULT_TTL_SECONDS = 30


def get_cached_report() -> dict[str, Any] | None:
    return cache.get(REPORT_CACHE_KEY)


def store_report(report: dict[str, Any], ttl: float = DEFAULT_TTL_SECONDS) -> None:
    cache.set(REPORT_CACHE_KEY, report, ttl)


def clear_cached_report() -> None:
    cache.delete(REPORT_CACHE_KEY)
