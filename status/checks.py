"""
Service health check functions.

Each check returns a dict with:
- status: "ok" | "degraded" | "down"
- latencyMs: response time in milliseconds
- message: optional human-readable detail

Infrastructure checks: Database, Resend
Feature checks: one per staff domain table
"""

from __future__ import annotations

import time
from typing import Callable, TypedDict

import httpx
from django.apps import apps
from django.conf import settings
from django.db import DatabaseError, connection


class CheckResult(TypedDict, total=False):
    status: str
    latencyMs: float
    message: str


def _elapsed(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)


def check_database() -> CheckResult:
    """Ping the database with a simple query."""
    start = time.perf_counter()
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
        return {"status": "ok", "latencyMs": _elapsed(start)}
    except DatabaseError as exc:
        return {"status": "down", "latencyMs": _elapsed(start), "message": str(exc)[:200]}


def check_resend() -> CheckResult:
    """
    Check Resend email API availability.
    Any HTTP answer (even 401/403/405) means the API is up.
    If no API key is configured, return degraded.
    """
    api_key = getattr(settings, "RESEND_API_KEY", "") or ""
    if not api_key.strip():
        return {"status": "degraded", "latencyMs": 0, "message": "RESEND_API_KEY not configured"}

    start = time.perf_counter()
    try:
        response = httpx.get(
            "https://api.resend.com/emails",
            headers={"Authorization": f"Bearer {api_key}"},
            timeout=5.0,
        )
    except httpx.TimeoutException:
        return {"status": "down", "latencyMs": _elapsed(start), "message": "Request timed out"}
    except httpx.HTTPError as exc:
        return {"status": "down", "latencyMs": _elapsed(start), "message": str(exc)[:200]}

    if response.status_code in (200, 401, 403, 405):
        return {"status": "ok", "latencyMs": _elapsed(start)}
    return {
        "status": "degraded",
        "latencyMs": _elapsed(start),
        "message": f"Unexpected status {response.status_code}",
    }


def _model_check(label: str) -> Callable[[], CheckResult]:
    def check() -> CheckResult:
        start = time.perf_counter()
        try:
            apps.get_model(label).objects.exists()
        except DatabaseError as exc:
            return {"status": "down", "latencyMs": _elapsed(start), "message": str(exc)[:200]}
        return {"status": "ok", "latencyMs": _elapsed(start)}

    check.__name__ = f"check_{label.split('.')[-1].lower()}"
    return check


# =============================================================================
# FEATURE CHECKS - one query per domain table
# =============================================================================

check_auth = _model_check(settings.AUTH_USER_MODEL)
check_employees = _model_check("staff.Employee")
check_shifts = _model_check("scheduling.Shift")
check_reviews = _model_check("performance.ReviewSchedule")
check_notifications = _model_check("notifications.Notification")
check_customers = _model_check("customers.Customer")

INFRASTRUCTURE_CHECKS = {
    "database": check_database,
    "email": check_resend,
}

FEATURE_CHECKS = {
    "auth": check_auth,
    "employees": check_employees,
    "shifts": check_shifts,
    "reviews": check_reviews,
    "notifications": check_notifications,
    "customers": check_customers,
}
