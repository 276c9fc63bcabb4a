"""
Health check API views.

- /api/health/ - Public, simple "ok" response for uptime monitors
- /api/health/full/ - Private, detailed service checks (admins, allow-listed IPs or token)
"""

from __future__ import annotations

import concurrent.futures
import logging
import time
from datetime import datetime, timezone

from django.http import JsonResponse
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from staffapi.authentication import StaffJWTAuthentication
from staffapi.network import is_admin_network_request

from .cache import get_cached_report, store_report
from .checks import FEATURE_CHECKS, INFRASTRUCTURE_CHECKS

logger = logging.getLogger(__name__)

TOKEN_HEADER = "HTTP_X_ADMIN_ACCESS_TOKEN"


def health_simple(request):
    """
    Public health endpoint for uptime monitors.
    Returns simple {"status": "ok"} with HTTP 200.
    """
    return JsonResponse({"status": "ok"})


def _overall(results: dict) -> str:
    statuses = [r.get("status", "down") for r in results.values()]
    if all(s == "ok" for s in statuses):
        return "ok"
    if any(s == "down" for s in statuses):
        return "down"
    return "degraded"


def run_checks(checks: dict) -> dict:
    results = {}
    with concurrent.futures.ThreadPoolExecutor(max_workers=len(checks)) as executor:
        futures = {executor.submit(check): name for name, check in checks.items()}
        for future in concurrent.futures.as_completed(futures, timeout=10):
            name = futures[future]
            try:
                results[name] = future.result()
            except Exception as exc:
                logger.exception("Health check %s raised", name)
                results[name] = {"status": "down", "latencyMs": 0, "message": str(exc)[:200]}
    return results


class HealthFullView(APIView):
    """
    Private detailed health endpoint.
    Requires an active admin (JWT) OR an allow-listed IP / admin token.
    """

    authentication_classes = [StaffJWTAuthentication]
    permission_classes = []

    def get(self, request):
        user = request.user
        is_admin = bool(
            user
            and user.is_authenticated
            and (user.is_superuser or (user.is_admin and user.can_access_dashboard))
        )
        if not is_admin and not is_admin_network_request(request, header=TOKEN_HEADER):
            return Response(
                {"detail": "Access denied. Admin privileges required."},
                status=status.HTTP_403_FORBIDDEN,
            )

        cached = get_cached_report()
        if cached is not None:
            return Response(cached)

        start = time.perf_counter()
        # Feature checks share the request thread's connection.
        services = run_checks(INFRASTRUCTURE_CHECKS)
        features = {name: check() for name, check in FEATURE_CHECKS.items()}
        total_latency = (time.perf_counter() - start) * 1000

        response_data = {
            "status": _overall({**services, **features}),
            "services": services,
            "features": features,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "responseTimeMs": round(total_latency, 2),
        }
        store_report(response_data)
        return Response(response_data)
