from __future__ import annotations

from django.conf import settings
from django.http import HttpResponseNotFound

from .network import is_admin_network_request


class AdminAccessMiddleware:
    """Hide the Django admin from addresses outside the configured allow-list."""

    def __init__(self, get_response):
        self.get_response = get_response
        slug = getattr(settings, "ADMIN_URL", "admin/").strip("/")
        self._admin_prefix = f"/{slug}" if slug else "/admin"

    def __call__(self, request):
        if request.path.startswith(self._admin_prefix) and not is_admin_network_request(request):
            return HttpResponseNotFound()
        return self.get_response(request)
