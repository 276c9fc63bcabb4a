"""Client address helpers shared by the admin guard and the health endpoints."""

from __future__ import annotations

from ipaddress import ip_address, ip_network

from django.conf import settings


def normalise_ip_list(raw_items) -> tuple:
    networks = []
    for item in raw_items:
        cleaned = str(item).strip()
        if not cleaned:
            continue
        try:
            networks.append(ip_network(cleaned, strict=False))
        except ValueError:
            continue
    return tuple(networks)


def client_ip(request) -> str | None:
    header_value = request.META.get("HTTP_X_FORWARDED_FOR")
    if header_value:
        first = header_value.split(",")[0].strip()
        if first:
            return first
    remote = request.META.get("REMOTE_ADDR")
    if remote:
        return remote.strip()
    return None


def ip_in_networks(ip_value: str | None, networks: tuple) -> bool:
    if not networks:
        return True
    if not ip_value:
        return False
    try:
        addr = ip_address(ip_value)
    except ValueError:
        return False
    return any(addr in network for network in networks)


def admin_token_matches(request, header: str = "HTTP_X_ADMIN_TOKEN") -> bool:
    token = getattr(settings, "ADMIN_ACCESS_TOKEN", "")
    if not token:
        return False
    provided = request.META.get(header, "").strip()
    return provided == token


def is_admin_network_request(request, header: str = "HTTP_X_ADMIN_TOKEN") -> bool:
    """Allow-list check used for the Django admin and private health checks.

    With no allow-list every address passes, unless an access token is
    configured; the token then becomes mandatory for addresses not listed.
    """

    if settings.DEBUG:
        return True

    networks = normalise_ip_list(getattr(settings, "ADMIN_ALLOWED_IPS", ()))
    allowed_by_ip = ip_in_networks(client_ip(request), networks)
    if getattr(settings, "ADMIN_ACCESS_TOKEN", ""):
        return (bool(networks) and allowed_by_ip) or admin_token_matches(request, header)
    return allowed_by_ip
