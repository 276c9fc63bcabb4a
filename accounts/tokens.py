from __future__ import annotations

from datetime import datetime, timezone as dt_timezone

from rest_framework_simplejwt.tokens import RefreshToken


def _format_timestamp(exp_timestamp: int) -> str:
    return (
        datetime.fromtimestamp(exp_timestamp, tz=dt_timezone.utc)
        .replace(microsecond=0)
        .isoformat()
        .replace("+00:00", "Z")
    )


def issue_jwt_pair(user) -> dict[str, str]:
    refresh = RefreshToken.for_user(user)
    refresh["role"] = user.role
    access_token = refresh.access_token
    return {
        "access": str(access_token),
        "refresh": str(refresh),
        "access_expires_at": _format_timestamp(int(access_token["exp"])),
        "refresh_expires_at": _format_timestamp(int(refresh["exp"])),
    }


def build_auth_payload(user, **extra) -> dict:
    from .serializers import UserSerializer

    tokens = issue_jwt_pair(user)
    payload = {
        "user": UserSerializer(user).data,
        "access": tokens["access"],
        "refresh": tokens["refresh"],
        "accessExpiresAt": tokens["access_expires_at"],
        "refreshExpiresAt": tokens["refresh_expires_at"],
    }
    payload.update(extra)
    return payload


def blacklist_user_tokens(user) -> int:
    """Blacklist every outstanding refresh token issued to ``user``."""

    from rest_framework_simplejwt.token_blacklist import models as blacklist_models

    revoked = 0
    outstanding = blacklist_models.OutstandingToken.objects.filter(user=user)
    for token in outstanding:
        _, created = blacklist_models.BlacklistedToken.objects.get_or_create(token=token)
        revoked += int(created)
    return revoked
