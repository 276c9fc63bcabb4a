from __future__ import annotations

from datetime import timedelta
from typing import Any

from django.utils import timezone

from .models import Notification


def create_notification(
    *,
    type: str,
    title: str,
    message: str | None = None,
    recipient_type: str = Notification.RecipientType.ADMIN,
    recipient_id: int | None = None,
    priority: str = Notification.Priority.MEDIUM,
    data: dict[str, Any] | None = None,
    created_at=None,
) -> Notification:
    notification = Notification.objects.create(
        created_at=created_at or timezone.now(),
        type=type,
        title=title,
        message=message or "",
        recipient_type=recipient_type,
        recipient_id=recipient_id,
        priority=priority,
        data=data or {},
    )
    return notification


def notify_admins(
    *,
    type: str,
    title: str,
    message: str | None = None,
    priority: str = Notification.Priority.MEDIUM,
    data: dict[str, Any] | None = None,
) -> Notification:
    """Broadcast a notification to every administrator."""

    return create_notification(
        type=type,
        title=title,
        message=message,
        recipient_type=Notification.RecipientType.ADMIN,
        recipient_id=None,
        priority=priority,
        data=data,
    )


def notify_user(
    user,
    *,
    type: str,
    title: str,
    message: str | None = None,
    priority: str = Notification.Priority.MEDIUM,
    data: dict[str, Any] | None = None,
) -> Notification:
    return create_notification(
        type=type,
        title=title,
        message=message,
        recipient_type=user.role,
        recipient_id=user.pk,
        priority=priority,
        data=data,
    )


def has_recent_unread(
    *,
    type: str,
    schedule_id: int,
    recipient_type: str = Notification.RecipientType.ADMIN,
    now=None,
    hours: int = 24,
) -> bool:
    """Return True when an unread ``type`` notification for ``schedule_id`` is younger than ``hours``."""

    now = now or timezone.now()
    return Notification.objects.filter(
        type=type,
        recipient_type=recipient_type,
        is_read=False,
        data__schedule_id=schedule_id,
        created_at__gte=now - timedelta(hours=hours),
    ).exists()
