from __future__ import annotations

from datetime import timedelta

from django.db import models
from django.utils import timezone


class NotificationQuerySet(models.QuerySet):
    def unread(self):
        return self.filter(is_read=False)

    def for_admins(self):
        return self.filter(recipient_type=Notification.RecipientType.ADMIN)

    def for_recipient(self, user):
        """Rows addressed to ``user`` personally or to everyone of their role."""

        return self.filter(recipient_type=user.role).filter(
            models.Q(recipient_id__isnull=True) | models.Q(recipient_id=user.pk)
        )

    def recent(self, *, hours: int = 24, now=None):
        now = now or timezone.now()
        return self.filter(created_at__gte=now - timedelta(hours=hours))


class Notification(models.Model):
    class Type(models.TextChoices):
        NEW_SIGNUP = "new_signup", "New signup"
        ONBOARDING_COMPLETE = "onboarding_complete", "Onboarding complete"
        AVAILABILITY_REQUEST = "availability_request", "Availability request"
        AVAILABILITY_STATUS_UPDATE = "availability_status_update", "Availability status update"
        PERFORMANCE_REVIEW_OVERDUE = "performance_review_overdue", "Performance review overdue"
        PERFORMANCE_REVIEW_DUE_SOON = "performance_review_due_soon", "Performance review due soon"
        SHIFT_CLAIMED = "shift_claimed", "Shift claimed"
        GENERIC = "generic", "Generic"

    class RecipientType(models.TextChoices):
        ADMIN = "admin", "Admin"
        EMPLOYEE = "employee", "Employee"
        CUSTOMER = "customer", "Customer"

    class Priority(models.TextChoices):
        HIGH = "high", "High"
        MEDIUM = "medium", "Medium"
        LOW = "low", "Low"

    created_at = models.DateTimeField(default=timezone.now, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)
    read_at = models.DateTimeField(blank=True, null=True)

    type = models.CharField(max_length=64, choices=Type.choices, default=Type.GENERIC)
    title = models.CharField(max_length=255)
    message = models.TextField(blank=True)
    recipient_type = models.CharField(max_length=16, choices=RecipientType.choices, default=RecipientType.ADMIN)
    recipient_id = models.PositiveBigIntegerField(
        blank=True,
        null=True,
        help_text="User id of a single recipient; empty addresses every recipient of the type.",
    )
    priority = models.CharField(max_length=8, choices=Priority.choices, default=Priority.MEDIUM)
    data = models.JSONField(blank=True, default=dict, help_text="Arbitrary structured data for client use.")
    is_read = models.BooleanField(default=False)

    objects = NotificationQuerySet.as_manager()

    class Meta:
        ordering = ("-created_at",)
        indexes = [
            models.Index(fields=("recipient_type", "is_read"), name="notification_unread_idx"),
            models.Index(fields=("recipient_type", "recipient_id"), name="notification_recipient_idx"),
            models.Index(fields=("type", "created_at"), name="notification_type_idx"),
        ]

    def __str__(self) -> str:
        return f"Notification #{self.pk} → {self.recipient_type}: {self.title}"

    def mark_read(self) -> None:
        if not self.is_read:
            self.is_read = True
            self.read_at = timezone.now()
            self.save(update_fields=("is_read", "read_at", "updated_at"))
