from __future__ import annotations

from datetime import date, timedelta

from django.conf import settings
from django.db import models
from django.utils import timezone


def _due_soon_days() -> int:
    return int(getattr(settings, "REVIEW_DUE_SOON_DAYS", 7))


class ReviewScheduleQuerySet(models.QuerySet):
    def pending(self):
        return self.filter(completed=False)

    def completed(self):
        return self.filter(completed=True)

    def overdue(self, today: date | None = None):
        today = today or timezone.localdate()
        return self.pending().filter(scheduled_date__lt=today)

    def due_soon(self, today: date | None = None, days: int | None = None):
        today = today or timezone.localdate()
        days = _due_soon_days() if days is None else days
        return self.pending().filter(scheduled_date__gte=today, scheduled_date__lte=today + timedelta(days=days))


class ReviewSchedule(models.Model):
    class ReviewType(models.TextChoices):
        ONE_WEEK = "one_week", "1 Week Review"
        ONE_MONTH = "one_month", "1 Month Review"
        QUARTERLY = "quarterly", "Quarterly Review"

    class Urgency(models.TextChoices):
        COMPLETED = "completed", "Completed"
        OVERDUE = "overdue", "Overdue"
        DUE_SOON = "due_soon", "Due soon"
        ON_TRACK = "on_track", "On track"

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    employee = models.ForeignKey(
        "staff.Employee",
        related_name="review_schedules",
        on_delete=models.SET_NULL,
        blank=True,
        null=True,
    )
    first_shift_date = models.DateField()
    review_type = models.CharField(max_length=32, choices=ReviewType.choices)
    scheduled_date = models.DateField()
    completed = models.BooleanField(default=False)
    completed_at = models.DateTimeField(blank=True, null=True)

    objects = ReviewScheduleQuerySet.as_manager()

    class Meta:
        ordering = ("scheduled_date", "pk")
        constraints = [
            models.UniqueConstraint(
                fields=("employee", "review_type", "scheduled_date"),
                name="review_schedule_unique",
            ),
        ]
        indexes = [
            models.Index(fields=("completed", "scheduled_date"), name="review_pending_idx"),
        ]

    def __str__(self) -> str:
        return f"ReviewSchedule #{self.pk} {self.review_type} on {self.scheduled_date}"

    def days_overdue(self, today: date | None = None) -> int:
        """Days past the scheduled date; negative while the review is still ahead, zero once completed."""

        if self.completed:
            return 0
        today = today or timezone.localdate()
        return (today - self.scheduled_date).days

    def urgency_status(self, today: date | None = None) -> str:
        if self.completed:
            return self.Urgency.COMPLETED.value
        today = today or timezone.localdate()
        if self.scheduled_date < today:
            return self.Urgency.OVERDUE.value
        if self.scheduled_date <= today + timedelta(days=_due_soon_days()):
            return self.Urgency.DUE_SOON.value
        return self.Urgency.ON_TRACK.value
