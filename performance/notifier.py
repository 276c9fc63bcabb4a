"""Admin notifications for performance reviews that are overdue or coming up."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from django.conf import settings
from django.utils import timezone

from notifications.models import Notification
from notifications.services import create_notification, has_recent_unread
from staff.services import employee_display_name
from staffapi.output import emit

from .models import ReviewSchedule
from .services import review_type_label

logger = logging.getLogger(__name__)

URGENT_NOTIFICATIONS = {
    ReviewSchedule.Urgency.OVERDUE.value: (
        Notification.Type.PERFORMANCE_REVIEW_OVERDUE,
        "Performance Review Overdue",
        Notification.Priority.HIGH,
    ),
    ReviewSchedule.Urgency.DUE_SOON.value: (
        Notification.Type.PERFORMANCE_REVIEW_DUE_SOON,
        "Performance Review Due Soon",
        Notification.Priority.MEDIUM,
    ),
}


@dataclass
class DispatchResult:
    overdue: int = 0
    due_soon: int = 0
    created: int = 0
    skipped: int = 0


def _message(urgency: str, employee_name: str, label: str, days: int) -> str:
    if urgency == ReviewSchedule.Urgency.OVERDUE:
        return f"{employee_name} - {label} is overdue by {days} days"
    return f"{employee_name} - {label} is due in {days} days"


def notify_for_schedule(schedule: ReviewSchedule, urgency: str, *, now, stdout=None) -> Notification | None:
    """Create the admin notification for one urgent schedule unless a recent unread one exists."""

    employee = schedule.employee
    if employee is None:
        return None

    notification_type, title, priority = URGENT_NOTIFICATIONS[urgency]
    window = int(getattr(settings, "REVIEW_NOTIFICATION_DEDUP_HOURS", 24))
    if has_recent_unread(type=notification_type, schedule_id=schedule.pk, now=now, hours=window):
        return None

    today = timezone.localdate(now)
    employee_name = employee_display_name(employee)
    label = review_type_label(schedule.review_type)
    days_overdue = schedule.days_overdue(today)

    notification = create_notification(
        type=notification_type,
        title=title,
        message=_message(urgency, employee_name, label, abs(days_overdue)),
        recipient_type=Notification.RecipientType.ADMIN,
        recipient_id=None,
        priority=priority,
        created_at=now,
        data={
            "schedule_id": schedule.pk,
            "employee_id": employee.pk,
            "employee_name": employee_name,
            "review_type": schedule.review_type,
            "review_type_label": label,
            "scheduled_date": schedule.scheduled_date.isoformat(),
            "days_overdue": days_overdue,
            "urgency_status": urgency,
        },
    )
    emit(stdout, f"Created {urgency} notification for {employee_name} - {label}")
    return notification


def dispatch_review_notifications(*, now=None, stdout=None) -> DispatchResult:
    """Scan incomplete review schedules and notify admins about overdue and due-soon ones."""

    now = now or timezone.now()
    today = timezone.localdate(now)
    result = DispatchResult()

    emit(stdout, "Checking performance review schedules...")

    schedules = ReviewSchedule.objects.pending().select_related("employee__user").order_by("scheduled_date", "pk")
    for schedule in schedules.iterator():
        urgency = schedule.urgency_status(today)
        if urgency not in URGENT_NOTIFICATIONS:
            continue

        if urgency == ReviewSchedule.Urgency.OVERDUE:
            result.overdue += 1
        else:
            result.due_soon += 1

        if notify_for_schedule(schedule, urgency, now=now, stdout=stdout) is None:
            result.skipped += 1
        else:
            result.created += 1

    logger.info(
        "Review notification check: %s overdue, %s due soon, %s created",
        result.overdue,
        result.due_soon,
        result.created,
    )
    emit(stdout, f"Found {result.overdue} overdue and {result.due_soon} due soon reviews.")
    emit(stdout, "Performance review notifications check completed.")
    return result
