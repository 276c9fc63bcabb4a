from __future__ import annotations

import logging
from datetime import date, timedelta

from django.db import transaction
from django.utils import timezone

from notifications.models import Notification
from notifications.services import notify_admins, notify_user
from staff.models import Employee
from staff.services import employee_display_name

from .models import Shift

logger = logging.getLogger(__name__)


class ShiftClaimError(RuntimeError):
    """Raised when an open shift cannot be claimed."""


def week_bounds(day: date) -> tuple[date, date]:
    start = day - timedelta(days=day.weekday())
    return start, start + timedelta(days=6)


def claim_open_shift(shift_id: int, employee, *, today: date | None = None) -> Shift:
    """Assign an unassigned active shift to ``employee``.

    The conflict flag is left for the periodic recalculation job.
    """

    today = today or timezone.localdate()
    with transaction.atomic():
        shift = Shift.objects.select_for_update().filter(pk=shift_id).first()
        if shift is None or not shift.is_open:
            raise ShiftClaimError("This shift is no longer available.")
        if shift.date < today:
            raise ShiftClaimError("Past shifts cannot be claimed.")

        shift.employee = employee
        shift.created_from = Shift.Origin.OPEN_SHIFT
        shift.save(update_fields=("employee", "created_from", "updated_at"))

    name = employee_display_name(employee)
    notify_admins(
        type=Notification.Type.SHIFT_CLAIMED,
        title="Open Shift Claimed",
        message=f"{name} claimed the {shift.role} shift on {shift.date.isoformat()}.",
        priority=Notification.Priority.LOW,
        data={"shift_id": shift.pk, "employee_id": employee.pk, "employee_name": name, "date": shift.date.isoformat()},
    )
    logger.info("Employee %s claimed open shift %s", employee.pk, shift.pk)
    return shift


def publish_week(week_start: date, *, published_by, department: str | None = None, now=None) -> dict:
    now = now or timezone.now()
    week_start, week_end = week_bounds(week_start)
    shifts = Shift.objects.active().for_week(week_start).filter(published=False)
    if department:
        shifts = shifts.filter(department=department)

    employee_ids = set(shifts.exclude(employee__isnull=True).values_list("employee_id", flat=True))
    published = shifts.update(published=True, published_at=now, published_by=published_by, updated_at=now)

    for employee in Employee.objects.filter(pk__in=employee_ids).select_related("user"):
        notify_user(
            employee.user,
            type=Notification.Type.GENERIC,
            title="Schedule Published",
            message=f"Your schedule for the week of {week_start.isoformat()} is now available.",
            data={"week_start": week_start.isoformat(), "week_end": week_end.isoformat()},
        )

    logger.info("Published %s shifts for week %s", published, week_start)
    return {
        "shifts_published": published,
        "employees_notified": len(employee_ids),
        "week_start": week_start.isoformat(),
        "week_end": week_end.isoformat(),
    }
