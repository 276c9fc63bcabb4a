from __future__ import annotations

import logging
from datetime import date, time

from django.db import transaction
from django.utils import timezone

from .models import TimeEntry

logger = logging.getLogger(__name__)

CLOCK_IN_CODE = "CLOCK_IN_RESTAURANT_GENERAL"
CLOCK_OUT_CODE = "CLOCK_OUT_RESTAURANT_GENERAL"


class TimeClockError(RuntimeError):
    """Raised when a clock-in or clock-out does not fit the employee's open entries."""


def _now_parts(on_date: date | None, at_time: time | None) -> tuple[date, time]:
    now = timezone.localtime()
    return on_date or now.date(), (at_time or now.time()).replace(microsecond=0)


def current_entry(employee) -> TimeEntry | None:
    return TimeEntry.objects.for_employee(employee).open().order_by("-date", "-clock_in_time").first()


def clock_in(employee, *, on_date: date | None = None, at_time: time | None = None, location_info=None) -> TimeEntry:
    """Open a time entry. The first entry an employee ever records starts their review cycle."""

    on_date, at_time = _now_parts(on_date, at_time)
    with transaction.atomic():
        already_in = (
            TimeEntry.objects.select_for_update()
            .for_employee(employee)
            .open()
            .filter(date=on_date)
            .exists()
        )
        if already_in:
            raise TimeClockError("Already clocked in. Please clock out first.")
        entry = TimeEntry.objects.create(
            employee=employee,
            date=on_date,
            clock_in_time=at_time,
            location_info=location_info or {},
        )

    logger.info("Employee %s clocked in at %s %s", employee.pk, on_date, at_time)
    return entry


def clock_out(employee, *, on_date: date | None = None, at_time: time | None = None) -> TimeEntry:
    on_date, at_time = _now_parts(on_date, at_time)
    with transaction.atomic():
        entry = (
            TimeEntry.objects.select_for_update()
            .for_employee(employee)
            .open()
            .filter(date__lte=on_date)
            .order_by("-date", "-clock_in_time")
            .first()
        )
        if entry is None:
            raise TimeClockError("Not currently clocked in. Please clock in first.")
        entry.clock_out_time = at_time
        entry.total_hours = entry.calculate_total_hours()
        entry.save(update_fields=("clock_out_time", "total_hours", "updated_at"))

    logger.info("Employee %s clocked out after %s hours", employee.pk, entry.total_hours)
    return entry
