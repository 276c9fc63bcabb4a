"""Recompute the double-booking flag on shifts claimed from the open-shift board."""

from __future__ import annotations

import logging

from staffapi.output import emit

from .models import Shift

logger = logging.getLogger(__name__)


def shift_has_conflict(shift: Shift) -> bool:
    """True when an open-shift claim leaves the employee with two or more active shifts that day."""

    created_from = shift.created_from or Shift.Origin.MANUAL
    if shift.employee_id is None or created_from != Shift.Origin.OPEN_SHIFT:
        return False
    same_day = Shift.objects.active().filter(employee_id=shift.employee_id, date=shift.date).count()
    return same_day > 1


def recalculate_shift_conflicts(*, stdout=None) -> int:
    """Refresh ``is_conflict`` on every active shift and return how many rows changed.

    Rows whose flag is already correct are not written, so a second run
    without intervening changes updates nothing.
    """

    emit(stdout, "Calculating conflicts for all shifts...")

    updated = 0
    for shift in list(Shift.objects.active().order_by("pk")):
        is_conflict = shift_has_conflict(shift)
        if shift.is_conflict != is_conflict:
            shift.is_conflict = is_conflict
            shift.save(update_fields=("is_conflict", "updated_at"))
            updated += 1

    logger.info("Shift conflict recalculation updated %s shifts", updated)
    emit(stdout, f"Updated {updated} shifts with conflict information.")
    return updated
