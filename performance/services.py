from __future__ import annotations

import logging
from datetime import date, timedelta

from django.db import transaction
from django.utils import timezone

from .models import ReviewSchedule

logger = logging.getLogger(__name__)

REVIEW_OFFSETS = (
    (ReviewSchedule.ReviewType.ONE_WEEK, 7),
    (ReviewSchedule.ReviewType.ONE_MONTH, 30),
    (ReviewSchedule.ReviewType.QUARTERLY, 90),
)
QUARTERLY_INTERVAL_DAYS = 90

REVIEW_TYPE_LABELS = {
    "one_week": "1 Week Review",
    "one_month": "1 Month Review",
    "quarterly": "Quarterly Review",
}


def review_type_label(review_type: str) -> str:
    label = REVIEW_TYPE_LABELS.get(str(review_type))
    if label:
        return label
    text = str(review_type).replace("_", " ")
    return text[:1].upper() + text[1:]


@transaction.atomic
def start_review_cycle(employee, first_shift_date: date) -> list[ReviewSchedule]:
    """Record the first shift and create the one-week, one-month and quarterly reviews.

    An employee gets one cycle. Once ``first_shift_date`` is recorded, later calls
    return the existing schedules whatever date they pass.
    """

    if employee.first_shift_date is not None and employee.first_shift_date != first_shift_date:
        logger.info(
            "Review cycle for employee %s already started on %s; ignoring %s",
            employee.pk,
            employee.first_shift_date,
            first_shift_date,
        )
        return list(ReviewSchedule.objects.filter(employee=employee).order_by("scheduled_date", "pk"))

    if employee.first_shift_date is None:
        employee.first_shift_date = first_shift_date
        employee.save(update_fields=("first_shift_date", "updated_at"))

    schedules = []
    for review_type, offset in REVIEW_OFFSETS:
        schedule, _ = ReviewSchedule.objects.update_or_create(
            employee=employee,
            review_type=review_type,
            scheduled_date=first_shift_date + timedelta(days=offset),
            defaults={"first_shift_date": first_shift_date},
        )
        schedules.append(schedule)

    logger.info("Review cycle started for employee %s from %s", employee.pk, first_shift_date)
    return schedules


@transaction.atomic
def complete_review(schedule: ReviewSchedule, *, now=None) -> ReviewSchedule | None:
    """Mark ``schedule`` done; a finished quarterly review books the next one.

    Returns the follow-up quarterly schedule when one was created.
    """

    schedule.completed = True
    schedule.completed_at = now or timezone.now()
    schedule.save(update_fields=("completed", "completed_at", "updated_at"))

    if schedule.review_type != ReviewSchedule.ReviewType.QUARTERLY:
        return None

    next_date = schedule.scheduled_date + timedelta(days=QUARTERLY_INTERVAL_DAYS)
    follow_up, created = ReviewSchedule.objects.get_or_create(
        employee_id=schedule.employee_id,
        review_type=ReviewSchedule.ReviewType.QUARTERLY,
        scheduled_date=next_date,
        defaults={"first_shift_date": schedule.first_shift_date},
    )
    return follow_up if created else None
