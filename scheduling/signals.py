import logging

from django.db.models.signals import post_save
from django.dispatch import receiver

from .models import TimeEntry

logger = logging.getLogger(__name__)


@receiver(post_save, sender=TimeEntry, dispatch_uid="scheduling.start_reviews_on_first_time_entry")
def start_reviews_on_first_time_entry(sender, instance: TimeEntry, created: bool, raw: bool = False, **kwargs):
    """The first time entry an employee records is their first shift."""

    if not created or raw:
        return

    employee = instance.employee
    employee.refresh_from_db(fields=("first_shift_date",))
    if employee.first_shift_date is not None:
        return
    if TimeEntry.objects.filter(employee=employee).exclude(pk=instance.pk).exists():
        return

    from performance.services import start_review_cycle

    start_review_cycle(employee, instance.date)
    logger.info("First time entry %s started reviews for employee %s", instance.pk, employee.pk)
