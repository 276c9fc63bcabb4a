import logging

from django.core.management.base import BaseCommand, CommandError
from django.db import DatabaseError

from performance.notifier import dispatch_review_notifications

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Check for overdue and due soon performance reviews and create notifications."

    def handle(self, *args, **options):
        try:
            result = dispatch_review_notifications(stdout=self.stdout)
        except DatabaseError as exc:
            logger.exception("Performance review notification check failed")
            raise CommandError(f"Performance review notification check failed: {exc}") from exc

        self.stdout.write(self.style.SUCCESS(f"Created {result.created} notifications."))
