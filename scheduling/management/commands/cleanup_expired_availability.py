from django.core.management.base import BaseCommand

from scheduling.availability import cleanup_expired_availability_requests


class Command(BaseCommand):
    help = "Delete approved temporary availability requests whose end date has passed."

    def handle(self, *args, **options):
        cleanup_expired_availability_requests(stdout=self.stdout)
