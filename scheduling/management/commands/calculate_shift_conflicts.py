from django.core.management.base import BaseCommand

from scheduling.conflicts import recalculate_shift_conflicts


class Command(BaseCommand):
    help = "Calculate and update is_conflict for all active shifts."

    def handle(self, *args, **options):
        recalculate_shift_conflicts(stdout=self.stdout)
