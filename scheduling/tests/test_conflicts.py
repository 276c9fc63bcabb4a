from __future__ import annotations

from datetime import date, time
from io import StringIO

from django.contrib.auth import get_user_model
from django.core.management import call_command
from django.test import TestCase

from scheduling.conflicts import recalculate_shift_conflicts, shift_has_conflict
from scheduling.models import Shift
from staff.models import Employee


def make_employee(email: str) -> Employee:
    user = get_user_model().objects.create_user(email=email, password="test-pass-123")
    return Employee.objects.create(user=user, status=Employee.Status.APPROVED, stage=Employee.Stage.ACTIVE)


def make_shift(employee, day: date, origin=Shift.Origin.OPEN_SHIFT, **extra) -> Shift:
    values = {
        "employee": employee,
        "department": Shift.Department.BOH,
        "role": "Line cook",
        "date": day,
        "start_time": time(9, 0),
        "end_time": time(15, 0),
        "created_from": origin,
    }
    values.update(extra)
    return Shift.objects.create(**values)


class ShiftConflictTests(TestCase):
    def setUp(self):
        super().setUp()
        self.employee = make_employee("cook@example.com")

    def test_two_claimed_shifts_on_same_day_conflict(self):
        first = make_shift(self.employee, date(2024, 1, 10))
        second = make_shift(self.employee, date(2024, 1, 10), start_time=time(17, 0), end_time=time(22, 0))
        other_day = make_shift(self.employee, date(2024, 1, 11))

        updated = recalculate_shift_conflicts()

        self.assertEqual(updated, 2)
        first.refresh_from_db()
        second.refresh_from_db()
        other_day.refresh_from_db()
        self.assertTrue(first.is_conflict)
        self.assertTrue(second.is_conflict)
        self.assertFalse(other_day.is_conflict)

    def test_second_run_changes_nothing(self):
        make_shift(self.employee, date(2024, 1, 10))
        make_shift(self.employee, date(2024, 1, 10))

        recalculate_shift_conflicts()

        self.assertEqual(recalculate_shift_conflicts(), 0)

    def test_manual_shifts_never_conflict(self):
        manual = make_shift(self.employee, date(2024, 1, 10), origin=Shift.Origin.MANUAL)
        make_shift(self.employee, date(2024, 1, 10), origin=Shift.Origin.MANUAL)

        self.assertFalse(shift_has_conflict(manual))

    def test_claimed_shift_next_to_manual_shift_conflicts(self):
        claimed = make_shift(self.employee, date(2024, 1, 10))
        make_shift(self.employee, date(2024, 1, 10), origin=Shift.Origin.MANUAL)

        self.assertTrue(shift_has_conflict(claimed))

    def test_unassigned_shift_never_conflicts(self):
        open_shift = make_shift(None, date(2024, 1, 10))

        self.assertFalse(shift_has_conflict(open_shift))

    def test_cancelled_shifts_are_ignored(self):
        claimed = make_shift(self.employee, date(2024, 1, 10))
        make_shift(self.employee, date(2024, 1, 10), status=Shift.Status.CANCELLED)

        self.assertFalse(shift_has_conflict(claimed))

    def test_stale_flag_is_cleared(self):
        lonely = make_shift(self.employee, date(2024, 1, 10), is_conflict=True)

        self.assertEqual(recalculate_shift_conflicts(), 1)
        lonely.refresh_from_db()
        self.assertFalse(lonely.is_conflict)

    def test_command_reports_progress(self):
        make_shift(self.employee, date(2024, 1, 10))
        make_shift(self.employee, date(2024, 1, 10))
        out = StringIO()

        call_command("calculate_shift_conflicts", stdout=out)

        output = out.getvalue()
        self.assertIn("Calculating conflicts for all shifts...", output)
        self.assertIn("Updated 2 shifts with conflict information.", output)
