from __future__ import annotations

from datetime import date, time
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from performance.models import ReviewSchedule
from scheduling.models import TimeEntry
from scheduling.timeclock import TimeClockError, clock_in, clock_out
from staff.models import Employee


def make_employee(email: str = "line@example.com", **extra) -> Employee:
    user = get_user_model().objects.create_user(email=email, password="test-pass-123", first_name="Noor")
    return Employee.objects.create(
        user=user,
        status=Employee.Status.APPROVED,
        stage=Employee.Stage.ACTIVE,
        **extra,
    )


class TimeClockServiceTests(TestCase):
    def setUp(self):
        super().setUp()
        self.employee = make_employee()

    def test_first_clock_in_starts_review_cycle(self):
        clock_in(self.employee, on_date=date(2024, 1, 1), at_time=time(9, 0))

        self.employee.refresh_from_db()
        self.assertEqual(self.employee.first_shift_date, date(2024, 1, 1))
        self.assertEqual(
            sorted(ReviewSchedule.objects.filter(employee=self.employee).values_list("scheduled_date", flat=True)),
            [date(2024, 1, 8), date(2024, 1, 31), date(2024, 3, 31)],
        )

    def test_later_entries_do_not_add_reviews(self):
        clock_in(self.employee, on_date=date(2024, 1, 1), at_time=time(9, 0))
        clock_out(self.employee, on_date=date(2024, 1, 1), at_time=time(17, 0))

        clock_in(self.employee, on_date=date(2024, 1, 5), at_time=time(9, 0))

        self.assertEqual(TimeEntry.objects.filter(employee=self.employee).count(), 2)
        self.assertEqual(ReviewSchedule.objects.filter(employee=self.employee).count(), 3)
        self.employee.refresh_from_db()
        self.assertEqual(self.employee.first_shift_date, date(2024, 1, 1))

    def test_recorded_first_shift_is_left_alone(self):
        employee = make_employee("veteran@example.com", first_shift_date=date(2023, 6, 1))

        clock_in(employee, on_date=date(2024, 1, 1), at_time=time(9, 0))

        employee.refresh_from_db()
        self.assertEqual(employee.first_shift_date, date(2023, 6, 1))
        self.assertFalse(ReviewSchedule.objects.filter(employee=employee).exists())

    def test_second_clock_in_same_day_is_refused(self):
        clock_in(self.employee, on_date=date(2024, 1, 1), at_time=time(9, 0))

        with self.assertRaisesMessage(TimeClockError, "Already clocked in"):
            clock_in(self.employee, on_date=date(2024, 1, 1), at_time=time(10, 0))

    def test_clock_out_without_open_entry_is_refused(self):
        with self.assertRaisesMessage(TimeClockError, "Not currently clocked in"):
            clock_out(self.employee, on_date=date(2024, 1, 1), at_time=time(17, 0))

    def test_clock_out_records_hours(self):
        clock_in(self.employee, on_date=date(2024, 1, 1), at_time=time(9, 0))

        entry = clock_out(self.employee, on_date=date(2024, 1, 1), at_time=time(17, 30))

        self.assertEqual(entry.total_hours, Decimal("8.50"))
        self.assertFalse(entry.is_open)

    def test_overnight_shift_wraps_past_midnight(self):
        clock_in(self.employee, on_date=date(2024, 3, 1), at_time=time(22, 0))

        entry = clock_out(self.employee, on_date=date(2024, 3, 2), at_time=time(2, 15))

        self.assertEqual(entry.date, date(2024, 3, 1))
        self.assertEqual(entry.total_hours, Decimal("4.25"))


class TimeClockApiTests(APITestCase):
    def setUp(self):
        super().setUp()
        self.employee = make_employee()
        self.client.force_authenticate(self.employee.user)

    def _clock_in(self, **overrides):
        payload = {
            "qr_code_data": "CLOCK_IN_RESTAURANT_GENERAL",
            "client_date": "2024-01-01",
            "client_time": "09:00:00",
        }
        payload.update(overrides)
        return self.client.post(reverse("scheduling:clock-in"), data=payload, format="json")

    def test_clock_in_endpoint_starts_reviews(self):
        response = self._clock_in(location_info={"source": "front door"})

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.json()["date"], "2024-01-01")
        self.assertTrue(response.json()["is_open"])
        self.assertEqual(ReviewSchedule.objects.filter(employee=self.employee).count(), 3)

    def test_double_clock_in_returns_400(self):
        self._clock_in()

        response = self._clock_in(client_time="09:05:00")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.json()["detail"], "Already clocked in. Please clock out first.")

    def test_wrong_qr_code_is_rejected(self):
        response = self._clock_in(qr_code_data="CLOCK_OUT_RESTAURANT_GENERAL")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("qr_code_data", response.json())
        self.assertFalse(TimeEntry.objects.exists())

    def test_clock_out_and_list_entries(self):
        self._clock_in()

        response = self.client.post(
            reverse("scheduling:clock-out"),
            data={
                "qr_code_data": "CLOCK_OUT_RESTAURANT_GENERAL",
                "client_date": "2024-01-01",
                "client_time": "15:00:00",
            },
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json()["total_hours"], "6.00")

        response = self.client.get(
            reverse("scheduling:time-entries"),
            {"start_date": "2024-01-01", "end_date": "2024-01-07"},
        )
        body = response.json()
        self.assertFalse(body["clocked_in"])
        self.assertIsNone(body["current_entry"])
        self.assertEqual(len(body["entries"]), 1)

    def test_pending_employee_cannot_clock_in(self):
        self.employee.status = Employee.Status.PENDING_APPROVAL
        self.employee.stage = Employee.Stage.INTERVIEW
        self.employee.save()

        response = self._clock_in()

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
