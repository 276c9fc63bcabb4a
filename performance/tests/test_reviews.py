from __future__ import annotations

from datetime import date, timedelta

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from performance.models import ReviewSchedule
from performance.services import complete_review, start_review_cycle
from staff.models import Employee


def make_employee(email: str = "river@example.com") -> Employee:
    user = get_user_model().objects.create_user(email=email, password="test-pass-123", first_name="River")
    return Employee.objects.create(user=user, status=Employee.Status.APPROVED, stage=Employee.Stage.ACTIVE)


class ReviewCycleServiceTests(TestCase):
    def setUp(self):
        super().setUp()
        self.employee = make_employee()

    def test_creates_three_reviews_from_first_shift(self):
        schedules = start_review_cycle(self.employee, date(2024, 1, 1))

        self.assertEqual(
            [(s.review_type, s.scheduled_date) for s in schedules],
            [
                ("one_week", date(2024, 1, 8)),
                ("one_month", date(2024, 1, 31)),
                ("quarterly", date(2024, 3, 31)),
            ],
        )
        self.employee.refresh_from_db()
        self.assertEqual(self.employee.first_shift_date, date(2024, 1, 1))

    def test_starting_twice_keeps_one_set(self):
        start_review_cycle(self.employee, date(2024, 1, 1))
        start_review_cycle(self.employee, date(2024, 1, 1))

        self.assertEqual(ReviewSchedule.objects.filter(employee=self.employee).count(), 3)

    def test_later_date_does_not_start_a_second_cycle(self):
        start_review_cycle(self.employee, date(2024, 1, 1))

        schedules = start_review_cycle(self.employee, date(2024, 2, 1))

        self.assertEqual(ReviewSchedule.objects.filter(employee=self.employee).count(), 3)
        self.assertEqual(
            [s.scheduled_date for s in schedules],
            [date(2024, 1, 8), date(2024, 1, 31), date(2024, 3, 31)],
        )
        self.employee.refresh_from_db()
        self.assertEqual(self.employee.first_shift_date, date(2024, 1, 1))

    def test_completing_quarterly_books_the_next_one(self):
        schedules = start_review_cycle(self.employee, date(2024, 1, 1))
        quarterly = schedules[-1]

        follow_up = complete_review(quarterly)

        quarterly.refresh_from_db()
        self.assertTrue(quarterly.completed)
        self.assertIsNotNone(quarterly.completed_at)
        self.assertEqual(follow_up.scheduled_date, date(2024, 6, 29))
        self.assertEqual(follow_up.review_type, "quarterly")

    def test_completing_other_reviews_books_nothing(self):
        schedules = start_review_cycle(self.employee, date(2024, 1, 1))

        self.assertIsNone(complete_review(schedules[0]))
        self.assertEqual(ReviewSchedule.objects.count(), 3)

    def test_days_overdue_and_urgency(self):
        schedule = ReviewSchedule.objects.create(
            employee=self.employee,
            first_shift_date=date(2024, 1, 1),
            review_type=ReviewSchedule.ReviewType.ONE_WEEK,
            scheduled_date=date(2024, 1, 8),
        )

        self.assertEqual(schedule.days_overdue(date(2024, 1, 11)), 3)
        self.assertEqual(schedule.urgency_status(date(2024, 1, 11)), "overdue")
        self.assertEqual(schedule.urgency_status(date(2024, 1, 1)), "due_soon")
        self.assertEqual(schedule.urgency_status(date(2023, 12, 31)), "on_track")

        schedule.completed = True
        self.assertEqual(schedule.days_overdue(date(2024, 1, 11)), 0)
        self.assertEqual(schedule.urgency_status(date(2024, 1, 11)), "completed")


class ReviewApiTests(APITestCase):
    def setUp(self):
        super().setUp()
        self.admin = get_user_model().objects.create_admin(email="owner@example.com", password="test-pass-123")
        self.client.force_authenticate(self.admin)
        self.employee = make_employee()
        today = timezone.localdate()
        self.overdue = ReviewSchedule.objects.create(
            employee=self.employee,
            first_shift_date=today - timedelta(days=10),
            review_type=ReviewSchedule.ReviewType.ONE_WEEK,
            scheduled_date=today - timedelta(days=3),
        )
        self.due_soon = ReviewSchedule.objects.create(
            employee=self.employee,
            first_shift_date=today - timedelta(days=10),
            review_type=ReviewSchedule.ReviewType.ONE_MONTH,
            scheduled_date=today + timedelta(days=2),
        )

    def test_counts(self):
        response = self.client.get(reverse("performance:review-counts"))

        self.assertEqual(response.json(), {"overdue": 1, "due_soon": 1, "total_urgent": 2})

    def test_pending_filtered_by_urgency(self):
        response = self.client.get(reverse("performance:pending-reviews"), {"urgency": "overdue"})

        rows = response.json()
        self.assertEqual([row["id"] for row in rows], [self.overdue.pk])
        self.assertEqual(rows[0]["days_overdue"], 3)
        self.assertEqual(rows[0]["review_type_label"], "1 Week Review")
        self.assertEqual(rows[0]["employee_name"], "River")

    def test_complete_once(self):
        url = reverse("performance:complete-review", kwargs={"pk": self.overdue.pk})

        response = self.client.post(url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.json()["schedule"]["completed"])
        self.assertNotIn("next_schedule", response.json())

        response = self.client.post(url)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_start_cycle_endpoint(self):
        other = make_employee("new@example.com")

        response = self.client.post(
            reverse("performance:review-cycle"),
            data={"employee_id": other.pk, "first_shift_date": "2024-02-01"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(len(response.json()), 3)

        response = self.client.get(reverse("performance:employee-schedules", kwargs={"employee_id": other.pk}))
        self.assertEqual([row["review_type"] for row in response.json()], ["one_week", "one_month", "quarterly"])

    def test_expo_admin_cannot_see_reviews(self):
        expo = get_user_model().objects.create_admin(
            email="expo@example.com",
            password="test-pass-123",
            admin_role="expo",
        )
        self.client.force_authenticate(expo)

        response = self.client.get(reverse("performance:review-counts"))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
