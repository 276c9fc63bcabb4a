from __future__ import annotations

from datetime import date, timedelta
from io import StringIO

from django.contrib.auth import get_user_model
from django.core.management import call_command
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from notifications.models import Notification
from scheduling.availability import (
    ADMIN_OVERRIDE_NOTE,
    AvailabilityRequestError,
    assign_availability,
    cleanup_expired_availability_requests,
    effective_availability,
    is_available_on,
    review_availability_request,
    submit_availability_request,
)
from scheduling.models import AvailabilityRequest
from staff.models import Employee

WEEKDAYS = {
    "monday": {"enabled": True, "status": "available"},
    "tuesday": {"enabled": False, "status": "unavailable"},
}


def make_employee(email: str = "cook@example.com") -> Employee:
    user = get_user_model().objects.create_user(email=email, password="test-pass-123", first_name="Casey")
    return Employee.objects.create(user=user, status=Employee.Status.APPROVED, stage=Employee.Stage.ACTIVE)


class ExpiredAvailabilityCleanupTests(TestCase):
    def setUp(self):
        super().setUp()
        self.employee = make_employee()
        self.today = date(2024, 3, 15)

    def _request(self, **values):
        defaults = {
            "employee": self.employee,
            "type": AvailabilityRequest.Type.TEMPORARY,
            "status": AvailabilityRequest.Status.APPROVED,
            "effective_from": date(2024, 3, 1),
            "effective_to": date(2024, 3, 10),
        }
        defaults.update(values)
        return AvailabilityRequest.objects.create(**defaults)

    def test_removes_only_expired_approved_temporary_requests(self):
        expired = self._request()
        ends_today = self._request(effective_to=self.today)
        open_ended = self._request(effective_to=None)
        pending = self._request(status=AvailabilityRequest.Status.PENDING)
        declined = self._request(status=AvailabilityRequest.Status.DECLINED)
        recurring = self._request(type=AvailabilityRequest.Type.RECURRING)

        removed = cleanup_expired_availability_requests(today=self.today)

        self.assertEqual(removed, 1)
        remaining = set(AvailabilityRequest.objects.values_list("pk", flat=True))
        self.assertNotIn(expired.pk, remaining)
        self.assertEqual(remaining, {ends_today.pk, open_ended.pk, pending.pk, declined.pk, recurring.pk})

    def test_nothing_to_do(self):
        out = StringIO()

        removed = cleanup_expired_availability_requests(today=self.today, stdout=out)

        self.assertEqual(removed, 0)
        self.assertIn("No expired temporary availability requests found.", out.getvalue())

    def test_command_lists_deleted_requests(self):
        expired = self._request(effective_from=date(2000, 1, 1), effective_to=date(2000, 1, 2))
        out = StringIO()

        call_command("cleanup_expired_availability", stdout=out)

        output = out.getvalue()
        self.assertIn(f"Deleting expired request ID {expired.pk} for employee cook@example.com", output)
        self.assertIn("(expired: 2000-01-02)", output)
        self.assertIn("Successfully cleaned up 1 expired temporary availability requests.", output)


class AvailabilityServiceTests(TestCase):
    def setUp(self):
        super().setUp()
        self.employee = make_employee()
        self.admin = get_user_model().objects.create_admin(email="owner@example.com", password="test-pass-123")

    def test_only_one_pending_request(self):
        submit_availability_request(self.employee, type="recurring", availability_data=WEEKDAYS)

        with self.assertRaises(AvailabilityRequestError):
            submit_availability_request(self.employee, type="recurring", availability_data=WEEKDAYS)

        notification = Notification.objects.get(type=Notification.Type.AVAILABILITY_REQUEST)
        self.assertIn("Casey", notification.message)

    def test_declining_tells_the_employee_why(self):
        request = submit_availability_request(
            self.employee,
            type="temporary",
            availability_data=WEEKDAYS,
            effective_from=date(2024, 5, 1),
            effective_to=date(2024, 5, 7),
        )

        review_availability_request(request, status="declined", reviewed_by=self.admin, admin_notes="Short staffed")

        notification = Notification.objects.get(type=Notification.Type.AVAILABILITY_STATUS_UPDATE)
        self.assertEqual(notification.title, "Availability Request Declined")
        self.assertEqual(
            notification.message,
            "Your availability request from 2024-05-01 has been declined. Reason: Short staffed",
        )
        self.assertEqual(notification.recipient_id, self.employee.user.pk)
        self.assertEqual(notification.recipient_type, "employee")

    def test_reviewed_request_cannot_be_reviewed_again(self):
        request = submit_availability_request(self.employee, type="recurring", availability_data=WEEKDAYS)
        review_availability_request(request, status="approved", reviewed_by=self.admin)

        with self.assertRaises(AvailabilityRequestError):
            review_availability_request(request, status="declined", reviewed_by=self.admin)

    def test_admin_assignment_overrides_pending_and_previous_recurring(self):
        old = assign_availability(self.employee, assigned_by=self.admin, type="recurring", availability_data={})
        pending = submit_availability_request(self.employee, type="recurring", availability_data=WEEKDAYS)

        current = assign_availability(self.employee, assigned_by=self.admin, type="recurring", availability_data=WEEKDAYS)

        pending.refresh_from_db()
        self.assertEqual(pending.status, AvailabilityRequest.Status.DECLINED)
        self.assertEqual(pending.admin_notes, ADMIN_OVERRIDE_NOTE)
        self.assertFalse(AvailabilityRequest.objects.filter(pk=old.pk).exists())
        self.assertEqual(current.status, AvailabilityRequest.Status.APPROVED)

    def test_temporary_override_wins_inside_its_window(self):
        assign_availability(self.employee, assigned_by=self.admin, type="recurring", availability_data=WEEKDAYS)
        temporary = assign_availability(
            self.employee,
            assigned_by=self.admin,
            type="temporary",
            availability_data={"monday": {"enabled": False, "status": "unavailable"}},
            effective_from=date(2024, 6, 1),
            effective_to=date(2024, 6, 30),
        )

        inside = effective_availability(self.employee, date(2024, 6, 10))
        outside = effective_availability(self.employee, date(2024, 7, 1))

        self.assertEqual(inside["request_id"], temporary.pk)
        self.assertEqual(outside["type"], "recurring")
        # 2024-06-10 and 2024-07-01 are Mondays.
        self.assertFalse(is_available_on(self.employee, date(2024, 6, 10)))
        self.assertTrue(is_available_on(self.employee, date(2024, 7, 1)))


class AvailabilityApiTests(APITestCase):
    def setUp(self):
        super().setUp()
        self.employee = make_employee()
        self.admin = get_user_model().objects.create_admin(email="owner@example.com", password="test-pass-123")

    def test_employee_submits_and_withdraws(self):
        self.client.force_authenticate(self.employee.user)
        start = date.today() + timedelta(days=3)

        response = self.client.post(
            reverse("scheduling:my-availability"),
            data={
                "type": "temporary",
                "availability_data": WEEKDAYS,
                "effective_from": start.isoformat(),
                "effective_to": (start + timedelta(days=2)).isoformat(),
            },
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        request_id = response.json()["id"]

        response = self.client.delete(reverse("scheduling:my-availability-withdraw", kwargs={"pk": request_id}))
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)

    def test_temporary_request_needs_dates(self):
        self.client.force_authenticate(self.employee.user)

        response = self.client.post(
            reverse("scheduling:my-availability"),
            data={"type": "temporary", "availability_data": WEEKDAYS},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_unapproved_employee_is_refused(self):
        self.employee.status = Employee.Status.PENDING_APPROVAL
        self.employee.save()
        self.client.force_authenticate(self.employee.user)

        response = self.client.get(reverse("scheduling:my-availability"))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_admin_reviews_request(self):
        request = submit_availability_request(self.employee, type="recurring", availability_data=WEEKDAYS)
        self.client.force_authenticate(self.admin)

        response = self.client.post(
            reverse("scheduling:admin-availability-review", kwargs={"pk": request.pk}),
            data={"status": "approved"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json()["status"], "approved")

    def test_admin_assigns_availability(self):
        self.client.force_authenticate(self.admin)

        response = self.client.post(
            reverse("scheduling:admin-availability-list"),
            data={"employee_id": self.employee.pk, "type": "recurring", "availability_data": WEEKDAYS},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.json()["status"], "approved")

        response = self.client.get(
            reverse("scheduling:effective-availability", kwargs={"employee_id": self.employee.pk}),
            {"date": "2024-07-01"},
        )
        self.assertEqual(response.json()["availability"]["type"], "recurring")
