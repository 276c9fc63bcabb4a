from __future__ import annotations

from django.contrib.auth import get_user_model
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from accounts.models import Capability, default_capabilities
from accounts.tokens import issue_jwt_pair
from staff.models import Employee


class CapabilityTests(APITestCase):
    def setUp(self):
        super().setUp()
        self.User = get_user_model()

    def test_role_defaults(self):
        self.assertEqual(default_capabilities("owner"), ["full_access"])
        self.assertEqual(default_capabilities("expo"), [])
        self.assertIn("manage_schedules", default_capabilities("manager"))

    def test_full_access_implies_every_capability(self):
        admin = self.User.objects.create_admin(email="owner@example.com", password="test-pass-123")

        self.assertTrue(admin.has_capability(Capability.MANAGE_CUSTOMERS))
        self.assertTrue(admin.has_capability("anything"))

    def test_grant_and_revoke(self):
        admin = self.User.objects.create_admin(
            email="expo@example.com",
            password="test-pass-123",
            admin_role=self.User.AdminRole.EXPO,
        )

        admin.grant_capability(Capability.VIEW_ANALYTICS)
        admin.refresh_from_db()
        self.assertTrue(admin.has_capability("view_analytics"))

        admin.revoke_capability(Capability.VIEW_ANALYTICS)
        admin.refresh_from_db()
        self.assertFalse(admin.has_capability("view_analytics"))


class AdminEndpointAccessTests(APITestCase):
    def setUp(self):
        super().setUp()
        self.User = get_user_model()
        self.url = reverse("staff:admin-employee-list")

    def test_requires_authentication(self):
        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.json()["code"], "authentication_required")

    def test_employee_is_not_an_admin(self):
        user = self.User.objects.create_user(email="cook@example.com", password="test-pass-123")
        self.client.force_authenticate(user)

        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.json()["detail"], "Admin access required")

    def test_inactive_admin_is_refused(self):
        admin = self.User.objects.create_admin(
            email="old@example.com",
            password="test-pass-123",
            admin_status=self.User.AdminStatus.INACTIVE,
        )
        self.client.force_authenticate(admin)

        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.json()["detail"], "Admin account is not active")

    def test_missing_capability_reports_what_is_required(self):
        admin = self.User.objects.create_admin(
            email="expo@example.com",
            password="test-pass-123",
            admin_role=self.User.AdminRole.EXPO,
        )
        self.client.force_authenticate(admin)

        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        body = response.json()
        self.assertEqual(body["detail"], "Access denied. Required permission: manage_employees")
        self.assertEqual(body["required_permission"], "manage_employees")
        self.assertEqual(body["user_role"], "expo")
        self.assertEqual(body["user_permissions"], [])

    def test_hiring_manager_can_manage_employees(self):
        admin = self.User.objects.create_admin(
            email="hiring@example.com",
            password="test-pass-123",
            admin_role=self.User.AdminRole.HIRING_MANAGER,
        )
        self.client.force_authenticate(admin)

        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)


class EmployeeSessionRevocationTests(APITestCase):
    def setUp(self):
        super().setUp()
        self.user = get_user_model().objects.create_user(email="cook@example.com", password="test-pass-123")
        self.employee = Employee.objects.create(
            user=self.user,
            status=Employee.Status.APPROVED,
            stage=Employee.Stage.ACTIVE,
        )
        tokens = issue_jwt_pair(self.user)
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {tokens['access']}")
        self.url = reverse("staff:employee-me")

    def test_active_employee_passes(self):
        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_paused_employee_is_logged_out(self):
        self.employee.status = Employee.Status.PAUSED
        self.employee.save()

        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        body = response.json()
        self.assertTrue(body["force_logout"])
        self.assertEqual(body["code"], "account_revoked")
        self.assertEqual(body["status"], "paused")

    def test_deactivated_employee_is_logged_out(self):
        self.employee.status = Employee.Status.INACTIVE
        self.employee.save()

        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.json()["status"], "inactive")

    def test_employee_without_profile_is_logged_out(self):
        self.employee.delete()

        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertTrue(response.json()["force_logout"])
        self.assertNotIn("status", response.json())
