from __future__ import annotations

from django.contrib.auth import get_user_model
from django.test import TestCase, override_settings

from staffapi.admin_site import StaffAdminAuthenticationForm


@override_settings(DEBUG=False, ADMIN_ALLOWED_IPS=("10.0.0.0/8",), ADMIN_ACCESS_TOKEN="")
class AdminNetworkGuardTests(TestCase):
    def test_unlisted_address_gets_not_found(self):
        response = self.client.get("/admin/login/", REMOTE_ADDR="192.168.1.5")

        self.assertEqual(response.status_code, 404)

    def test_listed_address_reaches_login(self):
        response = self.client.get("/admin/login/", REMOTE_ADDR="10.1.2.3")

        self.assertEqual(response.status_code, 200)

    @override_settings(ADMIN_ACCESS_TOKEN="letmein")
    def test_token_opens_the_door(self):
        response = self.client.get("/admin/login/", REMOTE_ADDR="192.168.1.5", HTTP_X_ADMIN_TOKEN="letmein")

        self.assertEqual(response.status_code, 200)


class AdminLoginFormTests(TestCase):
    def _form(self, email):
        return StaffAdminAuthenticationForm(data={"username": email, "password": "test-pass-123"})

    def test_employee_with_staff_flag_is_refused(self):
        get_user_model().objects.create_user(email="cook@example.com", password="test-pass-123", is_staff=True)

        form = self._form("cook@example.com")

        self.assertFalse(form.is_valid())

    def test_active_admin_is_accepted(self):
        get_user_model().objects.create_admin(email="owner@example.com", password="test-pass-123", is_staff=True)

        form = self._form("owner@example.com")

        self.assertTrue(form.is_valid())
