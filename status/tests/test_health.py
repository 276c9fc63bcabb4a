from __future__ import annotations

from unittest.mock import patch

from django.contrib.auth import get_user_model
from django.test import override_settings
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from status.cache import clear_cached_report
from status.checks import FEATURE_CHECKS

OK = {"status": "ok", "latencyMs": 1.0}


@override_settings(DEBUG=False, ADMIN_ALLOWED_IPS=(), ADMIN_ACCESS_TOKEN="monitor-token")
class HealthFullViewTests(APITestCase):
    def setUp(self):
        super().setUp()
        clear_cached_report()
        self.url = reverse("status:health-full")

    def tearDown(self):
        clear_cached_report()
        super().tearDown()

    def test_simple_health_is_public(self):
        response = self.client.get(reverse("status:health-simple"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json(), {"status": "ok"})

    def test_anonymous_caller_without_token_is_refused(self):
        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_employee_is_refused(self):
        user = get_user_model().objects.create_user(email="cook@example.com", password="test-pass-123")
        self.client.force_authenticate(user)

        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    @patch("status.views.INFRASTRUCTURE_CHECKS", {"database": lambda: OK, "email": lambda: OK})
    def test_monitor_token_grants_access(self):
        response = self.client.get(self.url, HTTP_X_ADMIN_ACCESS_TOKEN="monitor-token")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        body = response.json()
        self.assertEqual(body["status"], "ok")
        self.assertEqual(set(body["features"]), set(FEATURE_CHECKS))

    @patch(
        "status.views.INFRASTRUCTURE_CHECKS",
        {"database": lambda: OK, "email": lambda: {"status": "degraded", "latencyMs": 0}},
    )
    def test_admin_sees_degraded_status(self):
        admin = get_user_model().objects.create_admin(email="owner@example.com", password="test-pass-123")
        self.client.force_authenticate(admin)

        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json()["status"], "degraded")
        self.assertEqual(response.json()["services"]["email"]["status"], "degraded")
