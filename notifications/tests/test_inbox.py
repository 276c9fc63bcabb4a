from __future__ import annotations

from datetime import timedelta

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from notifications.models import Notification
from notifications.services import create_notification, has_recent_unread, notify_admins, notify_user


class NotificationServiceTests(TestCase):
    def test_has_recent_unread_matches_schedule_and_window(self):
        now = timezone.now()
        create_notification(
            type=Notification.Type.PERFORMANCE_REVIEW_OVERDUE,
            title="Performance Review Overdue",
            data={"schedule_id": 7},
            created_at=now - timedelta(hours=2),
        )

        self.assertTrue(has_recent_unread(type=Notification.Type.PERFORMANCE_REVIEW_OVERDUE, schedule_id=7, now=now))
        self.assertFalse(has_recent_unread(type=Notification.Type.PERFORMANCE_REVIEW_OVERDUE, schedule_id=8, now=now))
        self.assertFalse(has_recent_unread(type=Notification.Type.PERFORMANCE_REVIEW_DUE_SOON, schedule_id=7, now=now))
        self.assertFalse(
            has_recent_unread(type=Notification.Type.PERFORMANCE_REVIEW_OVERDUE, schedule_id=7, now=now, hours=1)
        )

    def test_mark_read_sets_timestamp_once(self):
        notification = notify_admins(type=Notification.Type.GENERIC, title="Hello")

        notification.mark_read()
        first_read_at = notification.read_at
        notification.mark_read()

        self.assertTrue(notification.is_read)
        self.assertEqual(notification.read_at, first_read_at)


class AdminInboxTests(APITestCase):
    def setUp(self):
        super().setUp()
        User = get_user_model()
        self.admin = User.objects.create_admin(email="owner@example.com", password="test-pass-123")
        self.employee_user = User.objects.create_user(email="cook@example.com", password="test-pass-123")
        self.client.force_authenticate(self.admin)

        self.broadcast = notify_admins(
            type=Notification.Type.NEW_SIGNUP,
            title="New Employee Signup",
            priority=Notification.Priority.HIGH,
        )
        self.personal = notify_user(self.employee_user, type=Notification.Type.GENERIC, title="For the cook")

    def test_lists_admin_notifications_only(self):
        response = self.client.get(reverse("notifications:admin-list"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        body = response.json()
        self.assertEqual([row["id"] for row in body["results"]], [self.broadcast.pk])
        self.assertEqual(body["unread_count"], 1)

    def test_filters(self):
        notify_admins(type=Notification.Type.SHIFT_CLAIMED, title="Claimed", priority=Notification.Priority.LOW)

        response = self.client.get(reverse("notifications:admin-list"), {"priority": "low"})
        self.assertEqual(len(response.json()["results"]), 1)

        response = self.client.get(reverse("notifications:admin-list"), {"type": "new_signup"})
        self.assertEqual(response.json()["results"][0]["id"], self.broadcast.pk)

    def test_mark_read_and_unread_filter(self):
        response = self.client.post(reverse("notifications:admin-mark-read", kwargs={"pk": self.broadcast.pk}))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.json()["is_read"])

        response = self.client.get(reverse("notifications:admin-list"), {"unread": "true"})
        self.assertEqual(response.json()["results"], [])

    def test_cannot_touch_someone_elses_notification(self):
        response = self.client.delete(reverse("notifications:admin-detail", kwargs={"pk": self.personal.pk}))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_mark_all_read(self):
        notify_admins(type=Notification.Type.GENERIC, title="Another")

        response = self.client.post(reverse("notifications:admin-mark-all-read"))

        self.assertEqual(response.json(), {"updated": 2})
        self.assertFalse(Notification.objects.for_admins().unread().exists())

    def test_employee_cannot_open_admin_inbox(self):
        self.client.force_authenticate(self.employee_user)

        response = self.client.get(reverse("notifications:admin-list"))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)


class PersonalInboxTests(APITestCase):
    def setUp(self):
        super().setUp()
        User = get_user_model()
        self.user = User.objects.create_user(email="cook@example.com", password="test-pass-123")
        self.other = User.objects.create_user(email="host@example.com", password="test-pass-123")
        self.mine = notify_user(self.user, type=Notification.Type.GENERIC, title="Mine")
        self.theirs = notify_user(self.other, type=Notification.Type.GENERIC, title="Theirs")
        self.client.force_authenticate(self.user)

    def test_lists_own_notifications(self):
        response = self.client.get(reverse("notifications:list"))

        self.assertEqual([row["id"] for row in response.json()["results"]], [self.mine.pk])

    def test_delete_own_notification(self):
        response = self.client.delete(reverse("notifications:detail", kwargs={"pk": self.mine.pk}))
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)

        response = self.client.delete(reverse("notifications:detail", kwargs={"pk": self.theirs.pk}))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
