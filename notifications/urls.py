from django.urls import path

from .views import (
    AdminNotificationDetailView,
    AdminNotificationListView,
    AdminNotificationMarkAllReadView,
    AdminNotificationMarkReadView,
    NotificationDetailView,
    NotificationListView,
    NotificationMarkAllReadView,
    NotificationMarkReadView,
)

app_name = "notifications"

urlpatterns = [
    path("admin/notifications/", AdminNotificationListView.as_view(), name="admin-list"),
    path("admin/notifications/read-all/", AdminNotificationMarkAllReadView.as_view(), name="admin-mark-all-read"),
    path("admin/notifications/<int:pk>/", AdminNotificationDetailView.as_view(), name="admin-detail"),
    path("admin/notifications/<int:pk>/read/", AdminNotificationMarkReadView.as_view(), name="admin-mark-read"),
    path("notifications/", NotificationListView.as_view(), name="list"),
    path("notifications/read-all/", NotificationMarkAllReadView.as_view(), name="mark-all-read"),
    path("notifications/<int:pk>/", NotificationDetailView.as_view(), name="detail"),
    path("notifications/<int:pk>/read/", NotificationMarkReadView.as_view(), name="mark-read"),
]
