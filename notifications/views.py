from django.db.models import Q, QuerySet
from django.http import Http404
from django.utils import timezone
from rest_framework import permissions, status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.permissions import IsAdmin

from .models import Notification
from .serializers import NotificationSerializer


def _truthy(value: str | None) -> bool:
    return (value or "").lower() in {"1", "true", "yes"}


class _InboxMixin:
    def get_queryset(self, request: Request) -> QuerySet[Notification]:
        raise NotImplementedError

    def _get_notification(self, request: Request, pk) -> Notification:
        try:
            return self.get_queryset(request).get(pk=pk)
        except Notification.DoesNotExist as exc:
            raise Http404("Notification not found") from exc


class _InboxListView(_InboxMixin, APIView):
    def get(self, request: Request) -> Response:
        queryset = self.get_queryset(request)
        if _truthy(request.query_params.get("unread")):
            queryset = queryset.unread()
        notification_type = request.query_params.get("type")
        if notification_type:
            queryset = queryset.filter(type=notification_type)
        priority = request.query_params.get("priority")
        if priority:
            queryset = queryset.filter(priority=priority)

        serializer = NotificationSerializer(queryset[:200], many=True)
        return Response(
            {
                "results": serializer.data,
                "unread_count": self.get_queryset(request).unread().count(),
            }
        )


class _InboxMarkReadView(_InboxMixin, APIView):
    def post(self, request: Request, *args, **kwargs) -> Response:
        notification = self._get_notification(request, kwargs.get("pk"))
        notification.mark_read()
        serializer = NotificationSerializer(notification)
        return Response(serializer.data, status=status.HTTP_200_OK)


class _InboxMarkAllReadView(_InboxMixin, APIView):
    def post(self, request: Request, *args, **kwargs) -> Response:
        updated = self.get_queryset(request).unread().update(
            is_read=True,
            read_at=timezone.now(),
            updated_at=timezone.now(),
        )
        return Response({"updated": updated}, status=status.HTTP_200_OK)


class _InboxDetailView(_InboxMixin, APIView):
    def delete(self, request: Request, *args, **kwargs) -> Response:
        notification = self._get_notification(request, kwargs.get("pk"))
        notification.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)


class AdminInboxMixin(_InboxMixin):
    permission_classes = (IsAdmin,)

    def get_queryset(self, request: Request) -> QuerySet[Notification]:
        return Notification.objects.for_admins().filter(
            Q(recipient_id__isnull=True) | Q(recipient_id=request.user.pk)
        )


class PersonalInboxMixin(_InboxMixin):
    permission_classes = (permissions.IsAuthenticated,)

    def get_queryset(self, request: Request) -> QuerySet[Notification]:
        return Notification.objects.for_recipient(request.user)


class AdminNotificationListView(AdminInboxMixin, _InboxListView):
    pass


class AdminNotificationMarkReadView(AdminInboxMixin, _InboxMarkReadView):
    pass


class AdminNotificationMarkAllReadView(AdminInboxMixin, _InboxMarkAllReadView):
    pass


class AdminNotificationDetailView(AdminInboxMixin, _InboxDetailView):
    pass


class NotificationListView(PersonalInboxMixin, _InboxListView):
    pass


class NotificationMarkReadView(PersonalInboxMixin, _InboxMarkReadView):
    pass


class NotificationMarkAllReadView(PersonalInboxMixin, _InboxMarkAllReadView):
    pass


class NotificationDetailView(PersonalInboxMixin, _InboxDetailView):
    pass
