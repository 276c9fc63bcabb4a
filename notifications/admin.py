from django.contrib import admin

from .models import Notification


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ("id", "type", "title", "recipient_type", "recipient_id", "priority", "is_read", "created_at")
    list_filter = ("type", "recipient_type", "priority", "is_read", "created_at")
    search_fields = ("title", "message")
    ordering = ("-created_at",)
