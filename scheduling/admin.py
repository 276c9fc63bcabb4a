from django.contrib import admin

from .models import AvailabilityRequest, Shift, TimeEntry


@admin.register(Shift)
class ShiftAdmin(admin.ModelAdmin):
    list_display = ("id", "date", "start_time", "end_time", "department", "role", "employee", "status", "created_from", "is_conflict", "published")
    list_filter = ("status", "department", "created_from", "is_conflict", "published", "date")
    search_fields = ("role", "employee__user__email", "employee__user__first_name", "employee__user__last_name")
    autocomplete_fields = ("employee",)
    readonly_fields = ("is_conflict",)
    ordering = ("-date", "start_time")


@admin.register(AvailabilityRequest)
class AvailabilityRequestAdmin(admin.ModelAdmin):
    list_display = ("id", "employee", "type", "status", "effective_from", "effective_to", "approved_at", "created_at")
    list_filter = ("type", "status")
    search_fields = ("employee__user__email", "admin_notes")
    autocomplete_fields = ("employee",)
    ordering = ("-created_at",)


@admin.register(TimeEntry)
class TimeEntryAdmin(admin.ModelAdmin):
    list_display = ("id", "employee", "date", "clock_in_time", "clock_out_time", "total_hours", "status")
    list_filter = ("status", "date")
    search_fields = ("employee__user__email",)
    autocomplete_fields = ("employee",)
    readonly_fields = ("total_hours",)
    ordering = ("-date", "-clock_in_time")
