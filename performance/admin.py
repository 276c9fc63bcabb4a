from django.contrib import admin

from .models import ReviewSchedule


@admin.register(ReviewSchedule)
class ReviewScheduleAdmin(admin.ModelAdmin):
    list_display = ("id", "employee", "review_type", "scheduled_date", "completed", "completed_at")
    list_filter = ("review_type", "completed", "scheduled_date")
    search_fields = ("employee__user__email", "employee__user__first_name", "employee__user__last_name")
    autocomplete_fields = ("employee",)
    ordering = ("scheduled_date",)
