from django.contrib import admin

from .models import Employee


@admin.register(Employee)
class EmployeeAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "position", "department", "location", "stage", "status", "first_shift_date", "created_at")
    list_filter = ("status", "stage", "department", "location")
    search_fields = ("user__email", "user__first_name", "user__last_name", "position")
    autocomplete_fields = ("user", "approved_by")
    ordering = ("-created_at",)
