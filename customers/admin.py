from django.contrib import admin

from .models import Customer


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "home_location", "loyalty_points", "loyalty_tier", "total_orders", "status", "last_visit")
    list_filter = ("status", "home_location")
    search_fields = ("user__email", "user__first_name", "user__last_name", "user__phone")
    autocomplete_fields = ("user",)
    ordering = ("-created_at",)
