from django.urls import path
from rest_framework.routers import SimpleRouter

from .views import (
    AdminAvailabilityViewSet,
    ClockInView,
    ClockOutView,
    EffectiveAvailabilityView,
    EmployeeAvailabilityView,
    EmployeeAvailabilityWithdrawView,
    EmployeeShiftListView,
    OpenShiftClaimView,
    OpenShiftListView,
    ShiftViewSet,
    TimeEntryListView,
)

app_name = "scheduling"

router = SimpleRouter()
router.register(r"schedule/shifts", ShiftViewSet, basename="shift")
router.register(r"admin/availability", AdminAvailabilityViewSet, basename="admin-availability")

urlpatterns = [
    path("schedule/my-shifts/", EmployeeShiftListView.as_view(), name="my-shifts"),
    path("schedule/open-shifts/", OpenShiftListView.as_view(), name="open-shifts"),
    path("schedule/open-shifts/<int:pk>/claim/", OpenShiftClaimView.as_view(), name="open-shift-claim"),
    path("schedule/availability/", EmployeeAvailabilityView.as_view(), name="my-availability"),
    path("schedule/availability/<int:pk>/", EmployeeAvailabilityWithdrawView.as_view(), name="my-availability-withdraw"),
    path("schedule/time/clock-in/", ClockInView.as_view(), name="clock-in"),
    path("schedule/time/clock-out/", ClockOutView.as_view(), name="clock-out"),
    path("schedule/time/entries/", TimeEntryListView.as_view(), name="time-entries"),
    path(
        "admin/availability/effective/<int:employee_id>/",
        EffectiveAvailabilityView.as_view(),
        name="effective-availability",
    ),
] + router.urls
