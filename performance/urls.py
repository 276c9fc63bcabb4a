from django.urls import path

from .views import (
    CompleteReviewView,
    EmployeeReviewScheduleView,
    PendingReviewListView,
    ReviewCountsView,
    ReviewCycleView,
)

app_name = "performance"

urlpatterns = [
    path("reviews/pending/", PendingReviewListView.as_view(), name="pending-reviews"),
    path("reviews/counts/", ReviewCountsView.as_view(), name="review-counts"),
    path("reviews/<int:pk>/complete/", CompleteReviewView.as_view(), name="complete-review"),
    path("schedules/<int:employee_id>/", EmployeeReviewScheduleView.as_view(), name="employee-schedules"),
    path("review-cycle/", ReviewCycleView.as_view(), name="review-cycle"),
]
