from django.shortcuts import get_object_or_404
from django.utils import timezone
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.models import Capability
from accounts.permissions import HasCapability
from staff.models import Employee

from .models import ReviewSchedule
from .serializers import ReviewCycleSerializer, ReviewScheduleSerializer
from .services import complete_review, start_review_cycle

ManageEmployees = HasCapability(Capability.MANAGE_EMPLOYEES)


class PendingReviewListView(APIView):
    permission_classes = (ManageEmployees,)

    def get(self, request, *args, **kwargs):
        today = timezone.localdate()
        queryset = ReviewSchedule.objects.pending().select_related("employee__user")
        urgency = request.query_params.get("urgency")
        if urgency == ReviewSchedule.Urgency.OVERDUE:
            queryset = queryset.overdue(today)
        elif urgency == ReviewSchedule.Urgency.DUE_SOON:
            queryset = queryset.due_soon(today)

        serializer = ReviewScheduleSerializer(queryset.order_by("scheduled_date", "pk"), many=True, context={"today": today})
        return Response(serializer.data)


class ReviewCountsView(APIView):
    permission_classes = (ManageEmployees,)

    def get(self, request, *args, **kwargs):
        today = timezone.localdate()
        overdue = ReviewSchedule.objects.overdue(today).count()
        due_soon = ReviewSchedule.objects.due_soon(today).count()
        return Response({"overdue": overdue, "due_soon": due_soon, "total_urgent": overdue + due_soon})


class EmployeeReviewScheduleView(APIView):
    permission_classes = (ManageEmployees,)

    def get(self, request, *args, **kwargs):
        employee = get_object_or_404(Employee, pk=kwargs["employee_id"])
        queryset = ReviewSchedule.objects.filter(employee=employee).order_by("scheduled_date", "pk")
        return Response(ReviewScheduleSerializer(queryset, many=True).data)


class CompleteReviewView(APIView):
    permission_classes = (ManageEmployees,)

    def post(self, request, *args, **kwargs):
        schedule = get_object_or_404(ReviewSchedule, pk=kwargs["pk"])
        if schedule.completed:
            return Response({"detail": "This review has already been completed."}, status=status.HTTP_400_BAD_REQUEST)

        follow_up = complete_review(schedule)
        payload = {"schedule": ReviewScheduleSerializer(schedule).data}
        if follow_up is not None:
            payload["next_schedule"] = ReviewScheduleSerializer(follow_up).data
        return Response(payload, status=status.HTTP_200_OK)


class ReviewCycleView(APIView):
    permission_classes = (ManageEmployees,)

    def post(self, request, *args, **kwargs):
        serializer = ReviewCycleSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        schedules = start_review_cycle(
            serializer.validated_data["employee"],
            serializer.validated_data["first_shift_date"],
        )
        return Response(ReviewScheduleSerializer(schedules, many=True).data, status=status.HTTP_201_CREATED)
