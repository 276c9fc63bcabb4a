import logging
from datetime import date, timedelta

from django.shortcuts import get_object_or_404
from django.utils import timezone
from django.utils.dateparse import parse_date
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.models import Capability
from accounts.permissions import HasCapability, IsActiveEmployee
from staff.models import Employee

from .availability import (
    AvailabilityRequestError,
    assign_availability,
    effective_availability,
    effective_availability_range,
    review_availability_request,
    submit_availability_request,
)
from .models import AvailabilityRequest, Shift, TimeEntry
from .serializers import (
    AvailabilityAssignmentSerializer,
    AvailabilityRequestSerializer,
    AvailabilityReviewSerializer,
    AvailabilitySubmissionSerializer,
    ClockInSerializer,
    ClockOutSerializer,
    PublishWeekSerializer,
    ShiftSerializer,
    TimeEntrySerializer,
)
from .shifts import ShiftClaimError, claim_open_shift, publish_week, week_bounds
from .timeclock import TimeClockError, clock_in, clock_out, current_entry

logger = logging.getLogger(__name__)

ManageSchedules = HasCapability(Capability.MANAGE_SCHEDULES)


def _date_param(request, name: str, *, default: date | None = None, required: bool = False) -> date | None:
    raw = request.query_params.get(name)
    if not raw:
        if required:
            raise ValidationError({name: "This query parameter is required (YYYY-MM-DD)."})
        return default
    parsed = parse_date(raw)
    if parsed is None:
        raise ValidationError({name: "Use the YYYY-MM-DD format."})
    return parsed


def _own_employee(request) -> Employee:
    return get_object_or_404(Employee.objects.select_related("user"), user=request.user)


class ShiftViewSet(viewsets.ModelViewSet):
    serializer_class = ShiftSerializer
    permission_classes = (ManageSchedules,)

    def get_queryset(self):
        queryset = Shift.objects.select_related("employee__user")
        if self.action != "list":
            return queryset

        week_start, _ = week_bounds(_date_param(self.request, "week_start", default=timezone.localdate()))
        queryset = queryset.for_week(week_start)
        params = self.request.query_params
        if params.get("department"):
            queryset = queryset.filter(department=params["department"])
        if params.get("employee"):
            queryset = queryset.filter(employee_id=params["employee"])
        if params.get("status"):
            queryset = queryset.filter(status=params["status"])
        return queryset.order_by("date", "start_time")

    def perform_create(self, serializer):
        shift = serializer.save()
        logger.info("Shift %s created by %s", shift.pk, self.request.user.pk)

    @action(detail=False, methods=["post"])
    def publish(self, request):
        serializer = PublishWeekSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = publish_week(
            serializer.validated_data["week_start"],
            published_by=request.user,
            department=serializer.validated_data.get("department") or None,
        )
        return Response(result, status=status.HTTP_200_OK)

    @action(detail=False, methods=["get"], url_path="open")
    def open_shifts(self, request):
        queryset = Shift.objects.open().filter(date__gte=timezone.localdate()).order_by("date", "start_time")
        return Response(ShiftSerializer(queryset, many=True).data)


class EmployeeShiftListView(APIView):
    permission_classes = (IsActiveEmployee,)

    def get(self, request, *args, **kwargs):
        employee = _own_employee(request)
        week_start, week_end = week_bounds(_date_param(request, "week_start", default=timezone.localdate()))
        shifts = (
            Shift.objects.active()
            .published()
            .for_week(week_start)
            .filter(employee=employee)
            .order_by("date", "start_time")
        )
        return Response(
            {
                "week_start": week_start.isoformat(),
                "week_end": week_end.isoformat(),
                "shifts": ShiftSerializer(shifts, many=True).data,
            }
        )


class OpenShiftListView(APIView):
    permission_classes = (IsActiveEmployee,)

    def get(self, request, *args, **kwargs):
        queryset = Shift.objects.open().filter(date__gte=timezone.localdate())
        employee = _own_employee(request)
        if employee.department:
            queryset = queryset.filter(department=employee.department)
        return Response(ShiftSerializer(queryset.order_by("date", "start_time"), many=True).data)


class OpenShiftClaimView(APIView):
    permission_classes = (IsActiveEmployee,)

    def post(self, request, *args, **kwargs):
        employee = _own_employee(request)
        try:
            shift = claim_open_shift(kwargs["pk"], employee)
        except ShiftClaimError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_409_CONFLICT)
        return Response(ShiftSerializer(shift).data, status=status.HTTP_200_OK)


class EmployeeAvailabilityView(APIView):
    permission_classes = (IsActiveEmployee,)

    def get(self, request, *args, **kwargs):
        employee = _own_employee(request)
        requests = AvailabilityRequest.objects.filter(employee=employee).select_related("employee__user")
        return Response(
            {
                "effective": effective_availability(employee),
                "requests": AvailabilityRequestSerializer(requests, many=True).data,
            }
        )

    def post(self, request, *args, **kwargs):
        serializer = AvailabilitySubmissionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        employee = _own_employee(request)
        try:
            availability_request = submit_availability_request(employee, **serializer.validated_data)
        except AvailabilityRequestError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(AvailabilityRequestSerializer(availability_request).data, status=status.HTTP_201_CREATED)


class EmployeeAvailabilityWithdrawView(APIView):
    permission_classes = (IsActiveEmployee,)

    def delete(self, request, *args, **kwargs):
        employee = _own_employee(request)
        availability_request = get_object_or_404(AvailabilityRequest, pk=kwargs["pk"], employee=employee)
        if availability_request.status != AvailabilityRequest.Status.PENDING:
            return Response(
                {"detail": "Only pending availability requests can be withdrawn."},
                status=status.HTTP_400_BAD_REQUEST,
            )
        availability_request.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)


class AdminAvailabilityViewSet(viewsets.ReadOnlyModelViewSet):
    serializer_class = AvailabilityRequestSerializer
    permission_classes = (ManageSchedules,)

    def get_queryset(self):
        queryset = AvailabilityRequest.objects.select_related("employee__user", "approved_by")
        params = self.request.query_params
        if params.get("status"):
            queryset = queryset.filter(status=params["status"])
        if params.get("employee"):
            queryset = queryset.filter(employee_id=params["employee"])
        if params.get("type"):
            queryset = queryset.filter(type=params["type"])
        return queryset.order_by("-created_at")

    def create(self, request, *args, **kwargs):
        serializer = AvailabilityAssignmentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        availability_request = assign_availability(assigned_by=request.user, **serializer.validated_data)
        return Response(AvailabilityRequestSerializer(availability_request).data, status=status.HTTP_201_CREATED)

    def destroy(self, request, *args, **kwargs):
        self.get_object().delete()
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=["post"])
    def review(self, request, pk=None):
        availability_request = self.get_object()
        serializer = AvailabilityReviewSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            review_availability_request(
                availability_request,
                status=serializer.validated_data["status"],
                reviewed_by=request.user,
                admin_notes=serializer.validated_data.get("admin_notes", ""),
            )
        except AvailabilityRequestError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(AvailabilityRequestSerializer(availability_request).data)


class EffectiveAvailabilityView(APIView):
    permission_classes = (ManageSchedules,)

    def get(self, request, *args, **kwargs):
        employee = get_object_or_404(Employee, pk=kwargs["employee_id"])
        start = _date_param(request, "start")
        end = _date_param(request, "end")
        if start and end:
            if end < start:
                raise ValidationError({"end": "Must be on or after start."})
            if (end - start).days > 62:
                raise ValidationError({"end": "Ranges are limited to 62 days."})
            return Response({"employee_id": employee.pk, "range": effective_availability_range(employee, start, end)})

        on_date = _date_param(request, "date", default=timezone.localdate())
        return Response(
            {
                "employee_id": employee.pk,
                "date": on_date.isoformat(),
                "availability": effective_availability(employee, on_date),
            }
        )


class ClockInView(APIView):
    permission_classes = (IsActiveEmployee,)

    def post(self, request, *args, **kwargs):
        serializer = ClockInSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        employee = _own_employee(request)
        try:
            entry = clock_in(
                employee,
                on_date=data.get("client_date"),
                at_time=data.get("client_time"),
                location_info=data.get("location_info"),
            )
        except TimeClockError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(TimeEntrySerializer(entry).data, status=status.HTTP_201_CREATED)


class ClockOutView(APIView):
    permission_classes = (IsActiveEmployee,)

    def post(self, request, *args, **kwargs):
        serializer = ClockOutSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        employee = _own_employee(request)
        try:
            entry = clock_out(employee, on_date=data.get("client_date"), at_time=data.get("client_time"))
        except TimeClockError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(TimeEntrySerializer(entry).data)


class TimeEntryListView(APIView):
    permission_classes = (IsActiveEmployee,)

    def get(self, request, *args, **kwargs):
        employee = _own_employee(request)
        today = timezone.localdate()
        start = _date_param(request, "start_date", default=today - timedelta(days=13))
        end = _date_param(request, "end_date", default=today)
        entries = TimeEntry.objects.for_employee(employee).between(start, end)
        open_entry = current_entry(employee)
        return Response(
            {
                "clocked_in": open_entry is not None,
                "current_entry": TimeEntrySerializer(open_entry).data if open_entry else None,
                "entries": TimeEntrySerializer(entries, many=True).data,
            }
        )
