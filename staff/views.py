import logging

from django.db.models import Q
from django.shortcuts import get_object_or_404
from rest_framework import mixins, permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.throttling import ScopedRateThrottle
from rest_framework.views import APIView

from accounts.models import Capability
from accounts.permissions import HasCapability, IsEmployee
from accounts.tokens import build_auth_payload

from .emails import ApprovalEmail, ApprovalEmailError, send_approval_email
from .models import Employee
from .serializers import (
    EmployeeRegistrationSerializer,
    EmployeeSerializer,
    LifecycleReasonSerializer,
    LocationSerializer,
    QuestionnaireSerializer,
    RejectionSerializer,
)
from .services import (
    EmployeeTransitionError,
    activate_employee,
    approve_employee,
    deactivate_employee,
    employee_display_name,
    employee_statistics,
    pause_employee,
    register_employee,
    reject_employee,
    resume_employee,
    select_location,
    submit_questionnaire,
)

logger = logging.getLogger(__name__)


class EmployeeRegistrationView(APIView):
    permission_classes = (permissions.AllowAny,)
    authentication_classes = ()
    throttle_classes = (ScopedRateThrottle,)
    throttle_scope = "registration"

    def post(self, request, *args, **kwargs):
        serializer = EmployeeRegistrationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        employee = register_employee(**serializer.validated_data)
        payload = build_auth_payload(employee.user, employee=EmployeeSerializer(employee).data)
        return Response(payload, status=status.HTTP_201_CREATED)


class _OwnEmployeeMixin:
    permission_classes = (IsEmployee,)

    def get_employee(self, request) -> Employee:
        return get_object_or_404(Employee.objects.select_related("user"), user=request.user)


class EmployeeMeView(_OwnEmployeeMixin, APIView):
    def get(self, request, *args, **kwargs):
        return Response(EmployeeSerializer(self.get_employee(request)).data)


class EmployeeLocationView(_OwnEmployeeMixin, APIView):
    def post(self, request, *args, **kwargs):
        serializer = LocationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        employee = self.get_employee(request)
        try:
            select_location(employee, serializer.validated_data["location"])
        except EmployeeTransitionError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(EmployeeSerializer(employee).data, status=status.HTTP_200_OK)


class EmployeeQuestionnaireView(_OwnEmployeeMixin, APIView):
    def post(self, request, *args, **kwargs):
        serializer = QuestionnaireSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        employee = self.get_employee(request)
        try:
            submit_questionnaire(employee, serializer.validated_data["responses"])
        except EmployeeTransitionError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(EmployeeSerializer(employee).data, status=status.HTTP_200_OK)


class AdminEmployeeViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = EmployeeSerializer
    permission_classes = (HasCapability(Capability.MANAGE_EMPLOYEES),)

    def get_queryset(self):
        queryset = Employee.objects.select_related("user", "approved_by")
        params = self.request.query_params
        if params.get("status"):
            queryset = queryset.filter(status=params["status"])
        if params.get("stage"):
            queryset = queryset.filter(stage=params["stage"])
        search = (params.get("search") or "").strip()
        if search:
            queryset = queryset.filter(
                Q(user__email__icontains=search)
                | Q(user__first_name__icontains=search)
                | Q(user__last_name__icontains=search)
                | Q(position__icontains=search)
            )
        return queryset.order_by("-created_at")

    def perform_destroy(self, instance):
        user = instance.user
        logger.info("Deleting employee %s (%s) at the request of %s", instance.pk, user.email, self.request.user.pk)
        user.delete()

    def _transition(self, func, *args, **kwargs):
        employee = self.get_object()
        try:
            func(employee, *args, **kwargs)
        except EmployeeTransitionError as exc:
            return None, Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return employee, None

    @action(detail=False, methods=["get"])
    def pending(self, request):
        queryset = Employee.objects.pending_approval().select_related("user").order_by("created_at")
        return Response(EmployeeSerializer(queryset, many=True).data)

    @action(detail=False, methods=["get"])
    def statistics(self, request):
        return Response(employee_statistics())

    @action(detail=True, methods=["post"])
    def approve(self, request, pk=None):
        employee, error = self._transition(approve_employee, approved_by=request.user)
        if error is not None:
            return error

        email_sent = True
        email_error = None
        try:
            send_approval_email(
                ApprovalEmail(
                    recipient=employee.user.email,
                    recipient_name=employee_display_name(employee),
                    position=employee.position,
                    location=employee.location,
                )
            )
        except ApprovalEmailError as exc:
            logger.warning("Approval email for employee %s failed: %s", employee.pk, exc)
            email_sent = False
            email_error = str(exc)

        payload = {"employee": EmployeeSerializer(employee).data, "email_sent": email_sent}
        if email_error:
            payload["email_error"] = email_error
        return Response(payload, status=status.HTTP_200_OK)

    @action(detail=True, methods=["post"])
    def reject(self, request, pk=None):
        serializer = RejectionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        employee, error = self._transition(
            reject_employee,
            reason=serializer.validated_data["reason"],
            rejected_by=request.user,
        )
        return error or Response(EmployeeSerializer(employee).data)

    @action(detail=True, methods=["post"])
    def pause(self, request, pk=None):
        serializer = LifecycleReasonSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        employee, error = self._transition(pause_employee, serializer.validated_data.get("reason") or None)
        return error or Response(EmployeeSerializer(employee).data)

    @action(detail=True, methods=["post"])
    def resume(self, request, pk=None):
        employee, error = self._transition(resume_employee)
        return error or Response(EmployeeSerializer(employee).data)

    @action(detail=True, methods=["post"])
    def deactivate(self, request, pk=None):
        serializer = LifecycleReasonSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        employee, error = self._transition(deactivate_employee, serializer.validated_data.get("reason") or None)
        return error or Response(EmployeeSerializer(employee).data)

    @action(detail=True, methods=["post"])
    def activate(self, request, pk=None):
        employee, error = self._transition(activate_employee)
        return error or Response(EmployeeSerializer(employee).data)
