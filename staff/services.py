from __future__ import annotations

import logging

from django.contrib.auth import get_user_model
from django.db import transaction
from django.utils import timezone

from notifications.models import Notification
from notifications.services import notify_admins

from .models import Employee

logger = logging.getLogger(__name__)


class EmployeeTransitionError(RuntimeError):
    """Raised when an onboarding or lifecycle change is not allowed from the current state."""


def employee_display_name(employee: Employee) -> str:
    """Best available label: personal info name, then account name, then email.

    Blank values are skipped the same way as missing ones.
    """

    personal_info = employee.personal_info or {}
    user = employee.user
    first_name = personal_info.get("firstName") or user.first_name or ""
    last_name = personal_info.get("lastName") or user.last_name or ""
    return f"{first_name} {last_name}".strip() or user.email


def _append_lifecycle(employee: Employee, action: str, reason: str | None = None, *, now=None) -> None:
    entry = {"action": action}
    if reason:
        entry["reason"] = reason
    entry["at"] = (now or timezone.now()).isoformat()
    profile = dict(employee.profile_data or {})
    profile["lifecycle"] = [*profile.get("lifecycle", []), entry]
    employee.profile_data = profile


def _require_status(employee: Employee, allowed: tuple[str, ...], action: str) -> None:
    if employee.status not in allowed:
        raise EmployeeTransitionError(
            f"Cannot {action} an employee whose status is '{employee.status}'."
        )


@transaction.atomic
def register_employee(
    *,
    email: str,
    password: str,
    first_name: str = "",
    last_name: str = "",
    phone: str = "",
    position: str = "",
    department: str = "",
    personal_info: dict | None = None,
) -> Employee:
    User = get_user_model()
    user = User.objects.create_user(
        email=email,
        password=password,
        first_name=first_name,
        last_name=last_name,
        phone=phone,
        role=User.Role.EMPLOYEE,
    )
    employee = Employee.objects.create(
        user=user,
        position=position,
        department=department,
        personal_info=personal_info or {},
    )
    name = employee_display_name(employee)
    notify_admins(
        type=Notification.Type.NEW_SIGNUP,
        title="New Employee Signup",
        message=f"{name} has signed up and is waiting for an interview.",
        priority=Notification.Priority.MEDIUM,
        data={"employee_id": employee.pk, "employee_name": name, "email": user.email},
    )
    logger.info("Registered employee %s (%s)", employee.pk, user.email)
    return employee


def select_location(employee: Employee, location: str) -> Employee:
    _require_status(employee, (Employee.Status.PENDING_APPROVAL,), "change the location of")
    if employee.stage != Employee.Stage.INTERVIEW:
        raise EmployeeTransitionError("Location has already been selected.")
    employee.location = location
    employee.stage = Employee.Stage.LOCATION_SELECTED
    employee.save(update_fields=("location", "stage", "updated_at"))
    return employee


def submit_questionnaire(employee: Employee, responses: dict) -> Employee:
    _require_status(employee, (Employee.Status.PENDING_APPROVAL,), "submit a questionnaire for")
    if employee.stage != Employee.Stage.LOCATION_SELECTED:
        raise EmployeeTransitionError("Select a location before completing the questionnaire.")
    employee.questionnaire_responses = responses
    employee.stage = Employee.Stage.QUESTIONNAIRE_COMPLETED
    employee.save(update_fields=("questionnaire_responses", "stage", "updated_at"))

    name = employee_display_name(employee)
    notify_admins(
        type=Notification.Type.ONBOARDING_COMPLETE,
        title="Onboarding Complete",
        message=f"{name} has completed onboarding and is awaiting approval.",
        priority=Notification.Priority.HIGH,
        data={"employee_id": employee.pk, "employee_name": name, "location": employee.location},
    )
    return employee


def approve_employee(employee: Employee, *, approved_by, now=None) -> Employee:
    _require_status(
        employee,
        (Employee.Status.PENDING_APPROVAL, Employee.Status.REJECTED),
        "approve",
    )
    employee.status = Employee.Status.APPROVED
    employee.stage = Employee.Stage.ACTIVE
    employee.approved_at = now or timezone.now()
    employee.approved_by = approved_by
    employee.rejection_reason = ""
    employee.save(
        update_fields=("status", "stage", "approved_at", "approved_by", "rejection_reason", "updated_at")
    )
    logger.info("Employee %s approved by %s", employee.pk, getattr(approved_by, "pk", None))
    return employee


def reject_employee(employee: Employee, *, reason: str, rejected_by, now=None) -> Employee:
    _require_status(employee, (Employee.Status.PENDING_APPROVAL,), "reject")
    if not (reason or "").strip():
        raise EmployeeTransitionError("A rejection reason is required.")
    employee.status = Employee.Status.REJECTED
    employee.rejection_reason = reason.strip()
    employee.approved_by = rejected_by
    employee.approved_at = now or timezone.now()
    employee.save(update_fields=("status", "rejection_reason", "approved_by", "approved_at", "updated_at"))
    logger.info("Employee %s rejected by %s", employee.pk, getattr(rejected_by, "pk", None))
    return employee


def pause_employee(employee: Employee, reason: str | None = None, *, now=None) -> Employee:
    _require_status(employee, (Employee.Status.APPROVED,), "pause")
    employee.status = Employee.Status.PAUSED
    _append_lifecycle(employee, "pause", reason, now=now)
    employee.save(update_fields=("status", "profile_data", "updated_at"))
    return employee


def resume_employee(employee: Employee, *, now=None) -> Employee:
    _require_status(employee, (Employee.Status.PAUSED,), "resume")
    employee.status = Employee.Status.APPROVED
    _append_lifecycle(employee, "resume", now=now)
    employee.save(update_fields=("status", "profile_data", "updated_at"))
    return employee


def deactivate_employee(employee: Employee, reason: str | None = None, *, now=None) -> Employee:
    _require_status(employee, (Employee.Status.APPROVED, Employee.Status.PAUSED), "deactivate")
    employee.status = Employee.Status.INACTIVE
    _append_lifecycle(employee, "deactivate", reason, now=now)
    employee.save(update_fields=("status", "profile_data", "updated_at"))
    return employee


def activate_employee(employee: Employee, *, now=None) -> Employee:
    _require_status(employee, (Employee.Status.INACTIVE, Employee.Status.PAUSED), "activate")
    employee.status = Employee.Status.APPROVED
    employee.stage = Employee.Stage.ACTIVE
    _append_lifecycle(employee, "activate", now=now)
    employee.save(update_fields=("status", "stage", "profile_data", "updated_at"))
    return employee


def employee_statistics() -> dict:
    employees = Employee.objects.all()
    return {
        "total": employees.count(),
        "pending_approval": employees.pending_approval().count(),
        "approved": employees.approved().count(),
        "rejected": employees.filter(status=Employee.Status.REJECTED).count(),
        "paused": employees.filter(status=Employee.Status.PAUSED).count(),
        "inactive": employees.filter(status=Employee.Status.INACTIVE).count(),
        "stages": {str(stage): employees.by_stage(stage).count() for stage in Employee.STAGE_ORDER},
    }
