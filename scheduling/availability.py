from __future__ import annotations

import logging
from datetime import date, timedelta

from django.db import transaction
from django.utils import timezone

from notifications.models import Notification
from notifications.services import notify_admins, notify_user
from staff.services import employee_display_name
from staffapi.output import emit

from .models import AvailabilityRequest

logger = logging.getLogger(__name__)

ADMIN_OVERRIDE_NOTE = "Overridden by new admin assignment"


class AvailabilityRequestError(RuntimeError):
    """Raised when an availability request cannot be submitted or reviewed."""


def cleanup_expired_availability_requests(*, today: date | None = None, stdout=None) -> int:
    """Delete approved temporary requests whose end date is before ``today``.

    Requests without an end date, still running, pending or declined, or
    recurring are left alone. Returns the number of rows removed.
    """

    today = today or timezone.localdate()
    emit(stdout, "Starting cleanup of expired temporary availability requests...")

    expired = list(
        AvailabilityRequest.objects.filter(
            type=AvailabilityRequest.Type.TEMPORARY,
            status=AvailabilityRequest.Status.APPROVED,
            effective_to__isnull=False,
            effective_to__lt=today,
        )
        .select_related("employee__user")
        .order_by("pk")
    )

    if not expired:
        emit(stdout, "No expired temporary availability requests found.")
        return 0

    for request in expired:
        emit(
            stdout,
            f"Deleting expired request ID {request.pk} for employee {request.employee.user.email} "
            f"(expired: {request.effective_to.isoformat()})",
        )
        request.delete()

    count = len(expired)
    logger.info("Removed %s expired temporary availability requests", count)
    emit(stdout, f"Successfully cleaned up {count} expired temporary availability requests.")
    return count


def _describe(request: AvailabilityRequest) -> dict:
    payload = {
        "type": request.type,
        "availability_data": request.availability_data,
        "request_id": request.pk,
    }
    if request.type == AvailabilityRequest.Type.TEMPORARY:
        payload["effective_from"] = request.effective_from
        payload["effective_to"] = request.effective_to
    return payload


def effective_availability(employee, on_date: date | None = None) -> dict | None:
    """Availability in force on ``on_date``: a covering temporary override, else the latest recurring one."""

    on_date = on_date or timezone.localdate()
    approved = AvailabilityRequest.objects.filter(
        employee=employee,
        status=AvailabilityRequest.Status.APPROVED,
    )
    temporary = (
        approved.filter(
            type=AvailabilityRequest.Type.TEMPORARY,
            effective_from__lte=on_date,
            effective_to__gte=on_date,
        )
        .order_by("-created_at", "-pk")
        .first()
    )
    if temporary is not None:
        return _describe(temporary)

    recurring = approved.filter(type=AvailabilityRequest.Type.RECURRING).order_by("-created_at", "-pk").first()
    if recurring is not None:
        return _describe(recurring)
    return None


def effective_availability_range(employee, start: date, end: date) -> dict[str, dict | None]:
    result: dict[str, dict | None] = {}
    current = start
    while current <= end:
        result[current.isoformat()] = effective_availability(employee, current)
        current += timedelta(days=1)
    return result


def is_available_on(employee, on_date: date) -> bool:
    availability = effective_availability(employee, on_date)
    if not availability:
        return False
    day = (availability["availability_data"] or {}).get(on_date.strftime("%A").lower())
    if not day:
        return False
    return bool(day.get("enabled")) and day.get("status") == "available"


@transaction.atomic
def submit_availability_request(employee, *, type: str, availability_data: dict, effective_from=None, effective_to=None) -> AvailabilityRequest:
    """Employee-initiated request; only one may be pending at a time."""

    if AvailabilityRequest.objects.filter(employee=employee, status=AvailabilityRequest.Status.PENDING).exists():
        raise AvailabilityRequestError(
            "You already have a pending availability request. Please wait for it to be approved or "
            "declined before submitting a new one."
        )

    request = AvailabilityRequest.objects.create(
        employee=employee,
        type=type,
        status=AvailabilityRequest.Status.PENDING,
        availability_data=availability_data,
        effective_from=effective_from,
        effective_to=effective_to,
    )

    name = employee_display_name(employee)
    starts = effective_from.isoformat() if effective_from else "now"
    notify_admins(
        type=Notification.Type.AVAILABILITY_REQUEST,
        title="New Availability Request",
        message=f"{name} submitted a new availability request effective from {starts}.",
        priority=Notification.Priority.MEDIUM,
        data={
            "request_id": request.pk,
            "employee_id": employee.pk,
            "employee_name": name,
            "effective_from": effective_from.isoformat() if effective_from else None,
        },
    )
    return request


@transaction.atomic
def assign_availability(employee, *, assigned_by, type: str, availability_data: dict, effective_from=None, effective_to=None, now=None) -> AvailabilityRequest:
    """Admin-set availability, approved immediately.

    Any pending request from the employee is declined, and a new recurring
    assignment replaces the previously approved recurring one.
    """

    now = now or timezone.now()
    pending = AvailabilityRequest.objects.filter(employee=employee, status=AvailabilityRequest.Status.PENDING)
    pending.update(
        status=AvailabilityRequest.Status.DECLINED,
        admin_notes=ADMIN_OVERRIDE_NOTE,
        approved_by=assigned_by,
        approved_at=now,
        updated_at=now,
    )

    if type == AvailabilityRequest.Type.RECURRING:
        AvailabilityRequest.objects.filter(
            employee=employee,
            type=AvailabilityRequest.Type.RECURRING,
            status=AvailabilityRequest.Status.APPROVED,
        ).delete()

    request = AvailabilityRequest.objects.create(
        employee=employee,
        type=type,
        status=AvailabilityRequest.Status.APPROVED,
        availability_data=availability_data,
        effective_from=effective_from,
        effective_to=effective_to,
        approved_by=assigned_by,
        approved_at=now,
    )

    notify_user(
        employee.user,
        type=Notification.Type.AVAILABILITY_STATUS_UPDATE,
        title="Availability Updated",
        message="An admin has updated your availability settings.",
        data={"request_id": request.pk},
    )
    return request


def review_availability_request(request: AvailabilityRequest, *, status: str, reviewed_by, admin_notes: str = "", now=None) -> AvailabilityRequest:
    status = str(status)
    if request.status != AvailabilityRequest.Status.PENDING:
        raise AvailabilityRequestError("Only pending availability requests can be reviewed.")
    if status not in (AvailabilityRequest.Status.APPROVED, AvailabilityRequest.Status.DECLINED):
        raise AvailabilityRequestError(f"Unsupported review status '{status}'.")

    request.status = status
    request.admin_notes = admin_notes or ""
    request.approved_by = reviewed_by
    request.approved_at = now or timezone.now()
    request.save(update_fields=("status", "admin_notes", "approved_by", "approved_at", "updated_at"))

    starts = request.effective_from.isoformat() if request.effective_from else "now"
    message = f"Your availability request from {starts} has been {status}."
    if status == AvailabilityRequest.Status.DECLINED and request.admin_notes:
        message += f" Reason: {request.admin_notes}"

    notify_user(
        request.employee.user,
        type=Notification.Type.AVAILABILITY_STATUS_UPDATE,
        title=f"Availability Request {str(status).capitalize()}",
        message=message,
        priority=Notification.Priority.MEDIUM,
        data={"request_id": request.pk, "status": status, "admin_notes": request.admin_notes},
    )
    logger.info("Availability request %s %s by %s", request.pk, status, getattr(reviewed_by, "pk", None))
    return request
