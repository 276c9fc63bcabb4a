from __future__ import annotations

from datetime import datetime, timedelta
from decimal import Decimal

from django.conf import settings
from django.db import models


class ShiftQuerySet(models.QuerySet):
    def active(self):
        return self.filter(status=Shift.Status.ACTIVE)

    def open(self):
        return self.active().filter(employee__isnull=True)

    def for_week(self, week_start):
        return self.filter(date__gte=week_start, date__lte=week_start + timedelta(days=6))

    def published(self):
        return self.filter(published=True)


class Shift(models.Model):
    class Department(models.TextChoices):
        BOH = "BOH", "Back of house"
        FOH = "FOH", "Front of house"

    class Status(models.TextChoices):
        ACTIVE = "active", "Active"
        CANCELLED = "cancelled", "Cancelled"

    class Origin(models.TextChoices):
        MANUAL = "manual", "Manual"
        OPEN_SHIFT = "open_shift", "Open shift claim"
        TEMPLATE = "template", "Template"

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    employee = models.ForeignKey(
        "staff.Employee",
        related_name="shifts",
        on_delete=models.CASCADE,
        blank=True,
        null=True,
    )
    department = models.CharField(max_length=8, choices=Department.choices)
    role = models.CharField(max_length=128)
    date = models.DateField()
    start_time = models.TimeField()
    end_time = models.TimeField()
    shift_type = models.CharField(max_length=64, blank=True)
    requirements = models.JSONField(blank=True, default=list)
    status = models.CharField(max_length=16, choices=Status.choices, default=Status.ACTIVE)
    created_from = models.CharField(max_length=16, choices=Origin.choices, default=Origin.MANUAL)
    is_conflict = models.BooleanField(default=False)
    published = models.BooleanField(default=False)
    published_at = models.DateTimeField(blank=True, null=True)
    published_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        related_name="published_shifts",
        on_delete=models.SET_NULL,
        blank=True,
        null=True,
    )

    objects = ShiftQuerySet.as_manager()

    class Meta:
        ordering = ("date", "start_time")
        indexes = [
            models.Index(fields=("employee", "date", "status"), name="shift_employee_date_idx"),
            models.Index(fields=("date", "department"), name="shift_date_department_idx"),
        ]

    def __str__(self) -> str:
        return f"Shift #{self.pk} {self.date} {self.start_time}-{self.end_time} ({self.role})"

    @property
    def day_of_week(self) -> str:
        return self.date.strftime("%A").lower()

    @property
    def week_start(self):
        return self.date - timedelta(days=self.date.weekday())

    @property
    def week_end(self):
        return self.week_start + timedelta(days=6)

    @property
    def is_open(self) -> bool:
        return self.employee_id is None and self.status == self.Status.ACTIVE


class AvailabilityRequest(models.Model):
    class Type(models.TextChoices):
        RECURRING = "recurring", "Recurring"
        TEMPORARY = "temporary", "Temporary"

    class Status(models.TextChoices):
        PENDING = "pending", "Pending"
        APPROVED = "approved", "Approved"
        DECLINED = "declined", "Declined"

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    employee = models.ForeignKey(
        "staff.Employee",
        related_name="availability_requests",
        on_delete=models.CASCADE,
    )
    type = models.CharField(max_length=16, choices=Type.choices)
    status = models.CharField(max_length=16, choices=Status.choices, default=Status.PENDING)
    effective_from = models.DateField(blank=True, null=True)
    effective_to = models.DateField(blank=True, null=True)
    availability_data = models.JSONField(
        blank=True,
        default=dict,
        help_text="Per-weekday availability keyed by lower-case day name.",
    )
    approved_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        related_name="reviewed_availability_requests",
        on_delete=models.SET_NULL,
        blank=True,
        null=True,
    )
    approved_at = models.DateTimeField(blank=True, null=True)
    admin_notes = models.TextField(blank=True)

    class Meta:
        ordering = ("-created_at",)
        indexes = [
            models.Index(fields=("employee", "status"), name="availability_employee_idx"),
            models.Index(fields=("type", "status", "effective_to"), name="availability_expiry_idx"),
        ]

    def __str__(self) -> str:
        return f"AvailabilityRequest #{self.pk} ({self.type}, {self.status})"


class TimeEntryQuerySet(models.QuerySet):
    def open(self):
        return self.filter(clock_out_time__isnull=True)

    def for_employee(self, employee):
        return self.filter(employee=employee)

    def between(self, start, end):
        return self.filter(date__gte=start, date__lte=end)


class TimeEntry(models.Model):
    class Status(models.TextChoices):
        PENDING = "pending", "Pending"
        APPROVED = "approved", "Approved"
        REJECTED = "rejected", "Rejected"

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    employee = models.ForeignKey(
        "staff.Employee",
        related_name="time_entries",
        on_delete=models.CASCADE,
    )
    date = models.DateField()
    clock_in_time = models.TimeField()
    clock_out_time = models.TimeField(blank=True, null=True)
    total_hours = models.DecimalField(max_digits=5, decimal_places=2, blank=True, null=True)
    location_info = models.JSONField(blank=True, default=dict)
    status = models.CharField(max_length=16, choices=Status.choices, default=Status.APPROVED)

    objects = TimeEntryQuerySet.as_manager()

    class Meta:
        ordering = ("-date", "-clock_in_time")
        verbose_name_plural = "time entries"
        indexes = [
            models.Index(fields=("employee", "date"), name="timeentry_employee_date_idx"),
        ]

    def __str__(self) -> str:
        return f"TimeEntry #{self.pk} {self.date} {self.clock_in_time}-{self.clock_out_time or 'open'}"

    @property
    def is_open(self) -> bool:
        return self.clock_out_time is None

    def calculate_total_hours(self) -> Decimal | None:
        """Hours between clock-in and clock-out; a clock-out before clock-in is read as past midnight."""

        if self.clock_out_time is None:
            return None
        clock_in = datetime.combine(self.date, self.clock_in_time)
        clock_out = datetime.combine(self.date, self.clock_out_time)
        if clock_out < clock_in:
            clock_out += timedelta(days=1)
        minutes = int((clock_out - clock_in).total_seconds() // 60)
        return (Decimal(minutes) / Decimal(60)).quantize(Decimal("0.01"))
