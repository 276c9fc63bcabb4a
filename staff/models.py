from __future__ import annotations

from django.conf import settings
from django.db import models


class EmployeeQuerySet(models.QuerySet):
    def pending_approval(self):
        return self.filter(status=Employee.Status.PENDING_APPROVAL)

    def approved(self):
        return self.filter(status=Employee.Status.APPROVED)

    def by_stage(self, stage: str):
        return self.filter(stage=stage)


class Employee(models.Model):
    class Stage(models.TextChoices):
        INTERVIEW = "interview", "Interview Scheduled"
        LOCATION_SELECTED = "location_selected", "Location Selected"
        QUESTIONNAIRE_COMPLETED = "questionnaire_completed", "Questionnaire Completed"
        ACTIVE = "active", "Active Employee"

    class Status(models.TextChoices):
        PENDING_APPROVAL = "pending_approval", "Pending approval"
        APPROVED = "approved", "Approved"
        REJECTED = "rejected", "Rejected"
        PAUSED = "paused", "Paused"
        INACTIVE = "inactive", "Inactive"

    STAGE_ORDER = (
        Stage.INTERVIEW,
        Stage.LOCATION_SELECTED,
        Stage.QUESTIONNAIRE_COMPLETED,
        Stage.ACTIVE,
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        related_name="employee_profile",
        on_delete=models.CASCADE,
    )
    position = models.CharField(max_length=128, blank=True)
    department = models.CharField(max_length=128, blank=True)
    location = models.CharField(max_length=255, blank=True)
    stage = models.CharField(max_length=32, choices=Stage.choices, default=Stage.INTERVIEW)
    status = models.CharField(max_length=32, choices=Status.choices, default=Status.PENDING_APPROVAL)
    personal_info = models.JSONField(blank=True, default=dict)
    questionnaire_responses = models.JSONField(blank=True, default=dict)
    profile_data = models.JSONField(blank=True, default=dict)
    assignments = models.JSONField(blank=True, default=dict)
    approved_at = models.DateTimeField(blank=True, null=True)
    approved_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        related_name="approved_employees",
        on_delete=models.SET_NULL,
        blank=True,
        null=True,
    )
    rejection_reason = models.TextField(blank=True)
    first_shift_date = models.DateField(blank=True, null=True)

    objects = EmployeeQuerySet.as_manager()

    class Meta:
        ordering = ("-created_at",)
        indexes = [
            models.Index(fields=("status", "stage"), name="employee_status_stage_idx"),
        ]

    def __str__(self) -> str:
        return f"Employee<{self.user.email}>"

    @property
    def email(self) -> str:
        return self.user.email

    @property
    def is_approved(self) -> bool:
        return self.status == self.Status.APPROVED

    @property
    def is_pending_approval(self) -> bool:
        return self.status == self.Status.PENDING_APPROVAL

    @property
    def is_paused(self) -> bool:
        return self.status == self.Status.PAUSED

    @property
    def is_inactive(self) -> bool:
        return self.status == self.Status.INACTIVE

    @property
    def can_access_dashboard(self) -> bool:
        return self.is_approved and self.stage == self.Stage.ACTIVE

    @property
    def lifecycle(self) -> list[dict]:
        return list((self.profile_data or {}).get("lifecycle", []))

    @property
    def status_reason(self) -> str | None:
        if self.status == self.Status.REJECTED and self.rejection_reason:
            return self.rejection_reason
        action = {"paused": "pause", "inactive": "deactivate"}.get(str(self.status))
        if action is None:
            return None
        for entry in reversed(self.lifecycle):
            if entry.get("action") == action and entry.get("reason"):
                return entry["reason"]
        return None

    @property
    def next_stage(self) -> str | None:
        try:
            index = self.STAGE_ORDER.index(self.stage)
        except ValueError:
            return None
        if index + 1 < len(self.STAGE_ORDER):
            return self.STAGE_ORDER[index + 1]
        return None

    def onboarding_progress(self) -> dict:
        try:
            completed = self.STAGE_ORDER.index(self.stage) + 1
        except ValueError:
            completed = 0
        total = len(self.STAGE_ORDER)
        return {
            "current_stage": self.stage,
            "current_stage_name": self.get_stage_display(),
            "completed_stages": completed,
            "total_stages": total,
            "progress_percentage": round(completed / total * 100, 1),
            "status": self.status,
            "can_proceed": self.is_pending_approval,
            "is_completed": self.can_access_dashboard,
        }
