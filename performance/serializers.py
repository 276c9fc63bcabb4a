from django.utils import timezone
from rest_framework import serializers

from staff.models import Employee
from staff.services import employee_display_name

from .models import ReviewSchedule
from .services import review_type_label


class ReviewScheduleSerializer(serializers.ModelSerializer):
    employee_name = serializers.SerializerMethodField()
    review_type_label = serializers.SerializerMethodField()
    days_overdue = serializers.SerializerMethodField()
    urgency_status = serializers.SerializerMethodField()

    class Meta:
        model = ReviewSchedule
        fields = (
            "id",
            "employee",
            "employee_name",
            "first_shift_date",
            "review_type",
            "review_type_label",
            "scheduled_date",
            "completed",
            "completed_at",
            "days_overdue",
            "urgency_status",
            "created_at",
            "updated_at",
        )
        read_only_fields = fields

    def _today(self):
        return self.context.get("today") or timezone.localdate()

    def get_employee_name(self, obj: ReviewSchedule) -> str | None:
        return employee_display_name(obj.employee) if obj.employee else None

    def get_review_type_label(self, obj: ReviewSchedule) -> str:
        return review_type_label(obj.review_type)

    def get_days_overdue(self, obj: ReviewSchedule) -> int:
        return obj.days_overdue(self._today())

    def get_urgency_status(self, obj: ReviewSchedule) -> str:
        return obj.urgency_status(self._today())


class ReviewCycleSerializer(serializers.Serializer):
    employee_id = serializers.PrimaryKeyRelatedField(queryset=Employee.objects.all(), source="employee")
    first_shift_date = serializers.DateField()
