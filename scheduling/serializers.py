from rest_framework import serializers

from staff.models import Employee
from staff.services import employee_display_name

from .models import AvailabilityRequest, Shift, TimeEntry
from .timeclock import CLOCK_IN_CODE, CLOCK_OUT_CODE


class ShiftSerializer(serializers.ModelSerializer):
    employee = serializers.PrimaryKeyRelatedField(
        queryset=Employee.objects.all(),
        allow_null=True,
        required=False,
    )
    employee_name = serializers.SerializerMethodField()
    day_of_week = serializers.CharField(read_only=True)
    week_start = serializers.DateField(read_only=True)
    week_end = serializers.DateField(read_only=True)

    class Meta:
        model = Shift
        fields = (
            "id",
            "employee",
            "employee_name",
            "department",
            "role",
            "date",
            "day_of_week",
            "week_start",
            "week_end",
            "start_time",
            "end_time",
            "shift_type",
            "requirements",
            "status",
            "created_from",
            "is_conflict",
            "published",
            "published_at",
            "created_at",
            "updated_at",
        )
        read_only_fields = ("id", "is_conflict", "published", "published_at", "created_at", "updated_at")

    def get_employee_name(self, obj: Shift) -> str | None:
        if obj.employee is None:
            return None
        return employee_display_name(obj.employee)

    def validate_requirements(self, value):
        if value in (None, ""):
            return []
        if not isinstance(value, list):
            raise serializers.ValidationError("Requirements must be a list.")
        return value

    def validate(self, attrs):
        start = attrs.get("start_time", getattr(self.instance, "start_time", None))
        end = attrs.get("end_time", getattr(self.instance, "end_time", None))
        if start is not None and end is not None and start == end:
            raise serializers.ValidationError({"end_time": "Shift end time must differ from its start time."})
        return attrs


class PublishWeekSerializer(serializers.Serializer):
    week_start = serializers.DateField()
    department = serializers.ChoiceField(choices=Shift.Department.choices, required=False, allow_blank=True)


class AvailabilityRequestSerializer(serializers.ModelSerializer):
    employee_name = serializers.SerializerMethodField()

    class Meta:
        model = AvailabilityRequest
        fields = (
            "id",
            "employee",
            "employee_name",
            "type",
            "status",
            "effective_from",
            "effective_to",
            "availability_data",
            "approved_by",
            "approved_at",
            "admin_notes",
            "created_at",
            "updated_at",
        )
        read_only_fields = fields

    def get_employee_name(self, obj: AvailabilityRequest) -> str:
        return employee_display_name(obj.employee)


class AvailabilitySubmissionSerializer(serializers.Serializer):
    type = serializers.ChoiceField(choices=AvailabilityRequest.Type.choices)
    availability_data = serializers.DictField()
    effective_from = serializers.DateField(required=False, allow_null=True)
    effective_to = serializers.DateField(required=False, allow_null=True)

    def validate(self, attrs):
        effective_from = attrs.get("effective_from")
        effective_to = attrs.get("effective_to")
        if attrs["type"] == AvailabilityRequest.Type.TEMPORARY and not (effective_from and effective_to):
            raise serializers.ValidationError("Temporary availability requires effective_from and effective_to.")
        if effective_from and effective_to and effective_to < effective_from:
            raise serializers.ValidationError({"effective_to": "Must be on or after effective_from."})
        return attrs


class AvailabilityAssignmentSerializer(AvailabilitySubmissionSerializer):
    employee_id = serializers.PrimaryKeyRelatedField(queryset=Employee.objects.all(), source="employee")


class AvailabilityReviewSerializer(serializers.Serializer):
    status = serializers.ChoiceField(
        choices=(AvailabilityRequest.Status.APPROVED, AvailabilityRequest.Status.DECLINED),
    )
    admin_notes = serializers.CharField(required=False, allow_blank=True, max_length=2000)


class TimeEntrySerializer(serializers.ModelSerializer):
    is_open = serializers.BooleanField(read_only=True)

    class Meta:
        model = TimeEntry
        fields = (
            "id",
            "employee",
            "date",
            "clock_in_time",
            "clock_out_time",
            "total_hours",
            "is_open",
            "location_info",
            "status",
            "created_at",
        )
        read_only_fields = fields


class ClockEventSerializer(serializers.Serializer):
    """Scanned QR payload plus the device's local date and time."""

    expected_code = CLOCK_IN_CODE

    qr_code_data = serializers.CharField()
    client_date = serializers.DateField(required=False)
    client_time = serializers.TimeField(required=False)

    def validate_qr_code_data(self, value):
        if value != self.expected_code:
            raise serializers.ValidationError("Invalid QR code.")
        return value


class ClockInSerializer(ClockEventSerializer):
    location_info = serializers.DictField(required=False)


class ClockOutSerializer(ClockEventSerializer):
    expected_code = CLOCK_OUT_CODE
