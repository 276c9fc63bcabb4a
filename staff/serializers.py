from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password
from rest_framework import serializers

from .models import Employee
from .services import employee_display_name


class EmployeeSerializer(serializers.ModelSerializer):
    email = serializers.EmailField(source="user.email", read_only=True)
    first_name = serializers.CharField(source="user.first_name", read_only=True)
    last_name = serializers.CharField(source="user.last_name", read_only=True)
    phone = serializers.CharField(source="user.phone", read_only=True)
    display_name = serializers.SerializerMethodField()
    status_reason = serializers.CharField(read_only=True)
    can_access_dashboard = serializers.BooleanField(read_only=True)
    onboarding = serializers.SerializerMethodField()

    class Meta:
        model = Employee
        fields = (
            "id",
            "email",
            "first_name",
            "last_name",
            "phone",
            "display_name",
            "position",
            "department",
            "location",
            "stage",
            "status",
            "status_reason",
            "can_access_dashboard",
            "personal_info",
            "questionnaire_responses",
            "assignments",
            "approved_at",
            "approved_by",
            "rejection_reason",
            "first_shift_date",
            "onboarding",
            "created_at",
            "updated_at",
        )
        read_only_fields = fields

    def get_display_name(self, obj: Employee) -> str:
        return employee_display_name(obj)

    def get_onboarding(self, obj: Employee) -> dict:
        return obj.onboarding_progress()


class EmployeeRegistrationSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, min_length=8)
    first_name = serializers.CharField(max_length=150)
    last_name = serializers.CharField(max_length=150, required=False, allow_blank=True)
    phone = serializers.CharField(max_length=32, required=False, allow_blank=True)
    position = serializers.CharField(max_length=128, required=False, allow_blank=True)
    department = serializers.CharField(max_length=128, required=False, allow_blank=True)
    personal_info = serializers.DictField(required=False)

    def validate_email(self, value: str) -> str:
        email = value.strip().lower()
        if get_user_model().objects.filter(email__iexact=email).exists():
            raise serializers.ValidationError("An account with this email already exists.")
        return email

    def validate_password(self, value: str) -> str:
        validate_password(value)
        return value


class LocationSerializer(serializers.Serializer):
    location = serializers.CharField(max_length=255)


class QuestionnaireSerializer(serializers.Serializer):
    responses = serializers.DictField()

    def validate_responses(self, value: dict) -> dict:
        if not value:
            raise serializers.ValidationError("Questionnaire responses cannot be empty.")
        return value


class LifecycleReasonSerializer(serializers.Serializer):
    reason = serializers.CharField(max_length=500, required=False, allow_blank=True, trim_whitespace=True)


class RejectionSerializer(serializers.Serializer):
    reason = serializers.CharField(max_length=1000, trim_whitespace=True)
