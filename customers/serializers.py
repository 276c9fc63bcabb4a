from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password
from django.db import transaction
from rest_framework import serializers

from .models import Customer


class CustomerSerializer(serializers.ModelSerializer):
    email = serializers.EmailField(source="user.email", read_only=True)
    first_name = serializers.CharField(source="user.first_name", required=False, allow_blank=True)
    last_name = serializers.CharField(source="user.last_name", required=False, allow_blank=True)
    phone = serializers.CharField(source="user.phone", required=False, allow_blank=True)
    loyalty_tier = serializers.CharField(read_only=True)

    class Meta:
        model = Customer
        fields = (
            "id",
            "email",
            "first_name",
            "last_name",
            "phone",
            "home_location",
            "loyalty_points",
            "loyalty_tier",
            "total_orders",
            "total_spent",
            "preferences",
            "status",
            "last_visit",
            "created_at",
        )
        read_only_fields = (
            "id",
            "email",
            "loyalty_points",
            "loyalty_tier",
            "total_orders",
            "total_spent",
            "status",
            "last_visit",
            "created_at",
        )

    def update(self, instance, validated_data):
        user_data = validated_data.pop("user", {})
        user = instance.user
        for field, value in user_data.items():
            setattr(user, field, value)
        if user_data:
            user.save(update_fields=list(user_data))
        return super().update(instance, validated_data)


class CustomerRegistrationSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, min_length=8)
    first_name = serializers.CharField(max_length=150)
    last_name = serializers.CharField(max_length=150, required=False, allow_blank=True)
    phone = serializers.CharField(max_length=32, required=False, allow_blank=True)
    home_location = serializers.CharField(max_length=255, required=False, allow_blank=True)

    def validate_email(self, value: str) -> str:
        email = value.strip().lower()
        if get_user_model().objects.filter(email__iexact=email).exists():
            raise serializers.ValidationError("An account with this email already exists.")
        return email

    def validate_password(self, value: str) -> str:
        validate_password(value)
        return value

    @transaction.atomic
    def create(self, validated_data):
        User = get_user_model()
        home_location = validated_data.pop("home_location", "")
        password = validated_data.pop("password")
        user = User.objects.create_user(password=password, role=User.Role.CUSTOMER, **validated_data)
        return Customer.objects.create(user=user, home_location=home_location)


class LoyaltyAdjustmentSerializer(serializers.Serializer):
    points = serializers.IntegerField()
    reason = serializers.CharField(max_length=255, required=False, allow_blank=True)

    def validate_points(self, value: int) -> int:
        if value == 0:
            raise serializers.ValidationError("Points must be a non-zero integer.")
        return value
