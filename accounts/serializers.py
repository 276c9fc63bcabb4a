from django.contrib.auth import authenticate
from rest_framework import serializers

from .models import User


PROFILE_FIELDS = (
    "id",
    "email",
    "first_name",
    "last_name",
    "phone",
    "role",
    "admin_role",
    "admin_status",
    "permissions",
    "date_joined",
)


class UserSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = PROFILE_FIELDS
        read_only_fields = fields


class ProfileSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = PROFILE_FIELDS
        read_only_fields = ("id", "email", "role", "admin_role", "admin_status", "permissions", "date_joined")


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)

    def validate(self, attrs):
        email = attrs.get("email")
        password = attrs.get("password")

        user = authenticate(self.context.get("request"), email=email, password=password)
        if not user:
            raise serializers.ValidationError("Invalid email or password.")

        attrs["user"] = user
        return attrs
