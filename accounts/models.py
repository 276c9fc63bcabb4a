from __future__ import annotations

from django.contrib.auth.base_user import AbstractBaseUser, BaseUserManager
from django.contrib.auth.models import PermissionsMixin
from django.db import models
from django.utils import timezone


class Capability(models.TextChoices):
    FULL_ACCESS = "full_access", "Full access"
    MANAGE_ADMINS = "manage_admins", "Manage admins"
    MANAGE_MANAGERS = "manage_managers", "Manage managers"
    MANAGE_EMPLOYEES = "manage_employees", "Manage employees"
    MANAGE_CUSTOMERS = "manage_customers", "Manage customers"
    MANAGE_SCHEDULES = "manage_schedules", "Manage schedules"
    MANAGE_REPORTS = "manage_reports", "Manage reports"
    MANAGE_NOTIFICATIONS = "manage_notifications", "Manage notifications"
    VIEW_ANALYTICS = "view_analytics", "View analytics"


class UserManager(BaseUserManager):
    def create_user(self, email: str, password: str | None = None, **extra_fields):
        if not email:
            raise ValueError("Email must be provided")
        if not password:
            raise ValueError("Password must be provided")
        email = self.normalize_email(email)
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_admin(self, email: str, password: str | None = None, *, admin_role: str = "admin", **extra_fields):
        extra_fields["role"] = User.Role.ADMIN
        extra_fields.setdefault("admin_status", User.AdminStatus.ACTIVE)
        extra_fields.setdefault("permissions", default_capabilities(admin_role))
        return self.create_user(email, password, admin_role=admin_role, **extra_fields)

    def create_superuser(self, email: str, password: str | None = None, **extra_fields):
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("is_active", True)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True.")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True.")

        return self.create_admin(email, password, admin_role=User.AdminRole.OWNER, **extra_fields)

    def admins(self):
        return self.filter(role=User.Role.ADMIN)

    def active_admins(self):
        return self.admins().filter(admin_status=User.AdminStatus.ACTIVE, is_active=True)


class User(AbstractBaseUser, PermissionsMixin):
    class Role(models.TextChoices):
        ADMIN = "admin", "Admin"
        EMPLOYEE = "employee", "Employee"
        CUSTOMER = "customer", "Customer"

    class AdminRole(models.TextChoices):
        OWNER = "owner", "Owner"
        ADMIN = "admin", "Admin"
        MANAGER = "manager", "Manager"
        HIRING_MANAGER = "hiring_manager", "Hiring manager"
        EXPO = "expo", "Expo"

    class AdminStatus(models.TextChoices):
        ACTIVE = "active", "Active"
        INACTIVE = "inactive", "Inactive"
        SUSPENDED = "suspended", "Suspended"

    email = models.EmailField(unique=True)
    first_name = models.CharField(max_length=150, blank=True)
    last_name = models.CharField(max_length=150, blank=True)
    phone = models.CharField(max_length=32, blank=True)
    role = models.CharField(max_length=16, choices=Role.choices, default=Role.EMPLOYEE)
    admin_role = models.CharField(max_length=32, choices=AdminRole.choices, blank=True)
    admin_status = models.CharField(
        max_length=16,
        choices=AdminStatus.choices,
        default=AdminStatus.ACTIVE,
    )
    permissions = models.JSONField(blank=True, default=list, help_text="Capability names granted to admins.")

    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)
    date_joined = models.DateTimeField(default=timezone.now)

    objects = UserManager()

    EMAIL_FIELD = "email"
    USERNAME_FIELD = "email"
    REQUIRED_FIELDS: list[str] = ["first_name", "last_name"]

    class Meta:
        indexes = [
            models.Index(fields=("role", "admin_status"), name="user_role_status_idx"),
        ]

    def __str__(self) -> str:
        return self.email

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def is_admin(self) -> bool:
        return self.role == self.Role.ADMIN

    @property
    def is_employee(self) -> bool:
        return self.role == self.Role.EMPLOYEE

    @property
    def is_customer(self) -> bool:
        return self.role == self.Role.CUSTOMER

    @property
    def can_access_dashboard(self) -> bool:
        return self.is_admin and self.admin_status == self.AdminStatus.ACTIVE

    @property
    def capabilities(self) -> list[str]:
        return list(self.permissions or [])

    def has_capability(self, name: str) -> bool:
        granted = self.capabilities
        return Capability.FULL_ACCESS in granted or name in granted

    def grant_capability(self, name: str) -> None:
        granted = self.capabilities
        if name not in granted:
            granted.append(name)
            self.permissions = granted
            self.save(update_fields=("permissions",))

    def revoke_capability(self, name: str) -> None:
        granted = [item for item in self.capabilities if item != name]
        if granted != self.capabilities:
            self.permissions = granted
            self.save(update_fields=("permissions",))


DEFAULT_ROLE_CAPABILITIES: dict[str, tuple[str, ...]] = {
    User.AdminRole.OWNER.value: (Capability.FULL_ACCESS,),
    User.AdminRole.ADMIN.value: (Capability.FULL_ACCESS,),
    User.AdminRole.MANAGER.value: (
        Capability.MANAGE_EMPLOYEES,
        Capability.MANAGE_SCHEDULES,
        Capability.VIEW_ANALYTICS,
    ),
    User.AdminRole.HIRING_MANAGER.value: (
        Capability.MANAGE_EMPLOYEES,
        Capability.MANAGE_SCHEDULES,
    ),
    User.AdminRole.EXPO.value: (),
}


def default_capabilities(admin_role: str) -> list[str]:
    return [str(item) for item in DEFAULT_ROLE_CAPABILITIES.get(str(admin_role), ())]
