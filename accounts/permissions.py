"""Access checks guarding the admin, employee and customer API surfaces."""

from __future__ import annotations

from django.core.exceptions import ObjectDoesNotExist
from rest_framework import permissions
from rest_framework.exceptions import NotAuthenticated, PermissionDenied


def _require_authenticated(request) -> None:
    user = request.user
    if not user or not user.is_authenticated:
        raise NotAuthenticated("Authentication required")


class IsAdmin(permissions.BasePermission):
    """Admin principal whose account status is active."""

    def has_permission(self, request, view) -> bool:
        _require_authenticated(request)
        user = request.user
        if not getattr(user, "is_admin", False):
            raise PermissionDenied("Admin access required")
        if not user.can_access_dashboard:
            raise PermissionDenied("Admin account is not active")
        return True


class _CapabilityPermission(IsAdmin):
    capability: str = ""

    def has_permission(self, request, view) -> bool:
        super().has_permission(request, view)
        user = request.user
        if not user.has_capability(self.capability):
            raise PermissionDenied(
                {
                    "detail": f"Access denied. Required permission: {self.capability}",
                    "required_permission": self.capability,
                    "user_role": user.admin_role,
                    "user_permissions": user.capabilities,
                }
            )
        return True


def HasCapability(name: str) -> type[permissions.BasePermission]:
    """Build a permission class requiring an active admin holding ``name``."""

    capability = str(name)
    return type(f"HasCapability_{capability}", (_CapabilityPermission,), {"capability": capability})


class IsEmployee(permissions.BasePermission):
    message = "Employee access required"

    def has_permission(self, request, view) -> bool:
        _require_authenticated(request)
        return bool(getattr(request.user, "is_employee", False))


class IsActiveEmployee(IsEmployee):
    """Employee who finished onboarding and was approved."""

    message = "Your account must be approved before you can access this resource."

    def has_permission(self, request, view) -> bool:
        if not super().has_permission(request, view):
            return False
        try:
            employee = request.user.employee_profile
        except ObjectDoesNotExist:
            return False
        return employee.can_access_dashboard


class IsCustomer(permissions.BasePermission):
    message = "Customer access required"

    def has_permission(self, request, view) -> bool:
        _require_authenticated(request)
        return bool(getattr(request.user, "is_customer", False))
