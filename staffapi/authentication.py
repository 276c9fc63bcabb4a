"""JWT authentication that also enforces the employee account status."""

from __future__ import annotations

import logging

from django.core.exceptions import ObjectDoesNotExist
from rest_framework.exceptions import AuthenticationFailed
from rest_framework_simplejwt.authentication import JWTAuthentication

from accounts.tokens import blacklist_user_tokens

logger = logging.getLogger(__name__)

REVOKED_MESSAGES = {
    "missing": "Employee account not found. You have been logged out.",
    "paused": "Your account has been paused. Please contact your manager. You have been logged out.",
    "inactive": "Your account is inactive. Please contact your manager. You have been logged out.",
}


class EmployeeAccessRevoked(AuthenticationFailed):
    """Raised when a signed-in employee has been paused, deactivated or removed."""

    default_code = "account_revoked"

    def __init__(self, account_status: str | None):
        super().__init__(detail=REVOKED_MESSAGES[account_status or "missing"])
        self.account_status = account_status


class StaffJWTAuthentication(JWTAuthentication):
    def authenticate(self, request):
        result = super().authenticate(request)
        if result is None:
            return None

        user, validated_token = result
        if getattr(user, "is_employee", False):
            self._enforce_employee_status(user)
        return user, validated_token

    def _enforce_employee_status(self, user) -> None:
        try:
            employee = user.employee_profile
        except ObjectDoesNotExist:
            employee = None

        if employee is None:
            account_status = None
        elif employee.is_paused:
            account_status = "paused"
        elif employee.is_inactive:
            account_status = "inactive"
        else:
            return

        blacklist_user_tokens(user)
        logger.info("Revoked sessions for employee user %s (status=%s)", user.pk, account_status or "missing")
        raise EmployeeAccessRevoked(account_status)
