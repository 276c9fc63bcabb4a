"""Django admin site restricted to active administrator accounts."""

from __future__ import annotations

from django import forms
from django.contrib import admin, messages
from django.contrib.admin.forms import AdminAuthenticationForm
from django.contrib.auth import logout
from django.utils.translation import gettext_lazy as _


def _is_active_admin(user) -> bool:
    if getattr(user, "is_superuser", False):
        return True
    return bool(getattr(user, "is_admin", False) and getattr(user, "can_access_dashboard", False))


class StaffAdminAuthenticationForm(AdminAuthenticationForm):
    """Admin login form that refuses employees, customers and suspended admins."""

    def confirm_login_allowed(self, user):
        super().confirm_login_allowed(user)
        if not _is_active_admin(user):
            raise forms.ValidationError(
                _("Only active administrator accounts can access the admin."),
                code="admin_required",
            )


class StaffAdminSite(admin.AdminSite):
    site_header = "Staff Administration"
    site_title = "Staff Admin"
    index_title = "Administration"
    login_form = StaffAdminAuthenticationForm

    def has_permission(self, request):
        if not super().has_permission(request):
            return False

        if _is_active_admin(request.user):
            return True

        logout(request)
        messages.error(request, _("Your administrator account is not active."))
        return False


previous_admin_site = admin.site
admin_site = StaffAdminSite(name="admin")

# Re-register any ModelAdmin classes already bound to the default site.
for model, model_admin in previous_admin_site._registry.items():
    admin_site.register(model, model_admin.__class__)

admin.site = admin_site
