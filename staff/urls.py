from django.urls import path
from rest_framework.routers import SimpleRouter

from .views import (
    AdminEmployeeViewSet,
    EmployeeLocationView,
    EmployeeMeView,
    EmployeeQuestionnaireView,
    EmployeeRegistrationView,
)

app_name = "staff"

router = SimpleRouter()
router.register(r"admin/employees", AdminEmployeeViewSet, basename="admin-employee")

urlpatterns = [
    path("employees/register/", EmployeeRegistrationView.as_view(), name="employee-register"),
    path("employees/me/", EmployeeMeView.as_view(), name="employee-me"),
    path("employees/me/location/", EmployeeLocationView.as_view(), name="employee-location"),
    path("employees/me/questionnaire/", EmployeeQuestionnaireView.as_view(), name="employee-questionnaire"),
] + router.urls
