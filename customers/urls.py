from django.urls import path
from rest_framework.routers import SimpleRouter

from .views import AdminCustomerViewSet, CustomerProfileView, CustomerRegistrationView

app_name = "customers"

router = SimpleRouter()
router.register(r"", AdminCustomerViewSet, basename="customer")

urlpatterns = [
    path("register/", CustomerRegistrationView.as_view(), name="register"),
    path("me/", CustomerProfileView.as_view(), name="me"),
] + router.urls
