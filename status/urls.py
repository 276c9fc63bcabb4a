from django.urls import path

from .views import HealthFullView, health_simple

app_name = "status"

urlpatterns = [
    path("", health_simple, name="health-simple"),
    path("full/", HealthFullView.as_view(), name="health-full"),
]
