"""URL configuration for the staffapi project."""
from django.conf import settings
from django.urls import include, path

from .admin_site import admin_site

urlpatterns = [
    path(settings.ADMIN_URL, admin_site.urls),
    path('api/auth/', include('accounts.urls', namespace='accounts')),
    path('api/', include('staff.urls', namespace='staff')),
    path('api/', include('scheduling.urls', namespace='scheduling')),
    path('api/performance/', include('performance.urls', namespace='performance')),
    path('api/', include('notifications.urls', namespace='notifications')),
    path('api/customers/', include('customers.urls', namespace='customers')),
    path('api/health/', include('status.urls', namespace='status')),
]
