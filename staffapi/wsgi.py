"""WSGI config for the staffapi project."""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'staffapi.settings')

application = get_wsgi_application()
