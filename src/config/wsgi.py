"""WSGI entry point for the product catalogue API.

Exposes the module-level ``application`` callable used by any WSGI server
(``gunicorn config.wsgi``).
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

application = get_wsgi_application()
