"""
ASGI config for the Taskboard project.

Serve with any ASGI server, e.g. `uvicorn config.asgi:application`.
Run `python manage.py migrate_with_retry` before starting the server so the
schema is in place once the database accepts connections.
"""
import os

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')

from django.core.asgi import get_asgi_application

# Initialize Django at import time, not on the first request
application = get_asgi_application()
