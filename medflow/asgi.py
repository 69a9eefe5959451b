"""
ASGI config for the MedFlow project.

Only HTTP is served; every endpoint is a plain request/response handler.
"""
import os

from django.core.asgi import get_asgi_application  # type: ignore

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "medflow.settings")

application = get_asgi_application()
