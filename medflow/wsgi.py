"""
WSGI config for the MedFlow project.

It exposes the WSGI callable as a module-level variable named
``application`` for gunicorn, uwsgi or ``runserver``.
"""
import os

from django.core.wsgi import get_wsgi_application  # type: ignore

# Set the default settings module for the 'django' program.
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'medflow.settings')

application = get_wsgi_application()
