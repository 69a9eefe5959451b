#!/usr/bin/env python
"""
Command-line entry point for the MedFlow backend.  It sets the default
settings module to ``medflow.settings`` and delegates to Django's
management utility, so ``python manage.py serve`` or
``python manage.py seed_demo`` work from the repository root.
"""
import os
import sys


def main() -> None:
    """Run administrative tasks for the Django project."""
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'medflow.settings')
    try:
        from django.core.management import execute_from_command_line  # type: ignore
    except ImportError as exc:
        raise ImportError(
            "Couldn't import Django. Are you sure it's installed and "
            "available on your PYTHONPATH environment variable? Did you "
            "forget to activate a virtual environment?"
        ) from exc
    execute_from_command_line(sys.argv)


if __name__ == '__main__':
    main()
