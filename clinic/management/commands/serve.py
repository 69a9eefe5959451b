"""
Development entry point: verify the database answers, bring the schema
up to date, then listen on PORT with Django's development server.

Production deployments serve ``medflow.wsgi:application`` from a WSGI
server and run ``migrate`` as a separate release step.
"""
from django.conf import settings
from django.core.management import call_command
from django.core.management.base import BaseCommand, CommandError
from django.db import DatabaseError, connections


class Command(BaseCommand):
    help = (
        "Development only: check the database, apply migrations and run Django's "
        "development server on $PORT. Use a WSGI server with medflow.wsgi in production."
    )

    def add_arguments(self, parser):
        parser.add_argument('--host', default='0.0.0.0')
        parser.add_argument('--port', type=int, default=settings.PORT)
        parser.add_argument('--skip-migrate', action='store_true', help='Do not apply migrations first.')

    def handle(self, *args, **opts):
        try:
            with connections['default'].cursor() as c:
                c.execute('SELECT 1')
        except DatabaseError as exc:
            raise CommandError(f'Database connection failed: {exc}') from exc
        self.stdout.write(self.style.SUCCESS('Database connection ok'))

        if not opts['skip_migrate']:
            call_command('migrate', interactive=False, verbosity=opts['verbosity'])

        addrport = f"{opts['host']}:{opts['port']}"
        if not settings.DEBUG:
            self.stderr.write(self.style.WARNING('runserver is a development server; do not expose it in production'))
        self.stdout.write(self.style.SUCCESS(f'Serving on {addrport}'))
        call_command('runserver', addrport, use_reloader=False)
