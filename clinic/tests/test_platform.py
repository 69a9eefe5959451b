import io

import pytest
from django.core.management import call_command
from django.db import OperationalError, connections
from django.test import override_settings
from django.urls import reverse
from rest_framework.test import APIClient

from clinic.exceptions import _flatten
from clinic.throttling import ApiRateThrottle

pytestmark = pytest.mark.django_db


def test_health_is_public():
    r = APIClient().get(reverse('health'))
    assert r.status_code == 200
    assert r.data['ok'] is True
    assert r.data['timestamp']


def test_health_reports_database_outage(monkeypatch):
    def unreachable(*args, **kwargs):
        raise OperationalError('connection refused')

    monkeypatch.setattr(connections['default'], 'cursor', unreachable)
    r = APIClient().get(reverse('health'))
    assert r.status_code == 503
    assert r.data['ok'] is False
    assert r.data['timestamp']


def test_health_ignores_bad_token():
    c = APIClient()
    c.credentials(HTTP_AUTHORIZATION='Bearer junk')
    assert c.get(reverse('health')).status_code == 200


def test_trailing_slash_is_not_routed(client):
    assert client.get('/api/patients/').status_code == 404


def test_method_not_allowed_uses_envelope(client):
    r = client.delete(reverse('patients_list'))
    assert r.status_code == 405
    assert r.data['ok'] is False


def test_flatten_nested_errors():
    detail = {'items': [{}, {'quantity': ['too small']}], 'non_field_errors': ['bad']}
    assert _flatten(detail) == [
        {'field': 'items[1].quantity', 'message': 'too small'},
        {'field': 'non_field_errors', 'message': 'bad'},
    ]


@pytest.mark.parametrize('rate,expected', [
    ('100/min', (100, 60)),
    ('5/15min', (5, 900)),
    ('10/hour', (10, 3600)),
    ('2/s', (2, 1)),
])
def test_throttle_rate_parsing(rate, expected):
    assert ApiRateThrottle().parse_rate(rate) == expected


@override_settings(ENV='prod')
def test_unhandled_errors_are_masked_in_prod(client, monkeypatch):
    from clinic.views import patients as patient_views

    def boom(*args, **kwargs):
        raise RuntimeError('secret detail')

    monkeypatch.setattr(patient_views, 'search_patients', boom)
    r = client.get(reverse('patients_search'), {'q': 'abc'})
    assert r.status_code == 500
    assert r.data['error'] == {'code': 'server_error', 'message': 'Internal server error'}


def test_serve_is_marked_development_only(monkeypatch):
    from clinic.management.commands import serve

    calls = []
    monkeypatch.setattr(serve, 'call_command', lambda *args, **kwargs: calls.append((args, kwargs)))
    cmd = serve.Command()
    assert cmd.help.startswith('Development only')

    err = io.StringIO()
    call_command(cmd, '--skip-migrate', '--port', '4000', stdout=io.StringIO(), stderr=err)
    assert calls == [(('runserver', '0.0.0.0:4000'), {'use_reloader': False})]
    assert 'development server' in err.getvalue()
