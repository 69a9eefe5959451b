import pytest
from django.core.cache import cache
from rest_framework.test import APIClient

from clinic.models import Patient, User
from clinic.services.auth import issue_token

PASSWORD = 'Password123'


@pytest.fixture(autouse=True)
def _clear_cache():
    # throttle counters live in the default cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def user(db):
    return User.objects.create_user(email='staff@medflow.local', password=PASSWORD, full_name='Staff Member')


@pytest.fixture
def anon_client():
    return APIClient()


@pytest.fixture
def client(user):
    c = APIClient()
    c.credentials(HTTP_AUTHORIZATION=f'Bearer {issue_token(user)}')
    return c


@pytest.fixture
def patient(db):
    return Patient.objects.create(
        full_name='John Smith', mrn='MRN-900001', dob='1980-05-17', gender='Male',
        phone='555-0100', email='john@example.com', address='1 Main St',
    )
