import pytest
import requests
from rest_framework.test import RequestsClient

from clinic.models import Patient
from medflow_client import ApiClient, ApiError, AuthSession, BillingStore, ResourceStore

pytestmark = pytest.mark.django_db


@pytest.fixture
def api():
    return ApiClient('http://testserver', session=RequestsClient())


@pytest.fixture
def session(api, user):
    s = AuthSession(api)
    assert s.sign_in(user.email, 'Password123') is not None
    return s


def test_sign_up_sign_out_and_restore(api):
    s = AuthSession(api)
    user = s.sign_up('Grace Hopper', 'grace@example.com', 'Cobol1959')
    assert user['email'] == 'grace@example.com'
    token = s.token
    assert s.is_authenticated

    s.sign_out()
    assert not s.is_authenticated
    assert s.restore(token)['id'] == user['id']


def test_failed_sign_in_keeps_anonymous(api, user):
    s = AuthSession(api)
    assert s.sign_in(user.email, 'wrong') is None
    assert s.error == 'Invalid credentials'
    assert not s.is_authenticated


def test_restore_with_rejected_token(api):
    s = AuthSession(api)
    assert s.restore('garbage') is None
    assert s.token is None
    assert s.error == 'Unauthorized'


def test_update_user(session):
    assert session.update_user(full_name='Renamed')['fullName'] == 'Renamed'
    assert session.user['fullName'] == 'Renamed'


def test_store_patches_local_items(api, session, patient):
    store = ResourceStore.named(api, 'patients')
    assert [p['id'] for p in store.fetch()] == [patient.pk]
    assert store.pagination['total'] == 1

    created = store.add({
        'fullName': 'Jane Doe', 'dob': '1990-01-01', 'gender': 'Female',
        'phone': '555', 'email': 'jane@example.com', 'address': '-',
    })
    assert created['mrn'].startswith('MRN-')
    assert len(store.items) == 2

    store.update(patient.pk, {'phone': '555-2222'})
    assert next(p for p in store.items if p['id'] == patient.pk)['phone'] == '555-2222'

    assert store.delete(created['id']) is True
    assert [p['id'] for p in store.items] == [patient.pk]


def test_store_failure_leaves_items_untouched(api, session, patient):
    store = ResourceStore.named(api, 'patients')
    store.fetch()
    before = list(store.items)
    assert store.add({'fullName': 'x'}) is None
    assert store.error == 'Validation failed'
    assert store.items == before


def test_unauthenticated_store_reports_error(api):
    store = ResourceStore.named(api, 'appointments')
    assert store.fetch() is None
    assert store.error == 'Unauthorized'


def test_billing_store_applies_invoice_summary(api, session, patient):
    billing = BillingStore(api)
    inv = billing.add_invoice({
        'patientId': patient.pk, 'invoiceDate': '2026-01-15', 'dueDate': '2026-02-15',
        'subtotal': 100, 'taxAmount': 0, 'discountAmount': 0,
    })
    assert inv['status'] == 'draft'

    payment = billing.add_payment({
        'invoiceId': inv['id'], 'patientId': patient.pk, 'amount': 40,
        'paymentMethod': 'cash', 'paymentDate': '2026-01-20',
    })
    local = billing.invoices.items[0]
    assert local['paidAmount'] == 40
    assert local['status'] == 'partially_paid'

    assert billing.delete_payment(payment['id'])
    assert billing.invoices.items[0]['paidAmount'] == 0
    assert billing.invoices.items[0]['status'] == 'pending'
    assert billing.payments.items == []


def test_transport_errors_become_api_errors():
    class Broken(requests.Session):
        def request(self, *args, **kwargs):
            raise requests.ConnectionError('refused')

    api = ApiClient('http://nowhere', session=Broken())
    with pytest.raises(ApiError) as exc:
        api.get('/api/health')
    assert exc.value.status == 0
