from decimal import Decimal

import pytest
from django.urls import reverse

from clinic.models import InsuranceProvider, Invoice, Patient

pytestmark = pytest.mark.django_db


def make_invoice(client, patient, **overrides):
    payload = {
        'patientId': patient.pk,
        'invoiceDate': '2026-01-15',
        'dueDate': '2026-02-15',
        'subtotal': 100,
        'taxAmount': 10,
        'discountAmount': 5,
        'status': 'paid',
        'items': [
            {'description': 'Consultation', 'quantity': 1, 'unitPrice': 60},
            {'description': 'Lab panel', 'code': 'LAB1', 'quantity': 2, 'unitPrice': 20},
        ],
    }
    payload.update(overrides)
    return client.post(reverse('invoices_list'), payload, format='json')


def pay(client, invoice, amount, **overrides):
    payload = {
        'invoiceId': invoice['id'], 'patientId': invoice['patientId'], 'amount': amount,
        'paymentMethod': 'cash', 'paymentDate': '2026-01-20',
    }
    payload.update(overrides)
    return client.post(reverse('payments_list'), payload, format='json')


def test_create_invoice_derives_amounts(client, user, patient):
    r = make_invoice(client, patient)
    assert r.status_code == 201
    inv = r.data
    assert inv['totalAmount'] == Decimal('105.00')
    assert inv['balanceAmount'] == Decimal('105.00')
    assert inv['paidAmount'] == 0
    assert inv['status'] == 'draft'
    assert inv['invoiceNumber'].startswith('INV-')
    assert inv['userId'] == str(user.pk)
    assert [i['totalPrice'] for i in inv['items']] == [Decimal('60.00'), Decimal('40.00')]
    assert inv['payments'] == []


def test_discount_cannot_exceed_subtotal_and_tax(client, patient):
    r = make_invoice(client, patient, discountAmount=111)
    assert r.status_code == 400
    assert r.data['error']['fields'][0]['field'] == 'discountAmount'


def test_negative_amount_rejected(client, patient):
    assert make_invoice(client, patient, subtotal=-1).status_code == 400


def test_unknown_patient_is_400(client):
    r = client.post(reverse('invoices_list'), {
        'patientId': 987654, 'invoiceDate': '2026-01-15', 'dueDate': '2026-02-15',
        'subtotal': 1, 'taxAmount': 0, 'discountAmount': 0,
    }, format='json')
    assert r.status_code == 400


def test_payments_drive_balance_and_status(client, patient):
    inv = make_invoice(client, patient).data

    first = pay(client, inv, 50)
    assert first.status_code == 201
    assert first.data['invoice']['paidAmount'] == Decimal('50.00')
    assert first.data['invoice']['balanceAmount'] == Decimal('55.00')
    assert first.data['invoice']['status'] == 'partially_paid'

    second = pay(client, inv, '55.00')
    assert second.data['invoice']['balanceAmount'] == 0
    assert second.data['invoice']['status'] == 'paid'

    detail = client.get(reverse('invoice_detail', args=[inv['id']])).data
    assert len(detail['payments']) == 2
    assert detail['paidAmount'] == Decimal('105.00')

    client.delete(reverse('payment_detail', args=[second.data['id']]))
    stored = Invoice.objects.get(pk=inv['id'])
    assert stored.paid_cents == 5000
    assert stored.balance_cents == 5500
    assert stored.status == 'partially_paid'

    client.delete(reverse('payment_detail', args=[first.data['id']]))
    stored.refresh_from_db()
    assert stored.paid_cents == 0
    assert stored.status == 'pending'


def test_payment_update_recomputes(client, patient):
    inv = make_invoice(client, patient).data
    p = pay(client, inv, 10).data
    r = client.put(reverse('payment_detail', args=[p['id']]), {'amount': 105}, format='json')
    assert r.status_code == 200
    assert r.data['invoice']['status'] == 'paid'


def test_payment_patient_must_match_invoice(client, patient):
    inv = make_invoice(client, patient).data
    other = Patient.objects.create(
        full_name='Other', mrn='MRN-900003', dob='1980-01-01', gender='Male',
        phone='1', email='o@example.com', address='-',
    )
    r = pay(client, inv, 10, patientId=other.pk)
    assert r.status_code == 400


def test_payment_invoice_is_immutable(client, patient):
    a = make_invoice(client, patient).data
    b = make_invoice(client, patient).data
    p = pay(client, a, 10).data
    r = client.put(reverse('payment_detail', args=[p['id']]), {'invoiceId': b['id']}, format='json')
    assert r.status_code == 400


def test_invoice_update_recomputes_total(client, patient):
    inv = make_invoice(client, patient).data
    pay(client, inv, 5)
    r = client.put(reverse('invoice_detail', args=[inv['id']]), {
        'subtotal': 200, 'items': [{'description': 'Surgery', 'quantity': 1, 'unitPrice': 200}],
    }, format='json')
    assert r.status_code == 200
    assert r.data['totalAmount'] == Decimal('205.00')
    assert r.data['balanceAmount'] == Decimal('200.00')
    assert r.data['status'] == 'partially_paid'
    assert [i['description'] for i in r.data['items']] == ['Surgery']


def test_invoice_list_filters_by_status(client, patient):
    make_invoice(client, patient)
    r = client.get(reverse('invoices_list'), {'status': 'draft', 'patientId': patient.pk})
    assert r.data['pagination']['total'] == 1
    assert 'items' in r.data['data'][0]


def test_providers_and_claims(client, user, patient):
    prov = client.post(reverse('providers_list'), {'name': 'Blue Shield', 'code': 'BSH'}, format='json')
    assert prov.status_code == 201
    assert prov.data['active'] is True
    InsuranceProvider.objects.create(name='Old Co', code='OLD', active=False)
    assert client.get(reverse('providers_list'), {'active': 'true'}).data['pagination']['total'] == 1
    assert client.get(reverse('providers_list'), {'active': 'maybe'}).status_code == 400

    inv = make_invoice(client, patient).data
    claim = client.post(reverse('claims_list'), {
        'patientId': patient.pk, 'invoiceId': inv['id'], 'insuranceId': prov.data['id'],
        'claimNumber': 'CLM-1', 'submissionDate': '2026-01-21', 'serviceDate': '2026-01-15',
        'claimedAmount': '80.50', 'status': 'submitted',
    }, format='json')
    assert claim.status_code == 201
    assert claim.data['userId'] == str(user.pk)
    assert claim.data['claimedAmount'] == Decimal('80.50')
    assert claim.data['approvedAmount'] is None

    r = client.delete(reverse('provider_detail', args=[prov.data['id']]))
    assert r.status_code == 409
