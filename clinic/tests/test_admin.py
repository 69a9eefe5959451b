import pytest
from django.contrib import admin

from clinic.models import Invoice, Payment

pytestmark = pytest.mark.django_db


@pytest.fixture
def invoice(user, patient):
    return Invoice.objects.create(
        user=user, patient=patient, invoice_number='INV-7', invoice_date='2026-01-01', due_date='2026-02-01',
        subtotal_cents=10000, tax_cents=0, discount_cents=0, total_cents=10000, balance_cents=10000,
        status='pending',
    )


def test_admin_payment_writes_refresh_invoice(rf, invoice, patient):
    payment_admin = admin.site._registry[Payment]
    request = rf.post('/admin/')

    payment = Payment(invoice=invoice, patient=patient, amount_cents=4000, payment_method='cash', payment_date='2026-01-05')
    payment_admin.save_model(request, payment, None, False)
    invoice.refresh_from_db()
    assert (invoice.paid_cents, invoice.balance_cents, invoice.status) == (4000, 6000, 'partially_paid')

    payment.amount_cents = 10000
    payment_admin.save_model(request, payment, None, True)
    invoice.refresh_from_db()
    assert (invoice.paid_cents, invoice.balance_cents, invoice.status) == (10000, 0, 'paid')

    payment_admin.delete_model(request, payment)
    invoice.refresh_from_db()
    assert (invoice.paid_cents, invoice.balance_cents, invoice.status) == (0, 10000, 'pending')


def test_admin_bulk_payment_delete_refreshes_invoice(rf, invoice, patient):
    for amount in (1000, 2000):
        Payment.objects.create(invoice=invoice, patient=patient, amount_cents=amount, payment_method='cash', payment_date='2026-01-05')
    admin.site._registry[Payment].delete_queryset(rf.post('/admin/'), Payment.objects.all())
    invoice.refresh_from_db()
    assert invoice.paid_cents == 0
    assert not Payment.objects.exists()


def test_admin_invoice_save_derives_amounts(rf, invoice, patient):
    Payment.objects.create(invoice=invoice, patient=patient, amount_cents=2500, payment_method='cash', payment_date='2026-01-05')
    invoice_admin = admin.site._registry[Invoice]
    assert {'total_cents', 'paid_cents', 'balance_cents'} <= set(invoice_admin.get_readonly_fields(rf.get('/admin/')))

    invoice.subtotal_cents = 20000
    invoice_admin.save_model(rf.post('/admin/'), invoice, None, True)
    invoice.refresh_from_db()
    assert invoice.total_cents == 20000
    assert invoice.paid_cents == 2500
    assert invoice.balance_cents == 17500
    assert invoice.status == 'partially_paid'
