"""
Invoice and payment bookkeeping.

Invoice totals are derived: ``total = subtotal + tax - discount`` and
``balance = total - paid``.  Every payment write locks its invoice row
and recomputes ``paid`` from the sum of the invoice's payments inside
the same transaction, so the stored balance always matches the
recorded payments.
"""
from __future__ import annotations

import logging
import time

from django.db import transaction
from django.db.models import Sum

from clinic.models import Invoice, InvoiceItem, Payment

logger = logging.getLogger(__name__)

SETTLED_STATUSES = ('paid', 'partially_paid')


def generate_invoice_number() -> str:
    return f"INV-{int(time.time() * 1000)}"


def _replace_items(invoice: Invoice, items: list[dict]) -> None:
    invoice.items.all().delete()
    InvoiceItem.objects.bulk_create([
        InvoiceItem(
            invoice=invoice,
            total_price_cents=item['quantity'] * item['unit_price_cents'],
            **item,
        )
        for item in items
    ])


def create_invoice(*, user, data: dict) -> Invoice:
    data = dict(data)
    items = data.pop('items', None)
    data.pop('status', None)
    invoice = Invoice(
        user=user,
        invoice_number=generate_invoice_number(),
        paid_cents=0,
        status='draft',
        **data,
    )
    invoice.recompute_total()
    invoice.save()
    if items:
        _replace_items(invoice, items)
    logger.info('invoice created id=%s number=%s total=%s', invoice.pk, invoice.invoice_number, invoice.total_cents)
    return invoice


def update_invoice(invoice: Invoice, data: dict) -> Invoice:
    data = dict(data)
    items = data.pop('items', None)
    invoice = Invoice.objects.select_for_update().get(pk=invoice.pk)
    for key, value in data.items():
        setattr(invoice, key, value)
    invoice.recompute_total()
    invoice.save()
    if items is not None:
        _replace_items(invoice, items)
    if 'status' not in data:
        # an explicit status wins; otherwise follow the new balance
        refresh_invoice_balance(invoice)
    return invoice


def refresh_invoice_balance(invoice: Invoice) -> Invoice:
    """Recompute paid/balance/status from the payments; caller holds the row lock."""
    paid = invoice.payments.aggregate(total=Sum('amount_cents'))['total'] or 0
    invoice.paid_cents = paid
    invoice.balance_cents = invoice.total_cents - paid
    if invoice.status != 'cancelled':
        if paid > 0 and invoice.balance_cents <= 0:
            invoice.status = 'paid'
        elif paid > 0:
            invoice.status = 'partially_paid'
        elif invoice.status in SETTLED_STATUSES:
            invoice.status = 'pending'
    invoice.save(update_fields=['paid_cents', 'balance_cents', 'status'])
    return invoice


def _locked_invoice(invoice_id: int) -> Invoice:
    return Invoice.objects.select_for_update().get(pk=invoice_id)


def record_payment(data: dict) -> Payment:
    with transaction.atomic():
        invoice = _locked_invoice(data['invoice'].pk)
        payment = Payment.objects.create(**{**data, 'invoice': invoice})
        refresh_invoice_balance(invoice)
    logger.info('payment recorded id=%s invoice=%s amount=%s', payment.pk, invoice.pk, payment.amount_cents)
    return payment


def update_payment(payment: Payment, data: dict) -> Payment:
    with transaction.atomic():
        invoice = _locked_invoice(payment.invoice_id)
        for key, value in data.items():
            setattr(payment, key, value)
        payment.invoice = invoice
        payment.save()
        refresh_invoice_balance(invoice)
    return payment


def delete_payment(payment_id: int) -> Invoice | None:
    with transaction.atomic():
        invoice_id = Payment.objects.filter(pk=payment_id).values_list('invoice_id', flat=True).first()
        if invoice_id is None:
            return None
        invoice = _locked_invoice(invoice_id)
        Payment.objects.filter(pk=payment_id).delete()
        return refresh_invoice_balance(invoice)
