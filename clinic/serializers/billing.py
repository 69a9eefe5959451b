"""
Billing and insurance serializers.

Amounts are exchanged as decimal currency units and stored as cents
(see :class:`~clinic.serializers.fields.MoneyField`).  Derived invoice
amounts (total, paid, balance) are read-only; the billing service owns
them.
"""
from __future__ import annotations

from rest_framework import serializers

from clinic.models import (
    Appointment,
    InsuranceClaim,
    InsuranceProvider,
    Invoice,
    InvoiceItem,
    Patient,
    Payment,
)
from clinic.serializers.fields import CamelModelSerializer, MoneyField, current_value


class InvoiceItemSerializer(CamelModelSerializer):
    unitPrice = MoneyField(source='unit_price_cents')
    totalPrice = MoneyField(source='total_price_cents', read_only=True)

    class Meta:
        model = InvoiceItem
        fields = ['id', 'description', 'code', 'quantity', 'unitPrice', 'totalPrice']
        extra_kwargs = {'quantity': {'min_value': 1}}


class InvoiceSummarySerializer(CamelModelSerializer):
    totalAmount = MoneyField(source='total_cents', read_only=True)
    paidAmount = MoneyField(source='paid_cents', read_only=True)
    balanceAmount = MoneyField(source='balance_cents', read_only=True)

    class Meta:
        model = Invoice
        fields = ['id', 'invoice_number', 'totalAmount', 'paidAmount', 'balanceAmount', 'status']
        read_only_fields = ['invoice_number', 'status']


class InvoiceSerializer(CamelModelSerializer):
    userId = serializers.UUIDField(source='user_id', read_only=True)
    patientId = serializers.PrimaryKeyRelatedField(source='patient', queryset=Patient.objects.all())
    appointmentId = serializers.PrimaryKeyRelatedField(
        source='appointment', queryset=Appointment.objects.all(), required=False, allow_null=True
    )
    subtotal = MoneyField(source='subtotal_cents')
    taxAmount = MoneyField(source='tax_cents')
    discountAmount = MoneyField(source='discount_cents')
    totalAmount = MoneyField(source='total_cents', read_only=True)
    paidAmount = MoneyField(source='paid_cents', read_only=True)
    balanceAmount = MoneyField(source='balance_cents', read_only=True)
    items = InvoiceItemSerializer(many=True, required=False)

    class Meta:
        model = Invoice
        fields = [
            'id', 'userId', 'patientId', 'appointmentId', 'invoice_number',
            'invoice_date', 'due_date',
            'subtotal', 'taxAmount', 'discountAmount', 'totalAmount', 'paidAmount', 'balanceAmount',
            'status', 'notes', 'items',
        ]
        read_only_fields = ['invoice_number']

    def validate_patientId(self, v):
        if self.instance is not None and v.pk != self.instance.patient_id:
            raise serializers.ValidationError('patientId cannot be changed')
        return v

    def validate(self, attrs):
        subtotal = current_value(self, attrs, 'subtotal_cents') or 0
        tax = current_value(self, attrs, 'tax_cents') or 0
        discount = current_value(self, attrs, 'discount_cents') or 0
        if discount > subtotal + tax:
            raise serializers.ValidationError({'discountAmount': 'Discount cannot exceed subtotal plus tax'})
        appointment = current_value(self, attrs, 'appointment')
        patient = current_value(self, attrs, 'patient')
        if appointment is not None and patient is not None and appointment.patient_id != patient.pk:
            raise serializers.ValidationError({'appointmentId': 'Appointment belongs to another patient'})
        return attrs


class PaymentSerializer(CamelModelSerializer):
    invoiceId = serializers.PrimaryKeyRelatedField(source='invoice', queryset=Invoice.objects.all())
    patientId = serializers.PrimaryKeyRelatedField(source='patient', queryset=Patient.objects.all())
    amount = MoneyField(source='amount_cents')

    class Meta:
        model = Payment
        fields = [
            'id', 'invoiceId', 'patientId', 'amount', 'payment_method',
            'payment_date', 'transaction_id', 'notes',
        ]

    def validate_invoiceId(self, v):
        if self.instance is not None and v.pk != self.instance.invoice_id:
            raise serializers.ValidationError('invoiceId cannot be changed')
        return v

    def validate(self, attrs):
        invoice = current_value(self, attrs, 'invoice')
        patient = current_value(self, attrs, 'patient')
        if invoice is not None and patient is not None and invoice.patient_id != patient.pk:
            raise serializers.ValidationError({'patientId': 'Payment patient does not match the invoice'})
        return attrs


class InvoiceDetailSerializer(InvoiceSerializer):
    payments = PaymentSerializer(many=True, read_only=True)

    class Meta(InvoiceSerializer.Meta):
        fields = InvoiceSerializer.Meta.fields + ['payments']


class InsuranceProviderSerializer(CamelModelSerializer):
    class Meta:
        model = InsuranceProvider
        fields = ['id', 'name', 'code', 'phone', 'email', 'address', 'website', 'active']


class InsuranceClaimSerializer(CamelModelSerializer):
    userId = serializers.UUIDField(source='user_id', read_only=True)
    patientId = serializers.PrimaryKeyRelatedField(source='patient', queryset=Patient.objects.all())
    invoiceId = serializers.PrimaryKeyRelatedField(
        source='invoice', queryset=Invoice.objects.all(), required=False, allow_null=True
    )
    insuranceId = serializers.PrimaryKeyRelatedField(source='insurance', queryset=InsuranceProvider.objects.all())
    claimedAmount = MoneyField(source='claimed_cents')
    approvedAmount = MoneyField(source='approved_cents', required=False, allow_null=True)
    paidAmount = MoneyField(source='paid_cents', required=False, allow_null=True)

    class Meta:
        model = InsuranceClaim
        fields = [
            'id', 'userId', 'patientId', 'invoiceId', 'insuranceId', 'claim_number',
            'submission_date', 'service_date',
            'claimedAmount', 'approvedAmount', 'paidAmount',
            'status', 'diagnosis_codes', 'procedure_codes', 'notes', 'denial_reason',
        ]

    def validate(self, attrs):
        invoice = current_value(self, attrs, 'invoice')
        patient = current_value(self, attrs, 'patient')
        if invoice is not None and patient is not None and invoice.patient_id != patient.pk:
            raise serializers.ValidationError({'invoiceId': 'Invoice belongs to another patient'})
        return attrs
