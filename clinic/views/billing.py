"""
Billing and insurance endpoints.

Invoices and payments delegate their writes to
:mod:`clinic.services.billing`, which keeps invoice totals and balances
consistent with the recorded payments.  Payment responses embed the
refreshed invoice summary so clients can update their local copy
without a second request.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from clinic.models import InsuranceClaim, InsuranceProvider, Invoice, Payment
from clinic.serializers.billing import (
    InsuranceClaimSerializer,
    InsuranceProviderSerializer,
    InvoiceDetailSerializer,
    InvoiceSerializer,
    InvoiceSummarySerializer,
    PaymentSerializer,
)
from clinic.services import billing as billing_service
from clinic.views.resource import PATIENT_FILTER, Resource, boolean


class InvoiceResource(Resource):
    model = Invoice
    serializer_class = InvoiceSerializer
    ordering = ('-invoice_date', '-id')
    filters = {**PATIENT_FILTER, 'status': ('status', str)}
    prefetch_related = ('items',)

    def represent(self, instance) -> dict:
        return InvoiceDetailSerializer(instance).data

    def represent_many(self, rows) -> list:
        return InvoiceSerializer(rows, many=True).data

    def get_queryset(self):
        return super().get_queryset().prefetch_related('payments')

    def perform_create(self, request, serializer):
        return billing_service.create_invoice(user=request.user, data=serializer.validated_data)

    def perform_update(self, request, serializer):
        return billing_service.update_invoice(serializer.instance, serializer.validated_data)


class PaymentResource(Resource):
    model = Payment
    serializer_class = PaymentSerializer
    ordering = ('-payment_date', '-id')
    filters = {**PATIENT_FILTER, 'invoiceId': ('invoice_id', int)}
    select_related = ('invoice',)

    def represent(self, instance) -> dict:
        data = PaymentSerializer(instance).data
        data['invoice'] = InvoiceSummarySerializer(instance.invoice).data
        return data

    def represent_many(self, rows) -> list:
        return PaymentSerializer(rows, many=True).data

    def perform_create(self, request, serializer):
        return billing_service.record_payment(serializer.validated_data)

    def perform_update(self, request, serializer):
        return billing_service.update_payment(serializer.instance, serializer.validated_data)

    def perform_destroy(self, request, pk):
        billing_service.delete_payment(pk)


class ClaimResource(Resource):
    model = InsuranceClaim
    serializer_class = InsuranceClaimSerializer
    ordering = ('-submission_date', '-id')
    filters = {**PATIENT_FILTER, 'status': ('status', str), 'insuranceId': ('insurance_id', int)}

    def perform_create(self, request, serializer):
        return serializer.save(user=request.user)


invoices = InvoiceResource()
payments = PaymentResource()
providers = Resource(InsuranceProvider, InsuranceProviderSerializer, ordering=('name', 'id'),
                     filters={'active': ('active', boolean)})
claims = ClaimResource()


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def invoices_list(request):
    return invoices.collection(request)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def invoice_detail(request, pk: int):
    return invoices.detail(request, pk)


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def payments_list(request):
    return payments.collection(request)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def payment_detail(request, pk: int):
    return payments.detail(request, pk)


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def providers_list(request):
    return providers.collection(request)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def provider_detail(request, pk: int):
    return providers.detail(request, pk)


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def claims_list(request):
    return claims.collection(request)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def claim_detail(request, pk: int):
    return claims.detail(request, pk)
