"""
Inventory endpoints.

Products, batches and orders remember the account that created them;
quality control records take their product from the inspected batch and
record the inspector.  ``/api/inventory/dashboard`` summarises stock
health for the landing page.
"""
from __future__ import annotations

from django.db.models import Q
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from clinic.serializers.fields import MoneyField
from clinic.views.resource import Resource, iso_date
from inventory.models import Batch, Product, PurchaseOrder, QualityControlRecord, SalesOrder, Supplier
from inventory.serializers import (
    BatchSerializer,
    ProductSerializer,
    PurchaseOrderSerializer,
    QualityControlSerializer,
    SalesOrderSerializer,
    SupplierSerializer,
)
from inventory.services import dashboard_summary


class SearchableResource(Resource):
    """Adds a ``q`` parameter matched case-insensitively against ``search_fields``."""
    search_fields: tuple[str, ...] = ()

    def filter_queryset(self, request, qs):
        qs = super().filter_queryset(request, qs)
        q = (request.query_params.get('q') or '').strip()
        if q and self.search_fields:
            cond = Q()
            for field in self.search_fields:
                cond |= Q(**{f'{field}__icontains': q})
            qs = qs.filter(cond)
        return qs


class OwnedResource(SearchableResource):
    def perform_create(self, request, serializer):
        return serializer.save(owner=request.user)


class QualityControlResource(Resource):
    def perform_create(self, request, serializer):
        batch = serializer.validated_data['batch']
        return serializer.save(product_id=batch.product_id, inspector=request.user)

    def perform_update(self, request, serializer):
        batch = serializer.validated_data.get('batch')
        if batch is not None:
            return serializer.save(product_id=batch.product_id)
        return serializer.save()


suppliers = SearchableResource(
    Supplier, SupplierSerializer, ordering=('name', 'id'),
    filters={'status': ('status', str)},
    search_fields=('name', 'contact_person', 'city'),
)
products = OwnedResource(
    Product, ProductSerializer, ordering=('-created_at', '-id'),
    filters={'status': ('status', str), 'category': ('category', str)},
    search_fields=('name', 'sku'),
)
batches = OwnedResource(
    Batch, BatchSerializer, ordering=('expiry_date', 'id'), select_related=('product',),
    filters={'status': ('status', str), 'location': ('location', str), 'productId': ('product_id', int)},
    search_fields=('batch_number',),
)
purchase_orders = OwnedResource(
    PurchaseOrder, PurchaseOrderSerializer, ordering=('-order_date', '-id'), select_related=('supplier',),
    filters={'status': ('status', str), 'supplierId': ('supplier_id', int)},
    search_fields=('po_number',),
)
sales_orders = OwnedResource(
    SalesOrder, SalesOrderSerializer, ordering=('-order_date', '-id'),
    filters={'status': ('status', str)},
    search_fields=('so_number', 'customer_name'),
)
quality_control = QualityControlResource(
    QualityControlRecord, QualityControlSerializer, ordering=('-inspection_date', '-id'),
    filters={
        'batchId': ('batch_id', int),
        'productId': ('product_id', int),
        'result': ('result', str),
        'from': ('inspection_date__gte', iso_date),
        'to': ('inspection_date__lte', iso_date),
    },
)

_money = MoneyField()


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def dashboard(request):
    summary = dashboard_summary()
    return Response({
        'expiringBatches': BatchSerializer(summary['expiring_batches'], many=True).data,
        'lowStock': ProductSerializer(summary['low_stock'], many=True).data,
        'recentOrders': SalesOrderSerializer(summary['recent_orders'], many=True).data,
        'totalStockValue': _money.to_representation(summary['total_stock_value_cents']),
        'monthlySales': [
            {'month': row['month'], 'total': _money.to_representation(row['total_cents'])}
            for row in summary['monthly_sales']
        ],
        'qcThisWeek': summary['qc_this_week'],
    })


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def suppliers_list(request):
    return suppliers.collection(request)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def supplier_detail(request, pk: int):
    return suppliers.detail(request, pk)


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def products_list(request):
    return products.collection(request)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def product_detail(request, pk: int):
    return products.detail(request, pk)


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def batches_list(request):
    return batches.collection(request)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def batch_detail(request, pk: int):
    return batches.detail(request, pk)


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def purchase_orders_list(request):
    return purchase_orders.collection(request)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def purchase_order_detail(request, pk: int):
    return purchase_orders.detail(request, pk)


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def sales_orders_list(request):
    return sales_orders.collection(request)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def sales_order_detail(request, pk: int):
    return sales_orders.detail(request, pk)


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def quality_control_list(request):
    return quality_control.collection(request)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def quality_control_detail(request, pk: int):
    return quality_control.detail(request, pk)
