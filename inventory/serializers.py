from rest_framework import serializers

from clinic.serializers.fields import CamelModelSerializer, MoneyField, current_value
from inventory.models import Batch, Product, PurchaseOrder, QualityControlRecord, SalesOrder, Supplier


class SupplierSerializer(CamelModelSerializer):
    class Meta:
        model = Supplier
        fields = ['id', 'name', 'contact_person', 'email', 'phone', 'address', 'city', 'status', 'created_at']


class ProductSerializer(CamelModelSerializer):
    ownerId = serializers.UUIDField(source='owner_id', read_only=True)
    price = MoneyField(source='price_cents')

    class Meta:
        model = Product
        fields = [
            'id', 'name', 'sku', 'category', 'description', 'price',
            'stock_quantity', 'reorder_level', 'status', 'ownerId', 'created_at',
        ]
        # duplicates surface as 409 from the database constraint
        extra_kwargs = {'sku': {'validators': []}}


class BatchSerializer(CamelModelSerializer):
    productId = serializers.PrimaryKeyRelatedField(source='product', queryset=Product.objects.all())
    productName = serializers.CharField(source='product.name', read_only=True)
    ownerId = serializers.UUIDField(source='owner_id', read_only=True)

    class Meta:
        model = Batch
        fields = [
            'id', 'productId', 'productName', 'batch_number', 'manufacture_date', 'expiry_date',
            'quantity', 'location', 'status', 'ownerId', 'created_at',
        ]

    def validate(self, attrs):
        made = current_value(self, attrs, 'manufacture_date')
        expires = current_value(self, attrs, 'expiry_date')
        if made and expires and expires < made:
            raise serializers.ValidationError({'expiryDate': 'Expiry date cannot be before manufacture date'})
        return attrs


class PurchaseOrderSerializer(CamelModelSerializer):
    supplierId = serializers.PrimaryKeyRelatedField(source='supplier', queryset=Supplier.objects.all())
    supplierName = serializers.CharField(source='supplier.name', read_only=True)
    totalAmount = MoneyField(source='total_cents', required=False)
    ownerId = serializers.UUIDField(source='owner_id', read_only=True)

    class Meta:
        model = PurchaseOrder
        fields = [
            'id', 'po_number', 'supplierId', 'supplierName', 'order_date', 'expected_delivery_date',
            'status', 'totalAmount', 'ownerId', 'created_at',
        ]
        extra_kwargs = {'po_number': {'validators': []}}


class SalesOrderSerializer(CamelModelSerializer):
    totalAmount = MoneyField(source='total_cents', required=False)
    ownerId = serializers.UUIDField(source='owner_id', read_only=True)

    class Meta:
        model = SalesOrder
        fields = [
            'id', 'so_number', 'customer_name', 'order_date', 'expected_delivery_date',
            'status', 'totalAmount', 'ownerId', 'created_at',
        ]
        extra_kwargs = {'so_number': {'validators': []}}


class QualityControlSerializer(CamelModelSerializer):
    batchId = serializers.PrimaryKeyRelatedField(source='batch', queryset=Batch.objects.all())
    productId = serializers.PrimaryKeyRelatedField(source='product', read_only=True)
    inspectorId = serializers.UUIDField(source='inspector_id', read_only=True)

    class Meta:
        model = QualityControlRecord
        fields = ['id', 'batchId', 'productId', 'test_type', 'result', 'notes', 'inspectorId', 'inspection_date']
