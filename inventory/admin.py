from django.contrib import admin

from .models import Batch, Product, PurchaseOrder, QualityControlRecord, SalesOrder, Supplier


@admin.register(Supplier)
class SupplierAdmin(admin.ModelAdmin):
    list_display = ('name', 'contact_person', 'city', 'status')
    list_filter = ('status',)
    search_fields = ('name', 'contact_person', 'city')


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ('sku', 'name', 'category', 'price_cents', 'stock_quantity', 'reorder_level', 'status')
    list_filter = ('category', 'status')
    search_fields = ('sku', 'name')


@admin.register(Batch)
class BatchAdmin(admin.ModelAdmin):
    list_display = ('batch_number', 'product', 'expiry_date', 'quantity', 'location', 'status')
    list_filter = ('status', 'location')
    search_fields = ('batch_number',)


@admin.register(PurchaseOrder)
class PurchaseOrderAdmin(admin.ModelAdmin):
    list_display = ('po_number', 'supplier', 'order_date', 'status', 'total_cents')
    list_filter = ('status',)


@admin.register(SalesOrder)
class SalesOrderAdmin(admin.ModelAdmin):
    list_display = ('so_number', 'customer_name', 'order_date', 'status', 'total_cents')
    list_filter = ('status',)


@admin.register(QualityControlRecord)
class QualityControlRecordAdmin(admin.ModelAdmin):
    list_display = ('batch', 'product', 'test_type', 'result', 'inspection_date')
    list_filter = ('result',)
