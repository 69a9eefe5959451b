"""URL mappings for the inventory API (no trailing slashes)."""
from django.urls import path

from . import views

urlpatterns = [
    path('api/inventory/dashboard', views.dashboard, name='inventory_dashboard'),
    path('api/suppliers', views.suppliers_list, name='suppliers_list'),
    path('api/suppliers/<int:pk>', views.supplier_detail, name='supplier_detail'),
    path('api/products', views.products_list, name='products_list'),
    path('api/products/<int:pk>', views.product_detail, name='product_detail'),
    path('api/batches', views.batches_list, name='batches_list'),
    path('api/batches/<int:pk>', views.batch_detail, name='batch_detail'),
    path('api/purchase-orders', views.purchase_orders_list, name='purchase_orders_list'),
    path('api/purchase-orders/<int:pk>', views.purchase_order_detail, name='purchase_order_detail'),
    path('api/sales-orders', views.sales_orders_list, name='sales_orders_list'),
    path('api/sales-orders/<int:pk>', views.sales_order_detail, name='sales_order_detail'),
    path('api/quality-control', views.quality_control_list, name='quality_control_list'),
    path('api/quality-control/<int:pk>', views.quality_control_detail, name='quality_control_detail'),
]
