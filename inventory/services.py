"""
Stock dashboard aggregates.

The dashboard is computed on request from the inventory tables; nothing
is cached.  Amounts are returned in cents and converted by the view.
"""
from __future__ import annotations

from datetime import date, timedelta

from django.db.models import BigIntegerField, Count, F, Sum
from django.db.models.functions import ExtractMonth
from django.utils import timezone

from inventory.models import Batch, Product, QualityControlRecord, SalesOrder

EXPIRY_HORIZON_DAYS = 90
RECENT_ORDERS = 5


def week_bounds(today: date) -> tuple[date, date]:
    """Sunday..Saturday week containing ``today``."""
    start = today - timedelta(days=(today.weekday() + 1) % 7)
    return start, start + timedelta(days=6)


def expiring_batches(today: date):
    horizon = today + timedelta(days=EXPIRY_HORIZON_DAYS)
    return (
        Batch.objects.select_related('product')
        .filter(expiry_date__lt=horizon)
        .order_by('expiry_date', 'id')
    )


def low_stock_products():
    return (
        Product.objects.filter(status='active', stock_quantity__lte=F('reorder_level'))
        .order_by('stock_quantity', 'id')
    )


def total_stock_value_cents() -> int:
    value = Product.objects.aggregate(
        total=Sum(F('price_cents') * F('stock_quantity'), output_field=BigIntegerField())
    )['total']
    return int(value or 0)


def monthly_sales_cents(year: int) -> list[dict]:
    rows = (
        SalesOrder.objects.filter(order_date__year=year)
        .exclude(status='cancelled')
        .annotate(month=ExtractMonth('order_date'))
        .values('month')
        .annotate(total=Sum('total_cents'))
    )
    by_month = {row['month']: int(row['total'] or 0) for row in rows}
    return [{'month': m, 'total_cents': by_month.get(m, 0)} for m in range(1, 13)]


def qc_results_this_week(today: date) -> dict:
    start, end = week_bounds(today)
    counts = {key: 0 for key, _ in QualityControlRecord.RESULT_CHOICES}
    rows = (
        QualityControlRecord.objects.filter(inspection_date__range=(start, end))
        .values('result')
        .annotate(n=Count('id'))
    )
    for row in rows:
        counts[row['result']] = row['n']
    return counts


def dashboard_summary(today: date | None = None) -> dict:
    today = today or timezone.localdate()
    return {
        'expiring_batches': list(expiring_batches(today)),
        'low_stock': list(low_stock_products()),
        'recent_orders': list(SalesOrder.objects.order_by('-order_date', '-id')[:RECENT_ORDERS]),
        'total_stock_value_cents': total_stock_value_cents(),
        'monthly_sales': monthly_sales_cents(today.year),
        'qc_this_week': qc_results_this_week(today),
    }
