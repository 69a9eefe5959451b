"""
Shared serializer building blocks.

``CamelModelSerializer`` lets each resource declare its model fields in
their database spelling while the API speaks camelCase.  ``MoneyField``
converts between integer cents in the database and decimal currency
units on the wire.
"""
from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP

from rest_framework import serializers

CENT = Decimal('0.01')


def to_camel(name: str) -> str:
    head, *rest = name.split('_')
    return head + ''.join(part.title() for part in rest)


class CamelModelSerializer(serializers.ModelSerializer):
    """ModelSerializer whose snake_case model fields appear under camelCase keys."""

    def get_fields(self):
        fields = super().get_fields()
        renamed = {}
        for name, field in fields.items():
            key = to_camel(name)
            if key != name and field.source is None:
                field.source = name
            renamed[key] = field
        return renamed


class MoneyField(serializers.DecimalField):
    """Currency amount: ``12.50`` in JSON, ``1250`` in the database."""

    def __init__(self, **kwargs):
        kwargs.setdefault('max_digits', 14)
        kwargs.setdefault('decimal_places', 2)
        kwargs.setdefault('min_value', Decimal('0'))
        super().__init__(**kwargs)

    def to_internal_value(self, data):
        value = super().to_internal_value(data)
        return int((value / CENT).quantize(Decimal('1'), rounding=ROUND_HALF_UP))

    def to_representation(self, value):
        if value is None:
            return None
        return super().to_representation(Decimal(value) * CENT)


def current_value(serializer, attrs, key):
    """Value of ``key`` once ``attrs`` are applied to the instance being updated."""
    if key in attrs:
        return attrs[key]
    return getattr(serializer.instance, key, None)
