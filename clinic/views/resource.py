"""
Generic CRUD pipeline for JSON resources.

Every resource goes through the same steps: validate the payload with
its serializer, check authentication (enforced by the calling view),
run the query and respond.  A :class:`Resource` bundles the model,
serializer, ordering and list filters for one resource; the function
views in the sibling modules delegate to it so that URL wiring stays
explicit in ``clinic.routers``.

Subclasses override ``perform_create``/``perform_update``/``perform_destroy``
for resources whose writes need more than ``serializer.save()``.
"""
from __future__ import annotations

from datetime import date

from django.db import transaction
from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response

from clinic.pagination import paginate


def iso_date(value: str) -> date:
    return date.fromisoformat(value)


def boolean(value: str) -> bool:
    lowered = value.lower()
    if lowered in ('1', 'true', 'yes'):
        return True
    if lowered in ('0', 'false', 'no'):
        return False
    raise ValueError(value)


PATIENT_FILTER = {'patientId': ('patient_id', int)}


class Resource:
    model = None
    serializer_class = None
    ordering: tuple[str, ...] = ('-id',)
    # query param -> (ORM lookup, cast); a failing cast is a 400
    filters: dict = PATIENT_FILTER
    select_related: tuple[str, ...] = ()
    prefetch_related: tuple[str, ...] = ()

    def __init__(self, model=None, serializer_class=None, **options):
        if model is not None:
            self.model = model
        if serializer_class is not None:
            self.serializer_class = serializer_class
        for key, value in options.items():
            if not hasattr(type(self), key):
                raise TypeError(f'unknown resource option {key!r}')
            setattr(self, key, value)

    # -- query ---------------------------------------------------------
    def get_queryset(self):
        qs = self.model.objects.all()
        if self.select_related:
            qs = qs.select_related(*self.select_related)
        if self.prefetch_related:
            qs = qs.prefetch_related(*self.prefetch_related)
        return qs

    def filter_queryset(self, request, qs):
        for param, (lookup, cast) in self.filters.items():
            raw = request.query_params.get(param)
            if raw is None or raw == '':
                continue
            try:
                value = cast(raw)
            except (TypeError, ValueError):
                raise ValidationError({param: [f'Invalid value for {param}']})
            qs = qs.filter(**{lookup: value})
        return qs

    def get_object(self, pk):
        return get_object_or_404(self.get_queryset(), pk=pk)

    # -- representation -------------------------------------------------
    def get_serializer(self, *args, **kwargs):
        return self.serializer_class(*args, **kwargs)

    def represent(self, instance) -> dict:
        return self.get_serializer(instance).data

    def represent_many(self, rows) -> list:
        return self.get_serializer(rows, many=True).data

    # -- writes ---------------------------------------------------------
    def perform_create(self, request, serializer):
        return serializer.save()

    def perform_update(self, request, serializer):
        return serializer.save()

    def perform_destroy(self, request, pk):
        self.model.objects.filter(pk=pk).delete()

    # -- handlers -------------------------------------------------------
    def list(self, request):
        qs = self.filter_queryset(request, self.get_queryset()).order_by(*self.ordering)
        return Response(paginate(qs, request.query_params, self.represent_many))

    def retrieve(self, request, pk):
        return Response(self.represent(self.get_object(pk)))

    def create(self, request):
        serializer = self.get_serializer(data=request.data, context={'request': request})
        serializer.is_valid(raise_exception=True)
        with transaction.atomic():
            instance = self.perform_create(request, serializer)
        return Response(self.represent(instance), status=status.HTTP_201_CREATED)

    def update(self, request, pk):
        instance = self.get_object(pk)
        serializer = self.get_serializer(instance, data=request.data, partial=True, context={'request': request})
        serializer.is_valid(raise_exception=True)
        with transaction.atomic():
            instance = self.perform_update(request, serializer)
        return Response(self.represent(instance))

    def destroy(self, request, pk):
        with transaction.atomic():
            self.perform_destroy(request, pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    def collection(self, request):
        if request.method == 'GET':
            return self.list(request)
        return self.create(request)

    def detail(self, request, pk):
        if request.method == 'GET':
            return self.retrieve(request, pk)
        if request.method in ('PUT', 'PATCH'):
            return self.update(request, pk)
        return self.destroy(request, pk)
