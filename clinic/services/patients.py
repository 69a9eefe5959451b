"""
Patient registration helpers.

Medical record numbers come from one shared counter.  On PostgreSQL
that is the native ``patients_mrn_seq`` sequence; elsewhere a row in
:class:`~clinic.models.Sequence` is bumped with a single atomic UPDATE,
so concurrent registrations never observe the same value.
"""
from __future__ import annotations

from django.db import connection, transaction
from django.db.models import F, Q

from clinic.exceptions import ConflictError
from clinic.models import Patient, Sequence

MRN_SEQUENCE = 'patients_mrn_seq'
SEARCH_LIMIT = 20


def next_sequence_value(name: str = MRN_SEQUENCE) -> int:
    if connection.vendor == 'postgresql':
        with connection.cursor() as c:
            c.execute('SELECT nextval(%s)', [name])
            return int(c.fetchone()[0])
    with transaction.atomic():
        Sequence.objects.get_or_create(name=name)
        Sequence.objects.filter(name=name).update(value=F('value') + 1)
        return Sequence.objects.values_list('value', flat=True).get(name=name)


def format_mrn(value: int) -> str:
    return f"MRN-{value:06d}"


def _ensure_mrn_free(mrn: str, exclude_pk=None) -> None:
    qs = Patient.objects.filter(mrn=mrn)
    if exclude_pk is not None:
        qs = qs.exclude(pk=exclude_pk)
    if qs.exists():
        raise ConflictError('MRN already exists')


def create_patient(data: dict) -> Patient:
    data = dict(data)
    mrn = (data.pop('mrn', None) or '').strip()
    if mrn:
        _ensure_mrn_free(mrn)
    else:
        mrn = format_mrn(next_sequence_value())
    return Patient.objects.create(mrn=mrn, **data)


def update_patient(patient: Patient, data: dict) -> Patient:
    data = dict(data)
    mrn = (data.pop('mrn', None) or '').strip()
    if mrn and mrn != patient.mrn:
        _ensure_mrn_free(mrn, exclude_pk=patient.pk)
        patient.mrn = mrn
    for key, value in data.items():
        setattr(patient, key, value)
    patient.save()
    return patient


def search_patients(q: str, limit: int = SEARCH_LIMIT):
    return (
        Patient.objects
        .filter(Q(full_name__icontains=q) | Q(mrn__icontains=q))
        .order_by('full_name', 'id')[:limit]
    )
