import re

import pytest
from django.urls import reverse

from clinic.models import (
    Allergy,
    Appointment,
    ClinicalRecord,
    Condition,
    Document,
    Invoice,
    LabResult,
    Medication,
    Patient,
    Vitals,
)
from clinic.services.patients import format_mrn, next_sequence_value

pytestmark = pytest.mark.django_db

JANE = {
    'fullName': 'Jane Doe',
    'dob': '1990-01-01',
    'gender': 'Female',
    'phone': '555-0101',
    'email': 'jane@example.com',
    'address': '2 Elm St',
}


def test_create_patient_assigns_mrn_and_round_trips(client):
    r = client.post(reverse('patients_list'), JANE, format='json')
    assert r.status_code == 201
    assert re.fullmatch(r'MRN-\d{6}', r.data['mrn'])
    assert r.data['lastVisit'] is None

    got = client.get(reverse('patient_detail', args=[r.data['id']]))
    assert got.status_code == 200
    assert got.data == r.data


def test_generated_mrns_are_unique(client):
    mrns = {
        client.post(reverse('patients_list'), {**JANE, 'email': f'p{i}@example.com'}, format='json').data['mrn']
        for i in range(5)
    }
    assert len(mrns) == 5


def test_sequence_is_monotonic():
    first = next_sequence_value()
    assert next_sequence_value() == first + 1
    assert format_mrn(42) == 'MRN-000042'


def test_explicit_duplicate_mrn_is_conflict(client, patient):
    r = client.post(reverse('patients_list'), {**JANE, 'mrn': patient.mrn}, format='json')
    assert r.status_code == 409


def test_missing_fields_report_each_field(client):
    r = client.post(reverse('patients_list'), {'fullName': 'Nobody'}, format='json')
    assert r.status_code == 400
    fields = {f['field'] for f in r.data['error']['fields']}
    assert {'dob', 'gender', 'phone', 'email', 'address'} <= fields


def test_bad_gender_rejected(client):
    r = client.post(reverse('patients_list'), {**JANE, 'gender': 'Unknown'}, format='json')
    assert r.status_code == 400


def test_pagination_envelope_and_clamping(client):
    for i in range(12):
        Patient.objects.create(
            full_name=f'Patient {i:02d}', mrn=f'MRN-1{i:05d}', dob='1970-01-01', gender='Other',
            phone='1', email=f'x{i}@example.com', address='-',
        )
    r = client.get(reverse('patients_list'))
    assert r.data['pagination'] == {'page': 1, 'limit': 10, 'total': 12, 'pages': 2}
    assert len(r.data['data']) == 10

    r = client.get(reverse('patients_list'), {'page': 2, 'limit': 10})
    assert len(r.data['data']) == 2

    r = client.get(reverse('patients_list'), {'page': 0, 'limit': 1000})
    assert r.data['pagination']['page'] == 1
    assert r.data['pagination']['limit'] == 100

    r = client.get(reverse('patients_list'), {'page': 'abc', 'limit': 'xyz'})
    assert r.data['pagination']['page'] == 1
    assert r.data['pagination']['limit'] == 10


def test_empty_list_has_zero_pages(client):
    r = client.get(reverse('appointments_list'))
    assert r.data == {'data': [], 'pagination': {'page': 1, 'limit': 10, 'total': 0, 'pages': 0}}


def test_search_requires_two_characters(client, patient):
    r = client.get(reverse('patients_search'), {'q': 'J'})
    assert r.status_code == 400

    r = client.get(reverse('patients_search'), {'q': 'smi'})
    assert r.status_code == 200
    assert [p['id'] for p in r.data] == [patient.pk]

    r = client.get(reverse('patients_search'), {'q': '900001'})
    assert [p['mrn'] for p in r.data] == ['MRN-900001']


def test_unknown_patient_is_404(client):
    r = client.get(reverse('patient_detail', args=[99999]))
    assert r.status_code == 404
    assert r.data['error']['code'] == 'not_found'


def book(client, patient, **overrides):
    payload = {
        'patientId': patient.pk, 'date': '2026-03-02', 'time': '09:30', 'type': 'Checkup',
        'provider': 'Dr. Who', 'location': 'Room 1', 'status': 'scheduled',
    }
    payload.update(overrides)
    return client.post(reverse('appointments_list'), payload, format='json')


def test_appointment_snapshots_patient(client, patient):
    r = book(client, patient)
    assert r.status_code == 201
    assert r.data['patientName'] == 'John Smith'
    assert r.data['mrn'] == patient.mrn

    client.put(reverse('patient_detail', args=[patient.pk]), {'fullName': 'Johnny Smith', 'phone': '555-9999'}, format='json')
    appt = client.get(reverse('appointment_detail', args=[r.data['id']])).data
    assert appt['patientName'] == 'John Smith'
    assert appt['phone'] == '555-0100'


def test_appointment_time_format(client, patient):
    r = book(client, patient, time='9am')
    assert r.status_code == 400
    assert r.data['error']['fields'][0]['field'] == 'time'


def test_appointment_unknown_patient_is_400(client):
    r = client.post(reverse('appointments_list'), {
        'patientId': 424242, 'date': '2026-03-02', 'time': '09:30', 'type': 'x',
        'provider': 'x', 'location': 'x', 'status': 'scheduled',
    }, format='json')
    assert r.status_code == 400


def test_appointment_cannot_move_to_other_patient(client, patient):
    appt = book(client, patient).data
    other = Patient.objects.create(
        full_name='Other', mrn='MRN-900002', dob='1980-01-01', gender='Male',
        phone='1', email='o@example.com', address='-',
    )
    r = client.put(reverse('appointment_detail', args=[appt['id']]), {'patientId': other.pk}, format='json')
    assert r.status_code == 400


def test_appointment_filters(client, patient):
    book(client, patient, status='completed')
    book(client, patient, date='2026-04-01')
    r = client.get(reverse('appointments_list'), {'status': 'completed'})
    assert r.data['pagination']['total'] == 1
    r = client.get(reverse('appointments_list'), {'date': '2026-04-01'})
    assert r.data['pagination']['total'] == 1
    r = client.get(reverse('appointments_list'), {'date': 'yesterday'})
    assert r.status_code == 400


def test_delete_patient_cascades_clinical_rows(client, patient):
    book(client, patient)
    ClinicalRecord.objects.create(
        patient=patient, date='2026-01-10', type='note', title='t', content='c', provider='p',
    )
    Vitals.objects.create(patient=patient, record_date='2026-01-10', pulse=70, recorded_by='Nurse')
    Medication.objects.create(
        patient=patient, name='Ibuprofen', dosage='200mg', frequency='bid', route='oral',
        prescribed_date='2026-01-01', prescribed_by='Dr. Who',
    )
    LabResult.objects.create(
        patient=patient, test_date='2026-01-02', test_name='CBC', result='ok', status='final', ordered_by='Dr. Who',
    )
    Allergy.objects.create(
        patient=patient, allergen='Penicillin', reaction='Rash', severity='mild',
        recorded_date='2026-01-01', recorded_by='Dr. Who',
    )
    Condition.objects.create(
        patient=patient, condition='Asthma', diagnosed_date='2020-01-01', diagnosed_by='Dr. Who',
    )
    Document.objects.create(
        patient=patient, file_name='scan.pdf', file_type='application/pdf', file_size=10,
        file_url='https://files.example.com/scan.pdf', category='imaging', uploaded_by='Dr. Who',
    )

    r = client.delete(reverse('patient_detail', args=[patient.pk]))
    assert r.status_code == 204
    for model in (Appointment, ClinicalRecord, Vitals, Medication, LabResult, Allergy, Condition, Document):
        assert not model.objects.exists(), model.__name__
    assert client.get(reverse('patient_detail', args=[patient.pk])).status_code == 404


def test_delete_patient_with_invoice_is_conflict(client, user, patient):
    Invoice.objects.create(
        user=user, patient=patient, invoice_number='INV-1', invoice_date='2026-01-01', due_date='2026-02-01',
        subtotal_cents=100, tax_cents=0, discount_cents=0, total_cents=100, balance_cents=100,
    )
    r = client.delete(reverse('patient_detail', args=[patient.pk]))
    assert r.status_code == 409
    assert Patient.objects.filter(pk=patient.pk).exists()
    assert Invoice.objects.count() == 1


def test_delete_missing_row_is_idempotent(client):
    r = client.delete(reverse('appointment_detail', args=[123456]))
    assert r.status_code == 204
