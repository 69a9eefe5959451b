from decimal import Decimal

import pytest
from django.urls import reverse

pytestmark = pytest.mark.django_db


def test_clinical_record_strips_markup(client, patient):
    r = client.post(reverse('records_list'), {
        'patientId': patient.pk, 'date': '2026-01-10', 'type': 'note',
        'title': '<b>Follow-up</b>', 'content': 'Patient <script>x</script>stable',
        'provider': 'Dr. Who',
    }, format='json')
    assert r.status_code == 201
    assert r.data['title'] == 'Follow-up'
    assert '<' not in r.data['content']


def test_clinical_record_type_filter(client, patient):
    for kind in ('note', 'note', 'referral'):
        client.post(reverse('records_list'), {
            'patientId': patient.pk, 'date': '2026-01-10', 'type': kind,
            'title': 't', 'content': 'c', 'provider': 'p',
        }, format='json')
    r = client.get(reverse('records_list'), {'patientId': patient.pk, 'type': 'referral'})
    assert r.data['pagination']['total'] == 1


def test_vitals_derive_bmi(client, patient):
    r = client.post(reverse('vitals_list'), {
        'patientId': patient.pk, 'recordDate': '2026-01-10', 'weight': 80, 'height': 200,
        'recordedBy': 'Nurse',
    }, format='json')
    assert r.status_code == 201
    assert Decimal(str(r.data['bmi'])) == Decimal('20.0')


def test_vitals_reject_negative_weight(client, patient):
    r = client.post(reverse('vitals_list'), {
        'patientId': patient.pk, 'recordDate': '2026-01-10', 'weight': -1, 'recordedBy': 'Nurse',
    }, format='json')
    assert r.status_code == 400


def test_medication_end_before_start(client, patient):
    r = client.post(reverse('medications_list'), {
        'patientId': patient.pk, 'name': 'Amoxicillin', 'dosage': '500mg', 'frequency': 'tid',
        'route': 'oral', 'prescribedDate': '2026-01-01', 'prescribedBy': 'Dr. Who',
        'startDate': '2026-01-10', 'endDate': '2026-01-05',
    }, format='json')
    assert r.status_code == 400
    assert r.data['error']['fields'][0]['field'] == 'endDate'


def test_medication_update_and_status_filter(client, patient):
    med = client.post(reverse('medications_list'), {
        'patientId': patient.pk, 'name': 'Ibuprofen', 'dosage': '200mg', 'frequency': 'bid',
        'route': 'oral', 'prescribedDate': '2026-01-01', 'prescribedBy': 'Dr. Who',
    }, format='json').data
    assert med['status'] == 'active'
    r = client.put(reverse('medication_detail', args=[med['id']]), {'status': 'inactive'}, format='json')
    assert r.data['status'] == 'inactive'
    assert client.get(reverse('medications_list'), {'status': 'active'}).data['pagination']['total'] == 0


def test_allergy_severity_choices(client, patient):
    payload = {
        'patientId': patient.pk, 'allergen': 'Penicillin', 'reaction': 'Rash',
        'recordedDate': '2026-01-01', 'recordedBy': 'Dr. Who',
    }
    assert client.post(reverse('allergies_list'), {**payload, 'severity': 'fatal'}, format='json').status_code == 400
    assert client.post(reverse('allergies_list'), {**payload, 'severity': 'severe'}, format='json').status_code == 201


def test_lab_result_condition_and_document(client, patient):
    assert client.post(reverse('lab_results_list'), {
        'patientId': patient.pk, 'testDate': '2026-01-02', 'testName': 'CBC', 'result': 'ok',
        'status': 'final', 'orderedBy': 'Dr. Who',
    }, format='json').status_code == 201
    assert client.post(reverse('conditions_list'), {
        'patientId': patient.pk, 'condition': 'Asthma', 'diagnosedDate': '2020-01-01', 'diagnosedBy': 'Dr. Who',
    }, format='json').status_code == 201
    doc = client.post(reverse('documents_list'), {
        'patientId': patient.pk, 'fileName': 'scan.pdf', 'fileType': 'application/pdf', 'fileSize': 1024,
        'fileUrl': 'https://files.example.com/scan.pdf', 'category': 'imaging', 'uploadedBy': 'Dr. Who',
    }, format='json')
    assert doc.status_code == 201
    assert doc.data['uploadedAt']


def test_filter_cast_failure_is_400(client):
    r = client.get(reverse('vitals_list'), {'patientId': 'abc'})
    assert r.status_code == 400
    assert r.data['error']['fields'][0]['field'] == 'patientId'
