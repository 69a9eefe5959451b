"""CRUD endpoints for the clinical children of a patient."""
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from clinic.models import Allergy, ClinicalRecord, Condition, Document, LabResult, Medication, Vitals
from clinic.serializers.clinical import (
    AllergySerializer,
    ClinicalRecordSerializer,
    ConditionSerializer,
    DocumentSerializer,
    LabResultSerializer,
    MedicationSerializer,
    VitalsSerializer,
)
from clinic.views.resource import PATIENT_FILTER, Resource

STATUS_FILTER = {**PATIENT_FILTER, 'status': ('status', str)}

records = Resource(ClinicalRecord, ClinicalRecordSerializer, ordering=('-date', '-id'),
                   filters={**PATIENT_FILTER, 'type': ('type', str)})
vitals = Resource(Vitals, VitalsSerializer, ordering=('-record_date', '-id'))
medications = Resource(Medication, MedicationSerializer, ordering=('-prescribed_date', '-id'), filters=STATUS_FILTER)
lab_results = Resource(LabResult, LabResultSerializer, ordering=('-test_date', '-id'), filters=STATUS_FILTER)
allergies = Resource(Allergy, AllergySerializer, ordering=('-id',))
conditions = Resource(Condition, ConditionSerializer, ordering=('-id',), filters=STATUS_FILTER)
documents = Resource(Document, DocumentSerializer, ordering=('-uploaded_at', '-id'),
                     filters={**PATIENT_FILTER, 'category': ('category', str)})


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def records_list(request):
    return records.collection(request)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def record_detail(request, pk: int):
    return records.detail(request, pk)


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def vitals_list(request):
    return vitals.collection(request)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def vitals_detail(request, pk: int):
    return vitals.detail(request, pk)


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def medications_list(request):
    return medications.collection(request)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def medication_detail(request, pk: int):
    return medications.detail(request, pk)


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def lab_results_list(request):
    return lab_results.collection(request)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def lab_result_detail(request, pk: int):
    return lab_results.detail(request, pk)


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def allergies_list(request):
    return allergies.collection(request)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def allergy_detail(request, pk: int):
    return allergies.detail(request, pk)


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def conditions_list(request):
    return conditions.collection(request)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def condition_detail(request, pk: int):
    return conditions.detail(request, pk)


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def documents_list(request):
    return documents.collection(request)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def document_detail(request, pk: int):
    return documents.detail(request, pk)
