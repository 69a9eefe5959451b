"""
Patient and appointment endpoints.

Patients get their MRN from the shared sequence when none is supplied.
Appointments copy the patient's name, MRN and phone when they are
booked; later edits to the patient do not touch existing appointments
and an appointment cannot be moved to another patient.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from clinic.models import Appointment, Patient
from clinic.serializers.patients import AppointmentSerializer, PatientSerializer
from clinic.services.patients import create_patient, search_patients, update_patient
from clinic.views.resource import PATIENT_FILTER, Resource, iso_date


class PatientResource(Resource):
    model = Patient
    serializer_class = PatientSerializer
    ordering = ('-id',)
    filters = {}

    def perform_create(self, request, serializer):
        return create_patient(serializer.validated_data)

    def perform_update(self, request, serializer):
        return update_patient(serializer.instance, serializer.validated_data)


class AppointmentResource(Resource):
    model = Appointment
    serializer_class = AppointmentSerializer
    ordering = ('-date', '-id')
    filters = {**PATIENT_FILTER, 'status': ('status', str), 'date': ('date', iso_date)}

    def perform_create(self, request, serializer):
        patient = serializer.validated_data['patient']
        return serializer.save(patient_name=patient.full_name, mrn=patient.mrn, phone=patient.phone)


patients = PatientResource()
appointments = AppointmentResource()


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def patients_list(request):
    return patients.collection(request)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def patients_search(request):
    q = (request.query_params.get('q') or '').strip()
    if len(q) < 2:
        raise ValidationError({'q': ['Search query must be at least 2 characters']})
    return Response(patients.represent_many(search_patients(q)))


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def patient_detail(request, pk: int):
    return patients.detail(request, pk)


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def appointments_list(request):
    return appointments.collection(request)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def appointment_detail(request, pk: int):
    return appointments.detail(request, pk)
