"""Serializers for the clinical children of a patient."""
import bleach
from rest_framework import serializers

from clinic.models import (
    Allergy,
    ClinicalRecord,
    Condition,
    Document,
    LabResult,
    Medication,
    Patient,
    Vitals,
)
from clinic.serializers.fields import CamelModelSerializer, current_value


class PatientOwnedSerializer(CamelModelSerializer):
    patientId = serializers.PrimaryKeyRelatedField(source='patient', queryset=Patient.objects.all())


def _clean_text(v: str) -> str:
    v = bleach.clean((v or '').strip(), tags=[], strip=True)
    if not v:
        raise serializers.ValidationError('This field may not be blank.')
    return v


class ClinicalRecordSerializer(PatientOwnedSerializer):
    class Meta:
        model = ClinicalRecord
        fields = ['id', 'patientId', 'date', 'type', 'title', 'content', 'provider']

    def validate_title(self, v):
        return _clean_text(v)

    def validate_content(self, v):
        return _clean_text(v)


class VitalsSerializer(PatientOwnedSerializer):
    class Meta:
        model = Vitals
        fields = [
            'id', 'patientId', 'record_date',
            'blood_pressure_systolic', 'blood_pressure_diastolic', 'pulse',
            'temperature', 'weight', 'height', 'bmi',
            'oxygen_saturation', 'respiratory_rate',
            'notes', 'recorded_by', 'created_at',
        ]
        extra_kwargs = {
            'temperature': {'min_value': 0},
            'weight': {'min_value': 0},
            'height': {'min_value': 0},
            'bmi': {'min_value': 0},
        }

    def validate(self, attrs):
        attrs = super().validate(attrs)
        weight = current_value(self, attrs, 'weight')
        height = current_value(self, attrs, 'height')
        # Derive BMI when the caller supplies weight (kg) and height (cm) but no BMI.
        if 'bmi' not in attrs and weight and height and ('weight' in attrs or 'height' in attrs):
            metres = height / 100
            bmi = round(weight / (metres * metres), 1)
            if bmi < 1000:
                attrs['bmi'] = bmi
        return attrs


class MedicationSerializer(PatientOwnedSerializer):
    class Meta:
        model = Medication
        fields = [
            'id', 'patientId', 'name', 'dosage', 'frequency', 'route',
            'prescribed_date', 'prescribed_by', 'start_date', 'end_date',
            'status', 'instructions', 'notes', 'created_at', 'updated_at',
        ]

    def validate(self, attrs):
        start = current_value(self, attrs, 'start_date')
        end = current_value(self, attrs, 'end_date')
        if start and end and end < start:
            raise serializers.ValidationError({'endDate': 'End date cannot be before start date'})
        return attrs


class LabResultSerializer(PatientOwnedSerializer):
    class Meta:
        model = LabResult
        fields = [
            'id', 'patientId', 'test_date', 'test_name', 'result', 'unit',
            'reference_range', 'status', 'ordered_by', 'performed_by', 'notes', 'created_at',
        ]


class AllergySerializer(PatientOwnedSerializer):
    class Meta:
        model = Allergy
        fields = [
            'id', 'patientId', 'allergen', 'reaction', 'severity', 'notes',
            'recorded_date', 'recorded_by', 'created_at',
        ]


class ConditionSerializer(PatientOwnedSerializer):
    class Meta:
        model = Condition
        fields = [
            'id', 'patientId', 'condition', 'diagnosed_date', 'status',
            'diagnosed_by', 'notes', 'created_at', 'updated_at',
        ]


class DocumentSerializer(PatientOwnedSerializer):
    class Meta:
        model = Document
        fields = [
            'id', 'patientId', 'record_id', 'file_name', 'file_type', 'file_size',
            'file_url', 'category', 'uploaded_by', 'uploaded_at', 'notes',
        ]
