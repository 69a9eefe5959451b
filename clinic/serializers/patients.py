import re

from rest_framework import serializers

from clinic.models import Appointment, Patient
from clinic.serializers.fields import CamelModelSerializer

TIME_RE = re.compile(r'^\d{2}:\d{2}$')


class PatientSerializer(CamelModelSerializer):
    mrn = serializers.CharField(required=False, allow_blank=True, max_length=32)

    class Meta:
        model = Patient
        fields = ['id', 'full_name', 'mrn', 'dob', 'gender', 'phone', 'email', 'address', 'last_visit']


class AppointmentSerializer(CamelModelSerializer):
    patientId = serializers.PrimaryKeyRelatedField(source='patient', queryset=Patient.objects.all())

    class Meta:
        model = Appointment
        fields = [
            'id', 'patientId', 'date', 'time', 'patient_name', 'mrn', 'phone',
            'type', 'provider', 'location', 'status', 'notes',
        ]
        read_only_fields = ['patient_name', 'mrn', 'phone']

    def validate_time(self, v):
        if not TIME_RE.match(v):
            raise serializers.ValidationError('Time must be in HH:MM format')
        return v

    def validate_patientId(self, v):
        if self.instance is not None and v.pk != self.instance.patient_id:
            raise serializers.ValidationError('patientId cannot be changed')
        return v
