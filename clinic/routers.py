"""
URL mappings for the clinical API.

Paths carry no trailing slash; every collection lives at
``/api/<resource>`` and every row at ``/api/<resource>/<id>``.
"""
from django.urls import path

from .views import auth, billing, clinical, health, patients

urlpatterns = [
    path('api/health', health.healthz, name='health'),
    # Auth
    path('api/auth/signup', auth.signup_view, name='signup_view'),
    path('api/auth/login', auth.login_view, name='login_view'),
    path('api/auth/user', auth.current_user_view, name='current_user_view'),
    # Patients & appointments
    path('api/patients', patients.patients_list, name='patients_list'),
    path('api/patients/search', patients.patients_search, name='patients_search'),
    path('api/patients/<int:pk>', patients.patient_detail, name='patient_detail'),
    path('api/appointments', patients.appointments_list, name='appointments_list'),
    path('api/appointments/<int:pk>', patients.appointment_detail, name='appointment_detail'),
    # Clinical records
    path('api/clinical-records', clinical.records_list, name='records_list'),
    path('api/clinical-records/<int:pk>', clinical.record_detail, name='record_detail'),
    path('api/vitals', clinical.vitals_list, name='vitals_list'),
    path('api/vitals/<int:pk>', clinical.vitals_detail, name='vitals_detail'),
    path('api/medications', clinical.medications_list, name='medications_list'),
    path('api/medications/<int:pk>', clinical.medication_detail, name='medication_detail'),
    path('api/lab-results', clinical.lab_results_list, name='lab_results_list'),
    path('api/lab-results/<int:pk>', clinical.lab_result_detail, name='lab_result_detail'),
    path('api/allergies', clinical.allergies_list, name='allergies_list'),
    path('api/allergies/<int:pk>', clinical.allergy_detail, name='allergy_detail'),
    path('api/conditions', clinical.conditions_list, name='conditions_list'),
    path('api/conditions/<int:pk>', clinical.condition_detail, name='condition_detail'),
    path('api/documents', clinical.documents_list, name='documents_list'),
    path('api/documents/<int:pk>', clinical.document_detail, name='document_detail'),
    # Billing & insurance
    path('api/invoices', billing.invoices_list, name='invoices_list'),
    path('api/invoices/<int:pk>', billing.invoice_detail, name='invoice_detail'),
    path('api/payments', billing.payments_list, name='payments_list'),
    path('api/payments/<int:pk>', billing.payment_detail, name='payment_detail'),
    path('api/insurance-providers', billing.providers_list, name='providers_list'),
    path('api/insurance-providers/<int:pk>', billing.provider_detail, name='provider_detail'),
    path('api/insurance-claims', billing.claims_list, name='claims_list'),
    path('api/insurance-claims/<int:pk>', billing.claim_detail, name='claim_detail'),
]
