"""
Django admin registrations for the clinical models.

Every model is available under ``/admin/`` so staff can inspect and
correct rows by hand.  Billing amounts are shown as stored, in cents.
Derived invoice amounts are read-only, and payment edits go through
:mod:`clinic.services.billing` so the invoice balance follows them.
"""
from django.contrib import admin
from django.db import transaction

from .models import (
    Allergy,
    Appointment,
    ClinicalRecord,
    Condition,
    Document,
    InsuranceClaim,
    InsuranceProvider,
    Invoice,
    InvoiceItem,
    LabResult,
    Medication,
    Patient,
    Payment,
    Sequence,
    User,
    Vitals,
)
from .services import billing as billing_service


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ('email', 'full_name', 'is_staff', 'is_active', 'date_joined')
    search_fields = ('email', 'full_name')
    exclude = ('password',)
    ordering = ('email',)


@admin.register(Patient)
class PatientAdmin(admin.ModelAdmin):
    list_display = ('mrn', 'full_name', 'dob', 'gender', 'phone', 'last_visit')
    search_fields = ('mrn', 'full_name', 'email', 'phone')
    list_filter = ('gender',)


@admin.register(Appointment)
class AppointmentAdmin(admin.ModelAdmin):
    list_display = ('date', 'time', 'patient_name', 'mrn', 'provider', 'status')
    list_filter = ('status', 'date')
    search_fields = ('patient_name', 'mrn', 'provider')


@admin.register(ClinicalRecord)
class ClinicalRecordAdmin(admin.ModelAdmin):
    list_display = ('date', 'patient', 'type', 'title', 'provider')
    list_filter = ('type',)
    search_fields = ('title', 'provider')


@admin.register(Vitals)
class VitalsAdmin(admin.ModelAdmin):
    list_display = ('record_date', 'patient', 'blood_pressure_systolic', 'blood_pressure_diastolic', 'pulse', 'recorded_by')


@admin.register(Medication)
class MedicationAdmin(admin.ModelAdmin):
    list_display = ('name', 'patient', 'dosage', 'frequency', 'status', 'prescribed_date')
    list_filter = ('status',)
    search_fields = ('name',)


@admin.register(LabResult)
class LabResultAdmin(admin.ModelAdmin):
    list_display = ('test_date', 'patient', 'test_name', 'result', 'status')
    search_fields = ('test_name',)


@admin.register(Allergy)
class AllergyAdmin(admin.ModelAdmin):
    list_display = ('allergen', 'patient', 'severity', 'recorded_date')
    list_filter = ('severity',)


@admin.register(Condition)
class ConditionAdmin(admin.ModelAdmin):
    list_display = ('condition', 'patient', 'status', 'diagnosed_date')
    list_filter = ('status',)


@admin.register(Document)
class DocumentAdmin(admin.ModelAdmin):
    list_display = ('file_name', 'patient', 'category', 'file_size', 'uploaded_at')
    list_filter = ('category',)


class InvoiceItemInline(admin.TabularInline):
    model = InvoiceItem
    extra = 0


@admin.register(Invoice)
class InvoiceAdmin(admin.ModelAdmin):
    list_display = ('invoice_number', 'patient', 'invoice_date', 'total_cents', 'paid_cents', 'balance_cents', 'status')
    list_filter = ('status',)
    search_fields = ('invoice_number',)
    inlines = [InvoiceItemInline]
    readonly_fields = ('total_cents', 'paid_cents', 'balance_cents')

    def save_model(self, request, obj, form, change):
        with transaction.atomic():
            obj.recompute_total()
            super().save_model(request, obj, form, change)
            # an explicit status wins; otherwise follow the balance
            if form is None or 'status' not in form.changed_data:
                billing_service.refresh_invoice_balance(obj)


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display = ('id', 'invoice', 'patient', 'amount_cents', 'payment_method', 'payment_date')
    list_filter = ('payment_method',)

    def get_readonly_fields(self, request, obj=None):
        # moving a payment would leave the old invoice stale
        return ('invoice',) if obj is not None else ()

    def save_model(self, request, obj, form, change):
        with transaction.atomic():
            invoice = Invoice.objects.select_for_update().get(pk=obj.invoice_id)
            super().save_model(request, obj, form, change)
            billing_service.refresh_invoice_balance(invoice)

    def delete_model(self, request, obj):
        billing_service.delete_payment(obj.pk)

    def delete_queryset(self, request, queryset):
        for pk in queryset.values_list('pk', flat=True):
            billing_service.delete_payment(pk)


@admin.register(InsuranceProvider)
class InsuranceProviderAdmin(admin.ModelAdmin):
    list_display = ('name', 'code', 'phone', 'active')
    search_fields = ('name', 'code')


@admin.register(InsuranceClaim)
class InsuranceClaimAdmin(admin.ModelAdmin):
    list_display = ('claim_number', 'patient', 'insurance', 'claimed_cents', 'status', 'submission_date')
    list_filter = ('status',)
    search_fields = ('claim_number',)


@admin.register(Sequence)
class SequenceAdmin(admin.ModelAdmin):
    list_display = ('name', 'value')
