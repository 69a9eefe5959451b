"""
Database models for the MedFlow clinical and billing services.

The patient is the hub of the schema: clinical children (appointments,
records, vitals, medications, lab results, allergies, conditions and
documents) cascade with it, while billing rows (invoices, payments and
insurance claims) protect it so that financial history is never lost
by removing a patient.

Money is stored as integer cents in ``*_cents`` columns.  Conversion to
decimal currency units happens in the serializers.
"""
from __future__ import annotations

import uuid

from django.contrib.auth.models import AbstractUser, BaseUserManager
from django.db import models


class UserManager(BaseUserManager):
    """Manager for the email-keyed :class:`User` model."""

    use_in_migrations = True

    def _create_user(self, email, password, **extra_fields):
        if not email:
            raise ValueError('The email must be set')
        email = self.normalize_email(email).lower()
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_user(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', False)
        extra_fields.setdefault('is_superuser', False)
        return self._create_user(email, password, **extra_fields)

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superuser must have is_staff=True.')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superuser must have is_superuser=True.')
        return self._create_user(email, password, **extra_fields)


class User(AbstractUser):
    """Staff account identified by email.

    The username and first/last name columns of Django's default user
    are replaced by a unique email and a single ``full_name``.  Accounts
    are never hard-deleted through the API.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    username = None
    first_name = None
    last_name = None
    email = models.EmailField(unique=True)
    full_name = models.CharField(max_length=255)

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['full_name']

    objects = UserManager()

    def get_full_name(self) -> str:
        return self.full_name

    def get_short_name(self) -> str:
        return self.full_name.split(' ')[0] if self.full_name else self.email

    def __str__(self) -> str:
        return f"{self.full_name} <{self.email}>"


class Sequence(models.Model):
    """Named counter used for MRN allocation where the database has no
    native sequences (SQLite).  PostgreSQL uses ``patients_mrn_seq``."""
    name = models.CharField(max_length=64, primary_key=True)
    value = models.BigIntegerField(default=0)

    def __str__(self) -> str:
        return f"{self.name}={self.value}"


class Patient(models.Model):
    GENDER_CHOICES = [
        ('Male', 'Male'),
        ('Female', 'Female'),
        ('Other', 'Other'),
    ]
    full_name = models.CharField(max_length=255, db_index=True)
    mrn = models.CharField(max_length=32, unique=True)
    dob = models.DateField()
    gender = models.CharField(max_length=10, choices=GENDER_CHOICES)
    phone = models.CharField(max_length=32)
    email = models.EmailField(db_index=True)
    address = models.TextField()
    last_visit = models.DateField(null=True, blank=True)

    def __str__(self) -> str:
        return f"{self.full_name} ({self.mrn})"


class Appointment(models.Model):
    STATUS_CHOICES = [
        ('scheduled', 'Scheduled'),
        ('completed', 'Completed'),
        ('cancelled', 'Cancelled'),
    ]
    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name='appointments')
    date = models.DateField(db_index=True)
    time = models.CharField(max_length=5)
    # Copied from the patient when the appointment is booked; never refreshed.
    patient_name = models.CharField(max_length=255)
    mrn = models.CharField(max_length=32)
    phone = models.CharField(max_length=32)
    type = models.CharField(max_length=100)
    provider = models.CharField(max_length=255)
    location = models.CharField(max_length=255)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES)
    notes = models.TextField(blank=True, null=True)

    def __str__(self) -> str:
        return f"{self.patient_name} {self.date} {self.time}"


class ClinicalRecord(models.Model):
    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name='clinical_records')
    date = models.DateField(db_index=True)
    type = models.CharField(max_length=100)
    title = models.CharField(max_length=255)
    content = models.TextField()
    provider = models.CharField(max_length=255)

    def __str__(self) -> str:
        return self.title


class Vitals(models.Model):
    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name='vitals')
    record_date = models.DateField(db_index=True)
    blood_pressure_systolic = models.PositiveIntegerField(null=True, blank=True)
    blood_pressure_diastolic = models.PositiveIntegerField(null=True, blank=True)
    pulse = models.PositiveIntegerField(null=True, blank=True)
    temperature = models.DecimalField(max_digits=4, decimal_places=1, null=True, blank=True)
    weight = models.DecimalField(max_digits=5, decimal_places=1, null=True, blank=True)
    height = models.DecimalField(max_digits=5, decimal_places=1, null=True, blank=True)
    bmi = models.DecimalField(max_digits=4, decimal_places=1, null=True, blank=True)
    oxygen_saturation = models.PositiveIntegerField(null=True, blank=True)
    respiratory_rate = models.PositiveIntegerField(null=True, blank=True)
    notes = models.TextField(blank=True, null=True)
    recorded_by = models.CharField(max_length=255)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name_plural = 'vitals'


class Medication(models.Model):
    STATUS_CHOICES = [
        ('active', 'Active'),
        ('inactive', 'Inactive'),
    ]
    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name='medications')
    name = models.CharField(max_length=255)
    dosage = models.CharField(max_length=100)
    frequency = models.CharField(max_length=100)
    route = models.CharField(max_length=100)
    prescribed_date = models.DateField()
    prescribed_by = models.CharField(max_length=255)
    start_date = models.DateField(null=True, blank=True)
    end_date = models.DateField(null=True, blank=True)
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default='active', db_index=True)
    instructions = models.TextField(blank=True, null=True)
    notes = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"{self.name} {self.dosage}"


class LabResult(models.Model):
    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name='lab_results')
    test_date = models.DateField(db_index=True)
    test_name = models.CharField(max_length=255)
    result = models.CharField(max_length=255)
    unit = models.CharField(max_length=50, blank=True, null=True)
    reference_range = models.CharField(max_length=100, blank=True, null=True)
    status = models.CharField(max_length=50)
    ordered_by = models.CharField(max_length=255)
    performed_by = models.CharField(max_length=255, blank=True, null=True)
    notes = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self) -> str:
        return f"{self.test_name}: {self.result}"


class Allergy(models.Model):
    SEVERITY_CHOICES = [
        ('mild', 'Mild'),
        ('moderate', 'Moderate'),
        ('severe', 'Severe'),
    ]
    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name='allergies')
    allergen = models.CharField(max_length=255)
    reaction = models.CharField(max_length=255)
    severity = models.CharField(max_length=10, choices=SEVERITY_CHOICES)
    notes = models.TextField(blank=True, null=True)
    recorded_date = models.DateField()
    recorded_by = models.CharField(max_length=255)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name_plural = 'allergies'

    def __str__(self) -> str:
        return self.allergen


class Condition(models.Model):
    STATUS_CHOICES = [
        ('active', 'Active'),
        ('inactive', 'Inactive'),
    ]
    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name='conditions')
    condition = models.CharField(max_length=255)
    diagnosed_date = models.DateField()
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default='active', db_index=True)
    diagnosed_by = models.CharField(max_length=255)
    notes = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return self.condition


class Document(models.Model):
    """Metadata for a file kept elsewhere; the backend stores no file content."""
    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name='documents')
    record_id = models.IntegerField(null=True, blank=True)
    file_name = models.CharField(max_length=255)
    file_type = models.CharField(max_length=100)
    file_size = models.PositiveIntegerField()
    file_url = models.URLField(max_length=1024)
    category = models.CharField(max_length=100)
    uploaded_by = models.CharField(max_length=255)
    uploaded_at = models.DateTimeField(auto_now_add=True)
    notes = models.TextField(blank=True, null=True)

    def __str__(self) -> str:
        return self.file_name


# ---------------------------------------------------------------------
# Billing & insurance
# ---------------------------------------------------------------------
class Invoice(models.Model):
    STATUS_CHOICES = [
        ('draft', 'Draft'),
        ('pending', 'Pending'),
        ('paid', 'Paid'),
        ('partially_paid', 'Partially paid'),
        ('overdue', 'Overdue'),
        ('cancelled', 'Cancelled'),
    ]
    user = models.ForeignKey(User, on_delete=models.PROTECT, related_name='invoices')
    patient = models.ForeignKey(Patient, on_delete=models.PROTECT, related_name='invoices')
    appointment = models.ForeignKey(
        Appointment, null=True, blank=True, on_delete=models.SET_NULL, related_name='invoices'
    )
    invoice_number = models.CharField(max_length=32)
    invoice_date = models.DateField(db_index=True)
    due_date = models.DateField()
    subtotal_cents = models.BigIntegerField()
    tax_cents = models.BigIntegerField()
    discount_cents = models.BigIntegerField()
    total_cents = models.BigIntegerField()
    paid_cents = models.BigIntegerField(default=0)
    balance_cents = models.BigIntegerField()
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='draft', db_index=True)
    notes = models.TextField(blank=True, null=True)

    def recompute_total(self) -> None:
        self.total_cents = self.subtotal_cents + self.tax_cents - self.discount_cents
        self.balance_cents = self.total_cents - self.paid_cents

    def __str__(self) -> str:
        return self.invoice_number


class InvoiceItem(models.Model):
    invoice = models.ForeignKey(Invoice, on_delete=models.CASCADE, related_name='items')
    description = models.CharField(max_length=255)
    code = models.CharField(max_length=50, blank=True, null=True)
    quantity = models.PositiveIntegerField()
    unit_price_cents = models.BigIntegerField()
    total_price_cents = models.BigIntegerField()

    def __str__(self) -> str:
        return f"{self.description} x{self.quantity}"


class Payment(models.Model):
    METHOD_CHOICES = [
        ('cash', 'Cash'),
        ('credit_card', 'Credit card'),
        ('debit_card', 'Debit card'),
        ('check', 'Check'),
        ('transfer', 'Bank transfer'),
        ('insurance', 'Insurance'),
        ('online', 'Online'),
    ]
    invoice = models.ForeignKey(Invoice, on_delete=models.CASCADE, related_name='payments')
    patient = models.ForeignKey(Patient, on_delete=models.PROTECT, related_name='payments')
    amount_cents = models.BigIntegerField()
    payment_method = models.CharField(max_length=20, choices=METHOD_CHOICES)
    payment_date = models.DateField(db_index=True)
    transaction_id = models.CharField(max_length=100, blank=True, null=True)
    notes = models.TextField(blank=True, null=True)

    def __str__(self) -> str:
        return f"{self.invoice_id}: {self.amount_cents}"


class InsuranceProvider(models.Model):
    name = models.CharField(max_length=255)
    code = models.CharField(max_length=50, db_index=True)
    phone = models.CharField(max_length=32, blank=True, null=True)
    email = models.EmailField(blank=True, null=True)
    address = models.TextField(blank=True, null=True)
    website = models.URLField(blank=True, null=True)
    active = models.BooleanField(default=True)

    def __str__(self) -> str:
        return f"{self.name} ({self.code})"


class InsuranceClaim(models.Model):
    STATUS_CHOICES = [
        ('draft', 'Draft'),
        ('submitted', 'Submitted'),
        ('pending', 'Pending'),
        ('approved', 'Approved'),
        ('partially_approved', 'Partially approved'),
        ('denied', 'Denied'),
        ('rejected', 'Rejected'),
    ]
    user = models.ForeignKey(User, on_delete=models.PROTECT, related_name='insurance_claims')
    patient = models.ForeignKey(Patient, on_delete=models.PROTECT, related_name='insurance_claims')
    invoice = models.ForeignKey(
        Invoice, null=True, blank=True, on_delete=models.SET_NULL, related_name='insurance_claims'
    )
    insurance = models.ForeignKey(InsuranceProvider, on_delete=models.PROTECT, related_name='claims')
    claim_number = models.CharField(max_length=64)
    submission_date = models.DateField(db_index=True)
    service_date = models.DateField()
    claimed_cents = models.BigIntegerField()
    approved_cents = models.BigIntegerField(null=True, blank=True)
    paid_cents = models.BigIntegerField(null=True, blank=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, db_index=True)
    diagnosis_codes = models.TextField(blank=True, null=True)
    procedure_codes = models.TextField(blank=True, null=True)
    notes = models.TextField(blank=True, null=True)
    denial_reason = models.TextField(blank=True, null=True)

    def __str__(self) -> str:
        return self.claim_number
