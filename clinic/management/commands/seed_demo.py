"""
Management command to populate the database with demo data.

Safe to run repeatedly: rows are looked up by a natural key (email,
SKU, order number, ...) and only created when missing, and the demo
accounts get their password reset to the documented value.
"""
from datetime import timedelta

from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from clinic.models import Appointment, InsuranceProvider, Patient, User
from clinic.services.patients import create_patient
from inventory.models import Batch, Product, PurchaseOrder, SalesOrder, Supplier

DEMO_PASSWORD = 'Password123'

DEMO_USERS = [
    ('admin@medflow.local', 'Admin User', True),
    ('doctor@medflow.local', 'Dana Doctor', False),
    ('pharmacist@medflow.local', 'Pat Pharmacist', False),
]

DEMO_PATIENTS = [
    {'full_name': 'Jane Doe', 'dob': '1990-01-01', 'gender': 'Female', 'phone': '555-1234',
     'email': 'jane@example.com', 'address': '1 Main St'},
    {'full_name': 'John Smith', 'dob': '1978-06-15', 'gender': 'Male', 'phone': '555-2345',
     'email': 'john.smith@example.com', 'address': '22 Oak Ave'},
    {'full_name': 'Alex Rivera', 'dob': '2001-11-30', 'gender': 'Other', 'phone': '555-3456',
     'email': 'alex.rivera@example.com', 'address': '9 Elm Rd'},
]

DEMO_PROVIDERS = [
    ('Blue Shield', 'BSH', 'claims@blueshield.example'),
    ('Aetna', 'AET', 'claims@aetna.example'),
]

DEMO_PRODUCTS = [
    # sku, name, category, price cents, stock, reorder level
    ('AMX-500', 'Amoxicillin 500mg', 'antibiotics', 1250, 240, 50),
    ('IBU-200', 'Ibuprofen 200mg', 'anti-inflammatory', 450, 8, 20),
    ('PCM-500', 'Paracetamol 500mg', 'analgesics', 300, 500, 100),
    ('VTD-1000', 'Vitamin D3 1000IU', 'vitamins', 900, 35, 40),
]


class Command(BaseCommand):
    help = "Create demo users, patients and inventory (idempotent)."

    @transaction.atomic
    def handle(self, *args, **options):
        users = self.ensure_users()
        patients = self.ensure_patients()
        self.ensure_appointments(patients)
        self.ensure_providers()
        self.ensure_inventory(users[-1])
        self.stdout.write(self.style.SUCCESS('Demo data ensured.'))

    def ensure_users(self):
        users = []
        for email, full_name, is_admin in DEMO_USERS:
            user = User.objects.filter(email=email).first()
            if user is None:
                user = User.objects.create_user(
                    email=email, password=DEMO_PASSWORD, full_name=full_name,
                    is_staff=is_admin, is_superuser=is_admin,
                )
            else:
                user.set_password(DEMO_PASSWORD)
                user.is_active = True
                user.save(update_fields=['password', 'is_active'])
            users.append(user)
            self.stdout.write(self.style.SUCCESS(f'ok: {email}'))
        return users

    def ensure_patients(self):
        patients = []
        for data in DEMO_PATIENTS:
            patient = Patient.objects.filter(email=data['email']).first()
            if patient is None:
                patient = create_patient(data)
            patients.append(patient)
            self.stdout.write(self.style.SUCCESS(f'ok: {patient.mrn} {patient.full_name}'))
        return patients

    def ensure_appointments(self, patients):
        day = timezone.localdate() + timedelta(days=1)
        for i, patient in enumerate(patients):
            if patient.appointments.exists():
                continue
            Appointment.objects.create(
                patient=patient, date=day, time=f'{9 + i:02d}:00',
                patient_name=patient.full_name, mrn=patient.mrn, phone=patient.phone,
                type='Consultation', provider='Dr. Dana Doctor', location='Room 1', status='scheduled',
            )

    def ensure_providers(self):
        for name, code, email in DEMO_PROVIDERS:
            InsuranceProvider.objects.get_or_create(code=code, defaults={'name': name, 'email': email})

    def ensure_inventory(self, owner):
        today = timezone.localdate()
        supplier, _ = Supplier.objects.get_or_create(
            name='MedSupply Co', defaults={'contact_person': 'Sam Supply', 'city': 'Springfield'},
        )
        for sku, name, category, price, stock, reorder in DEMO_PRODUCTS:
            product, created = Product.objects.get_or_create(
                sku=sku,
                defaults={
                    'name': name, 'category': category, 'price_cents': price,
                    'stock_quantity': stock, 'reorder_level': reorder, 'owner': owner,
                },
            )
            if created:
                Batch.objects.create(
                    product=product, batch_number=f'{sku}-B1', manufacture_date=today - timedelta(days=300),
                    expiry_date=today + timedelta(days=60), quantity=stock, location='Shelf A', owner=owner,
                )
        PurchaseOrder.objects.get_or_create(
            po_number='PO-0001',
            defaults={'supplier': supplier, 'order_date': today, 'total_cents': 125000, 'owner': owner},
        )
        SalesOrder.objects.get_or_create(
            so_number='SO-0001',
            defaults={'customer_name': 'City Pharmacy', 'order_date': today, 'total_cents': 48000,
                      'status': 'processing', 'owner': owner},
        )
