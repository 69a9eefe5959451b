"""Clinical application for the MedFlow backend.

This package holds the staff user model, patients and their clinical,
billing and insurance records, together with the serializers, services,
views and route registrations that expose them as JSON resources.
"""
