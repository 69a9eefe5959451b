"""
Bearer token authentication.

This module defines a subclass of simplejwt's ``JWTAuthentication`` so
that settings have a stable import path.  Every token problem (missing
user, bad signature, expiry, malformed header) is collapsed into the
same ``AuthenticationFailed`` so the client cannot tell them apart.
"""
from __future__ import annotations

from rest_framework import exceptions
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import InvalidToken, AuthenticationFailed


class BearerTokenAuthentication(JWTAuthentication):
    """JWT authentication using the ``Bearer`` keyword."""

    def authenticate(self, request):
        try:
            return super().authenticate(request)
        except (InvalidToken, AuthenticationFailed):
            raise exceptions.AuthenticationFailed('Unauthorized')

    def authenticate_header(self, request):
        return 'Bearer'
