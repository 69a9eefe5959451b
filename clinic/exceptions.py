"""
Unified error envelope for every API response.

All failures leave the API as ``{"ok": false, "error": {...}}`` with a
stable ``code``.  Validation failures carry a ``fields`` list of
``{field, message}`` pairs; authentication failures never reveal why
the credentials were rejected.
"""
from __future__ import annotations

import logging

from django.conf import settings
from django.db import IntegrityError
from django.db.models import ProtectedError
from django.http import Http404
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger(__name__)


class ConflictError(exceptions.APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Resource already exists'
    default_code = 'conflict'


class InvalidCredentials(exceptions.APIException):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = 'Invalid credentials'
    default_code = 'invalid_credentials'


def _flatten(detail, prefix: str = '') -> list[dict]:
    """Turn DRF's nested error detail into ``[{field, message}]``."""
    out: list[dict] = []
    if isinstance(detail, dict):
        for key, value in detail.items():
            name = f"{prefix}.{key}" if prefix else str(key)
            if key == 'non_field_errors':
                name = prefix or 'non_field_errors'
            out.extend(_flatten(value, name))
    elif isinstance(detail, list):
        for i, value in enumerate(detail):
            if isinstance(value, (dict, list)):
                out.extend(_flatten(value, f"{prefix}[{i}]" if prefix else str(i)))
            else:
                out.append({'field': prefix, 'message': str(value)})
    else:
        out.append({'field': prefix, 'message': str(detail)})
    return out


def _error(code: str, message: str, http_status: int, **extra) -> Response:
    body = {'code': code, 'message': message}
    body.update(extra)
    return Response({'ok': False, 'error': body}, status=http_status)


def api_exception_handler(exc, context):
    if isinstance(exc, (IntegrityError, ProtectedError)):
        logger.info('conflict: %s', exc)
        if isinstance(exc, ProtectedError):
            return _error('conflict', 'Resource is referenced by other records', status.HTTP_409_CONFLICT)
        return _error('conflict', 'Resource already exists', status.HTTP_409_CONFLICT)

    resp = drf_exception_handler(exc, context)
    if resp is None:
        request = context.get('request')
        logger.exception('unhandled error on %s %s', getattr(request, 'method', '-'), getattr(request, 'path', '-'))
        message = 'Internal server error' if settings.ENV == 'prod' else str(exc)
        return _error('server_error', message, status.HTTP_500_INTERNAL_SERVER_ERROR)

    if isinstance(exc, exceptions.ValidationError):
        return _error('validation_error', 'Validation failed', resp.status_code, fields=_flatten(exc.detail))
    if isinstance(exc, (exceptions.NotAuthenticated, exceptions.AuthenticationFailed)):
        resp = _error('unauthorized', 'Unauthorized', status.HTTP_401_UNAUTHORIZED)
        resp['WWW-Authenticate'] = 'Bearer'
        return resp
    if isinstance(exc, (exceptions.NotFound, Http404)):
        return _error('not_found', 'Not found', status.HTTP_404_NOT_FOUND)
    if isinstance(exc, exceptions.Throttled):
        throttled = _error('rate_limited', 'Too many requests, please try again later', resp.status_code)
        if resp.has_header('Retry-After'):
            throttled['Retry-After'] = resp['Retry-After']
        return throttled

    detail = getattr(exc, 'detail', None)
    code = getattr(exc, 'default_code', None) or 'api_error'
    return _error(code, str(detail) if detail is not None else str(exc), resp.status_code)
