from __future__ import annotations

import logging

import requests

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Failed API call: HTTP status (0 for transport errors), message and field errors."""

    def __init__(self, status: int, message: str, fields: list | None = None):
        super().__init__(message)
        self.status = status
        self.message = message
        self.fields = fields or []


class ApiClient:
    """Thin JSON wrapper around a ``requests`` session.

    No retries and no caching: every call is one HTTP request and any
    failure is raised as :class:`ApiError`.
    """

    def __init__(self, base_url: str, session: requests.Session | None = None, timeout: float = 10.0):
        self.base_url = base_url.rstrip('/')
        self.http = session or requests.Session()
        self.timeout = timeout
        self.token: str | None = None

    def request(self, method: str, path: str, *, params=None, json=None):
        headers = {'Accept': 'application/json'}
        if self.token:
            headers['Authorization'] = f'Bearer {self.token}'
        url = f'{self.base_url}{path}'
        try:
            resp = self.http.request(method, url, params=params, json=json, headers=headers, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.warning('%s %s failed: %s', method, path, exc)
            raise ApiError(0, str(exc)) from exc

        if resp.status_code == 204 or not resp.content:
            body = None
        else:
            try:
                body = resp.json()
            except ValueError:
                body = None

        if resp.status_code >= 400:
            error = body.get('error') if isinstance(body, dict) else None
            error = error if isinstance(error, dict) else {}
            message = error.get('message') or resp.reason or f'HTTP {resp.status_code}'
            raise ApiError(resp.status_code, message, error.get('fields'))
        return body

    def get(self, path: str, **params):
        return self.request('GET', path, params=params or None)

    def post(self, path: str, payload: dict):
        return self.request('POST', path, json=payload)

    def put(self, path: str, payload: dict):
        return self.request('PUT', path, json=payload)

    def delete(self, path: str):
        return self.request('DELETE', path)
