"""
Single holder of authentication state for a client process.

Anonymous -> (sign_up | sign_in | restore) -> authenticated -> sign_out.
The token lives on the shared :class:`ApiClient` so every store built on
the same client sends it automatically.
"""
from __future__ import annotations

from .http import ApiClient, ApiError


class AuthSession:
    def __init__(self, client: ApiClient):
        self.client = client
        self.user: dict | None = None
        self.error: str | None = None

    @property
    def token(self) -> str | None:
        return self.client.token

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None and self.client.token is not None

    def _accept(self, body: dict) -> dict:
        self.client.token = body['token']
        self.user = body['user']
        self.error = None
        return self.user

    def sign_up(self, full_name: str, email: str, password: str) -> dict | None:
        try:
            body = self.client.post('/api/auth/signup', {'fullName': full_name, 'email': email, 'password': password})
        except ApiError as exc:
            self.error = exc.message
            return None
        return self._accept(body)

    def sign_in(self, email: str, password: str) -> dict | None:
        try:
            body = self.client.post('/api/auth/login', {'email': email, 'password': password})
        except ApiError as exc:
            self.error = exc.message
            return None
        return self._accept(body)

    def sign_out(self) -> None:
        self.client.token = None
        self.user = None
        self.error = None

    def restore(self, token: str) -> dict | None:
        """Adopt a previously issued token if the server still accepts it."""
        self.client.token = token
        try:
            body = self.client.get('/api/auth/user')
        except ApiError as exc:
            self.sign_out()
            self.error = exc.message
            return None
        self.user = body['user']
        self.error = None
        return self.user

    def update_user(self, *, full_name: str | None = None, email: str | None = None) -> dict | None:
        payload = {}
        if full_name:
            payload['fullName'] = full_name
        if email:
            payload['email'] = email
        try:
            body = self.client.put('/api/auth/user', payload)
        except ApiError as exc:
            self.error = exc.message
            return None
        self.user = body['user']
        self.error = None
        return self.user
