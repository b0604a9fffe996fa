# shop_admin/api/repositories/auth_repo.py
from __future__ import annotations

from ..client import ApiClient
from ..schemas import AuthResult, as_mapping


class AuthRepo:
    """Credential issuance and account bootstrap. None of these need a token."""

    def __init__(self, api: ApiClient):
        self.api = api

    def login(self, email: str, password: str) -> AuthResult:
        data = self.api.post(
            "/auth/login",
            {"email": email.strip(), "password": password},
            fallback="Login failed",
        )
        return AuthResult.from_api(as_mapping(data))

    def register(self, name: str, email: str, password: str) -> None:
        self.api.post(
            "/auth/register",
            {"name": name.strip(), "email": email.strip(), "password": password},
            fallback="Registration failed",
        )

    def forgot_password(self, email: str) -> str:
        """Returns the server's confirmation message."""
        data = self.api.post(
            "/auth/forgot-password",
            {"email": email.strip()},
            fallback="Failed to send reset email",
        )
        return str(as_mapping(data).get("message") or "Reset instructions sent.")
