# app/core/errors.py
from __future__ import annotations


class AuthError(Exception):
    """Base for the typed, user-facing failures of the auth service."""

    code = "AUTH_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UserAlreadyExistsError(AuthError):
    code = "USER_ALREADY_EXISTS"

    def __init__(self, email: str):
        super().__init__(f"User already exists with email: {email}")
        self.email = email


class InvalidCredentialsError(AuthError):
    code = "INVALID_CREDENTIALS"

    def __init__(self):
        super().__init__("Invalid email or password")


class UserNotFoundError(AuthError):
    code = "USER_NOT_FOUND"

    def __init__(self, user_id: int | str):
        super().__init__(f"User not found with id: {user_id}")
        self.user_id = user_id


class TenantNotFoundError(AuthError):
    code = "TENANT_NOT_FOUND"

    def __init__(self, tenant_id: int | str):
        super().__init__(f"Tenant not found with id: {tenant_id}")
        self.tenant_id = tenant_id


class SessionRevokedError(AuthError):
    code = "REFRESH_TOKEN_REVOKED"

    def __init__(self, session_id: int | str):
        super().__init__("Refresh token revoked")
        self.session_id = session_id


class SecretNotFoundError(AuthError):
    """A signing key or secret is not configured. Deployment fault, not a client error."""

    code = "SECRET_NOT_FOUND"

    def __init__(self, secret_name: str):
        super().__init__(f"Secret Not Found: {secret_name}")
        self.secret_name = secret_name


class AdminCredentialsNotFound(AuthError):
    code = "ADMIN_CREDENTIALS_NOT_FOUND"

    def __init__(self):
        super().__init__("Admin Credentials Not Found")
