"""
Bearer token verification against Supabase Auth.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Protocol

logger = logging.getLogger(__name__)


class AuthErrorCodes:
    """Machine-readable authentication failure codes."""

    TOKEN_MISSING = "AUTH_TOKEN_MISSING"
    TOKEN_EXPIRED = "AUTH_TOKEN_EXPIRED"
    TOKEN_INVALID = "AUTH_TOKEN_INVALID"
    FAILED = "AUTH_FAILED"
    EMAIL_NOT_VERIFIED = "EMAIL_NOT_VERIFIED"


class AuthenticationError(Exception):
    """Raised when a credential is missing or rejected."""

    def __init__(self, code: str, message: str):
        self.code = code
        self.message = message
        super().__init__(message)


@dataclass(frozen=True)
class Identity:
    """Verified subject behind a bearer token."""

    subject_id: str
    email: str | None = None
    email_verified: bool = False


class IdentityVerifier(Protocol):
    async def verify(self, token: str) -> Identity: ...


def classify_auth_failure(exc: Exception) -> AuthenticationError:
    """Map a provider rejection to an AuthenticationError by its message."""
    message = str(exc).lower()
    if "expired" in message:
        return AuthenticationError(AuthErrorCodes.TOKEN_EXPIRED, "Token expired")
    if "invalid" in message:
        return AuthenticationError(AuthErrorCodes.TOKEN_INVALID, "Invalid token")
    return AuthenticationError(AuthErrorCodes.FAILED, "Authentication failed")


class SupabaseIdentityVerifier:
    """Resolves tokens with `auth.get_user`, run off the event loop."""

    def __init__(self, client=None):
        self._client = client

    @property
    def client(self):
        if self._client is None:
            from core.supabase_client import get_supabase_client

            self._client = get_supabase_client()
        return self._client

    async def verify(self, token: str) -> Identity:
        if not token:
            raise AuthenticationError(
                AuthErrorCodes.TOKEN_MISSING, "Authentication token required"
            )
        # Resolved outside the try: missing configuration is a server error
        auth = self.client.auth
        try:
            response = await asyncio.to_thread(auth.get_user, token)
        except Exception as e:
            logger.warning("Authentication error: %s", e)
            raise classify_auth_failure(e) from e

        user = getattr(response, "user", None)
        if not user or not getattr(user, "id", None):
            raise AuthenticationError(AuthErrorCodes.FAILED, "Authentication failed")

        return Identity(
            subject_id=str(user.id),
            email=getattr(user, "email", None),
            email_verified=bool(getattr(user, "email_confirmed_at", None)),
        )
