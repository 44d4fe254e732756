"""FastAPI dependencies for authentication and shared resources."""

from functools import lru_cache

from fastapi import Depends, Header, HTTPException, status

from core.config import REQUIRE_VERIFIED_EMAIL
from core.database import get_backend
from services.events import EventStore
from services.identity import (
    AuthenticationError,
    AuthErrorCodes,
    Identity,
    IdentityVerifier,
    SupabaseIdentityVerifier,
)


@lru_cache(maxsize=1)
def get_event_store() -> EventStore:
    """Event store over the configured backend (lazy initialization)."""
    return EventStore(get_backend())


@lru_cache(maxsize=1)
def get_identity_verifier() -> IdentityVerifier:
    """Supabase-backed verifier; the client is created on first verify."""
    return SupabaseIdentityVerifier()


def _auth_failure(code: str, message: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail={"success": False, "error": message, "code": code},
    )


def bearer_token(authorization: str | None) -> str | None:
    """Extract the credential from an 'Authorization: Bearer <token>' value."""
    if authorization and authorization.startswith("Bearer "):
        return authorization[len("Bearer "):].strip() or None
    return None


async def require_identity(
    authorization: str | None = Header(default=None),
    verifier: IdentityVerifier = Depends(get_identity_verifier),
) -> Identity:
    """
    Verify the bearer token before any store access.

    Raises:
        HTTPException: 401 with an AUTH_* code if the token is missing or rejected
    """
    token = bearer_token(authorization)
    if not token:
        raise _auth_failure(AuthErrorCodes.TOKEN_MISSING, "Authentication token required")

    try:
        return await verifier.verify(token)
    except AuthenticationError as e:
        raise _auth_failure(e.code, e.message)


async def require_verified_user(
    identity: Identity = Depends(require_identity),
) -> Identity:
    """Additionally reject unconfirmed emails when REQUIRE_VERIFIED_EMAIL is on."""
    if REQUIRE_VERIFIED_EMAIL and not identity.email_verified:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={
                "success": False,
                "error": "Email verification required",
                "code": AuthErrorCodes.EMAIL_NOT_VERIFIED,
            },
        )
    return identity
