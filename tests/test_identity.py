"""Tests for the Supabase-backed identity verifier."""

from types import SimpleNamespace

import pytest

from services.identity import AuthenticationError, SupabaseIdentityVerifier


class FakeAuth:
    """Stands in for `client.auth`; returns `result` or raises `error`."""

    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.tokens = []

    def get_user(self, token):
        self.tokens.append(token)
        if self.error:
            raise self.error
        return self.result


def _verifier(auth):
    return SupabaseIdentityVerifier(client=SimpleNamespace(auth=auth))


def _user_response(**user):
    return SimpleNamespace(user=SimpleNamespace(**user))


async def test_confirmed_email_is_verified():
    auth = FakeAuth(
        _user_response(id="u-1", email="host@example.com", email_confirmed_at="2024-05-01T10:00:00Z")
    )

    identity = await _verifier(auth).verify("good-token")

    assert identity.subject_id == "u-1"
    assert identity.email == "host@example.com"
    assert identity.email_verified is True
    assert auth.tokens == ["good-token"]


async def test_unconfirmed_email_is_not_verified():
    auth = FakeAuth(_user_response(id="u-2", email="new@example.com", email_confirmed_at=None))

    identity = await _verifier(auth).verify("good-token")

    assert identity.email_verified is False


@pytest.mark.parametrize(
    "message, code",
    [
        ("JWT expired", "AUTH_TOKEN_EXPIRED"),
        ("invalid JWT: unable to parse or verify signature", "AUTH_TOKEN_INVALID"),
        ("User from sub claim in JWT does not exist", "AUTH_FAILED"),
    ],
)
async def test_provider_rejections_map_to_codes(message, code):
    verifier = _verifier(FakeAuth(error=Exception(message)))

    with pytest.raises(AuthenticationError) as excinfo:
        await verifier.verify("some-token")

    assert excinfo.value.code == code


@pytest.mark.parametrize(
    "response",
    [
        SimpleNamespace(user=None),
        _user_response(id="", email="host@example.com"),
        None,
    ],
)
async def test_response_without_user_id_fails(response):
    with pytest.raises(AuthenticationError) as excinfo:
        await _verifier(FakeAuth(response)).verify("good-token")

    assert excinfo.value.code == "AUTH_FAILED"


async def test_empty_token_is_missing_without_provider_call():
    auth = FakeAuth(_user_response(id="u-1"))

    with pytest.raises(AuthenticationError) as excinfo:
        await _verifier(auth).verify("")

    assert excinfo.value.code == "AUTH_TOKEN_MISSING"
    assert auth.tokens == []
