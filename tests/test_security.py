"""Tests for token handling and the admin dependency."""

from __future__ import annotations

import time

import pytest
from fastapi import HTTPException
from fastapi.security import HTTPAuthorizationCredentials
from httpx import AsyncClient

from volunteer_board_api.app.core.config import Settings
from volunteer_board_api.app.core.security import (
    create_access_token,
    decode_access_token,
    get_token_verifier,
    require_admin,
    verify_token_email,
)

_SECRET = "test-secret-key"


def _settings(**overrides: object) -> Settings:
    values = {"secret_key": _SECRET, "admin_emails": ("admin@example.com",), "admin_secret": ""}
    values.update(overrides)
    return Settings(**values)


def _bearer(token: str) -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


class TestTokens:
    def test_round_trip(self) -> None:
        token = create_access_token({"sub": "admin@example.com"}, _settings())
        payload = decode_access_token(token, _SECRET)
        assert payload is not None
        assert payload["sub"] == "admin@example.com"
        assert payload["exp"] > time.time()

    def test_wrong_secret(self) -> None:
        token = create_access_token({"sub": "admin@example.com"}, _settings())
        assert decode_access_token(token, "another-secret") is None

    def test_expired(self) -> None:
        token = create_access_token({"sub": "admin@example.com"}, _settings(), expires_delta=-10)
        assert decode_access_token(token, _SECRET) is None

    @pytest.mark.parametrize("token", ["", "a.b", "a.b.c", "not a token at all"])
    def test_garbage(self, token: str) -> None:
        assert decode_access_token(token, _SECRET) is None

    def test_verify_token_email_prefers_email_claim(self) -> None:
        token = create_access_token({"sub": "user-1", "email": "Admin@Example.com"}, _settings())
        assert verify_token_email(token, _settings()) == "admin@example.com"

    def test_verify_token_email_requires_an_email(self) -> None:
        token = create_access_token({"sub": "user-1"}, _settings())
        assert verify_token_email(token, _settings()) is None


class TestRequireAdmin:
    def test_allowlisted_bearer(self) -> None:
        settings = _settings()
        token = create_access_token({"sub": "admin@example.com"}, settings)
        principal = require_admin(_bearer(token), None, settings, verify_token_email)
        assert principal == {"sub": "admin@example.com", "method": "bearer"}

    def test_any_verified_email_when_allowlist_empty(self) -> None:
        settings = _settings(admin_emails=())
        token = create_access_token({"sub": "someone@example.com"}, settings)
        principal = require_admin(_bearer(token), None, settings, verify_token_email)
        assert principal["sub"] == "someone@example.com"

    def test_not_allowlisted(self) -> None:
        settings = _settings()
        token = create_access_token({"sub": "outsider@example.com"}, settings)
        with pytest.raises(HTTPException) as exc_info:
            require_admin(_bearer(token), None, settings, verify_token_email)
        assert exc_info.value.status_code == 403

    def test_legacy_secret_disabled_when_unset(self) -> None:
        with pytest.raises(HTTPException) as exc_info:
            require_admin(None, "anything", _settings(admin_secret=""), verify_token_email)
        assert exc_info.value.status_code == 401

    def test_legacy_secret(self) -> None:
        principal = require_admin(None, "s3cret", _settings(admin_secret="s3cret"), verify_token_email)
        assert principal == {"sub": "admin_secret", "method": "admin_secret"}


@pytest.mark.asyncio
async def test_token_verifier_can_be_replaced(app, client: AsyncClient) -> None:
    """Another identity provider can be plugged in via dependency overrides."""
    app.dependency_overrides[get_token_verifier] = lambda: (
        lambda token, settings: "admin@example.com" if token == "provider-token" else None
    )
    try:
        ok = await client.get("/api/v1/signups", headers={"Authorization": "Bearer provider-token"})
        rejected = await client.get("/api/v1/signups", headers={"Authorization": "Bearer other"})
    finally:
        app.dependency_overrides.pop(get_token_verifier, None)
    assert ok.status_code == 200
    assert rejected.status_code == 401
