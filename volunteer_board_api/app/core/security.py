"""
Security helpers for bearer token verification and admin access.

This module implements a lightweight JSON Web Token (JWT) mechanism
using HMAC‑SHA256 signatures and base64url encoding.  Tokens embed
arbitrary claims and an expiration timestamp (``exp``).  The
``SECRET_KEY`` from the application settings signs and verifies them.

Administrative routes depend on ``require_admin``, which accepts
either a bearer token that resolves to an allowlisted email, or the
legacy shared secret sent in the ``X-Admin-Token`` header.  Turning a
token into an email is delegated to a *token verifier*; the default
one decodes the JWTs produced by ``create_access_token`` and can be
swapped through FastAPI's dependency overrides for another identity
provider.
"""

import base64
import hashlib
import hmac
import json
import logging
import time
from typing import Callable, Dict, Optional

from fastapi import Depends, Header, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .config import Settings, get_settings

logger = logging.getLogger(__name__)

TokenVerifier = Callable[[str, Settings], Optional[str]]


def _b64_url_encode(data: bytes) -> str:
    """Base64‑url encode bytes without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("utf-8")


def _b64_url_decode(data: str) -> bytes:
    """Decode base64‑url encoded string, adding padding if necessary."""
    padding = '=' * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def _sign(message: bytes, secret: str) -> bytes:
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).digest()


def create_access_token(data: Dict[str, str], settings: Settings, expires_delta: Optional[int] = None) -> str:
    """Create a signed JWT token with the given payload.

    The payload is extended with an ``exp`` field representing the
    expiration time as a UNIX timestamp.  Clients send the token in
    the ``Authorization`` header as ``Bearer <token>``.

    Parameters
    ----------
    data : dict
        Claims to embed in the token (e.g. {"sub": "admin@example.com"}).
    settings : Settings
        Provides the signing key and the default lifetime.
    expires_delta : Optional[int]
        Lifetime of the token in seconds.  Defaults to
        ``settings.access_token_expire_minutes * 60``.
    """
    to_encode = dict(data)
    exp_seconds = expires_delta or settings.access_token_expire_minutes * 60
    to_encode["exp"] = int(time.time()) + exp_seconds
    header = {"alg": settings.algorithm, "typ": "JWT"}
    header_b64 = _b64_url_encode(json.dumps(header, separators=(',', ':')).encode("utf-8"))
    payload_b64 = _b64_url_encode(json.dumps(to_encode, separators=(',', ':')).encode("utf-8"))
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    signature_b64 = _b64_url_encode(_sign(signing_input, settings.secret_key))
    return f"{header_b64}.{payload_b64}.{signature_b64}"


def decode_access_token(token: str, secret_key: str) -> Optional[Dict[str, object]]:
    """Verify and decode a JWT token.

    Returns the payload dictionary when the signature matches and the
    ``exp`` claim lies in the future, otherwise ``None``.
    """
    parts = token.split('.')
    if len(parts) != 3:
        return None
    header_b64, payload_b64, signature_b64 = parts
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    try:
        actual_sig = _b64_url_decode(signature_b64)
        if not hmac.compare_digest(_sign(signing_input, secret_key), actual_sig):
            return None
        data = json.loads(_b64_url_decode(payload_b64).decode("utf-8"))
    except (ValueError, UnicodeDecodeError):
        return None
    if not isinstance(data, dict):
        return None
    try:
        if data.get("exp") is None or int(data["exp"]) < int(time.time()):
            return None
    except (TypeError, ValueError):
        return None
    return data


def verify_token_email(token: str, settings: Settings) -> Optional[str]:
    """Default token verifier: resolve a signed JWT to its email claim."""
    payload = decode_access_token(token, settings.secret_key)
    if not payload:
        return None
    email = payload.get("email") or payload.get("sub")
    if not isinstance(email, str) or "@" not in email:
        return None
    return email.strip().lower()


def get_token_verifier() -> TokenVerifier:
    """Dependency returning the callable that maps tokens to emails."""
    return verify_token_email


security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str = "Unauthorized") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def require_admin(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    x_admin_token: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings),
    verify: TokenVerifier = Depends(get_token_verifier),
) -> Dict[str, str]:
    """Dependency that authenticates an administrator.

    A bearer token always takes precedence.  It must resolve to an
    email, and when ``ADMIN_EMAILS`` is configured that email must be
    on the list (403 otherwise).  Without a bearer token the legacy
    ``X-Admin-Token`` header is compared against ``ADMIN_SECRET``.
    Any other request is rejected with 401.

    Returns the authenticated principal as ``{"sub": ..., "method": ...}``.
    """
    if credentials is not None and credentials.credentials:
        email = verify(credentials.credentials, settings)
        if not email:
            raise _unauthorized()
        if settings.admin_emails and email not in settings.admin_emails:
            logger.warning("Rejected admin request from non-allowlisted email %s", email)
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
        return {"sub": email, "method": "bearer"}

    if settings.admin_secret:
        if not x_admin_token or not hmac.compare_digest(
            x_admin_token.encode("utf-8"), settings.admin_secret.encode("utf-8")
        ):
            raise _unauthorized()
        return {"sub": "admin_secret", "method": "admin_secret"}

    raise _unauthorized()
