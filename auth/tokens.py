"""
auth/tokens.py -- JWT, password hashing, and session cookie utilities.

Security design decisions:
  JWT: python-jose with HS256. Tokens are signed with JWT_SECRET and carry
       only the user id (sub), issued-at and expiry. Verification returns None
       on any failure -- the gating dependency turns that into a 401.

  Passwords: bcrypt, used directly (no passlib wrapper). The cost factor comes
       from Settings.bcrypt_rounds (12 unless overridden for tests).

  Cookie: set_auth_cookie() and clear_auth_cookie() share _cookie_attrs().
       Browsers only drop a cookie when the clearing Set-Cookie carries the
       same path/flags as the one that created it.

  JWT_SECRET: sourced from core.config.get_settings(). Settings refuses to
       build without it, so importing this module fails fast when the secret
       is missing.

Layer rule: no imports from api/. Import from core/ is allowed.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

import bcrypt
from jose import JWTError, jwt

from core.config import get_settings

logger = logging.getLogger("authgate.auth")

# ---------------------------------------------------------------------------
# Config -- read once at module load via the lru_cache singleton
# ---------------------------------------------------------------------------

_settings = get_settings()

_ALGORITHM = "HS256"

AUTH_COOKIE_NAME = "jwt"

# bcrypt only looks at the first 72 bytes; bcrypt>=5 raises instead of
# truncating, so cut explicitly on both the hash and the verify side.
_BCRYPT_MAX_BYTES = 72

# ---------------------------------------------------------------------------
# Password hashing
# ---------------------------------------------------------------------------


def _password_bytes(plain: str) -> bytes:
    return plain.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def hash_password(plain: str, rounds: int = 0) -> str:
    """Return a bcrypt hash of the given plaintext password.

    rounds=0 uses Settings.bcrypt_rounds.
    """
    cost = rounds if rounds > 0 else _settings.bcrypt_rounds
    return bcrypt.hashpw(_password_bytes(plain), bcrypt.gensalt(rounds=cost)).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    """Return True if the plaintext password matches the bcrypt hash.

    bcrypt.checkpw compares in constant time. A malformed stored hash counts
    as a mismatch rather than an error.
    """
    try:
        return bcrypt.checkpw(_password_bytes(plain), hashed.encode("utf-8"))
    except ValueError:
        return False


# ---------------------------------------------------------------------------
# JWT encode / decode
# ---------------------------------------------------------------------------


def create_access_token(user_id: str, issued_at: datetime | None = None, expire_seconds: int = 0) -> str:
    """Encode a signed JWT for the given user id.

    Args:
        user_id:        Store-assigned id; becomes the "sub" claim.
        issued_at:      Issue time. Defaults to now (UTC).
        expire_seconds: Lifetime in seconds. If 0 (default), uses
                        Settings.token_expire_seconds (7 days).
    """
    duration = expire_seconds if expire_seconds > 0 else _settings.token_expire_seconds
    issued = issued_at or datetime.now(timezone.utc)
    payload = {
        "sub": user_id,
        "iat": issued,
        "exp": issued + timedelta(seconds=duration),
    }
    return jwt.encode(payload, _settings.jwt_secret, algorithm=_ALGORITHM)


def decode_access_token(token: str) -> dict | None:
    """Decode and verify a JWT. Returns the payload dict or None on any failure.

    Covers bad signature, expiry, malformed input and a missing subject. None
    is the only failure signal -- this function never raises for a bad token.
    """
    try:
        payload = jwt.decode(token, _settings.jwt_secret, algorithms=[_ALGORITHM])
    except JWTError as exc:
        logger.debug("Rejected session token: %s", exc)
        return None
    if not payload.get("sub"):
        return None
    return payload


# ---------------------------------------------------------------------------
# Cookie helpers
# ---------------------------------------------------------------------------


def _cookie_attrs(secure: bool | None) -> dict:
    """Attributes shared by set and clear.

    httponly=True: JS cannot read the cookie (XSS mitigation).
    samesite="strict": never sent on cross-site requests (CSRF mitigation).
    secure: HTTPS only, unless APP_ENV=development.
    """
    return {
        "path": "/",
        "httponly": True,
        "samesite": "strict",
        "secure": (not _settings.is_development) if secure is None else secure,
    }


def set_auth_cookie(response, token: str, secure: bool | None = None) -> None:
    """Write the JWT as the session cookie on the response.

    max_age matches the JWT lifetime so cookie and token expire together.
    """
    response.set_cookie(
        AUTH_COOKIE_NAME,
        value=token,
        max_age=_settings.token_expire_seconds,
        **_cookie_attrs(secure),
    )


def clear_auth_cookie(response, secure: bool | None = None) -> None:
    """Expire the session cookie using the same attributes it was set with."""
    response.delete_cookie(AUTH_COOKIE_NAME, **_cookie_attrs(secure))
