# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261017v1
# ---------------------------------------------------------------------------
"""
Central security module.  All cryptographic primitives and auth guards live
here.  No other module should touch raw crypto directly.

Responsibilities
----------------
1. Password hashing / verification          (passlib pbkdf2_sha256)
2. JWT creation / decoding                  (PyJWT / HS256)
3. FastAPI dependency guards                (get_current_principal, require_admin)

Known limitation
----------------
The admin flag is baked into the token when it is issued and is NOT looked up
again per request.  A user removed from the Admin role keeps admin access
until their token expires.  Tokens cannot be revoked.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt as _jwt        # PyJWT
from passlib.hash import pbkdf2_sha256 as _pbkdf2  # pure Python, no binary deps
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from core.config import settings
from core.errors import Forbidden, Unauthenticated

_ALGORITHM = "HS256"

# ---------------------------------------------------------------------------
# 1.  pbkdf2_sha256 – password hashing
# ---------------------------------------------------------------------------
# Default iteration count is 600 000; tests lower it through
# PASSWORD_HASH_ROUNDS to keep the suite fast.
# ---------------------------------------------------------------------------


def hash_password(plain: str) -> str:
    """Hash a plaintext password.  The salt is embedded in the returned string."""
    return _pbkdf2.using(rounds=settings.password_hash_rounds).hash(plain)


def verify_password(plain: str, stored_hash: str) -> bool:
    """
    Constant-time verification of a plaintext password against a
    pbkdf2_sha256 hash produced by :func:`hash_password`.
    """
    try:
        return _pbkdf2.verify(plain, stored_hash)
    except ValueError:
        # Malformed stored hash – treat as a mismatch, never as a crash
        return False


# ---------------------------------------------------------------------------
# 2.  JWT – session tokens
# ---------------------------------------------------------------------------


def issue_token(
    user_id: int,
    email: str,
    is_admin: bool,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Sign a session token with HS256.

    Claims: sub (user id as string), email, is_admin, iss, iat, exp.
    """
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.access_token_expire_minutes))
    to_encode = {
        "sub": str(user_id),
        "email": email,
        "is_admin": bool(is_admin),
        "iss": settings.jwt_issuer,
        "iat": now,
        "exp": expire,
    }
    return _jwt.encode(to_encode, settings.secret_key, algorithm=_ALGORITHM)


def decode_access_token(token: str) -> dict:
    """
    Decode and verify a session token: signature, issuer and expiry, with
    ``token_clock_skew_seconds`` of leeway.  No audience check.

    Raises :class:`Unauthenticated` on any failure.
    """
    try:
        return _jwt.decode(
            token,
            settings.secret_key,
            algorithms=[_ALGORITHM],
            issuer=settings.jwt_issuer,
            leeway=timedelta(seconds=settings.token_clock_skew_seconds),
            options={"require": ["sub", "iss", "exp"], "verify_aud": False},
        )
    except _jwt.ExpiredSignatureError:
        raise Unauthenticated("Token has expired.")
    except _jwt.InvalidTokenError:
        raise Unauthenticated()


# ---------------------------------------------------------------------------
# 3.  FastAPI dependency guards
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Principal:
    """Identity resolved from a verified token.  Built from claims only."""

    user_id: int
    email: str
    is_admin: bool


# auto_error=False so a missing header surfaces as our own Unauthenticated
bearer_scheme = HTTPBearer(auto_error=False)


def principal_from_token(token: str) -> Principal:
    payload = decode_access_token(token)
    try:
        user_id = int(payload["sub"])
    except (TypeError, ValueError):
        raise Unauthenticated()
    return Principal(
        user_id=user_id,
        email=payload.get("email", ""),
        is_admin=payload.get("is_admin") is True,
    )


def get_current_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Principal:
    """
    Dependency: resolve ``Authorization: Bearer <token>`` to a Principal.

    Raises 401 if the header is missing or the token does not verify.
    """
    if credentials is None or not credentials.credentials:
        raise Unauthenticated("Not authenticated.")
    return principal_from_token(credentials.credentials)


def get_optional_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[Principal]:
    """
    Dependency for endpoints open to anonymous callers.  No header means
    ``None``; a header carrying a bad token is still rejected with 401.
    """
    if credentials is None or not credentials.credentials:
        return None
    return principal_from_token(credentials.credentials)


def require_admin(principal: Principal = Depends(get_current_principal)) -> Principal:
    """
    Dependency: wraps :func:`get_current_principal` and additionally asserts
    the token's ``is_admin`` claim.  Raises 403 otherwise.
    """
    if not principal.is_admin:
        raise Forbidden()
    return principal
