"""
security helpers:
- Argon2id password hashing via argon2-cffi
- Access token (JWT) creation/validation via PyJWT
- Opaque refresh token generation
- Authorization header parsing (Bearer / ApiKey)
"""
from __future__ import annotations

import secrets
import uuid
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Mapping

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import VerifyMismatchError, VerificationError, InvalidHashError, HashingError

ph = PasswordHasher()

TOKEN_ISSUER = "chirpy"
REFRESH_TOKEN_BYTES = 32


class PasswordHashError(Exception):
    """Hashing or verification could not be carried out."""


class TokenSigningError(Exception):
    """The access token could not be signed."""


class InvalidTokenError(Exception):
    """The access token is forged, malformed or expired."""


class CredentialsExtractionError(Exception):
    """The Authorization header is missing or uses the wrong scheme."""


def hash_password(password: str) -> str:
    """Hash a plaintext password using Argon2id.

    The result is a PHC string carrying the parameters, salt and digest.
    """
    try:
        return ph.hash(password)
    except HashingError as exc:
        raise PasswordHashError("could not hash password") from exc


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a plaintext password against a stored Argon2 hash."""
    try:
        return ph.verify(password_hash, password)
    except VerifyMismatchError:
        return False
    except (InvalidHashError, VerificationError) as exc:
        raise PasswordHashError("could not verify password") from exc


@lru_cache(maxsize=1)
def _dummy_hash() -> str:
    return ph.hash(secrets.token_hex(16))


def burn_password_check(password: str) -> None:
    """Spend the same work as a real check, for logins with an unknown email."""
    verify_password(password, _dummy_hash())


def _now() -> datetime:
    return datetime.now(timezone.utc)


def make_jwt(user_id, secret: str, expires_in: timedelta, algorithm: str = "HS256") -> str:
    """Sign an access token for user_id that expires after expires_in."""
    now = _now()
    payload = {
        "iss": TOKEN_ISSUER,
        "sub": str(user_id),
        "iat": now,
        "exp": now + expires_in,
    }
    try:
        return jwt.encode(payload, secret, algorithm=algorithm)
    except (jwt.PyJWTError, TypeError, ValueError) as exc:
        raise TokenSigningError(f"could not sign token: {exc.__class__.__name__}") from exc


def validate_jwt(token: str, secret: str, algorithm: str = "HS256") -> str:
    """
    Decode and validate an access token, returning the user id it carries.
    Raises InvalidTokenError on bad signature, wrong issuer, expiry or a
    subject that is not a UUID.
    """
    try:
        decoded = jwt.decode(
            token,
            secret,
            algorithms=[algorithm],
            issuer=TOKEN_ISSUER,
            options={"require": ["exp", "iat", "sub", "iss"]},
        )
    except jwt.ExpiredSignatureError:
        raise InvalidTokenError("Token expired")
    except jwt.InvalidTokenError as exc:
        raise InvalidTokenError(f"Invalid token: {exc}")

    try:
        return str(uuid.UUID(decoded["sub"]))
    except (ValueError, TypeError, AttributeError):
        raise InvalidTokenError("Invalid token: malformed subject")


def make_refresh_token() -> str:
    """256 random bits, hex encoded. Only meaningful through a storage lookup."""
    return secrets.token_hex(REFRESH_TOKEN_BYTES)


def _get_authorization(headers: Mapping[str, str], scheme: str) -> str:
    header = headers.get("Authorization")
    if not header:
        raise CredentialsExtractionError("there is no Authorization header")
    prefix = f"{scheme} "
    if not header.startswith(prefix):
        raise CredentialsExtractionError(f"Authorization header is not of type {scheme}")
    value = header[len(prefix):].strip()
    if not value:
        raise CredentialsExtractionError(f"empty {scheme} credentials")
    return value


def get_bearer_token(headers: Mapping[str, str]) -> str:
    """Return <token> from 'Authorization: Bearer <token>'."""
    return _get_authorization(headers, "Bearer")


def get_api_key(headers: Mapping[str, str]) -> str:
    """Return <key> from 'Authorization: ApiKey <key>'."""
    return _get_authorization(headers, "ApiKey")
