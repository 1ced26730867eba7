"""
Refresh token storage and the checks behind /refresh and /revoke.

Tokens are opaque; everything we know about one comes from its row.
"""
from __future__ import annotations

import logging
from datetime import datetime, timedelta

from models import storage
from models.base_model import utcnow
from models.refresh_token import RefreshToken
from utils.security import make_refresh_token

logger = logging.getLogger(__name__)


class RefreshTokenNotFound(Exception):
    pass


class RefreshTokenRejected(Exception):
    """Token exists but can no longer be used. `reason` is for logs only."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


def create_refresh_token(token: str, user_id: str, expires_at: datetime) -> RefreshToken:
    rt = RefreshToken(token=token, user_id=str(user_id), expires_at=expires_at, revoked_at=None)
    storage.new(rt)
    storage.save()
    return rt


def lookup_refresh_token(token: str) -> RefreshToken:
    rt = storage.get(RefreshToken, token)
    if rt is None:
        raise RefreshTokenNotFound("refresh token not found")
    return rt


def revoke_refresh_token(token: str, now: datetime | None = None) -> RefreshToken:
    """Mark the token revoked. An already revoked token keeps its first revoked_at."""
    rt = lookup_refresh_token(token)
    if rt.is_revoked:
        logger.info("refresh token for user %s already revoked", rt.user_id)
        return rt
    rt.revoke(now or utcnow())
    storage.new(rt)
    storage.save()
    return rt


def issue_refresh_token(user_id: str, expires_in: timedelta) -> str:
    """Create, persist and return a new refresh token for user_id."""
    token = make_refresh_token()
    create_refresh_token(token, user_id, utcnow() + expires_in)
    return token


def resolve_refresh_token(token: str, now: datetime | None = None) -> str:
    """
    Return the user id behind a usable refresh token.
    The token itself is not rotated; it stays valid until it expires or is revoked.
    """
    rt = lookup_refresh_token(token)
    now = now or utcnow()
    if rt.is_expired(now):
        raise RefreshTokenRejected("refresh token expired")
    if rt.is_revoked:
        raise RefreshTokenRejected("refresh token revoked")
    return rt.user_id
