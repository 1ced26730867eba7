from datetime import timedelta

import pytest

from models import storage
from models.base_model import utcnow
from models.refresh_token import RefreshToken
from models.user import User
from utils.refresh_tokens import (
    RefreshTokenNotFound,
    RefreshTokenRejected,
    create_refresh_token,
    issue_refresh_token,
    lookup_refresh_token,
    resolve_refresh_token,
    revoke_refresh_token,
)
from utils.security import hash_password, make_refresh_token

pytestmark = pytest.mark.usefixtures("app")


@pytest.fixture()
def user(app):
    u = User(email="jesse@breakingbad.com", hashed_password=hash_password("yo"))
    storage.new(u)
    storage.save()
    return u


def test_issue_and_lookup(user):
    token = issue_refresh_token(user.id, timedelta(days=60))
    rt = lookup_refresh_token(token)
    assert rt.user_id == user.id
    assert rt.revoked_at is None
    remaining = rt.expires_at.replace(tzinfo=None) - utcnow().replace(tzinfo=None)
    assert timedelta(days=59) < remaining <= timedelta(days=60)


def test_lookup_unknown_token():
    with pytest.raises(RefreshTokenNotFound):
        lookup_refresh_token(make_refresh_token())


def test_resolve_live_token(user):
    token = issue_refresh_token(user.id, timedelta(days=60))
    assert resolve_refresh_token(token) == user.id
    # not rotated: still usable
    assert resolve_refresh_token(token) == user.id


def test_resolve_expired_token(user):
    token = make_refresh_token()
    create_refresh_token(token, user.id, utcnow() - timedelta(seconds=1))
    with pytest.raises(RefreshTokenRejected) as exc:
        resolve_refresh_token(token)
    assert exc.value.reason == "refresh token expired"


def test_resolve_at_exact_expiry_is_rejected(user):
    token = make_refresh_token()
    expires_at = utcnow() + timedelta(hours=1)
    create_refresh_token(token, user.id, expires_at)
    with pytest.raises(RefreshTokenRejected):
        resolve_refresh_token(token, now=expires_at)


def test_revoke_is_recorded_once(user):
    token = issue_refresh_token(user.id, timedelta(days=60))
    first = utcnow()
    revoke_refresh_token(token, now=first)
    revoke_refresh_token(token, now=first + timedelta(minutes=5))

    rt = storage.get(RefreshToken, token)
    assert rt.revoked_at.replace(tzinfo=None) == first.replace(tzinfo=None)
    with pytest.raises(RefreshTokenRejected) as exc:
        resolve_refresh_token(token)
    assert exc.value.reason == "refresh token revoked"


def test_revoke_unknown_token():
    with pytest.raises(RefreshTokenNotFound):
        revoke_refresh_token(make_refresh_token())
