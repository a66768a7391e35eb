"""

Token / password / settings unit tests.
- token round-trip keeps user id and role
- expired, mis-signed, malformed, wrong-type tokens all verify to None
- SECRET_KEY is mandatory and rejects weak or legacy values

"""

from datetime import timedelta

import pytest
from jose import jwt
from pydantic import ValidationError

from sikus.core.config import Settings
from sikus.core.security import (
    create_access_token,
    verify_access_token,
    get_password_hash,
    verify_password,
)
from sikus.models.user import Role


def test_token_round_trip(settings):
    token = create_access_token(42, Role.ADMIN, settings)
    claims = verify_access_token(token, settings)
    assert claims is not None
    assert claims.user_id == 42
    assert claims.role is Role.ADMIN


def test_token_expires_after_24_hours(settings):
    token = create_access_token(7, Role.USER, settings)
    payload = jwt.get_unverified_claims(token)
    assert payload["exp"] - payload["iat"] == 24 * 60 * 60


def test_expired_token_is_invalid(settings):
    token = create_access_token(7, Role.USER, settings, expires_delta=timedelta(seconds=-1))
    assert verify_access_token(token, settings) is None


def test_token_signed_with_other_key_is_invalid(settings):
    other = settings.model_copy(update={"SECRET_KEY": "another-secret-key-with-enough-length-000"})
    token = create_access_token(7, Role.USER, other)
    assert verify_access_token(token, settings) is None


@pytest.mark.parametrize("token", [None, "", "not-a-jwt", "a.b.c"])
def test_malformed_token_is_invalid(settings, token):
    assert verify_access_token(token, settings) is None


def test_token_with_wrong_type_or_role_is_invalid(settings):
    refresh_like = jwt.encode({"sub": "1", "role": "user", "type": "refresh"}, settings.SECRET_KEY, algorithm="HS256")
    assert verify_access_token(refresh_like, settings) is None

    unknown_role = jwt.encode({"sub": "1", "role": "superuser", "type": "access"}, settings.SECRET_KEY, algorithm="HS256")
    assert verify_access_token(unknown_role, settings) is None


def test_password_hash_is_one_way_and_salted():
    h1 = get_password_hash("rahasia123")
    h2 = get_password_hash("rahasia123")
    assert h1 != "rahasia123"
    assert h1 != h2
    assert verify_password("rahasia123", h1)
    assert not verify_password("salah", h1)


def test_secret_key_is_required(monkeypatch):
    monkeypatch.delenv("SECRET_KEY", raising=False)
    with pytest.raises(ValidationError):
        Settings(_env_file=None, DATABASE_URL="sqlite://")


@pytest.mark.parametrize("secret", ["short", "ptps-secret-key-2024"])
def test_weak_or_legacy_secret_key_is_rejected(secret):
    with pytest.raises(ValidationError):
        Settings(_env_file=None, DATABASE_URL="sqlite://", SECRET_KEY=secret)
