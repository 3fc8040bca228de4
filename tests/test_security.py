import base64
import hashlib
from datetime import timedelta

import pytest
from jose import jwt

from app.core.config import settings
from app.core.jwt import create_access_token, decode_access_token
from app.core.security import ITERATIONS, hash_password, verify_password
from app.services.auth_service import AuthService

pytestmark = pytest.mark.unit


def test_hash_is_base64_salt_plus_key():
    hashed = hash_password("Password123")
    raw = base64.b64decode(hashed)
    assert len(raw) == 48


def test_hash_uses_fresh_salt_each_time():
    assert hash_password("same") != hash_password("same")


def test_verify_password():
    hashed = hash_password("Password123")
    assert verify_password("Password123", hashed) is True
    assert verify_password("password123", hashed) is False


@pytest.mark.parametrize("stored", ["", "not base64!", base64.b64encode(b"short").decode()])
def test_malformed_hash_never_verifies(stored):
    assert verify_password("anything", stored) is False


def test_token_carries_identity_claims_and_seven_day_expiry():
    token, expires = create_access_token({"sub": "42", "name": "Alice", "email": "alice@example.com"})
    claims = decode_access_token(token)

    assert claims["sub"] == "42"
    assert claims["name"] == "Alice"
    assert claims["email"] == "alice@example.com"
    assert claims["exp"] - claims["iat"] == int(timedelta(days=7).total_seconds())
    assert int(expires.timestamp()) == claims["exp"]


def test_expired_token_is_rejected():
    token, _ = create_access_token({"sub": "1"}, expires_delta=timedelta(seconds=-10))
    assert decode_access_token(token) is None


def test_token_signed_with_other_key_is_rejected():
    forged = jwt.encode({"sub": "1"}, "some-other-secret", algorithm=settings.ALGORITHM)
    assert decode_access_token(forged) is None


def test_identify_maps_claims_to_user():
    token, _ = create_access_token({"sub": "7", "name": "Bob", "email": "bob@example.com"})
    user = AuthService.identify(token)
    assert (user.id, user.name, user.email) == (7, "Bob", "bob@example.com")


def test_identify_rejects_token_without_subject():
    token, _ = create_access_token({"name": "Nobody"})
    assert AuthService.identify(token) is None


def test_hash_uses_fixed_pbkdf2_iteration_count():
    hashed = hash_password("Password123")
    raw = base64.b64decode(hashed)
    salt, key = raw[:16], raw[16:]

    expected = hashlib.pbkdf2_hmac("sha256", b"Password123", salt, 10000, dklen=32)
    assert key == expected
    assert ITERATIONS == 10000


def test_iteration_count_is_not_configurable():
    assert not hasattr(settings, "PASSWORD_HASH_ITERATIONS")
