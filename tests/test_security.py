from datetime import timedelta

from app.config import settings
from app.core.security import (
    create_access_token,
    decode_access_token,
    generate_id,
    generate_reset_token,
    hash_password,
    session_lifetime,
    verify_password,
)


def test_password_hash_and_verify_roundtrip():
    plain = "StrongPass123!"
    hashed = hash_password(plain)
    assert hashed != plain
    assert verify_password(plain, hashed) is True
    assert verify_password("wrong", hashed) is False


def test_access_token_carries_subject_and_role():
    token = create_access_token("user-123", role="ADMIN")
    payload = decode_access_token(token)
    assert payload["sub"] == "user-123"
    assert payload["role"] == "ADMIN"


def test_expired_token_is_rejected():
    token = create_access_token("user-123", expires_delta=timedelta(seconds=-5))
    assert decode_access_token(token) is None


def test_decode_invalid_token_and_generators():
    assert decode_access_token("not-a-jwt") is None
    assert len(generate_id()) > 10
    first, second = generate_reset_token(), generate_reset_token()
    assert first != second
    assert len(first) >= 32


def test_session_lifetime_extends_with_remember_me():
    assert session_lifetime(False) == timedelta(minutes=settings.access_token_expire_minutes)
    assert session_lifetime(True) == timedelta(days=settings.remember_me_expire_days)
    assert session_lifetime(True) > session_lifetime(False)
