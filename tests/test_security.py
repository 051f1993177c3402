"""Tests for password hashing, session tokens and reset tokens."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from app.core import security
from app.core.config import settings


OLD_SECRET = "o" * 40


def test_hash_password_is_salted():
    first = security.hash_password("password123")
    second = security.hash_password("password123")
    assert first != second
    assert "password123" not in first
    assert security.verify_password("password123", first)
    assert security.verify_password("password123", second)


def test_verify_password_rejects_wrong_password():
    hashed = security.hash_password("password123")
    assert not security.verify_password("password124", hashed)


def test_verify_password_handles_malformed_hash():
    assert not security.verify_password("password123", "not-a-bcrypt-hash")


def test_long_passwords_are_accepted():
    long_password = "p" * 100
    hashed = security.hash_password(long_password)
    assert security.verify_password(long_password, hashed)


def test_session_token_round_trip():
    token = security.create_session_token(7, "manager", 3)
    payload = security.decode_session_token(token)
    assert payload["sub"] == "7"
    assert payload["role"] == "manager"
    assert payload["token_version"] == 3
    lifetime = payload["exp"] - payload["iat"]
    assert lifetime == settings.JWT_EXPIRES_HOURS * 3600


def test_expired_session_token_raises():
    now = datetime.now(timezone.utc)
    token = jwt.encode(
        {"sub": "1", "iat": now - timedelta(hours=3), "exp": now - timedelta(hours=1)},
        settings.JWT_SECRET,
        algorithm="HS256",
    )
    with pytest.raises(jwt.ExpiredSignatureError):
        security.decode_session_token(token)


def test_token_missing_subject_rejected():
    token = jwt.encode(
        {"exp": datetime.now(timezone.utc) + timedelta(hours=1)},
        settings.JWT_SECRET,
        algorithm="HS256",
    )
    with pytest.raises(jwt.InvalidTokenError):
        security.decode_session_token(token)


def test_previous_secret_still_accepted(monkeypatch):
    monkeypatch.setattr(settings, "JWT_SECRET", OLD_SECRET)
    token = security.create_session_token(1, "sales", 1)

    monkeypatch.setattr(settings, "JWT_SECRET", "n" * 40)
    monkeypatch.setattr(settings, "JWT_SECRET_PREVIOUS", OLD_SECRET)
    assert security.decode_session_token(token)["sub"] == "1"

    monkeypatch.setattr(settings, "JWT_SECRET_PREVIOUS", "")
    with pytest.raises(jwt.InvalidTokenError):
        security.decode_session_token(token)


def test_reset_token_format():
    token = security.generate_reset_token()
    assert len(token) == 64
    int(token, 16)
    assert token != security.generate_reset_token()


def test_reset_token_expiry():
    now = datetime(2026, 1, 1, tzinfo=timezone.utc)
    expected = now + timedelta(minutes=settings.PASSWORD_RESET_EXPIRES_MINUTES)
    assert security.reset_token_expiry(now) == expected
