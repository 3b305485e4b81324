"""Unit tests for admin tokens, password check and the rate limiter."""

from datetime import timedelta

import pytest
from jose import JWTError

from villa_booking.api.rate_limit import RateLimiter
from villa_booking.auth.dependencies import verify_admin_password
from villa_booking.auth.jwt import create_access_token, create_admin_token, decode_token
from villa_booking.config import settings


class TestAdminToken:
    def test_claims(self):
        payload = decode_token(create_admin_token())
        assert payload["sub"] == "admin"
        assert payload["role"] == "admin"
        assert payload["type"] == "access"
        assert "exp" in payload
        assert "iat" in payload

    def test_expired_token_rejected(self):
        token = create_access_token({"sub": "admin"}, expires_delta=timedelta(seconds=-1))
        with pytest.raises(JWTError):
            decode_token(token)

    def test_tampered_token_rejected(self):
        token = create_admin_token()
        with pytest.raises(JWTError):
            decode_token(token[:-4] + "abcd")


class TestVerifyAdminPassword:
    def test_match(self):
        assert verify_admin_password(settings.admin_password)

    def test_mismatch(self):
        assert not verify_admin_password("wrong")
        assert not verify_admin_password("")

    def test_unset_password_never_matches(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setattr(settings, "admin_password", "")
        assert not verify_admin_password("")


class TestRateLimiter:
    def test_allows_up_to_limit(self):
        limiter = RateLimiter("test", max_attempts=3, window_seconds=60)
        assert [limiter.hit("1.2.3.4", now=t) for t in (0, 1, 2, 3)] == [True, True, True, False]

    def test_window_slides(self):
        limiter = RateLimiter("test", max_attempts=2, window_seconds=60)
        limiter.hit("ip", now=0)
        limiter.hit("ip", now=30)
        assert not limiter.hit("ip", now=59)
        assert limiter.hit("ip", now=61)

    def test_keys_independent(self):
        limiter = RateLimiter("test", max_attempts=1, window_seconds=60)
        assert limiter.hit("a", now=0)
        assert limiter.hit("b", now=0)
        assert not limiter.hit("a", now=1)

    def test_reset(self):
        limiter = RateLimiter("test", max_attempts=1, window_seconds=60)
        limiter.hit("a", now=0)
        limiter.reset()
        assert limiter.hit("a", now=1)

    def test_defaults_from_settings(self):
        limiter = RateLimiter("test")
        assert limiter.limit == settings.rate_limit_max_attempts
        assert limiter.window == settings.rate_limit_window_seconds
