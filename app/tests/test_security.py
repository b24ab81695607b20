from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt
from pydantic import ValidationError

from app.core import (
    ExpiredTokenError,
    InvalidTokenError,
    RateLimiter,
    hash_password,
    is_allowed,
    issue_access_token,
    issue_refresh_token,
    settings,
    verify_access_token,
    verify_password,
)
from app.core.settings import Settings
from app.schemas import AccessClaims, UserRole


def test_access_token_round_trip():
    token = issue_access_token(AccessClaims(id=1, role=UserRole.USER))
    claims = verify_access_token(token)
    assert claims.id == 1
    assert claims.role == UserRole.USER


def test_expired_access_token_is_distinguishable():
    token = issue_access_token(AccessClaims(id=1, role=UserRole.USER), timedelta(seconds=-1))
    with pytest.raises(ExpiredTokenError):
        verify_access_token(token)


def test_tampered_access_token_is_invalid():
    header, payload, signature = issue_access_token(AccessClaims(id=1, role=UserRole.ADMIN)).split(".")
    with pytest.raises(InvalidTokenError):
        verify_access_token(f"{header}.{payload}.{'A' * len(signature)}")


def test_token_signed_with_other_key_is_invalid():
    exp = datetime.now(timezone.utc) + timedelta(minutes=5)
    token = jwt.encode({"id": 1, "role": "USER", "exp": exp}, "otra-clave", algorithm=settings.ALGORITHM)
    with pytest.raises(InvalidTokenError):
        verify_access_token(token)


@pytest.mark.parametrize(
    "claims",
    [
        {"id": "1", "role": "USER"},
        {"id": 1, "role": "ROOT"},
        {"id": 0, "role": "USER"},
        {"role": "ADMIN"},
    ],
)
def test_wrong_claim_shape_is_rejected(claims):
    exp = datetime.now(timezone.utc) + timedelta(minutes=5)
    token = jwt.encode({**claims, "exp": exp}, settings.KEY_SECRET, algorithm=settings.ALGORITHM)
    with pytest.raises(InvalidTokenError):
        verify_access_token(token)


def test_garbage_is_invalid():
    with pytest.raises(InvalidTokenError):
        verify_access_token("no-es-un-token")


def test_refresh_tokens_are_random_hex():
    first, second = issue_refresh_token(), issue_refresh_token()
    assert len(first) == 96
    int(first, 16)
    assert first != second


def test_password_hashing():
    hashed = hash_password("password1")
    assert hashed != "password1"
    assert verify_password("password1", hashed)
    assert not verify_password("password2", hashed)


def test_is_allowed():
    admin = AccessClaims(id=1, role=UserRole.ADMIN)
    user = AccessClaims(id=5, role=UserRole.USER)
    assert is_allowed(admin, 7)
    assert is_allowed(admin, 1)
    assert is_allowed(user, 5)
    assert not is_allowed(user, 7)


def test_signing_key_has_no_default(monkeypatch):
    monkeypatch.delenv("KEY_SECRET")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_access_ttl_must_be_shorter_than_refresh_ttl():
    with pytest.raises(ValidationError):
        Settings(ACCESS_TOKEN_EXPIRE_MINUTES=60, REFRESH_TOKEN_EXPIRE_SECONDS=3600)


class FakeRedis:
    def __init__(self):
        self.counts = {}
        self.expirations = {}

    def incr(self, key):
        self.counts[key] = self.counts.get(key, 0) + 1
        return self.counts[key]

    def pexpire(self, key, ms):
        self.expirations[key] = ms

    def delete(self, key):
        self.counts.pop(key, None)


def test_rate_limiter_blocks_after_limit():
    client = FakeRedis()
    limiter = RateLimiter(client, limit=2, window_ms=1000)
    assert limiter.hit("1.2.3.4")
    assert limiter.hit("1.2.3.4")
    assert not limiter.hit("1.2.3.4")
    assert limiter.hit("5.6.7.8")
    assert client.expirations["ratelimit:1.2.3.4"] == 1000

    limiter.reset("1.2.3.4")
    assert limiter.hit("1.2.3.4")


def test_rate_limiter_without_redis_allows_everything():
    limiter = RateLimiter(None, limit=1, window_ms=1000)
    assert all(limiter.hit("1.2.3.4") for _ in range(5))


def test_access_token_requires_signing_key(monkeypatch):
    monkeypatch.setattr(settings, "KEY_SECRET", "")
    with pytest.raises(RuntimeError):
        issue_access_token(AccessClaims(id=1, role=UserRole.USER))


def test_rate_limit_middleware_returns_envelope(client, monkeypatch):
    monkeypatch.setattr("app.main.rate_limiter", RateLimiter(FakeRedis(), limit=1, window_ms=1000))
    assert client.get("/api/v1/health-check").status_code == 200

    response = client.get("/api/v1/health-check")
    assert response.status_code == 429
    assert response.json() == {
        "success": False,
        "message": "Demasiadas peticiones, intenta más tarde.",
        "responseObject": None,
        "statusCode": 429,
    }
