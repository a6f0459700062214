import base64
import json
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from souldiary_api.core.config import get_settings
from souldiary_api.core.errors import (
    Forbidden,
    TokenExpired,
    TokenInvalidSignature,
    TokenMalformed,
    Unauthorized,
)
from souldiary_api.core.security import IdentityClaims, TokenService, extract_bearer_token, get_token_service
from souldiary_api.dependencies import authenticate

SECRET = "unit-test-secret-key-at-least-32-bytes"
ISSUED_AT = datetime(2026, 1, 1, 9, 0, tzinfo=timezone.utc)


class FakeClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


def _b64url(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(ISSUED_AT)


@pytest.fixture
def service(clock: FakeClock) -> TokenService:
    return TokenService(secret=SECRET, ttl_seconds=3600, clock=clock)


def test_issue_then_verify_returns_claims(service: TokenService):
    issued = service.issue(IdentityClaims(user_id="a1", name="A"))

    assert issued.expires_at == ISSUED_AT + timedelta(hours=1)
    assert service.verify(issued.token) == IdentityClaims(user_id="a1", name="A")


def test_issued_token_embeds_identity_and_expiry(service: TokenService):
    issued = service.issue(IdentityClaims(user_id="a1", name="A"))
    claims = jwt.decode(issued.token, options={"verify_signature": False})

    assert claims["sub"] == "a1"
    assert claims["name"] == "A"
    assert claims["exp"] - claims["iat"] == 3600


def test_token_expires_after_ttl(service: TokenService, clock: FakeClock):
    issued = service.issue(IdentityClaims(user_id="a1", name="A"))

    clock.now = ISSUED_AT + timedelta(seconds=3599)
    assert service.verify(issued.token).user_id == "a1"

    clock.now = ISSUED_AT + timedelta(seconds=3600)
    with pytest.raises(TokenExpired):
        service.verify(issued.token)


def test_tampered_payload_fails_signature(service: TokenService):
    token = service.issue(IdentityClaims(user_id="a1", name="A")).token
    header, _, signature = token.split(".")
    forged_payload = {"sub": "mallory", "name": "A", "iat": 0, "exp": 32503680000}
    forged = ".".join([header, _b64url(json.dumps(forged_payload).encode("utf-8")), signature])

    with pytest.raises(TokenInvalidSignature):
        service.verify(forged)


def test_token_signed_with_other_secret_fails_signature(clock: FakeClock):
    other = TokenService(secret="another-secret-key-at-least-32-bytes", clock=clock)
    token = other.issue(IdentityClaims(user_id="a1", name="A")).token

    with pytest.raises(TokenInvalidSignature):
        TokenService(secret=SECRET, clock=clock).verify(token)


@pytest.mark.parametrize("token", ["not-a-token", "a.b.c", ""])
def test_garbage_token_is_malformed(service: TokenService, token: str):
    with pytest.raises(TokenMalformed):
        service.verify(token)


def test_token_without_expiry_is_malformed(service: TokenService):
    token = jwt.encode({"sub": "a1", "name": "A"}, SECRET, algorithm="HS256")

    with pytest.raises(TokenMalformed):
        service.verify(token)


def test_token_with_unexpected_algorithm_is_malformed(service: TokenService):
    token = jwt.encode({"sub": "a1", "name": "A", "exp": 32503680000}, SECRET, algorithm="HS512")

    with pytest.raises(TokenMalformed):
        service.verify(token)


def test_token_service_requires_secret():
    with pytest.raises(ValueError):
        TokenService(secret="")


def test_token_service_built_from_settings(monkeypatch):
    monkeypatch.setenv("SD_AUTH_JWT_SECRET", SECRET)
    monkeypatch.setenv("SD_AUTH_ACCESS_TOKEN_TTL_SECONDS", "120")
    get_settings.cache_clear()
    get_token_service.cache_clear()
    try:
        service = get_token_service()
        assert service.ttl == timedelta(seconds=120)
        token = service.issue(IdentityClaims(user_id="a1", name="A")).token
        assert jwt.decode(token, SECRET, algorithms=["HS256"])["sub"] == "a1"
    finally:
        get_settings.cache_clear()
        get_token_service.cache_clear()


def test_extract_bearer_token():
    assert extract_bearer_token("Bearer abc.def.ghi") == "abc.def.ghi"
    assert extract_bearer_token("bearer abc") == "abc"


@pytest.mark.parametrize("header", [None, "", "Basic dXNlcjpwYXNz", "Bearer "])
def test_extract_bearer_token_missing(header):
    with pytest.raises(Unauthorized) as exc:
        extract_bearer_token(header)
    assert exc.value.status_code == 401


def test_authenticate_returns_identity(service: TokenService):
    token = service.issue(IdentityClaims(user_id="a1", name="A")).token

    identity = authenticate(f"Bearer {token}", service)

    assert identity.user_id == "a1"
    assert identity.name == "A"


def test_authenticate_rejects_invalid_token_with_forbidden(service: TokenService, clock: FakeClock):
    token = service.issue(IdentityClaims(user_id="a1", name="A")).token
    clock.now = ISSUED_AT + timedelta(hours=2)

    with pytest.raises(Forbidden) as exc:
        authenticate(f"Bearer {token}", service)
    assert exc.value.status_code == 403

    with pytest.raises(Forbidden):
        authenticate("Bearer garbage", service)


def test_authenticate_without_token_is_unauthorized(service: TokenService):
    with pytest.raises(Unauthorized):
        authenticate(None, service)
