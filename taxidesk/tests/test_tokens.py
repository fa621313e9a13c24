from __future__ import annotations

import json
from datetime import UTC, datetime, timedelta

import pytest
from cryptography.fernet import Fernet

from taxidesk.domain.users import InvalidTokenError, Role, TokenExpiredError
from taxidesk.infrastructure.auth.tokens import FernetTokenService, derive_key


class FakeClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 6, 1, 12, 0, tzinfo=UTC))


@pytest.fixture()
def service(clock: FakeClock) -> FernetTokenService:
    return FernetTokenService("secret", clock=clock)


def test_issue_and_verify_round_trip(service: FernetTokenService, clock: FakeClock) -> None:
    token = service.issue("admin", Role.ADMIN)

    claims = service.verify(token)

    assert claims.username == "admin"
    assert claims.role is Role.ADMIN
    assert claims.issued_at == clock.now
    assert claims.expires_at == clock.now + timedelta(hours=24)


def test_token_valid_until_just_before_expiry(
    service: FernetTokenService, clock: FakeClock
) -> None:
    token = service.issue("taxista", Role.DRIVER)
    clock.now += timedelta(hours=23, minutes=59, seconds=59)

    assert service.verify(token).role is Role.DRIVER


@pytest.mark.parametrize("elapsed", [timedelta(hours=24), timedelta(days=30)])
def test_expired_token_is_rejected(
    service: FernetTokenService, clock: FakeClock, elapsed: timedelta
) -> None:
    token = service.issue("admin", Role.ADMIN)
    clock.now += elapsed

    with pytest.raises(TokenExpiredError):
        service.verify(token)


def test_token_from_other_secret_is_rejected(clock: FakeClock) -> None:
    token = FernetTokenService("other-secret", clock=clock).issue("admin", Role.ADMIN)

    with pytest.raises(InvalidTokenError) as excinfo:
        FernetTokenService("secret", clock=clock).verify(token)
    assert not isinstance(excinfo.value, TokenExpiredError)


def test_tampered_token_is_rejected(service: FernetTokenService) -> None:
    token = service.issue("admin", Role.ADMIN)
    tampered = token[:-6] + ("A" if token[-6] != "A" else "B") + token[-5:]

    with pytest.raises(InvalidTokenError):
        service.verify(tampered)


@pytest.mark.parametrize("token", ["", "not-a-token", "Bearer abc", "ñ"])
def test_garbage_is_rejected(service: FernetTokenService, token: str) -> None:
    with pytest.raises(InvalidTokenError):
        service.verify(token)


def test_signed_token_with_bad_claims_is_rejected(service: FernetTokenService) -> None:
    body = json.dumps({"sub": "admin", "role": "root"}).encode()
    token = Fernet(derive_key("secret")).encrypt(body).decode()

    with pytest.raises(InvalidTokenError):
        service.verify(token)


def test_empty_secret_is_refused() -> None:
    with pytest.raises(ValueError):
        FernetTokenService("")
