"""Unit tests for TokenService; no Flask app involved."""
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from utils.tokens import (
    ACCESS,
    REFRESH,
    ConfigurationError,
    ExpiredTokenError,
    InvalidTokenError,
    MalformedTokenError,
    MissingTokenError,
    SignatureMismatchError,
    TokenService,
    TokenSettings,
)

SECRET = "unit-test-secret-0123456789-abcdefghij"
OTHER_SECRET = "another-secret-0123456789-abcdefghijkl"


@pytest.fixture()
def service():
    return TokenService(TokenSettings(secret=SECRET))


def test_access_token_round_trip(service):
    claims = service.verify_token(service.issue_access_token("user-1"))
    assert claims.subject_id == "user-1"
    assert claims.token_type == ACCESS
    assert claims.expires_at - claims.issued_at == timedelta(minutes=15)
    assert claims.issued_at <= datetime.now(timezone.utc)


def test_refresh_token_lives_seven_days(service):
    claims = service.verify_token(service.issue_refresh_token("user-1"))
    assert claims.subject_id == "user-1"
    assert claims.token_type == REFRESH
    assert claims.expires_at - claims.issued_at == timedelta(days=7)


def test_tokens_issued_back_to_back_differ(service):
    assert service.issue_refresh_token("user-1") != service.issue_refresh_token("user-1")


def test_expired_token_is_classified_as_expired():
    service = TokenService(TokenSettings(secret=SECRET, access_expires=timedelta(seconds=-1)))
    token = service.issue_access_token("user-1")
    with pytest.raises(ExpiredTokenError):
        service.verify_token(token)
    assert issubclass(ExpiredTokenError, InvalidTokenError)


def test_token_signed_with_other_secret_is_rejected(service):
    foreign = TokenService(TokenSettings(secret=OTHER_SECRET)).issue_access_token("user-1")
    with pytest.raises(SignatureMismatchError):
        service.verify_token(foreign)


@pytest.mark.parametrize("token", ["not-a-token", "a.b.c", "Bearer x"])
def test_garbage_is_malformed(service, token):
    with pytest.raises(MalformedTokenError):
        service.verify_token(token)


def test_token_without_subject_is_malformed(service):
    now = int(datetime.now(timezone.utc).timestamp())
    token = jwt.encode({"iat": now, "exp": now + 60}, SECRET, algorithm="HS256")
    with pytest.raises(MalformedTokenError):
        service.verify_token(token)


def test_empty_token_is_missing(service):
    with pytest.raises(MissingTokenError):
        service.verify_token("")


def test_expected_type_is_enforced(service):
    refresh = service.issue_refresh_token("user-1")
    with pytest.raises(InvalidTokenError):
        service.verify_token(refresh, expected_type=ACCESS)
    assert service.verify_token(refresh, expected_type=REFRESH).subject_id == "user-1"


def test_services_with_distinct_secrets_are_isolated():
    a = TokenService(TokenSettings(secret=SECRET))
    b = TokenService(TokenSettings(secret=OTHER_SECRET))
    assert b.verify_token(b.issue_access_token("x")).subject_id == "x"
    with pytest.raises(InvalidTokenError):
        a.verify_token(b.issue_access_token("x"))


@pytest.mark.parametrize("secret", ["", None])
def test_missing_secret_fails_closed(secret):
    with pytest.raises(ConfigurationError):
        TokenSettings(secret=secret)


def test_settings_from_config():
    settings = TokenSettings.from_config({
        "JWT_SECRET": SECRET,
        "ACCESS_TOKEN_EXPIRES": timedelta(minutes=5),
    })
    assert settings.access_expires == timedelta(minutes=5)
    assert settings.refresh_expires == timedelta(days=7)
    assert settings.algorithm == "HS256"


def test_foreign_issuer_is_rejected(service):
    foreign = TokenService(TokenSettings(secret=SECRET, issuer="someone-else"))
    with pytest.raises(InvalidTokenError):
        service.verify_token(foreign.issue_access_token("user-1"))


def test_token_without_issuer_is_malformed(service):
    now = int(datetime.now(timezone.utc).timestamp())
    token = jwt.encode({"sub": "user-1", "iat": now, "exp": now + 60}, SECRET, algorithm="HS256")
    with pytest.raises(MalformedTokenError):
        service.verify_token(token)
