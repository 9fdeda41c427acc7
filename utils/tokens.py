"""
Token helpers:
- TokenSettings: signing configuration, built once at startup
- TokenService: issues and verifies access / refresh JWTs (PyJWT, HS256)
- error taxonomy used for logging; every failure is an InvalidTokenError to callers

Access tokens are stateless. Refresh tokens are additionally checked against the
value stored on the user (see utils.sessions).
"""
from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Mapping, Optional

import jwt

ACCESS = "access"
REFRESH = "refresh"


class ConfigurationError(RuntimeError):
    """Raised when required security configuration is missing."""


class InvalidTokenError(Exception):
    """Base class for every token failure."""


class MissingTokenError(InvalidTokenError):
    pass


class MalformedTokenError(InvalidTokenError):
    pass


class ExpiredTokenError(InvalidTokenError):
    pass


class SignatureMismatchError(InvalidTokenError):
    pass


class RefreshTokenSupersededError(InvalidTokenError):
    """The refresh token is well signed but no longer the one stored for the user."""


@dataclass(frozen=True)
class TokenSettings:
    secret: str
    algorithm: str = "HS256"
    access_expires: timedelta = timedelta(minutes=15)
    refresh_expires: timedelta = timedelta(days=7)
    issuer: str = "events-api"

    def __post_init__(self):
        if not self.secret:
            raise ConfigurationError("JWT_SECRET is not set; refusing to sign tokens")

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "TokenSettings":
        """Build settings from a Flask config mapping."""
        return cls(
            secret=config.get("JWT_SECRET") or "",
            algorithm=config.get("JWT_ALGORITHM", "HS256"),
            access_expires=config.get("ACCESS_TOKEN_EXPIRES", timedelta(minutes=15)),
            refresh_expires=config.get("REFRESH_TOKEN_EXPIRES", timedelta(days=7)),
            issuer=config.get("JWT_ISSUER", "events-api"),
        )


@dataclass(frozen=True)
class TokenClaims:
    subject_id: str
    issued_at: datetime
    expires_at: datetime
    token_type: Optional[str] = None
    jti: Optional[str] = None


def generate_jti() -> str:
    """Generate a unique JTI (JWT ID)."""
    return str(uuid.uuid4())


def _now() -> datetime:
    return datetime.now(timezone.utc)


class TokenService:
    """Mints and verifies bearer tokens. Holds no mutable state."""

    def __init__(self, settings: TokenSettings):
        self.settings = settings

    def issue_access_token(self, subject_id: str) -> str:
        return self._issue(subject_id, ACCESS, self.settings.access_expires)

    def issue_refresh_token(self, subject_id: str) -> str:
        return self._issue(subject_id, REFRESH, self.settings.refresh_expires)

    def _issue(self, subject_id: str, token_type: str, lifetime: timedelta) -> str:
        now = _now()
        payload = {
            "iss": self.settings.issuer,
            "sub": str(subject_id),
            "iat": int(now.timestamp()),
            "exp": int((now + lifetime).timestamp()),
            "type": token_type,
            "jti": generate_jti(),
        }
        return jwt.encode(payload, self.settings.secret, algorithm=self.settings.algorithm)

    def verify_token(self, token: str, expected_type: Optional[str] = None) -> TokenClaims:
        """
        Decode and validate a JWT.
        Raises ExpiredTokenError, SignatureMismatchError or MalformedTokenError,
        and InvalidTokenError for a foreign issuer or a type other than `expected_type`.
        """
        if not token:
            raise MissingTokenError("No token supplied")
        try:
            decoded = jwt.decode(
                token,
                self.settings.secret,
                algorithms=[self.settings.algorithm],
                issuer=self.settings.issuer,
                options={"require": ["sub", "iat", "exp", "iss"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise ExpiredTokenError("Token expired") from exc
        # InvalidSignatureError subclasses DecodeError, so it goes first
        except jwt.InvalidSignatureError as exc:
            raise SignatureMismatchError("Token signature mismatch") from exc
        except (jwt.DecodeError, jwt.MissingRequiredClaimError) as exc:
            raise MalformedTokenError(f"Malformed token: {exc}") from exc
        except jwt.InvalidTokenError as exc:
            raise InvalidTokenError(f"Invalid token: {exc}") from exc

        if expected_type is not None and decoded.get("type") != expected_type:
            raise InvalidTokenError("Wrong token type")

        return TokenClaims(
            subject_id=str(decoded["sub"]),
            issued_at=datetime.fromtimestamp(decoded["iat"], tz=timezone.utc),
            expires_at=datetime.fromtimestamp(decoded["exp"], tz=timezone.utc),
            token_type=decoded.get("type"),
            jti=decoded.get("jti"),
        )
