"""
Session lifecycle on top of TokenService.

Each user keeps a single refresh token slot (User.refresh_token). Every login or
registration overwrites it, which is the only way a refresh token is revoked.
Plain refreshes mint a new access token and leave the refresh token alone.
Concurrent logins race on the slot; the last write wins.
"""
from __future__ import annotations

import hmac
import logging
from typing import Tuple

from models import storage
from models.user import User
from utils.tokens import REFRESH, MissingTokenError, RefreshTokenSupersededError, TokenService

logger = logging.getLogger(__name__)


def start_session(user: User, token_service: TokenService) -> Tuple[str, str]:
    """Issue an access/refresh pair and store the refresh token on the user."""
    access_token = token_service.issue_access_token(user.id)
    refresh_token = token_service.issue_refresh_token(user.id)
    user.refresh_token = refresh_token
    storage.new(user)
    storage.save()
    return access_token, refresh_token


def exchange_refresh_token(refresh_token: str | None, token_service: TokenService) -> str:
    """
    Trade a refresh token for a new access token.
    Raises MissingTokenError, any InvalidTokenError from verification, or
    RefreshTokenSupersededError when the token is not the one stored for the user.
    """
    if not refresh_token:
        raise MissingTokenError("Missing refresh token")

    claims = token_service.verify_token(refresh_token, expected_type=REFRESH)

    user = storage.get(User, claims.subject_id)
    if user is None:
        raise RefreshTokenSupersededError("Refresh token subject no longer exists")
    stored = user.refresh_token or ""
    if not hmac.compare_digest(stored.encode(), refresh_token.encode()):
        logger.warning("Superseded refresh token presented for user %s", user.id)
        raise RefreshTokenSupersededError("Refresh token was superseded")

    return token_service.issue_access_token(user.id)
