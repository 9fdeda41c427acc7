from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import wraps

from flask import abort, current_app, g, request

from utils.tokens import ACCESS, InvalidTokenError, TokenService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CurrentUser:
    """Identity attached to the request once the access token checks out."""
    id: str


def get_token_service() -> TokenService:
    return current_app.extensions["token_service"]


def bearer_token() -> str | None:
    """Return the token after the `Bearer ` prefix, or None."""
    auth = request.headers.get("Authorization", "")
    if not auth.startswith("Bearer "):
        return None
    return auth[len("Bearer "):].strip() or None


def jwt_required():
    """
    Reject the request with 401 unless it carries a valid access token.
    Never touches storage; handlers load the user themselves when they need it.
    """
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            token = bearer_token()
            if token is None:
                abort(401, description="Unauthorized, no token")
            try:
                claims = get_token_service().verify_token(token, expected_type=ACCESS)
            except InvalidTokenError as exc:
                logger.info("Rejected access token on %s: %s (%s)",
                            request.path, exc.__class__.__name__, exc)
                abort(401, description="Unauthorized, invalid token")

            g.current_user = CurrentUser(id=claims.subject_id)
            g.token_claims = claims
            return fn(*args, **kwargs)

        return wrapper

    return decorator
