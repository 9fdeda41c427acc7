import re

from marshmallow import ValidationError

USERNAME_RE = re.compile(r"^[A-Za-z0-9_.-]{3,32}$")


def norm_email(v):
    return v.strip().lower() if isinstance(v, str) else v


def validate_username(value: str) -> None:
    if not USERNAME_RE.match(value or ""):
        raise ValidationError(
            "Username must be 3-32 characters: letters, digits, '_', '.' or '-'."
        )
