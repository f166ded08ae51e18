"""Utility functions for the application."""

from __future__ import annotations

import secrets
import string
from datetime import datetime, timezone
from typing import Any

from flask import request

from .constants import GROUP_CODE_DIGITS, GROUP_CODE_LETTERS, ID_LENGTH
from .errors import ValidationError

ID_ALPHABET = string.ascii_lowercase + string.digits


def generate_id() -> str:
    """Return a short random identifier such as ``k8j2m9q``."""
    return "".join(secrets.choice(ID_ALPHABET) for _ in range(ID_LENGTH))


def generate_group_code() -> str:
    """Return a shareable group code such as ``ABC-1234``."""
    letters = "".join(
        secrets.choice(string.ascii_uppercase) for _ in range(GROUP_CODE_LETTERS)
    )
    digits = "".join(secrets.choice(string.digits) for _ in range(GROUP_CODE_DIGITS))
    return f"{letters}-{digits}"


def utc_now_iso() -> str:
    """Return the current UTC time as ``2024-03-15T19:00:00.000Z``."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def clean(value: Any) -> str:
    """Return ``value`` stripped when it is a string, otherwise ``""``."""
    if isinstance(value, str):
        return value.strip()
    return ""


def require(value: Any, message: str) -> str:
    """Return the stripped value or raise a ValidationError if it is blank."""
    cleaned = clean(value)
    if not cleaned:
        raise ValidationError(message)
    return cleaned


def get_payload() -> dict[str, Any]:
    """Return the JSON body of the current request, or an empty dict."""
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        return {}
    return payload
