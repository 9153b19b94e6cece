"""
Utilities for keeping credentials and registration tokens out of logs.

Registration tokens identify a device; they are logged by their last six
characters only. Bearer tokens are never logged.
"""

from __future__ import annotations

import re
from typing import Any

_BEARER_PATTERN = re.compile(r"(Bearer\s+)[A-Za-z0-9._~+/=-]+", re.IGNORECASE)

# Keys that should always be considered sensitive
SENSITIVE_KEYS = {
    "authorization",
    "access_token",
    "refresh_token",
    "private_key",
    "private_key_id",
    "client_secret",
    "token",
    "registration_token",
    "registration_tokens",
    "apns_tokens",
}


def mask_token(token: str) -> str:
    """Return a log-safe form of a registration token, e.g. "...a1b2c3"."""
    if len(token) <= 6:
        return "..."
    return f"...{token[-6:]}"


def redact_sensitive_data(text: str) -> str:
    """
    Redact bearer tokens from a string.

    Args:
        text: String potentially containing an Authorization header value

    Returns:
        String with bearer tokens replaced by [REDACTED]
    """
    return _BEARER_PATTERN.sub(r"\1[REDACTED]", text)


def redact_dict(data: dict[str, Any]) -> dict[str, Any]:
    """
    Create a redacted copy of dictionary, hiding sensitive keys.

    Args:
        data: Dictionary potentially containing sensitive values

    Returns:
        New dictionary with sensitive values replaced with [REDACTED]
    """
    redacted = {}
    for key, value in data.items():
        if key.lower() in SENSITIVE_KEYS:
            redacted[key] = "[REDACTED]"
        elif isinstance(value, dict):
            redacted[key] = redact_dict(value)
        elif isinstance(value, (list, tuple)):
            redacted[key] = [
                redact_dict(item) if isinstance(item, dict) else item
                for item in value
            ]
        elif isinstance(value, str):
            redacted[key] = redact_sensitive_data(value)
        else:
            redacted[key] = value
    return redacted
