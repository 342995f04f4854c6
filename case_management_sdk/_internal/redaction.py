"""Redaction of credential-like values before they reach debug output."""

from typing import Any

REDACT_KEYS: frozenset[str] = frozenset({
    "apikey",
    "api_key",
    "token",
    "bearer_token",
    "access_token",
    "refresh_token",
    "authorization",
    "password",
    "secret",
    "credentials",
})

REDACTED_VALUE = "[REDACTED]"


def redact_payload(payload: Any) -> Any:
    """Return a copy of ``payload`` with sensitive keys masked.

    Dicts and lists are walked recursively; the input is never mutated.
    Non-container values are returned as-is.
    """
    if isinstance(payload, dict):
        result = {}
        for key, value in payload.items():
            if isinstance(key, str) and key.lower() in REDACT_KEYS:
                result[key] = REDACTED_VALUE
            else:
                result[key] = redact_payload(value)
        return result
    if isinstance(payload, list):
        return [redact_payload(item) for item in payload]
    return payload
