"""
Canonical parameter serialization and HMAC-SHA256 request signing.

The signed string and the transmitted string must be the same bytes, so
every request goes through encode_params exactly once per map.
"""

import hashlib
import hmac
import time
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Mapping
from urllib.parse import urlencode


def current_timestamp_ms() -> int:
    """Current wall-clock time in milliseconds since the Unix epoch."""
    return int(time.time() * 1000)


def strip_absent(params: Mapping[str, Any] | None) -> Dict[str, Any]:
    """Drop keys whose value is None. Empty strings and zero are kept."""
    if not params:
        return {}
    return {key: value for key, value in params.items() if value is not None}


def format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return format_value(value.value)
    if isinstance(value, Decimal):
        return format(value, 'f')
    if isinstance(value, float):
        # Shortest repr, never scientific notation
        return format(Decimal(repr(value)), 'f')
    return str(value)


def encode_params(params: Mapping[str, Any]) -> str:
    """Serialize params as a URL-encoded string in insertion order."""
    return urlencode([(key, format_value(value)) for key, value in params.items()])


def sign_payload(secret_key: str, payload: str) -> str:
    """Lowercase hex HMAC-SHA256 of payload keyed with secret_key."""
    return hmac.new(
        secret_key.encode('utf-8'),
        payload.encode('utf-8'),
        hashlib.sha256
    ).hexdigest()
