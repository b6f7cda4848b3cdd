"""
Payload formatting utilities for Ksher requests.
"""

import json
import random
import re
import secrets
import time
from decimal import Decimal
from typing import Any, Dict, Iterable, Mapping, Optional
from urllib.parse import unquote, urlencode

from ..constants import NONCE_ALPHABET, NONCE_LENGTH

_system_random = secrets.SystemRandom()
_MALFORMED_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def generate_random_string(length: int = NONCE_LENGTH, rng: Optional[random.Random] = None) -> str:
    """
    Generate a random alphanumeric string (used for ``nonce_str``).

    Args:
        length: Number of characters
        rng: Random source; a system CSPRNG by default

    Returns:
        String drawn uniformly from [A-Za-z0-9]
    """
    rng = rng or _system_random
    return ''.join(rng.choice(NONCE_ALPHABET) for _ in range(length))


def current_timestamp_ms() -> int:
    """Milliseconds since the epoch."""
    return int(time.time() * 1000)


def safe_decode(value: str) -> str:
    """
    URL-decode ``value``, returning it unchanged if it does not decode.

    A malformed escape anywhere, or escapes that are not valid UTF-8, keep
    the whole value verbatim rather than decoding it partially.
    """
    if _MALFORMED_ESCAPE.search(value):
        return value
    try:
        return unquote(value, errors='strict')
    except UnicodeDecodeError:
        return value


def apply_decode_fields(data: Mapping[str, Any], fields: Iterable[str]) -> Dict[str, Any]:
    """Return a copy of ``data`` with the string values of ``fields`` URL-decoded."""
    result = dict(data)
    for field in fields:
        value = result.get(field)
        if isinstance(value, str):
            result[field] = safe_decode(value)
    return result


def apply_omit_fields(data: Mapping[str, Any], fields: Iterable[str]) -> Dict[str, Any]:
    """Return a copy of ``data`` without ``fields``."""
    omitted = set(fields)
    return {key: value for key, value in data.items() if key not in omitted}


def format_form_value(value: Any) -> str:
    """
    Render a single value for a form body.

    Args:
        value: Field value

    Returns:
        Strings and numbers as text, booleans as ``true``/``false``,
        bytes decoded as UTF-8, anything else as compact JSON
    """
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (str, int, float, Decimal)):
        return str(value)
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode('utf-8')
    return json.dumps(_integral_floats(value), separators=(',', ':'), ensure_ascii=False, default=str)


def _integral_floats(value: Any) -> Any:
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, Mapping):
        return {key: _integral_floats(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_integral_floats(item) for item in value]
    return value


def build_form_body(payload: Mapping[str, Any]) -> str:
    """URL-encode a payload as ``application/x-www-form-urlencoded``, skipping None values."""
    return urlencode([
        (key, format_form_value(value))
        for key, value in payload.items()
        if value is not None
    ])


def mask_payload(payload: Mapping[str, Any]) -> Dict[str, Any]:
    """Copy of ``payload`` safe for logging."""
    masked = dict(payload)
    if 'sign' in masked:
        masked['sign'] = '***'
    return masked
