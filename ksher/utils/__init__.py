"""
Utility modules for Ksher payment operations.
"""

from .http_client import HTTPClient, HTTPResponse
from .validators import validate_payload, validate_response, format_validation_error
from .formatters import (
    build_form_body,
    generate_random_string,
    safe_decode,
)
from .signing import (
    build_signature_payload,
    convert_data_to_string,
    load_private_key,
    load_public_key,
    sign_message,
    verify_message,
    verify_signature,
)

__all__ = [
    'HTTPClient',
    'HTTPResponse',
    'validate_payload',
    'validate_response',
    'format_validation_error',
    'build_form_body',
    'generate_random_string',
    'safe_decode',
    'build_signature_payload',
    'convert_data_to_string',
    'load_private_key',
    'load_public_key',
    'sign_message',
    'verify_message',
    'verify_signature',
]
