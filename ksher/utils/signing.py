"""
Canonicalization, RSA signing and response signature verification.

Ksher signs the "canonical string" of a payload: every top-level field
except ``sign`` rendered as ``key=value``, sorted, and concatenated with
no separator. The signature is RSA PKCS#1 v1.5 over MD5, hex-encoded.
"""

import binascii
import json
import logging
from collections.abc import Mapping
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, Optional, Union

from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey, RSAPublicKey

from ..constants import (
    DEFAULT_PUBLIC_KEY_V1,
    DEFAULT_PUBLIC_KEY_V2,
    NARROW_SIGNATURE_FIELDS,
    SIGN_FIELD,
    SignVersion,
)
from ..exceptions import ConfigurationError

logger = logging.getLogger(__name__)

KeyMaterial = Union[str, bytes]


def _normalize(value: Any) -> Any:
    if isinstance(value, bool) or value is None:
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, (str, int, float)):
        return value
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode('utf-8')
    if isinstance(value, (list, tuple)):
        return [
            _sort_keys(item) if isinstance(item, Mapping) else _normalize(item)
            for item in value
        ]
    if isinstance(value, Mapping):
        # Nested objects only contribute their field names
        return sorted(value.keys())
    return value


def _sort_keys(data: Mapping) -> Dict[str, Any]:
    return {
        key: _normalize(data[key])
        for key in sorted(data.keys())
        if key != SIGN_FIELD
    }


def _render(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, separators=(',', ':'), ensure_ascii=False)


def convert_data_to_string(data: Mapping) -> str:
    """
    Build the canonical string of a payload.

    Keys are sorted, each field rendered as ``key=value`` and the rendered
    strings sorted once more as whole strings before being joined. The
    second sort is what the gateway computes, so both passes are kept.

    Args:
        data: Payload to canonicalize; ``sign`` is ignored

    Returns:
        Canonical string
    """
    parts = [f"{key}={_render(value)}" for key, value in _sort_keys(data).items()]
    parts.sort()
    return ''.join(parts)


def sign_message(message: str, private_key: RSAPrivateKey) -> str:
    """Sign ``message`` with RSA-MD5 and return the hex signature."""
    signature = private_key.sign(
        message.encode('utf-8'),
        padding.PKCS1v15(),
        hashes.MD5(),
    )
    return signature.hex()


def verify_message(message: str, signature: str, public_key: RSAPublicKey) -> bool:
    """Check a hex RSA-MD5 signature of ``message``."""
    try:
        raw_signature = binascii.unhexlify(signature)
    except (binascii.Error, ValueError, TypeError):
        return False

    try:
        public_key.verify(
            raw_signature,
            message.encode('utf-8'),
            padding.PKCS1v15(),
            hashes.MD5(),
        )
    except InvalidSignature:
        return False
    return True


def sign_payload(payload: Mapping, private_key: RSAPrivateKey) -> str:
    """Canonicalize and sign a request payload."""
    return sign_message(convert_data_to_string(payload), private_key)


def build_signature_payload(data: Any) -> Dict[str, Any]:
    """
    Select the part of a response's ``data`` covered by its signature.

    Account-style responses carrying all of ``mobile``, ``mch_id``,
    ``account_type``, ``business_mode`` and ``nonce_str`` are signed over
    those five fields only; every other response is signed over the whole
    ``data`` mapping.
    """
    if not isinstance(data, Mapping) or not data:
        return {}
    if all(field in data for field in NARROW_SIGNATURE_FIELDS):
        return {field: data[field] for field in NARROW_SIGNATURE_FIELDS}
    return dict(data)


def verify_signature(response: Any, public_key: RSAPublicKey) -> bool:
    """
    Verify the signature of a Ksher response.

    Args:
        response: Response mapping or model with ``data`` and ``sign``
        public_key: Gateway public key

    Returns:
        True if the signature matches, False otherwise (including when
        ``data`` or ``sign`` is missing). An empty ``data`` mapping is
        verified over the empty canonical string
    """
    if isinstance(response, Mapping):
        data = response.get('data')
        signature = response.get(SIGN_FIELD)
    else:
        data = getattr(response, 'data', None)
        signature = getattr(response, SIGN_FIELD, None)
        if hasattr(data, 'model_dump'):
            data = data.model_dump()

    # Empty containers are present data; empty scalars count as missing
    missing_data = data is None or (not data and not isinstance(data, (Mapping, list)))
    if missing_data or not signature or not isinstance(signature, str):
        return False

    message = convert_data_to_string(build_signature_payload(data))
    return verify_message(message, signature, public_key)


def _read_key_file(value: KeyMaterial, kind: str) -> bytes:
    path = Path(value.decode('utf-8') if isinstance(value, bytes) else value)
    try:
        return path.read_bytes()
    except (OSError, ValueError) as e:
        raise ConfigurationError(
            f"Ksher {kind} key is neither a valid PEM nor a readable file: {str(e)}"
        )


def _as_bytes(value: KeyMaterial) -> bytes:
    return value if isinstance(value, bytes) else value.encode('utf-8')


def load_private_key(value: Optional[KeyMaterial]) -> RSAPrivateKey:
    """
    Load the merchant RSA private key.

    Args:
        value: PEM text, or a path to a PEM file

    Returns:
        RSA private key

    Raises:
        ConfigurationError: If the key is missing, unreadable or not RSA
    """
    if not value:
        raise ConfigurationError("private_key is required")

    try:
        key = serialization.load_pem_private_key(_as_bytes(value), password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm):
        logger.debug("Private key is not inline PEM, reading it from file")
        try:
            key = serialization.load_pem_private_key(
                _read_key_file(value, 'private'), password=None
            )
        except (ValueError, TypeError, UnsupportedAlgorithm) as e:
            raise ConfigurationError(f"Invalid Ksher private key: {str(e)}")

    if not isinstance(key, RSAPrivateKey):
        raise ConfigurationError("Ksher private key must be an RSA key")
    return key


def load_public_key(
    value: Optional[KeyMaterial],
    sign_version: Optional[SignVersion] = None,
) -> RSAPublicKey:
    """
    Load the gateway RSA public key.

    Falls back to the embedded gateway key for ``sign_version`` when no
    key is given.

    Raises:
        ConfigurationError: If the key is unreadable or not RSA
    """
    if not value:
        value = DEFAULT_PUBLIC_KEY_V2 if sign_version == SignVersion.V2 else DEFAULT_PUBLIC_KEY_V1

    try:
        key = serialization.load_pem_public_key(_as_bytes(value))
    except (ValueError, TypeError, UnsupportedAlgorithm):
        logger.debug("Public key is not inline PEM, reading it from file")
        try:
            key = serialization.load_pem_public_key(_read_key_file(value, 'public'))
        except (ValueError, TypeError, UnsupportedAlgorithm) as e:
            raise ConfigurationError(f"Invalid Ksher public key: {str(e)}")

    if not isinstance(key, RSAPublicKey):
        raise ConfigurationError("Ksher public key must be an RSA key")
    return key
