"""
Configuration management for the Ksher payment utility.
"""

from dataclasses import dataclass
from typing import Optional, Union

from django.conf import settings

from .constants import (
    DEFAULT_API_BASE_URL,
    DEFAULT_FEE_TYPE,
    DEFAULT_GATEWAY_BASE_URL,
    DEFAULT_TIMEOUT_MS,
    SignVersion,
    Surface,
)
from .exceptions import ConfigurationError


class KsherSettings:
    """
    Configuration manager for Ksher API settings.
    Loads settings from Django settings, falling back to defaults
    when Django is not configured.
    """

    def _get(self, name, default=None):
        if not settings.configured:
            return default
        return getattr(settings, name, default)

    @property
    def app_id(self):
        """Get Ksher app id (e.g. mch35000)."""
        return self._get('KSHER_APP_ID', '')

    @property
    def private_key(self):
        """Get merchant private key, inline PEM or file path."""
        return self._get('KSHER_PRIVATE_KEY', '')

    @property
    def public_key(self):
        """Get gateway public key, inline PEM or file path (optional)."""
        return self._get('KSHER_PUBLIC_KEY', '')

    @property
    def sign_version(self):
        """Get signature version (optional)."""
        return self._get('KSHER_SIGN_VERSION')

    @property
    def timeout_ms(self):
        """Get request timeout in milliseconds; 0 disables it."""
        return self._get('KSHER_TIMEOUT_MS', DEFAULT_TIMEOUT_MS)

    @property
    def api_base_url(self):
        """Get Ksher API base URL."""
        return self._get('KSHER_API_BASE_URL', DEFAULT_API_BASE_URL)

    @property
    def gateway_base_url(self):
        """Get Ksher gateway base URL."""
        return self._get('KSHER_GATEWAY_BASE_URL', DEFAULT_GATEWAY_BASE_URL)

    @property
    def default_fee_type(self):
        """Get default currency for order creation."""
        return self._get('KSHER_DEFAULT_FEE_TYPE', DEFAULT_FEE_TYPE)


@dataclass(frozen=True)
class ResolvedConfig:
    """Client configuration, fixed for the lifetime of a client."""
    app_id: str
    private_key: Union[str, bytes]
    public_key: Union[str, bytes, None]
    sign_version: Optional[SignVersion]
    timeout_ms: int
    api_base: str
    gateway_base: str

    def base_url(self, surface) -> str:
        """Get the base URL serving ``surface``."""
        return self.gateway_base if surface == Surface.GATEWAY else self.api_base


def _pick(value, fallback):
    return fallback if value is None else value


def _parse_sign_version(value) -> Optional[SignVersion]:
    if not value:
        return None
    try:
        return SignVersion(value)
    except ValueError:
        raise ConfigurationError(
            f"Unsupported sign version: {value}. "
            f"Supported versions: {', '.join(v.value for v in SignVersion)}"
        )


def resolve_config(
    app_id=None,
    private_key=None,
    public_key=None,
    sign_version=None,
    timeout_ms=None,
    api_base=None,
    gateway_base=None,
) -> ResolvedConfig:
    """
    Merge explicit client arguments over Django settings.

    Args:
        app_id: Ksher app id
        private_key: Merchant RSA private key (PEM text or path)
        public_key: Gateway RSA public key (PEM text or path)
        sign_version: Signature version, e.g. "V2"
        timeout_ms: Request timeout in milliseconds (<= 0 means no timeout)
        api_base: Override for the API base URL
        gateway_base: Override for the gateway base URL

    Returns:
        Immutable ResolvedConfig

    Raises:
        ConfigurationError: If app id or private key are missing
    """
    app_id = _pick(app_id, ksher_settings.app_id)
    if not app_id:
        raise ConfigurationError(
            "KSHER_APP_ID is not configured. "
            "Pass app_id or add it to your settings.py or .env file."
        )

    private_key = _pick(private_key, ksher_settings.private_key)
    if not private_key:
        raise ConfigurationError(
            "KSHER_PRIVATE_KEY is not configured. "
            "Pass private_key or add it to your settings.py or .env file."
        )

    try:
        timeout_ms = int(_pick(timeout_ms, ksher_settings.timeout_ms) or 0)
    except (TypeError, ValueError):
        raise ConfigurationError("KSHER_TIMEOUT_MS must be an integer number of milliseconds.")

    return ResolvedConfig(
        app_id=str(app_id),
        private_key=private_key,
        public_key=_pick(public_key, ksher_settings.public_key) or None,
        sign_version=_parse_sign_version(_pick(sign_version, ksher_settings.sign_version)),
        timeout_ms=timeout_ms,
        api_base=_pick(api_base, ksher_settings.api_base_url) or DEFAULT_API_BASE_URL,
        gateway_base=_pick(gateway_base, ksher_settings.gateway_base_url) or DEFAULT_GATEWAY_BASE_URL,
    )


# Singleton instance
ksher_settings = KsherSettings()
