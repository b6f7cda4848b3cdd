import dataclasses

import pytest
from django.test import override_settings

from ksher.client import KsherClient
from ksher.config import ksher_settings, resolve_config
from ksher.constants import DEFAULT_API_BASE_URL, DEFAULT_GATEWAY_BASE_URL, SignVersion, Surface
from ksher.exceptions import ConfigurationError


def test_settings_are_read_from_django():
    assert ksher_settings.app_id == "mch35000"
    assert ksher_settings.timeout_ms == 0
    assert ksher_settings.default_fee_type == "THB"
    assert ksher_settings.api_base_url == DEFAULT_API_BASE_URL


def test_resolve_from_settings():
    config = resolve_config()

    assert config.app_id == "mch35000"
    assert config.sign_version is None
    assert config.timeout_ms == 0
    assert config.base_url(Surface.API) == DEFAULT_API_BASE_URL
    assert config.base_url(Surface.GATEWAY) == DEFAULT_GATEWAY_BASE_URL


def test_explicit_arguments_win(merchant_pem):
    config = resolve_config(
        app_id="mch99999",
        private_key=merchant_pem,
        sign_version="V2",
        timeout_ms=2500,
        gateway_base="https://sandbox.example.com/api",
    )

    assert config.app_id == "mch99999"
    assert config.sign_version == SignVersion.V2
    assert config.timeout_ms == 2500
    assert config.base_url(Surface.GATEWAY) == "https://sandbox.example.com/api"


def test_override_settings():
    with override_settings(KSHER_SIGN_VERSION="V2", KSHER_TIMEOUT_MS="3000", KSHER_DEFAULT_FEE_TYPE="USD"):
        config = resolve_config()
        assert ksher_settings.default_fee_type == "USD"

    assert config.sign_version == SignVersion.V2
    assert config.timeout_ms == 3000


def test_missing_app_id():
    with override_settings(KSHER_APP_ID=""):
        with pytest.raises(ConfigurationError, match="KSHER_APP_ID"):
            resolve_config()


def test_missing_private_key():
    with override_settings(KSHER_PRIVATE_KEY=""):
        with pytest.raises(ConfigurationError, match="KSHER_PRIVATE_KEY"):
            KsherClient()


def test_unsupported_sign_version():
    with pytest.raises(ConfigurationError, match="Unsupported sign version"):
        resolve_config(sign_version="V9")


def test_invalid_timeout():
    with pytest.raises(ConfigurationError, match="KSHER_TIMEOUT_MS"):
        resolve_config(timeout_ms="soon")


def test_unreadable_key_path():
    with pytest.raises(ConfigurationError):
        KsherClient(private_key="/nonexistent/merchant.pem")


def test_resolved_config_is_frozen():
    config = resolve_config()

    with pytest.raises(dataclasses.FrozenInstanceError):
        config.app_id = "other"


def test_client_without_public_key_uses_embedded_key(merchant_pem):
    with override_settings(KSHER_PUBLIC_KEY=""):
        client = KsherClient(private_key=merchant_pem)

    assert client.config.public_key is None
    assert client._public_key.key_size == 512
