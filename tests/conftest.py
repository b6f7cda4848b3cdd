"""Pytest bootstrap configuration.

Configure Django settings with freshly generated merchant and gateway
key pairs before any ksher module reads them.
"""
import json
import random
from unittest.mock import MagicMock, patch
from urllib.parse import parse_qsl

import django
import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from django.conf import settings

APP_ID = "mch35000"


def _generate_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


def private_pem(key) -> str:
    return key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("utf-8")


def public_pem(key) -> str:
    return key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode("utf-8")


MERCHANT_KEY = _generate_key()
GATEWAY_KEY = _generate_key()

if not settings.configured:
    settings.configure(
        INSTALLED_APPS=["ksher"],
        KSHER_APP_ID=APP_ID,
        KSHER_PRIVATE_KEY=private_pem(MERCHANT_KEY),
        KSHER_PUBLIC_KEY=public_pem(GATEWAY_KEY),
    )
    django.setup()


@pytest.fixture
def merchant_key():
    return MERCHANT_KEY


@pytest.fixture
def gateway_key():
    return GATEWAY_KEY


@pytest.fixture
def merchant_pem():
    return private_pem(MERCHANT_KEY)


@pytest.fixture
def gateway_public_pem():
    return public_pem(GATEWAY_KEY)


@pytest.fixture
def client():
    from ksher.client import KsherClient

    return KsherClient(
        app_id=APP_ID,
        private_key=private_pem(MERCHANT_KEY),
        public_key=public_pem(GATEWAY_KEY),
        random_source=random.Random(42),
    )


@pytest.fixture(autouse=True)
def _reset_default_client():
    from ksher.services.base import BaseService

    yield
    BaseService._default_client = None


@pytest.fixture
def mock_post():
    with patch("requests.Session.post") as post:
        yield post


@pytest.fixture
def reply(mock_post):
    """Make the next POST answer with ``body`` (a dict, or raw bytes)."""
    def _reply(body, status_code=200):
        content = body if isinstance(body, bytes) else json.dumps(body).encode("utf-8")
        response = MagicMock(status_code=status_code)
        response.iter_content.side_effect = lambda chunk_size=1: iter([content] if content else [])
        mock_post.return_value = response
        return mock_post
    return _reply


@pytest.fixture
def sent_form(mock_post):
    """Decoded form fields of the last POST."""
    def _sent_form():
        return dict(parse_qsl(mock_post.call_args.kwargs["data"], keep_blank_values=True))
    return _sent_form


@pytest.fixture
def signed_response():
    """Build a response body signed with the gateway key."""
    from ksher.utils.signing import build_signature_payload, convert_data_to_string, sign_message

    def _build(data, code=0, **extra):
        message = convert_data_to_string(build_signature_payload(data))
        return {
            "code": code,
            "msg": "ok",
            "data": data,
            "sign": sign_message(message, GATEWAY_KEY),
            **extra,
        }
    return _build
