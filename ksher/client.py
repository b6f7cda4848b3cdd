"""
Ksher API client: signs requests, sends them and verifies responses.
"""

import json
import logging
import random
from typing import Any, Dict, Mapping, Optional

from .config import ResolvedConfig, ksher_settings, resolve_config
from .constants import ORDER_CREATE, SIGN_FIELD, SIGN_VERSION_HEADER, Operation, SignVersion, Surface
from .endpoints import get_endpoint
from .exceptions import KsherSignatureError
from .schemas import GatewayPayResponse, KsherResponse, OrderCreateRequest
from .utils.formatters import (
    apply_decode_fields,
    apply_omit_fields,
    build_form_body,
    current_timestamp_ms,
    generate_random_string,
    mask_payload,
)
from .utils.http_client import HTTPClient, HTTPResponse
from .utils.signing import load_private_key, load_public_key, sign_payload, verify_signature
from .utils.validators import validate_payload, validate_response

logger = logging.getLogger(__name__)


class KsherClient:
    """
    Client for the Ksher payment API.

    Configuration and keys are resolved once at construction; every
    ``request`` is independent, so one client can serve concurrent calls.
    Arguments left as None fall back to the ``KSHER_*`` Django settings.
    """

    def __init__(
        self,
        app_id: Optional[str] = None,
        private_key=None,
        public_key=None,
        sign_version: Optional[str] = None,
        timeout_ms: Optional[int] = None,
        api_base: Optional[str] = None,
        gateway_base: Optional[str] = None,
        random_source: Optional[random.Random] = None,
    ):
        self.config: ResolvedConfig = resolve_config(
            app_id=app_id,
            private_key=private_key,
            public_key=public_key,
            sign_version=sign_version,
            timeout_ms=timeout_ms,
            api_base=api_base,
            gateway_base=gateway_base,
        )
        self._private_key = load_private_key(self.config.private_key)
        self._public_key = load_public_key(self.config.public_key, self.config.sign_version)
        self._random = random_source
        self.http_clients = {
            surface: HTTPClient(self.config.base_url(surface), timeout_ms=self.config.timeout_ms)
            for surface in Surface
        }

    def sign(self, payload: Mapping[str, Any]) -> str:
        """Hex RSA-MD5 signature of ``payload``'s canonical string."""
        return sign_payload(payload, self._private_key)

    def verify_signature(self, response: Any) -> bool:
        """
        Verify a response's ``sign`` against its ``data``.

        Returns False when either is missing.
        """
        return verify_signature(response, self._public_key)

    def _stamp(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return {
            **payload,
            'appid': self.config.app_id,
            'nonce_str': generate_random_string(rng=self._random),
            'time_stamp': current_timestamp_ms(),
        }

    def _headers(self) -> Dict[str, str]:
        headers = {}
        if self.config.sign_version == SignVersion.V2:
            headers[SIGN_VERSION_HEADER] = SignVersion.V2.value
        return headers

    @staticmethod
    def _parse_body(response: HTTPResponse) -> Any:
        if not response.text:
            return {}
        try:
            return json.loads(response.text)
        except ValueError:
            logger.warning(f"Non-JSON response with status {response.status_code}")
            return {'code': response.status_code, 'msg': response.text}

    def request(self, operation, data: Optional[Mapping[str, Any]] = None) -> KsherResponse:
        """
        Run one operation through the signing pipeline.

        Args:
            operation: Operation enum member or name (e.g. "refundQuery");
                "orderCreate" is handed to ``order_create``
            data: Operation fields

        Returns:
            Parsed response. Responses with a non-zero ``code`` are returned
            as-is without signature verification.

        Raises:
            ValidationError: If ``data`` does not match the operation's shape
            APIError: On transport failure (KsherTimeoutError on timeout)
            ResponseValidationError: If the response breaks its contract
            KsherSignatureError: If a successful response fails verification
        """
        if operation == ORDER_CREATE:
            return self.order_create(data)

        endpoint = get_endpoint(operation)
        data = {} if data is None else data

        validated = validate_payload(endpoint.request_schema, data)
        decoded = apply_decode_fields(validated, endpoint.decode_fields)
        sanitized = apply_omit_fields(decoded, endpoint.omit_fields)
        payload = self._stamp({
            key: value for key, value in sanitized.items() if value is not None
        })
        payload[SIGN_FIELD] = self.sign(payload)
        logger.debug(f"Payload: {mask_payload(payload)}")

        http_response = self.http_clients[endpoint.surface].post_form(
            endpoint.path,
            build_form_body(payload),
            headers=self._headers(),
        )

        body = self._parse_body(http_response)
        response = validate_response(endpoint.response_schema, body)

        if response.is_success and not self.verify_signature(body):
            logger.warning(f"Signature verification failed for {endpoint.path}")
            raise KsherSignatureError("verify signature failed", response=response)

        return response

    def order_create(self, data: Optional[Mapping[str, Any]] = None) -> GatewayPayResponse:
        """
        Create a hosted gateway payment from friendlier field names.

        Args:
            data: ``amount``, ``merchant_order_id``, ``product_name``,
                ``channel``, ``redirect_url``, ``redirect_url_fail``,
                ``refer_url`` and ``timestamp`` are required; ``note``,
                ``fee_type`` (default KSHER_DEFAULT_FEE_TYPE) and ``mch_code``
                (default ``merchant_order_id``) are optional

        Returns:
            GatewayPayResponse; ``data.pay_content`` is the payment page URL

        Raises:
            ValidationError: If ``data`` is not a valid order
        """
        order = validate_payload(OrderCreateRequest, {} if data is None else data)
        logger.info(f"Creating gateway order: {order['merchant_order_id']}")

        payload = {
            'mch_order_no': order['merchant_order_id'],
            'mch_code': order.get('mch_code') or order['merchant_order_id'],
            'total_fee': order['amount'],
            'fee_type': order.get('fee_type') or ksher_settings.default_fee_type,
            'product_name': order['product_name'],
            'attach': order.get('note'),
            'channel_list': order['channel'],
            'refer_url': order['refer_url'],
            'mch_redirect_url': order['redirect_url'],
            'mch_redirect_url_fail': order['redirect_url_fail'],
            'time_stamp': order['timestamp'],
        }
        return self.request(
            Operation.GATEWAY_PAY,
            {key: value for key, value in payload.items() if value is not None},
        )

    def close(self):
        """Close the underlying HTTP sessions."""
        for http_client in self.http_clients.values():
            http_client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
