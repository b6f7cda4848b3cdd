"""
Registry of Ksher operations: routing, schemas and field rules.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import FrozenSet, Mapping, Optional, Type

from pydantic import BaseModel

from .constants import Operation, Surface
from .schemas import (
    GatewayOrderQueryResponse,
    GatewayPayRequest,
    GatewayPayResponse,
    KsherResponse,
    OpenRequest,
    OrderLookupRequest,
    OrderReferenceRequest,
    PayRequest,
    QuickPayRequest,
    RefundQueryRequest,
)


@dataclass(frozen=True)
class EndpointDefinition:
    """
    How one operation is sent.

    ``decode_fields`` are URL-decoded before signing, ``omit_fields`` are
    dropped before sending whatever the caller passed.
    """
    surface: Surface
    path: str
    request_schema: Type[BaseModel]
    response_schema: Type[KsherResponse] = KsherResponse
    decode_fields: FrozenSet[str] = field(default_factory=frozenset)
    omit_fields: FrozenSet[str] = field(default_factory=frozenset)


def _endpoint(surface, path, request_schema, response_schema=KsherResponse, decode=(), omit=()):
    return EndpointDefinition(
        surface=surface,
        path=path,
        request_schema=request_schema,
        response_schema=response_schema,
        decode_fields=frozenset(decode),
        omit_fields=frozenset(omit),
    )


ENDPOINTS: Mapping[Operation, EndpointDefinition] = MappingProxyType({
    Operation.GATEWAY_PAY: _endpoint(
        Surface.GATEWAY, '/gateway_pay', GatewayPayRequest, GatewayPayResponse,
        decode=('product_name', 'mch_redirect_url', 'mch_redirect_url_fail', 'mch_notify_url'),
    ),
    Operation.GATEWAY_ORDER_QUERY: _endpoint(
        Surface.GATEWAY, '/gateway_order_query', OrderLookupRequest, GatewayOrderQueryResponse,
        omit=('operator_id',),
    ),
    Operation.CANCEL_ORDER: _endpoint(Surface.GATEWAY, '/cancel_order', OrderLookupRequest),
    Operation.ORDER_REFUND: _endpoint(Surface.API, '/order_refund', OrderReferenceRequest),
    Operation.ORDER_REVERSE: _endpoint(Surface.API, '/order_reverse', OrderLookupRequest),
    Operation.NATIVE_PAY: _endpoint(
        Surface.API, '/native_pay', PayRequest,
        decode=('notify_url', 'product'),
    ),
    Operation.ORDER_QUERY: _endpoint(
        Surface.API, '/order_query', OrderLookupRequest,
        omit=('operator_id',),
    ),
    Operation.QUICK_PAY: _endpoint(
        Surface.API, '/quick_pay', QuickPayRequest,
        decode=('notify_url', 'product'),
    ),
    Operation.APP_PAY: _endpoint(
        Surface.API, '/app_pay', PayRequest,
        decode=('notify_url', 'redirect_url', 'refer_url', 'product'),
    ),
    Operation.MINI_PROGRAM_PAY: _endpoint(
        Surface.API, '/mini_program_pay', PayRequest,
        decode=('notify_url', 'product'),
    ),
    Operation.WAP_PAY: _endpoint(
        Surface.API, '/wap_pay', PayRequest,
        decode=('notify_url', 'redirect_url', 'refer_url'),
    ),
    Operation.JSAPI_PAY: _endpoint(
        Surface.API, '/jsapi_pay', PayRequest,
        decode=('notify_url', 'redirect_url'),
    ),
    Operation.REFUND_QUERY: _endpoint(Surface.API, '/refund_query', RefundQueryRequest),
    Operation.ORDER_CLOSE: _endpoint(Surface.API, '/order_close', OrderLookupRequest),
    Operation.PAYOUT: _endpoint(Surface.API, '/payout', OrderReferenceRequest),
    Operation.ORDER_QUERY_PAYOUT: _endpoint(
        Surface.API, '/order_query_payout', OrderLookupRequest,
        omit=('operator_id',),
    ),
    Operation.GET_PAYOUT_BALANCE: _endpoint(Surface.API, '/get_payout_balance', OpenRequest),
    Operation.RATE_QUERY: _endpoint(Surface.API, '/rate_query', OpenRequest),
    Operation.MERCHANT_INFO: _endpoint(Surface.API, '/merchant_info', OpenRequest),
    Operation.GET_SETTLEMENT_INFO: _endpoint(Surface.API, '/get_settlement_info', OpenRequest),
})


def get_endpoint(operation) -> EndpointDefinition:
    """
    Look up the definition of an operation.

    Args:
        operation: Operation enum member or its name (e.g. "gatewayPay")

    Raises:
        ValueError: If the operation is unknown
    """
    return ENDPOINTS[Operation(operation)]
