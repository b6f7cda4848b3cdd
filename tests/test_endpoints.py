import dataclasses

import pytest

from ksher.constants import Operation, Surface
from ksher.endpoints import ENDPOINTS, get_endpoint
from ksher.schemas import GatewayOrderQueryResponse, GatewayPayResponse, KsherResponse


def test_every_operation_is_registered():
    assert set(ENDPOINTS) == set(Operation)
    assert len(ENDPOINTS) == 20


def test_registry_is_read_only():
    with pytest.raises(TypeError):
        ENDPOINTS[Operation.PAYOUT] = ENDPOINTS[Operation.ORDER_QUERY]


def test_definitions_are_frozen():
    with pytest.raises(dataclasses.FrozenInstanceError):
        ENDPOINTS[Operation.PAYOUT].path = "/elsewhere"


@pytest.mark.parametrize(
    "operation, surface, path",
    [
        (Operation.GATEWAY_PAY, Surface.GATEWAY, "/gateway_pay"),
        (Operation.GATEWAY_ORDER_QUERY, Surface.GATEWAY, "/gateway_order_query"),
        (Operation.CANCEL_ORDER, Surface.GATEWAY, "/cancel_order"),
        (Operation.ORDER_REFUND, Surface.API, "/order_refund"),
        (Operation.QUICK_PAY, Surface.API, "/quick_pay"),
        (Operation.REFUND_QUERY, Surface.API, "/refund_query"),
        (Operation.ORDER_QUERY_PAYOUT, Surface.API, "/order_query_payout"),
        (Operation.GET_SETTLEMENT_INFO, Surface.API, "/get_settlement_info"),
    ],
)
def test_routing(operation, surface, path):
    endpoint = ENDPOINTS[operation]
    assert endpoint.surface == surface
    assert endpoint.path == path


def test_field_rules():
    assert ENDPOINTS[Operation.GATEWAY_PAY].decode_fields == {
        "product_name", "mch_redirect_url", "mch_redirect_url_fail", "mch_notify_url",
    }
    assert ENDPOINTS[Operation.APP_PAY].decode_fields == {
        "notify_url", "redirect_url", "refer_url", "product",
    }
    for operation in (Operation.GATEWAY_ORDER_QUERY, Operation.ORDER_QUERY, Operation.ORDER_QUERY_PAYOUT):
        assert ENDPOINTS[operation].omit_fields == {"operator_id"}
    assert not ENDPOINTS[Operation.PAYOUT].omit_fields


def test_response_schemas():
    assert ENDPOINTS[Operation.GATEWAY_PAY].response_schema is GatewayPayResponse
    assert ENDPOINTS[Operation.GATEWAY_ORDER_QUERY].response_schema is GatewayOrderQueryResponse
    assert ENDPOINTS[Operation.RATE_QUERY].response_schema is KsherResponse


def test_get_endpoint_by_name():
    assert get_endpoint("refundQuery") is ENDPOINTS[Operation.REFUND_QUERY]
    with pytest.raises(ValueError):
        get_endpoint("unknownOperation")
