import pytest

from ksher.exceptions import ResponseValidationError, ValidationError
from ksher.schemas import (
    GatewayPayRequest,
    GatewayPayResponse,
    KsherResponse,
    OpenRequest,
    OrderLookupRequest,
    PayRequest,
    RefundQueryRequest,
)
from ksher.utils.validators import validate_payload, validate_response


class TestValidatePayload:

    def test_refund_query_with_order_no_only(self):
        assert validate_payload(RefundQueryRequest, {"mch_order_no": "ORD123"}) == {"mch_order_no": "ORD123"}

    def test_refund_query_without_reference_names_all_alternatives(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_payload(RefundQueryRequest, {"refund_fee": 100})

        message = exc_info.value.message
        assert message.startswith("Invalid request: ")
        for field in ("mch_refund_no", "ksher_refund_no", "mch_order_no"):
            assert field in message

    def test_order_lookup_requires_one_order_no(self):
        assert validate_payload(OrderLookupRequest, {"ksher_order_no": "K1"}) == {"ksher_order_no": "K1"}
        with pytest.raises(ValidationError, match="mch_order_no or ksher_order_no is required"):
            validate_payload(OrderLookupRequest, {"operator_id": "op"})

    def test_one_of_constraint_is_a_value_error(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_payload(RefundQueryRequest, {})

        assert [issue["type"] for issue in exc_info.value.response_data] == ["value_error"]

    def test_every_violation_is_reported(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_payload(GatewayPayRequest, {"mch_order_no": "ORD1", "total_fee": 100})

        message = exc_info.value.message
        for field in ("fee_type", "refer_url", "product_name", "channel_list",
                      "mch_redirect_url", "mch_redirect_url_fail"):
            assert f"{field}: " in message

    def test_order_no_length_limit(self):
        with pytest.raises(ValidationError, match="mch_order_no"):
            validate_payload(PayRequest, {"mch_order_no": "X" * 33, "total_fee": 1, "fee_type": "THB"})

    def test_amount_accepts_string_or_number(self):
        for fee in ("100", 100, 1.5):
            result = validate_payload(PayRequest, {"mch_order_no": "ORD1", "total_fee": fee, "fee_type": "THB"})
            assert result["total_fee"] == fee

    def test_unknown_fields_are_kept_in_caller_order(self):
        data = {"notify_url": "https://example.com", "mch_order_no": "ORD1", "total_fee": 1, "fee_type": "THB"}
        assert list(validate_payload(PayRequest, data)) == list(data)

    def test_non_mapping_is_rejected(self):
        with pytest.raises(ValidationError, match="expected a mapping"):
            validate_payload(OpenRequest, ["a"])


class TestValidateResponse:

    def test_code_is_coerced(self):
        response = validate_response(KsherResponse, {"code": "0", "msg": "ok"})
        assert response.code == 0
        assert response.is_success

    def test_extra_fields_are_preserved(self):
        response = validate_response(KsherResponse, {"code": 1, "trace_id": "abc"})
        assert response.model_extra == {"trace_id": "abc"}

    def test_missing_code_is_a_contract_violation(self):
        with pytest.raises(ResponseValidationError, match="code"):
            validate_response(KsherResponse, {"msg": "ok"})

    def test_operation_specific_data(self):
        response = validate_response(GatewayPayResponse, {"code": 0, "data": {"pay_content": "https://pay"}})
        assert response.data.pay_content == "https://pay"

        with pytest.raises(ResponseValidationError, match="pay_content"):
            validate_response(GatewayPayResponse, {"code": 0, "data": {}})
