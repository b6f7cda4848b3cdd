"""
Payment service for Ksher payments.
Handles gateway (hosted page) payments and the direct API payment flows.
"""

from typing import Any

from ..constants import ORDER_CREATE, Operation
from ..schemas import GatewayOrderQueryResponse, GatewayPayResponse, KsherResponse
from .base import BaseService


class PaymentService(BaseService):
    """
    Service for payment operations.
    Handles creation, queries, cancellation and closing of orders.
    """

    def order_create(self, **fields: Any) -> GatewayPayResponse:
        """
        Create a hosted gateway payment from friendlier field names.

        Args:
            amount: Order amount
            merchant_order_id: Merchant order number (max 32 chars)
            product_name: Product description
            channel: Comma-separated payment channels (channel_list)
            redirect_url: Redirect after a successful payment
            redirect_url_fail: Redirect after a failed payment
            refer_url: Merchant page the customer came from
            timestamp: Merchant timestamp
            note: Free text echoed back as ``attach`` (optional)
            fee_type: Currency, defaults to KSHER_DEFAULT_FEE_TYPE (optional)
            mch_code: Merchant code, defaults to merchant_order_id (optional)

        Returns:
            GatewayPayResponse; ``data.pay_content`` is the payment page URL

        Raises:
            ValidationError: If input validation fails
        """
        return self._call(ORDER_CREATE, self.client.order_create, fields)

    def gateway_pay(self, **fields: Any) -> GatewayPayResponse:
        """
        Create a hosted payment page order.

        Args:
            mch_order_no, total_fee, fee_type, refer_url, product_name,
            channel_list, mch_redirect_url, mch_redirect_url_fail are
            required; mch_code and any other gateway field are optional.
            URL-encoded product_name and redirect/notify URLs are decoded.

        Returns:
            GatewayPayResponse
        """
        return self._execute(Operation.GATEWAY_PAY, fields)

    def gateway_order_query(self, **fields: Any) -> GatewayOrderQueryResponse:
        """Query a hosted payment order by mch_order_no or ksher_order_no."""
        return self._execute(Operation.GATEWAY_ORDER_QUERY, fields)

    def cancel_order(self, **fields: Any) -> KsherResponse:
        """Cancel a hosted payment order by mch_order_no or ksher_order_no."""
        return self._execute(Operation.CANCEL_ORDER, fields)

    def native_pay(self, **fields: Any) -> KsherResponse:
        """Create a QR code (merchant-presented) payment."""
        return self._execute(Operation.NATIVE_PAY, fields)

    def quick_pay(self, **fields: Any) -> KsherResponse:
        """Charge a customer-presented code; requires auth_code."""
        return self._execute(Operation.QUICK_PAY, fields)

    def app_pay(self, **fields: Any) -> KsherResponse:
        return self._execute(Operation.APP_PAY, fields)

    def mini_program_pay(self, **fields: Any) -> KsherResponse:
        return self._execute(Operation.MINI_PROGRAM_PAY, fields)

    def wap_pay(self, **fields: Any) -> KsherResponse:
        return self._execute(Operation.WAP_PAY, fields)

    def jsapi_pay(self, **fields: Any) -> KsherResponse:
        return self._execute(Operation.JSAPI_PAY, fields)

    def order_query(self, **fields: Any) -> KsherResponse:
        """
        Query a payment order.

        Args:
            mch_order_no: Merchant order number
            ksher_order_no: Ksher order number
            (one of the two is required; operator_id is never sent)

        Returns:
            KsherResponse
        """
        return self._execute(Operation.ORDER_QUERY, fields)

    def order_close(self, **fields: Any) -> KsherResponse:
        return self._execute(Operation.ORDER_CLOSE, fields)

    def order_reverse(self, **fields: Any) -> KsherResponse:
        return self._execute(Operation.ORDER_REVERSE, fields)

    def get_pay_content(self, **fields: Any) -> str:
        """
        Create an order with ``order_create`` and return the payment page URL.

        Returns:
            ``pay_content`` of a successful response, or an empty string
        """
        response = self.order_create(**fields)
        if response.is_success and response.data is not None:
            return response.data.pay_content
        return ''
