"""
Refund service for Ksher orders.
"""

from typing import Any

from ..constants import Operation
from ..schemas import KsherResponse
from .base import BaseService


class RefundService(BaseService):
    """
    Service for refund operations.
    """

    def order_refund(self, **fields: Any) -> KsherResponse:
        """
        Refund a paid order.

        Args:
            mch_order_no: Merchant order number (required)
            **fields: Refund fields such as mch_refund_no, total_fee,
                refund_fee, fee_type

        Returns:
            KsherResponse
        """
        return self._execute(Operation.ORDER_REFUND, fields)

    def refund_query(self, **fields: Any) -> KsherResponse:
        """
        Query a refund by mch_refund_no, ksher_refund_no or mch_order_no.

        Raises:
            ValidationError: If none of the three is given
        """
        return self._execute(Operation.REFUND_QUERY, fields)
