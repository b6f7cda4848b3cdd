"""
Payout service for Ksher disbursements.
"""

import logging
from typing import Any

from ..constants import Operation
from ..schemas import KsherResponse
from .base import BaseService

logger = logging.getLogger(__name__)


class PayoutService(BaseService):
    """
    Service for payout operations.
    Handles creation, status queries and balance checks.
    """

    def payout(self, **fields: Any) -> KsherResponse:
        """
        Create a payout.

        Args:
            mch_order_no: Merchant order number (required)
            **fields: Payout fields (amount, currency, receiver details...)

        Returns:
            KsherResponse
        """
        logger.info(f"Creating payout for order: {fields.get('mch_order_no')}")
        return self._execute(Operation.PAYOUT, fields)

    def order_query_payout(self, **fields: Any) -> KsherResponse:
        """Query a payout by mch_order_no or ksher_order_no."""
        return self._execute(Operation.ORDER_QUERY_PAYOUT, fields)

    def get_payout_balance(self, **fields: Any) -> KsherResponse:
        """
        Retrieve the payout balance.

        Returns:
            KsherResponse whose ``data`` holds the balance per currency
        """
        return self._execute(Operation.GET_PAYOUT_BALANCE, fields)
