"""
Account service for Ksher merchant information.
Handles rates, merchant details and settlement information.
"""

from typing import Any

from ..constants import Operation
from ..schemas import KsherResponse
from .base import BaseService


class AccountService(BaseService):
    """
    Service for account-related operations.
    """

    def rate_query(self, **fields: Any) -> KsherResponse:
        """Retrieve exchange rates (e.g. channel, fee_type, date)."""
        return self._execute(Operation.RATE_QUERY, fields)

    def merchant_info(self, **fields: Any) -> KsherResponse:
        return self._execute(Operation.MERCHANT_INFO, fields)

    def get_settlement_info(self, **fields: Any) -> KsherResponse:
        """Retrieve settlement information for a period."""
        return self._execute(Operation.GET_SETTLEMENT_INFO, fields)
