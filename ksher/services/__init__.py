"""
Service modules for Ksher payment operations.
"""

from .payment_service import PaymentService
from .refund_service import RefundService
from .payout_service import PayoutService
from .account_service import AccountService

__all__ = [
    'PaymentService',
    'RefundService',
    'PayoutService',
    'AccountService',
]
