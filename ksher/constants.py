"""
Constants and enums for Ksher payment operations.
"""

from enum import Enum


class SignVersion(str, Enum):
    """Signature protocol versions understood by the gateway."""
    V2 = "V2"


class Surface(str, Enum):
    """Base URL an operation is routed to."""
    API = "api"
    GATEWAY = "gateway"


class Operation(str, Enum):
    """Ksher API operations."""
    GATEWAY_PAY = "gatewayPay"
    GATEWAY_ORDER_QUERY = "gatewayOrderQuery"
    CANCEL_ORDER = "cancelOrder"
    ORDER_REFUND = "orderRefund"
    ORDER_REVERSE = "orderReverse"
    NATIVE_PAY = "nativePay"
    ORDER_QUERY = "orderQuery"
    QUICK_PAY = "quickPay"
    APP_PAY = "appPay"
    MINI_PROGRAM_PAY = "miniProgramPay"
    WAP_PAY = "wapPay"
    JSAPI_PAY = "jsapiPay"
    REFUND_QUERY = "refundQuery"
    ORDER_CLOSE = "orderClose"
    PAYOUT = "payout"
    ORDER_QUERY_PAYOUT = "orderQueryPayout"
    GET_PAYOUT_BALANCE = "getPayoutBalance"
    RATE_QUERY = "rateQuery"
    MERCHANT_INFO = "merchantInfo"
    GET_SETTLEMENT_INFO = "getSettlementInfo"


# Composite operation mapped onto gatewayPay by KsherClient.order_create
ORDER_CREATE = "orderCreate"


# Base URLs
DEFAULT_API_BASE_URL = "https://api.mch.ksher.net/KsherPay"
DEFAULT_GATEWAY_BASE_URL = "https://gateway.ksher.com/api"

# Gateway public keys, used when no public key is configured
DEFAULT_PUBLIC_KEY_V1 = """-----BEGIN RSA PUBLIC KEY-----
MEgCQQC+/eeTgrjeCPHmDS/5osWViFyIAryFRIr5canaYhz3Di3UNkT0sf6TkabF
LvxPcM9JmEtj2O4TXNpgYATkE/sFAgMBAAE=
-----END RSA PUBLIC KEY-----
"""

DEFAULT_PUBLIC_KEY_V2 = """-----BEGIN RSA PUBLIC KEY-----
MIIBCgKCAQEA3WvHCgE/NVHjWG+IzjB2OeWFwjQJFPEi/O1AFaiLdsyXgQ8sROIM
pp7iyhbubKf+aNFdJx4+hwbVSd3BAUUdKQJyovdqjF0DLLrk0QLUZAnEX7lylugt
VL+eCKRhI8UzXxEFMt8vrhw1p9oaxBK/0mXcqUGvtM7hNAZo9jdfB/l+gAf6X3jR
1gj7lsz190A+FfDwzIhCWK8FcdroW7A00KAcCdAadzNdn16UNj4G0kGXhAMf+175
gTFuVuiZx1oSaInrOgnl05qqixTbrdm/BqwbFWGGYX1B6yKM0/Vus3DqkwgXr1q+
bWPtM3sDOQuQmkbo/jQbkMv+Ab8ij2f1gwIDAQAB
-----END RSA PUBLIC KEY-----
"""

# Request headers
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
SIGN_VERSION_HEADER = "ksher-sign-version"

# Protocol fields
SIGN_FIELD = "sign"
NONCE_LENGTH = 32
NONCE_ALPHABET = (
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    "abcdefghijklmnopqrstuvwxyz"
    "0123456789"
)

# Responses whose data carries all of these fields are signed over this subset only
NARROW_SIGNATURE_FIELDS = (
    "mobile",
    "mch_id",
    "account_type",
    "business_mode",
    "nonce_str",
)

SUCCESS_CODE = 0

# Default settings
DEFAULT_FEE_TYPE = "THB"
DEFAULT_TIMEOUT_MS = 0  # no timeout
MAX_ORDER_NO_LENGTH = 32
