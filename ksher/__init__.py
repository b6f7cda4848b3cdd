"""
Ksher Payment Utility for Django

A reusable client for the Ksher payment gateway: signed requests for
payments, refunds, queries and payouts, with response signature checks.
"""

__version__ = "0.1.0"

from .client import KsherClient
from .constants import Operation, SignVersion
from .exceptions import (
    APIError,
    ConfigurationError,
    KsherException,
    KsherSignatureError,
    KsherTimeoutError,
    ResponseValidationError,
    ValidationError,
)
from .schemas import KsherResponse
from .utils.signing import convert_data_to_string
from .utils.formatters import generate_random_string

__all__ = [
    'KsherClient',
    'KsherResponse',
    'Operation',
    'SignVersion',
    'KsherException',
    'ConfigurationError',
    'ValidationError',
    'APIError',
    'KsherTimeoutError',
    'ResponseValidationError',
    'KsherSignatureError',
    'convert_data_to_string',
    'generate_random_string',
]
