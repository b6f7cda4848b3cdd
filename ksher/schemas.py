"""
Request and response shapes for Ksher operations.

Every model keeps unknown fields (``extra="allow"``) so new gateway fields
pass through untouched.
"""

from typing import Annotated, Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, StrictStr, model_validator

from .constants import MAX_ORDER_NO_LENGTH, SUCCESS_CODE

Amount = Union[StrictStr, StrictInt, StrictFloat]
NonEmptyStr = Annotated[StrictStr, Field(min_length=1)]
OrderNo = Annotated[StrictStr, Field(min_length=1, max_length=MAX_ORDER_NO_LENGTH)]


class KsherModel(BaseModel):
    model_config = ConfigDict(extra='allow')


# Requests

class OpenRequest(KsherModel):
    """Operations without required fields."""


class PayRequest(KsherModel):
    mch_order_no: OrderNo
    total_fee: Amount
    fee_type: NonEmptyStr


class GatewayPayRequest(PayRequest):
    refer_url: NonEmptyStr
    product_name: NonEmptyStr
    channel_list: NonEmptyStr
    mch_redirect_url: NonEmptyStr
    mch_redirect_url_fail: NonEmptyStr
    mch_code: Optional[OrderNo] = None


class QuickPayRequest(PayRequest):
    auth_code: NonEmptyStr


class OrderReferenceRequest(KsherModel):
    mch_order_no: OrderNo


class OrderLookupRequest(KsherModel):
    """Looks an order up by merchant or Ksher order number."""
    mch_order_no: Optional[OrderNo] = None
    ksher_order_no: Optional[StrictStr] = None

    @model_validator(mode='after')
    def _require_order_no(self):
        if not (self.mch_order_no or self.ksher_order_no):
            raise ValueError('mch_order_no or ksher_order_no is required')
        return self


class RefundQueryRequest(KsherModel):
    mch_refund_no: Optional[StrictStr] = None
    ksher_refund_no: Optional[StrictStr] = None
    mch_order_no: Optional[OrderNo] = None

    @model_validator(mode='after')
    def _require_refund_reference(self):
        if not (self.mch_refund_no or self.ksher_refund_no or self.mch_order_no):
            raise ValueError('mch_refund_no, ksher_refund_no, or mch_order_no is required')
        return self


class OrderCreateRequest(KsherModel):
    """Friendlier shape of a gateway payment, see ``PaymentService.order_create``."""
    amount: Amount
    merchant_order_id: OrderNo
    product_name: NonEmptyStr
    note: Optional[StrictStr] = None
    channel: NonEmptyStr
    redirect_url: NonEmptyStr
    redirect_url_fail: NonEmptyStr
    refer_url: NonEmptyStr
    timestamp: NonEmptyStr
    fee_type: Optional[StrictStr] = None
    mch_code: Optional[OrderNo] = None


# Responses

class KsherResponse(KsherModel):
    """Response envelope. ``code == 0`` means success."""
    code: int
    msg: Optional[str] = None
    message: Optional[str] = None
    data: Optional[Dict[str, Any]] = None
    sign: Optional[str] = None
    status_code: Optional[str] = None
    status_msg: Optional[str] = None
    time_stamp: Optional[str] = None
    version: Optional[str] = None

    @property
    def is_success(self) -> bool:
        return self.code == SUCCESS_CODE


class GatewayPayData(KsherModel):
    pay_content: str


class GatewayPayResponse(KsherResponse):
    data: Optional[GatewayPayData] = None


class GatewayOrderQueryData(KsherModel):
    channel: str
    openid: str
    channel_order_no: str
    cash_fee_type: str
    ksher_order_no: str
    nonce_str: str
    time_end: str
    fee_type: str
    attach: str
    rate: str
    result: str
    total_fee: Amount
    appid: str
    cash_fee: Amount
    mch_order_no: str
    pay_mch_order_no: str


class GatewayOrderQueryResponse(KsherResponse):
    data: Optional[GatewayOrderQueryData] = None
