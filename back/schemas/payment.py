"""
결제 스키마
"""

from pydantic import Field
from datetime import datetime
from typing import Literal, Optional
from models.enums import PaymentStatus
from schemas.common import CamelModel, UserSummary
from schemas.booking import BookingResponse


class PaymentDetails(CamelModel):
    card_number: Optional[str] = None
    expiry_month: Optional[str] = None
    expiry_year: Optional[str] = None
    cvv: Optional[str] = None
    upi_id: Optional[str] = None
    bank_code: Optional[str] = None


class PaymentCharge(CamelModel):
    """결제 요청"""
    booking_id: int
    amount: int = Field(..., gt=0)
    payment_method: Literal["card", "upi", "netbanking"]
    payment_details: PaymentDetails


class PaymentReceipt(CamelModel):
    transaction_id: str
    amount: int
    currency: str
    status: str = "completed"


class PaymentChargeResponse(CamelModel):
    message: str
    payment: PaymentReceipt
    booking: BookingResponse


class PaymentVerifyResponse(CamelModel):
    transaction_id: str
    status: Literal["verified", "pending"]
    verified_at: Optional[datetime] = None


class BookingPaymentInfo(CamelModel):
    id: int
    booking_number: str
    amount: int
    status: PaymentStatus
    transaction_id: Optional[str] = None
    client: Optional[UserSummary] = None
    created_at: Optional[datetime] = None


class BookingPaymentEnvelope(CamelModel):
    booking: BookingPaymentInfo


class RefundRequest(CamelModel):
    transaction_id: Optional[str] = None
    booking_id: Optional[int] = None
    reason: Optional[str] = None


class RefundInfo(CamelModel):
    transaction_id: Optional[str] = None
    amount: int
    reason: str
    processed_at: datetime


class RefundResponse(CamelModel):
    message: str
    refund: RefundInfo
