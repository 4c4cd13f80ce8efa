"""
상담 예약(Booking) 스키마
"""

from pydantic import Field
from datetime import datetime
from typing import Literal, Optional
from models.enums import BookingType, BookingStatus, PaymentStatus, CategoryEnum
from schemas.common import CamelModel, Pagination, UserSummary
from config.settings import DEFAULT_SESSION_DURATION_MINUTES


class BookingCreate(CamelModel):
    """예약 생성 스키마"""
    client_id: int = Field(..., description="내담자 ID")
    consultant_id: int = Field(..., description="상담사 ID")
    type: BookingType = BookingType.SCHEDULED
    scheduled_for: Optional[datetime] = None
    duration: int = Field(DEFAULT_SESSION_DURATION_MINUTES, ge=1, le=480, description="상담 시간 (분)")
    session_notes: Optional[str] = None
    is_first_session: bool = False


class BookingCancel(CamelModel):
    user_id: int
    role: Literal["client", "consultant"]


class BookingResponse(CamelModel):
    """예약 응답 스키마"""
    id: int
    booking_number: str
    client_id: int
    consultant_id: int
    type: BookingType
    status: BookingStatus
    payment_status: PaymentStatus
    price: int
    duration: int
    is_first_session: bool
    scheduled_for: Optional[datetime] = None
    session_notes: Optional[str] = None
    payment_id: Optional[str] = None
    cancelled_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    client: Optional[UserSummary] = None
    consultant: Optional[UserSummary] = None
    category: Optional[CategoryEnum] = None
    session_code: Optional[str] = None
    has_review: bool = False


class BookingEnvelope(CamelModel):
    message: Optional[str] = None
    booking: BookingResponse


class BookingListResponse(CamelModel):
    """예약 목록 응답"""
    items: list[BookingResponse]
    pagination: Pagination
