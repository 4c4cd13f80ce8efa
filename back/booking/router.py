"""
상담 예약 관리 API 라우터
"""

from datetime import datetime, timezone
from typing import Literal, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from database import get_db
from models.booking import Booking
from models.consultant_profile import ConsultantProfile
from models.enums import BookingType, BookingStatus, PaymentStatus
from schemas.booking import (
    BookingCreate,
    BookingCancel,
    BookingResponse,
    BookingEnvelope,
    BookingListResponse,
)
from schemas.common import UserSummary
from auth.dependencies import get_user_or_404, ensure_participant
from booking import state
from config.exception import BadRequest, NotFound, InternalError
from utils.codes import generate_code
from utils.pagination import PageParams, page_params, paginate
from logs.logging_util import LoggerSingleton

logger = LoggerSingleton.get_logger(logger_name="booking")

router = APIRouter(prefix="/api/bookings", tags=["Bookings"])

BOOKING_NUMBER_ATTEMPTS = 5


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """DB 에는 타임존 없는 UTC 로 저장"""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def to_booking_response(booking: Booking) -> BookingResponse:
    return BookingResponse(
        id=booking.id,
        booking_number=booking.booking_number,
        client_id=booking.client_id,
        consultant_id=booking.consultant_id,
        type=booking.type,
        status=booking.status,
        payment_status=booking.payment_status,
        price=booking.price,
        duration=booking.duration,
        is_first_session=booking.is_first_session,
        scheduled_for=booking.scheduled_for,
        session_notes=booking.session_notes,
        payment_id=booking.payment_id,
        cancelled_at=booking.cancelled_at,
        created_at=booking.created_at,
        updated_at=booking.updated_at,
        client=UserSummary.model_validate(booking.client) if booking.client else None,
        consultant=UserSummary.model_validate(booking.consultant) if booking.consultant else None,
        category=booking.consultant_profile.category if booking.consultant_profile else None,
        session_code=booking.live_session.session_code if booking.live_session else None,
        has_review=booking.review is not None,
    )


def get_booking_or_404(db: Session, booking_id: int, *, for_update: bool = False) -> Booking:
    query = db.query(Booking).filter(Booking.id == booking_id)
    if for_update:
        query = query.with_for_update()
    booking = query.first()
    if booking is None:
        raise NotFound("Booking not found", code="BOOKING_NOT_FOUND")
    return booking


def _new_booking_number(db: Session) -> str:
    # 타임스탬프 + 랜덤 suffix 라도 충돌 가능성이 0 은 아니므로 재시도
    for _ in range(BOOKING_NUMBER_ATTEMPTS):
        number = generate_code("BK", suffix_length=4)
        exists = db.query(Booking.id).filter(Booking.booking_number == number).first()
        if exists is None:
            return number
    raise InternalError("Could not allocate a booking number", code="BOOKING_NUMBER_EXHAUSTED")


@router.post("", response_model=BookingEnvelope, status_code=status.HTTP_201_CREATED)
def create_booking(data: BookingCreate, db: Session = Depends(get_db)):
    """새 예약 생성 (가격은 생성 시점의 상담사 요금제로 확정)"""
    logger.info(
        f"Creating booking: client_id={data.client_id}, consultant_id={data.consultant_id}, "
        f"type={data.type.value}, first_session={data.is_first_session}"
    )

    get_user_or_404(db, data.client_id, label="Client")

    profile = db.query(ConsultantProfile).filter(ConsultantProfile.user_id == data.consultant_id).first()
    if profile is None:
        raise NotFound("Consultant profile not found", code="CONSULTANT_PROFILE_NOT_FOUND")

    if not profile.is_approved:
        raise BadRequest("Consultant is not approved", code="CONSULTANT_NOT_APPROVED")

    price = profile.first_session_price if data.is_first_session else profile.regular_session_price

    # 즉시 상담은 지금 시각으로 잡지만, 결제 전까지는 PENDING 유지
    if data.type == BookingType.INSTANT:
        scheduled_for = datetime.utcnow()
    else:
        scheduled_for = to_naive_utc(data.scheduled_for)

    booking = Booking(
        booking_number=_new_booking_number(db),
        client_id=data.client_id,
        consultant_id=data.consultant_id,
        consultant_profile_id=profile.id,
        type=data.type,
        status=BookingStatus.PENDING,
        payment_status=PaymentStatus.PENDING,
        price=price,
        is_first_session=data.is_first_session,
        duration=data.duration,
        scheduled_for=scheduled_for,
        session_notes=data.session_notes,
    )
    db.add(booking)
    db.commit()
    db.refresh(booking)

    logger.info(f"Booking created: id={booking.id}, number={booking.booking_number}, price={booking.price}")
    return BookingEnvelope(message="Booking created successfully", booking=to_booking_response(booking))


@router.get("", response_model=BookingListResponse)
def list_bookings(
    user_id: Optional[int] = Query(None, alias="userId"),
    role: Optional[Literal["client", "consultant"]] = Query(None),
    booking_status: Optional[BookingStatus] = Query(None, alias="status"),
    params: PageParams = Depends(page_params),
    db: Session = Depends(get_db),
):
    """예약 목록 조회 (최신순)"""
    logger.info(f"Fetching bookings: user_id={user_id}, role={role}, status={booking_status}")

    query = db.query(Booking)
    if user_id is not None and role == "client":
        query = query.filter(Booking.client_id == user_id)
    elif user_id is not None and role == "consultant":
        query = query.filter(Booking.consultant_id == user_id)

    if booking_status is not None:
        query = query.filter(Booking.status == booking_status)

    bookings, pagination = paginate(query.order_by(Booking.created_at.desc(), Booking.id.desc()), params)
    return BookingListResponse(items=[to_booking_response(b) for b in bookings], pagination=pagination)


@router.get("/{booking_id}", response_model=BookingEnvelope)
def get_booking(booking_id: int, db: Session = Depends(get_db)):
    """예약 상세 조회"""
    return BookingEnvelope(booking=to_booking_response(get_booking_or_404(db, booking_id)))


@router.post("/{booking_id}/cancel", response_model=BookingEnvelope)
def cancel_booking(booking_id: int, data: BookingCancel, db: Session = Depends(get_db)):
    """결제 전 예약 취소 (결제된 예약은 환불 API 사용)"""
    logger.info(f"Cancelling booking: id={booking_id}, user_id={data.user_id}")

    booking = get_booking_or_404(db, booking_id, for_update=True)
    ensure_participant(data.user_id, data.role, booking.client_id, booking.consultant_id, resource="booking")

    state.cancel_unpaid(booking, datetime.utcnow())
    db.commit()
    db.refresh(booking)

    logger.info(f"Booking cancelled: id={booking.id}")
    return BookingEnvelope(message="Booking cancelled successfully", booking=to_booking_response(booking))
