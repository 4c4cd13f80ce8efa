"""
리뷰 API 라우터
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from database import get_db
from models.review import Review
from models.enums import BookingStatus
from schemas.review import ReviewCreate, ReviewResponse, ReviewEnvelope, ReviewListResponse
from schemas.common import UserSummary
from booking.router import get_booking_or_404
from config.exception import BadRequest, Forbidden
from utils.pagination import PageParams, page_params, paginate
from logs.logging_util import LoggerSingleton

logger = LoggerSingleton.get_logger(logger_name="review")

router = APIRouter(prefix="/api/reviews", tags=["Reviews"])

REVIEW_EXISTS_MESSAGE = "Review already exists for this booking"


def _to_response(review: Review) -> ReviewResponse:
    return ReviewResponse(
        id=review.id,
        booking_id=review.booking_id,
        session_id=review.session_id,
        client_id=review.client_id,
        consultant_id=review.consultant_id,
        rating=review.rating,
        review=review.review,
        is_public=review.is_public,
        created_at=review.created_at,
        booking_number=review.booking.booking_number if review.booking else None,
        client=UserSummary.model_validate(review.client) if review.client else None,
        consultant=UserSummary.model_validate(review.consultant) if review.consultant else None,
    )


@router.get("", response_model=ReviewListResponse)
def list_reviews(
    consultant_id: Optional[int] = Query(None, alias="consultantId"),
    client_id: Optional[int] = Query(None, alias="clientId"),
    booking_id: Optional[int] = Query(None, alias="bookingId"),
    params: PageParams = Depends(page_params),
    db: Session = Depends(get_db),
):
    """공개 리뷰 목록 (최신순)"""
    query = db.query(Review).filter(Review.is_public.is_(True))
    if consultant_id is not None:
        query = query.filter(Review.consultant_id == consultant_id)
    if client_id is not None:
        query = query.filter(Review.client_id == client_id)
    if booking_id is not None:
        query = query.filter(Review.booking_id == booking_id)

    reviews, pagination = paginate(query.order_by(Review.created_at.desc(), Review.id.desc()), params)
    return ReviewListResponse(items=[_to_response(r) for r in reviews], pagination=pagination)


@router.post("", response_model=ReviewEnvelope, status_code=status.HTTP_201_CREATED)
def create_review(data: ReviewCreate, db: Session = Depends(get_db)):
    """완료된 예약에 대해 내담자 본인만 1회 작성 가능"""
    logger.info(f"Creating review: booking_id={data.booking_id}, client_id={data.client_id}, rating={data.rating}")

    booking = get_booking_or_404(db, data.booking_id)

    if booking.client_id != data.client_id:
        raise Forbidden("Unauthorized: This booking does not belong to you", code="NOT_BOOKING_OWNER")

    if booking.consultant_id != data.consultant_id:
        raise BadRequest("Consultant does not match this booking", code="BOOKING_CONSULTANT_MISMATCH")

    if booking.status != BookingStatus.COMPLETED:
        raise BadRequest("Can only review completed bookings", code="BOOKING_NOT_COMPLETED")

    if booking.review is not None:
        raise BadRequest(REVIEW_EXISTS_MESSAGE, code="REVIEW_ALREADY_EXISTS")

    session_id = booking.live_session.id if booking.live_session else None
    if data.session_id is not None and data.session_id != session_id:
        raise BadRequest("Session does not belong to this booking", code="SESSION_BOOKING_MISMATCH")

    review = Review(
        booking_id=booking.id,
        session_id=session_id,
        client_id=booking.client_id,
        consultant_id=booking.consultant_id,
        rating=data.rating,
        review=data.review,
        is_public=data.is_public,
    )
    db.add(review)
    try:
        db.commit()
    except IntegrityError:
        # 동시 요청으로 unique(booking_id) 제약 위반
        db.rollback()
        logger.warning(f"Duplicate review rejected by constraint: booking_id={data.booking_id}")
        raise BadRequest(REVIEW_EXISTS_MESSAGE, code="REVIEW_ALREADY_EXISTS")
    db.refresh(review)

    logger.info(f"Review created: id={review.id}, booking_id={review.booking_id}")
    return ReviewEnvelope(message="Review created successfully", review=_to_response(review))
