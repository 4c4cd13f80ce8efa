"""
관리자 대시보드 API 라우터 (통계, 상담사 승인/거절)
"""

from datetime import datetime
from typing import Literal
from fastapi import APIRouter, Depends, Query
from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload
from database import get_db
from models.user import User
from models.consultant_profile import ConsultantProfile
from models.booking import Booking
from models.live_session import LiveSession
from models.review import Review
from models.admin_action import AdminAction
from models.enums import UserRole, PaymentStatus, SessionStatus, AdminActionType
from schemas.admin import (
    DashboardStats,
    ApproveRequest,
    RejectRequest,
    AdminActionResponse,
    AdminActionEnvelope,
    AdminConsultantListResponse,
)
from schemas.booking import BookingListResponse
from auth.dependencies import require_admin, get_user_or_404
from booking.router import to_booking_response
from consultant.router import to_list_item
from config.exception import BadRequest, NotFound
from utils.pagination import PageParams, page_params, paginate
from logs.logging_util import LoggerSingleton

logger = LoggerSingleton.get_logger(logger_name="admin")

router = APIRouter(prefix="/api/admin", tags=["Admin"])


def _count_users(db: Session, role: UserRole | None = None) -> int:
    query = db.query(func.count(User.id))
    if role is not None:
        query = query.filter(User.role == role)
    return query.scalar() or 0


def _get_profile_or_404(db: Session, user_id: int) -> ConsultantProfile:
    profile = db.query(ConsultantProfile).filter(ConsultantProfile.user_id == user_id).first()
    if profile is None:
        raise NotFound("Consultant profile not found", code="CONSULTANT_PROFILE_NOT_FOUND")
    return profile


@router.get("/stats", response_model=DashboardStats)
def get_stats(admin_id: int = Query(..., alias="adminId"), db: Session = Depends(get_db)):
    """대시보드 통계 (실시간 집계)"""
    require_admin(db, admin_id)

    total_revenue = (
        db.query(func.coalesce(func.sum(Booking.price), 0))
        .filter(Booking.payment_status == PaymentStatus.COMPLETED)
        .scalar()
    )
    average_rating = db.query(func.avg(Review.rating)).filter(Review.is_public.is_(True)).scalar()

    return DashboardStats(
        total_users=_count_users(db),
        total_consultants=_count_users(db, UserRole.CONSULTANT),
        total_clients=_count_users(db, UserRole.CLIENT),
        total_revenue=int(total_revenue or 0),
        total_sessions=db.query(func.count(LiveSession.id)).scalar() or 0,
        active_sessions=(
            db.query(func.count(LiveSession.id)).filter(LiveSession.status == SessionStatus.ACTIVE).scalar() or 0
        ),
        pending_approvals=(
            db.query(func.count(ConsultantProfile.id)).filter(ConsultantProfile.is_approved.is_(False)).scalar() or 0
        ),
        average_rating=round(float(average_rating or 0), 1),
    )


@router.get("/consultants", response_model=AdminConsultantListResponse)
def list_consultants(
    admin_id: int = Query(..., alias="adminId"),
    approval: Literal["pending", "approved", "all"] = Query("pending", alias="status"),
    db: Session = Depends(get_db),
):
    """승인 대기/승인된 상담사 목록"""
    require_admin(db, admin_id)

    query = (
        db.query(User)
        .join(ConsultantProfile, ConsultantProfile.user_id == User.id)
        .options(joinedload(User.consultant_profile))
    )
    if approval == "pending":
        query = query.filter(ConsultantProfile.is_approved.is_(False))
    elif approval == "approved":
        query = query.filter(ConsultantProfile.is_approved.is_(True))

    consultants = query.order_by(ConsultantProfile.created_at.desc(), User.id).all()
    return AdminConsultantListResponse(consultants=[to_list_item(db, c) for c in consultants])


@router.get("/bookings", response_model=BookingListResponse)
def recent_bookings(
    admin_id: int = Query(..., alias="adminId"),
    params: PageParams = Depends(page_params),
    db: Session = Depends(get_db),
):
    """최근 예약"""
    require_admin(db, admin_id)
    bookings, pagination = paginate(db.query(Booking).order_by(Booking.created_at.desc(), Booking.id.desc()), params)
    return BookingListResponse(items=[to_booking_response(b) for b in bookings], pagination=pagination)


@router.post("/consultants/{user_id}/approve", response_model=AdminActionEnvelope)
def approve_consultant(user_id: int, data: ApproveRequest, db: Session = Depends(get_db)):
    """상담사 승인: PENDING -> APPROVED"""
    admin = require_admin(db, data.admin_id)
    get_user_or_404(db, user_id, label="Consultant")
    profile = _get_profile_or_404(db, user_id)

    if profile.is_approved:
        raise BadRequest("Consultant is already approved", code="CONSULTANT_ALREADY_APPROVED")

    profile.is_approved = True
    profile.approval_date = datetime.utcnow()
    action = AdminAction(admin_id=admin.id, action_type=AdminActionType.APPROVE_CONSULTANT, target_user_id=user_id)
    db.add(action)
    db.commit()
    db.refresh(action)

    logger.info(f"Consultant approved: user_id={user_id}, admin_id={admin.id}")
    return AdminActionEnvelope(message="Consultant approved", action=AdminActionResponse.model_validate(action))


@router.post("/consultants/{user_id}/reject", response_model=AdminActionEnvelope)
def reject_consultant(user_id: int, data: RejectRequest, db: Session = Depends(get_db)):
    """상담사 거절: 프로필 삭제 + 사유 기록"""
    admin = require_admin(db, data.admin_id)
    reason = data.reason.strip()
    if not reason:
        raise BadRequest("Rejection reason is required", code="REJECTION_REASON_REQUIRED")

    profile = _get_profile_or_404(db, user_id)

    if profile.is_approved:
        raise BadRequest("Only pending consultants can be rejected", code="CONSULTANT_ALREADY_APPROVED")

    db.delete(profile)
    action = AdminAction(
        admin_id=admin.id,
        action_type=AdminActionType.REJECT_CONSULTANT,
        target_user_id=user_id,
        reason=reason,
    )
    db.add(action)
    db.commit()
    db.refresh(action)

    logger.info(f"Consultant rejected: user_id={user_id}, admin_id={admin.id}, reason={reason}")
    return AdminActionEnvelope(message="Consultant rejected", action=AdminActionResponse.model_validate(action))
