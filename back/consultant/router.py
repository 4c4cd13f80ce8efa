"""
상담사 검색 및 프로필 관리 API 라우터
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy import func, or_, String, cast
from sqlalchemy.orm import Session, joinedload
from database import get_db
from models.user import User
from models.consultant_profile import ConsultantProfile
from models.review import Review
from models.enums import UserRole, CategoryEnum
from schemas.consultant import (
    ConsultantProfileUpsert,
    ConsultantProfileResponse,
    ConsultantProfileEnvelope,
    ConsultantListItem,
    ConsultantListResponse,
    RecentReview,
)
from auth.dependencies import get_user_or_404
from config.exception import BadRequest
from utils.pagination import PageParams, page_params, paginate
from logs.logging_util import LoggerSingleton

logger = LoggerSingleton.get_logger(logger_name="consultant")

router = APIRouter(prefix="/api/consultants", tags=["Consultants"])

RECENT_REVIEW_COUNT = 3


def rating_stats(db: Session, consultant_id: int) -> tuple[float, int]:
    """공개 리뷰 기준 (평균 평점, 리뷰 수)"""
    avg_rating, total = (
        db.query(func.avg(Review.rating), func.count(Review.id))
        .filter(Review.consultant_id == consultant_id, Review.is_public.is_(True))
        .one()
    )
    return round(float(avg_rating or 0), 2), total or 0


def to_list_item(db: Session, consultant: User) -> ConsultantListItem:
    average_rating, total_reviews = rating_stats(db, consultant.id)

    recent = (
        db.query(Review)
        .options(joinedload(Review.client))
        .filter(Review.consultant_id == consultant.id, Review.is_public.is_(True))
        .order_by(Review.created_at.desc(), Review.id.desc())
        .limit(RECENT_REVIEW_COUNT)
        .all()
    )

    return ConsultantListItem(
        id=consultant.id,
        name=consultant.name,
        email=consultant.email,
        avatar=consultant.avatar,
        phone=consultant.phone,
        role=consultant.role,
        consultant_profile=ConsultantProfileResponse.model_validate(consultant.consultant_profile),
        average_rating=average_rating,
        total_reviews=total_reviews,
        recent_reviews=[
            RecentReview(
                id=r.id,
                rating=r.rating,
                review=r.review,
                client_name=r.client.name if r.client else None,
                client_avatar=r.client.avatar if r.client else None,
                created_at=r.created_at,
            )
            for r in recent
        ],
    )


@router.get("", response_model=ConsultantListResponse)
def search_consultants(
    category: Optional[str] = Query(None, description="카테고리 (all = 전체)"),
    search: Optional[str] = Query(None, description="이름/소개/스킬 검색어"),
    online: bool = Query(False, description="온라인 상담사만"),
    params: PageParams = Depends(page_params),
    db: Session = Depends(get_db),
):
    """승인된 상담사 검색 (온라인 상담사 우선)"""
    logger.info(f"Searching consultants: category={category}, search={search}, online={online}")

    query = (
        db.query(User)
        .join(ConsultantProfile, ConsultantProfile.user_id == User.id)
        .options(joinedload(User.consultant_profile))
        .filter(ConsultantProfile.is_approved.is_(True), User.role == UserRole.CONSULTANT)
    )

    if category and category.lower() != "all":
        try:
            category_value = CategoryEnum(category.upper())
        except ValueError:
            raise BadRequest(f"Unknown category: {category}", code="INVALID_CATEGORY")
        query = query.filter(ConsultantProfile.category == category_value)

    if search:
        pattern = f"%{search.lower()}%"
        query = query.filter(
            or_(
                func.lower(User.name).like(pattern),
                func.lower(ConsultantProfile.bio).like(pattern),
                func.lower(cast(ConsultantProfile.skills, String)).like(pattern),
            )
        )

    if online:
        query = query.filter(ConsultantProfile.is_online.is_(True))

    query = query.order_by(ConsultantProfile.is_online.desc(), User.id)
    consultants, pagination = paginate(query, params)

    return ConsultantListResponse(
        items=[to_list_item(db, c) for c in consultants],
        pagination=pagination,
    )


@router.post("", response_model=ConsultantProfileEnvelope)
def upsert_consultant_profile(data: ConsultantProfileUpsert, db: Session = Depends(get_db)):
    """상담사 프로필 생성 또는 수정 (신규 프로필은 승인 대기)"""
    logger.info(f"Upserting consultant profile: user_id={data.user_id}")

    user = get_user_or_404(db, data.user_id)
    if user.role != UserRole.CONSULTANT:
        raise BadRequest("User is not a consultant", code="NOT_A_CONSULTANT")

    profile = db.query(ConsultantProfile).filter(ConsultantProfile.user_id == user.id).first()
    created = profile is None
    if created:
        profile = ConsultantProfile(user_id=user.id, is_approved=False, is_online=False)
        db.add(profile)

    for field, value in data.model_dump(exclude={"user_id"}).items():
        setattr(profile, field, value)
    profile.profile_completed = True

    db.commit()
    db.refresh(profile)

    logger.info(f"Consultant profile {'created' if created else 'updated'}: id={profile.id}, user_id={user.id}")
    return ConsultantProfileEnvelope(
        message="Consultant profile created/updated successfully",
        consultant_profile=ConsultantProfileResponse.model_validate(profile),
    )
