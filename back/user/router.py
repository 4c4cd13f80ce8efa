"""
사용자 관리 API 라우터
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import func
from sqlalchemy.orm import Session
from database import get_db
from models.user import User
from models.booking import Booking
from models.review import Review
from models.live_session import LiveSession
from models.earning import Earning
from schemas.user import (
    UserCreate,
    UserUpdate,
    UserResponse,
    UserDetailResponse,
    UserActivityCounts,
    UserEnvelope,
    UserDetailEnvelope,
)
from schemas.consultant import ConsultantProfileResponse
from auth.security import get_password_hash
from auth.dependencies import get_user_or_404
from config.exception import BadRequest
from logs.logging_util import LoggerSingleton

logger = LoggerSingleton.get_logger(logger_name="user")

router = APIRouter(prefix="/api/users", tags=["Users"])


def _count(db: Session, column, user_id: int) -> int:
    return db.query(func.count(column)).filter(column == user_id).scalar() or 0


def _to_detail(db: Session, user: User) -> UserDetailResponse:
    counts = UserActivityCounts(
        client_bookings=_count(db, Booking.client_id, user.id),
        client_reviews=_count(db, Review.client_id, user.id),
        client_sessions=_count(db, LiveSession.client_id, user.id),
        consultant_bookings=_count(db, Booking.consultant_id, user.id),
        consultant_reviews=_count(db, Review.consultant_id, user.id),
        consultant_sessions=_count(db, LiveSession.consultant_id, user.id),
        earnings=_count(db, Earning.consultant_id, user.id),
    )
    profile = (
        ConsultantProfileResponse.model_validate(user.consultant_profile)
        if user.consultant_profile is not None
        else None
    )
    return UserDetailResponse(
        **UserResponse.model_validate(user).model_dump(),
        consultant_profile=profile,
        counts=counts,
    )


@router.get("", response_model=UserDetailEnvelope)
def get_user(
    id: Optional[int] = Query(None, description="사용자 ID"),
    email: Optional[str] = Query(None, description="이메일"),
    db: Session = Depends(get_db),
):
    """ID(상세 + 활동 수) 또는 이메일로 사용자 조회"""
    if id is not None:
        user = get_user_or_404(db, id)
        return UserDetailEnvelope(user=_to_detail(db, user))

    if email:
        user = db.query(User).filter(User.email == email).first()
        return UserDetailEnvelope(user=UserDetailResponse.model_validate(user) if user else None)

    raise BadRequest("User ID or email is required", code="USER_LOOKUP_REQUIRED")


@router.post("", response_model=UserEnvelope, status_code=status.HTTP_201_CREATED)
def create_user(user_data: UserCreate, db: Session = Depends(get_db)):
    """회원가입 (비밀번호는 bcrypt 해시로 저장)"""
    logger.info(f"Registration attempt: email={user_data.email}, role={user_data.role.value}")

    existing_user = db.query(User).filter(User.email == user_data.email).first()
    if existing_user:
        logger.warning(f"Registration failed: Email already exists - {user_data.email}")
        raise BadRequest("User with this email already exists", code="EMAIL_ALREADY_REGISTERED")

    new_user = User(
        email=user_data.email,
        hashed_password=get_password_hash(user_data.password),
        name=user_data.name,
        phone=user_data.phone,
        role=user_data.role,
    )
    db.add(new_user)
    db.commit()
    db.refresh(new_user)

    logger.info(f"User registered successfully: id={new_user.id}")
    return UserEnvelope(message="User created successfully", user=UserResponse.model_validate(new_user))


@router.put("", response_model=UserEnvelope)
def update_user(data: UserUpdate, db: Session = Depends(get_db)):
    """이름/전화번호/아바타/역할 부분 수정"""
    logger.info(f"Updating user: id={data.user_id}")

    user = get_user_or_404(db, data.user_id)

    update_data = data.model_dump(exclude_unset=True, exclude={"user_id"})
    for field, value in update_data.items():
        # 빈 값은 무시 (기존 값 유지)
        if value in (None, ""):
            continue
        setattr(user, field, value)

    db.commit()
    db.refresh(user)

    logger.info(f"User updated: id={user.id}")
    return UserEnvelope(message="User updated successfully", user=UserResponse.model_validate(user))
