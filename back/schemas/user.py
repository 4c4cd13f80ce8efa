"""
User 관련 Pydantic 스키마
"""

from pydantic import EmailStr, Field
from typing import Optional
from datetime import datetime
from models.enums import UserRole
from schemas.common import CamelModel
from schemas.consultant import ConsultantProfileResponse


class UserCreate(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=100)
    name: Optional[str] = Field(None, max_length=100)
    phone: Optional[str] = Field(None, max_length=30)
    role: UserRole = UserRole.CLIENT


class UserUpdate(CamelModel):
    """부분 수정 (전달된 필드만 반영)"""
    user_id: int
    name: Optional[str] = Field(None, max_length=100)
    phone: Optional[str] = Field(None, max_length=30)
    avatar: Optional[str] = Field(None, max_length=500)
    role: Optional[UserRole] = None


class UserResponse(CamelModel):
    id: int
    email: str
    name: Optional[str] = None
    phone: Optional[str] = None
    avatar: Optional[str] = None
    role: UserRole
    email_verified: Optional[datetime] = None
    phone_verified: bool
    kyc_verified: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class UserActivityCounts(CamelModel):
    client_bookings: int = 0
    client_reviews: int = 0
    client_sessions: int = 0
    consultant_bookings: int = 0
    consultant_reviews: int = 0
    consultant_sessions: int = 0
    earnings: int = 0


class UserDetailResponse(UserResponse):
    consultant_profile: Optional[ConsultantProfileResponse] = None
    counts: Optional[UserActivityCounts] = None


class UserEnvelope(CamelModel):
    message: Optional[str] = None
    user: Optional[UserResponse] = None


class UserDetailEnvelope(CamelModel):
    """ID 조회는 활동 수 포함, 이메일 조회는 기본 정보만"""
    user: Optional[UserDetailResponse] = None
