"""
상담사 프로필 스키마
"""

from pydantic import Field
from datetime import datetime
from typing import Any, Optional
from models.enums import CategoryEnum, UserRole
from schemas.common import CamelModel, Pagination


class ConsultantProfileUpsert(CamelModel):
    """상담사 프로필 생성/수정"""
    user_id: int
    bio: Optional[str] = None
    experience: Optional[str] = Field(None, max_length=50)
    qualifications: list[str] = Field(default_factory=list)
    skills: list[str] = Field(default_factory=list)
    category: CategoryEnum
    subcategory: Optional[str] = Field(None, max_length=100)
    first_session_price: int = Field(..., ge=0)
    regular_session_price: int = Field(..., ge=0)
    availability: Optional[Any] = None


class ConsultantProfileResponse(CamelModel):
    id: int
    user_id: int
    bio: Optional[str] = None
    experience: Optional[str] = None
    qualifications: list[str] = Field(default_factory=list)
    skills: list[str] = Field(default_factory=list)
    category: CategoryEnum
    subcategory: Optional[str] = None
    first_session_price: int
    regular_session_price: int
    availability: Optional[Any] = None
    is_approved: bool
    approval_date: Optional[datetime] = None
    is_online: bool
    profile_completed: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class RecentReview(CamelModel):
    id: int
    rating: int
    review: Optional[str] = None
    client_name: Optional[str] = None
    client_avatar: Optional[str] = None
    created_at: Optional[datetime] = None


class ConsultantListItem(CamelModel):
    id: int
    name: Optional[str] = None
    email: str
    avatar: Optional[str] = None
    phone: Optional[str] = None
    role: UserRole
    consultant_profile: ConsultantProfileResponse
    average_rating: float = 0
    total_reviews: int = 0
    recent_reviews: list[RecentReview] = Field(default_factory=list)


class ConsultantListResponse(CamelModel):
    items: list[ConsultantListItem]
    pagination: Pagination


class ConsultantProfileEnvelope(CamelModel):
    message: str
    consultant_profile: ConsultantProfileResponse
