"""
리뷰 스키마
"""

from pydantic import Field
from datetime import datetime
from typing import Optional
from schemas.common import CamelModel, Pagination, UserSummary


class ReviewCreate(CamelModel):
    booking_id: int
    session_id: Optional[int] = None
    client_id: int
    consultant_id: int
    rating: int = Field(..., ge=1, le=5, description="평점 (1~5)")
    review: Optional[str] = None
    is_public: bool = True


class ReviewResponse(CamelModel):
    id: int
    booking_id: int
    session_id: Optional[int] = None
    client_id: int
    consultant_id: int
    rating: int
    review: Optional[str] = None
    is_public: bool
    created_at: Optional[datetime] = None
    booking_number: Optional[str] = None
    client: Optional[UserSummary] = None
    consultant: Optional[UserSummary] = None


class ReviewEnvelope(CamelModel):
    message: str
    review: ReviewResponse


class ReviewListResponse(CamelModel):
    items: list[ReviewResponse]
    pagination: Pagination
