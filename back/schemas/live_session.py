"""
상담 세션 스키마
"""

from pydantic import Field
from datetime import datetime
from typing import Literal, Optional
from models.enums import SessionStatus
from schemas.common import CamelModel, Pagination, UserSummary


class SessionCreate(CamelModel):
    booking_id: int
    client_id: int
    consultant_id: int


class SessionJoin(CamelModel):
    session_id: str = Field(..., min_length=1, description="외부 세션 코드")
    user_id: int
    role: Literal["client", "consultant"]


class SessionEnd(CamelModel):
    user_id: int
    role: Literal["client", "consultant"]


class SessionResponse(CamelModel):
    id: int
    session_code: str = Field(..., alias="sessionId")
    booking_id: int
    client_id: int
    consultant_id: int
    status: SessionStatus
    session_url: Optional[str] = None
    started_at: Optional[datetime] = None
    ended_at: Optional[datetime] = None
    duration: Optional[int] = None
    created_at: Optional[datetime] = None
    client: Optional[UserSummary] = None
    consultant: Optional[UserSummary] = None


class SessionEnvelope(CamelModel):
    message: str
    session: SessionResponse


class SessionListResponse(CamelModel):
    items: list[SessionResponse]
    pagination: Pagination
