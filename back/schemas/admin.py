"""
관리자 대시보드 스키마
"""

from pydantic import Field
from datetime import datetime
from typing import Optional
from models.enums import AdminActionType
from schemas.common import CamelModel
from schemas.consultant import ConsultantListItem


class DashboardStats(CamelModel):
    total_users: int
    total_consultants: int
    total_clients: int
    total_revenue: int
    total_sessions: int
    active_sessions: int
    pending_approvals: int
    average_rating: float


class ApproveRequest(CamelModel):
    admin_id: int


class RejectRequest(CamelModel):
    admin_id: int
    reason: str = Field(..., min_length=1, description="거절 사유")


class AdminActionResponse(CamelModel):
    id: int
    admin_id: int
    action_type: AdminActionType
    target_user_id: int
    reason: Optional[str] = None
    created_at: Optional[datetime] = None


class AdminActionEnvelope(CamelModel):
    message: str
    action: AdminActionResponse


class AdminConsultantListResponse(CamelModel):
    consultants: list[ConsultantListItem]
