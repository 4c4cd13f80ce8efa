"""
상담사 수익 스키마
"""

from datetime import datetime
from typing import Optional
from models.enums import EarningStatus
from schemas.common import CamelModel, Pagination


class EarningResponse(CamelModel):
    id: int
    consultant_id: int
    booking_id: int
    session_id: Optional[int] = None
    amount: int
    commission: int
    total_amount: int
    status: EarningStatus
    created_at: Optional[datetime] = None


class EarningSummary(CamelModel):
    total_amount: int = 0
    total_commission: int = 0
    pending: int = 0
    held: int = 0
    paid: int = 0


class EarningListResponse(CamelModel):
    items: list[EarningResponse]
    pagination: Pagination
    summary: EarningSummary
