"""
상담사 수익 조회 API 라우터
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy import func
from sqlalchemy.orm import Session
from database import get_db
from models.earning import Earning
from models.enums import EarningStatus
from schemas.earning import EarningResponse, EarningSummary, EarningListResponse
from utils.pagination import PageParams, page_params, paginate
from logs.logging_util import LoggerSingleton

logger = LoggerSingleton.get_logger(logger_name="earning")

router = APIRouter(prefix="/api/earnings", tags=["Earnings"])


def summarize(db: Session, consultant_id: Optional[int]) -> EarningSummary:
    """상태별 상담사 몫 합계 + 전체 결제/수수료 합계"""
    query = db.query(
        Earning.status,
        func.coalesce(func.sum(Earning.amount), 0),
        func.coalesce(func.sum(Earning.commission), 0),
        func.coalesce(func.sum(Earning.total_amount), 0),
    )
    if consultant_id is not None:
        query = query.filter(Earning.consultant_id == consultant_id)

    summary = EarningSummary()
    for earning_status, amount, commission, total in query.group_by(Earning.status).all():
        summary.total_amount += int(total)
        summary.total_commission += int(commission)
        if earning_status == EarningStatus.PENDING:
            summary.pending = int(amount)
        elif earning_status == EarningStatus.HELD:
            summary.held = int(amount)
        elif earning_status == EarningStatus.PAID:
            summary.paid = int(amount)
    return summary


@router.get("", response_model=EarningListResponse)
def list_earnings(
    consultant_id: Optional[int] = Query(None, alias="consultantId"),
    earning_status: Optional[EarningStatus] = Query(None, alias="status"),
    params: PageParams = Depends(page_params),
    db: Session = Depends(get_db),
):
    """수익 내역 + 합계"""
    logger.info(f"Fetching earnings: consultant_id={consultant_id}, status={earning_status}")

    query = db.query(Earning)
    if consultant_id is not None:
        query = query.filter(Earning.consultant_id == consultant_id)
    if earning_status is not None:
        query = query.filter(Earning.status == earning_status)

    earnings, pagination = paginate(query.order_by(Earning.created_at.desc(), Earning.id.desc()), params)
    return EarningListResponse(
        items=[EarningResponse.model_validate(e) for e in earnings],
        pagination=pagination,
        summary=summarize(db, consultant_id),
    )
