"""
상담 세션 API 라우터 (생성, 목록, 입장, 종료)
"""

import math
from datetime import datetime
from typing import Literal, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from database import get_db
from models.live_session import LiveSession
from models.earning import Earning
from models.enums import BookingStatus, SessionStatus
from schemas.live_session import (
    SessionCreate,
    SessionJoin,
    SessionEnd,
    SessionResponse,
    SessionEnvelope,
    SessionListResponse,
)
from schemas.common import UserSummary
from auth.dependencies import ensure_participant
from booking import state
from booking.router import get_booking_or_404
from gateways.video import SessionProvider
from config.dependencies import get_session_provider
from config.exception import BadRequest, Forbidden, NotFound
from utils.codes import generate_code
from utils.pagination import PageParams, page_params, paginate
from logs.logging_util import LoggerSingleton

logger = LoggerSingleton.get_logger(logger_name="live_session")

router = APIRouter(prefix="/api/sessions", tags=["Sessions"])


def _to_response(session: LiveSession) -> SessionResponse:
    return SessionResponse(
        id=session.id,
        session_code=session.session_code,
        booking_id=session.booking_id,
        client_id=session.client_id,
        consultant_id=session.consultant_id,
        status=session.status,
        session_url=session.session_url,
        started_at=session.started_at,
        ended_at=session.ended_at,
        duration=session.duration,
        created_at=session.created_at,
        client=UserSummary.model_validate(session.client) if session.client else None,
        consultant=UserSummary.model_validate(session.consultant) if session.consultant else None,
    )


def _get_by_code_or_404(db: Session, session_code: str) -> LiveSession:
    session = db.query(LiveSession).filter(LiveSession.session_code == session_code).first()
    if session is None:
        raise NotFound("Session not found", code="SESSION_NOT_FOUND")
    return session


@router.post("", response_model=SessionEnvelope, status_code=status.HTTP_201_CREATED)
def create_session(
    data: SessionCreate,
    db: Session = Depends(get_db),
    provider: SessionProvider = Depends(get_session_provider),
):
    """확정된 예약으로 세션 생성 (예약 완료 처리는 세션 종료 시점)"""
    logger.info(f"Creating session: booking_id={data.booking_id}")

    booking = get_booking_or_404(db, data.booking_id, for_update=True)

    if booking.client_id != data.client_id or booking.consultant_id != data.consultant_id:
        raise Forbidden("Client or consultant does not match this booking", code="BOOKING_PARTICIPANT_MISMATCH")

    if booking.status != BookingStatus.CONFIRMED:
        raise BadRequest("Booking is not confirmed", code="BOOKING_NOT_CONFIRMED")

    if booking.live_session is not None:
        raise BadRequest("Session already exists for this booking", code="SESSION_ALREADY_EXISTS")

    session_code = generate_code("SS", suffix_length=6)
    session = LiveSession(
        session_code=session_code,
        booking_id=booking.id,
        client_id=booking.client_id,
        consultant_id=booking.consultant_id,
        status=SessionStatus.SCHEDULED,
        session_url=provider.issue_session_url(session_code),
    )
    db.add(session)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning(f"Concurrent session creation rejected: booking_id={data.booking_id}")
        raise BadRequest("Session already exists for this booking", code="SESSION_ALREADY_EXISTS")
    db.refresh(session)

    logger.info(f"Session created: code={session.session_code}, booking_id={booking.id}")
    return SessionEnvelope(message="Session created successfully", session=_to_response(session))


@router.get("", response_model=SessionListResponse)
def list_sessions(
    user_id: Optional[int] = Query(None, alias="userId"),
    role: Optional[Literal["client", "consultant"]] = Query(None),
    session_status: Optional[SessionStatus] = Query(None, alias="status"),
    params: PageParams = Depends(page_params),
    db: Session = Depends(get_db),
):
    """세션 목록 조회 (최신순)"""
    query = db.query(LiveSession)
    if user_id is not None and role == "client":
        query = query.filter(LiveSession.client_id == user_id)
    elif user_id is not None and role == "consultant":
        query = query.filter(LiveSession.consultant_id == user_id)

    if session_status is not None:
        query = query.filter(LiveSession.status == session_status)

    sessions, pagination = paginate(query.order_by(LiveSession.created_at.desc(), LiveSession.id.desc()), params)
    return SessionListResponse(items=[_to_response(s) for s in sessions], pagination=pagination)


@router.put("", response_model=SessionEnvelope)
def join_session(data: SessionJoin, db: Session = Depends(get_db)):
    """세션 입장: 첫 입장 시 SCHEDULED -> ACTIVE"""
    logger.info(f"Join requested: code={data.session_id}, user_id={data.user_id}, role={data.role}")

    session = _get_by_code_or_404(db, data.session_id)
    ensure_participant(data.user_id, data.role, session.client_id, session.consultant_id, resource="session")

    if session.status in (SessionStatus.COMPLETED, SessionStatus.CANCELLED):
        raise BadRequest(f"Session is {session.status.value.lower()}", code="SESSION_CLOSED")

    if session.booking.status != BookingStatus.CONFIRMED:
        raise BadRequest("Booking is not confirmed", code="BOOKING_NOT_CONFIRMED")

    if session.status == SessionStatus.SCHEDULED:
        session.status = SessionStatus.ACTIVE
        session.started_at = datetime.utcnow()
        db.commit()
        db.refresh(session)
        logger.info(f"Session activated: code={session.session_code}")

    return SessionEnvelope(message="Session joined successfully", session=_to_response(session))


@router.post("/{session_code}/end", response_model=SessionEnvelope)
def end_session(session_code: str, data: SessionEnd, db: Session = Depends(get_db)):
    """세션 종료: 세션 COMPLETED + 예약 COMPLETED 를 하나의 트랜잭션으로"""
    logger.info(f"End requested: code={session_code}, user_id={data.user_id}")

    session = _get_by_code_or_404(db, session_code)
    ensure_participant(data.user_id, data.role, session.client_id, session.consultant_id, resource="session")

    if session.status != SessionStatus.ACTIVE:
        raise BadRequest("Only an active session can be ended", code="SESSION_NOT_ACTIVE")

    try:
        ended_at = datetime.utcnow()
        session.status = SessionStatus.COMPLETED
        session.ended_at = ended_at
        if session.started_at is not None:
            session.duration = max(1, math.ceil((ended_at - session.started_at).total_seconds() / 60))

        state.complete(session.booking)

        earning = db.query(Earning).filter(Earning.booking_id == session.booking_id).first()
        if earning is not None:
            earning.session_id = session.id

        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(session)
    logger.info(f"Session completed: code={session.session_code}, duration={session.duration}m")
    return SessionEnvelope(message="Session ended successfully", session=_to_response(session))
