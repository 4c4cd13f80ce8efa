"""
상담 세션(LiveSession) 모델
"""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Enum
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from database import Base
from models.enums import SessionStatus


class LiveSession(Base):
    """확정된 예약으로부터 생성되는 실시간 상담 세션"""
    __tablename__ = "live_sessions"

    id = Column(Integer, primary_key=True, index=True)
    session_code = Column(String(40), unique=True, index=True, nullable=False)  # 외부 세션 ID
    booking_id = Column(Integer, ForeignKey("bookings.id"), unique=True, nullable=False)
    client_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    consultant_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    status = Column(Enum(SessionStatus, name="session_status"), nullable=False, default=SessionStatus.SCHEDULED)
    session_url = Column(String(500), nullable=True)
    started_at = Column(DateTime, nullable=True)
    ended_at = Column(DateTime, nullable=True)
    duration = Column(Integer, nullable=True)  # 실제 진행 시간 (분)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())

    # 관계
    booking = relationship("Booking", back_populates="live_session")
    client = relationship("User", foreign_keys=[client_id], back_populates="client_sessions")
    consultant = relationship("User", foreign_keys=[consultant_id], back_populates="consultant_sessions")

    def __repr__(self):
        return f"<LiveSession(id={self.id}, code={self.session_code}, status={self.status})>"
