"""
상담사 수익(Earning) 모델
"""

from sqlalchemy import Column, Integer, DateTime, ForeignKey, Enum
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from database import Base
from models.enums import EarningStatus


class Earning(Base):
    """결제 성공 시 생성: amount + commission == total_amount"""
    __tablename__ = "earnings"

    id = Column(Integer, primary_key=True, index=True)
    consultant_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    booking_id = Column(Integer, ForeignKey("bookings.id"), unique=True, nullable=False)
    session_id = Column(Integer, ForeignKey("live_sessions.id"), nullable=True)

    amount = Column(Integer, nullable=False)  # 상담사 몫
    commission = Column(Integer, nullable=False)  # 플랫폼 수수료
    total_amount = Column(Integer, nullable=False)  # 결제 금액
    status = Column(Enum(EarningStatus, name="earning_status"), nullable=False, default=EarningStatus.PENDING)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())

    # 관계
    booking = relationship("Booking", back_populates="earning")

    def __repr__(self):
        return f"<Earning(id={self.id}, booking_id={self.booking_id}, amount={self.amount})>"
