"""
상담 예약(Booking) 모델
"""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text, Boolean, Enum
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from database import Base
from models.enums import BookingType, BookingStatus, PaymentStatus


class Booking(Base):
    """상담 예약 모델

    status(진행 상태)와 payment_status(결제 상태)의 조합은 booking.state 에서만 변경한다.
    """
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    booking_number = Column(String(40), unique=True, index=True, nullable=False)
    client_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    consultant_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    consultant_profile_id = Column(Integer, ForeignKey("consultant_profiles.id", ondelete="SET NULL"), nullable=True)

    type = Column(Enum(BookingType, name="booking_type"), nullable=False, default=BookingType.SCHEDULED)
    status = Column(Enum(BookingStatus, name="booking_status"), nullable=False, default=BookingStatus.PENDING, index=True)
    payment_status = Column(
        Enum(PaymentStatus, name="payment_status"), nullable=False, default=PaymentStatus.PENDING
    )

    # 생성 시점에 확정되는 가격 (재계산하지 않음)
    price = Column(Integer, nullable=False)
    is_first_session = Column(Boolean, nullable=False, default=False)
    duration = Column(Integer, nullable=False, default=30)  # 분
    scheduled_for = Column(DateTime, nullable=True)
    session_notes = Column(Text, nullable=True)

    payment_id = Column(String(60), nullable=True, index=True)  # 결제 거래 ID
    cancelled_at = Column(DateTime, nullable=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())

    # 관계
    client = relationship("User", foreign_keys=[client_id], back_populates="client_bookings")
    consultant = relationship("User", foreign_keys=[consultant_id], back_populates="consultant_bookings")
    consultant_profile = relationship("ConsultantProfile", back_populates="bookings")
    live_session = relationship("LiveSession", back_populates="booking", uselist=False)
    review = relationship("Review", back_populates="booking", uselist=False)
    earning = relationship("Earning", back_populates="booking", uselist=False)

    def __repr__(self):
        return f"<Booking(id={self.id}, number={self.booking_number}, status={self.status})>"
