"""
사용자(User) 모델 - 내담자, 상담사, 관리자 공용
"""

from sqlalchemy import Column, Integer, String, DateTime, Boolean, Enum
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from database import Base
from models.enums import UserRole


class User(Base):
    """사용자 모델"""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    name = Column(String(100), nullable=True)
    phone = Column(String(30), nullable=True)
    avatar = Column(String(500), nullable=True)
    role = Column(Enum(UserRole, name="user_role"), nullable=False, default=UserRole.CLIENT)

    # 인증 상태
    email_verified = Column(DateTime, nullable=True)
    phone_verified = Column(Boolean, nullable=False, default=False)
    kyc_verified = Column(Boolean, nullable=False, default=False)

    # 메타데이터
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())

    # 관계
    consultant_profile = relationship(
        "ConsultantProfile", back_populates="user", uselist=False, cascade="all, delete-orphan"
    )
    client_bookings = relationship("Booking", foreign_keys="Booking.client_id", back_populates="client")
    consultant_bookings = relationship("Booking", foreign_keys="Booking.consultant_id", back_populates="consultant")
    client_reviews = relationship("Review", foreign_keys="Review.client_id", back_populates="client")
    consultant_reviews = relationship("Review", foreign_keys="Review.consultant_id", back_populates="consultant")
    client_sessions = relationship("LiveSession", foreign_keys="LiveSession.client_id", back_populates="client")
    consultant_sessions = relationship(
        "LiveSession", foreign_keys="LiveSession.consultant_id", back_populates="consultant"
    )

    def __repr__(self):
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"
