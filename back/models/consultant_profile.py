"""
상담사 프로필 모델
"""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text, Boolean, Enum, JSON
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from database import Base
from models.enums import CategoryEnum


class ConsultantProfile(Base):
    """상담사 프로필 (User와 1:1)"""
    __tablename__ = "consultant_profiles"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)

    # 소개
    bio = Column(Text, nullable=True)
    experience = Column(String(50), nullable=True)  # 경력 연수
    qualifications = Column(JSON, nullable=False, default=list)
    skills = Column(JSON, nullable=False, default=list)
    category = Column(Enum(CategoryEnum, name="category"), nullable=False, index=True)
    subcategory = Column(String(100), nullable=True)

    # 가격 (첫 상담 / 정규 상담)
    first_session_price = Column(Integer, nullable=False)
    regular_session_price = Column(Integer, nullable=False)
    availability = Column(JSON, nullable=True)

    # 상태
    is_approved = Column(Boolean, nullable=False, default=False, index=True)
    approval_date = Column(DateTime, nullable=True)
    is_online = Column(Boolean, nullable=False, default=False)
    profile_completed = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())

    # 관계
    user = relationship("User", back_populates="consultant_profile")
    bookings = relationship("Booking", back_populates="consultant_profile")

    def __repr__(self):
        return f"<ConsultantProfile(id={self.id}, user_id={self.user_id}, category={self.category})>"
