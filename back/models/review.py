"""
리뷰 모델
"""

from sqlalchemy import Column, Integer, DateTime, ForeignKey, Text, Boolean, CheckConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from database import Base


class Review(Base):
    """완료된 예약 1건당 최대 1개의 리뷰"""
    __tablename__ = "reviews"
    __table_args__ = (
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_reviews_rating_range"),
    )

    id = Column(Integer, primary_key=True, index=True)
    booking_id = Column(Integer, ForeignKey("bookings.id"), unique=True, nullable=False)
    session_id = Column(Integer, ForeignKey("live_sessions.id"), nullable=True)
    client_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    consultant_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    rating = Column(Integer, nullable=False)
    review = Column(Text, nullable=True)
    is_public = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime, server_default=func.now())

    # 관계
    booking = relationship("Booking", back_populates="review")
    client = relationship("User", foreign_keys=[client_id], back_populates="client_reviews")
    consultant = relationship("User", foreign_keys=[consultant_id], back_populates="consultant_reviews")

    def __repr__(self):
        return f"<Review(id={self.id}, booking_id={self.booking_id}, rating={self.rating})>"
