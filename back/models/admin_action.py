"""
관리자 작업 기록 모델
"""

from sqlalchemy import Column, Integer, DateTime, ForeignKey, Text, Enum
from sqlalchemy.sql import func
from database import Base
from models.enums import AdminActionType


class AdminAction(Base):
    """상담사 승인/거절 이력"""
    __tablename__ = "admin_actions"

    id = Column(Integer, primary_key=True, index=True)
    admin_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    action_type = Column(Enum(AdminActionType, name="admin_action_type"), nullable=False)
    # 거절된 상담사는 프로필이 삭제되므로 사용자 ID만 보관
    target_user_id = Column(Integer, nullable=False, index=True)
    reason = Column(Text, nullable=True)

    created_at = Column(DateTime, server_default=func.now())

    def __repr__(self):
        return f"<AdminAction(id={self.id}, type={self.action_type}, target={self.target_user_id})>"
