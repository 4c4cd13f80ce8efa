"""
요청자 확인 헬퍼

토큰 인증은 제공하지 않으므로, 요청 본문/쿼리로 전달된 사용자 ID 를 조회해 역할과 소유권을 확인한다.
"""

from sqlalchemy.orm import Session
from models.user import User
from models.enums import UserRole
from config.exception import NotFound, Forbidden


def get_user_or_404(db: Session, user_id: int, *, label: str = "User") -> User:
    """
    사용자 조회

    Args:
        db: 데이터베이스 세션
        user_id: 사용자 ID
        label: 에러 메시지에 사용할 이름 (Client, Consultant 등)

    Raises:
        AppException: 사용자를 찾을 수 없는 경우 (404)
    """
    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise NotFound(f"{label} not found", code=f"{label.upper()}_NOT_FOUND")
    return user


def require_admin(db: Session, admin_id: int) -> User:
    """관리자 권한 확인"""
    user = db.query(User).filter(User.id == admin_id).first()
    if user is None or user.role != UserRole.ADMIN:
        raise Forbidden("Admin privileges required", code="ADMIN_REQUIRED")
    return user


def ensure_participant(user_id: int, role: str, client_id: int, consultant_id: int, *, resource: str) -> None:
    """요청자가 기록된 내담자/상담사 본인인지 확인"""
    role = role.lower()
    if role == "client" and user_id == client_id:
        return
    if role == "consultant" and user_id == consultant_id:
        return
    if role not in ("client", "consultant"):
        raise Forbidden(f"Unauthorized: invalid role '{role}'", code="INVALID_ROLE")
    raise Forbidden(f"Unauthorized: You are not the {role} for this {resource}", code="NOT_PARTICIPANT")
