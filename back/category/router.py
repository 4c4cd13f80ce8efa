"""
카테고리 API 라우터
"""

from fastapi import APIRouter, Depends
from sqlalchemy import func
from sqlalchemy.orm import Session
from database import get_db
from models.user import User
from models.consultant_profile import ConsultantProfile
from models.enums import CategoryEnum, UserRole
from schemas.category import CategoryItem, CategoryListResponse
from config.exception import BadRequest
from logs.logging_util import LoggerSingleton

logger = LoggerSingleton.get_logger(logger_name="category")

router = APIRouter(prefix="/api/categories", tags=["Categories"])

CATEGORY_ICONS = {
    "career": "💼",
    "education": "📚",
    "finance": "💰",
    "business": "🏢",
    "wellness": "🧘",
    "technology": "💻",
    "legal": "⚖️",
    "marketing": "📱",
    "other": "📋",
}
DEFAULT_ICON = "📋"


@router.get("", response_model=CategoryListResponse)
def list_categories(db: Session = Depends(get_db)):
    """전체 카테고리 + 승인된 상담사 수 (수 내림차순, 이름순)"""
    rows = (
        db.query(ConsultantProfile.category, func.count(ConsultantProfile.id))
        .join(User, User.id == ConsultantProfile.user_id)
        .filter(ConsultantProfile.is_approved.is_(True), User.role == UserRole.CONSULTANT)
        .group_by(ConsultantProfile.category)
        .all()
    )
    counts = {category: count for category, count in rows}

    categories = []
    for category in CategoryEnum:
        key = category.value.lower()
        categories.append(
            CategoryItem(
                id=key,
                name=key.capitalize(),
                value=category,
                count=counts.get(category, 0),
                icon=CATEGORY_ICONS.get(key, DEFAULT_ICON),
            )
        )

    categories.sort(key=lambda c: (-c.count, c.name))
    return CategoryListResponse(categories=categories)


@router.post("")
def create_category():
    """카테고리는 열거형으로 고정되어 있어 추가할 수 없음"""
    logger.warning("Rejected attempt to create a category")
    raise BadRequest(
        "Categories are predefined. Please use the available categories.",
        code="CATEGORIES_PREDEFINED",
    )
