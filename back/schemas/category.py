"""
카테고리 스키마
"""

from models.enums import CategoryEnum
from schemas.common import CamelModel


class CategoryItem(CamelModel):
    id: str
    name: str
    value: CategoryEnum
    count: int
    icon: str


class CategoryListResponse(CamelModel):
    categories: list[CategoryItem]
