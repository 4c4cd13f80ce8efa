"""
공통 스키마 (camelCase 직렬화, 페이지네이션)
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Optional


class CamelModel(BaseModel):
    """요청/응답 JSON 은 camelCase, 파이썬 내부는 snake_case"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class Pagination(CamelModel):
    page: int
    limit: int
    total: int
    pages: int


class UserSummary(CamelModel):
    """목록/상세 응답에 포함되는 사용자 요약"""
    id: int
    name: Optional[str] = None
    email: Optional[str] = None
    avatar: Optional[str] = None
