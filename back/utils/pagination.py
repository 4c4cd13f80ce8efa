"""
페이지네이션 헬퍼
"""

import math
from dataclasses import dataclass
from fastapi import Query as QueryParam
from sqlalchemy.orm import Query
from config.settings import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from schemas.common import Pagination


@dataclass
class PageParams:
    page: int
    limit: int


def page_params(
    page: int = QueryParam(1, ge=1),
    limit: int = QueryParam(DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
) -> PageParams:
    """목록 API 공통 쿼리 파라미터 (?page=&limit=)"""
    return PageParams(page=page, limit=limit)


def paginate(query: Query, params: PageParams) -> tuple[list, Pagination]:
    """정렬된 쿼리를 잘라 (items, pagination) 반환"""
    total = query.order_by(None).count()
    items = query.offset((params.page - 1) * params.limit).limit(params.limit).all()
    pagination = Pagination(
        page=params.page,
        limit=params.limit,
        total=total,
        pages=math.ceil(total / params.limit),
    )
    return items, pagination
