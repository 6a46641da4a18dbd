from fastapi import Query
from cinema_admin.schemas.common import PageParams


def get_page_params(
        page: int = Query(1, ge=1, description="1-based page number"),
        limit: int = Query(10, ge=1, le=100, description="Page size")) -> PageParams:
    return PageParams(page=page, limit=limit)
