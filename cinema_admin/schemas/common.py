from math import ceil
from typing import Generic, Optional, TypeVar
from pydantic import BaseModel, Field


T = TypeVar("T")


class APIResponse(BaseModel, Generic[T]):
    success: bool = True
    message: str
    data: Optional[T] = None


class ErrorResponse(BaseModel):
    success: bool = False
    message: str


class PaginatedResponse(APIResponse[list[T]], Generic[T]):
    page: int
    limit: int
    total: int
    pages: int


class PageParams(BaseModel):
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1, le=100)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def success_response(message: str, data=None) -> dict:
    return {"success": True, "message": message, "data": data}


def paginated_response(message: str, items: list, params: PageParams, total: int) -> dict:
    return {
        "success": True,
        "message": message,
        "data": items,
        "page": params.page,
        "limit": params.limit,
        "total": total,
        "pages": ceil(total / params.limit) if total else 0,
    }
