from typing import Generic, Optional, TypeVar, List
from pydantic import BaseModel, Field
from fastapi import Query

from src.config import settings

T = TypeVar('T')

class PaginationParams(BaseModel):
    page: int = Field(Query(1, ge=1, description="Số trang"))
    size: int = Field(Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE, description="Số bản ghi mỗi trang"))

    @property
    def offset(self) -> int:
        return get_offset(self.page, self.size)

class PaginatedResponse(BaseModel, Generic[T]):
    items: List[T]
    total: int
    page: int
    size: int
    pages: int

    @property
    def has_next(self) -> bool:
        return self.page < self.pages

    @property
    def next_page(self) -> Optional[int]:
        return self.page + 1 if self.has_next else None

def paginate(items: List[T], total: int, page: int, size: int) -> PaginatedResponse[T]:
    """
    Build a page envelope; `pages` is 0 when there are no rows
    """
    pages = (total + size - 1) // size

    return PaginatedResponse(
        items=items,
        total=total,
        page=page,
        size=size,
        pages=pages
    )

def get_offset(page: int, size: int) -> int:
    return (page - 1) * size
