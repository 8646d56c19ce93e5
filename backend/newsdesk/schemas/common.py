import math
from typing import Any, Generic, List, Optional, Sequence, TypeVar

from pydantic import BaseModel, computed_field, field_validator

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 50


def _as_int(v: Any) -> Optional[int]:
    try:
        return int(v)
    except (TypeError, ValueError):
        return None


class PagingParams(BaseModel):
    """
    Page and sort options shared by every list endpoint.

    Values are normalized rather than rejected: a page number below 1 becomes
    1, a missing or non-positive page size becomes 10, anything above 50 is
    clamped to 50, and any sort order other than "desc" means ascending.
    """
    page_number: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    sort_by: Optional[str] = None
    sort_order: str = "asc"

    @field_validator("page_number", mode="before")
    def normalize_page_number(cls, v: Any) -> int:
        v = _as_int(v)
        if v is None or v <= 0:
            return 1
        return v

    @field_validator("page_size", mode="before")
    def normalize_page_size(cls, v: Any) -> int:
        v = _as_int(v)
        if v is None or v <= 0:
            return DEFAULT_PAGE_SIZE
        return min(v, MAX_PAGE_SIZE)

    @field_validator("sort_by", mode="before")
    def normalize_sort_by(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not str(v).strip():
            return None
        return str(v).strip()

    @field_validator("sort_order", mode="before")
    def normalize_sort_order(cls, v: Optional[str]) -> str:
        if v is not None and str(v).strip().lower() == "desc":
            return "desc"
        return "asc"

    @property
    def descending(self) -> bool:
        return self.sort_order == "desc"


class PagedResult(BaseModel, Generic[T]):
    items: List[T]
    page_number: int
    page_size: int
    total_count: int

    @computed_field
    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_count / self.page_size) if self.page_size else 0

    @computed_field
    @property
    def has_previous_page(self) -> bool:
        return self.page_number > 1

    @computed_field
    @property
    def has_next_page(self) -> bool:
        return self.page_number < self.total_pages

    @classmethod
    def build(cls, items: Sequence[Any], paging: PagingParams, total_count: int):
        return cls(
            items=list(items),
            page_number=paging.page_number,
            page_size=paging.page_size,
            total_count=total_count,
        )


class ApiResponse(BaseModel, Generic[T]):
    """Envelope wrapped around every response body"""
    message: Optional[str] = None
    status_code: int = 200
    data: Optional[T] = None


def ok(data: Any = None, message: str = "OK", status_code: int = 200) -> dict:
    return {"message": message, "status_code": status_code, "data": data}
