"""Paged list envelope returned by the ``/paginated`` endpoints."""


from typing import Generic, List, TypeVar

from pydantic import BaseModel

from ems_client.common.models import ApiModel

T = TypeVar("T")


class PaginationParams(BaseModel):
    """Query string for paged lists (0-indexed, like the backend)."""

    page: int = 0
    size: int = 10

    def as_query(self) -> dict[str, str]:
        return {"page": str(self.page), "size": str(self.size)}


class PageResponse(ApiModel, Generic[T]):
    """Standard envelope: ``{"content": [...], "totalElements": n, ...}``."""

    content: List[T] = []
    total_elements: int = 0
    total_pages: int = 0
    number: int = 0
    size: int = 0
    first: bool = True
    last: bool = True

    @property
    def has_next(self) -> bool:
        return not self.last

    @property
    def has_prev(self) -> bool:
        return not self.first


def page_numbers(current_page: int, total_pages: int, window: int = 10) -> list[int]:
    """Page indexes shown in a pager, at most *window* wide around *current_page*."""
    max_pages = min(total_pages, window)
    start = max(0, min(current_page - 4, total_pages - max_pages))
    return list(range(start, min(start + max_pages, total_pages)))
