"""
Cursor-based pagination.

List endpoints return ``{"data": [...], "has_more": bool, "next_page": str}``.
``fetch_all`` drains such a collection through an injected page-fetch
coroutine, so every list operation in the SDK shares one stop condition:
a page that claims ``has_more`` but carries no ``next_page`` ends the
collection.
"""

from __future__ import annotations
import logging
from collections import deque
from dataclasses import dataclass, field
from typing import AsyncIterator, Awaitable, Callable, Deque, Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field

from .constants import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from .runtime.errors import ArgumentError


logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class Page(Generic[T]):
    """One fetched page of items."""

    data: List[T] = field(default_factory=list)
    has_more: bool = False
    next_page: Optional[str] = None

    @property
    def continuation(self) -> Optional[str]:
        """Cursor for the following page, or None when this page is the last."""
        if self.has_more and self.next_page:
            return self.next_page
        return None


PageFetchFn = Callable[[Optional[str], int], Awaitable[Page[T]]]


class PaginationOptions(BaseModel):
    """Options for fetching a single page."""

    limit: int = Field(default=DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT)
    page: Optional[str] = Field(default=None, description="Cursor returned as next_page by a previous call")

    def to_params(self) -> dict:
        params = {"limit": self.limit}
        if self.page:
            params["page"] = self.page
        return params


def _check_page_size(page_size: int) -> None:
    if not isinstance(page_size, int) or not 1 <= page_size <= MAX_PAGE_LIMIT:
        raise ArgumentError(f"Page size must be between 1 and {MAX_PAGE_LIMIT}, got {page_size}")


async def iter_pages(page_fetch_fn: PageFetchFn, page_size: int = DEFAULT_PAGE_LIMIT) -> AsyncIterator[Page[T]]:
    """
    Yield every page of a collection in server order.

    Args:
        page_fetch_fn: ``async (cursor, page_size) -> Page``; cursor is None for the first page
        page_size: Items requested per page (1-100)
    """
    _check_page_size(page_size)

    pending: Deque[Optional[str]] = deque([None])
    while pending:
        cursor = pending.popleft()
        page = await page_fetch_fn(cursor, page_size)
        yield page

        next_cursor = page.continuation
        if next_cursor is not None:
            pending.append(next_cursor)
        elif page.has_more:
            logger.warning("Page reported has_more without a next_page cursor; stopping")


async def fetch_all(page_fetch_fn: PageFetchFn, page_size: int = DEFAULT_PAGE_LIMIT) -> List[T]:
    """
    Drain a cursor-paginated collection into one list.

    Items keep server order: the result is the concatenation of the pages.

    Args:
        page_fetch_fn: ``async (cursor, page_size) -> Page``
        page_size: Items requested per page (1-100)

    Returns:
        Every item of the collection

    Raises:
        ArgumentError: If page_size is out of range
    """
    items: List[T] = []
    async for page in iter_pages(page_fetch_fn, page_size):
        items.extend(page.data)
    return items


__all__ = [
    "Page",
    "PageFetchFn",
    "PaginationOptions",
    "iter_pages",
    "fetch_all",
]
