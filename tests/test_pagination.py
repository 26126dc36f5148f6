"""
Tests for cursor-based pagination.
"""

import logging
from unittest.mock import AsyncMock

import pytest

from cdp_client.pagination import Page, PaginationOptions, fetch_all, iter_pages
from cdp_client.runtime.errors import ArgumentError


def _scripted(pages):
    """Page-fetch function returning the given pages in order and recording calls."""
    return AsyncMock(side_effect=list(pages))


class TestFetchAll:
    """Test draining a collection."""

    @pytest.mark.asyncio
    async def test_concatenates_pages_in_order(self):
        fetch_page = _scripted([
            Page(data=[1, 2], has_more=True, next_page="c1"),
            Page(data=[3, 4], has_more=True, next_page="c2"),
            Page(data=[5], has_more=False),
        ])

        items = await fetch_all(fetch_page, page_size=2)

        assert items == [1, 2, 3, 4, 5]
        assert fetch_page.await_count == 3
        assert [call.args for call in fetch_page.await_args_list] == [(None, 2), ("c1", 2), ("c2", 2)]

    @pytest.mark.asyncio
    async def test_stops_when_cursor_missing(self, caplog):
        fetch_page = _scripted([
            Page(data=["a"], has_more=True, next_page="c1"),
            Page(data=["b"], has_more=True, next_page=""),
            Page(data=["never"], has_more=False),
        ])

        with caplog.at_level(logging.WARNING, logger="cdp_client.pagination"):
            items = await fetch_all(fetch_page)

        assert items == ["a", "b"]
        assert fetch_page.await_count == 2
        assert "has_more without a next_page" in caplog.text

    @pytest.mark.asyncio
    async def test_cursor_ignored_when_no_more(self):
        fetch_page = _scripted([Page(data=[1], has_more=False, next_page="stale")])

        assert await fetch_all(fetch_page) == [1]
        assert fetch_page.await_count == 1

    @pytest.mark.asyncio
    async def test_empty_collection(self):
        fetch_page = _scripted([Page()])
        assert await fetch_all(fetch_page) == []

    @pytest.mark.asyncio
    async def test_fetch_error_propagates(self):
        fetch_page = AsyncMock(side_effect=RuntimeError("boom"))
        with pytest.raises(RuntimeError, match="boom"):
            await fetch_all(fetch_page)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("page_size", [0, 101, -1])
    async def test_page_size_out_of_range(self, page_size):
        fetch_page = AsyncMock()
        with pytest.raises(ArgumentError):
            await fetch_all(fetch_page, page_size=page_size)
        fetch_page.assert_not_awaited()


class TestIterPages:
    """Test page iteration."""

    @pytest.mark.asyncio
    async def test_yields_pages(self):
        fetch_page = _scripted([
            Page(data=[1], has_more=True, next_page="c1"),
            Page(data=[2], has_more=False),
        ])

        pages = [page async for page in iter_pages(fetch_page, page_size=1)]

        assert [page.data for page in pages] == [[1], [2]]


class TestPaginationOptions:
    """Test query parameter building."""

    def test_first_page(self):
        assert PaginationOptions(limit=50).to_params() == {"limit": 50}

    def test_with_cursor(self):
        assert PaginationOptions(limit=10, page="abc").to_params() == {"limit": 10, "page": "abc"}

    def test_limit_bounds(self):
        with pytest.raises(ValueError):
            PaginationOptions(limit=0)
        with pytest.raises(ValueError):
            PaginationOptions(limit=101)
