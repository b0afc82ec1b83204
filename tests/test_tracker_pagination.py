"""
Tests for cursor pagination and the record cap.
"""

import pytest

from missionctl.core.tracker.exceptions import NetworkError
from missionctl.core.tracker.pagination import collect_tasks, iter_pages


class TestIterPages:
    """Tests for iter_pages()."""

    @pytest.mark.asyncio
    async def test_follows_cursors_in_order(self, fake_source, sample_pages) -> None:
        source = fake_source(sample_pages)

        pages = [page async for page in iter_pages(source)]

        assert len(pages) == 2
        assert source.calls == [None, "cursor-1"]

    @pytest.mark.asyncio
    async def test_single_page(self, make_raw_task, build_pages, fake_source) -> None:
        source = fake_source(build_pages([make_raw_task(1)]))

        pages = [page async for page in iter_pages(source)]

        assert len(pages) == 1
        assert source.calls == [None]


class TestCollectTasks:
    """Tests for collect_tasks()."""

    @pytest.mark.asyncio
    async def test_collects_all_pages_in_upstream_order(self, fake_source, sample_pages) -> None:
        records = await collect_tasks(fake_source(sample_pages))

        assert [r.id_number for r in records] == [1, 2, 3, 40, 5]

    @pytest.mark.asyncio
    async def test_empty_source(self, fake_source) -> None:
        assert await collect_tasks(fake_source()) == []

    @pytest.mark.asyncio
    async def test_cap_stops_runaway_pagination(self, endless_source) -> None:
        """An upstream that always reports more pages stops at exactly 3000 records."""
        source = endless_source

        records = await collect_tasks(source)

        assert len(records) == 3000
        assert len(source.calls) == 30

    @pytest.mark.asyncio
    async def test_cap_truncates_partial_page(self, endless_source) -> None:
        source = endless_source

        records = await collect_tasks(source, page_size=7, max_records=20)

        assert len(records) == 20
        assert len(source.calls) == 3

    @pytest.mark.asyncio
    async def test_page_error_propagates(self, fake_source) -> None:
        source = fake_source(error=NetworkError("fake", "HTTP 502 error"))

        with pytest.raises(NetworkError):
            await collect_tasks(source)
