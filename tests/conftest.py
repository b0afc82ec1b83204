"""
Pytest configuration and shared fixtures.

Provides an isolated configuration environment, raw Notion record builders
and fake paginated task sources used across the test suite.
"""

import asyncio
from datetime import datetime, timezone
from typing import Any

import pytest

from missionctl.core.config import loader
from missionctl.core.tracker.models import QueryPage

# ==============================================================================
# Environment Fixtures
# ==============================================================================

ENV_VARS = (
    "NOTION_API_KEY",
    "MISSIONCTL_DATA_SOURCE_ID",
    "MISSIONCTL_CACHE_TTL",
    "MISSIONCTL_REQUEST_TIMEOUT",
    "MISSIONCTL_HOST",
    "MISSIONCTL_PORT",
)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """
    Keep every test away from the real user config, env and config cache.
    """
    for name in ENV_VARS:
        # set first so teardown restores the original value, or removes the key
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    xdg = tmp_path / "xdg"
    xdg.mkdir()
    monkeypatch.setenv("XDG_CONFIG_HOME", str(xdg))
    loader.clear_cache()
    yield xdg
    loader.clear_cache()


# ==============================================================================
# Raw Record Builders
# ==============================================================================


def _raw_task(
    id_number: int,
    status: str | None = "Done",
    *,
    name: str | None = None,
    use_select: bool = False,
    **extra_props: Any,
) -> dict[str, Any]:
    """Build a raw Notion page object as returned by a data source query."""
    props: dict[str, Any] = {
        "ID": {"unique_id": {"number": id_number}},
        "Task name": {"title": [{"plain_text": name or f"Task {id_number}"}]},
    }
    if status is not None:
        key = "select" if use_select else "status"
        props["Status"] = {key: {"name": status}}
    props.update(extra_props)
    return {"id": f"page-{id_number}", "properties": props}


def _build_pages(*batches: list[dict[str, Any]]) -> dict[str | None, QueryPage]:
    """
    Chain batches of raw records into cursor-linked pages.

    The first page is keyed by ``None``; page N links to ``"cursor-N"``.
    """
    pages: dict[str | None, QueryPage] = {}
    for index, batch in enumerate(batches):
        cursor = None if index == 0 else f"cursor-{index}"
        has_more = index < len(batches) - 1
        pages[cursor] = QueryPage(
            results=batch,
            has_more=has_more,
            next_cursor=f"cursor-{index + 1}" if has_more else None,
        )
    return pages


class FakeTaskSource:
    """In-memory TaskSource that records every query."""

    def __init__(
        self,
        pages: dict[str | None, QueryPage] | None = None,
        error: Exception | None = None,
        delay: float = 0.0,
    ) -> None:
        self.pages = pages if pages is not None else _build_pages([])
        self.error = error
        self.delay = delay
        self.calls: list[str | None] = []

    @property
    def name(self) -> str:
        return "fake"

    @property
    def passes(self) -> int:
        """Number of fetch passes started (first-page requests)."""
        return sum(1 for cursor in self.calls if cursor is None)

    async def query(self, cursor: str | None = None, page_size: int = 100) -> QueryPage:
        self.calls.append(cursor)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.pages[cursor]


class EndlessTaskSource:
    """TaskSource that always reports more pages."""

    def __init__(self) -> None:
        self.calls: list[str | None] = []

    @property
    def name(self) -> str:
        return "endless"

    async def query(self, cursor: str | None = None, page_size: int = 100) -> QueryPage:
        self.calls.append(cursor)
        start = len(self.calls) * page_size
        results = [_raw_task(start + i, "In Progress") for i in range(page_size)]
        return QueryPage(results=results, has_more=True, next_cursor=str(len(self.calls)))


# ==============================================================================
# Time Fixtures
# ==============================================================================


@pytest.fixture
def now() -> datetime:
    """A fixed reference instant."""
    return datetime(2025, 3, 3, 10, 0, tzinfo=timezone.utc)


@pytest.fixture
def sample_pages() -> dict[str | None, QueryPage]:
    """Two pages with a mix of statuses and a max id of 40."""
    return _build_pages(
        [
            _raw_task(1, "Done"),
            _raw_task(2, "In Progress"),
            _raw_task(3, "To Do"),
        ],
        [
            _raw_task(40, "Review"),
            _raw_task(5, "Blocked"),
        ],
    )


# ==============================================================================
# Builder Fixtures
# ==============================================================================


@pytest.fixture
def make_raw_task():
    """Factory for raw Notion page objects: make_raw_task(id_number, status, ...)."""
    return _raw_task


@pytest.fixture
def build_pages():
    """Factory chaining batches of raw records into cursor-linked pages."""
    return _build_pages


@pytest.fixture
def fake_source():
    """Factory for in-memory task sources: fake_source(pages=None, error=None, delay=0.0)."""
    return FakeTaskSource


@pytest.fixture
def endless_source() -> EndlessTaskSource:
    """A task source that never reports the last page."""
    return EndlessTaskSource()
