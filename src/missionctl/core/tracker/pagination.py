"""
Sequential cursor pagination over a TaskSource.

Pages are requested strictly one after another, because each cursor is only
known once the previous page has arrived. Record order therefore matches the
order the upstream emits them.
"""

import logging
from collections.abc import AsyncIterator

from missionctl.core.tracker.client import TaskSource
from missionctl.core.tracker.fields import map_record
from missionctl.core.tracker.models import QueryPage, TaskRecord

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 100
DEFAULT_MAX_RECORDS = 3000


async def iter_pages(
    source: TaskSource, page_size: int = DEFAULT_PAGE_SIZE
) -> AsyncIterator[QueryPage]:
    """
    Yield pages from ``source`` until it reports no more results.

    Each call starts a new pass from the first page. The consumer may stop
    early by breaking out of the loop.

    Args:
        source: Paginated query endpoint
        page_size: Records requested per page

    Yields:
        QueryPage objects in upstream order
    """
    cursor: str | None = None
    while True:
        page = await source.query(cursor=cursor, page_size=page_size)
        yield page
        if not page.has_more:
            return
        cursor = page.next_cursor


async def collect_tasks(
    source: TaskSource,
    page_size: int = DEFAULT_PAGE_SIZE,
    max_records: int = DEFAULT_MAX_RECORDS,
) -> list[TaskRecord]:
    """
    Drain pages into mapped TaskRecords, stopping at ``max_records``.

    The cap bounds memory and latency against runaway upstream pagination;
    hitting it truncates the batch to exactly ``max_records`` and is not an
    error.

    Args:
        source: Paginated query endpoint
        page_size: Records requested per page
        max_records: Hard cap on collected records

    Returns:
        Records in upstream order

    Raises:
        TrackerError: If any page request fails
    """
    records: list[TaskRecord] = []
    pages = iter_pages(source, page_size=page_size)
    try:
        async for page in pages:
            records.extend(map_record(raw) for raw in page.results)
            if len(records) >= max_records:
                if page.has_more or len(records) > max_records:
                    logger.info("Reached record cap of %d, stopping pagination", max_records)
                del records[max_records:]
                break
    finally:
        await pages.aclose()

    return records


__all__ = ["DEFAULT_MAX_RECORDS", "DEFAULT_PAGE_SIZE", "collect_tasks", "iter_pages"]
