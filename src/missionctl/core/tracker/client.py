"""
Task source protocol and the Notion data source client.

A TaskSource answers one paginated query at a time: given an opaque cursor
(None on the first call) it returns a QueryPage with raw records, a has-more
flag and the cursor for the next page. Pagination itself lives in
missionctl.core.tracker.pagination.

Notion endpoint:
    POST {base}/v1/data_sources/{data_source_id}/query
    Headers: Authorization: Bearer <token>, Notion-Version: 2025-09-03
    Body:    {"page_size": 100, "start_cursor": "<cursor>"}

Response format:
    {
      "results": [{"id": "...", "properties": {...}}, ...],
      "has_more": true,
      "next_cursor": "..."
    }
"""

import logging
from typing import Any, Protocol, runtime_checkable

import httpx
from pydantic import ValidationError

from missionctl.core.config.models import TrackerConfig
from missionctl.core.tracker.exceptions import NetworkError, ParseError, TrackerConfigError
from missionctl.core.tracker.models import QueryPage

logger = logging.getLogger(__name__)


@runtime_checkable
class TaskSource(Protocol):
    """
    Protocol for paginated task query endpoints.

    Implementations raise TrackerError subclasses on failure.
    """

    @property
    def name(self) -> str:
        """Source name used in logs and error context (e.g., 'notion')."""
        ...

    async def query(self, cursor: str | None = None, page_size: int = 100) -> QueryPage:
        """
        Fetch one page of raw records.

        Args:
            cursor: Continuation cursor from the previous page, None for the first
            page_size: Number of records requested

        Returns:
            QueryPage with results, has_more and next_cursor
        """
        ...


class NotionTaskSource:
    """
    TaskSource backed by a Notion data source query.

    Every request is bounded by ``timeout``. A timeout, a connection failure
    and a non-2xx status all raise NetworkError; a body that is not a JSON
    object raises ParseError.

    Example:
        >>> source = NotionTaskSource(api_key="secret_...", data_source_id="2f79...")
        >>> page = await source.query()
        >>> page.has_more
        True
    """

    def __init__(
        self,
        api_key: str | None,
        data_source_id: str,
        *,
        base_url: str = "https://api.notion.com",
        notion_version: str = "2025-09-03",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the source.

        Args:
            api_key: Notion integration token (None if not configured)
            data_source_id: Data source to query
            base_url: API base URL
            notion_version: Notion-Version header value
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.api_key = api_key
        self.data_source_id = data_source_id
        self.base_url = base_url.rstrip("/")
        self.notion_version = notion_version
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_config(cls, config: TrackerConfig) -> "NotionTaskSource":
        """Build a source from tracker configuration."""
        return cls(
            api_key=config.api_key,
            data_source_id=config.data_source_id,
            base_url=config.api_base_url,
            notion_version=config.notion_version,
            timeout=config.request_timeout,
        )

    @property
    def name(self) -> str:
        return "notion"

    @property
    def query_url(self) -> str:
        return f"{self.base_url}/v1/data_sources/{self.data_source_id}/query"

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Notion-Version": self.notion_version,
            "Content-Type": "application/json",
        }

    async def query(self, cursor: str | None = None, page_size: int = 100) -> QueryPage:
        """
        Query one page of the data source.

        Raises:
            TrackerConfigError: If no API key is configured
            NetworkError: On timeout, connection failure or HTTP error status
            ParseError: If the response is not a JSON object
        """
        if not self.api_key:
            raise TrackerConfigError(self.name, "Notion API key not configured")

        body: dict[str, Any] = {"page_size": page_size}
        if cursor:
            body["start_cursor"] = cursor

        url = self.query_url
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(url, json=body, headers=self._headers())
                response.raise_for_status()
        except httpx.TimeoutException as e:
            raise NetworkError(
                self.name,
                f"Request timed out after {self.timeout}s while querying Notion",
                url=url,
                timeout=self.timeout,
            ) from e
        except httpx.HTTPStatusError as e:
            raise NetworkError(
                self.name,
                f"HTTP {e.response.status_code} error from Notion API",
                url=url,
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise NetworkError(
                self.name,
                f"Network error while querying Notion: {e}",
                url=url,
            ) from e

        try:
            data = response.json()
        except ValueError as e:
            raise ParseError(self.name, "Failed to parse JSON response from Notion", url=url) from e

        if not isinstance(data, dict):
            raise ParseError(
                self.name,
                "Response is not a valid JSON object",
                url=url,
                response_type=type(data).__name__,
            )

        try:
            return QueryPage(
                results=[r for r in (data.get("results") or []) if isinstance(r, dict)],
                has_more=bool(data.get("has_more")),
                next_cursor=data.get("next_cursor"),
            )
        except ValidationError as e:
            raise ParseError(self.name, f"Unexpected query response shape: {e}", url=url) from e


__all__ = ["NotionTaskSource", "TaskSource"]
