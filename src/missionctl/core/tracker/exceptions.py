"""
Custom exceptions for the task-tracker integration.

Exception Hierarchy:
    MissionControlError (base)
    └── TrackerError (tracker-related errors)
        ├── TrackerConfigError (missing credentials or data source)
        ├── NetworkError (network/API failures)
        └── ParseError (response parsing failures)

These never reach HTTP callers: the stats aggregator turns them into
stale-cache or baseline results with the message attached.

Example:
    >>> from missionctl.core.tracker.exceptions import NetworkError
    >>> try:
    ...     raise NetworkError("notion", "Request timed out", timeout=10.0)
    ... except NetworkError as e:
    ...     print(f"Error from {e.source}: {e}")
    ...     print(f"Context: {e.context}")
"""


class MissionControlError(Exception):
    """
    Base exception for all missionctl errors.

    Attributes:
        message: Human-readable error message
        context: Optional dictionary of additional context
    """

    def __init__(self, message: str, **context: object) -> None:
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        """Return string representation of the error."""
        return self.message


class TrackerError(MissionControlError):
    """
    Base exception for task-tracker errors.

    Attributes:
        source: Name of the tracker that failed (e.g., "notion")
        message: Human-readable error message
        context: Additional context about the failure
    """

    def __init__(self, source: str, message: str, **context: object) -> None:
        super().__init__(message, source=source, **context)
        self.source = source


class TrackerConfigError(TrackerError):
    """Raised when the tracker cannot be queried because it is not configured."""


class NetworkError(TrackerError):
    """
    Raised when a query request fails at the network or HTTP level.

    Covers timeouts, connection failures and non-2xx responses.
    """


class ParseError(TrackerError):
    """
    Raised when a query response cannot be parsed.

    Covers non-JSON bodies and JSON that is not an object.
    """


__all__ = [
    "MissionControlError",
    "TrackerError",
    "TrackerConfigError",
    "NetworkError",
    "ParseError",
]
