"""
FastAPI application setup for the mission control dashboard.

Creates the FastAPI app instance, wires the long-lived components into
``app.state`` and registers routes.
"""

import logging
import time
import traceback
from enum import Enum

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from missionctl import __version__
from missionctl.core.config.models import MissionControlConfig
from missionctl.core.dashboard.api.routes import health, schedule, system, tracker
from missionctl.core.tracker.aggregator import StatsAggregator
from missionctl.core.tracker.client import NotionTaskSource

logger = logging.getLogger(__name__)


class ErrorCode(str, Enum):
    """Standard error codes for API responses."""

    # Client errors (4xx)
    NOT_FOUND = "NOT_FOUND"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    INVALID_REQUEST = "INVALID_REQUEST"

    # Server errors (5xx)
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ErrorResponse(BaseModel):
    """Standard error response model."""

    error_code: ErrorCode
    message: str
    detail: str | None = None
    request_id: str | None = None


def _error_code_for(status_code: int) -> ErrorCode:
    if status_code == status.HTTP_404_NOT_FOUND:
        return ErrorCode.NOT_FOUND
    if status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        return ErrorCode.METHOD_NOT_ALLOWED
    if status_code < 500:
        return ErrorCode.INVALID_REQUEST
    return ErrorCode.INTERNAL_ERROR


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """
    Handle HTTP exceptions (including unknown routes) with the standard envelope.
    """
    if exc.status_code >= 500:
        logger.error(
            "HTTP %d on %s %s: %s",
            exc.status_code,
            request.method,
            request.url.path,
            exc.detail,
        )
    else:
        logger.info(
            "HTTP %d on %s %s: %s",
            exc.status_code,
            request.method,
            request.url.path,
            exc.detail,
        )

    detail_msg = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    body = ErrorResponse(
        error_code=_error_code_for(exc.status_code),
        message=detail_msg,
        detail=detail_msg,
        request_id=str(id(request)),
    )
    return JSONResponse(status_code=exc.status_code, content=body.model_dump(mode="json"))


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle all uncaught exceptions.

    Logs the full traceback but returns a clean envelope to the client.
    """
    logger.error(
        "Unhandled exception on %s %s: %s\n%s",
        request.method,
        request.url.path,
        str(exc),
        traceback.format_exc(),
    )
    body = ErrorResponse(
        error_code=ErrorCode.INTERNAL_ERROR,
        message="An internal server error occurred",
        detail=str(exc),
        request_id=str(id(request)),
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=body.model_dump(mode="json"),
    )


def create_app(
    config: MissionControlConfig | None = None,
    aggregator: StatsAggregator | None = None,
) -> FastAPI:
    """
    Build the dashboard API.

    Args:
        config: Loaded configuration (defaults to built-in defaults)
        aggregator: Tracker stats aggregator; built from ``config`` when omitted

    Returns:
        Configured FastAPI application
    """
    config = config or MissionControlConfig()
    if aggregator is None:
        aggregator = StatsAggregator.from_config(
            config.tracker, NotionTaskSource.from_config(config.tracker)
        )

    app = FastAPI(
        title="Mission Control API",
        description="Local operational status API for the mission control dashboard",
        version=__version__,
    )

    app.state.config = config
    app.state.aggregator = aggregator
    app.state.started_at = time.monotonic()

    app.include_router(system.router, tags=["system"])
    app.include_router(schedule.router, prefix="/mc", tags=["schedule"])
    app.include_router(health.router, prefix="/mc", tags=["health"])
    app.include_router(tracker.router, prefix="/mc", tags=["tracker"])

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    return app
