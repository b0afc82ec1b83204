"""
Reachability checks for the services panel.

Local services are checked with a TCP connect to 127.0.0.1; external
services with an HTTP GET. An external service counts as online when it
answers 200, 401 or 403 (auth-protected APIs are up even if they refuse an
anonymous request). All checks run concurrently and results keep the
configured order.
"""

import asyncio
import logging
from collections.abc import Awaitable

import httpx

from missionctl.core.config.models import ServiceCheckConfig
from missionctl.core.health.models import ServiceState, ServiceStatus

logger = logging.getLogger(__name__)

LOCAL_HOST = "127.0.0.1"
PORT_TIMEOUT = 1.0
HTTP_TIMEOUT = 3.0
ONLINE_STATUS_CODES = frozenset({200, 401, 403})


async def is_port_open(port: int, host: str = LOCAL_HOST, timeout: float = PORT_TIMEOUT) -> bool:
    """Return True if a TCP connection to ``host:port`` succeeds within ``timeout``."""
    try:
        _reader, writer = await asyncio.wait_for(
            asyncio.open_connection(host, port), timeout=timeout
        )
    except (OSError, asyncio.TimeoutError):
        return False

    writer.close()
    try:
        await writer.wait_closed()
    except OSError:
        pass
    return True


async def check_local(name: str, port: int) -> ServiceStatus:
    is_open = await is_port_open(port)
    return ServiceStatus(
        name=name,
        port=port,
        status=ServiceState.ONLINE if is_open else ServiceState.OFFLINE,
        info=f"Port {port} open" if is_open else "Not responding",
    )


async def check_external(name: str, url: str, client: httpx.AsyncClient) -> ServiceStatus:
    try:
        response = await client.get(url)
        online = response.status_code in ONLINE_STATUS_CODES
    except httpx.HTTPError as e:
        logger.debug("Health check for %s failed: %s", name, e)
        online = False

    return ServiceStatus(
        name=name,
        status=ServiceState.ONLINE if online else ServiceState.OFFLINE,
        info="OK" if online else "Unreachable",
    )


def _check(service: ServiceCheckConfig, client: httpx.AsyncClient) -> Awaitable[ServiceStatus]:
    if service.url is not None:
        return check_external(service.name, service.url, client)
    # ServiceCheckConfig guarantees a port when there is no url
    return check_local(service.name, service.port or 0)


async def check_services(
    services: list[ServiceCheckConfig],
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[ServiceStatus]:
    """
    Check every configured service concurrently.

    Args:
        services: Services to check, in display order
        transport: Optional httpx transport for external checks (used by tests)

    Returns:
        One ServiceStatus per service, in the same order
    """
    async with httpx.AsyncClient(timeout=HTTP_TIMEOUT, transport=transport) as client:
        return list(await asyncio.gather(*(_check(service, client) for service in services)))
