"""
Request Executor

Sends a merged request profile over a single-use aiohttp session and returns
the fully read response.
"""

import asyncio
from datetime import datetime, UTC
from typing import Optional

import aiohttp

from ..core.config import get_settings
from ..core.exceptions import NetworkError
from ..core.logging import get_logger
from ..core.models import HTTPResponse
from .overrides import OverrideSet
from .profile import RequestProfile

logger = get_logger(__name__)


async def send(
    profile: RequestProfile,
    overrides: Optional[OverrideSet] = None,
    timeout: Optional[float] = None,
) -> HTTPResponse:
    """
    Send the request described by ``profile`` with ``overrides`` applied.

    Args:
        profile: Request profile to send
        overrides: Command-line overrides (optional)
        timeout: Total timeout in seconds; defaults to the configured value

    Returns:
        HTTPResponse with the body read as text

    Raises:
        NetworkError: On connection, DNS, TLS or timeout failures
    """
    merged = profile.merge(overrides)
    url = profile.build_url(merged.query)
    total = timeout if timeout is not None else get_settings().request_timeout

    logger.debug("%s %s", profile.method, url)
    start_time = datetime.now(UTC)

    try:
        client_timeout = aiohttp.ClientTimeout(total=total)
        async with aiohttp.ClientSession(timeout=client_timeout) as session:
            async with session.request(
                method=profile.method,
                url=url,
                headers=merged.headers,
                data=merged.body.encode("utf-8"),
            ) as response:
                text = await response.text(errors="replace")

                end_time = datetime.now(UTC)
                duration_ms = int((end_time - start_time).total_seconds() * 1000)
                logger.debug(
                    "%s %s -> %s in %dms", profile.method, url, response.status, duration_ms
                )

                return HTTPResponse(
                    version=f"HTTP/{response.version.major}.{response.version.minor}",
                    status_code=response.status,
                    reason=response.reason or "",
                    headers=list(response.headers.items()),
                    text=text,
                    timestamp=end_time,
                    duration_ms=duration_ms,
                )

    except aiohttp.ClientError as e:
        raise NetworkError(
            f"Failed to send request to {url}: {e}",
            {"method": profile.method, "url": url},
        ) from e
    except asyncio.TimeoutError as e:
        raise NetworkError(
            f"Request to {url} timed out after {total}s",
            {"method": profile.method, "url": url},
        ) from e
