import logging
import time

import httpx

logger = logging.getLogger(__name__)


class LoggingMiddleware:
    """httpx event hooks that log every round-trip with its duration."""

    async def on_request(self, request: httpx.Request) -> None:
        request.extensions["evalsync_started"] = time.monotonic()

    async def on_response(self, response: httpx.Response) -> None:
        request = response.request
        start = request.extensions.get("evalsync_started", time.monotonic())
        duration = time.monotonic() - start
        logger.info(
            "%s %s -> %s (%.2fs)",
            request.method,
            request.url.path,
            response.status_code,
            duration,
        )
