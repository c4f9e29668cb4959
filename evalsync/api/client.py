import logging
from typing import Any, Optional

import httpx

from evalsync.core.config import Settings
from evalsync.core.errors import MalformedResponseError, NetworkError
from evalsync.core.interceptors import FALLBACK_MESSAGE, AuthInterceptor, ErrorInterceptor
from evalsync.core.logging_middleware import LoggingMiddleware
from evalsync.core.notices import NoticeBoard
from evalsync.core.session import AuthSession

logger = logging.getLogger(__name__)


def decode_json(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError as exc:
        logger.warning("non-JSON body from %s %s: %s", response.request.method, response.request.url.path, exc)
        raise MalformedResponseError(f"{response.request.url.path}: {exc}") from exc


class ApiClient:
    """Shared JSON-over-HTTP client. Every call goes through the same hooks."""

    def __init__(
        self,
        settings: Settings,
        session: AuthSession,
        notices: NoticeBoard,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.notices = notices
        logging_hooks = LoggingMiddleware()
        self._http = httpx.AsyncClient(
            base_url=settings.API_URL,
            timeout=settings.REQUEST_TIMEOUT_SECONDS,
            headers={"Accept": "application/json"},
            transport=transport,
            event_hooks={
                "request": [logging_hooks.on_request, AuthInterceptor(session)],
                "response": [logging_hooks.on_response, ErrorInterceptor(session, notices)],
            },
        )

    async def request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            return await self._http.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            self.notices.error(FALLBACK_MESSAGE)
            raise NetworkError(str(exc)) from exc

    async def get(self, path: str, **kwargs: Any) -> httpx.Response:
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> httpx.Response:
        return await self.request("POST", path, **kwargs)

    async def patch(self, path: str, **kwargs: Any) -> httpx.Response:
        return await self.request("PATCH", path, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> httpx.Response:
        return await self.request("DELETE", path, **kwargs)

    async def aclose(self) -> None:
        await self._http.aclose()
