import logging

import httpx

from evalsync.core.config import AUTH_PATH_PREFIX
from evalsync.core.errors import ApiError
from evalsync.core.notices import NoticeBoard
from evalsync.core.session import AuthSession

logger = logging.getLogger(__name__)

FALLBACK_MESSAGE = "Something went wrong. Please try again."
SESSION_EXPIRED_MESSAGE = "Session expired. Please login again."
FORBIDDEN_MESSAGE = "You do not have permission to perform this action."
SERVER_ERROR_MESSAGE = "Server error. Our team has been notified."


def _server_message(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return FALLBACK_MESSAGE
    message = data.get("message") if isinstance(data, dict) else None
    if isinstance(message, list):
        message = ", ".join(str(m) for m in message)
    if not isinstance(message, str):
        return FALLBACK_MESSAGE
    return message or FALLBACK_MESSAGE


class AuthInterceptor:
    """Attaches the bearer token to every request outside /auth/."""

    def __init__(self, session: AuthSession):
        self.session = session

    async def __call__(self, request: httpx.Request) -> None:
        if self.session.token and not request.url.path.startswith(AUTH_PATH_PREFIX):
            request.headers["Authorization"] = f"Bearer {self.session.token}"


class ErrorInterceptor:
    """
    The single place where HTTP status codes are turned into notices.

    - 401: clear the session, ask for a new login
    - 403: permission notice
    - 404: silent
    - >=500: generic server notice
    - other 4xx: server-provided message

    Every non-2xx response is raised as ApiError afterwards.
    """

    def __init__(self, session: AuthSession, notices: NoticeBoard):
        self.session = session
        self.notices = notices

    async def __call__(self, response: httpx.Response) -> None:
        if response.is_success:
            return

        await response.aread()
        status = response.status_code
        message = _server_message(response)

        if status == 401:
            self.session.clear(expired=True)
            self.notices.error(SESSION_EXPIRED_MESSAGE)
        elif status == 403:
            self.notices.error(FORBIDDEN_MESSAGE)
        elif status == 404:
            logger.debug("suppressed 404 for %s", response.request.url.path)
        elif status >= 500:
            self.notices.error(SERVER_ERROR_MESSAGE)
        else:
            self.notices.error(message)

        raise ApiError(status, message)
