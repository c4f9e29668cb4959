import asyncio
import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import AsyncIterator, Optional, Protocol

import httpx

from evalsync.api.client import ApiClient
from evalsync.core.config import Settings
from evalsync.core.notices import NoticeBoard
from evalsync.core.session import AuthSession
from evalsync.services.store import EntityStore

logger = logging.getLogger(__name__)


class Cancellable(Protocol):
    def cancel(self, abort: bool = False) -> None: ...

    async def join(self) -> None: ...


@dataclass
class SyncContext:
    """Everything a service needs, passed by reference instead of imported globals."""

    settings: Settings
    session: AuthSession
    notices: NoticeBoard
    store: EntityStore
    http: ApiClient
    pollers: set = field(default_factory=set)

    def register_poller(self, poller: Cancellable) -> None:
        self.pollers.add(poller)

    def release_poller(self, poller: Cancellable) -> None:
        self.pollers.discard(poller)

    async def aclose(self) -> None:
        pollers = list(self.pollers)
        for poller in pollers:
            poller.cancel(abort=True)
        if pollers:
            await asyncio.gather(*(p.join() for p in pollers))
            logger.info("cancelled %d active poller(s)", len(pollers))
        self.pollers.clear()
        self.store.reset()
        await self.http.aclose()


# every engine gets a fresh context, and it will always close.
@asynccontextmanager
async def open_context(
    settings: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> AsyncIterator[SyncContext]:
    settings = settings or Settings()
    session = AuthSession()
    notices = NoticeBoard()
    ctx = SyncContext(
        settings=settings,
        session=session,
        notices=notices,
        store=EntityStore(),
        http=ApiClient(settings, session, notices, transport=transport),
    )
    try:
        yield ctx
    finally:
        await ctx.aclose()
