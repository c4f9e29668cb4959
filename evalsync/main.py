import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator, Optional

import httpx

from evalsync.core.config import Settings
from evalsync.core.context import SyncContext, open_context
from evalsync.services.aggregation import StatsView
from evalsync.services.assignments import AssignmentService
from evalsync.services.auth import AuthService
from evalsync.services.bulk import BulkOperationCoordinator
from evalsync.services.exports import ExportService
from evalsync.services.grades import GradeEditor
from evalsync.services.polling import PollingSynchronizer
from evalsync.services.status import StatusTransitionController
from evalsync.services.uploads import UploadService


@dataclass
class Engine:
    context: SyncContext
    auth: AuthService
    assignments: AssignmentService
    polling: PollingSynchronizer
    bulk: BulkOperationCoordinator
    status: StatusTransitionController
    grades: GradeEditor
    uploads: UploadService
    exports: ExportService
    stats: StatsView

    @property
    def store(self):
        return self.context.store

    @property
    def notices(self):
        return self.context.notices


def build_engine(ctx: SyncContext) -> Engine:
    assignments = AssignmentService(ctx)
    return Engine(
        context=ctx,
        auth=AuthService(ctx),
        assignments=assignments,
        polling=PollingSynchronizer(ctx),
        bulk=BulkOperationCoordinator(ctx, assignments),
        status=StatusTransitionController(ctx, assignments),
        grades=GradeEditor(ctx, assignments),
        uploads=UploadService(ctx, assignments),
        exports=ExportService(ctx),
        stats=StatsView(ctx.store),
    )


@asynccontextmanager
async def open_engine(
    settings: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> AsyncIterator[Engine]:
    settings = settings or Settings()
    logging.basicConfig(level=settings.LOG_LEVEL)

    async with open_context(settings, transport=transport) as ctx:
        engine = build_engine(ctx)
        try:
            yield engine
        finally:
            engine.stats.close()
