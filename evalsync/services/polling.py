import asyncio
import logging
from enum import Enum
from typing import Optional

from pydantic import ValidationError

from evalsync.api import submissions as submissions_api
from evalsync.core.context import SyncContext
from evalsync.core.errors import EvalSyncError
from evalsync.schemas.submission import Submission

logger = logging.getLogger(__name__)


class PollState(str, Enum):
    IDLE = "idle"
    ACTIVE = "active"
    SETTLED = "settled"
    CANCELLED = "cancelled"


class SubmissionPoller:
    """
    Watches one submission until it is evaluated.

    Idle -> Active on an unevaluated first fetch, Active -> Settled on the
    first evaluated snapshot. Once out of Idle it never starts again.

    Every fetch is tagged with the generation current when it was issued;
    cancel() bumps the generation, so a response that lands afterwards is
    dropped instead of reaching the store.
    """

    def __init__(self, ctx: SyncContext, submission_id: str, interval: Optional[float] = None):
        self.ctx = ctx
        self.submission_id = submission_id
        self.interval = ctx.settings.POLL_INTERVAL_SECONDS if interval is None else interval
        self.state = PollState.IDLE
        self.fetches = 0

        self._generation = 0
        self._in_flight = False
        self._task: Optional[asyncio.Task] = None

    async def __aenter__(self) -> "SubmissionPoller":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.cancel()

    @property
    def submission(self) -> Optional[Submission]:
        return self.ctx.store.submission(self.submission_id)

    async def _fetch(self) -> Submission:
        self.fetches += 1
        self._in_flight = True
        try:
            return await submissions_api.get_submission(self.ctx.http, self.submission_id)
        finally:
            self._in_flight = False

    async def start(self) -> Optional[Submission]:
        if self.state != PollState.IDLE or self._in_flight:
            return self.submission

        generation = self._generation
        self.ctx.register_poller(self)
        try:
            submission = await self._fetch()
        except (EvalSyncError, ValidationError) as exc:
            logger.error("Failed to fetch submission %s: %s", self.submission_id, exc)
            self.ctx.release_poller(self)
            return None

        if generation != self._generation:
            logger.debug("dropping initial fetch for %s after cancel", self.submission_id)
            return None

        self.ctx.store.replace_submission(submission)

        if submission.is_evaluated:
            self._settle()
        else:
            self.state = PollState.ACTIVE
            self._task = asyncio.create_task(
                self._run(generation), name=f"poll-submission-{self.submission_id}"
            )
        return submission

    async def _run(self, generation: int) -> None:
        while generation == self._generation:
            await asyncio.sleep(self.interval)
            if generation != self._generation:
                return

            try:
                submission = await self._fetch()
            except (EvalSyncError, ValidationError) as exc:
                # next tick proceeds as scheduled
                logger.warning("Failed to poll submission status for %s: %s", self.submission_id, exc)
                continue

            if generation != self._generation:
                logger.info("discarding stale poll response for submission %s", self.submission_id)
                return

            self.ctx.store.replace_submission(submission)
            if submission.is_evaluated:
                logger.info("evaluation completed for submission %s", self.submission_id)
                self._settle()
                return

    def _settle(self) -> None:
        self.state = PollState.SETTLED
        self.ctx.release_poller(self)

    def cancel(self, abort: bool = False) -> None:
        """
        Stop polling. Safe to call any number of times.

        A request already on the wire is left to finish (its result is
        discarded) unless abort is set, which also cancels the request.
        """
        self._generation += 1
        if self.state != PollState.SETTLED:
            self.state = PollState.CANCELLED
        self.ctx.release_poller(self)

        task = self._task
        if task is not None and not task.done() and (abort or not self._in_flight):
            task.cancel()

    async def join(self) -> None:
        if self._task is not None:
            await asyncio.wait({self._task})


class PollingSynchronizer:
    def __init__(self, ctx: SyncContext):
        self.ctx = ctx

    def watch(self, submission_id: str, interval: Optional[float] = None) -> SubmissionPoller:
        return SubmissionPoller(self.ctx, submission_id, interval=interval)
