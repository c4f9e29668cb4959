"""
Bulk and single re-evaluation.

Progress is tracked with one coarse busy marker per assignment (bulk) or per
submission (single), never per item inside a batch. A partially failed
batch shows up only after the refresh, as unreadable/evaluation_error
statuses on individual submissions.
"""
import logging
from typing import Optional

from evalsync.api import assignments as assignments_api
from evalsync.api import evaluations as evaluations_api
from evalsync.core.context import SyncContext
from evalsync.core.errors import EvalSyncError, NoSubmissionsError, OperationInProgressError
from evalsync.services.assignments import AssignmentService

logger = logging.getLogger(__name__)

REEVALUATE_FAILED = "Failed to re-evaluate"
REEVALUATE_DONE = "Re-evaluation completed"


class BulkOperationCoordinator:
    def __init__(self, ctx: SyncContext, assignments: AssignmentService):
        self.ctx = ctx
        self.assignments = assignments
        self._bulk_busy: set[str] = set()
        self._reevaluating: set[str] = set()

    def is_bulk_busy(self, assignment_id: str) -> bool:
        return assignment_id in self._bulk_busy

    def is_reevaluating(self, submission_id: str) -> bool:
        return submission_id in self._reevaluating

    def _check_bulk_allowed(self, assignment_id: str) -> None:
        if assignment_id in self._bulk_busy:
            raise OperationInProgressError(f"bulk re-evaluation already running for {assignment_id}")

        current = self.ctx.store.current_assignment
        if current is None or current.id != assignment_id:
            return
        if current.is_processing:
            raise OperationInProgressError(f"assignment {assignment_id} is still being evaluated")
        if not current.submissions:
            raise NoSubmissionsError(f"assignment {assignment_id} has no submissions")

    async def re_evaluate_all(self, assignment_id: str) -> Optional[str]:
        """Returns the server's summary message, or None if the request failed."""
        self._check_bulk_allowed(assignment_id)

        self._bulk_busy.add(assignment_id)
        try:
            try:
                result = await assignments_api.re_evaluate_all(self.ctx.http, assignment_id)
            except EvalSyncError as exc:
                logger.error("Bulk re-evaluation failed for %s: %s", assignment_id, exc)
                self.ctx.notices.error(REEVALUATE_FAILED)
                return None

            logger.info("bulk re-evaluation accepted for %s: %s", assignment_id, result.message)
            self.ctx.notices.info(result.message)
            await self.assignments.refresh(assignment_id)
            return result.message
        finally:
            self._bulk_busy.discard(assignment_id)

    async def re_evaluate(self, assignment_id: str, submission_id: str) -> bool:
        """Re-evaluate (or retry) one submission, then refresh the whole assignment."""
        if submission_id in self._reevaluating:
            raise OperationInProgressError(f"submission {submission_id} is already being re-evaluated")

        self._reevaluating.add(submission_id)
        try:
            try:
                await evaluations_api.re_evaluate(self.ctx.http, submission_id)
            except EvalSyncError as exc:
                logger.error("Re-evaluation failed for submission %s: %s", submission_id, exc)
                self.ctx.notices.error(REEVALUATE_FAILED)
                return False

            await self.assignments.refresh(assignment_id)
            self.ctx.notices.success(REEVALUATE_DONE)
            return True
        finally:
            self._reevaluating.discard(submission_id)
