import logging
from typing import Union

from evalsync.api import assignments as assignments_api
from evalsync.core.context import SyncContext
from evalsync.core.errors import EvalSyncError, OperationInProgressError
from evalsync.schemas.assignment import AssignmentStatus
from evalsync.services.assignments import AssignmentService

logger = logging.getLogger(__name__)


class StatusTransitionController:
    """
    Proposes status changes; the server decides whether they are legal.

    Any status may be requested from any other. The store only changes after
    the server acknowledges and the assignment is re-fetched.
    """

    def __init__(self, ctx: SyncContext, assignments: AssignmentService):
        self.ctx = ctx
        self.assignments = assignments
        self._changing: set[str] = set()

    def is_changing(self, assignment_id: str) -> bool:
        return assignment_id in self._changing

    async def request_transition(self, assignment_id: str, new_status: Union[AssignmentStatus, str]) -> bool:
        status = AssignmentStatus(new_status)
        if assignment_id in self._changing:
            raise OperationInProgressError(f"status change already pending for {assignment_id}")

        self._changing.add(assignment_id)
        try:
            try:
                await assignments_api.change_status(self.ctx.http, assignment_id, status)
            except EvalSyncError as exc:
                logger.error("Status change to %s failed for %s: %s", status.value, assignment_id, exc)
                self.ctx.notices.error("Failed to change status")
                return False

            logger.info("assignment %s status -> %s", assignment_id, status.value)
            await self.assignments.refresh(assignment_id)
            return True
        finally:
            self._changing.discard(assignment_id)
