import logging
from typing import Optional

from evalsync.api import evaluations as evaluations_api
from evalsync.core.context import SyncContext
from evalsync.core.errors import EvalSyncError, GradeOutOfRangeError, OperationInProgressError
from evalsync.schemas.evaluation import Evaluation, GradeUpdate
from evalsync.services.assignments import AssignmentService

logger = logging.getLogger(__name__)


class GradeEditor:
    """
    Manual score/remarks override.

    percentageScore and passed are never derived here: after every edit the
    whole assignment is re-fetched and the server's values are shown.
    """

    def __init__(self, ctx: SyncContext, assignments: AssignmentService):
        self.ctx = ctx
        self.assignments = assignments
        self._saving: set[str] = set()

    def is_saving(self, evaluation_id: str) -> bool:
        return evaluation_id in self._saving

    async def update_grade(
        self,
        assignment_id: str,
        evaluation_id: str,
        score: float,
        remarks: str,
    ) -> Optional[Evaluation]:
        assignment = await self.assignments.current_or_refresh(assignment_id)
        if assignment is None:
            logger.error("cannot edit grade %s: assignment %s unavailable", evaluation_id, assignment_id)
            return None

        if not 0 <= score <= assignment.total_marks:
            raise GradeOutOfRangeError(score, assignment.total_marks)
        payload = GradeUpdate(score=score, remarks=remarks)

        if evaluation_id in self._saving:
            raise OperationInProgressError(f"grade {evaluation_id} is already being saved")

        self._saving.add(evaluation_id)
        try:
            try:
                evaluation = await evaluations_api.update_grade(self.ctx.http, evaluation_id, payload)
            except EvalSyncError as exc:
                logger.error("Failed to update grade %s: %s", evaluation_id, exc)
                self.ctx.notices.error("Failed to update grade. Please try again.")
                return None

            logger.info("grade %s updated to %s/%s", evaluation_id, score, assignment.total_marks)
            await self.assignments.refresh(assignment_id)
            return evaluation
        finally:
            self._saving.discard(evaluation_id)
