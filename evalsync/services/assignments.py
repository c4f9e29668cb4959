import logging
from typing import Optional

from pydantic import ValidationError

from evalsync.api import assignments as assignments_api
from evalsync.core.context import SyncContext
from evalsync.core.errors import EvalSyncError
from evalsync.schemas.assignment import Assignment, AssignmentCreate

logger = logging.getLogger(__name__)


class AssignmentService:
    """Loads assignments into the store. Every write here is a server snapshot."""

    def __init__(self, ctx: SyncContext):
        self.ctx = ctx

    async def load_assignments(self) -> Optional[tuple[Assignment, ...]]:
        try:
            assignments = await assignments_api.list_assignments(self.ctx.http)
        except (EvalSyncError, ValidationError) as exc:
            logger.error("Failed to fetch assignments: %s", exc)
            return None
        return self.ctx.store.replace_assignments(assignments).assignments

    async def refresh(self, assignment_id: str) -> Optional[Assignment]:
        """Re-fetch one assignment with its submissions; keeps the old snapshot on failure."""
        try:
            assignment = await assignments_api.get_assignment(self.ctx.http, assignment_id)
        except (EvalSyncError, ValidationError) as exc:
            logger.error("Failed to fetch assignment %s: %s", assignment_id, exc)
            return None
        self.ctx.store.replace_current_assignment(assignment)
        return assignment

    async def current_or_refresh(self, assignment_id: str) -> Optional[Assignment]:
        current = self.ctx.store.current_assignment
        if current is not None and current.id == assignment_id:
            return current
        return await self.refresh(assignment_id)

    async def create(self, form: AssignmentCreate) -> Assignment:
        logger.info("creating assignment %r", form.title)
        assignment = await assignments_api.create_assignment(self.ctx.http, form)
        self.ctx.store.prepend_assignment(assignment)
        return assignment

    async def delete(self, assignment_id: str) -> bool:
        try:
            await assignments_api.delete_assignment(self.ctx.http, assignment_id)
        except EvalSyncError as exc:
            logger.error("Delete failed for assignment %s: %s", assignment_id, exc)
            self.ctx.notices.error("Failed to delete assignment")
            return False

        self.ctx.notices.success("Assignment deleted successfully")
        current = self.ctx.store.current_assignment
        if current is not None and current.id == assignment_id:
            self.ctx.store.replace_current_assignment(None)
        await self.load_assignments()
        return True
