import logging
import mimetypes
from pathlib import Path
from typing import Iterable, Optional, Union

from evalsync.api import submissions as submissions_api
from evalsync.core.config import PDF_CONTENT_TYPE
from evalsync.core.context import SyncContext
from evalsync.core.errors import EvalSyncError, NoFilesSelectedError
from evalsync.schemas.assignment import Assignment
from evalsync.services.assignments import AssignmentService

logger = logging.getLogger(__name__)


def is_pdf(path: Path) -> bool:
    content_type, _ = mimetypes.guess_type(path.name)
    return content_type == PDF_CONTENT_TYPE


class UploadService:
    def __init__(self, ctx: SyncContext, assignments: AssignmentService):
        self.ctx = ctx
        self.assignments = assignments

    def select_files(self, paths: Iterable[Union[str, Path]]) -> list[Path]:
        selected = [Path(p) for p in paths]
        pdfs = [p for p in selected if is_pdf(p)]
        if len(pdfs) != len(selected):
            self.ctx.notices.error("Only PDF files are allowed")
        return pdfs

    async def upload(self, assignment_id: str, paths: Iterable[Union[str, Path]]) -> Optional[Assignment]:
        """
        Upload a batch of student PDFs. Evaluation starts server-side; the
        refreshed assignment normally comes back with is_processing set.
        """
        files = self.select_files(paths)
        if not files:
            raise NoFilesSelectedError()

        logger.info("uploading %d file(s) to assignment %s", len(files), assignment_id)
        try:
            await submissions_api.upload_submissions(self.ctx.http, assignment_id, files)
        except EvalSyncError as exc:
            # the interceptor already posted the notice
            logger.error("Upload failed for assignment %s: %s", assignment_id, exc)
            raise

        self.ctx.notices.success("Files uploaded successfully! Processing evaluations...")
        return await self.assignments.refresh(assignment_id)
