import logging
from pathlib import Path
from typing import Optional, Union

from evalsync.api import export as export_api
from evalsync.core.config import EXPORT_FORMATS
from evalsync.core.context import SyncContext
from evalsync.core.errors import EvalSyncError, NoSubmissionsError

logger = logging.getLogger(__name__)


class ExportService:
    def __init__(self, ctx: SyncContext):
        self.ctx = ctx

    async def export_marks(
        self,
        assignment_id: str,
        dest_dir: Union[str, Path] = ".",
        fmt: str = "csv",
    ) -> Optional[Path]:
        if fmt not in EXPORT_FORMATS:
            raise ValueError(f"unsupported export format: {fmt}")

        current = self.ctx.store.current_assignment
        if current is not None and current.id == assignment_id:
            if not any(s.is_evaluated for s in current.submissions):
                raise NoSubmissionsError(f"assignment {assignment_id} has no evaluated submissions")

        try:
            content = await export_api.download_marks_sheet(self.ctx.http, assignment_id, fmt)
        except EvalSyncError as exc:
            logger.error("Export failed for assignment %s: %s", assignment_id, exc)
            return None

        _, file_template = EXPORT_FORMATS[fmt]
        target = Path(dest_dir) / file_template.format(assignment_id=assignment_id)
        target.write_bytes(content)
        logger.info("exported marks sheet to %s (%d bytes)", target, len(content))
        return target
