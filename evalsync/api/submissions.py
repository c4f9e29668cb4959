from pathlib import Path
from typing import Sequence

from evalsync.api.client import ApiClient, decode_json
from evalsync.core.config import PDF_CONTENT_TYPE
from evalsync.schemas.submission import Submission


async def get_submission(http: ApiClient, submission_id: str) -> Submission:
    r = await http.get(f"/submissions/{submission_id}")
    return Submission.model_validate(decode_json(r))


async def upload_submissions(http: ApiClient, assignment_id: str, files: Sequence[Path]) -> None:
    multipart = [("files", (f.name, f.read_bytes(), PDF_CONTENT_TYPE)) for f in files]
    await http.post(f"/submissions/upload/{assignment_id}", files=multipart)
