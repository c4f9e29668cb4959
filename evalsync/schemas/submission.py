from datetime import datetime
from enum import Enum
from typing import Optional

from evalsync.schemas.base import Snapshot
from evalsync.schemas.evaluation import Evaluation


class SubmissionStatus(str, Enum):
    PENDING = "pending"
    UNREADABLE = "unreadable"
    EVALUATION_ERROR = "evaluation_error"
    EVALUATED = "evaluated"


# Server-side failures the user can act on with a retry
RETRYABLE_STATUSES = frozenset({SubmissionStatus.UNREADABLE, SubmissionStatus.EVALUATION_ERROR})


class SubmissionAssignment(Snapshot):
    id: str
    title: str
    total_marks: float


class Submission(Snapshot):
    id: str
    student_name: str = ""
    student_roll_number: str = ""
    file_name: Optional[str] = None
    uploaded_at: Optional[datetime] = None

    # only sent by GET /submissions/{id}
    file_content: Optional[str] = None
    assignment: Optional[SubmissionAssignment] = None

    is_evaluated: bool = False
    submission_status: SubmissionStatus = SubmissionStatus.PENDING
    evaluation: Optional[Evaluation] = None

    @property
    def needs_retry(self) -> bool:
        return self.submission_status in RETRYABLE_STATUSES
