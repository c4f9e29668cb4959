from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field

from evalsync.schemas.base import CamelModel, Snapshot
from evalsync.schemas.submission import Submission


class AssignmentStatus(str, Enum):
    DRAFT = "draft"
    ACTIVE = "active"
    CLOSED = "closed"
    ARCHIVED = "archived"


class MarkingMode(str, Enum):
    STRICT = "strict"
    LOOSE = "loose"


class Assignment(Snapshot):
    id: str
    title: str
    instructions: str = ""
    min_words: int = 0
    marking_mode: MarkingMode = MarkingMode.STRICT
    total_marks: float
    pass_percentage: float = Field(ge=0, le=1)
    status: AssignmentStatus = AssignmentStatus.DRAFT
    is_processing: bool = False
    deadline: Optional[datetime] = None
    created_at: Optional[datetime] = None
    submissions: tuple[Submission, ...] = ()

    @property
    def pass_percentage_display(self) -> str:
        return f"{round(self.pass_percentage * 100)}%"


class AssignmentCreate(CamelModel):
    """Create form. pass_percentage is entered as a percent (0-100)."""

    title: str = Field(min_length=1, max_length=255)
    instructions: str = Field(min_length=1)
    min_words: int = Field(default=500, ge=100)
    marking_mode: MarkingMode = MarkingMode.STRICT
    total_marks: float = Field(default=100, ge=10)
    pass_percentage: float = Field(default=60, ge=0, le=100)
    deadline: Optional[datetime] = None

    class Config:
        str_strip_whitespace = True

    def to_payload(self) -> dict:
        payload = self.model_dump(
            mode="json",
            by_alias=True,
            exclude={"pass_percentage", "deadline"},
        )
        payload["passPercentage"] = self.pass_percentage / 100
        if self.deadline is not None:
            payload["deadline"] = self.deadline.isoformat()
        return payload


class StatusUpdate(CamelModel):
    status: AssignmentStatus


class BulkReEvaluateResult(CamelModel):
    message: str = ""
