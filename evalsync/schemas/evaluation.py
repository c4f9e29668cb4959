from enum import Enum
from typing import Optional

from pydantic import Field

from evalsync.schemas.base import CamelModel, Snapshot


class Recommendation(str, Enum):
    PASS = "PASS"
    FAIL = "FAIL"


class DetailedFeedback(Snapshot):
    topic_relevance: str = ""
    structure: str = ""
    content_quality: str = ""
    word_count: int = 0
    recommendation: Optional[Recommendation] = None


class Evaluation(Snapshot):
    id: str
    score: float
    percentage_score: float
    remarks: str = ""
    passed: bool
    detailed_feedback: Optional[DetailedFeedback] = None


class GradeUpdate(CamelModel):
    score: float = Field(ge=0)
    remarks: str = Field(min_length=1)

    class Config:
        str_strip_whitespace = True
