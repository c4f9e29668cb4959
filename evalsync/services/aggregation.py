"""
Derived statistics over the store's current snapshot.

Everything here is a pure function of its input; nothing is cached except
by StatsView, which recomputes on every store change.
"""
from typing import Callable, Iterable, Optional, Sequence

from evalsync.core.config import FAILING_GRADE, GRADE_THRESHOLDS
from evalsync.schemas.assignment import Assignment
from evalsync.schemas.stats import AssignmentStats, DashboardTotals, GradeBucket
from evalsync.schemas.submission import Submission, SubmissionStatus
from evalsync.services.store import EntityStore, StoreSnapshot

GRADE_ORDER = tuple(g for g, _ in GRADE_THRESHOLDS) + (FAILING_GRADE,)


def grade_for(percentage_score: float) -> str:
    for grade, threshold in GRADE_THRESHOLDS:
        if percentage_score >= threshold:
            return grade
    return FAILING_GRADE


def grade_distribution(submissions: Iterable[Submission]) -> list[GradeBucket]:
    counts = dict.fromkeys(GRADE_ORDER, 0)
    for s in submissions:
        if s.is_evaluated and s.evaluation is not None:
            counts[grade_for(s.evaluation.percentage_score)] += 1
    return [GradeBucket(grade=g, count=counts[g]) for g in GRADE_ORDER]


def compute_assignment_stats(submissions: Sequence[Submission]) -> AssignmentStats:
    evaluated_count = sum(1 for s in submissions if s.is_evaluated)
    passed_count = sum(1 for s in submissions if s.evaluation is not None and s.evaluation.passed)
    pass_rate = round(passed_count / evaluated_count * 100) if evaluated_count > 0 else 0

    return AssignmentStats(
        total_submissions=len(submissions),
        evaluated_count=evaluated_count,
        passed_count=passed_count,
        pass_rate=pass_rate,
        grade_distribution=grade_distribution(submissions),
    )


def dashboard_totals(assignments: Sequence[Assignment]) -> DashboardTotals:
    return DashboardTotals(
        total_assignments=len(assignments),
        total_submissions=sum(len(a.submissions) for a in assignments),
        evaluated=sum(1 for a in assignments for s in a.submissions if s.is_evaluated),
    )


def status_badge(assignment: Assignment) -> str:
    if assignment.is_processing:
        return "Processing..."
    evaluated = sum(1 for s in assignment.submissions if s.is_evaluated)
    return f"{assignment.status.value.upper()} {evaluated}/{len(assignment.submissions)} Evaluated"


def submission_state_label(submission: Submission) -> str:
    if submission.is_evaluated:
        return "Evaluated"
    if submission.submission_status == SubmissionStatus.UNREADABLE:
        return "Unreadable"
    if submission.submission_status == SubmissionStatus.EVALUATION_ERROR:
        return "Error"
    return "Pending"


def retryable_submissions(submissions: Iterable[Submission]) -> list[Submission]:
    return [s for s in submissions if s.needs_retry]


class StatsView:
    """Keeps AssignmentStats for the current assignment in step with the store."""

    def __init__(self, store: EntityStore):
        self.stats: Optional[AssignmentStats] = None
        self.totals = dashboard_totals(store.assignments)
        self._on_change(store.snapshot)
        self._unsubscribe: Optional[Callable[[], None]] = store.subscribe(self._on_change)

    def _on_change(self, snapshot: StoreSnapshot) -> None:
        current = snapshot.current_assignment
        self.stats = compute_assignment_stats(current.submissions) if current is not None else None
        self.totals = dashboard_totals(snapshot.assignments)

    def close(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
