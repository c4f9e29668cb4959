import dataclasses
import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Iterable, Mapping, Optional

from evalsync.schemas.assignment import Assignment
from evalsync.schemas.submission import Submission

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoreSnapshot:
    version: int = 0
    assignments: tuple[Assignment, ...] = ()
    current_assignment: Optional[Assignment] = None
    submissions: Mapping[str, Submission] = field(default_factory=lambda: MappingProxyType({}))


Listener = Callable[[StoreSnapshot], None]


class EntityStore:
    """
    Latest server-consistent state seen by the client.

    Every write swaps in a new StoreSnapshot built from a server response;
    the models inside are frozen, so nothing is ever patched in place.
    When two refreshes race, whichever resolves last is the one kept.
    """

    def __init__(self) -> None:
        self._snapshot = StoreSnapshot()
        self._listeners: list[Listener] = []

    @property
    def snapshot(self) -> StoreSnapshot:
        return self._snapshot

    @property
    def assignments(self) -> tuple[Assignment, ...]:
        return self._snapshot.assignments

    @property
    def current_assignment(self) -> Optional[Assignment]:
        return self._snapshot.current_assignment

    def submission(self, submission_id: str) -> Optional[Submission]:
        return self._snapshot.submissions.get(submission_id)

    def replace(self, **changes) -> StoreSnapshot:
        snapshot = dataclasses.replace(self._snapshot, version=self._snapshot.version + 1, **changes)
        self._snapshot = snapshot
        logger.debug("store replaced -> v%d (%s)", snapshot.version, ", ".join(changes))
        for listener in list(self._listeners):
            listener(snapshot)
        return snapshot

    def replace_assignments(self, assignments: Iterable[Assignment]) -> StoreSnapshot:
        return self.replace(assignments=tuple(assignments))

    def prepend_assignment(self, assignment: Assignment) -> StoreSnapshot:
        return self.replace(assignments=(assignment, *self._snapshot.assignments))

    def replace_current_assignment(self, assignment: Optional[Assignment]) -> StoreSnapshot:
        return self.replace(current_assignment=assignment)

    def replace_submission(self, submission: Submission) -> StoreSnapshot:
        submissions = dict(self._snapshot.submissions)
        submissions[submission.id] = submission
        return self.replace(submissions=MappingProxyType(submissions))

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def clear(self) -> StoreSnapshot:
        return self.replace(assignments=(), current_assignment=None, submissions=MappingProxyType({}))

    def reset(self) -> None:
        self._listeners.clear()
        self._snapshot = StoreSnapshot()
