import math

import pytest
from pydantic import ValidationError

from evalsync.core.errors import GradeOutOfRangeError


@pytest.mark.asyncio
async def test_score_65_is_pass_and_bucket_d(engine, backend, assignment):
    backend.add_submission(assignment["id"], score=65, evaluated=True)
    await engine.assignments.refresh(assignment["id"])

    evaluation = engine.store.current_assignment.submissions[0].evaluation
    assert evaluation.percentage_score == 65.0
    assert evaluation.passed is True
    assert engine.stats.stats.bucket("D") == 1


@pytest.mark.asyncio
async def test_edit_grade_moves_submission_from_d_to_a_after_refetch(engine, backend, assignment):
    backend.add_submission(assignment["id"], score=65, evaluated=True)
    await engine.assignments.refresh(assignment["id"])
    evaluation_id = engine.store.current_assignment.submissions[0].evaluation.id
    backend.calls.clear()

    updated = await engine.grades.update_grade(assignment["id"], evaluation_id, 90, "Revised after review")

    assert updated.score == 90
    assert backend.calls["grade"] == 1
    assert backend.calls["get_assignment"] == 1

    refreshed = engine.store.current_assignment.submissions[0].evaluation
    assert refreshed.percentage_score == 90.0
    assert refreshed.remarks == "Revised after review"
    assert engine.stats.stats.bucket("D") == 0
    assert engine.stats.stats.bucket("A") == 1


@pytest.mark.asyncio
@pytest.mark.parametrize("score", [-1, 100.5, 250, math.nan])
async def test_out_of_range_score_never_reaches_server(engine, backend, assignment, score):
    backend.add_submission(assignment["id"], score=65, evaluated=True)
    await engine.assignments.refresh(assignment["id"])
    evaluation_id = engine.store.current_assignment.submissions[0].evaluation.id

    with pytest.raises(GradeOutOfRangeError):
        await engine.grades.update_grade(assignment["id"], evaluation_id, score, "Adjusted")
    assert backend.calls["grade"] == 0


@pytest.mark.asyncio
async def test_boundaries_are_accepted(engine, backend, assignment):
    backend.add_submission(assignment["id"], score=65, evaluated=True)
    evaluation_id = backend.serialize_assignment(assignment["id"])["submissions"][0]["evaluation"]["id"]

    # loads the assignment on demand to learn totalMarks
    assert (await engine.grades.update_grade(assignment["id"], evaluation_id, 0, "Off topic")).passed is False
    assert (await engine.grades.update_grade(assignment["id"], evaluation_id, 100, "Excellent")).percentage_score == 100.0


@pytest.mark.asyncio
async def test_failed_edit_leaves_store_untouched(engine, backend, assignment):
    backend.add_submission(assignment["id"], score=65, evaluated=True)
    await engine.assignments.refresh(assignment["id"])
    evaluation_id = engine.store.current_assignment.submissions[0].evaluation.id
    version = engine.store.snapshot.version
    backend.fail_next("grade", 500)

    assert await engine.grades.update_grade(assignment["id"], evaluation_id, 90, "Revised") is None

    assert engine.store.snapshot.version == version
    assert engine.notices.messages()[-1] == "Failed to update grade. Please try again."


@pytest.mark.asyncio
@pytest.mark.parametrize("remarks", ["", "   "])
async def test_blank_remarks_never_reach_server(engine, backend, assignment, remarks):
    backend.add_submission(assignment["id"], score=65, evaluated=True)
    await engine.assignments.refresh(assignment["id"])
    evaluation_id = engine.store.current_assignment.submissions[0].evaluation.id

    with pytest.raises(ValidationError):
        await engine.grades.update_grade(assignment["id"], evaluation_id, 70, remarks)
    assert backend.calls["grade"] == 0
