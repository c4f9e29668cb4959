import asyncio

import pytest

from evalsync.core.errors import NoSubmissionsError, OperationInProgressError
from evalsync.services.aggregation import retryable_submissions, submission_state_label


async def wait_for_calls(backend, op: str, count: int) -> None:
    while backend.calls[op] < count:
        await asyncio.sleep(0.005)


def seed_ten_with_two_unreadable(backend, assignment_id: str) -> list[dict]:
    scores = [95, 85, 75, 65, 55, 91, 62, 70, None, None]
    return [backend.add_submission(assignment_id, score=s) for s in scores]


@pytest.mark.asyncio
async def test_bulk_reevaluate_surfaces_partial_failure_through_refresh(engine, backend, assignment):
    seed_ten_with_two_unreadable(backend, assignment["id"])
    await engine.assignments.refresh(assignment["id"])
    backend.calls.clear()

    message = await engine.bulk.re_evaluate_all(assignment["id"])

    assert message == "Re-evaluated 8 of 10 submissions (2 failed)"
    assert message in engine.notices.messages()
    assert backend.calls["bulk"] == 1
    assert backend.calls["get_assignment"] == 1
    assert engine.bulk.is_bulk_busy(assignment["id"]) is False

    stats = engine.stats.stats
    assert stats.evaluated_count <= 8
    assert sum(b.count for b in stats.grade_distribution) == stats.evaluated_count

    unreadable = retryable_submissions(engine.store.current_assignment.submissions)
    assert len(unreadable) == 2
    assert all(not s.is_evaluated for s in unreadable)
    assert {submission_state_label(s) for s in unreadable} == {"Unreadable"}


@pytest.mark.asyncio
async def test_second_bulk_call_while_busy_is_rejected_without_request(engine, backend, assignment):
    backend.add_submission(assignment["id"], score=80)
    gate = backend.gate("bulk")

    first = asyncio.create_task(engine.bulk.re_evaluate_all(assignment["id"]))
    await wait_for_calls(backend, "bulk", 1)
    assert engine.bulk.is_bulk_busy(assignment["id"])

    with pytest.raises(OperationInProgressError):
        await engine.bulk.re_evaluate_all(assignment["id"])
    assert backend.calls["bulk"] == 1

    gate.set()
    assert await first is not None
    assert engine.bulk.is_bulk_busy(assignment["id"]) is False


@pytest.mark.asyncio
async def test_bulk_rejected_while_server_reports_processing(engine, backend, assignment):
    backend.add_submission(assignment["id"])
    backend.assignments[assignment["id"]]["isProcessing"] = True
    await engine.assignments.refresh(assignment["id"])

    with pytest.raises(OperationInProgressError):
        await engine.bulk.re_evaluate_all(assignment["id"])
    assert backend.calls["bulk"] == 0


@pytest.mark.asyncio
async def test_bulk_rejected_when_assignment_has_no_submissions(engine, backend, assignment):
    await engine.assignments.refresh(assignment["id"])

    with pytest.raises(NoSubmissionsError):
        await engine.bulk.re_evaluate_all(assignment["id"])
    assert backend.calls["bulk"] == 0


@pytest.mark.asyncio
async def test_bulk_failure_posts_generic_notice_and_clears_busy(engine, backend, assignment):
    backend.add_submission(assignment["id"], score=80)
    backend.fail_next("bulk", 500)

    assert await engine.bulk.re_evaluate_all(assignment["id"]) is None

    assert "Failed to re-evaluate" in engine.notices.messages()
    assert engine.bulk.is_bulk_busy(assignment["id"]) is False
    assert backend.calls["get_assignment"] == 0


@pytest.mark.asyncio
async def test_retry_resets_and_refreshes_whole_assignment(engine, backend, assignment):
    sub = backend.add_submission(assignment["id"], score=None, evaluated=True)
    await engine.assignments.refresh(assignment["id"])
    assert engine.store.current_assignment.submissions[0].needs_retry

    backend.grader[sub["id"]] = 77
    assert await engine.bulk.re_evaluate(assignment["id"], sub["id"]) is True

    refreshed = engine.store.current_assignment.submissions[0]
    assert refreshed.is_evaluated
    assert refreshed.evaluation.percentage_score == 77.0
    assert engine.stats.stats.bucket("C") == 1
    assert "Re-evaluation completed" in engine.notices.messages()


@pytest.mark.asyncio
async def test_single_reevaluate_guard_is_per_submission(engine, backend, assignment):
    one = backend.add_submission(assignment["id"], score=60, evaluated=True)
    two = backend.add_submission(assignment["id"], score=70, evaluated=True)
    gate = backend.gate("re_evaluate", one["id"])

    first = asyncio.create_task(engine.bulk.re_evaluate(assignment["id"], one["id"]))
    await wait_for_calls(backend, "re_evaluate", 1)

    with pytest.raises(OperationInProgressError):
        await engine.bulk.re_evaluate(assignment["id"], one["id"])

    # a different submission is not blocked
    assert await engine.bulk.re_evaluate(assignment["id"], two["id"]) is True
    assert engine.bulk.is_reevaluating(one["id"])

    gate.set()
    assert await first is True
    assert backend.calls["re_evaluate"] == 2
    assert engine.bulk.is_reevaluating(one["id"]) is False


@pytest.mark.asyncio
async def test_single_reevaluate_failure(engine, backend, assignment):
    sub = backend.add_submission(assignment["id"], score=60, evaluated=True)
    backend.fail_next("re_evaluate", 500)

    assert await engine.bulk.re_evaluate(assignment["id"], sub["id"]) is False
    assert engine.notices.messages()[-1] == "Failed to re-evaluate"
    assert engine.bulk.is_reevaluating(sub["id"]) is False
