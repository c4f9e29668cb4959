from evalsync.api.client import ApiClient, decode_json
from evalsync.schemas.assignment import (
    Assignment,
    AssignmentCreate,
    AssignmentStatus,
    BulkReEvaluateResult,
    StatusUpdate,
)


async def list_assignments(http: ApiClient) -> list[Assignment]:
    r = await http.get("/assignments")
    return [Assignment.model_validate(a) for a in decode_json(r)]


async def get_assignment(http: ApiClient, assignment_id: str) -> Assignment:
    r = await http.get(f"/assignments/{assignment_id}")
    return Assignment.model_validate(decode_json(r))


async def create_assignment(http: ApiClient, payload: AssignmentCreate) -> Assignment:
    r = await http.post("/assignments", json=payload.to_payload())
    return Assignment.model_validate(decode_json(r))


async def delete_assignment(http: ApiClient, assignment_id: str) -> None:
    await http.delete(f"/assignments/{assignment_id}")


async def change_status(http: ApiClient, assignment_id: str, status: AssignmentStatus) -> None:
    body = StatusUpdate(status=status).model_dump(mode="json", by_alias=True)
    await http.patch(f"/assignments/{assignment_id}/status", json=body)


async def re_evaluate_all(http: ApiClient, assignment_id: str) -> BulkReEvaluateResult:
    r = await http.post(f"/assignments/{assignment_id}/re-evaluate-all")
    return BulkReEvaluateResult.model_validate(decode_json(r))
