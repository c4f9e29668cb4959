from evalsync.api.client import ApiClient, decode_json
from evalsync.schemas.evaluation import Evaluation, GradeUpdate


async def re_evaluate(http: ApiClient, submission_id: str) -> None:
    await http.post(f"/evaluations/re-evaluate/{submission_id}")


async def update_grade(http: ApiClient, evaluation_id: str, payload: GradeUpdate) -> Evaluation:
    r = await http.patch(f"/evaluations/{evaluation_id}", json=payload.model_dump(by_alias=True))
    return Evaluation.model_validate(decode_json(r))
