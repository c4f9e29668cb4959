from evalsync.api.client import ApiClient
from evalsync.core.config import EXPORT_FORMATS


async def download_marks_sheet(http: ApiClient, assignment_id: str, fmt: str = "csv") -> bytes:
    path_template, _ = EXPORT_FORMATS[fmt]
    r = await http.get(path_template.format(assignment_id=assignment_id), headers={"Accept": "*/*"})
    return r.content
