from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Wire models: camelCase JSON, snake_case attributes."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class Snapshot(CamelModel):
    """Server snapshots are replaced wholesale, never edited in place."""

    class Config:
        frozen = True
