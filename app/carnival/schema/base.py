from datetime import datetime, timezone

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for every request and response body.

    Python attributes stay snake_case (matching the ORM columns); the JSON
    side is camelCase. Requests accept either spelling.
    """

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True
        extra = "ignore"

    def to_response(self) -> dict:
        return self.model_dump(by_alias=True)


def as_naive_utc(value):
    # DateTime columns hold naive UTC
    if isinstance(value, datetime) and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def serialize(schema, rows):
    """Validate ORM rows (or a single row) through ``schema`` and dump camelCase dicts."""
    if isinstance(rows, list):
        return [schema.model_validate(row).to_response() for row in rows]
    return schema.model_validate(rows).to_response()
