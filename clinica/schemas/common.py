"""Shared schema building blocks."""

from datetime import time
from typing import Annotated

from pydantic import BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel

# Wall-clock time rendered as HH:MM on the wire
ClockTime = Annotated[
    time,
    PlainSerializer(lambda t: t.strftime("%H:%M"), return_type=str, when_used="json"),
]


class CamelModel(BaseModel):
    """Base schema exposing camelCase fields over snake_case attributes."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def blank_to_none(value: object) -> object:
    """Treat empty or whitespace-only strings as missing."""
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


def reject_null(value: object) -> object:
    """Partial updates may omit a required column but never null it."""
    if value is None:
        raise ValueError("may not be null")
    return value
