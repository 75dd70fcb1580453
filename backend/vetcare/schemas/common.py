"""Module: common."""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


# Base for wire models: camelCase on the wire, snake_case accepted on input too.
class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def blank_to_none(value):
    if isinstance(value, str):
        cleaned = value.strip()
        return cleaned or None
    return value


# Required text fields: trimmed, and a whitespace-only value is rejected.
def strip_required(value):
    if value is None:
        return value
    cleaned = value.strip()
    if not cleaned:
        raise ValueError("must not be blank")
    return cleaned


class PageMeta(CamelModel):
    total_count: int
    current_page: int
    total_pages: int
    items_per_page: int


class Paginated(CamelModel, Generic[T]):
    data: list[T]
    meta: PageMeta


class Message(CamelModel):
    message: str
