"""Shared schema configuration: camelCase JSON and the pagination envelope."""

from typing import Generic, Sequence, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from app.utils import PageResult

ItemT = TypeVar("ItemT")


class APIModel(BaseModel):
    """Base schema: camelCase on the wire, snake_case accepted on input."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class PageMeta(APIModel):
    page: int
    limit: int
    total: int
    pages: int


class Page(APIModel, Generic[ItemT]):
    items: list[ItemT]
    pagination: PageMeta


class MessageResponse(APIModel):
    message: str


def page_of(schema: type[ItemT], result: PageResult, items: Sequence | None = None) -> Page[ItemT]:
    """Wrap ``result`` in the pagination envelope, validating items as ``schema``."""

    source = result.items if items is None else items
    return Page[schema](
        items=[schema.model_validate(item) for item in source],
        pagination=PageMeta(
            page=result.page, limit=result.limit, total=result.total, pages=result.pages
        ),
    )


__all__ = ["APIModel", "MessageResponse", "Page", "PageMeta", "page_of"]
