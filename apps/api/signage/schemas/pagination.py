"""Pagination schemas shared by list endpoints."""

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

ItemT = TypeVar("ItemT")

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


class PaginationMeta(BaseModel):
    page: int = Field(ge=1)
    limit: int = Field(ge=1)
    total: int = Field(ge=0)


class Page(BaseModel, Generic[ItemT]):
    data: list[ItemT]
    pagination: PaginationMeta
