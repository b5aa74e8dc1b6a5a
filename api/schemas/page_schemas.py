"""
Pagination request/response envelopes shared by every index endpoint.
"""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class OrmModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class PageRequest(BaseModel):
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=100, ge=1, le=1000)


class Pagination(BaseModel):
    current: int
    limit: int
    records: int
    pages: int


class Page(BaseModel, Generic[T]):
    data: list[T]
    pagination: Pagination
