"""
Pagination shapes shared by every paged endpoint.
"""
from typing import Generic, TypeVar

from pydantic import ConfigDict, Field

from .base import BaseSchema

ResultType = TypeVar("ResultType")

DEFAULT_PAGE_SIZE = 15


class QueryParameters(BaseSchema):
    """
    Offset pagination inputs for one request.

    No bounds validation happens here: out-of-range values degrade to an empty
    (or clamped) slice in the repository instead of failing the request.
    """

    model_config = ConfigDict(frozen=True)

    start_index: int = 0
    page_number: int = 0
    page_size: int = DEFAULT_PAGE_SIZE


class PagedResult(BaseSchema, Generic[ResultType]):
    """
    One page of projected items plus pagination metadata.

    `record_number` echoes the requested page size and `total_count` is the
    unpaginated row count at query time. The count and the page are read in
    two separate statements, so under concurrent writes `total_count` can
    disagree with what paging through `items` would yield.
    """

    items: list[ResultType] = Field(default_factory=list)
    page_number: int
    record_number: int
    total_count: int
