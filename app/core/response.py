"""Response envelope helpers and the paged result type."""


import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

T = TypeVar("T")
U = TypeVar("U")

PAGINATION_HEADER = "X-Meta-Pagination"


class DataResponse(BaseModel, Generic[T]):
    """Single-item response envelope: `{ data: {...} }`"""

    data: T

    model_config = {
        "populate_by_name": True,
        "alias_generator": to_camel,
    }


@dataclass(frozen=True)
class PageResult(Generic[T]):
    """One page of a filtered, sorted collection plus the collection's extent.

    Endpoints declaring this as their return type have the body replaced by
    ``content`` and the counts moved to the ``X-Meta-Pagination`` header
    (see :class:`app.middleware.paging.PagedRoute`).
    """

    content: Sequence[T]
    page_number: int
    page_size: int
    total_elements: int

    @property
    def total_pages(self) -> int:
        if self.total_elements == 0:
            return 0
        return math.ceil(self.total_elements / self.page_size)

    @property
    def is_first(self) -> bool:
        return self.page_number == 0

    @property
    def is_last(self) -> bool:
        return self.total_elements == 0 or self.page_number >= self.total_pages - 1

    def map(self, fn: Callable[[T], U]) -> "PageResult[U]":
        return PageResult(
            content=[fn(item) for item in self.content],
            page_number=self.page_number,
            page_size=self.page_size,
            total_elements=self.total_elements,
        )

    def pagination_header(self) -> str:
        return (
            f"page-number={self.page_number},"
            f"page-size={self.page_size},"
            f"total-elements={self.total_elements},"
            f"total-pages={self.total_pages},"
            f"first-page={str(self.is_first).lower()},"
            f"last-page={str(self.is_last).lower()}"
        )
