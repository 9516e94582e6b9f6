"""Pagination helpers for list endpoints.

`?page=0&size=30&sort=name,desc,age` is parsed into an immutable
:class:`PageRequest`. Pages are 0-based. Malformed values are rejected with
:class:`~app.core.exceptions.BadRequestError`, never replaced by defaults.
"""

import re
from collections.abc import Mapping
from enum import Enum

from fastapi import Request
from pydantic import BaseModel, Field

from app.core.config import settings
from app.core.exceptions import BadRequestError

PAGE_PARAM = "page"
SIZE_PARAM = "size"
SORT_PARAM = "sort"

RESERVED_PARAMS = frozenset({PAGE_PARAM, SIZE_PARAM, SORT_PARAM})

# Largest row offset a SQL OFFSET clause accepts (signed 64-bit).
MAX_OFFSET = 2**63 - 1

_INTEGER = re.compile(r"-?[0-9]+")


class Direction(str, Enum):
    ASC = "asc"
    DESC = "desc"


class SortOrder(BaseModel):
    field: str = Field(min_length=1)
    direction: Direction = Direction.ASC

    model_config = {"frozen": True}


class PageRequest(BaseModel):
    """Page number (0-based), page size and ordered sort fields."""

    page_number: int = Field(default=0, ge=0)
    page_size: int = Field(default=30, gt=0)
    sort: tuple[SortOrder, ...] = ()

    model_config = {"frozen": True}

    @property
    def offset(self) -> int:
        return self.page_number * self.page_size


def _parse_int(name: str, raw: str) -> int:
    value = raw.strip()
    if not _INTEGER.fullmatch(value):
        raise BadRequestError(
            name, f"Query parameter '{name}' must be an integer, got '{raw}'"
        )
    return int(value)


def parse_sort(raw: str) -> tuple[SortOrder, ...]:
    """Parse ``field[,asc|desc]`` groups, e.g. ``name,desc,age`` → name desc, age asc."""
    orders: list[SortOrder] = []
    pending: str | None = None
    for token in (t.strip() for t in raw.split(",")):
        if not token:
            continue
        lowered = token.lower()
        if lowered in (Direction.ASC.value, Direction.DESC.value):
            if pending is None:
                raise BadRequestError(
                    SORT_PARAM, f"Sort direction '{token}' has no field before it"
                )
            orders.append(SortOrder(field=pending, direction=Direction(lowered)))
            pending = None
            continue
        if pending is not None:
            orders.append(SortOrder(field=pending))
        pending = token
    if pending is not None:
        orders.append(SortOrder(field=pending))
    return tuple(orders)


def parse_page_request(
    raw_params: Mapping[str, str],
    *,
    default_size: int = 30,
    max_size: int | None = None,
) -> PageRequest:
    """Build a validated PageRequest from raw query parameters."""
    page = 0
    if raw_params.get(PAGE_PARAM) is not None:
        page = _parse_int(PAGE_PARAM, raw_params[PAGE_PARAM])
        if page < 0:
            raise BadRequestError(PAGE_PARAM, f"Query parameter 'page' must be >= 0, got {page}")

    size = default_size
    if raw_params.get(SIZE_PARAM) is not None:
        size = _parse_int(SIZE_PARAM, raw_params[SIZE_PARAM])
        if size <= 0:
            raise BadRequestError(SIZE_PARAM, f"Query parameter 'size' must be > 0, got {size}")
        if max_size is not None and size > max_size:
            raise BadRequestError(
                SIZE_PARAM, f"Query parameter 'size' must be <= {max_size}, got {size}"
            )
        if size > MAX_OFFSET:
            raise BadRequestError(SIZE_PARAM, f"Query parameter 'size' is too large, got {size}")

    if page * size > MAX_OFFSET:
        raise BadRequestError(
            PAGE_PARAM, f"Query parameter 'page' is too large for page size {size}, got {page}"
        )

    sort = parse_sort(raw_params.get(SORT_PARAM) or "")
    return PageRequest(page_number=page, page_size=size, sort=sort)


def page_request_from_query(request: Request) -> PageRequest:
    """FastAPI dependency: parse `page`, `size` and `sort` from the query string."""
    query = request.query_params
    raw: dict[str, str] = {}
    for name in (PAGE_PARAM, SIZE_PARAM):
        if name in query:
            raw[name] = query[name]
    sorts = query.getlist(SORT_PARAM)
    if sorts:
        raw[SORT_PARAM] = ",".join(sorts)
    return parse_page_request(
        raw,
        default_size=settings.default_page_size,
        max_size=settings.max_page_size,
    )
