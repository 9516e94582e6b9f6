"""Paged query execution over any CollectionStore.

Rule: no HTTP concerns here. An empty page is a normal result; whether it
should surface as 404 is decided by the router.
"""

import logging
from typing import TypeVar

from app.core.filtering import FilterCriteria
from app.core.pagination import PageRequest
from app.core.response import PageResult
from app.repositories.base import CollectionStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def execute_paged_query(
    page_request: PageRequest,
    criteria: FilterCriteria,
    store: CollectionStore[T],
) -> PageResult[T]:
    items, total = await store.find_page(
        criteria,
        page_request.sort,
        offset=page_request.offset,
        limit=page_request.page_size,
    )
    content = list(items[: page_request.page_size])
    logger.debug(
        "Paged query page=%d size=%d filters=%d -> %d of %d",
        page_request.page_number,
        page_request.page_size,
        len(criteria.field_matchers),
        len(content),
        total,
    )
    return PageResult(
        content=content,
        page_number=page_request.page_number,
        page_size=page_request.page_size,
        total_elements=total,
    )
