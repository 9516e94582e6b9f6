"""Tests for the paged query executor against an in-memory store."""

import asyncio

import pytest

from app.core.filtering import FilterCriteria, MatchMode
from app.core.pagination import Direction, PageRequest, SortOrder
from app.services.paging import execute_paged_query


class ListStore:
    """CollectionStore over a list of dicts."""

    def __init__(self, rows, overfetch=0):
        self.rows = rows
        self.overfetch = overfetch
        self.calls = []

    async def find_page(self, criteria, sort, offset, limit):
        self.calls.append((criteria, tuple(sort), offset, limit))
        rows = list(self.rows)
        for name, matcher in criteria.field_matchers.items():
            if matcher.match_mode is MatchMode.CONTAINS_CASE_INSENSITIVE:
                rows = [r for r in rows if matcher.value.lower() in r[name].lower()]
            else:
                rows = [r for r in rows if r[name] == matcher.value]
        for order in reversed(sort):
            rows.sort(key=lambda r: r[order.field], reverse=order.direction is Direction.DESC)
        return rows[offset : offset + limit + self.overfetch], len(rows)


class BrokenStore:
    async def find_page(self, criteria, sort, offset, limit):
        raise ConnectionError("store unavailable")


ROWS = [{"name": "Spec"}, {"name": "Certify"}, {"name": "Neubus"}]


def _run(page_request, store, criteria=None):
    return asyncio.run(execute_paged_query(page_request, criteria or FilterCriteria(), store))


def test_offset_and_limit_come_from_the_page_request():
    store = ListStore(ROWS)
    sort = (SortOrder(field="name", direction=Direction.DESC),)
    page = _run(PageRequest(page_number=1, page_size=2, sort=sort), store)
    _, passed_sort, offset, limit = store.calls[0]
    assert (offset, limit) == (2, 2)
    assert passed_sort == sort
    assert [r["name"] for r in page.content] == ["Certify"]
    assert (page.page_number, page.page_size, page.total_elements) == (1, 2, 3)


def test_never_more_than_page_size_rows():
    page = _run(PageRequest(page_number=0, page_size=1), ListStore(ROWS, overfetch=5))
    assert len(page.content) == 1
    assert page.total_elements == 3


def test_no_match_is_an_empty_page_not_an_error():
    page = _run(PageRequest(page_number=5, page_size=10), ListStore(ROWS))
    assert page.content == []
    assert page.total_elements == 3
    assert page.is_last


def test_store_failure_propagates():
    with pytest.raises(ConnectionError):
        _run(PageRequest(), BrokenStore())
