"""Tests for PagedRoute response shaping."""

from fastapi import APIRouter, FastAPI
from fastapi.testclient import TestClient
from pydantic import BaseModel

from app.core.response import PAGINATION_HEADER, PageResult
from app.middleware.paging import PagedRoute


class Item(BaseModel):
    name: str


def make_app() -> FastAPI:
    router = APIRouter(prefix="/items", route_class=PagedRoute)

    @router.get("")
    async def list_items() -> PageResult[Item]:
        return PageResult(
            content=[Item(name="a"), Item(name="b")],
            page_number=0,
            page_size=2,
            total_elements=5,
        )

    @router.get("/sync")
    def list_items_sync() -> PageResult[Item]:
        return PageResult(content=[Item(name="c")], page_number=2, page_size=2, total_elements=5)

    @router.get("/plain")
    async def plain() -> dict:
        return {"content": [1, 2], "pageNumber": 0}

    app = FastAPI()
    app.include_router(router)
    return app


def test_page_body_is_bare_content_and_metadata_is_a_header():
    resp = TestClient(make_app()).get("/items")
    assert resp.status_code == 200
    assert resp.json() == [{"name": "a"}, {"name": "b"}]
    assert resp.headers[PAGINATION_HEADER] == (
        "page-number=0,page-size=2,total-elements=5,total-pages=3,first-page=true,last-page=false"
    )


def test_sync_endpoints_are_shaped_too():
    resp = TestClient(make_app()).get("/items/sync")
    assert resp.json() == [{"name": "c"}]
    assert resp.headers[PAGINATION_HEADER].endswith("first-page=false,last-page=true")


def test_other_responses_are_untouched():
    resp = TestClient(make_app()).get("/items/plain")
    assert resp.json() == {"content": [1, 2], "pageNumber": 0}
    assert PAGINATION_HEADER not in resp.headers


def test_openapi_documents_an_array_and_the_header():
    schema = TestClient(make_app()).get("/openapi.json").json()
    ok = schema["paths"]["/items"]["get"]["responses"]["200"]
    assert ok["content"]["application/json"]["schema"]["type"] == "array"
    assert PAGINATION_HEADER in ok["headers"]
