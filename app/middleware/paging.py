"""Paged-response shaping — one policy point for every list endpoint.

Any endpoint whose declared return type is ``PageResult[T]`` answers with:

  * body   — the bare JSON array of ``content``
  * header — ``X-Meta-Pagination: page-number=0,page-size=30,...``

Install by creating routers with ``APIRouter(route_class=PagedRoute)``.
Endpoints returning anything else pass through unchanged.
"""

import functools
import inspect
import typing
from collections.abc import Callable
from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from fastapi.routing import APIRoute

from app.core.response import PAGINATION_HEADER, PageResult

_HEADER_DOC = {
    PAGINATION_HEADER: {
        "description": (
            "page-number=<int>,page-size=<int>,total-elements=<int>,"
            "total-pages=<int>,first-page=<bool>,last-page=<bool>"
        ),
        "schema": {"type": "string"},
    }
}


def shape_page_response(page: PageResult) -> JSONResponse:
    return JSONResponse(
        content=jsonable_encoder(page.content),
        headers={PAGINATION_HEADER: page.pagination_header()},
    )


def _shape(result: Any) -> Any:
    return shape_page_response(result) if isinstance(result, PageResult) else result


def _declares_page(annotation: Any) -> bool:
    return annotation is PageResult or typing.get_origin(annotation) is PageResult


def _shaping_endpoint(endpoint: Callable[..., Any], signature: inspect.Signature) -> Callable[..., Any]:
    if inspect.iscoroutinefunction(endpoint):

        @functools.wraps(endpoint)
        async def shaped(*args: Any, **kwargs: Any) -> Any:
            return _shape(await endpoint(*args, **kwargs))

    else:

        @functools.wraps(endpoint)
        def shaped(*args: Any, **kwargs: Any) -> Any:
            return _shape(endpoint(*args, **kwargs))

    # Resolved annotations, so dependency analysis does not depend on the
    # wrapper's module globals.
    shaped.__signature__ = signature
    shaped.__page_shaped__ = True
    return shaped


class PagedRoute(APIRoute):
    """APIRoute that rewrites ``PageResult`` return values into content + header."""

    def __init__(self, path: str, endpoint: Callable[..., Any], **kwargs: Any) -> None:
        if not getattr(endpoint, "__page_shaped__", False):
            signature = inspect.signature(endpoint, eval_str=True)
            annotation = signature.return_annotation
            if _declares_page(annotation):
                args = typing.get_args(annotation)
                kwargs["response_model"] = list[args[0]] if args else None
                responses = dict(kwargs.get("responses") or {})
                ok = dict(responses.get(200, {}))
                ok["headers"] = {**ok.get("headers", {}), **_HEADER_DOC}
                responses[200] = ok
                kwargs["responses"] = responses
                endpoint = _shaping_endpoint(endpoint, signature)
        super().__init__(path, endpoint, **kwargs)
