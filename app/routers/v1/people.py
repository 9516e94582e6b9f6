"""People router — paged listing plus single-record CRUD.

Pattern:
  1. Declare a router with prefix, tags and route_class=PagedRoute
  2. Inject DB session, PageRequest and FilterCriteria via Depends
  3. Call PersonService and return a PageResult / response envelope

List responses are a bare JSON array; paging metadata travels in the
X-Meta-Pagination header (see app.middleware.paging).
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import NotFoundError
from app.core.filtering import FilterCriteria, filter_dependency
from app.core.pagination import PageRequest, page_request_from_query
from app.core.response import DataResponse, PageResult
from app.db.base import get_db
from app.middleware.paging import PagedRoute
from app.repositories.person import PERSON_FIELDS
from app.schemas.common import ErrorResponse
from app.schemas.person import PersonCreate, PersonOut, PersonUpdate
from app.services.person import PersonService

router = APIRouter(
    prefix="/people",
    tags=["People"],
    route_class=PagedRoute,
    responses={404: {"model": ErrorResponse}},
)

person_filters = filter_dependency(PERSON_FIELDS)


def _svc(session: AsyncSession) -> PersonService:
    return PersonService(session)


# ------------------------------------------------------------------
# Endpoints
# ------------------------------------------------------------------

@router.get("", responses={400: {"model": ErrorResponse}})
async def list_people(
    page_request: PageRequest = Depends(page_request_from_query),
    criteria: FilterCriteria = Depends(person_filters),
    session: AsyncSession = Depends(get_db),
) -> PageResult[PersonOut]:
    """List people. `?page=0&size=30&sort=name,desc` plus any field as a filter,
    e.g. `?name=ally&active=true`. Text fields match case-insensitive substrings."""
    page = await _svc(session).list_people(page_request, criteria)
    if settings.empty_page_not_found and not page.content:
        raise NotFoundError("People")
    return page.map(PersonOut.model_validate)


@router.post("", response_model=DataResponse[PersonOut], status_code=status.HTTP_201_CREATED)
async def create_person(
    body: PersonCreate,
    session: AsyncSession = Depends(get_db),
):
    person = await _svc(session).create_person(body)
    return {"data": PersonOut.model_validate(person)}


@router.get("/{person_id}", response_model=DataResponse[PersonOut])
async def get_person(
    person_id: int,
    session: AsyncSession = Depends(get_db),
):
    person = await _svc(session).get_person(person_id)
    return {"data": PersonOut.model_validate(person)}


@router.put("/{person_id}", response_model=DataResponse[PersonOut])
async def update_person(
    person_id: int,
    body: PersonUpdate,
    session: AsyncSession = Depends(get_db),
):
    person = await _svc(session).update_person(person_id, body)
    return {"data": PersonOut.model_validate(person)}


@router.delete("/{person_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_person(
    person_id: int,
    session: AsyncSession = Depends(get_db),
):
    await _svc(session).delete_person(person_id)
