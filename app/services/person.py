"""Person service — business logic between the people router and its repository.

Rule: No SQLAlchemy queries / no FastAPI here.
"""


from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundError
from app.core.filtering import FilterCriteria
from app.core.pagination import PageRequest
from app.core.response import PageResult
from app.domain.person import Person
from app.repositories.person import PersonRepository
from app.schemas.person import PersonCreate, PersonUpdate
from app.services.paging import execute_paged_query

class PersonService:
    def __init__(self, session: AsyncSession):
        self._repo = PersonRepository(session)

    async def list_people(
        self, page_request: PageRequest, criteria: FilterCriteria
    ) -> PageResult[Person]:
        return await execute_paged_query(page_request, criteria, self._repo)

    async def get_person(self, person_id: int) -> Person:
        person = await self._repo.get_by_id(person_id)
        if not person:
            raise NotFoundError("Person", person_id)
        return person

    async def create_person(self, data: PersonCreate) -> Person:
        return await self._repo.create(**data.model_dump(exclude_none=True))

    async def update_person(self, person_id: int, data: PersonUpdate) -> Person:
        person = await self.get_person(person_id)  # raises 404 if missing
        return await self._repo.update(person, **data.model_dump(exclude_none=True, exclude_unset=True))

    async def delete_person(self, person_id: int) -> None:
        person = await self.get_person(person_id)
        await self._repo.delete(person)
