"""Person repository and its filter field registry."""


from app.core.filtering import FieldRegistry, MatchMode
from app.domain.person import Person
from app.repositories.base import BaseRepository

# Built once at import. `id` is always set on stored rows, so it never filters.
PERSON_FIELDS = FieldRegistry.from_model(
    Person,
    excluded={"id"},
    match_modes={"email": MatchMode.EXACT},
)


class PersonRepository(BaseRepository[Person]):
    model = Person
    fields = PERSON_FIELDS
