"""Generic async repository with filtered, sorted, paged reads."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Generic, Protocol, TypeVar

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import BadRequestError
from app.core.filtering import FieldRegistry, FilterCriteria, MatchMode
from app.core.pagination import SORT_PARAM, Direction, SortOrder
from app.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)
T_co = TypeVar("T_co", covariant=True)


class CollectionStore(Protocol[T_co]):
    """Anything that can return one bounded, sorted, filtered slice plus its total."""

    async def find_page(
        self,
        criteria: FilterCriteria,
        sort: Sequence[SortOrder],
        offset: int,
        limit: int,
    ) -> tuple[Sequence[T_co], int]: ...


class BaseRepository(Generic[ModelT]):
    """Generic CRUD repository.

    Subclasses set ``model`` and ``fields`` (the entity's filter registry).
    """

    model: type[ModelT]
    fields: FieldRegistry

    def __init__(self, session: AsyncSession):
        self._session = session

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _base_query(self):
        return select(self.model)

    def _where(self, q, criteria: FilterCriteria):
        for name, matcher in criteria.field_matchers.items():
            col = getattr(self.model, name)
            if matcher.match_mode is MatchMode.CONTAINS_CASE_INSENSITIVE:
                q = q.where(col.icontains(matcher.value, autoescape=True))
            else:
                q = q.where(col == matcher.value)
        return q

    def _order_by(self, sort: Sequence[SortOrder]) -> list:
        """Caller's sort fields, then the primary key ascending as a tiebreaker."""
        clauses = []
        sorted_keys = set()
        for order in sort:
            spec = self.fields.get(order.field)
            if spec is None:
                raise BadRequestError(SORT_PARAM, f"Cannot sort by unknown field '{order.field}'")
            col = getattr(self.model, spec.name)
            sorted_keys.add(spec.name)
            clauses.append(col.desc() if order.direction is Direction.DESC else col.asc())
        for col in self.model.__mapper__.primary_key:
            if col.key not in sorted_keys:
                clauses.append(col.asc())
        return clauses

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    async def get_by_id(self, entity_id: Any) -> ModelT | None:
        return await self._session.get(self.model, entity_id)

    async def find_page(
        self,
        criteria: FilterCriteria,
        sort: Sequence[SortOrder],
        offset: int,
        limit: int,
    ) -> tuple[list[ModelT], int]:
        """Return (items, total_count) for one page of matching rows.

        Count and slice run on the same session, so they share its transaction.
        """
        q = self._where(self._base_query(), criteria)

        count_q = select(func.count()).select_from(q.subquery())
        total = (await self._session.execute(count_q)).scalar_one()

        q = q.order_by(*self._order_by(sort)).offset(offset).limit(limit)
        items = (await self._session.execute(q)).scalars().all()
        return list(items), total

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    async def create(self, **kwargs: Any) -> ModelT:
        instance = self.model(**kwargs)
        self._session.add(instance)
        await self._session.flush()  # populate id
        await self._session.refresh(instance)
        return instance

    async def update(self, instance: ModelT, **kwargs: Any) -> ModelT:
        kwargs.pop("id", None)
        for key, value in kwargs.items():
            setattr(instance, key, value)
        await self._session.flush()
        await self._session.refresh(instance)
        return instance

    async def delete(self, instance: ModelT) -> None:
        await self._session.delete(instance)
        await self._session.flush()
