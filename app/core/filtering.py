"""Query-by-example filtering driven by a static per-entity field registry.

Every entity that supports filtering declares a :class:`FieldRegistry` once,
at import time. Request parameters whose names match a registered field are
converted to the field's declared type and turned into one matcher each:

    GET /people?name=ally&active=true
      → name  CONTAINS_CASE_INSENSITIVE 'ally'
      → active EXACT True

Parameters that are not registered fields (or are reserved / excluded) are
ignored; a field that is not supplied imposes no constraint.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from fastapi import Request
from pydantic import TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel
from sqlalchemy import inspect as sa_inspect

from app.core.exceptions import BadRequestError
from app.core.pagination import RESERVED_PARAMS

logger = logging.getLogger(__name__)


class MatchMode(str, Enum):
    EXACT = "exact"
    CONTAINS_CASE_INSENSITIVE = "contains_ci"


def default_match_mode(python_type: type) -> MatchMode:
    """Text fields match by case-insensitive substring; everything else exactly."""
    return MatchMode.CONTAINS_CASE_INSENSITIVE if python_type is str else MatchMode.EXACT


@dataclass(frozen=True)
class FieldSpec:
    name: str  # ORM attribute
    param: str  # wire / query parameter name
    python_type: type
    match_mode: MatchMode

    def convert(self, raw: str) -> Any:
        if self.python_type is str:
            return raw
        try:
            return _adapter(self.python_type).validate_python(raw)
        except ValidationError:
            raise BadRequestError(
                self.param,
                f"Filter '{self.param}' expects a value of type {self.python_type.__name__}, got '{raw}'",
            ) from None


_ADAPTERS: dict[type, TypeAdapter] = {}


def _adapter(python_type: type) -> TypeAdapter:
    if python_type not in _ADAPTERS:
        _ADAPTERS[python_type] = TypeAdapter(python_type)
    return _ADAPTERS[python_type]


class FieldRegistry:
    """Name → type → match mode table for one entity."""

    def __init__(self, fields: Iterable[FieldSpec], excluded: Iterable[str] = ()):
        self._fields = {f.name: f for f in fields}
        self._by_param = {f.param: f for f in self._fields.values()}
        self.excluded = frozenset(excluded)

    @classmethod
    def from_model(
        cls,
        model: type,
        *,
        excluded: Iterable[str] = (),
        match_modes: Mapping[str, MatchMode] | None = None,
    ) -> FieldRegistry:
        """Derive the registry from a mapped SQLAlchemy model's columns."""
        overrides = dict(match_modes or {})
        specs = []
        for attr in sa_inspect(model).column_attrs:
            python_type = attr.columns[0].type.python_type
            specs.append(
                FieldSpec(
                    name=attr.key,
                    param=to_camel(attr.key),
                    python_type=python_type,
                    match_mode=overrides.pop(attr.key, default_match_mode(python_type)),
                )
            )
        if overrides:
            raise ValueError(f"Match mode overrides for unknown fields: {sorted(overrides)}")
        return cls(specs, excluded=excluded)

    def get(self, name: str) -> FieldSpec | None:
        """Look a field up by wire name first, then by attribute name."""
        return self._by_param.get(name) or self._fields.get(name)

    def __contains__(self, name: str) -> bool:
        return self.get(name) is not None

    def __iter__(self):
        return iter(self._fields.values())


@dataclass(frozen=True)
class FieldMatcher:
    field: FieldSpec
    value: Any
    raw: str
    match_mode: MatchMode
    param: str  # the request key this matcher came from


@dataclass(frozen=True)
class FilterCriteria:
    field_matchers: dict[str, FieldMatcher] = field(default_factory=dict)
    excluded_fields: frozenset[str] = frozenset()

    def __bool__(self) -> bool:
        return bool(self.field_matchers)

    def to_params(self) -> dict[str, str]:
        return {m.param: m.raw for m in self.field_matchers.values()}


def build_filter_criteria(
    raw_params: Mapping[str, str],
    registry: FieldRegistry,
    excluded: Iterable[str] = (),
) -> FilterCriteria:
    """Turn request parameters into typed matchers for the registered fields.

    Raises BadRequestError naming the field when a value cannot be converted.
    """
    skip = registry.excluded | frozenset(excluded)
    matchers: dict[str, FieldMatcher] = {}
    for key in sorted(raw_params):
        if key in RESERVED_PARAMS:
            continue
        spec = registry.get(key)
        if spec is None or spec.name in skip or spec.param in skip:
            continue
        raw = raw_params[key]
        matchers[spec.name] = FieldMatcher(
            field=spec,
            value=spec.convert(raw),
            raw=raw,
            match_mode=spec.match_mode,
            param=key,
        )
    ordered = {name: matchers[name] for name in sorted(matchers)}
    if ordered:
        logger.debug(
            "Filter criteria: %s",
            ", ".join(f"{n} {m.match_mode.value} {m.raw!r}" for n, m in ordered.items()),
        )
    return FilterCriteria(field_matchers=ordered, excluded_fields=skip)


def filter_dependency(registry: FieldRegistry):
    """Return a FastAPI dependency that builds FilterCriteria for ``registry``."""

    def dependency(request: Request) -> FilterCriteria:
        return build_filter_criteria(dict(request.query_params), registry)

    return dependency
