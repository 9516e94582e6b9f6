"""Tests for the query-by-example filter builder."""

from datetime import date

import pytest

from app.core.exceptions import BadRequestError
from app.core.filtering import FieldRegistry, MatchMode, build_filter_criteria
from app.domain.person import Person
from app.repositories.person import PERSON_FIELDS


def test_registry_covers_person_columns():
    names = {spec.name for spec in PERSON_FIELDS}
    assert {"id", "name", "company", "email", "age", "active", "birth_date"} <= names
    assert PERSON_FIELDS.get("birthDate").name == "birth_date"
    assert PERSON_FIELDS.get("birth_date").param == "birthDate"
    assert "id" in PERSON_FIELDS.excluded


def test_default_and_overridden_match_modes():
    assert PERSON_FIELDS.get("name").match_mode is MatchMode.CONTAINS_CASE_INSENSITIVE
    assert PERSON_FIELDS.get("company").match_mode is MatchMode.CONTAINS_CASE_INSENSITIVE
    assert PERSON_FIELDS.get("age").match_mode is MatchMode.EXACT
    assert PERSON_FIELDS.get("email").match_mode is MatchMode.EXACT


def test_values_are_converted_to_declared_types():
    criteria = build_filter_criteria(
        {"name": "ally", "age": "42", "active": "false", "birthDate": "1990-05-17"},
        PERSON_FIELDS,
    )
    matchers = criteria.field_matchers
    assert matchers["name"].value == "ally"
    assert matchers["age"].value == 42
    assert matchers["active"].value is False
    assert matchers["birth_date"].value == date(1990, 5, 17)


def test_reserved_unknown_and_excluded_keys_contribute_nothing():
    criteria = build_filter_criteria(
        {"page": "1", "size": "2", "sort": "name", "id": "7", "nickname": "x"},
        PERSON_FIELDS,
    )
    assert not criteria
    assert criteria.field_matchers == {}
    assert "id" in criteria.excluded_fields


def test_caller_exclusions_add_to_registry_exclusions():
    criteria = build_filter_criteria({"name": "max", "age": "3"}, PERSON_FIELDS, excluded={"age"})
    assert list(criteria.field_matchers) == ["name"]


def test_unconvertible_value_names_the_field():
    with pytest.raises(BadRequestError) as exc_info:
        build_filter_criteria({"age": "notanumber"}, PERSON_FIELDS)
    assert exc_info.value.parameter == "age"
    assert "age" in exc_info.value.message


def test_bad_value_on_excluded_field_is_ignored():
    assert not build_filter_criteria({"id": "notanumber"}, PERSON_FIELDS)


def test_round_trip_keeps_parameter_names():
    params = {"name": "Sally", "company": "Spec", "age": "30", "birthDate": "2000-01-01"}
    criteria = build_filter_criteria(params, PERSON_FIELDS)
    assert set(criteria.to_params()) == set(params)
    assert criteria.to_params() == params


def test_same_input_in_any_order_builds_identical_criteria():
    a = build_filter_criteria({"name": "a", "age": "1", "active": "true"}, PERSON_FIELDS)
    b = build_filter_criteria({"active": "true", "age": "1", "name": "a"}, PERSON_FIELDS)
    assert a == b
    assert list(a.field_matchers) == list(b.field_matchers) == ["active", "age", "name"]


def test_unknown_match_mode_override_is_a_setup_error():
    with pytest.raises(ValueError):
        FieldRegistry.from_model(Person, match_modes={"nope": MatchMode.EXACT})


def test_round_trip_keeps_snake_case_keys():
    params = {"birth_date": "2000-01-01", "name": "x"}
    criteria = build_filter_criteria(params, PERSON_FIELDS)
    assert criteria.to_params() == params
    assert criteria.field_matchers["birth_date"].value == date(2000, 1, 1)
