"""Tests for the identifier validator."""

from __future__ import annotations

import pytest

from cssdts.validators import IdentifierValidator, ValidationOutcome, is_bare_identifier


@pytest.fixture
def validator() -> IdentifierValidator:
    return IdentifierValidator()


@pytest.mark.parametrize("name", ["foo", "$foo", "_x1", "fooBar", "héllo", "a$b"])
def test_bare_identifiers_need_no_quotes(validator: IdentifierValidator, name: str) -> None:
    outcome = validator.validate(name)

    assert outcome == ValidationOutcome(is_valid=True, needs_quotes=False, message=None)
    assert is_bare_identifier(name)


@pytest.mark.parametrize(
    "name", ["1st-item", "foo-bar", "class", "default", "a b", "50%", "a²", "²", "x½"]
)
def test_irregular_names_fall_back_to_quotes(validator: IdentifierValidator, name: str) -> None:
    outcome = validator.validate(name)

    assert outcome.is_valid is True
    assert outcome.needs_quotes is True
    assert outcome.message == f"{name} is not a valid identifier. Adding quotes."
    assert not is_bare_identifier(name)


@pytest.mark.parametrize("name", ["", "it's", "back\\slash", "line\nbreak"])
def test_unrepresentable_names_are_skipped(validator: IdentifierValidator, name: str) -> None:
    outcome = validator.validate(name)

    assert outcome.is_valid is False
    assert outcome.message == f"{name} is not a valid identifier and was skipped."


def test_classification_ignores_call_history(validator: IdentifierValidator) -> None:
    first = validator.validate("foo-bar")
    validator.validate("")
    validator.validate("foo")

    assert validator.validate("foo-bar") == first


def test_reserved_members_are_skipped() -> None:
    validator = IdentifierValidator(reserved_members={"name"})

    outcome = validator.validate("name")

    assert outcome == ValidationOutcome.skipped("name is not a valid identifier and was skipped.")
    assert validator.validate("title") == ValidationOutcome.bare()


def test_default_frame_reserves_nothing(validator: IdentifierValidator) -> None:
    assert validator.reserved_members == frozenset()
    assert validator.validate("name") == ValidationOutcome.bare()
