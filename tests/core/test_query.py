"""Tests for jsxinfo.query."""

from __future__ import annotations

import pytest

from jsxinfo.models import DYNAMIC, PropFact, SourceLocation
from jsxinfo.query import QueryError, parse_prop_filter

_LOC = SourceLocation(line=1, column=0)


def _fact(name: str, value: object) -> PropFact:
    return PropFact(
        component_name="Button",
        prop_name=name,
        prop_value=value,  # type: ignore[arg-type]
        source_text=name,
        start=_LOC,
        end=_LOC,
    )


def test_bare_key_matches_any_value() -> None:
    query = parse_prop_filter("id")
    assert query.want_key == "id"
    assert query.matches(_fact("id", "a"))
    assert query.matches(_fact("id", DYNAMIC))
    assert not query.matches(_fact("name", "a"))


def test_equals_matches_exact_string() -> None:
    query = parse_prop_filter("kind=primary")
    assert query.key == "kind"
    assert query.matches(_fact("kind", "primary"))
    assert not query.matches(_fact("kind", "secondary"))
    assert not query.matches(_fact("kind", DYNAMIC))
    assert not query.matches(_fact("variant", "primary"))


def test_not_equals_is_checked_before_equals() -> None:
    query = parse_prop_filter("kind!=primary")
    assert query.key == "kind"
    assert query.matches(_fact("kind", "secondary"))
    assert query.matches(_fact("kind", DYNAMIC))
    assert not query.matches(_fact("kind", "primary"))
    assert not query.matches(_fact("other", "secondary"))


def test_first_operator_splits_key_and_value() -> None:
    query = parse_prop_filter("href=a=b")
    assert query.key == "href"
    assert query.matches(_fact("href", "a=b"))


def test_absence_form_uses_negated_key() -> None:
    query = parse_prop_filter("!disabled")
    assert query.absent is True
    assert query.key == "disabled"
    assert query.want_key == "!disabled"
    assert query.matches(_fact("!disabled", "true"))
    assert not query.matches(_fact("disabled", "true"))


def test_whitespace_is_trimmed() -> None:
    assert parse_prop_filter("  id  ").key == "id"


@pytest.mark.parametrize("text", ["", "   ", "=primary", "!=primary", "!"])
def test_invalid_filters_are_rejected(text: str) -> None:
    with pytest.raises(QueryError):
        parse_prop_filter(text)
