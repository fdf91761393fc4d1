"""Tests for jsxinfo.values."""

from __future__ import annotations

import pytest

from jsxinfo.models import DYNAMIC
from jsxinfo.syntax import (
    BooleanLiteral,
    ExpressionContainer,
    Identifier,
    NumericLiteral,
    OpaqueExpression,
    StringLiteral,
    UnsupportedSyntax,
)
from jsxinfo.values import classify_value, format_number


def test_valueless_attribute_is_true() -> None:
    assert classify_value(None) == "true"


def test_string_literal_is_its_content() -> None:
    assert classify_value(StringLiteral("foo")) == "foo"


def test_expression_container_is_unwrapped() -> None:
    assert classify_value(ExpressionContainer(StringLiteral("foo"))) == "foo"
    assert classify_value(ExpressionContainer(BooleanLiteral(False))) == "false"


def test_empty_expression_container_is_dynamic() -> None:
    assert classify_value(ExpressionContainer(None)) is DYNAMIC


def test_arrow_function_is_dynamic() -> None:
    assert classify_value(ExpressionContainer(OpaqueExpression("arrow_function"))) is DYNAMIC


def test_numeric_literals_render_as_text() -> None:
    assert classify_value(ExpressionContainer(NumericLiteral("42"))) == "42"
    assert classify_value(ExpressionContainer(NumericLiteral("1.5"))) == "1.5"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("1e3", "1000"), ("0x10", "16"), ("1_000", "1000"), ("10n", "10"), ("1.0", "1")],
)
def test_format_number_matches_javascript_rendering(raw: str, expected: str) -> None:
    assert format_number(raw) == expected


def test_dynamic_never_equals_a_string() -> None:
    assert DYNAMIC != "dynamic"
    assert DYNAMIC != "true"


def test_unknown_value_node_is_fatal() -> None:
    with pytest.raises(UnsupportedSyntax):
        classify_value(Identifier("x"))
