"""Classify attribute value syntax into a prop value."""

from __future__ import annotations

from typing import Optional

from .models import DYNAMIC, PropValue
from .syntax import (
    BooleanLiteral,
    ExpressionContainer,
    NumericLiteral,
    OpaqueExpression,
    StringLiteral,
    UnsupportedSyntax,
)


def classify_value(node: Optional[object]) -> PropValue:
    """Return the static value of an attribute, or ``DYNAMIC``.

    A valueless attribute (``<input disabled />``) is passed as ``None`` and
    classifies to ``"true"``.
    """
    if node is None:
        return "true"
    return _classify(node)


def _classify(node: Optional[object]) -> PropValue:
    if node is None:
        return DYNAMIC
    if isinstance(node, StringLiteral):
        return node.value
    if isinstance(node, ExpressionContainer):
        return _classify(node.expression)
    if isinstance(node, NumericLiteral):
        return format_number(node.raw)
    if isinstance(node, BooleanLiteral):
        return "true" if node.value else "false"
    if isinstance(node, OpaqueExpression):
        return DYNAMIC
    raise UnsupportedSyntax(f"unexpected value node: {type(node).__name__}")


def format_number(raw: str) -> str:
    """Render a numeric literal the way JavaScript's ``String(n)`` would."""
    text = raw.replace("_", "")
    if text.endswith("n"):
        return text[:-1]
    lowered = text.lower()
    if lowered.startswith(("0x", "0o", "0b")):
        return str(int(lowered, 0))
    if len(text) > 1 and text.startswith("0") and text.isdigit():
        # legacy octal literal
        return str(int(text, 8)) if set(text) <= set("01234567") else str(int(text))
    try:
        number = float(text)
    except ValueError:
        return raw
    if number.is_integer() and abs(number) < 1e21:
        return str(int(number))
    return repr(number)


__all__ = ["classify_value", "format_number"]
