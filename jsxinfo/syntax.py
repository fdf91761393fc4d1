"""Closed syntax variants consumed by the fact extractor.

The parser adapter translates its own node types into these classes once, at
the integration boundary. Everything downstream dispatches on the variant
classes, never on node type strings.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple, Union

from .models import SourceLocation


class UnsupportedSyntax(RuntimeError):
    """Raised for a node shape the resolver or classifier does not handle."""


@dataclass(frozen=True)
class Span:
    start: SourceLocation
    end: SourceLocation


# Element and attribute names


@dataclass(frozen=True)
class Identifier:
    name: str


@dataclass(frozen=True)
class MemberName:
    object: "ElementName"
    property: "ElementName"


@dataclass(frozen=True)
class NamespacedName:
    namespace: str
    name: str


ElementName = Union[Identifier, MemberName, NamespacedName]
AttributeName = Union[Identifier, NamespacedName]


# Attribute values


@dataclass(frozen=True)
class StringLiteral:
    value: str


@dataclass(frozen=True)
class NumericLiteral:
    raw: str


@dataclass(frozen=True)
class BooleanLiteral:
    value: bool


@dataclass(frozen=True)
class ExpressionContainer:
    """A `{...}` attribute value; `expression` is None when the braces are empty."""

    expression: Optional["ValueNode"]


@dataclass(frozen=True)
class OpaqueExpression:
    """Any expression whose value is not a literal (calls, identifiers, templates...)."""

    kind: str


ValueNode = Union[StringLiteral, NumericLiteral, BooleanLiteral, ExpressionContainer, OpaqueExpression]


# Attributes and elements


@dataclass(frozen=True)
class Attribute:
    name: AttributeName
    value: Optional[ValueNode]
    span: Span
    source_text: str


@dataclass(frozen=True)
class SpreadAttribute:
    span: Span
    source_text: str


AttributeNode = Union[Attribute, SpreadAttribute]


@dataclass(frozen=True)
class Element:
    """A named JSX element with its attributes and nested elements."""

    name: ElementName
    attributes: Tuple[AttributeNode, ...]
    span: Span
    source_text: str
    children: Tuple["Element", ...] = ()


@dataclass(frozen=True)
class SyntaxTree:
    """Top-level elements of one source file, in source order."""

    elements: Tuple[Element, ...] = field(default_factory=tuple)

    def walk(self) -> Iterator[Element]:
        """Yield every element in pre-order, parents before children."""
        stack: List[Element] = list(reversed(self.elements))
        while stack:
            element = stack.pop()
            yield element
            stack.extend(reversed(element.children))


__all__ = [
    "Attribute",
    "AttributeName",
    "AttributeNode",
    "BooleanLiteral",
    "Element",
    "ElementName",
    "ExpressionContainer",
    "Identifier",
    "MemberName",
    "NamespacedName",
    "NumericLiteral",
    "OpaqueExpression",
    "Span",
    "SpreadAttribute",
    "StringLiteral",
    "SyntaxTree",
    "UnsupportedSyntax",
    "ValueNode",
]
