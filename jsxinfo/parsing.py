"""Tree-sitter powered JSX parser.

This module is the only place that looks at tree-sitter node type strings. It
translates a parsed file into the closed variants of :mod:`jsxinfo.syntax`.
"""

from __future__ import annotations

import html
import re
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

import tree_sitter_javascript
import tree_sitter_typescript
from tree_sitter import Language, Node, Parser

from .logging import get_logger
from .models import SourceLocation
from .syntax import (
    Attribute,
    AttributeName,
    AttributeNode,
    BooleanLiteral,
    Element,
    ElementName,
    ExpressionContainer,
    Identifier,
    MemberName,
    NamespacedName,
    NumericLiteral,
    OpaqueExpression,
    Span,
    SpreadAttribute,
    StringLiteral,
    SyntaxTree,
    UnsupportedSyntax,
    ValueNode,
)

_GRAMMARS: Dict[str, Callable[[], object]] = {
    "javascript": tree_sitter_javascript.language,
    "typescript": tree_sitter_typescript.language_typescript,
    "tsx": tree_sitter_typescript.language_tsx,
}

_TYPESCRIPT_SUFFIXES = {".ts", ".mts", ".cts"}

# grammar -> (alternative grammar, plugin that selects it)
_ALTERNATIVES: Dict[str, Tuple[str, str]] = {
    "javascript": ("tsx", "typescript"),
    "typescript": ("tsx", "jsx"),
}

_ELEMENT_TYPES = {"jsx_element", "jsx_self_closing_element"}
_TAG_TYPES = {"jsx_opening_element", "jsx_self_closing_element"}
_IDENTIFIER_TYPES = {"identifier", "jsx_identifier", "property_identifier", "this"}
_MEMBER_TYPES = {"member_expression", "nested_identifier"}
_ATTRIBUTE_TYPES = {"jsx_attribute", "jsx_expression"}
_JS_ESCAPE = re.compile(r"\\(u\{[0-9a-fA-F]+\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|\r\n|.)", re.DOTALL)
_SIMPLE_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "b": "\b", "f": "\f", "v": "\v", "0": "\0"}

logger = get_logger("parsing")


class ParseFailure(Exception):
    """Raised when a file cannot be parsed; recoverable at the file boundary."""

    def __init__(
        self,
        message: str,
        *,
        position: int,
        location: SourceLocation,
        missing_plugins: Sequence[str] = (),
    ) -> None:
        super().__init__(message)
        self.message = message
        self.position = position
        self.location = location
        self.missing_plugins = list(missing_plugins)

    def __str__(self) -> str:
        return f"{self.message} ({self.location.line}:{self.location.column})"


class JsxParser:
    """Parses JavaScript, JSX, TypeScript and TSX sources into syntax trees."""

    def __init__(self, plugins: Iterable[str] = ()) -> None:
        self._plugins = frozenset(plugins)
        self._parsers: Dict[str, Parser] = {}

    def grammar_for(self, filename: str) -> str:
        suffix = Path(filename).suffix.lower()
        if suffix == ".tsx":
            return "tsx"
        if suffix in _TYPESCRIPT_SUFFIXES:
            return "tsx" if "jsx" in self._plugins else "typescript"
        return "tsx" if "typescript" in self._plugins else "javascript"

    def parse(self, filename: str, source: str) -> SyntaxTree:
        """Return the syntax tree for ``source`` or raise :class:`ParseFailure`."""
        grammar = self.grammar_for(filename)
        source_bytes = source.encode("utf-8")
        tree = self._get_parser(grammar).parse(source_bytes)
        root = tree.root_node
        if root.has_error:
            raise self._failure(grammar, root, source_bytes)
        return _TreeBuilder(source_bytes).build(root)

    def _get_parser(self, grammar: str) -> Parser:
        parser = self._parsers.get(grammar)
        if parser is None:
            parser = Parser(Language(_GRAMMARS[grammar]()))
            self._parsers[grammar] = parser
        return parser

    def _failure(self, grammar: str, root: Node, source_bytes: bytes) -> ParseFailure:
        node = _first_error(root)
        if node.is_missing:
            message = f"Missing {node.type}"
        else:
            message = f"Unexpected token {_leaf_text(node, source_bytes)!r}"
        prefix = source_bytes[: node.start_byte].decode("utf-8", errors="replace")
        position = len(prefix)
        location = SourceLocation(
            line=prefix.count("\n") + 1,
            column=position - (prefix.rfind("\n") + 1),
        )

        missing: List[str] = []
        alternative = _ALTERNATIVES.get(grammar)
        if alternative is not None:
            alt_grammar, plugin = alternative
            if not self._get_parser(alt_grammar).parse(source_bytes).root_node.has_error:
                logger.debug("Source parses with the %s grammar; suggesting %s", alt_grammar, plugin)
                missing.append(plugin)

        return ParseFailure(message, position=position, location=location, missing_plugins=missing)


def _first_error(root: Node) -> Node:
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            return node
        if node.has_error:
            stack.extend(reversed(node.children))
    return root


def _leaf_text(node: Node, source_bytes: bytes) -> str:
    while node.children:
        node = node.children[0]
    text = source_bytes[node.start_byte : node.end_byte].decode("utf-8", errors="replace")
    return text.splitlines()[0][:40] if text else ""


class _TreeBuilder:
    def __init__(self, source_bytes: bytes) -> None:
        self._source = source_bytes

    def build(self, root: Node) -> SyntaxTree:
        top: List[Element] = []
        # (node, sink, children collected for a pending element)
        stack: List[Tuple[Node, List[Element], Optional[List[Element]]]] = [(root, top, None)]
        while stack:
            node, sink, pending = stack.pop()
            if pending is not None:
                sink.append(self._element(node, tuple(pending)))
                continue
            child_sink = sink
            if self._is_element(node):
                child_sink = []
                stack.append((node, sink, child_sink))
            for child in reversed(node.children):
                stack.append((child, child_sink, None))
        return SyntaxTree(elements=tuple(top))

    def _is_element(self, node: Node) -> bool:
        if node.type not in _ELEMENT_TYPES:
            return False
        # fragments (<>...</>) have an opening tag without a name
        return self._name_node(self._tag(node)) is not None

    @staticmethod
    def _tag(node: Node) -> Node:
        if node.type == "jsx_self_closing_element":
            return node
        tag = node.child_by_field_name("open_tag")
        if tag is not None:
            return tag
        for child in node.children:
            if child.type in _TAG_TYPES:
                return child
        return node

    @staticmethod
    def _name_node(tag: Node) -> Optional[Node]:
        name = tag.child_by_field_name("name")
        if name is not None:
            return name
        for child in tag.named_children:
            if child.type not in _ATTRIBUTE_TYPES and child.type != "comment":
                return child
        return None

    def _element(self, node: Node, children: Tuple[Element, ...]) -> Element:
        tag = self._tag(node)
        name_node = self._name_node(tag)
        if name_node is None:
            raise UnsupportedSyntax(f"element without a name: {node.type}")
        attributes = tuple(
            self._attribute(child) for child in tag.named_children if child.type in _ATTRIBUTE_TYPES
        )
        return Element(
            name=self._element_name(name_node),
            attributes=attributes,
            span=self._span(node),
            source_text=self._text(node),
            children=children,
        )

    def _element_name(self, node: Node) -> ElementName:
        if node.type in _IDENTIFIER_TYPES:
            return Identifier(self._text(node))
        if node.type in _MEMBER_TYPES:
            named = node.named_children
            obj = node.child_by_field_name("object")
            prop = node.child_by_field_name("property")
            if obj is None or prop is None:
                obj, prop = named[0], named[-1]
            return MemberName(object=self._element_name(obj), property=self._element_name(prop))
        if node.type == "jsx_namespace_name":
            return self._namespaced_name(node)
        raise UnsupportedSyntax(f"unexpected element name node: {node.type}")

    def _namespaced_name(self, node: Node) -> NamespacedName:
        named = node.named_children
        return NamespacedName(namespace=self._text(named[0]), name=self._text(named[-1]))

    def _attribute(self, node: Node) -> AttributeNode:
        span = self._span(node)
        text = self._text(node)
        if node.type == "jsx_expression":
            inner = self._inner(node)
            if inner is not None and inner.type == "spread_element":
                return SpreadAttribute(span=span, source_text=text)
            # only spreads are valid in attribute position, e.g. not <div {foo} />
            raise ParseFailure(
                "Unexpected token '{'",
                position=len(self._source[: node.start_byte].decode("utf-8", errors="replace")),
                location=span.start,
            )

        named = [child for child in node.named_children if child.type != "comment"]
        value = self._value(named[1]) if len(named) > 1 else None
        return Attribute(name=self._attribute_name(named[0]), value=value, span=span, source_text=text)

    def _attribute_name(self, node: Node) -> AttributeName:
        if node.type in _IDENTIFIER_TYPES:
            return Identifier(self._text(node))
        if node.type == "jsx_namespace_name":
            return self._namespaced_name(node)
        raise UnsupportedSyntax(f"unexpected attribute name node: {node.type}")

    def _value(self, node: Node) -> ValueNode:
        if node.type == "string":
            # JSX attribute strings keep backslashes but decode HTML entities
            return StringLiteral(html.unescape(self._text(node)[1:-1]))
        if node.type == "jsx_expression":
            inner = self._inner(node)
            return ExpressionContainer(None if inner is None else self._expression(inner))
        return OpaqueExpression(node.type)

    def _expression(self, node: Node) -> ValueNode:
        if node.type == "string":
            return StringLiteral(_unescape_js(self._text(node)[1:-1]))
        if node.type == "number":
            return NumericLiteral(self._text(node))
        if node.type in ("true", "false"):
            return BooleanLiteral(node.type == "true")
        if node.type == "parenthesized_expression":
            inner = self._inner(node)
            if inner is not None:
                return self._expression(inner)
        return OpaqueExpression(node.type)

    @staticmethod
    def _inner(node: Node) -> Optional[Node]:
        for child in node.named_children:
            if child.type != "comment":
                return child
        return None

    def _text(self, node: Node) -> str:
        return self._source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")

    def _span(self, node: Node) -> Span:
        return Span(
            start=self._location(node.start_point, node.start_byte),
            end=self._location(node.end_point, node.end_byte),
        )

    def _location(self, point: Tuple[int, int], byte_offset: int) -> SourceLocation:
        row, byte_column = point[0], point[1]
        line_prefix = self._source[byte_offset - byte_column : byte_offset]
        return SourceLocation(line=row + 1, column=len(line_prefix.decode("utf-8", errors="replace")))


def _unescape_js(text: str) -> str:
    def replace(match: "re.Match[str]") -> str:
        escape = match.group(1)
        if escape.startswith("u{"):
            return chr(int(escape[2:-1], 16))
        if escape.startswith("u") and len(escape) == 5:
            return chr(int(escape[1:], 16))
        if escape.startswith("x") and len(escape) == 3:
            return chr(int(escape[1:], 16))
        if escape in ("\n", "\r\n"):
            return ""
        return _SIMPLE_ESCAPES.get(escape, escape)

    return _JS_ESCAPE.sub(replace, text)


__all__ = ["JsxParser", "ParseFailure"]
