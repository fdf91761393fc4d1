"""Resolve element and attribute name nodes into canonical strings."""

from __future__ import annotations

from .syntax import Identifier, MemberName, NamespacedName, UnsupportedSyntax


def resolve_name(node: object) -> str:
    """Return the dotted name for an element or attribute name node.

    ``Tab.Container`` resolves to ``"Tab.Container"`` and ``svg:rect`` to
    ``"rect"``. Resolution is purely syntactic; imports and aliases are not
    followed.
    """
    if isinstance(node, Identifier):
        return node.name
    if isinstance(node, MemberName):
        return f"{resolve_name(node.object)}.{resolve_name(node.property)}"
    if isinstance(node, NamespacedName):
        return node.name
    raise UnsupportedSyntax(f"unexpected name node: {type(node).__name__}")


__all__ = ["resolve_name"]
