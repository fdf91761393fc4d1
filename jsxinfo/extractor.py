"""Turn a syntax tree into component and prop facts."""

from __future__ import annotations

from typing import Iterable, Iterator, Optional

from .models import DYNAMIC, SPREAD_PROP_NAME, ComponentFact, Fact, PropFact
from .names import resolve_name
from .query import PropQuery
from .syntax import Attribute, AttributeNode, Element, SpreadAttribute, SyntaxTree, UnsupportedSyntax
from .values import classify_value


def extract_facts(
    tree: SyntaxTree,
    *,
    components: Iterable[str] = (),
    query: Optional[PropQuery] = None,
) -> Iterator[Fact]:
    """Yield facts for every element in ``tree``, in source order.

    Each kept element yields one :class:`ComponentFact` followed by one
    :class:`PropFact` per attribute. With an absence query (``!key``), an
    element lacking ``key`` also yields a synthetic fact named ``!key`` that
    spans the whole element.
    """
    allowed = frozenset(components)
    for element in tree.walk():
        name = resolve_name(element.name)
        if allowed and name not in allowed:
            continue
        yield ComponentFact(component_name=name, element=element)
        prop_names = []
        for attribute in element.attributes:
            fact = _prop_fact(name, attribute)
            prop_names.append(fact.prop_name)
            yield fact
        if query is not None and query.absent and query.key not in prop_names:
            yield _absence_fact(name, element, query)


def _prop_fact(component_name: str, attribute: AttributeNode) -> PropFact:
    if isinstance(attribute, Attribute):
        prop_name = resolve_name(attribute.name)
        prop_value = classify_value(attribute.value)
    elif isinstance(attribute, SpreadAttribute):
        prop_name = SPREAD_PROP_NAME
        prop_value = DYNAMIC
    else:
        raise UnsupportedSyntax(f"unexpected attribute node: {type(attribute).__name__}")
    return PropFact(
        component_name=component_name,
        prop_name=prop_name,
        prop_value=prop_value,
        source_text=attribute.source_text,
        start=attribute.span.start,
        end=attribute.span.end,
    )


def _absence_fact(component_name: str, element: Element, query: PropQuery) -> PropFact:
    return PropFact(
        component_name=component_name,
        prop_name=query.want_key,
        prop_value="true",
        source_text=element.source_text,
        start=element.span.start,
        end=element.span.end,
    )


__all__ = ["extract_facts"]
