"""Prop filter parsing and matching.

Supported forms::

    id              any value of ``id``
    kind=primary    ``kind`` equal to ``"primary"``
    kind!=primary   ``kind`` present with any other value
    !disabled       elements without a ``disabled`` attribute

The first ``!=`` (or, failing that, the first ``=``) splits key from value, so
keys and values containing ``=`` or ``!`` cannot be expressed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from .models import PropFact, PropValue


class QueryError(ValueError):
    """Raised when a prop filter cannot be parsed."""


@dataclass(frozen=True)
class PropQuery:
    key: str
    predicate: Callable[[PropValue], bool]
    absent: bool = False
    text: str = ""

    @property
    def want_key(self) -> str:
        """Prop name that matching facts carry."""
        return f"!{self.key}" if self.absent else self.key

    def matches(self, fact: PropFact) -> bool:
        return fact.prop_name == self.want_key and self.predicate(fact.prop_value)


def _always(value: PropValue) -> bool:
    return True


def parse_prop_filter(text: str) -> PropQuery:
    """Parse a single prop filter expression."""
    raw = text.strip()
    if not raw:
        raise QueryError("prop filter must not be empty")

    if "!=" in raw:
        key, expected = raw.split("!=", 1)
        query = PropQuery(key=key, predicate=lambda value: value != expected, text=raw)
    elif "=" in raw:
        key, expected = raw.split("=", 1)
        query = PropQuery(key=key, predicate=lambda value: value == expected, text=raw)
    elif raw.startswith("!"):
        query = PropQuery(key=raw[1:], predicate=_always, absent=True, text=raw)
    else:
        query = PropQuery(key=raw, predicate=_always, text=raw)

    if not query.key:
        raise QueryError(f"prop filter has no prop name: {text!r}")
    return query


__all__ = ["PropQuery", "QueryError", "parse_prop_filter"]
