"""Core data models shared across jsx-info components."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List, Union

if TYPE_CHECKING:
    from .syntax import Element


class _Dynamic(Enum):
    DYNAMIC = "dynamic"

    def __repr__(self) -> str:
        return "DYNAMIC"


DYNAMIC = _Dynamic.DYNAMIC
"""Marker for prop values that cannot be read statically."""

PropValue = Union[str, _Dynamic]

SPREAD_PROP_NAME = "{...}"


@dataclass(frozen=True)
class SourceLocation:
    """Position in a source file: 1-based line, 0-based column."""

    line: int
    column: int


@dataclass(frozen=True)
class ComponentFact:
    """One occurrence of a tagged element."""

    component_name: str
    element: "Element"


@dataclass(frozen=True)
class PropFact:
    """One occurrence of an attribute on a tagged element."""

    component_name: str
    prop_name: str
    prop_value: PropValue
    source_text: str
    start: SourceLocation
    end: SourceLocation


Fact = Union[ComponentFact, PropFact]


@dataclass(frozen=True)
class LineRecord:
    """Source excerpt for a matched prop, kept for the lines report."""

    prop_source_text: str
    rendered_excerpt: str
    start: SourceLocation
    end: SourceLocation
    filename: str


@dataclass(frozen=True)
class ParseErrorRecord:
    """A file that could not be parsed."""

    filename: str
    message: str
    position: int
    location: SourceLocation
    missing_plugins: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class Analysis:
    """Final, serializable result of one analysis run."""

    filenames: List[str]
    component_total: int
    component_usage_total: int
    component_usage: Dict[str, int]
    prop_usage: Dict[str, Dict[str, int]]
    line_usage: Dict[str, Dict[str, List[LineRecord]]]
    errors: Dict[str, ParseErrorRecord]
    suggested_plugins: List[str]
    elapsed_time: float

    def to_dict(self) -> Dict[str, Any]:
        """Return plain JSON-ready data, preserving report order."""
        return {
            "filenames": list(self.filenames),
            "totals": {
                "component_total": self.component_total,
                "component_usage_total": self.component_usage_total,
            },
            "component_usage": dict(self.component_usage),
            "prop_usage": {
                component: dict(props) for component, props in self.prop_usage.items()
            },
            "line_usage": {
                component: {
                    prop: [asdict(record) for record in records]
                    for prop, records in props.items()
                }
                for component, props in self.line_usage.items()
            },
            "errors": {filename: asdict(error) for filename, error in self.errors.items()},
            "suggested_plugins": list(self.suggested_plugins),
            "elapsed_time": self.elapsed_time,
        }


__all__ = [
    "Analysis",
    "ComponentFact",
    "DYNAMIC",
    "Fact",
    "LineRecord",
    "ParseErrorRecord",
    "PropFact",
    "PropValue",
    "SPREAD_PROP_NAME",
    "SourceLocation",
]
