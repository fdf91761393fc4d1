"""Running aggregation state for one analysis run."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, List, Optional

from .models import LineRecord, ParseErrorRecord, PropFact

if TYPE_CHECKING:
    from .parsing import ParseFailure


@dataclass(frozen=True)
class AggregateSnapshot:
    """Copy of the aggregator state, safe to sort and render."""

    component_usage_total: int
    component_counts: Dict[str, int]
    prop_counts: Dict[str, Dict[str, int]]
    line_records: Dict[str, Dict[str, List[LineRecord]]]
    errors: Dict[str, ParseErrorRecord]
    suggested_plugins: List[str]


class UsageAggregator:
    """Accumulates component, prop and line usage across files."""

    def __init__(self) -> None:
        self._usage_total = 0
        self._component_counts: Dict[str, int] = {}
        self._prop_counts: Dict[str, Dict[str, int]] = {}
        self._line_records: Dict[str, Dict[str, List[LineRecord]]] = {}
        self._errors: Dict[str, ParseErrorRecord] = {}
        # dict keys keep insertion order and deduplicate
        self._suggested_plugins: Dict[str, None] = {}

    def record_component(self, name: str) -> None:
        if name not in self._component_counts:
            self._component_counts[name] = 0
            self._prop_counts[name] = {}
            self._line_records[name] = {}
        self._component_counts[name] += 1
        self._usage_total += 1

    def record_match(
        self, fact: PropFact, filename: str, rendered_excerpt: Optional[str] = None
    ) -> None:
        props = self._prop_counts.setdefault(fact.component_name, {})
        props[fact.prop_name] = props.get(fact.prop_name, 0) + 1
        if rendered_excerpt is None:
            return
        lines = self._line_records.setdefault(fact.component_name, {})
        lines.setdefault(fact.prop_name, []).append(
            LineRecord(
                prop_source_text=fact.source_text,
                rendered_excerpt=rendered_excerpt,
                start=fact.start,
                end=fact.end,
                filename=filename,
            )
        )

    def record_parse_error(self, filename: str, failure: "ParseFailure") -> None:
        self._errors[filename] = ParseErrorRecord(
            filename=filename,
            message=failure.message,
            position=failure.position,
            location=failure.location,
            missing_plugins=list(failure.missing_plugins),
        )
        for plugin in failure.missing_plugins:
            self._suggested_plugins.setdefault(plugin, None)

    def snapshot(self) -> AggregateSnapshot:
        return AggregateSnapshot(
            component_usage_total=self._usage_total,
            component_counts=dict(self._component_counts),
            prop_counts={name: dict(props) for name, props in self._prop_counts.items()},
            line_records={
                name: {prop: list(records) for prop, records in props.items()}
                for name, props in self._line_records.items()
            },
            errors=dict(self._errors),
            suggested_plugins=list(self._suggested_plugins),
        )


__all__ = ["AggregateSnapshot", "UsageAggregator"]
