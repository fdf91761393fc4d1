"""Assemble the final Analysis from aggregated state."""

from __future__ import annotations

from typing import Dict, List, Sequence

from .aggregator import AggregateSnapshot
from .models import Analysis, LineRecord
from .sorting import SortPolicy, sort_counts


def assemble_analysis(
    snapshot: AggregateSnapshot,
    *,
    filenames: Sequence[str],
    sort: SortPolicy,
    elapsed_time: float,
) -> Analysis:
    """Order the snapshot by ``sort`` and wrap it in an :class:`Analysis`.

    Components are ordered by the policy; prop maps follow the component
    order and their props are ordered by the policy over prop counts.
    """
    component_usage = dict(sort_counts(snapshot.component_counts, sort))

    prop_usage: Dict[str, Dict[str, int]] = {}
    line_usage: Dict[str, Dict[str, List[LineRecord]]] = {}
    for component in component_usage:
        props = snapshot.prop_counts.get(component, {})
        prop_usage[component] = dict(sort_counts(props, sort))
        records = snapshot.line_records.get(component, {})
        line_usage[component] = {
            prop: records[prop] for prop in prop_usage[component] if prop in records
        }

    return Analysis(
        filenames=list(filenames),
        component_total=len(component_usage),
        component_usage_total=snapshot.component_usage_total,
        component_usage=component_usage,
        prop_usage=prop_usage,
        line_usage=line_usage,
        errors=dict(snapshot.errors),
        suggested_plugins=list(snapshot.suggested_plugins),
        elapsed_time=elapsed_time,
    )


__all__ = ["assemble_analysis"]
