"""Plain-text rendering of an Analysis."""

from __future__ import annotations

import math
from typing import Iterable, List, Sequence

from .models import Analysis
from .options import ReportFacet

_METER_SIZE = 10
_METER_FULL = "*"
_METER_LIGHT = "-"


def text_meter(total: int, count: int) -> str:
    """Return a ten-character bar showing ``count`` as a share of ``total``."""
    if total <= 0:
        return _METER_LIGHT * _METER_SIZE
    full = min(_METER_SIZE, math.ceil(count / total * _METER_SIZE))
    return _METER_FULL * full + _METER_LIGHT * (_METER_SIZE - full)


def _max_digits(numbers: Iterable[int]) -> int:
    # pad to at least 4 digits so most tables line up
    return max([4, *(len(str(number)) for number in numbers)])


def render_report(analysis: Analysis, report: Sequence[ReportFacet]) -> str:
    """Render the requested report facets, followed by the time and error sections."""
    lines: List[str] = [
        f"Scanned {len(analysis.filenames)} files in {analysis.elapsed_time:.1f} seconds"
    ]
    if ReportFacet.USAGE in report:
        lines.extend(_component_usage(analysis))
    if ReportFacet.PROPS in report:
        lines.extend(_prop_usage(analysis))
    if ReportFacet.LINES in report:
        lines.extend(_line_usage(analysis))
    lines.extend(_errors(analysis))
    return "\n".join(lines)


def _component_usage(analysis: Analysis) -> List[str]:
    if analysis.component_total == 0:
        return []
    total = analysis.component_usage_total
    digits = _max_digits(analysis.component_usage.values())
    lines = ["", f"{analysis.component_total} components used {total} times:"]
    for name, count in analysis.component_usage.items():
        lines.append(f"  {str(count).rjust(digits)}  {text_meter(total, count)}  <{name}>")
    return lines


def _prop_usage(analysis: Analysis) -> List[str]:
    lines: List[str] = []
    for name, props in analysis.prop_usage.items():
        usage = analysis.component_usage[name]
        times = "time" if usage == 1 else "times"
        lines.extend(["", f"<{name}> was used {usage} {times} with the following prop usage:"])
        digits = _max_digits(props.values())
        prop_total = sum(props.values())
        for prop, count in props.items():
            lines.append(f"  {str(count).rjust(digits)}  {text_meter(prop_total, count)}  {prop}")
    return lines


def _line_usage(analysis: Analysis) -> List[str]:
    lines: List[str] = []
    for name, props in analysis.line_usage.items():
        for records in props.values():
            for record in records:
                location = f"{record.filename}:{record.start.line}:{record.start.column}"
                lines.extend(["", f"<{name}> {location}", record.rendered_excerpt])
    return lines


def _errors(analysis: Analysis) -> List[str]:
    count = len(analysis.errors)
    if count == 0:
        return []
    lines = ["", f"{count} parse {'error' if count == 1 else 'errors'}"]
    for filename, error in analysis.errors.items():
        lines.append(f"  {filename}:{error.location.line}:{error.location.column} {error.message}")
    if analysis.suggested_plugins:
        lines.extend(
            [
                "",
                "Try adding these parser plugins as arguments:",
                f"    --plugins {' '.join(analysis.suggested_plugins)}",
            ]
        )
    return lines


__all__ = ["render_report", "text_meter"]
