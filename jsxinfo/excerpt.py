"""Line-numbered source excerpts for the lines report."""

from __future__ import annotations

import re
from typing import Dict, List

_LINE_BREAK = re.compile(r"\r?\n")
_MIN_DIGITS = 4


class LineSplitCache:
    """Caches the line split of each distinct source text for one run."""

    def __init__(self) -> None:
        self._lines: Dict[str, List[str]] = {}

    def lines(self, text: str) -> List[str]:
        lines = self._lines.get(text)
        if lines is None:
            lines = _LINE_BREAK.split(text)
            self._lines[text] = lines
        return lines

    def __len__(self) -> int:
        return len(self._lines)


def render_excerpt(text: str, start_line: int, end_line: int, cache: LineSplitCache) -> str:
    """Return lines ``start_line..end_line`` (1-based, inclusive) with line numbers."""
    lines = cache.lines(text)
    width = max(_MIN_DIGITS, len(str(start_line)), len(str(end_line)))
    output = []
    for lineno in range(start_line, end_line + 1):
        source = lines[lineno - 1] if 0 < lineno <= len(lines) else ""
        output.append(f"{str(lineno).rjust(width)} | {source}")
    return "\n".join(output)


__all__ = ["LineSplitCache", "render_excerpt"]
