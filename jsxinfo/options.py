"""Options for an analysis run and their validation."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .query import PropQuery, QueryError, parse_prop_filter
from .sorting import SortPolicy

DEFAULT_FILE_PATTERNS = ["**/*.{js,jsx,tsx}"]
KNOWN_PLUGINS = ("typescript", "jsx")


class InvalidOptionsError(ValueError):
    """Raised when analysis options are inconsistent; nothing has been scanned yet."""


class ReportFacet(str, Enum):
    USAGE = "usage"
    PROPS = "props"
    LINES = "lines"


@dataclass
class AnalyzeOptions:
    """Inputs for one analysis run."""

    components: List[str] = field(default_factory=list)
    prop: Optional[str] = None
    report: List[ReportFacet] = field(
        default_factory=lambda: [ReportFacet.USAGE, ReportFacet.PROPS]
    )
    sort: SortPolicy = SortPolicy.USAGE
    directory: Optional[str] = None
    files: List[str] = field(default_factory=lambda: list(DEFAULT_FILE_PATTERNS))
    ignore: List[str] = field(default_factory=list)
    gitignore: bool = True
    plugins: List[str] = field(default_factory=list)

    def validate(self) -> Optional[PropQuery]:
        """Normalize enum fields in place and return the parsed prop query, if any."""
        try:
            self.report = [ReportFacet(facet) for facet in self.report]
        except ValueError as exc:
            expected = " | ".join(facet.value for facet in ReportFacet)
            raise InvalidOptionsError(f"invalid report: {exc} (expected: {expected})") from exc
        try:
            self.sort = SortPolicy(self.sort)
        except ValueError as exc:
            expected = " | ".join(policy.value for policy in SortPolicy)
            raise InvalidOptionsError(f"invalid sort: {exc} (expected: {expected})") from exc

        unknown = [plugin for plugin in self.plugins if plugin not in KNOWN_PLUGINS]
        if unknown:
            raise InvalidOptionsError(
                f"unknown parser plugins: {', '.join(unknown)} "
                f"(expected: {' | '.join(KNOWN_PLUGINS)})"
            )

        if not self.prop:
            if ReportFacet.LINES in self.report:
                raise InvalidOptionsError("`prop` option required for `lines` report")
            return None
        try:
            return parse_prop_filter(self.prop)
        except QueryError as exc:
            raise InvalidOptionsError(str(exc)) from exc

    def wants(self, facet: ReportFacet) -> bool:
        return facet in self.report


__all__ = [
    "AnalyzeOptions",
    "DEFAULT_FILE_PATTERNS",
    "InvalidOptionsError",
    "KNOWN_PLUGINS",
    "ReportFacet",
]
