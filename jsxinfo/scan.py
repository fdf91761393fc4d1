"""Per-run scanning state: facts in, one Analysis out."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Sequence

from .aggregator import UsageAggregator
from .excerpt import LineSplitCache, render_excerpt
from .extractor import extract_facts
from .models import Analysis, ComponentFact
from .options import AnalyzeOptions, ReportFacet
from .query import PropQuery
from .report import assemble_analysis
from .syntax import SyntaxTree

if TYPE_CHECKING:
    from .parsing import ParseFailure


class UsageScan:
    """Consumes parsed files one at a time and assembles the Analysis once.

    Options are validated on construction, so an invalid configuration is
    rejected before any file is scanned.
    """

    def __init__(self, options: AnalyzeOptions) -> None:
        self.options = options
        self.query: Optional[PropQuery] = options.validate()
        self._aggregator = UsageAggregator()
        self._lines = LineSplitCache()
        self._count_props = options.wants(ReportFacet.PROPS) or options.wants(ReportFacet.LINES)
        self._keep_lines = options.wants(ReportFacet.LINES)
        self._finished = False

    def add_tree(self, filename: str, source: str, tree: SyntaxTree) -> None:
        self._ensure_scanning()
        facts = extract_facts(tree, components=self.options.components, query=self.query)
        for fact in facts:
            if isinstance(fact, ComponentFact):
                self._aggregator.record_component(fact.component_name)
                continue
            if not self._count_props:
                continue
            if self.query is not None and not self.query.matches(fact):
                continue
            excerpt = None
            if self._keep_lines:
                excerpt = render_excerpt(source, fact.start.line, fact.end.line, self._lines)
            self._aggregator.record_match(fact, filename, excerpt)

    def add_parse_error(self, filename: str, failure: "ParseFailure") -> None:
        self._ensure_scanning()
        self._aggregator.record_parse_error(filename, failure)

    def finish(self, filenames: Sequence[str], elapsed_time: float) -> Analysis:
        self._ensure_scanning()
        self._finished = True
        return assemble_analysis(
            self._aggregator.snapshot(),
            filenames=filenames,
            sort=self.options.sort,
            elapsed_time=elapsed_time,
        )

    def _ensure_scanning(self) -> None:
        if self._finished:
            raise RuntimeError("analysis already assembled; start a new scan")


__all__ = ["UsageScan"]
