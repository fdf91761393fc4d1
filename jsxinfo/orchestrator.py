"""Run orchestration: discover files, scan each one, assemble the Analysis."""

from __future__ import annotations

import time
from pathlib import Path
from typing import Callable, Optional, Sequence

from .discovery import FileDiscoverer
from .logging import get_logger
from .models import Analysis, SourceLocation
from .options import AnalyzeOptions
from .parsing import JsxParser, ParseFailure
from .scan import UsageScan

FileHook = Callable[[str], None]
StartHook = Callable[[], None]


class Orchestrator:
    """Coordinates one analysis run per call to :meth:`run`."""

    def __init__(
        self,
        discoverer: FileDiscoverer | None = None,
        parser_factory: Callable[[Sequence[str]], JsxParser] | None = None,
    ) -> None:
        self.discoverer = discoverer or FileDiscoverer()
        self.parser_factory = parser_factory or JsxParser
        self.logger = get_logger("orchestrator")

    def run(
        self,
        options: AnalyzeOptions,
        *,
        on_start: Optional[StartHook] = None,
        on_file: Optional[FileHook] = None,
    ) -> Analysis:
        """Analyze every discovered file and return the assembled result.

        Invalid options raise before any file is read. Parse failures are
        recorded per file; ``UnsupportedSyntax`` aborts the run.
        """
        scan = UsageScan(options)
        time_start = time.perf_counter()
        if on_start is not None:
            on_start()

        filenames = self.discoverer.discover(
            options.directory,
            patterns=options.files,
            ignore=options.ignore,
            gitignore=options.gitignore,
        )
        self.logger.info("Scanning %d files", len(filenames))

        parser = self.parser_factory(options.plugins)
        for filename in filenames:
            if on_file is not None:
                on_file(filename)
            self.logger.debug("Scanning %s", filename)
            self._scan_file(scan, parser, filename)

        elapsed_time = time.perf_counter() - time_start
        analysis = scan.finish(filenames, elapsed_time)
        self.logger.info(
            "Found %d components used %d times (%d parse errors) in %.1f seconds",
            analysis.component_total,
            analysis.component_usage_total,
            len(analysis.errors),
            elapsed_time,
        )
        return analysis

    def _scan_file(self, scan: UsageScan, parser: JsxParser, filename: str) -> None:
        try:
            source = Path(filename).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            self.logger.warning("Could not read %s: %s", filename, exc)
            scan.add_parse_error(
                filename,
                ParseFailure(str(exc), position=0, location=SourceLocation(line=1, column=0)),
            )
            return
        try:
            tree = parser.parse(filename, source)
        except ParseFailure as failure:
            self.logger.warning("Parse error in %s: %s", filename, failure)
            scan.add_parse_error(filename, failure)
            return
        scan.add_tree(filename, source, tree)


def analyze(
    options: AnalyzeOptions | None = None,
    *,
    on_start: Optional[StartHook] = None,
    on_file: Optional[FileHook] = None,
) -> Analysis:
    """Run one analysis with the default discoverer and parser."""
    return Orchestrator().run(options or AnalyzeOptions(), on_start=on_start, on_file=on_file)


__all__ = ["Orchestrator", "analyze"]
