"""CLI entrypoint for jsx-info."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .config import ConfigError, JsxInfoConfig, load_config
from .logging import configure_logging, get_logger
from .options import DEFAULT_FILE_PATTERNS, AnalyzeOptions, InvalidOptionsError, ReportFacet
from .orchestrator import Orchestrator
from .printer import render_report
from .sorting import SortPolicy
from .syntax import UnsupportedSyntax

_EPILOG = """\
examples:
  jsx-info --components div Tab.Container
  jsx-info --report lines --prop className --components div
  jsx-info --report lines --prop kind=primary --components Button
  jsx-info --report lines --prop '!disabled' --components Button
  jsx-info --ignore '**/__test__' packages/legacy
  jsx-info --format json src > jsx-usage.json

example .jsx-info.yml:
  directory: src
  ignore: ["**/__test__", "legacy/**"]
  files: ["**/*.{js,jsx,tsx}"]
  plugins: [typescript]
"""


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jsx-info",
        description="Displays a report of JSX component and prop usage.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=_EPILOG,
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=None,
        help="Directory to use as the base for finding files (defaults to current directory).",
    )
    parser.add_argument("--version", action="version", version=f"jsx-info {__version__}")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "--components",
        nargs="+",
        metavar="COMPONENT",
        help="Which components to scan (`*` = all).",
    )
    parser.add_argument(
        "--report",
        nargs="+",
        choices=[facet.value for facet in ReportFacet],
        help="Which reports to show (default: usage).",
    )
    parser.add_argument(
        "--prop",
        metavar="PROP[=VALUE]",
        help="Prop filter: `id`, `kind=primary`, `kind!=primary` or `!disabled`.",
    )
    parser.add_argument(
        "--sort",
        choices=[policy.value for policy in SortPolicy],
        help="Sort entries by usage count or alphabetically (default: usage).",
    )
    parser.add_argument("--files", nargs="+", metavar="GLOB", help="Glob patterns used to find input files.")
    parser.add_argument("--ignore", nargs="+", metavar="GLOB", help="Glob patterns used to ignore input files.")
    parser.add_argument(
        "--plugins",
        nargs="+",
        metavar="PLUGIN",
        help="Parser plugins: `typescript` (TSX grammar for .js/.jsx), `jsx` (TSX grammar for .ts).",
    )
    parser.add_argument(
        "--no-gitignore",
        dest="gitignore",
        action="store_false",
        default=None,
        help="Disable reading .gitignore files.",
    )
    parser.add_argument(
        "--no-config",
        dest="config",
        action="store_false",
        default=True,
        help="Disable the configuration file.",
    )
    parser.add_argument(
        "--no-progress",
        dest="progress",
        action="store_false",
        default=True,
        help="Don't show progress messages.",
    )
    parser.add_argument(
        "--format",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text).",
    )
    return parser


def build_options(args: argparse.Namespace, config: JsxInfoConfig) -> AnalyzeOptions:
    """Merge parsed arguments over configuration values."""
    components: List[str] = args.components or config.components
    if components == ["*"]:
        components = []
    files = config.files + (args.files or [])
    gitignore = args.gitignore if args.gitignore is not None else config.gitignore
    return AnalyzeOptions(
        components=list(components),
        prop=args.prop if args.prop is not None else config.prop,
        report=list(args.report or config.report or [ReportFacet.USAGE.value]),
        sort=args.sort or config.sort or SortPolicy.USAGE,
        directory=args.path or config.directory,
        files=files or list(DEFAULT_FILE_PATTERNS),
        ignore=config.ignore + (args.ignore or []),
        gitignore=True if gitignore is None else gitignore,
        plugins=config.plugins + (args.plugins or []),
    )


def main(argv: Optional[List[str]] = None) -> None:
    """CLI entrypoint for jsx-info."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), quiet=not args.progress)
    logger = get_logger("cli")

    config = JsxInfoConfig()
    if args.config:
        try:
            config = load_config(Path(args.path or "."))
        except ConfigError as exc:
            parser.exit(1, f"jsx-info: {exc}\n")
        if config.source is not None:
            logger.info("Loaded configuration from %s", config.source)

    options = build_options(args, config)

    def on_file(filename: str) -> None:
        logger.info("Scanning %s", filename)

    try:
        analysis = Orchestrator().run(options, on_file=on_file if args.progress else None)
    except InvalidOptionsError as exc:
        parser.exit(1, f"jsx-info: {exc}\n")
    except (FileNotFoundError, NotADirectoryError) as exc:
        parser.exit(1, f"jsx-info: {exc}\n")
    except UnsupportedSyntax as exc:
        parser.exit(1, f"jsx-info failed: {exc}\nRun with --verbose for more details.\n")

    if args.format == "json":
        print(json.dumps(analysis.to_dict(), indent=2))
    else:
        print(render_report(analysis, options.report))


if __name__ == "__main__":
    main(sys.argv[1:])
