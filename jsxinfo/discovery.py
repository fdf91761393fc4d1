"""Source file discovery: include globs, .gitignore and ignore patterns."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterator, List, Optional, Pattern, Sequence

from .logging import get_logger

_EXCLUDED_DIRS = {
    ".git",
    ".hg",
    ".svn",
    "node_modules",
}

_BRACES = re.compile(r"\{([^{}]*)\}")

logger = get_logger("discovery")


@dataclass
class IgnoreRule:
    """Represents an ignore rule parsed from .gitignore or an ignore option."""

    pattern: str
    directory_only: bool
    anchored: bool
    negate: bool
    has_slash: bool

    def matches(self, rel_path: str, is_dir: bool) -> bool:
        if not self.pattern:
            return False
        if self.directory_only and not is_dir:
            return False

        target = rel_path
        if self.anchored or self.has_slash:
            if _glob_regex(self.pattern).fullmatch(target):
                return True
            if self.directory_only and target.startswith(f"{self.pattern}/"):
                return True
            return False

        for part in target.split("/"):
            if fnmatchcase(part, self.pattern):
                return True
        return False


def build_ignore_rule(pattern: str, negate: bool = False) -> IgnoreRule | None:
    pattern = pattern.strip()
    if not pattern:
        return None

    directory_only = pattern.endswith("/")
    if directory_only:
        pattern = pattern[:-1]

    anchored = pattern.startswith("/")
    if anchored:
        pattern = pattern[1:]

    has_slash = "/" in pattern
    return IgnoreRule(
        pattern=pattern,
        directory_only=directory_only,
        anchored=anchored,
        negate=negate,
        has_slash=has_slash,
    )


def _parse_gitignore(path: Path) -> List[IgnoreRule]:
    if not path.exists():
        return []

    rules: List[IgnoreRule] = []
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        negate = line.startswith("!")
        if negate:
            line = line[1:]
        rule = build_ignore_rule(line, negate=negate)
        if rule is not None:
            rules.append(rule)
    return rules


def _should_ignore(rel_path: str, is_dir: bool, rules: Sequence[IgnoreRule]) -> bool:
    ignored = False
    for rule in rules:
        if rule.matches(rel_path, is_dir):
            ignored = not rule.negate
    return ignored


def expand_braces(pattern: str) -> List[str]:
    """Expand ``{a,b}`` alternatives: ``*.{js,jsx}`` -> ``*.js``, ``*.jsx``."""
    match = _BRACES.search(pattern)
    if match is None:
        return [pattern]
    head, tail = pattern[: match.start()], pattern[match.end() :]
    expanded: List[str] = []
    for option in match.group(1).split(","):
        expanded.extend(expand_braces(f"{head}{option}{tail}"))
    return expanded


def _glob_regex(pattern: str) -> Pattern[str]:
    parts: List[str] = []
    index = 0
    while index < len(pattern):
        if pattern.startswith("**/", index):
            parts.append("(?:.*/)?")
            index += 3
        elif pattern.startswith("**", index):
            parts.append(".*")
            index += 2
        elif pattern[index] == "*":
            parts.append("[^/]*")
            index += 1
        elif pattern[index] == "?":
            parts.append("[^/]")
            index += 1
        else:
            parts.append(re.escape(pattern[index]))
            index += 1
    return re.compile("".join(parts))


class FileDiscoverer:
    """Finds source files below a directory."""

    def discover(
        self,
        directory: Optional[str] = None,
        *,
        patterns: Sequence[str],
        ignore: Sequence[str] = (),
        gitignore: bool = True,
    ) -> List[str]:
        """Return sorted absolute paths of files matching ``patterns``."""
        root = Path(directory or os.getcwd()).expanduser().resolve()
        if not root.exists():
            raise FileNotFoundError(f"Directory not found: {directory}")
        if not root.is_dir():
            raise NotADirectoryError(f"Path is not a directory: {directory}")

        includes: List[Pattern[str]] = []
        rules: List[IgnoreRule] = _parse_gitignore(root / ".gitignore") if gitignore else []
        for pattern in patterns:
            if pattern.startswith("!"):
                rule = build_ignore_rule(pattern[1:])
                if rule is not None:
                    rules.append(rule)
                continue
            includes.extend(_glob_regex(expanded.removeprefix("./")) for expanded in expand_braces(pattern))
        for pattern in ignore:
            for expanded in expand_braces(pattern):
                rule = build_ignore_rule(expanded)
                if rule is not None:
                    rules.append(rule)

        filenames = []
        for path in _iter_files(root, rules):
            rel_path = path.relative_to(root).as_posix()
            if any(regex.fullmatch(rel_path) for regex in includes):
                filenames.append(str(path))
        filenames.sort()
        logger.debug("Discovered %d files under %s", len(filenames), root)
        return filenames


def _iter_files(root: Path, rules: Sequence[IgnoreRule]) -> Iterator[Path]:
    for dirpath, dirnames, filenames in os.walk(root):
        current_dir = Path(dirpath)
        rel_dir = current_dir.relative_to(root).as_posix() if current_dir != root else ""

        dirnames[:] = [name for name in dirnames if name not in _EXCLUDED_DIRS]

        filtered_dirs = []
        for name in dirnames:
            rel_path = f"{rel_dir}/{name}" if rel_dir else name
            if _should_ignore(rel_path, True, rules):
                continue
            filtered_dirs.append(name)
        dirnames[:] = sorted(filtered_dirs)

        for filename in filenames:
            rel_path = f"{rel_dir}/{filename}" if rel_dir else filename
            if _should_ignore(rel_path, False, rules):
                continue
            yield current_dir / filename


__all__ = ["FileDiscoverer", "IgnoreRule", "build_ignore_rule", "expand_braces"]
