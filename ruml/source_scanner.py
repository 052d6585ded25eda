"""Source discovery for directory-wide runs."""

from __future__ import annotations

import os
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterator, List, Sequence, Tuple

from .config import ConfigError, load_config
from .logging import get_logger

_EXCLUDED_DIRS = {
    ".git",
    ".hg",
    ".svn",
    ".idea",
    ".vscode",
    "target",
}

_DEFAULT_SUFFIXES: Tuple[str, ...] = (".rs",)


@dataclass
class IgnoreRule:
    """Represents an ignore rule parsed from .gitignore or .ruml.yml."""

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

        if self.anchored or self.has_slash:
            if fnmatchcase(rel_path, self.pattern):
                return True
            if self.directory_only and rel_path.startswith(f"{self.pattern}/"):
                return True
            return False

        return any(fnmatchcase(part, self.pattern) for part in rel_path.split("/"))


def _build_ignore_rule(pattern: str, negate: bool = False) -> IgnoreRule | None:
    pattern = pattern.strip()
    if not pattern:
        return None

    directory_only = pattern.endswith("/")
    if directory_only:
        pattern = pattern[:-1]

    anchored = pattern.startswith("/")
    if anchored:
        pattern = pattern[1:]

    return IgnoreRule(
        pattern=pattern,
        directory_only=directory_only,
        anchored=anchored,
        negate=negate,
        has_slash="/" in pattern,
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
        rule = _build_ignore_rule(line, negate=negate)
        if rule is not None:
            rules.append(rule)
    return rules


def _should_ignore(rel_path: str, is_dir: bool, rules: Sequence[IgnoreRule]) -> bool:
    ignored = False
    for rule in rules:
        if rule.matches(rel_path, is_dir):
            ignored = not rule.negate
    return ignored


class SourceScanner:
    """Resolves an input path to the ordered list of source files to parse.

    A file input is returned unchanged whatever its suffix. A directory is
    walked in sorted order and filtered by suffix, ``.gitignore`` rules and
    extra exclude patterns. Patterns from ``.ruml.yml`` under the walked root
    are added unless ``read_config_file`` is off.
    """

    def __init__(
        self,
        suffixes: Sequence[str] = _DEFAULT_SUFFIXES,
        exclude_paths: Sequence[str] | None = None,
        read_config_file: bool = True,
    ) -> None:
        self.suffixes = tuple(suffix.lower() for suffix in suffixes)
        self.exclude_paths = list(exclude_paths or [])
        self.read_config_file = read_config_file
        self.logger = get_logger("scanner")

    def scan(self, source: str | Path) -> List[Path]:
        path = Path(source).expanduser()
        if not path.exists():
            raise FileNotFoundError(f"Input path not found: {source}")
        if not path.is_dir():
            return [path]

        root = path.resolve()
        rules = self._load_ignore_rules(root)
        files = [
            candidate
            for candidate in self._iter_files(root, rules)
            if candidate.suffix.lower() in self.suffixes
        ]
        self.logger.debug("Discovered %d source files under %s", len(files), root)
        return files

    def _load_ignore_rules(self, root: Path) -> List[IgnoreRule]:
        rules = _parse_gitignore(root / ".gitignore")
        patterns = list(self.exclude_paths)
        if self.read_config_file:
            try:
                patterns.extend(load_config(root).exclude_paths)
            except ConfigError as exc:
                self.logger.warning("Ignoring exclude_paths from invalid config: %s", exc)
        for pattern in patterns:
            rule = _build_ignore_rule(pattern)
            if rule is not None:
                rules.append(rule)
        return rules

    @staticmethod
    def _iter_files(root: Path, rules: Sequence[IgnoreRule]) -> Iterator[Path]:
        for dirpath, dirnames, filenames in os.walk(root):
            current_dir = Path(dirpath)
            rel_dir = current_dir.relative_to(root).as_posix() if current_dir != root else ""

            kept = []
            for name in sorted(dirnames):
                if name in _EXCLUDED_DIRS:
                    continue
                rel_path = f"{rel_dir}/{name}" if rel_dir else name
                if _should_ignore(rel_path, True, rules):
                    continue
                kept.append(name)
            dirnames[:] = kept

            for filename in sorted(filenames):
                rel_path = f"{rel_dir}/{filename}" if rel_dir else filename
                if _should_ignore(rel_path, False, rules):
                    continue
                yield current_dir / filename


__all__ = ["IgnoreRule", "SourceScanner"]
