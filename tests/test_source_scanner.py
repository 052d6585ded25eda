"""Tests for ruml.source_scanner."""

from __future__ import annotations

from pathlib import Path

import pytest

from ruml.source_scanner import SourceScanner
from tests._fixtures.source_tree import SourceTree


def _relative(paths: list[Path], root: Path) -> list[str]:
    return [path.relative_to(root.resolve()).as_posix() for path in paths]


def test_scan_returns_rust_files_in_sorted_walk_order(source_tree: SourceTree) -> None:
    source_tree.write(
        {
            "src/main.rs": "fn main() {}\n",
            "src/lib.rs": "pub struct A {}\n",
            "src/models/user.rs": "pub struct User {}\n",
            "src/README.md": "# notes\n",
            "build.rs": "fn main() {}\n",
            "target/debug/generated.rs": "struct Generated {}\n",
            ".git/hooks/hook.rs": "struct Hook {}\n",
        }
    )

    files = SourceScanner().scan(source_tree.path())

    assert _relative(files, source_tree.path()) == [
        "build.rs",
        "src/lib.rs",
        "src/main.rs",
        "src/models/user.rs",
    ]


def test_scan_returns_single_file_unchanged(source_tree: SourceTree) -> None:
    source_tree.write({"notes.txt": "struct NotRust {}\n"})
    path = source_tree.path("notes.txt")

    assert SourceScanner().scan(path) == [path]


def test_scan_respects_gitignore_and_config_excludes(source_tree: SourceTree) -> None:
    source_tree.write(
        {
            ".gitignore": "generated/\n*_bak.rs\n",
            ".ruml.yml": "exclude_paths:\n  - examples/\n",
            "src/lib.rs": "pub struct A {}\n",
            "src/old_bak.rs": "pub struct Old {}\n",
            "generated/bindings.rs": "pub struct B {}\n",
            "examples/demo.rs": "fn main() {}\n",
        }
    )

    files = SourceScanner().scan(source_tree.path())

    assert _relative(files, source_tree.path()) == ["src/lib.rs"]


def test_scan_applies_explicit_exclude_paths(source_tree: SourceTree) -> None:
    source_tree.write({"src/lib.rs": "", "benches/bench.rs": ""})

    files = SourceScanner(exclude_paths=["benches/"]).scan(source_tree.path())

    assert _relative(files, source_tree.path()) == ["src/lib.rs"]


def test_scan_can_skip_config_file_excludes(source_tree: SourceTree) -> None:
    source_tree.write(
        {
            ".ruml.yml": "exclude_paths:\n  - examples/\n",
            "src/lib.rs": "",
            "examples/demo.rs": "",
        }
    )

    files = SourceScanner(read_config_file=False).scan(source_tree.path())

    assert _relative(files, source_tree.path()) == ["examples/demo.rs", "src/lib.rs"]


def test_scan_rejects_missing_path(tmp_path: Path) -> None:
    missing = tmp_path / "missing"
    with pytest.raises(FileNotFoundError) as exc:
        SourceScanner().scan(missing)
    assert str(missing) in str(exc.value)
