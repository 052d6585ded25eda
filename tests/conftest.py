from __future__ import annotations

from pathlib import Path

import pytest

from tests._fixtures.source_tree import SourceTree


@pytest.fixture
def source_tree(tmp_path: Path) -> SourceTree:
    """Provide a reusable Rust source tree rooted at the pytest tmp_path."""
    return SourceTree(tmp_path)
