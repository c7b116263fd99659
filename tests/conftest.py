from __future__ import annotations

from pathlib import Path

import pytest

from tests._fixtures.style_tree import StyleTree


@pytest.fixture
def style_tree(tmp_path: Path) -> StyleTree:
    """Provide a reusable style sheet tree rooted at the pytest tmp_path."""
    return StyleTree(tmp_path)
