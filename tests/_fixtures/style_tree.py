"""Helper utilities for laying out temporary style sheet trees in tests."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Mapping

from cssdts.config import RunConfiguration


class StyleTree:
    """Writes style sheets under a throwaway project root."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "project"
        self.root.mkdir()

    def write(self, files: Mapping[str, str]) -> None:
        """Write `path -> contents` entries below the project root."""
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            normalised = textwrap.dedent(content).lstrip("\n")
            path.write_text(normalised, encoding="utf-8")

    def path(self, relative: str = "") -> Path:
        return self.root / relative if relative else self.root

    def config(self, search_dir: str = "styles", **options: object) -> RunConfiguration:
        """Return a run configuration rooted at this tree."""
        return RunConfiguration.from_options(root_dir=self.root, search_dir=search_dir, **options)


__all__ = ["StyleTree"]
