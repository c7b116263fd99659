"""Source discovery: expand a glob pattern under the search directory."""

from __future__ import annotations

import os
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterator, List, Sequence

from .config import DEFAULT_PATTERN

_EXCLUDED_DIRS = {
    ".git",
    ".hg",
    ".svn",
    ".venv",
    "node_modules",
    "__pycache__",
    ".pytest_cache",
    ".mypy_cache",
    ".idea",
}


def pattern_matches(rel_path: str, pattern: str) -> bool:
    """Match a POSIX relative path against a glob where ``**`` spans directories."""
    parts = [part for part in rel_path.replace("\\", "/").split("/") if part]
    pattern_parts = [part for part in pattern.replace("\\", "/").split("/") if part and part != "."]
    return _match_segments(parts, pattern_parts)


def _match_segments(parts: Sequence[str], pattern_parts: Sequence[str]) -> bool:
    if not pattern_parts:
        return not parts
    head = pattern_parts[0]
    if head == "**":
        return any(
            _match_segments(parts[index:], pattern_parts[1:])
            for index in range(len(parts) + 1)
        )
    if not parts:
        return False
    return fnmatchcase(parts[0], head) and _match_segments(parts[1:], pattern_parts[1:])


def _iter_files(root: Path) -> Iterator[Path]:
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(name for name in dirnames if name not in _EXCLUDED_DIRS)
        current_dir = Path(dirpath)
        for filename in sorted(filenames):
            yield current_dir / filename


def find_sources(search_dir: Path, pattern: str = DEFAULT_PATTERN) -> List[Path]:
    """Return files under ``search_dir`` whose relative path matches ``pattern``."""
    root = Path(search_dir).expanduser()
    if not root.exists():
        raise FileNotFoundError(f"Search directory not found: {search_dir}")
    if not root.is_dir():
        raise NotADirectoryError(f"Search path is not a directory: {search_dir}")

    matches: List[Path] = []
    for path in _iter_files(root):
        rel_path = path.relative_to(root).as_posix()
        if pattern_matches(rel_path, pattern):
            matches.append(path)
    return sorted(matches)


__all__ = ["find_sources", "pattern_matches"]
