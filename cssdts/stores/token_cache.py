"""In-memory cache of loaded CSS module tokens."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterator, Mapping, Optional, Union

PathLike = Union[str, Path]


class TokenCache:
    """Stores token mappings keyed by resolved source path.

    One cache belongs to one creator and is injected into its loader. Entries
    live until :meth:`discard` or :meth:`clear` is called; watch-mode callers
    clear before re-creating a changed file so stale tokens are never served.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, Dict[str, str]] = {}

    def get(self, path: PathLike) -> Optional[Dict[str, str]]:
        entry = self._entries.get(_key(path))
        if entry is None:
            return None
        return dict(entry)

    def put(self, path: PathLike, tokens: Mapping[str, str]) -> None:
        self._entries[_key(path)] = dict(tokens)

    def discard(self, path: PathLike) -> None:
        self._entries.pop(_key(path), None)

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, Path)):
            return False
        return _key(path) in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._entries))


def _key(path: PathLike) -> str:
    return str(Path(path).expanduser().resolve())


__all__ = ["TokenCache"]
