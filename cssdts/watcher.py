"""Polling watcher reporting added and changed style sheets."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from pathlib import Path
from typing import AsyncIterator, Dict, List, Optional, Tuple

from .config import DEFAULT_PATTERN
from .logging import get_logger
from .scanner import find_sources

Fingerprint = Tuple[int, int]


@dataclass(frozen=True)
class WatchEvent:
    """A file-system event; ``kind`` is ``"add"`` or ``"change"``."""

    kind: str
    path: Path


class PollingWatcher:
    """Compares ``(size, mtime_ns)`` snapshots of matching files between polls.

    The first poll reports every existing file as added. Removed files are
    forgotten silently. Events are not debounced; a burst of writes may yield
    several change events for one file.
    """

    def __init__(
        self,
        search_dir: Path,
        pattern: str = DEFAULT_PATTERN,
        *,
        interval: float = 0.5,
    ) -> None:
        self.search_dir = Path(search_dir)
        self.pattern = pattern
        self.interval = interval
        self._snapshot: Dict[Path, Fingerprint] = {}
        self._stopped = False
        self.logger = get_logger("watcher")

    def poll(self) -> List[WatchEvent]:
        current: Dict[Path, Fingerprint] = {}
        events: List[WatchEvent] = []
        for path in find_sources(self.search_dir, self.pattern):
            fingerprint = _fingerprint(path)
            if fingerprint is None:
                continue
            current[path] = fingerprint
            previous = self._snapshot.get(path)
            if previous is None:
                events.append(WatchEvent("add", path))
            elif previous != fingerprint:
                events.append(WatchEvent("change", path))
        self._snapshot = current
        return events

    def stop(self) -> None:
        self._stopped = True

    async def events(self) -> AsyncIterator[WatchEvent]:
        self._stopped = False
        while not self._stopped:
            for event in self.poll():
                self.logger.debug("%s %s", event.kind, event.path)
                yield event
            await asyncio.sleep(self.interval)


def _fingerprint(path: Path) -> Optional[Fingerprint]:
    try:
        stat_result = path.stat()
    except FileNotFoundError:
        return None
    return stat_result.st_size, stat_result.st_mtime_ns


__all__ = ["PollingWatcher", "WatchEvent"]
