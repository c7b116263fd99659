"""Serialised, idempotent writes of generated declaration files."""

from __future__ import annotations

import asyncio
import contextlib
import hashlib
import os
import uuid
import weakref
from dataclasses import dataclass
from pathlib import Path
from typing import AsyncIterator, Dict, List, Optional

from .logging import get_logger


class PersistError(RuntimeError):
    """Raised when a declaration file cannot be written."""

    def __init__(self, path: Path, cause: OSError) -> None:
        super().__init__(f"Failed to write {path}: {cause}")
        self.path = path
        self.cause = cause


@dataclass(frozen=True)
class PersistOutcome:
    """Confirmation of a persist call."""

    path: Path
    written: bool
    digest: str


class _PathLock:
    """A path's lock plus the number of writers holding or awaiting it."""

    __slots__ = ("lock", "users")

    def __init__(self) -> None:
        self.lock = asyncio.Lock()
        self.users = 0


class OutputWriter:
    """Writes files with one in-flight writer per output path.

    Writers of the same path are serialised by a per-path ``asyncio.Lock``;
    a file whose bytes already match is left untouched, so repeated
    watch-triggered persists of unchanged output are no-ops. A path's lock is
    dropped once its last writer finishes, so the table only holds paths with
    a write in flight.
    """

    def __init__(self) -> None:
        self._locks: "weakref.WeakKeyDictionary[asyncio.AbstractEventLoop, Dict[Path, _PathLock]]" = (
            weakref.WeakKeyDictionary()
        )
        self.logger = get_logger("persistence")

    def _table(self) -> Dict[Path, _PathLock]:
        # Locks bind to the running loop, so keep one table per loop.
        return self._locks.setdefault(asyncio.get_running_loop(), {})

    def in_flight(self) -> List[Path]:
        """Paths with a write running or queued on the current loop."""
        return sorted(self._table())

    @contextlib.asynccontextmanager
    async def _locked(self, path: Path) -> AsyncIterator[None]:
        table = self._table()
        entry = table.get(path)
        if entry is None:
            entry = table[path] = _PathLock()
        entry.users += 1
        try:
            async with entry.lock:
                yield
        finally:
            entry.users -= 1
            if not entry.users:
                del table[path]

    async def write(self, path: Path, payload: bytes) -> PersistOutcome:
        target = Path(path)
        digest = hashlib.sha256(payload).hexdigest()
        loop = asyncio.get_running_loop()
        async with self._locked(target):
            try:
                written = await loop.run_in_executor(None, _write_if_changed, target, payload, digest)
            except OSError as exc:
                raise PersistError(target, exc) from exc
        if written:
            self.logger.debug("Wrote %s (%s)", target, digest[:12])
        else:
            self.logger.debug("Unchanged %s; skipped write", target)
        return PersistOutcome(path=target, written=written, digest=digest)


def _existing_digest(path: Path) -> Optional[str]:
    try:
        data = path.read_bytes()
    except FileNotFoundError:
        return None
    return hashlib.sha256(data).hexdigest()


def _write_if_changed(path: Path, payload: bytes, digest: str) -> bool:
    path.parent.mkdir(parents=True, exist_ok=True)
    if _existing_digest(path) == digest:
        return False

    tmp_path = path.with_name(f".{path.name}.{uuid.uuid4().hex}.tmp")
    try:
        tmp_path.write_bytes(payload)
        os.replace(tmp_path, path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise
    return True


_default_writer: Optional[OutputWriter] = None


def default_writer() -> OutputWriter:
    """Writer shared by results created without an explicit writer."""
    global _default_writer
    if _default_writer is None:
        _default_writer = OutputWriter()
    return _default_writer


__all__ = ["OutputWriter", "PersistError", "PersistOutcome", "default_writer"]
