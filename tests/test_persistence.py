"""Tests for cssdts.persistence."""

from __future__ import annotations

import asyncio
from pathlib import Path

from cssdts.persistence import OutputWriter


def test_concurrent_writes_to_one_path_leave_a_complete_file(tmp_path: Path) -> None:
    writer = OutputWriter()
    target = tmp_path / "nested" / "a.css.d.ts"
    payloads = [f"version {index}\n".encode("utf-8") * 50 for index in range(8)]

    async def _run() -> None:
        await asyncio.gather(*(writer.write(target, payload) for payload in payloads))

    asyncio.run(_run())

    assert target.read_bytes() in payloads
    assert sorted(path.name for path in target.parent.iterdir()) == ["a.css.d.ts"]


def test_unchanged_content_skips_write(tmp_path: Path) -> None:
    writer = OutputWriter()
    target = tmp_path / "a.d.ts"

    first = asyncio.run(writer.write(target, b"same\n"))
    mtime = target.stat().st_mtime_ns
    second = asyncio.run(writer.write(target, b"same\n"))

    assert first.written is True
    assert second.written is False
    assert target.stat().st_mtime_ns == mtime


def test_changed_content_overwrites(tmp_path: Path) -> None:
    writer = OutputWriter()
    target = tmp_path / "a.d.ts"
    target.write_bytes(b"old contents that are longer\n")

    outcome = asyncio.run(writer.write(target, b"new\n"))

    assert outcome.written is True
    assert target.read_bytes() == b"new\n"


def test_locks_are_released_after_writes_finish(tmp_path: Path) -> None:
    writer = OutputWriter()
    targets = [tmp_path / f"{index}.d.ts" for index in range(5)]

    async def _run() -> tuple[list[Path], list[Path]]:
        pending = [asyncio.ensure_future(writer.write(target, b"x\n")) for target in targets]
        await asyncio.sleep(0)
        during = writer.in_flight()
        await asyncio.gather(*pending)
        return during, writer.in_flight()

    during, after = asyncio.run(_run())

    assert during == sorted(targets)
    assert after == []
