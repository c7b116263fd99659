"""Token loading for CSS module source files."""

from __future__ import annotations

import asyncio
import re
from pathlib import Path
from typing import Dict, Iterator, Mapping, Optional, Protocol, Tuple, Union

from .logging import get_logger
from .stores import TokenCache

PathLike = Union[str, Path]

_COMMENT = re.compile(r"/\*.*?\*/", re.DOTALL)
_STRING = re.compile(r"\"(?:\\.|[^\"\\\n])*\"|'(?:\\.|[^'\\\n])*'")
_PRELUDE = re.compile(r"([^{};]*)\{")
_CLASS_SELECTOR = re.compile(r"\.(-?[_a-zA-Z][\w-]*)")
_GLOBAL_CALL = re.compile(r":global\([^)]*\)")
_EXPORT_BLOCK = re.compile(r":export\s*\{([^}]*)\}")
_EXPORT_ENTRY = re.compile(r"^\s*([^\s:][^:]*?)\s*:\s*(.*?)\s*$")


class SourceReadError(RuntimeError):
    """Raised when a source style sheet cannot be read or decoded."""

    def __init__(self, path: Path, cause: Exception) -> None:
        super().__init__(f"Unable to read {path}: {cause}")
        self.path = path
        self.cause = cause


class TokenLoader(Protocol):
    """Collaborator that resolves a style sheet into exported token names."""

    cache: TokenCache

    async def fetch(
        self, path: PathLike, initial_contents: Optional[str] = None
    ) -> Mapping[str, str]:
        """Return the ``token name -> value`` mapping for ``path``."""


class FileSystemLoader:
    """Reads style sheets from disk and lists their local class names.

    Only selector text is scanned: class selectors outside ``:global`` and the
    keys of ``:export`` blocks become tokens, in first-seen order. Imports and
    ``composes`` are not followed.
    """

    def __init__(self, root_dir: PathLike, cache: Optional[TokenCache] = None) -> None:
        self.root_dir = Path(root_dir)
        self.cache = cache if cache is not None else TokenCache()
        self.logger = get_logger("loader")

    def resolve(self, path: PathLike) -> Path:
        candidate = Path(path).expanduser()
        if not candidate.is_absolute():
            candidate = self.root_dir / candidate
        return candidate.resolve()

    async def fetch(
        self, path: PathLike, initial_contents: Optional[str] = None
    ) -> Dict[str, str]:
        source = self.resolve(path)
        if initial_contents is None:
            cached = self.cache.get(source)
            if cached is not None:
                self.logger.debug("Token cache hit for %s", source)
                return cached
            text = await self._read(source)
        else:
            text = initial_contents

        tokens = extract_tokens(text)
        self.cache.put(source, tokens)
        self.logger.debug("Loaded %d tokens from %s", len(tokens), source)
        return dict(tokens)

    async def _read(self, source: Path) -> str:
        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(None, _read_text, source)
        except (OSError, UnicodeDecodeError) as exc:
            raise SourceReadError(source, exc) from exc


def _read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def extract_tokens(text: str) -> Dict[str, str]:
    """Return exported tokens of a style sheet, in first-seen order."""
    cleaned = _STRING.sub('""', _COMMENT.sub("", text))
    tokens: Dict[str, str] = {}
    for name in _iter_local_classes(cleaned):
        tokens.setdefault(name, name)
    for name, value in _iter_exports(cleaned):
        tokens[name] = value
    return tokens


def _iter_local_classes(text: str) -> Iterator[str]:
    for match in _PRELUDE.finditer(text):
        prelude = match.group(1).strip()
        if not prelude or prelude.startswith("@") or prelude.startswith(":export"):
            continue
        for selector in prelude.split(","):
            selector = _GLOBAL_CALL.sub("", selector)
            # A bare ":global" switches the rest of the selector to global scope.
            selector = selector.split(":global", 1)[0]
            yield from _CLASS_SELECTOR.findall(selector)


def _iter_exports(text: str) -> Iterator[Tuple[str, str]]:
    for block in _EXPORT_BLOCK.finditer(text):
        for entry in block.group(1).split(";"):
            match = _EXPORT_ENTRY.match(entry)
            if match:
                yield match.group(1), match.group(2)


__all__ = ["FileSystemLoader", "SourceReadError", "TokenLoader", "extract_tokens"]
