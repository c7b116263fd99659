"""Pipeline orchestration from style sheet path to declaration result."""

from __future__ import annotations

import asyncio
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Union

from .config import RunConfiguration
from .declaration import DeclarationResult, format_declaration
from .loader import FileSystemLoader, TokenLoader
from .logging import get_logger
from .persistence import OutputWriter, PersistOutcome
from .stores import TokenCache
from .validators import IdentifierValidator, Validator

PathLike = Union[str, Path]


@dataclass(frozen=True)
class BatchItem:
    """Outcome of one file in a batch; ``error`` is set when the file failed."""

    source: Path
    result: Optional[DeclarationResult] = None
    persisted: Optional[PersistOutcome] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class DtsCreator:
    """Drives fetch, convert, validate and format for style sheets.

    The creator owns its token cache and output writer; nothing is shared
    with other creator instances.
    """

    def __init__(
        self,
        config: RunConfiguration,
        *,
        loader: Optional[TokenLoader] = None,
        validator: Optional[Validator] = None,
        writer: Optional[OutputWriter] = None,
    ) -> None:
        self.config = config
        self.loader: TokenLoader = loader or FileSystemLoader(config.root_dir, TokenCache())
        self.validator: Validator = validator or IdentifierValidator()
        self.writer = writer or OutputWriter()
        self.logger = get_logger("orchestrator")

    @property
    def input_directory(self) -> Path:
        return self.config.input_directory

    @property
    def output_directory(self) -> Path:
        return self.config.output_directory

    def relative_input(self, path: PathLike) -> str:
        """Return ``path`` relative to the search directory.

        Absolute paths are used as given; relative ones are taken from the
        current working directory.
        """
        candidate = Path(path)
        if not candidate.is_absolute():
            candidate = Path.cwd() / candidate
        return os.path.relpath(candidate, self.input_directory)

    def clear_cache(self) -> None:
        self.loader.cache.clear()

    async def create(
        self,
        path: PathLike,
        initial_contents: Optional[str] = None,
        clear_cache: bool = False,
    ) -> DeclarationResult:
        """Build the declaration for ``path`` without writing it.

        Loader failures propagate unchanged.
        """
        relative = self.relative_input(path)
        source = self.input_directory / relative
        if clear_cache:
            self.clear_cache()

        tokens = await self.loader.fetch(source, initial_contents=initial_contents)
        result = format_declaration(
            tokens.keys(),
            config=self.config,
            relative_input=relative,
            validator=self.validator,
            writer=self.writer,
        )
        self.logger.debug(
            "Prepared %s: %d members, %d warnings",
            relative,
            len(result.lines),
            len(result.warnings),
        )
        return result

    async def create_and_persist(
        self,
        path: PathLike,
        initial_contents: Optional[str] = None,
        clear_cache: bool = False,
    ) -> BatchItem:
        """Create and persist one file, capturing any failure in the item."""
        source = Path(path)
        try:
            result = await self.create(path, initial_contents, clear_cache)
        except Exception as exc:
            return BatchItem(source=source, error=exc)
        try:
            persisted = await result.persist()
        except Exception as exc:
            return BatchItem(source=source, result=result, error=exc)
        return BatchItem(source=source, result=result, persisted=persisted)

    async def create_many(
        self, paths: Iterable[PathLike], *, persist: bool = True, clear_cache: bool = False
    ) -> List[BatchItem]:
        """Process files concurrently; one file's failure never stops the others."""
        sources: Sequence[PathLike] = list(paths)
        if clear_cache:
            self.clear_cache()
        if persist:
            return list(await asyncio.gather(*(self.create_and_persist(p) for p in sources)))

        outcomes = await asyncio.gather(
            *(self.create(p) for p in sources), return_exceptions=True
        )
        items: List[BatchItem] = []
        for source, outcome in zip(sources, outcomes):
            if isinstance(outcome, BaseException):
                items.append(BatchItem(source=Path(source), error=outcome))
            else:
                items.append(BatchItem(source=Path(source), result=outcome))
        return items


__all__ = ["BatchItem", "DtsCreator"]
