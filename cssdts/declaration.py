"""Rendering of CSS module tokens into `.d.ts` declaration blocks."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Set, Tuple

from .casing import CasingPolicy, KeyConverter, converter_for
from .config import SEMICOLON, TAB_INDENT, RunConfiguration
from .persistence import OutputWriter, PersistOutcome, default_writer
from .validators import IdentifierValidator, Validator

LINE_SEPARATOR = "\n"
DECLARATION_SUFFIX = ".d.ts"
INTERFACE_NAME = "IStyles"


class DeclarationFormatter:
    """Turns an ordered token sequence into declaration member lines."""

    def __init__(
        self,
        *,
        casing: CasingPolicy = CasingPolicy.IDENTITY,
        validator: Optional[Validator] = None,
        indent: str = TAB_INDENT,
        terminator: str = SEMICOLON,
        converter: Optional[KeyConverter] = None,
    ) -> None:
        self.casing = casing
        self._convert: KeyConverter = converter or converter_for(casing)
        self.validator: Validator = validator or IdentifierValidator()
        self.indent = indent
        self.terminator = terminator

    @classmethod
    def from_config(
        cls, config: RunConfiguration, validator: Optional[Validator] = None
    ) -> "DeclarationFormatter":
        return cls(
            casing=config.casing,
            converter=config.converter,
            validator=validator,
            indent=config.indent,
            terminator=config.terminator,
        )

    def member_line(self, key: str, *, quoted: bool = False) -> str:
        rendered = f"'{key}'" if quoted else key
        return f"{self.indent}{rendered}: string{self.terminator}"

    def format_members(self, tokens: Iterable[str]) -> Tuple[List[str], List[str]]:
        """Return ``(lines, warnings)`` for ``tokens`` in their original order.

        Names that fail validation are left out and reported; a display name
        that repeats an earlier one (two raw tokens colliding after casing)
        keeps its first occurrence only.
        """
        lines: List[str] = []
        warnings: List[str] = []
        seen: Set[str] = set()
        for token in tokens:
            key = self._convert(token)
            outcome = self.validator.validate(key)
            if not outcome.is_valid:
                warnings.append(outcome.message or f"{key} was skipped.")
                continue
            if key in seen:
                warnings.append(f"{key} duplicates an earlier member and was skipped.")
                continue
            seen.add(key)
            if outcome.needs_quotes and outcome.message:
                warnings.append(outcome.message)
            lines.append(self.member_line(key, quoted=outcome.needs_quotes))
        return lines, warnings

    def render(self, lines: Sequence[str]) -> str:
        """Wrap member lines in the fixed interface header and export footer."""
        body = list(lines) if lines else [""]
        document = [
            f"interface {INTERFACE_NAME} {{",
            f"{self.indent}[name: string]: string{self.terminator}",
            *body,
            "}",
            f"declare var styles: {INTERFACE_NAME}{self.terminator}",
            f"export = styles{self.terminator}",
        ]
        return LINE_SEPARATOR.join(document) + LINE_SEPARATOR


@dataclass(frozen=True)
class DeclarationResult:
    """Generated declaration for one source file.

    ``tokens`` keeps every raw token name the loader produced, including the
    ones that were skipped, so callers can audit what was dropped.
    """

    config: RunConfiguration
    relative_input: str
    tokens: Tuple[str, ...]
    lines: Tuple[str, ...]
    warnings: Tuple[str, ...]
    writer: OutputWriter = field(default_factory=default_writer, compare=False, repr=False)

    @property
    def formatter(self) -> DeclarationFormatter:
        return DeclarationFormatter.from_config(self.config)

    @property
    def contents(self) -> str:
        return self.formatter.render(self.lines)

    @property
    def output_path(self) -> Path:
        name = self.relative_input
        if self.config.drop_extension:
            name = remove_extension(name)
        return _join(self.config.output_directory, name + DECLARATION_SUFFIX)

    @property
    def input_path(self) -> Path:
        return _join(self.config.input_directory, self.relative_input)

    def to_bytes(self) -> bytes:
        return self.contents.encode("utf-8")

    async def persist(self) -> PersistOutcome:
        """Write the declaration next to its configured output path.

        Raises :class:`cssdts.persistence.PersistError` when the directory or
        file cannot be written; the result itself is left untouched.
        """
        return await self.writer.write(self.output_path, self.to_bytes())


def format_declaration(
    tokens: Iterable[str],
    *,
    config: RunConfiguration,
    relative_input: str,
    validator: Optional[Validator] = None,
    writer: Optional[OutputWriter] = None,
) -> DeclarationResult:
    """Convert, validate and render ``tokens`` into a :class:`DeclarationResult`."""
    raw_tokens = tuple(tokens)
    formatter = DeclarationFormatter.from_config(config, validator)
    lines, warnings = formatter.format_members(raw_tokens)
    return DeclarationResult(
        config=config,
        relative_input=relative_input,
        tokens=raw_tokens,
        lines=tuple(lines),
        warnings=tuple(warnings),
        writer=writer or default_writer(),
    )


def remove_extension(path: str) -> str:
    root, _ = os.path.splitext(path)
    return root


def _join(base: Path, relative: str) -> Path:
    return Path(os.path.normpath(os.path.join(base, relative)))


__all__ = [
    "DECLARATION_SUFFIX",
    "DeclarationFormatter",
    "DeclarationResult",
    "LINE_SEPARATOR",
    "format_declaration",
    "remove_extension",
]
