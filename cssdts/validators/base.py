"""Core validation data structures."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol


@dataclass(frozen=True)
class ValidationOutcome:
    """Classification of a display name as a declaration member.

    ``is_valid`` false means the name is dropped and only ``message`` survives.
    ``needs_quotes`` means the name is emitted as a quoted property key.
    """

    is_valid: bool
    needs_quotes: bool = False
    message: Optional[str] = None

    @classmethod
    def bare(cls) -> "ValidationOutcome":
        return cls(is_valid=True)

    @classmethod
    def quoted(cls, message: str) -> "ValidationOutcome":
        return cls(is_valid=True, needs_quotes=True, message=message)

    @classmethod
    def skipped(cls, message: str) -> "ValidationOutcome":
        return cls(is_valid=False, message=message)


class Validator(Protocol):
    """Protocol implemented by member-name validators."""

    name: str

    def validate(self, key: str) -> ValidationOutcome:
        """Classify ``key`` without regard to any other key in the file."""
