"""Validator deciding how a CSS module key can appear in a declaration block."""

from __future__ import annotations

from typing import FrozenSet, Iterable, Optional

from .base import ValidationOutcome, Validator

# ES2015 strict-mode reserved words, including the literal keywords.
RESERVED_WORDS: FrozenSet[str] = frozenset(
    {
        "break",
        "case",
        "catch",
        "class",
        "const",
        "continue",
        "debugger",
        "default",
        "delete",
        "do",
        "else",
        "enum",
        "export",
        "extends",
        "false",
        "finally",
        "for",
        "function",
        "if",
        "implements",
        "import",
        "in",
        "instanceof",
        "interface",
        "let",
        "new",
        "null",
        "package",
        "private",
        "protected",
        "public",
        "return",
        "static",
        "super",
        "switch",
        "this",
        "throw",
        "true",
        "try",
        "typeof",
        "var",
        "void",
        "while",
        "with",
        "yield",
    }
)

# Characters that would terminate or escape a single-quoted key.
_UNQUOTABLE = frozenset({"'", "\\", "\r", "\n", "\u2028", "\u2029"})


def is_bare_identifier(key: str) -> bool:
    """Return True when ``key`` can be written as an unquoted member name."""
    # str.isidentifier follows XID_Start/XID_Continue; `$` is the one extra
    # character identifiers allow.
    if not key.replace("$", "_").isidentifier():
        return False
    return key not in RESERVED_WORDS


def is_quotable(key: str) -> bool:
    """Return True when ``key`` fits verbatim inside a single-quoted key."""
    return bool(key) and not any(char in _UNQUOTABLE for char in key)


class IdentifierValidator(Validator):
    """Classifies display names as bare, quoted or skipped members.

    ``reserved_members`` names members the surrounding declaration block
    already defines; a key equal to one of them is skipped. The standard
    ``IStyles`` frame declares only its index signature, whose parameter name
    is local to the signature, so nothing is reserved by default.
    """

    name = "identifier"

    def __init__(self, reserved_members: Optional[Iterable[str]] = None) -> None:
        self.reserved_members: FrozenSet[str] = frozenset(reserved_members or ())

    def validate(self, key: str) -> ValidationOutcome:
        if key in self.reserved_members:
            return ValidationOutcome.skipped(
                f"{key} is not a valid identifier and was skipped."
            )
        if is_bare_identifier(key):
            return ValidationOutcome.bare()
        if is_quotable(key):
            return ValidationOutcome.quoted(
                f"{key} is not a valid identifier. Adding quotes."
            )
        return ValidationOutcome.skipped(
            f"{key} is not a valid identifier and was skipped."
        )


__all__ = ["IdentifierValidator", "RESERVED_WORDS", "is_bare_identifier", "is_quotable"]
