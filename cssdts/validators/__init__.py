"""Validation package for declaration member names."""

from .base import ValidationOutcome, Validator
from .identifier import IdentifierValidator, is_bare_identifier

__all__ = [
    "IdentifierValidator",
    "ValidationOutcome",
    "Validator",
    "is_bare_identifier",
]
