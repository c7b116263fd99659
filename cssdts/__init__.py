"""Generate TypeScript declarations for CSS modules."""

from .casing import CasingPolicy, convert
from .config import RunConfiguration
from .declaration import DeclarationFormatter, DeclarationResult, format_declaration
from .loader import FileSystemLoader, SourceReadError
from .orchestrator import DtsCreator
from .persistence import PersistError, PersistOutcome
from .stores import TokenCache
from .validators import IdentifierValidator, ValidationOutcome

__all__ = [
    "CasingPolicy",
    "DeclarationFormatter",
    "DeclarationResult",
    "DtsCreator",
    "FileSystemLoader",
    "IdentifierValidator",
    "PersistError",
    "PersistOutcome",
    "RunConfiguration",
    "SourceReadError",
    "TokenCache",
    "ValidationOutcome",
    "convert",
    "format_declaration",
]
