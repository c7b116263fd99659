"""Caches shared between the creator and its loader."""

from .token_cache import TokenCache

__all__ = ["TokenCache"]
