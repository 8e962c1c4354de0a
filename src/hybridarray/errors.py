from __future__ import annotations

__all__ = ["EmptyCollectionError", "HybridArrayError", "InvalidArgumentError"]


class HybridArrayError(Exception):
    """Base class for errors raised by hybridarray operations."""


class InvalidArgumentError(HybridArrayError, TypeError):
    """An argument has the wrong kind: a non-integer count, a non-container, or a missing test."""


class EmptyCollectionError(HybridArrayError, ValueError):
    """The operation needs at least one occupied slot."""
