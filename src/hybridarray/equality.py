"""Equality strategies used by hybridarray comparisons.

A strategy is any callable ``(a, b) -> bool``. Two are provided:

- :func:`exact` matches only values of the same type that compare equal.
- :func:`coercing` also matches numbers against numeric strings.

:func:`equals` is the generic value equality that containers fall back on
for their non-container elements.
"""

from __future__ import annotations

from numbers import Real
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable
    from typing import Any

    EqualityTest = Callable[[Any, Any], bool]

__all__ = ["coercing", "equals", "exact"]


def exact(a: object, b: object) -> bool:
    """Return True if a and b are the same object or same-typed equal values.

    Args:
        a: First value
        b: Second value

    Returns:
        True if ``a is b`` or both have the same type and compare equal
    """
    if a is b:
        return True
    if type(a) is not type(b):
        return False
    return bool(a == b)


def _parse_number(text: str) -> float | None:
    stripped = text.strip()
    if not stripped:
        return 0.0
    try:
        return float(stripped)
    except ValueError:
        return None


def coercing(a: object, b: object) -> bool:
    """Return True if a and b are equal after numeric coercion.

    Strings are parsed as numbers when compared with a number, a blank string
    counting as zero. Otherwise falls back to ``==``.

    Args:
        a: First value
        b: Second value

    Returns:
        True if the values match loosely
    """
    if exact(a, b):
        return True
    if isinstance(a, str) and isinstance(b, Real):
        return _parse_number(a) == b
    if isinstance(b, str) and isinstance(a, Real):
        return _parse_number(b) == a
    return bool(a == b)


def equals(a: Any, b: Any) -> bool:
    """Generic value equality.

    Values exposing an ``equals`` method (containers) compare structurally
    through it; anything else compares with :func:`exact`.
    """
    if a is None or b is None:
        return a is b
    if callable(getattr(a, "equals", None)) and not isinstance(a, type):
        return bool(a.equals(b))
    if callable(getattr(b, "equals", None)) and not isinstance(b, type):
        return bool(b.equals(a))
    return exact(a, b)
