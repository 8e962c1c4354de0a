from __future__ import annotations

import logging
import random as _random
import re
from collections.abc import Mapping
from numbers import Real
from operator import index as op_index
from typing import TYPE_CHECKING, Generic, TypeVar, overload

from hybridarray.equality import coercing, exact
from hybridarray.equality import equals as values_equal
from hybridarray.errors import EmptyCollectionError, InvalidArgumentError

if TYPE_CHECKING:
    import sys
    from collections.abc import Callable, Iterable, Iterator
    from typing import Any, Literal, SupportsIndex

    from hybridarray.equality import EqualityTest

    if sys.version_info < (3, 11):
        from typing_extensions import Self
    else:
        from typing import Self

    Key = int | str

T = TypeVar("T")

logger = logging.getLogger(__name__)


class _Marker:
    """Named singleton sentinel."""

    __slots__ = ("_name",)

    def __init__(self, name: str) -> None:
        self._name = name

    def __repr__(self) -> str:
        return self._name

    def __reduce__(self) -> str:
        return self._name


# Placed in an iterable passed to the constructor, leaves that index empty
GAP = _Marker("GAP")
# Returned from an each() callback, ends the walk
STOP = _Marker("STOP")

_MISSING = _Marker("_MISSING")

# Argument types whose items out() reads as keys
_KEY_COLLECTIONS = (list, tuple, set, frozenset, range)


def _classify(key: object) -> Key:
    """Return key as an ordered index (int) or a named key (str).

    Strings spelling a canonical non-negative integer are ordered indices.

    Raises:
        TypeError: If key is neither a string nor an integer
    """
    if isinstance(key, str):
        if key.isascii() and key.isdigit() and (key == "0" or key[0] != "0"):
            return int(key)
        return key
    if isinstance(key, bool):
        raise TypeError("hybridarray keys must be integers or strings, not bool")
    try:
        return op_index(key)  # type: ignore[arg-type]
    except TypeError:
        raise TypeError(f"hybridarray keys must be integers or strings, not {type(key).__name__}") from None


def _count_argument(n: object) -> int:
    """Validate a slot count argument."""
    try:
        count = op_index(n)  # type: ignore[arg-type]
    except TypeError:
        raise InvalidArgumentError(f"count must be an integer, not {type(n).__name__}") from None
    if count < 0:
        raise InvalidArgumentError(f"count must be non-negative, got {count}")
    return count


def _is_numeric(value: object) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _test_argument(test: object) -> Callable[[Any], bool]:
    """Turn a predicate or compiled pattern into a match function.

    Raises:
        InvalidArgumentError: If test is missing or of another kind
    """
    if test is None:
        raise InvalidArgumentError("no test given")
    if isinstance(test, re.Pattern):
        return lambda item: test.search(str(item)) is not None
    if callable(test):
        return lambda item: bool(test(item))
    raise InvalidArgumentError(f"test must be a callable or a compiled pattern, not {type(test).__name__}")


def _needle_matcher(needle: object, same: EqualityTest) -> Callable[[Any], bool]:
    if isinstance(needle, re.Pattern):
        return lambda item: needle.search(str(item)) is not None
    if callable(needle) and not isinstance(needle, type):
        return lambda item: bool(needle(item))
    return lambda item: same(needle, item)


class hybridarray(Generic[T]):  # noqa: N801
    """An ordered sequence with gaps plus named slots, extended with array utilities."""

    _ordered: dict[int, T]
    _named: dict[str, T]
    _length: int
    _default: T | None
    _equality: EqualityTest

    def __init__(
        self,
        data: Mapping[Any, T] | Iterable[T] | None = None,
        length: SupportsIndex | None = None,
        default: T | None = None,
        equality: EqualityTest = coercing,
    ) -> None:
        """Initialize a hybridarray from data.

        Args:
            data: Initial data (optional, defaults to empty)
                  - None: creates an empty hybridarray
                  - hybridarray: copies its slots and length
                  - mapping: integer-like keys become ordered slots, other strings named slots
                  - iterable: elements populate indices 0, 1, 2, etc.; GAP leaves an index empty
            length: Logical length of the ordered region (optional, inferred from data)
            default: Value returned when a gap is read by index (default: None)
            equality: Loose equality strategy used by comparisons (default: coercing)

        Raises:
            TypeError: If a key is not an integer or string, or length doesn't support __index__
            ValueError: If a mapping index or length is negative, or length is too small
        """
        self._ordered = {}
        self._named = {}
        self._default = default
        self._equality = equality

        if length is not None:
            try:
                length = op_index(length)
            except TypeError:
                raise TypeError("length must support __index__") from None
            if length < 0:
                raise ValueError("length must be non-negative")

        count = 0
        if data is None:
            pass
        elif isinstance(data, hybridarray):
            self._ordered = dict(data._ordered)
            self._named = dict(data._named)
            count = data._length
        elif isinstance(data, Mapping):
            for key, value in data.items():
                slot = _classify(key)
                if isinstance(slot, str):
                    self._named[slot] = value
                elif slot < 0:
                    raise ValueError("mapping indices must be non-negative")
                else:
                    self._ordered[slot] = value
                    count = max(count, slot + 1)
        else:
            for i, value in enumerate(data):
                if value is not GAP:
                    self._ordered[i] = value
                count = i + 1

        if length is None:
            length = count
        elif length < count:
            raise ValueError("length must accommodate all data")
        self._length = length

    @property
    def length(self) -> int:
        """Get or set the length of the ordered region.

        :getter: Returns the highest ordered index + 1, gaps included.
        :setter: Truncates the ordered region or pads it with trailing gaps.

        Raises:
            TypeError: If value is not an integer (when setting)
            ValueError: If value is negative (when setting)
        """
        return self._length

    @length.setter
    def length(self, new_length: int) -> None:
        if isinstance(new_length, bool) or not isinstance(new_length, int):
            raise TypeError("length must be an integer")
        if new_length < 0:
            raise ValueError("length must be non-negative")

        if new_length < self._length:
            self._ordered = {k: v for k, v in self._ordered.items() if k < new_length}
        self._length = new_length

    @property
    def default(self) -> T | None:
        """Get or set the value returned when a gap is read by index."""
        return self._default

    @default.setter
    def default(self, new_default: T | None) -> None:
        self._default = new_default

    @property
    def equality(self) -> EqualityTest:
        """The loose equality strategy used when ``strict`` is not requested."""
        return self._equality

    # ---------------------
    # Python protocol
    # ---------------------
    def __len__(self) -> int:
        """Return the length of the ordered region."""
        return self._length

    def __bool__(self) -> bool:
        """Return True if any slot is occupied."""
        return self.size() > 0

    def __iter__(self) -> Iterator[T]:
        """Iterate over occupied values in walk order."""
        for _, value in self._walk():
            yield value

    def __contains__(self, value: object) -> bool:
        """Check if an occupied slot loosely equals value.

        A value-only test: callables and patterns are compared, not applied.
        """
        return any(self._equality(value, item) for item in self)

    @overload
    def __getitem__(self, key: SupportsIndex | str) -> T: ...

    @overload
    def __getitem__(self, key: slice) -> hybridarray[T]: ...

    def __getitem__(self, key: SupportsIndex | str | slice) -> T | hybridarray[T]:
        """Get a slot by index or name, or a slice of the ordered region.

        Args:
            key: Integer index, string key or slice

        Returns:
            Slot value (the default for a gap), or a new hybridarray for a slice

        Raises:
            TypeError: If key is not an integer, string or slice
            IndexError: If an ordered index is out of range
            KeyError: If a named key is not present
        """
        if isinstance(key, slice):
            start, stop, step = key.indices(self._length)
            positions = range(start, stop, step)

            result = self._spawn()
            result._ordered = {i: self._ordered[old] for i, old in enumerate(positions) if old in self._ordered}
            result._length = len(positions)
            return result

        slot = _classify(key)
        if isinstance(slot, str):
            return self._named[slot]
        idx = self._normalize_index(slot, "hybridarray index out of range")
        return self._ordered.get(idx, self._default)  # type: ignore[return-value]

    def __setitem__(self, key: SupportsIndex | str, value: T) -> None:
        """Set a slot by index or name.

        Assigning at or beyond the length grows the ordered region; skipped
        indices become gaps.

        Raises:
            TypeError: If key is not an integer or string
            IndexError: If a negative index reaches before the start
        """
        slot = _classify(key)
        if isinstance(slot, str):
            self._named[slot] = value
            return

        if slot < 0:
            slot += self._length
            if slot < 0:
                raise IndexError("hybridarray assignment index out of range")
        self._ordered[slot] = value
        if slot >= self._length:
            self._length = slot + 1

    def __delitem__(self, key: SupportsIndex | str) -> None:
        """Delete a slot: named keys are dropped, ordered slots are spliced out.

        Raises:
            IndexError: If an ordered index is out of range
            KeyError: If a named key is not present
        """
        slot = _classify(key)
        if isinstance(slot, str):
            del self._named[slot]
            return
        self._splice(self._normalize_index(slot, "hybridarray index out of range"))

    def __eq__(self, other: object) -> bool:
        """Return True if other is a container with structurally equal entries."""
        if self is other:
            return True
        if not isinstance(other, (hybridarray, list, tuple, Mapping)):
            return NotImplemented
        return self.equals(other)

    def __hash__(self) -> None:  # type: ignore[override]
        """Raise TypeError as hybridarrays are not hashable."""
        raise TypeError("unhashable type: 'hybridarray'")

    def __copy__(self) -> hybridarray[T]:
        return self._spawn(self)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        """Return a string representation of the hybridarray.

        Format: *<length/default>[idx: val, ..., 'name': val]*
        - Uses ... for each run of gaps
        - Named slots follow the ordered region in insertion order
        """
        parts: list[str] = []
        previous = -1
        for index in sorted(self._ordered):
            if index > previous + 1:
                parts.append("...")
            parts.append(f"{index}: {self._ordered[index]!r}")
            previous = index
        if previous < self._length - 1:
            parts.append("...")
        parts.extend(f"{name!r}: {value!r}" for name, value in self._named.items())

        return f"<{self._length}/{self._default!r}>[{', '.join(parts)}]"

    # ---------------------
    # Internals
    # ---------------------
    def _spawn(self, data: Mapping[Any, Any] | Iterable[Any] | None = None) -> hybridarray[Any]:
        """Build a new hybridarray sharing this one's default and equality."""
        return type(self)(data, default=self._default, equality=self._equality)

    def _coerce(self, other: object) -> hybridarray[Any] | None:
        """Return other as a hybridarray, or None if it is not container-like."""
        if isinstance(other, hybridarray):
            return other
        if isinstance(other, (list, tuple, Mapping)):
            return self._spawn(other)
        return None

    def _walk(self) -> Iterator[tuple[Key, T]]:
        """Yield (key, value) for occupied slots: ordered ascending, then named by insertion.

        Key sets are snapshotted up front; slots removed before they are
        reached are skipped.
        """
        for index in sorted(self._ordered):
            if index in self._ordered:
                yield index, self._ordered[index]
        for name in list(self._named):
            if name in self._named:
                yield name, self._named[name]

    def _has(self, key: Key) -> bool:
        if isinstance(key, str):
            return key in self._named
        return key in self._ordered

    def _normalize_index(self, idx: int, message: str) -> int:
        if idx < 0:
            idx += self._length
        if not 0 <= idx < self._length:
            raise IndexError(message)
        return idx

    def _splice(self, idx: int) -> None:
        """Remove ordered slot idx and shift later slots down by one."""
        self._ordered.pop(idx, None)
        self._shift_keys(idx + 1, -1)
        self._length -= 1

    def _shift_keys(self, start_index: int, delta: int) -> None:
        """Shift all ordered indices >= start_index by delta.

        Note:
            Requires that start_index + delta >= 0 to ensure no index shifts below zero.
        """
        if delta == 0:
            return

        assert delta > 0 or start_index + delta >= 0, "shift would create negative indices"

        # delta < 0: process ascending (move left, start with leftmost)
        # delta > 0: process descending (move right, start with rightmost)
        keys_to_shift = sorted((k for k in self._ordered if k >= start_index), reverse=(delta > 0))
        for key in keys_to_shift:
            self._ordered[key + delta] = self._ordered.pop(key)

    def _flatten_keys(self, argument: object) -> Iterator[object]:
        if argument is None or argument is False:
            return
        if isinstance(argument, hybridarray):
            yield from argument
        elif isinstance(argument, _KEY_COLLECTIONS):
            yield from argument
        else:
            yield argument

    # ---------------------
    # Iteration and accessors
    # ---------------------
    def each(self, callback: Callable[[T, Key], object]) -> Self:
        """Call callback(value, key) for every occupied slot.

        Ordered slots are visited in ascending index order with int keys, then
        named slots in insertion order with str keys. Gaps are never visited.

        Args:
            callback: Function of (value, key); returning STOP ends the walk

        Returns:
            self
        """
        for key, value in self._walk():
            if callback(value, key) is STOP:
                break
        return self

    def items(self) -> Iterator[tuple[Key, T]]:
        """Return an iterator of (key, value) pairs in walk order."""
        return self._walk()

    def get(self, key: SupportsIndex | str, fallback: Any = None) -> Any:
        """Return the value of an occupied slot, or fallback if there is none."""
        slot = _classify(key)
        if isinstance(slot, str):
            return self._named.get(slot, fallback)
        if slot < 0:
            slot += self._length
        return self._ordered.get(slot, fallback)

    def keys(self, only_ordered: bool = False) -> hybridarray[Key]:
        """Return the keys of occupied slots.

        Args:
            only_ordered: Only return the keys of ordered slots

        Returns:
            New hybridarray of keys in walk order
        """
        return self._spawn(key for key, _ in self._walk() if not only_ordered or isinstance(key, int))

    def values(self, only_ordered: bool = False) -> hybridarray[T]:
        """Return the values of occupied slots.

        Args:
            only_ordered: Only return the values of ordered slots

        Returns:
            New hybridarray of values in walk order, gaps skipped
        """
        return self._spawn(value for key, value in self._walk() if not only_ordered or isinstance(key, int))

    def size(self) -> int:
        """Return the number of occupied slots, ordered and named."""
        return len(self._ordered) + len(self._named)

    def copy(self) -> hybridarray[T]:
        """Return a shallow copy of the hybridarray."""
        return self.__copy__()

    def clear(self) -> Self:
        """Remove every slot."""
        self._ordered.clear()
        self._named.clear()
        self._length = 0
        return self

    def unset(self, index: SupportsIndex) -> T | None:
        """Turn an ordered slot into a gap without shifting anything.

        Args:
            index: Index to empty

        Returns:
            The value that was at the index before unsetting (the default for a gap)

        Raises:
            IndexError: If index is out of range
        """
        idx = self._normalize_index(op_index(index), "hybridarray index out of range")
        return self._ordered.pop(idx, self._default)

    # ---------------------
    # Structural editors
    # ---------------------
    def append(self, *values: T) -> Self:
        """Append values as new ordered slots at the end.

        Returns:
            self
        """
        for value in values:
            self._ordered[self._length] = value
            self._length += 1
        return self

    def prepend(self, *values: T) -> Self:
        """Insert each value at index 0, shifting the ordered region up by one per value.

        The last value given ends up first: ``[1, 2].prepend(3, 4)`` gives ``[4, 3, 1, 2]``.

        Returns:
            self
        """
        for value in values:
            self._shift_keys(0, 1)
            self._ordered[0] = value
            self._length += 1
        return self

    def trim_right(self, n: SupportsIndex = 1) -> Self:
        """Remove the last n ordered slots, gaps included.

        Args:
            n: Number of slots to remove, clamped to the length

        Returns:
            self

        Raises:
            InvalidArgumentError: If n is not a non-negative integer
        """
        count = min(_count_argument(n), self._length)
        self.length = self._length - count
        return self

    def trim_left(self, n: SupportsIndex = 1) -> Self:
        """Remove the first n ordered slots and shift the rest down.

        Args:
            n: Number of slots to remove, clamped to the length

        Returns:
            self

        Raises:
            InvalidArgumentError: If n is not a non-negative integer
        """
        count = min(_count_argument(n), self._length)
        for idx in [k for k in self._ordered if k < count]:
            del self._ordered[idx]
        # Leaves the last count positions vacant for trim_right to cut
        self._shift_keys(count, -count)
        return self.trim_right(count)

    def head(self, n: SupportsIndex = 1) -> hybridarray[T]:
        """Return the occupied values among the first n ordered slots.

        Gaps are skipped, so fewer than n values may come back.

        Raises:
            InvalidArgumentError: If n is not a non-negative integer
        """
        stop = min(_count_argument(n), self._length)
        return self._spawn(self._ordered[i] for i in range(stop) if i in self._ordered)

    def tail(self, n: SupportsIndex = 1) -> hybridarray[T]:
        """Return the occupied values among the last n ordered slots.

        Gaps are skipped, so fewer than n values may come back.

        Raises:
            InvalidArgumentError: If n is not a non-negative integer
        """
        start = max(self._length - _count_argument(n), 0)
        return self._spawn(self._ordered[i] for i in range(start, self._length) if i in self._ordered)

    def out(self, *indexes: object) -> Self:
        """Remove slots by key.

        Each argument is a key or a collection of keys (hybridarray, list,
        tuple, set, range). Named keys are dropped; ordered slots are spliced
        out from the highest index down so earlier removals never move later
        targets. Missing keys are ignored, and False/None (an empty
        index_of() result) contribute nothing. With no argument at all, the
        last ordered slot is removed.

        Returns:
            self

        Raises:
            TypeError: If a key is neither an integer nor a string
        """
        if not indexes:
            if self._length:
                self._splice(self._length - 1)
            return self

        ordered: set[int] = set()
        named: dict[str, None] = {}
        for argument in indexes:
            for key in self._flatten_keys(argument):
                slot = _classify(key)
                if isinstance(slot, str):
                    named[slot] = None
                    continue
                if slot < 0:
                    slot += self._length
                if 0 <= slot < self._length:
                    ordered.add(slot)

        for name in named:
            self._named.pop(name, None)
        for idx in sorted(ordered, reverse=True):
            self._splice(idx)

        logger.debug("out: removed %d ordered and %d named slots", len(ordered), len(named))
        return self

    def compact(self) -> Self:
        """Remove all gaps, re-indexing occupied ordered values contiguously from 0.

        Named slots are untouched.

        Returns:
            self
        """
        occupied = [self._ordered[idx] for idx in sorted(self._ordered)]
        dropped = self._length - len(occupied)
        self._ordered = dict(enumerate(occupied))
        self._length = len(occupied)

        logger.debug("compact: dropped %d gaps", dropped)
        return self

    # ---------------------
    # Combinators
    # ---------------------
    def merge(self, *others: object) -> Self:
        """Merge containers and values into this hybridarray.

        For a container argument (hybridarray, list, tuple, mapping) named
        slots overwrite same-named slots here and ordered values are appended.
        Any other argument is appended as a single value. Later arguments win.

        Returns:
            self
        """
        # Wrap every argument before touching self so a bad key changes nothing
        coerced = [(other, self._coerce(other)) for other in others]
        for other, container in coerced:
            if container is None:
                self.append(other)  # type: ignore[arg-type]
                continue
            for key, value in container.items():
                if isinstance(key, str):
                    self._named[key] = value
                else:
                    self.append(value)

        logger.debug("merge: merged %d arguments, size is now %d", len(others), self.size())
        return self

    def intersect(self, other: object) -> Self:
        """Keep only the values also present in other.

        Presence is decided with the loose equality of other. Lists, tuples and
        mappings are wrapped with this hybridarray's equality.

        Args:
            other: Container to compare values with

        Returns:
            self

        Raises:
            InvalidArgumentError: If other is not a container
        """
        container = self._coerce(other)
        if container is None:
            raise InvalidArgumentError(f"intersect expects a container, not {type(other).__name__}")

        candidates = list(container)
        doomed = [key for key, value in self._walk() if not any(container._equality(c, value) for c in candidates)]
        return self.out(doomed)

    def intersect_keys(self, other: object) -> Self:
        """Keep only the entries whose key is occupied in other, whatever the value.

        Args:
            other: Container to compare keys with

        Returns:
            self

        Raises:
            InvalidArgumentError: If other is not a container
        """
        container = self._coerce(other)
        if container is None:
            raise InvalidArgumentError(f"intersect_keys expects a container, not {type(other).__name__}")

        return self.out([key for key, _ in self._walk() if not container._has(key)])

    def dedupe(self, test: Callable[[Any, Any], bool] | None = None) -> Self:
        """Remove later duplicates, keeping the first occurrence of each value.

        Args:
            test: Optional function of (value, kept_value) telling if they are duplicates.
                  Defaults to the loose equality strategy.

        Returns:
            self
        """
        same = test if test is not None else self._equality
        kept: list[T] = []
        duplicates: list[Key] = []
        for key, value in self._walk():
            if any(same(value, seen) for seen in kept):
                duplicates.append(key)
            else:
                kept.append(value)

        logger.debug("dedupe: %d duplicates found", len(duplicates))
        return self.out(duplicates)

    # ---------------------
    # Predicates and search
    # ---------------------
    def contains(self, needle: object, strict: bool = False, quick: bool = False) -> int | Literal[False]:
        """Count occupied slots whose value matches needle.

        Args:
            needle: Value to look for, a compiled pattern searched in str(value),
                    or a predicate called with each value
            strict: Compare literal needles with exact rather than loose equality
            quick: Stop at the first match

        Returns:
            Number of matches, or False if there is none. With quick the count
            stops at 1, so only its truthiness is meaningful.
        """
        match = _needle_matcher(needle, exact if strict else self._equality)
        found = 0

        def visit(value: T, key: Key) -> object:
            nonlocal found
            if match(value):
                found += 1
                if quick:
                    return STOP
            return None

        self.each(visit)
        return found or False

    def contains_key(self, needle: object, quick: bool = False) -> int | Literal[False]:
        """Count occupied slots whose key matches needle.

        Args:
            needle: Key to look for (classified like any key, so "2" finds 2),
                    a compiled pattern searched in str(key), or a predicate called with each key
            quick: Stop at the first match

        Returns:
            Number of matches, or False if there is none
        """
        if isinstance(needle, (int, str)) and not isinstance(needle, bool):
            needle = _classify(needle)
        match = _needle_matcher(needle, exact)
        found = 0

        def visit(value: T, key: Key) -> object:
            nonlocal found
            if match(key):
                found += 1
                if quick:
                    return STOP
            return None

        self.each(visit)
        return found or False

    def index_of(self, value: object, strict: bool = False) -> hybridarray[Key] | Literal[False]:
        """Return the keys of every slot holding value.

        Args:
            value: Value to search for
            strict: Use exact rather than loose equality

        Returns:
            New hybridarray of keys, or False if value is not found
        """
        same = exact if strict else self._equality
        keys = self._spawn(key for key, item in self._walk() if same(item, value))
        return keys if keys.size() else False

    def filter(self, test: Callable[[T], bool] | re.Pattern[str]) -> Self:
        """Remove every entry whose value fails test.

        Args:
            test: Predicate called with each value, or a compiled pattern searched in str(value)

        Returns:
            self

        Raises:
            InvalidArgumentError: If test is missing or neither callable nor a pattern
        """
        match = _test_argument(test)
        return self.out([key for key, value in self._walk() if not match(value)])

    def filter_keys(self, test: Callable[[Key], bool] | re.Pattern[str]) -> Self:
        """Remove every entry whose key fails test.

        Args:
            test: Predicate called with each key, or a compiled pattern searched in str(key)

        Returns:
            self

        Raises:
            InvalidArgumentError: If test is missing or neither callable nor a pattern
        """
        match = _test_argument(test)
        return self.out([key for key, _ in self._walk() if not match(key)])

    # ---------------------
    # Derived utilities
    # ---------------------
    def _extreme(self, test: Callable[[Any, Any], bool] | None, pick: Callable[..., Any], label: str) -> Any:
        values = list(self)
        if not values:
            raise EmptyCollectionError(f"{label}() of an empty hybridarray")

        if test is not None:
            current = values[0]
            for candidate in values[1:]:
                if test(candidate, current):
                    current = candidate
            return current

        numeric = [value for value in values if _is_numeric(value)]
        if not numeric:
            return values[0]
        return pick(numeric)

    def min(self, test: Callable[[Any, Any], bool] | None = None) -> Any:
        """Return the smallest occupied value.

        Args:
            test: Optional function of (candidate, current_min) returning True
                  when candidate should become the minimum. By default numbers
                  are compared and non-numeric values ignored.

        Raises:
            EmptyCollectionError: If no slot is occupied
        """
        return self._extreme(test, min, "min")

    def max(self, test: Callable[[Any, Any], bool] | None = None) -> Any:
        """Return the largest occupied value.

        Args:
            test: Optional function of (candidate, current_max) returning True
                  when candidate should become the maximum. By default numbers
                  are compared and non-numeric values ignored.

        Raises:
            EmptyCollectionError: If no slot is occupied
        """
        return self._extreme(test, max, "max")

    def shuffle(self, rng: _random.Random | None = None) -> Self:
        """Randomize the order of the occupied ordered values in place.

        Values move between the occupied positions only, so the gap layout
        is kept. Named slots are untouched.

        Args:
            rng: Random generator to use (default: the random module)

        Returns:
            self
        """
        positions = sorted(self._ordered)
        shuffled = [self._ordered[idx] for idx in positions]
        (rng if rng is not None else _random).shuffle(shuffled)
        self._ordered = dict(zip(positions, shuffled, strict=True))

        logger.debug("shuffle: reordered %d values", len(shuffled))
        return self

    def random(self, rng: _random.Random | None = None) -> T:
        """Return one occupied value, ordered or named, chosen uniformly.

        Args:
            rng: Random generator to use (default: the random module)

        Raises:
            EmptyCollectionError: If no slot is occupied
        """
        values = list(self)
        if not values:
            raise EmptyCollectionError("cannot choose from an empty hybridarray")
        return (rng if rng is not None else _random).choice(values)

    def implode(self, glue: str = ", ") -> str:
        """Join the occupied values into one string.

        Args:
            glue: Separator placed between values

        Returns:
            ``str()`` of each value, joined with glue
        """
        return str(glue).join(str(value) for value in self)

    def to_string(self) -> str:
        """Return the values wrapped in brackets, e.g. ``[1, 2, 3]``."""
        return f"[{self.implode()}]"

    def equals(self, other: object) -> bool:
        """Compare entries with another container.

        Equal when other is a container of the same size and every entry of
        other has a same-keyed occupied slot here whose value is equal,
        nested containers compared recursively.

        Args:
            other: Value to compare with

        Returns:
            True if the containers hold the same entries, False otherwise or if other is not a container

        Raises:
            InvalidArgumentError: If other is None
        """
        if other is None:
            raise InvalidArgumentError("no value given to compare with")

        try:
            container = self._coerce(other)
        except TypeError:
            # A mapping with keys no hybridarray can hold
            return False
        if container is None or container.size() != self.size():
            return False

        for key, value in container.items():
            mine = self.get(key, _MISSING)
            if mine is _MISSING or not values_equal(mine, value):
                return False
        return True
