"""
tablekit Array Operations.

Position-aware functions for arrays: lists whose elements are addressed by
consecutive positions starting at 1. Positions passed to and returned from
these functions are 1-indexed, so position ``p`` refers to ``array[p - 1]``.

The ``Array`` namespace of the facade exposes these functions and falls back
to :mod:`tablekit.generic` for everything not defined here. Functions that
share a name with a generic one override it.

Only :func:`slice_in_place` mutates its argument.
"""

from __future__ import annotations

import builtins
import numbers
from collections.abc import Callable, MutableSequence
from typing import Any

from tablekit import generic
from tablekit.containers import is_array
from tablekit.rng import RandomSource, default_source
from tablekit.utils.errors import (
    CyclicStructureError,
    EmptyContainerError,
    InvalidArgumentError,
    InvalidWeightError,
)


def mutating[F: Callable[..., Any]](func: F) -> F:
    """Mark a function as modifying the array passed to it."""
    func.__mutates_argument__ = True  # type: ignore[attr-defined]
    return func


def mutates_argument(func: Callable[..., Any]) -> bool:
    """Return True if func was marked with :func:`mutating`."""
    return getattr(func, "__mutates_argument__", False)


# =============================================================================
# Selection
# =============================================================================


def first[T](
    array: MutableSequence[T], predicate: Callable[[int, T], bool]
) -> tuple[int, T] | None:
    """
    Return the position and value of the earliest element accepted by the
    predicate, or None.
    """
    for index, value in enumerate(array, start=1):
        if predicate(index, value):
            return index, value
    return None


def filter[T](array: MutableSequence[T], predicate: Callable[[int, T], bool]) -> list[T]:
    """
    Return a new array of the elements accepted by the predicate.

    Surviving elements are packed from position 1 in their original order, so
    they generally do not keep their old positions. ``generic.filter`` keeps
    the positions as keys instead.

    Example:
        filter([5, 6, 7], lambda i, v: v != 6) -> [5, 7]
    """
    return [value for index, value in enumerate(array, start=1) if predicate(index, value)]


def remove_values[T](array: MutableSequence[T], *values: T) -> list[T]:
    """Return a new array without the given values, packed from position 1."""
    return filter(array, lambda _, value: value not in values)


# =============================================================================
# Slicing
# =============================================================================


def _check_bounds(operation: str, count: int, start: int) -> None:
    if count < 0:
        raise InvalidArgumentError(f"count must be >= 0, got {count}", operation=operation)
    if start < 1:
        raise InvalidArgumentError(f"start must be >= 1, got {start}", operation=operation)


def range[T](array: MutableSequence[T], count: int, start: int = 1) -> list[T]:
    """
    Return a new array of ``count`` elements beginning at position ``start``.

    Requests running past the end are truncated to the available elements.

    Example:
        range([10, 20, 30, 40], 2, 2) -> [20, 30]
    """
    _check_bounds("range", count, start)
    stop = builtins.min(len(array), start - 1 + count)
    return [array[index] for index in builtins.range(start - 1, stop)]


@mutating
def slice_in_place[T](array: MutableSequence[T], count: int, start: int = 1) -> list[T]:
    """
    Remove ``count`` elements beginning at position ``start`` and return them.

    WARNING: this mutates ``array``. It is the only tablekit operation that
    does. Elements are removed one at a time from ``start``, so both the
    removed and the remaining elements keep their relative order. Removal
    stops early when the array runs out.

    Example:
        numbers = [1, 2, 3, 4, 5]
        slice_in_place(numbers, 2, 2) -> [2, 3]
        numbers -> [1, 4, 5]
    """
    _check_bounds("slice", count, start)
    removed: list[T] = []
    for _ in builtins.range(count):
        if start > len(array):
            break
        removed.append(array[start - 1])
        del array[start - 1]
    return removed


# Original name, kept for callers that still use it.
slice = slice_in_place


# =============================================================================
# Folding
# =============================================================================


def foldr[T, A](
    array: MutableSequence[T], initial: A, func: Callable[[A, int, T], A]
) -> A:
    """
    Fold the array from position 1 up to the last position.

    Despite the name this walks *forwards*. The name and direction are kept
    as they always were because existing callers depend on the order.
    """
    accumulator = initial
    for index, value in enumerate(array, start=1):
        accumulator = func(accumulator, index, value)
    return accumulator


def foldl[T, A](
    array: MutableSequence[T], initial: A, func: Callable[[A, int, T], A]
) -> A:
    """
    Fold the array from the last position down to position 1.

    Counterpart of :func:`foldr`; this one walks *backwards*.
    """
    accumulator = initial
    for index in builtins.range(len(array), 0, -1):
        accumulator = func(accumulator, index, array[index - 1])
    return accumulator


def reverse[T](array: MutableSequence[T]) -> list[T]:
    """Return a new array with the elements in reverse order."""
    return list(reversed(array))


# =============================================================================
# Randomness
# =============================================================================


def random[T](array: MutableSequence[T], *, rng: RandomSource | None = None) -> tuple[int, T]:
    """Return the position and value of a uniformly chosen element."""
    if not array:
        raise EmptyContainerError("cannot choose from an empty array", operation="random")
    rng = rng or default_source()
    index = rng.integer(1, len(array))
    return index, array[index - 1]


def _as_weight(weight: Any, position: int) -> int:
    if isinstance(weight, bool):
        valid = False
    elif isinstance(weight, numbers.Integral):
        valid = True
    elif isinstance(weight, numbers.Real):
        valid = float(weight).is_integer()
    else:
        valid = False

    if not valid or weight < 1:
        raise InvalidWeightError(
            "weights must be positive integers",
            operation="random_weighted",
            position=position,
            weight=weight,
        )
    return int(weight)


def random_weighted[T](
    array: MutableSequence[T],
    weight: Callable[[int, T], int],
    *,
    rng: RandomSource | None = None,
) -> tuple[int, T]:
    """
    Choose an element with probability proportional to its weight.

    ``weight(position, value)`` must return a positive integer; think of it
    as how many "standard" elements this one is worth. An integer is drawn
    uniformly from ``[1, total]`` and the first element whose running total
    reaches it is returned, so earlier positions win boundary draws.
    """
    if not array:
        raise EmptyContainerError(
            "cannot choose from an empty array", operation="random_weighted"
        )
    rng = rng or default_source()

    weights = [_as_weight(weight(index, value), index) for index, value in enumerate(array, start=1)]
    draw = rng.integer(1, builtins.sum(weights))

    running = 0
    for index, element_weight in enumerate(weights, start=1):
        running += element_weight
        if running >= draw:
            return index, array[index - 1]

    raise AssertionError("cumulative weight never reached the draw")


def shuffle[T](array: MutableSequence[T], *, rng: RandomSource | None = None) -> list[T]:
    """
    Return a new array with the elements in uniformly random order.

    Positions are drawn one by one without replacement from a working list,
    which yields every permutation with equal probability.
    """
    rng = rng or default_source()
    positions: list[int] = generic.keys(array)
    shuffled: list[T] = []

    while positions:
        position = positions.pop(rng.integer(1, len(positions)) - 1)
        shuffled.append(array[position - 1])

    return shuffled


# =============================================================================
# Flattening
# =============================================================================


def flatten(array: MutableSequence[Any], deep: bool = False) -> list[Any]:
    """
    Flatten an array of arrays into a single array.

    Non-array elements pass through unchanged. With ``deep=True`` nested
    arrays at any depth are flattened; an array that contains itself raises
    :class:`CyclicStructureError`.

    Example:
        flatten([[1, 2], [3, 4]]) -> [1, 2, 3, 4]
        flatten([[1, [2, 3]]], deep=True) -> [1, 2, 3]
    """
    return _flatten(array, deep, {id(array)})


def _flatten(array: MutableSequence[Any], deep: bool, active: set[int]) -> list[Any]:
    def enter(nested: MutableSequence[Any]) -> None:
        if id(nested) in active:
            raise CyclicStructureError("array contains itself", operation="flatten")
        active.add(id(nested))

    def splice(accumulator: list[Any], _: int, value: Any) -> list[Any]:
        if not is_array(value):
            accumulator.append(value)
            return accumulator

        if deep:
            enter(value)
        for sub_value in value:
            if deep and is_array(sub_value):
                enter(sub_value)
                accumulator.extend(_flatten(sub_value, deep, active))
                active.discard(id(sub_value))
            else:
                accumulator.append(sub_value)
        active.discard(id(value))
        return accumulator

    return foldr(array, [], splice)


OPERATIONS: dict[str, Callable[..., Any]] = {
    "first": first,
    "filter": filter,
    "remove_values": remove_values,
    "range": range,
    "slice_in_place": slice_in_place,
    "slice": slice,
    "foldr": foldr,
    "foldl": foldl,
    "reverse": reverse,
    "random": random,
    "random_weighted": random_weighted,
    "shuffle": shuffle,
    "flatten": flatten,
}

RANDOM_OPERATIONS = frozenset({"random", "random_weighted", "shuffle"})
