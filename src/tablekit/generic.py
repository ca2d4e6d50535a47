"""
tablekit Generic Operations.

Functions valid on any container, treating it as an unordered key/value
table. Arrays are accepted too; their keys are the 1-indexed positions.

None of these functions mutate their arguments.
"""

from __future__ import annotations

import builtins
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from tablekit.containers import Container, entries, is_array, is_container
from tablekit.utils.errors import CyclicStructureError


@dataclass(frozen=True, slots=True)
class Pair[K, V]:
    """A key/value pair produced by :func:`pairs`."""

    key: K
    value: V


# =============================================================================
# Selection
# =============================================================================


def first(container: Container, predicate: Callable[[Any, Any], bool]) -> tuple[Any, Any] | None:
    """
    Return the first (key, value) entry accepted by the predicate, or None.

    Iteration order of a mapping is not part of the contract; use
    ``Array.first`` when the earliest position matters.
    """
    for key, value in entries(container):
        if predicate(key, value):
            return key, value
    return None


def filter(container: Container, predicate: Callable[[Any, Any], bool]) -> dict[Any, Any]:
    """
    Return a new table of the entries accepted by the predicate.

    Keys are preserved verbatim, so filtering an array yields a table keyed by
    the surviving positions. Use ``Array.filter`` to get a dense array back.

    Example:
        filter({"a": 1, "b": 2}, lambda k, v: v > 1) -> {"b": 2}
        filter([5, 6, 7], lambda i, v: v != 6) -> {1: 5, 3: 7}
    """
    return {key: value for key, value in entries(container) if predicate(key, value)}


def remove_values(container: Container, *values: Any) -> dict[Any, Any]:
    """Return a new table without entries equal to any of the given values."""
    return filter(container, lambda _, value: value not in values)


# =============================================================================
# Transformation
# =============================================================================


def map(container: Container, func: Callable[[Any, Any], Any]) -> dict[Any, Any] | list[Any]:
    """
    Return a new container where ``new[key] = func(key, old[key])``.

    The container shape is kept: arrays map to arrays, tables to dicts.
    """
    if is_array(container):
        return [func(index, value) for index, value in entries(container)]
    return {key: func(key, value) for key, value in entries(container)}


def map_to_array(container: Container, func: Callable[[Any, Any], Any]) -> list[Any]:
    """Shorthand for ``values(map(container, func))``."""
    return values(map(container, func))


def reduce[A](container: Container, initial: A, func: Callable[[A, Any, Any], A]) -> A:
    """
    Fold every entry into an accumulator, starting from ``initial``.

    ``func`` receives ``(accumulator, key, value)`` and returns the next
    accumulator.

    Example:
        reduce([1, 2, 3], 0, lambda acc, i, v: acc + v) -> 6
    """
    accumulator = initial
    for key, value in entries(container):
        accumulator = func(accumulator, key, value)
    return accumulator


# =============================================================================
# Aggregation
# =============================================================================


def length(container: Container) -> int:
    """Return the number of entries."""
    return reduce(container, 0, lambda acc, _key, _value: acc + 1)


def sum(container: Container) -> Any:
    """Return the sum of the values."""
    return reduce(container, 0, lambda acc, _, value: acc + value)


def max(container: Container) -> Any | None:
    """Return the largest value, or None if the container is empty."""
    return reduce(
        container,
        None,
        lambda acc, _, value: value if acc is None or value > acc else acc,
    )


def min(container: Container) -> Any | None:
    """Return the smallest value, or None if the container is empty."""
    return reduce(
        container,
        None,
        lambda acc, _, value: value if acc is None or value < acc else acc,
    )


def all(container: Container, predicate: Callable[[Any, Any], bool]) -> bool:
    """Return True if every entry is accepted by the predicate (True when empty)."""
    return reduce(container, True, lambda acc, key, value: acc and bool(predicate(key, value)))


def any(container: Container, predicate: Callable[[Any, Any], bool]) -> bool:
    """Return True if at least one entry is accepted by the predicate."""
    return reduce(container, False, lambda acc, key, value: acc or bool(predicate(key, value)))


# =============================================================================
# Copying
# =============================================================================


def clone(container: Container, deep: bool = False) -> dict[Any, Any] | list[Any]:
    """
    Copy the entries of a container into a new one of the same shape.

    With ``deep=True`` nested containers are cloned recursively; otherwise
    they are shared with the original. A nested container that contains
    itself raises :class:`CyclicStructureError`.
    """
    return _clone(container, deep, set())


def _clone(container: Container, deep: bool, active: set[int]) -> dict[Any, Any] | list[Any]:
    if id(container) in active:
        raise CyclicStructureError("container contains itself", operation="clone")
    active.add(id(container))

    def copy_value(value: Any) -> Any:
        if deep and is_container(value):
            return _clone(value, deep, active)
        return value

    if is_array(container):
        result: dict[Any, Any] | list[Any] = [copy_value(value) for value in container]
    else:
        result = {key: copy_value(value) for key, value in entries(container)}

    active.discard(id(container))
    return result


# =============================================================================
# Extraction
# =============================================================================


def pairs(container: Container) -> list[Pair[Any, Any]]:
    """Return the entries as a list of :class:`Pair`."""

    def collect(acc: list[Pair[Any, Any]], key: Any, value: Any) -> list[Pair[Any, Any]]:
        acc.append(Pair(key, value))
        return acc

    return reduce(container, [], collect)


def keys(container: Container) -> list[Any]:
    """Return an array of the container's keys."""

    def collect(acc: list[Any], key: Any, _value: Any) -> list[Any]:
        acc.append(key)
        return acc

    return reduce(container, [], collect)


def values(container: Container) -> list[Any]:
    """
    Return an array of the container's values.

    Called on an array this returns an equal copy; on a table the values are
    re-indexed from position 1.
    """

    def collect(acc: list[Any], _key: Any, value: Any) -> list[Any]:
        acc.append(value)
        return acc

    return reduce(container, [], collect)


OPERATIONS: dict[str, Callable[..., Any]] = {
    "first": first,
    "filter": filter,
    "remove_values": remove_values,
    "map": map,
    "map_to_array": map_to_array,
    "reduce": reduce,
    "length": length,
    "sum": sum,
    "max": max,
    "min": min,
    "all": all,
    "any": any,
    "clone": clone,
    "pairs": pairs,
    "keys": keys,
    "values": values,
}

__all__ = ["Pair", "OPERATIONS", *builtins.sorted(OPERATIONS)]
