"""
Container capability checks.

tablekit works on two container shapes: mappings (any ``Mapping``) and arrays
(any ``MutableSequence``, usually a ``list``). Array positions are exposed
1-indexed, so ``entries(["a", "b"])`` yields ``(1, "a"), (2, "b")``.

Strings, bytes and tuples are never treated as containers.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, MutableSequence
from typing import Any, TypeGuard

type Container = Mapping[Any, Any] | MutableSequence[Any]


def is_mapping(value: Any) -> TypeGuard[Mapping[Any, Any]]:
    """Return True if value is a key/value table."""
    return isinstance(value, Mapping)


def is_array(value: Any) -> TypeGuard[MutableSequence[Any]]:
    """Return True if value is a positional array."""
    return isinstance(value, MutableSequence)


def is_container(value: Any) -> TypeGuard[Container]:
    """Return True if value is either container shape."""
    return is_mapping(value) or is_array(value)


def entries(container: Container) -> Iterator[tuple[Any, Any]]:
    """
    Iterate the (key, value) entries of a container.

    Example:
        list(entries({"a": 1})) -> [("a", 1)]
        list(entries([10, 20])) -> [(1, 10), (2, 20)]
    """
    if is_mapping(container):
        return iter(container.items())
    return enumerate(container, start=1)


def lookup(container: Container, key: Any) -> Any:
    """Return the value stored under key, translating array positions."""
    if is_mapping(container):
        return container[key]
    return container[key - 1]
