"""
Frozen operation namespaces.

A :class:`Namespace` exposes a fixed set of operations as attributes and
forwards unknown attribute lookups to an optional fallback namespace. This is
how ``Table.Array`` picks up every generic operation it does not override
without subclassing anything. Namespaces are frozen once built.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any

from tablekit.utils.errors import FrozenNamespaceError


class Namespace:
    """
    Read-only collection of named operations with delegation.

    Args:
        name: Display name used in error messages
        operations: Attributes defined directly on this namespace
        fallback: Namespace consulted for names not in ``operations``
        attributes: Read-only values reachable as attributes but not listed
            among the operations (sub-namespaces, configuration)
    """

    __slots__ = ("_name", "_operations", "_fallback", "_attributes")

    def __init__(
        self,
        name: str,
        operations: Mapping[str, Any],
        fallback: Namespace | None = None,
        *,
        attributes: Mapping[str, Any] | None = None,
    ) -> None:
        object.__setattr__(self, "_name", name)
        object.__setattr__(self, "_operations", MappingProxyType(dict(operations)))
        object.__setattr__(self, "_fallback", fallback)
        object.__setattr__(self, "_attributes", MappingProxyType(dict(attributes or {})))

    def __getattr__(self, attr: str) -> Any:
        # Only reached when normal lookup fails; slots are never delegated.
        if attr.startswith("_"):
            raise AttributeError(attr)
        if attr in self._operations:
            return self._operations[attr]
        if attr in self._attributes:
            return self._attributes[attr]
        if self._fallback is not None:
            return getattr(self._fallback, attr)
        raise AttributeError(f"{self._name} has no operation {attr!r}")

    def __setattr__(self, attr: str, value: Any) -> None:
        raise FrozenNamespaceError(f"cannot set {attr!r}", operation=self._name)

    def __delattr__(self, attr: str) -> None:
        raise FrozenNamespaceError(f"cannot delete {attr!r}", operation=self._name)

    def __contains__(self, attr: object) -> bool:
        if attr in self._operations:
            return True
        return self._fallback is not None and attr in self._fallback

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self.names()))

    def __dir__(self) -> list[str]:
        return sorted(self.names() | set(self._attributes))

    def __repr__(self) -> str:
        return f"<Namespace {self._name} ({len(self.names())} operations)>"

    @property
    def name(self) -> str:
        return self._name

    def names(self) -> set[str]:
        """Return every attribute name reachable, including delegated ones."""
        inherited = self._fallback.names() if self._fallback is not None else set()
        return inherited | set(self._operations)

    def owns(self, attr: str) -> bool:
        """Return True if attr is defined here rather than delegated."""
        return attr in self._operations
