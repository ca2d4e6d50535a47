"""
Error types raised by tablekit operations.
"""

from __future__ import annotations

from typing import Any


class TableError(Exception):
    """Base exception for all tablekit errors."""

    def __init__(self, message: str, operation: str | None = None) -> None:
        self.message = message
        self.operation = operation
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.operation:
            return f"[{self.operation}] {self.message}"
        return self.message


class InvalidArgumentError(TableError, ValueError):
    """Raised when a count or position argument is out of its domain."""

    pass


class InvalidWeightError(InvalidArgumentError):
    """
    Raised when a weight function returns something other than a positive integer.

    Attributes:
        position: 1-indexed position of the offending element
        weight: The value the weight function returned
    """

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        position: int | None = None,
        weight: Any = None,
    ) -> None:
        self.position = position
        self.weight = weight
        super().__init__(message, operation)

    def _format_message(self) -> str:
        base = super()._format_message()
        if self.position is None:
            return base
        return f"{base} (position {self.position}, weight {self.weight!r})"


class EmptyContainerError(TableError, LookupError):
    """Raised when selecting an element from an empty container."""

    pass


class CyclicStructureError(TableError, RecursionError):
    """
    Raised when a deep clone or deep flatten reaches a container that is
    already on the current recursion path.
    """

    pass


class FrozenNamespaceError(TableError, AttributeError):
    """Raised when assigning to or deleting from a frozen operation namespace."""

    pass
