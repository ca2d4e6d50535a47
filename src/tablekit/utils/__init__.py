"""
tablekit Utilities Package.

Common utilities for error handling.
"""

from tablekit.utils.errors import (
    CyclicStructureError,
    EmptyContainerError,
    FrozenNamespaceError,
    InvalidArgumentError,
    InvalidWeightError,
    TableError,
)

__all__ = [
    "TableError",
    "InvalidArgumentError",
    "InvalidWeightError",
    "EmptyContainerError",
    "CyclicStructureError",
    "FrozenNamespaceError",
]
