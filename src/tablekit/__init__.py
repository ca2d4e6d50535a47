"""
tablekit - functional helpers for tables and arrays.

Tables are key/value mappings whose key order carries no meaning; arrays are
lists addressed by positions starting at 1. Every operation returns a new
container and leaves its arguments untouched, except ``Table.Array.slice_in_place``
which removes elements from the array it is given.

Typical use goes through the ``Table`` facade:

    from tablekit import Table

    Table.filter({"a": 1, "b": 2}, lambda key, value: value > 1)  # {"b": 2}
    Table.Array.flatten([[1, 2], [3, 4]])                        # [1, 2, 3, 4]
    Table.random_weighted({"common": 9, "rare": 1}, lambda key, weight: weight)
"""

from tablekit.generic import Pair
from tablekit.namespace import Namespace
from tablekit.rng import RandomSource, default_source, set_seed
from tablekit.signal import Signal, Subscription
from tablekit.table import build_table
from tablekit.utils.errors import (
    CyclicStructureError,
    EmptyContainerError,
    FrozenNamespaceError,
    InvalidArgumentError,
    InvalidWeightError,
    TableError,
)

__version__ = "0.4.1"

Table = build_table(default_source())

__all__ = [
    "Table",
    "build_table",
    "Namespace",
    "Pair",
    "RandomSource",
    "default_source",
    "set_seed",
    "Signal",
    "Subscription",
    "TableError",
    "InvalidArgumentError",
    "InvalidWeightError",
    "EmptyContainerError",
    "CyclicStructureError",
    "FrozenNamespaceError",
]
