"""
tablekit Facade.

Assembles the public ``Table`` namespace: every generic operation at the top
level, the array operations under ``Table.Array``, and two helpers that bring
random selection to tables with arbitrary keys.

Example:
    >>> from tablekit import build_table
    >>> from tablekit.rng import RandomSource
    >>> Table = build_table(RandomSource(seed=7))
    >>> Table.Array.reverse([1, 2, 3])
    [3, 2, 1]
    >>> Table.sum({"a": 1, "b": 2})
    3
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable
from typing import Any

from tablekit import array, generic
from tablekit.containers import Container, lookup
from tablekit.generic import Pair
from tablekit.namespace import Namespace
from tablekit.rng import RandomSource, default_source

logger = logging.getLogger(__name__)


def _bind_rng(func: Callable[..., Any], rng: RandomSource) -> Callable[..., Any]:
    bound = functools.partial(func, rng=rng)
    functools.update_wrapper(bound, func)
    return bound


def _random_from_table(array_ops: Namespace) -> Callable[[Container], tuple[Any, Any]]:
    def random(container: Container) -> tuple[Any, Any]:
        """
        Behaves like ``Array.random`` but for tables with arbitrary keys.

        Returns the chosen key and its value.
        """
        _, key = array_ops.random(generic.keys(container))
        return key, lookup(container, key)

    return random


def _random_weighted_from_table(
    array_ops: Namespace,
) -> Callable[[Container, Callable[[Any, Any], int]], tuple[Any, Any]]:
    def random_weighted(
        container: Container, weight: Callable[[Any, Any], int]
    ) -> tuple[Any, Any]:
        """
        Behaves like ``Array.random_weighted`` but for tables with arbitrary keys.

        ``weight(key, value)`` must return a positive integer. Returns the
        chosen key and its value.
        """

        def pair_weight(_: int, pair: Pair[Any, Any]) -> int:
            return weight(pair.key, pair.value)

        _, pair = array_ops.random_weighted(generic.pairs(container), pair_weight)
        return pair.key, pair.value

    return random_weighted


def build_table(rng: RandomSource | None = None) -> Namespace:
    """
    Build a frozen ``Table`` namespace whose random operations use ``rng``.

    Args:
        rng: Random source shared by ``random``, ``random_weighted`` and
            ``Array.shuffle``. Defaults to the process-wide source.
    """
    rng = rng or default_source()

    generic_ops = Namespace("Table", generic.OPERATIONS)

    array_operations = {
        name: _bind_rng(func, rng) if name in array.RANDOM_OPERATIONS else func
        for name, func in array.OPERATIONS.items()
    }
    array_ops = Namespace("Table.Array", array_operations, fallback=generic_ops)

    mutating = frozenset(
        f"Array.{name}" for name, func in array.OPERATIONS.items() if array.mutates_argument(func)
    )

    table = Namespace(
        "Table",
        {
            "random": _random_from_table(array_ops),
            "random_weighted": _random_weighted_from_table(array_ops),
        },
        fallback=generic_ops,
        attributes={"Array": array_ops, "rng": rng, "MUTATING": mutating},
    )
    logger.debug(
        "Built Table facade: %d table operations, %d array operations",
        len(table.names()),
        len(array_ops.names()),
    )
    return table
