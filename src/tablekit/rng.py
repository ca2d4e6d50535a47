"""
tablekit Random Source.

A single seeded generator shared by every random operation of a facade.
Creating one generator and reusing it avoids the clock-correlated streams
that come from reseeding on every call.
"""

from __future__ import annotations

import logging
import threading

import numpy as np

logger = logging.getLogger(__name__)


class RandomSource:
    """
    Thread-safe wrapper around a ``numpy.random.Generator``.

    Args:
        seed: Seed for reproducible draws. ``None`` seeds from OS entropy.
    """

    def __init__(self, seed: int | None = None) -> None:
        self._lock = threading.Lock()
        self._generator = np.random.default_rng(seed)
        logger.debug("Created random source (seed=%r)", seed)

    def seed(self, seed: int | None) -> None:
        """Reseed the generator for reproducibility."""
        with self._lock:
            self._generator = np.random.default_rng(seed)
        logger.debug("Reseeded random source (seed=%r)", seed)

    def integer(self, low: int, high: int) -> int:
        """Return a uniform random integer in [low, high] inclusive."""
        with self._lock:
            return int(self._generator.integers(low, high, endpoint=True))


_default_source = RandomSource()


def default_source() -> RandomSource:
    """Return the process-wide random source."""
    return _default_source


def set_seed(seed: int | None) -> None:
    """Reseed the process-wide random source."""
    _default_source.seed(seed)
