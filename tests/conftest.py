"""
Pytest configuration and shared fixtures for tablekit tests.
"""

from collections import deque

import pytest

from tablekit import build_table
from tablekit.namespace import Namespace
from tablekit.rng import RandomSource


class ScriptedSource(RandomSource):
    """Random source that replays a fixed list of draws."""

    def __init__(self, draws: list[int]) -> None:
        super().__init__(seed=0)
        self.draws = deque(draws)
        self.requests: list[tuple[int, int]] = []

    def integer(self, low: int, high: int) -> int:
        self.requests.append((low, high))
        draw = self.draws.popleft()
        assert low <= draw <= high, f"scripted draw {draw} outside [{low}, {high}]"
        return draw


@pytest.fixture
def rng() -> RandomSource:
    """A deterministically seeded random source."""
    return RandomSource(seed=12345)


@pytest.fixture
def scripted_source():
    """Factory fixture for random sources with predetermined draws."""

    def _create(*draws: int) -> ScriptedSource:
        return ScriptedSource(list(draws))

    return _create


@pytest.fixture
def table(rng) -> Namespace:
    """A Table facade bound to the seeded random source."""
    return build_table(rng)


@pytest.fixture
def inventory() -> dict[str, int]:
    """A small key/value table."""
    return {"apples": 3, "oranges": 0, "bananas": 7, "pears": 3}


@pytest.fixture
def nested() -> dict[str, object]:
    """A table holding nested containers."""
    return {
        "name": "crate",
        "tags": ["fresh", "local"],
        "dimensions": {"width": 40, "height": 30},
    }
