"""
Unit tests for tablekit array operations.
"""

import copy
from collections import Counter, deque

import pytest

from tablekit import array
from tablekit.rng import RandomSource
from tablekit.utils.errors import (
    CyclicStructureError,
    EmptyContainerError,
    InvalidArgumentError,
    InvalidWeightError,
)


class TestSelection:
    """Tests for position-aware first, filter and remove_values."""

    def test_first_earliest_position_wins(self):
        """Test first scans positions in order."""
        assert array.first([4, 7, 8, 10], lambda i, v: v % 2 == 0) == (1, 4)
        assert array.first([3, 7, 8, 10], lambda i, v: v % 2 == 0) == (3, 8)

    def test_first_no_match(self):
        assert array.first([1, 3], lambda i, v: v > 5) is None
        assert array.first([], lambda i, v: True) is None

    def test_filter_reindexes(self):
        """Test filter packs survivors from position 1 in original order."""
        assert array.filter([5, 6, 7, 8], lambda i, v: v % 2 == 1) == [5, 7]

    def test_filter_receives_positions(self):
        assert array.filter(["a", "b", "c", "d"], lambda i, v: i > 2) == ["c", "d"]

    def test_remove_values(self):
        assert array.remove_values([1, 2, 3, 2, 1], 2) == [1, 3, 1]
        assert array.remove_values([1, 2, 3, 2, 1], 1, 3) == [2, 2]

    def test_remove_values_matches_filter(self):
        source = ["x", "y", "x", "z"]
        assert array.remove_values(source, "x") == array.filter(source, lambda i, v: v != "x")


class TestRange:
    """Tests for the non-mutating range copy."""

    def test_range_basic(self):
        """Test range copies count elements from a start position."""
        source = [10, 20, 30, 40]
        assert array.range(source, 2, 2) == [20, 30]
        assert source == [10, 20, 30, 40]

    def test_range_default_start(self):
        assert array.range([10, 20, 30], 2) == [10, 20]

    def test_range_truncates_past_end(self):
        """Test range stops at the last element."""
        assert array.range([10, 20, 30], 5, 2) == [20, 30]
        assert array.range([10, 20, 30], 2, 9) == []

    def test_range_zero_count(self):
        assert array.range([1, 2], 0) == []

    @pytest.mark.parametrize("count,start", [(-1, 1), (1, 0), (2, -3)])
    def test_range_invalid_arguments(self, count, start):
        with pytest.raises(InvalidArgumentError):
            array.range([1, 2, 3], count, start)

    def test_invalid_argument_is_value_error(self):
        with pytest.raises(ValueError):
            array.range([1], 1, 0)

    def test_range_on_deque(self):
        """Test range works on sequences without slice support."""
        source = deque([10, 20, 30, 40])
        assert array.range(source, 2, 2) == [20, 30]
        assert array.range(source, 9, 3) == [30, 40]
        assert source == deque([10, 20, 30, 40])


class TestSliceInPlace:
    """Tests for the one mutating operation."""

    def test_slice_removes_and_returns(self):
        numbers = [1, 2, 3, 4, 5]
        removed = array.slice_in_place(numbers, 2, 2)
        assert removed == [2, 3]
        assert numbers == [1, 4, 5]

    def test_slice_default_start(self):
        numbers = ["a", "b", "c"]
        assert array.slice_in_place(numbers, 1) == ["a"]
        assert numbers == ["b", "c"]

    @pytest.mark.parametrize("count,start", [(0, 1), (1, 1), (3, 2), (2, 5), (6, 1)])
    def test_slice_reconstructs_original(self, count, start):
        """Test the removed run can be spliced back at the removal point."""
        original = [1, 2, 3, 4, 5, 6]
        remaining = list(original)
        removed = array.slice_in_place(remaining, count, start)

        assert len(removed) == count
        assert len(remaining) == len(original) - count
        assert remaining[: start - 1] + removed + remaining[start - 1 :] == original

    def test_slice_truncates_past_end(self):
        numbers = [1, 2, 3]
        assert array.slice_in_place(numbers, 5, 2) == [2, 3]
        assert numbers == [1]

    def test_slice_invalid_start(self):
        numbers = [1, 2, 3]
        with pytest.raises(InvalidArgumentError):
            array.slice_in_place(numbers, 1, 0)
        assert numbers == [1, 2, 3]

    def test_slice_is_marked_mutating(self):
        assert array.mutates_argument(array.slice_in_place)
        assert array.slice is array.slice_in_place
        assert not array.mutates_argument(array.range)

    def test_slice_on_deque(self):
        """Test slice_in_place works on sequences whose pop takes no index."""
        numbers = deque([1, 2, 3, 4, 5])
        assert array.slice_in_place(numbers, 2, 2) == [2, 3]
        assert numbers == deque([1, 4, 5])
        assert array.slice_in_place(numbers, 4, 3) == [5]
        assert numbers == deque([1, 4])


class TestFolding:
    """Tests for foldr, foldl and reverse."""

    def test_foldr_walks_forwards(self):
        """Test foldr visits positions 1 to N."""
        visited = array.foldr(["a", "b", "c"], [], lambda acc, i, v: acc + [(i, v)])
        assert visited == [(1, "a"), (2, "b"), (3, "c")]

    def test_foldl_walks_backwards(self):
        """Test foldl visits positions N down to 1."""
        visited = array.foldl(["a", "b", "c"], [], lambda acc, i, v: acc + [(i, v)])
        assert visited == [(3, "c"), (2, "b"), (1, "a")]

    def test_fold_empty(self):
        assert array.foldr([], 5, lambda acc, i, v: acc + v) == 5
        assert array.foldl([], 5, lambda acc, i, v: acc + v) == 5

    def test_fold_string_concatenation(self):
        assert array.foldr(["a", "b"], "", lambda acc, i, v: acc + v) == "ab"
        assert array.foldl(["a", "b"], "", lambda acc, i, v: acc + v) == "ba"

    def test_reverse(self):
        source = [1, 2, 3]
        assert array.reverse(source) == [3, 2, 1]
        assert source == [1, 2, 3]
        assert array.reverse([]) == []


class TestRandom:
    """Tests for uniform random selection."""

    def test_random_returns_matching_pair(self, rng):
        source = ["a", "b", "c"]
        for _ in range(50):
            index, value = array.random(source, rng=rng)
            assert 1 <= index <= 3
            assert source[index - 1] == value

    def test_random_uses_draw_as_position(self, scripted_source):
        source = scripted_source(3)
        assert array.random(["a", "b", "c"], rng=source) == (3, "c")
        assert source.requests == [(1, 3)]

    def test_random_covers_all_positions(self, rng):
        seen = {array.random([1, 2, 3, 4], rng=rng)[0] for _ in range(400)}
        assert seen == {1, 2, 3, 4}

    def test_random_empty_raises(self, rng):
        with pytest.raises(EmptyContainerError):
            array.random([], rng=rng)

    def test_random_default_source(self):
        assert array.random(["only"]) == (1, "only")


class TestRandomWeighted:
    """Tests for weighted random selection."""

    def test_draw_boundaries(self, scripted_source):
        """Test the first element whose running total reaches the draw wins."""
        source = ["light", "heavy"]
        weights = {"light": 2, "heavy": 3}

        def weight(i, v):
            return weights[v]

        assert array.random_weighted(source, weight, rng=scripted_source(1)) == (1, "light")
        assert array.random_weighted(source, weight, rng=scripted_source(2)) == (1, "light")
        assert array.random_weighted(source, weight, rng=scripted_source(3)) == (2, "heavy")
        assert array.random_weighted(source, weight, rng=scripted_source(5)) == (2, "heavy")

    def test_draw_range_is_total_weight(self, scripted_source):
        source = scripted_source(1)
        array.random_weighted([1, 2, 3], lambda i, v: v, rng=source)
        assert source.requests == [(1, 6)]

    def test_weight_function_receives_positions(self, scripted_source):
        calls = []

        def weight(i, v):
            calls.append((i, v))
            return 1

        array.random_weighted(["x", "y"], weight, rng=scripted_source(1))
        assert calls == [(1, "x"), (2, "y")]

    def test_bias_matches_weights(self):
        """Test weights [1, 3] pick the second element about 75% of the time."""
        rng = RandomSource(seed=2024)
        trials = 4000
        counts = Counter(
            array.random_weighted(["a", "b"], lambda i, v: i * 2 - 1, rng=rng)[1]
            for _ in range(trials)
        )
        assert 0.72 < counts["b"] / trials < 0.78

    def test_integral_float_weight_accepted(self, scripted_source):
        assert array.random_weighted(["a", "b"], lambda i, v: 2.0, rng=scripted_source(3)) == (2, "b")

    @pytest.mark.parametrize("bad_weight", [0, -1, 1.5, float("nan"), True, "3", None])
    def test_invalid_weight_raises(self, rng, bad_weight):
        with pytest.raises(InvalidWeightError) as exc_info:
            array.random_weighted(["a", "b"], lambda i, v: bad_weight if i == 2 else 1, rng=rng)
        assert exc_info.value.position == 2

    def test_empty_raises(self, rng):
        with pytest.raises(EmptyContainerError):
            array.random_weighted([], lambda i, v: 1, rng=rng)


class TestShuffle:
    """Tests for shuffle."""

    def test_shuffle_is_permutation(self, rng):
        source = [1, 2, 2, 3, 4, 5]
        result = array.shuffle(source, rng=rng)
        assert sorted(result) == sorted(source)
        assert source == [1, 2, 2, 3, 4, 5]

    def test_shuffle_empty(self, rng):
        assert array.shuffle([], rng=rng) == []

    def test_shuffle_draw_order(self, scripted_source):
        """Test each draw removes a position from the remaining working list."""
        source = scripted_source(3, 1, 1)
        assert array.shuffle(["a", "b", "c"], rng=source) == ["c", "a", "b"]
        assert source.requests == [(1, 3), (1, 2), (1, 1)]

    def test_shuffle_positions_vary(self, rng):
        """Test every position sees more than one occupant across shuffles."""
        occupants: list[set[int]] = [set() for _ in range(5)]
        for _ in range(200):
            for position, value in enumerate(array.shuffle([1, 2, 3, 4, 5], rng=rng)):
                occupants[position].add(value)
        assert all(len(seen) == 5 for seen in occupants)

    def test_shuffle_reproducible_with_seed(self):
        first = array.shuffle(list(range(20)), rng=RandomSource(seed=9))
        second = array.shuffle(list(range(20)), rng=RandomSource(seed=9))
        assert first == second


class TestFlatten:
    """Tests for shallow and deep flatten."""

    def test_flatten_one_level(self):
        assert array.flatten([[1, 2], [3, 4]]) == [1, 2, 3, 4]

    def test_flatten_keeps_deeper_nesting(self):
        assert array.flatten([[1, [2, 3]]]) == [1, [2, 3]]

    def test_flatten_deep(self):
        assert array.flatten([[1, [2, 3]]], deep=True) == [1, 2, 3]
        assert array.flatten([0, [1, [2, [3, [4]]]]], deep=True) == [0, 1, 2, 3, 4]

    def test_flatten_passes_atoms_through(self):
        """Test strings, tuples and tables are not spliced."""
        source = [1, "ab", (2, 3), {"k": 4}, [5]]
        assert array.flatten(source, deep=True) == [1, "ab", (2, 3), {"k": 4}, 5]

    def test_flatten_shared_sublist(self):
        shared = [1]
        assert array.flatten([shared, [shared]], deep=True) == [1, 1]

    def test_flatten_deep_cycle_raises(self):
        cyclic: list = [1]
        cyclic.append(cyclic)
        with pytest.raises(CyclicStructureError):
            array.flatten([cyclic], deep=True)

    def test_flatten_shallow_cycle_is_one_level(self):
        cyclic: list = [1]
        cyclic.append(cyclic)
        result = array.flatten(cyclic)
        assert result[:2] == [1, 1]
        assert result[2] is cyclic

    def test_flatten_does_not_modify_input(self):
        source = [[1, [2]], 3]
        before = copy.deepcopy(source)
        array.flatten(source, deep=True)
        assert source == before


class TestPurity:
    """Array operations other than slice_in_place never modify their input."""

    @pytest.mark.parametrize(
        "call",
        [
            lambda a: array.first(a, lambda i, v: False),
            lambda a: array.filter(a, lambda i, v: i % 2 == 0),
            lambda a: array.remove_values(a, 2, [3, 4]),
            lambda a: array.range(a, 2, 2),
            lambda a: array.foldr(a, [], lambda acc, i, v: acc + [v]),
            lambda a: array.foldl(a, [], lambda acc, i, v: acc + [v]),
            lambda a: array.reverse(a),
            lambda a: array.random(a, rng=RandomSource(seed=1)),
            lambda a: array.random_weighted(a, lambda i, v: i, rng=RandomSource(seed=1)),
            lambda a: array.shuffle(a, rng=RandomSource(seed=1)),
            lambda a: array.flatten(a, deep=True),
        ],
    )
    def test_input_unchanged(self, call):
        source = [1, 2, [3, 4], "five", {"six": 6}]
        before = copy.deepcopy(source)
        call(source)
        assert source == before


class TestKeywordArguments:
    """Random sources are passed by keyword."""

    def test_rng_is_keyword_only(self, rng):
        with pytest.raises(TypeError):
            array.random([1, 2], rng)  # type: ignore[misc]
        with pytest.raises(TypeError):
            array.shuffle([1, 2], rng)  # type: ignore[misc]
