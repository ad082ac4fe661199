"""Tests for WeightedIndex and WeightedAliasIndex."""

from __future__ import annotations

import math
from collections import Counter

import pytest
from hypothesis import given
from klaw_random import (
    AllWeightsZero,
    AllWeightsZeroError,
    EmptyCollectionError,
    InvalidWeight,
    InvalidWeightError,
    Pcg32,
    StepRng,
    WeightedAliasIndex,
    WeightedIndex,
)

from tests.strategies import float_weights, int_weights, seeds


class TestWeightedIndex:
    """Tests for the cumulative-weight distribution."""

    def test_zero_weight_never_chosen_and_ratio(self, rng: Pcg32) -> None:
        items = ['A', 'B', 'C']
        distr = WeightedIndex([1, 0, 3])
        counts = Counter(items[distr.sample(rng)] for _ in range(20_000))
        assert counts['B'] == 0
        assert 2.7 < counts['C'] / counts['A'] < 3.3

    def test_exact_boundaries(self) -> None:
        """Draws 0 | 1..3 map to A | C over a total of 4; B owns no values."""
        distr = WeightedIndex([1, 0, 3])
        assert distr.sample(StepRng(0, 0)) == 0
        assert distr.sample(StepRng(0x4000_0000, 0)) == 2
        assert distr.sample(StepRng(0xFFFF_FFFF, 0)) == 2

    def test_single_weight(self, rng: Pcg32) -> None:
        assert all(WeightedIndex([7]).sample(rng) == 0 for _ in range(20))

    @given(weights=int_weights, seed=seeds)
    def test_only_positive_indices(self, weights: list[int], seed: int) -> None:
        distr = WeightedIndex(weights)
        rng = Pcg32.seed_from_u64(seed)
        for _ in range(20):
            assert weights[distr.sample(rng)] > 0

    @given(weights=float_weights, seed=seeds)
    def test_float_weights(self, weights: list[float], seed: int) -> None:
        distr = WeightedIndex(weights)
        assert isinstance(distr.total, float)
        index = distr.sample(Pcg32.seed_from_u64(seed))
        assert 0 <= index < len(weights)
        assert weights[index] > 0

    def test_mixed_weights_use_float_engine(self) -> None:
        distr = WeightedIndex([1, 2.5])
        assert distr.total == 3.5

    def test_properties(self) -> None:
        distr = WeightedIndex([1, 2, 3])
        assert distr.weights == (1, 2, 3)
        assert distr.total == 6
        assert len(distr) == 3

    def test_equality(self) -> None:
        assert WeightedIndex([1, 2]) == WeightedIndex([1, 2])
        assert WeightedIndex([1, 2]) != WeightedIndex([2, 1])
        assert hash(WeightedIndex([1, 2])) == hash(WeightedIndex([1, 2]))


class TestUpdateWeights:
    """Tests for WeightedIndex.update_weights()."""

    def test_update(self, rng: Pcg32) -> None:
        distr = WeightedIndex([1, 2, 3])
        distr.update_weights([(0, 0), (2, 0)])
        assert distr.weights == (0, 2, 0)
        assert all(distr.sample(rng) == 1 for _ in range(50))

    def test_failed_update_leaves_table(self) -> None:
        distr = WeightedIndex([1, 2, 3])
        with pytest.raises(AllWeightsZeroError):
            distr.update_weights([(0, 0), (1, 0), (2, 0)])
        assert distr.weights == (1, 2, 3)
        assert distr.total == 6

    def test_bad_index(self) -> None:
        distr = WeightedIndex([1, 2, 3])
        with pytest.raises(IndexError):
            distr.update_weights([(3, 1)])

    def test_bad_weight(self) -> None:
        with pytest.raises(InvalidWeightError):
            WeightedIndex([1, 2]).update_weights([(1, -2)])


class TestValidation:
    """Construction errors shared by both weighted distributions."""

    @pytest.mark.parametrize('cls', [WeightedIndex, WeightedAliasIndex])
    def test_empty(self, cls: type) -> None:
        with pytest.raises(EmptyCollectionError):
            cls([])

    @pytest.mark.parametrize('cls', [WeightedIndex, WeightedAliasIndex])
    def test_all_zero(self, cls: type) -> None:
        with pytest.raises(AllWeightsZeroError) as exc_info:
            cls([0, 0.0, 0])
        assert exc_info.value.to_struct() == AllWeightsZero()

    @pytest.mark.parametrize(
        ('weights', 'index'),
        [([1, -1], 1), ([math.nan, 1.0], 0), ([1.0, math.inf], 1), ([True, 1], 0), (['a'], 0)],
    )
    @pytest.mark.parametrize('cls', [WeightedIndex, WeightedAliasIndex])
    def test_invalid_weight(self, cls: type, weights: list[object], index: int) -> None:
        with pytest.raises(InvalidWeightError) as exc_info:
            cls(weights)
        assert exc_info.value.index == index
        assert isinstance(exc_info.value.to_struct(), InvalidWeight)

    @pytest.mark.parametrize(
        ('weights', 'index'),
        [([1e308, 1e308], 1), ([0.0, 1.5e308, 2.0, 1e308], 3), ([10**400, 1.0], 0)],
    )
    @pytest.mark.parametrize('cls', [WeightedIndex, WeightedAliasIndex])
    def test_float_total_overflow(self, cls: type, weights: list[float], index: int) -> None:
        """Finite weights whose float total is infinite are rejected up front."""
        with pytest.raises(InvalidWeightError) as exc_info:
            cls(weights)
        assert exc_info.value.index == index

    @pytest.mark.parametrize('cls', [WeightedIndex, WeightedAliasIndex])
    def test_huge_finite_total(self, cls: type, rng: Pcg32) -> None:
        distr = cls([1e308, 5e307])
        counts = Counter(distr.sample(rng) for _ in range(6000))
        assert 1.7 < counts[0] / counts[1] < 2.3

    def test_huge_exact_integers(self, rng: Pcg32) -> None:
        distr = WeightedIndex([10**400, 10**400])
        assert {distr.sample(rng) for _ in range(100)} == {0, 1}


class TestWeightedAliasIndex:
    """Tests for the alias-method distribution."""

    def test_zero_weight_never_chosen_and_ratio(self, rng: Pcg32) -> None:
        distr = WeightedAliasIndex([1, 0, 3])
        counts = Counter(distr.sample(rng) for _ in range(20_000))
        assert counts[1] == 0
        assert 2.7 < counts[2] / counts[0] < 3.3

    def test_uniform_weights(self, rng: Pcg32) -> None:
        distr = WeightedAliasIndex([2, 2, 2, 2])
        counts = Counter(distr.sample(rng) for _ in range(20_000))
        assert all(4600 < counts[i] < 5400 for i in range(4))

    @given(weights=int_weights, seed=seeds)
    def test_only_positive_indices(self, weights: list[int], seed: int) -> None:
        distr = WeightedAliasIndex(weights)
        rng = Pcg32.seed_from_u64(seed)
        for _ in range(20):
            assert weights[distr.sample(rng)] > 0

    @given(weights=float_weights, seed=seeds)
    def test_float_weights(self, weights: list[float], seed: int) -> None:
        distr = WeightedAliasIndex(weights)
        index = distr.sample(Pcg32.seed_from_u64(seed))
        assert weights[index] > 0

    def test_len(self) -> None:
        assert len(WeightedAliasIndex([0.5, 0.25, 0.25])) == 3
