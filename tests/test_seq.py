"""Tests for the sequence algorithms."""

from __future__ import annotations

from collections import Counter
from itertools import permutations

import pytest
from hypothesis import given
from hypothesis import strategies as st
from klaw_random import (
    AllWeightsZeroError,
    EmptyCollectionError,
    InsufficientNonZero,
    InsufficientNonZeroError,
    InvalidRangeError,
    InvalidWeightError,
    Pcg32,
    StepRng,
    choose,
    choose_from_iter,
    choose_multiple,
    choose_multiple_weighted,
    choose_weighted,
    gen_index,
    partial_shuffle,
    sample_without_replacement,
    shuffle,
)
from klaw_random.seq import index

from tests.stats import is_uniform
from tests.strategies import non_empty_sequences, seeds, sequence_and_amount, sequences


class TestShuffle:
    """Tests for shuffle() and partial_shuffle()."""

    @given(items=sequences, seed=seeds)
    def test_is_permutation(self, items: list[int], seed: int) -> None:
        shuffled = list(items)
        shuffle(shuffled, Pcg32.seed_from_u64(seed))
        assert Counter(shuffled) == Counter(items)

    def test_every_permutation_equally_likely(self, rng: Pcg32) -> None:
        def one() -> tuple[int, ...]:
            items = [0, 1, 2]
            shuffle(items, rng)
            return tuple(items)

        assert is_uniform((one() for _ in range(12_000)), list(permutations(range(3))))

    def test_positional_frequency(self, rng: Pcg32) -> None:
        firsts = Counter()
        for _ in range(10_000):
            items = list(range(10))
            shuffle(items, rng)
            firsts[items[0]] += 1
        assert all(850 < firsts[i] < 1150 for i in range(10))

    def test_draw_count(self) -> None:
        rng = StepRng(1, 1)
        shuffle(list(range(8)), rng)
        assert rng.draws == 7

    def test_short_sequences_untouched(self, rng: Pcg32) -> None:
        empty: list[int] = []
        one = [1]
        shuffle(empty, rng)
        shuffle(one, rng)
        assert empty == []
        assert one == [1]

    @given(items=sequences, amount=st.integers(min_value=0, max_value=80), seed=seeds)
    def test_partial_shuffle_splits(self, items: list[int], amount: int, seed: int) -> None:
        seq = list(items)
        chosen, rest = partial_shuffle(seq, amount, Pcg32.seed_from_u64(seed))
        assert len(chosen) == min(amount, len(items))
        assert Counter(chosen + rest) == Counter(items)
        assert chosen + rest == seq

    def test_partial_shuffle_head_is_uniform(self, rng: Pcg32) -> None:
        def head() -> int:
            chosen, _ = partial_shuffle(list(range(6)), 1, rng)
            return chosen[0]

        assert is_uniform((head() for _ in range(12_000)), range(6))


class TestChoose:
    """Tests for single picks."""

    def test_choose_empty_is_none(self, rng: Pcg32) -> None:
        assert choose([], rng) is None

    def test_choose_uniform(self, rng: Pcg32) -> None:
        assert is_uniform((choose('abcde', rng) for _ in range(10_000)), 'abcde')

    def test_choose_from_iter(self, rng: Pcg32) -> None:
        assert choose_from_iter(iter([]), rng) is None
        assert choose_from_iter(iter([42]), rng) == 42
        samples = (choose_from_iter(iter(range(5)), rng) for _ in range(10_000))
        assert is_uniform(samples, range(5))

    def test_choose_weighted(self, rng: Pcg32) -> None:
        items = [('a', 1), ('b', 0), ('c', 3)]
        counts = Counter(choose_weighted(items, lambda item: item[1], rng)[0] for _ in range(20_000))
        assert counts['b'] == 0
        assert 2.7 < counts['c'] / counts['a'] < 3.3

    def test_choose_weighted_errors(self, rng: Pcg32) -> None:
        with pytest.raises(EmptyCollectionError):
            choose_weighted([], lambda item: 1, rng)
        with pytest.raises(AllWeightsZeroError):
            choose_weighted(['x', 'y'], lambda item: 0, rng)

    def test_gen_index(self) -> None:
        assert gen_index(StepRng(0xFFFF_FFFF, 0), 10) == 9
        with pytest.raises(InvalidRangeError):
            gen_index(StepRng(0, 0), 0)


class TestSampleWithoutReplacement:
    """Tests for sample_without_replacement()."""

    def test_three_distinct_from_ten(self, rng: Pcg32) -> None:
        picks = sample_without_replacement(list(range(10)), 3, rng)
        assert len(picks) == 3
        assert len(set(picks)) == 3
        assert all(0 <= p < 10 for p in picks)

    @given(data=sequence_and_amount(), seed=seeds)
    def test_distinct_members(self, data: tuple[list[int], int], seed: int) -> None:
        items, k = data
        before = list(items)
        picks = sample_without_replacement(items, k, Pcg32.seed_from_u64(seed))
        assert len(picks) == k
        assert len(set(picks)) == k
        assert set(picks) <= set(items)
        assert items == before

    def test_order_is_uniform(self, rng: Pcg32) -> None:
        samples = (tuple(sample_without_replacement([0, 1, 2], 2, rng)) for _ in range(12_000))
        assert is_uniform(samples, list(permutations(range(3), 2)))

    def test_uses_k_draws(self) -> None:
        rng = StepRng(1, 1)
        sample_without_replacement(range(1_000_000), 5, rng)
        assert rng.draws == 5

    @pytest.mark.parametrize('k', [-1, 11])
    def test_k_out_of_range(self, rng: Pcg32, k: int) -> None:
        with pytest.raises(ValueError):
            sample_without_replacement(list(range(10)), k, rng)


class TestChooseMultiple:
    """Tests for choose_multiple() and choose_multiple_weighted()."""

    def test_clamps_amount(self, rng: Pcg32) -> None:
        picks = choose_multiple('abc', 10, rng)
        assert sorted(picks) == ['a', 'b', 'c']

    @given(items=non_empty_sequences, seed=seeds)
    def test_distinct_positions(self, items: list[int], seed: int) -> None:
        picks = choose_multiple(list(enumerate(items)), 5, Pcg32.seed_from_u64(seed))
        assert len({i for i, _ in picks}) == min(5, len(items))

    def test_weighted_skips_zero(self, rng: Pcg32) -> None:
        for _ in range(100):
            picks = choose_multiple_weighted('abcd', 2, lambda c: 0 if c in 'ac' else 5, rng)
            assert sorted(picks) == ['b', 'd']

    def test_weighted_insufficient(self, rng: Pcg32) -> None:
        with pytest.raises(InsufficientNonZeroError) as exc_info:
            choose_multiple_weighted('abc', 2, lambda c: 1 if c == 'a' else 0, rng)
        assert exc_info.value.to_struct() == InsufficientNonZero(2, 1)

    def test_weighted_first_pick_frequency(self, rng: Pcg32) -> None:
        firsts = Counter(choose_multiple_weighted('ab', 1, lambda c: 1 if c == 'a' else 3, rng)[0] for _ in range(20_000))
        assert 2.7 < firsts['b'] / firsts['a'] < 3.3


class TestIndexSample:
    """Tests for seq.index and its algorithm selection."""

    @pytest.mark.parametrize(
        ('length', 'amount', 'algorithm'),
        [
            (10, 3, 'sample_floyd'),
            (100_000, 50, 'sample_floyd'),
            (20, 15, 'sample_inplace'),
            (1000, 500, 'sample_inplace'),
            (1_000_000, 200, 'sample_rejection'),
        ],
    )
    def test_selects_algorithm(
        self,
        monkeypatch: pytest.MonkeyPatch,
        rng: Pcg32,
        length: int,
        amount: int,
        algorithm: str,
    ) -> None:
        calls: list[str] = []
        for name in ('sample_floyd', 'sample_inplace', 'sample_rejection'):
            real = getattr(index, name)

            def spy(*args: object, _name: str = name, _real: object = real) -> list[int]:
                calls.append(_name)
                return _real(*args)  # type: ignore[operator]

            monkeypatch.setattr(index, name, spy)
        picks = index.sample(rng, length, amount)
        assert calls == [algorithm]
        assert len(set(picks)) == amount
        assert all(0 <= p < length for p in picks)

    @pytest.mark.parametrize('algorithm', [index.sample_floyd, index.sample_inplace, index.sample_rejection])
    def test_algorithms_are_uniform(self, rng: Pcg32, algorithm: object) -> None:
        samples = (frozenset(algorithm(rng, 5, 2)) for _ in range(10_000))  # type: ignore[operator]
        pairs = [frozenset(p) for p in permutations(range(5), 2) if p[0] < p[1]]
        assert is_uniform(samples, pairs)

    def test_amount_equals_length(self, rng: Pcg32) -> None:
        assert sorted(index.sample(rng, 50, 50)) == list(range(50))

    def test_zero_amount(self, rng: Pcg32) -> None:
        assert index.sample(rng, 10, 0) == []

    @pytest.mark.parametrize(('length', 'amount'), [(3, 4), (-1, 0), (5, -1)])
    def test_invalid(self, rng: Pcg32, length: int, amount: int) -> None:
        with pytest.raises(ValueError):
            index.sample(rng, length, amount)


class TestIndexSampleWeighted:
    """Tests for seq.index.sample_weighted()."""

    def test_exhausts_positive_weights(self, rng: Pcg32) -> None:
        weights = [0, 5, 0, 5, 1]
        picks = index.sample_weighted(rng, len(weights), weights.__getitem__, 3)
        assert sorted(picks) == [1, 3, 4]

    def test_float_weights(self, rng: Pcg32) -> None:
        weights = [0.0, 0.1, 0.0, 0.2, 0.7]
        for _ in range(100):
            picks = index.sample_weighted(rng, len(weights), weights.__getitem__, 3)
            assert sorted(picks) == [1, 3, 4]

    def test_first_pick_proportional(self, rng: Pcg32) -> None:
        weights = [1, 2, 7]
        counts = Counter(index.sample_weighted(rng, 3, weights.__getitem__, 1)[0] for _ in range(20_000))
        assert 1700 < counts[0] < 2300
        assert 3600 < counts[1] < 4400

    def test_invalid_weight(self, rng: Pcg32) -> None:
        weights = [1, -2]
        with pytest.raises(InvalidWeightError):
            index.sample_weighted(rng, 2, weights.__getitem__, 1)

    def test_insufficient(self, rng: Pcg32) -> None:
        weights = [0, 1, 0]
        with pytest.raises(InsufficientNonZeroError) as exc_info:
            index.sample_weighted(rng, 3, weights.__getitem__, 2)
        assert (exc_info.value.requested, exc_info.value.available) == (2, 1)

    def test_float_total_overflow(self, rng: Pcg32) -> None:
        weights = [1e308, 1e308]
        with pytest.raises(InvalidWeightError) as exc_info:
            index.sample_weighted(rng, 2, weights.__getitem__, 1)
        assert exc_info.value.index == 1


class TestNearestPositive:
    """Tests for the float-drift fallback of sample_weighted."""

    def test_prefers_lower_neighbour(self) -> None:
        assert index._nearest_positive([1.0, 0.0, 2.0], 1) == 0

    def test_clamps_past_the_end(self) -> None:
        assert index._nearest_positive([0.0, 0.5, 0.0], 7) == 1

    def test_no_positive_weight(self) -> None:
        with pytest.raises(RuntimeError, match='no positive weight left'):
            index._nearest_positive([0.0, 0.0], 0)
