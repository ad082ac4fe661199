"""Tests for the generator capability: Rng, impls helpers and BlockRng."""

from __future__ import annotations

import array
from itertools import islice

import pytest
from hypothesis import given
from hypothesis import strategies as st
from klaw_random import (
    F32,
    U8,
    BlockRng,
    Ok,
    Pcg32,
    RngCore,
    StepRng,
    Uniform,
)
from klaw_random.impls import (
    fill_bytes_via_next,
    fill_via_u32_chunks,
    next_u32_via_fill,
    next_u64_via_fill,
    next_u64_via_u32,
)

from tests.strategies import seeds


class CountingCore:
    """Block core emitting consecutive integers, four words per block."""

    def __init__(self) -> None:
        self.blocks = 0

    def generate(self) -> list[int]:
        base = 4 * self.blocks
        self.blocks += 1
        return [base, base + 1, base + 2, base + 3]


class TestRngCoreProtocol:
    """Tests for the RngCore protocol."""

    def test_generators_satisfy_protocol(self) -> None:
        assert isinstance(Pcg32.seed_from_u64(1), RngCore)
        assert isinstance(StepRng(0, 1), RngCore)
        assert isinstance(BlockRng(CountingCore()), RngCore)

    def test_default_try_fill_bytes_is_ok(self) -> None:
        buf = bytearray(5)
        assert StepRng(0x0102030405060708, 0).try_fill_bytes(buf) == Ok(None)
        assert bytes(buf) == bytes([8, 7, 6, 5, 4])


class TestImpls:
    """Tests for the derivation helpers."""

    def test_next_u64_via_u32_low_word_first(self) -> None:
        rng = StepRng(1, 1)
        assert next_u64_via_u32(rng) == (2 << 32) | 1

    def test_fill_bytes_via_next_little_endian(self) -> None:
        buf = bytearray(16)
        fill_bytes_via_next(StepRng(0x1122334455667788, 0), buf)
        assert bytes(buf) == bytes.fromhex('8877665544332211') * 2

    def test_short_tail_uses_one_u32(self) -> None:
        rng = StepRng(0xAABBCCDD, 0)
        buf = bytearray(3)
        fill_bytes_via_next(rng, buf)
        assert bytes(buf) == bytes([0xDD, 0xCC, 0xBB])
        assert rng.draws == 1

    def test_tail_of_five_to_seven_uses_one_u64(self) -> None:
        rng = StepRng(0x0102030405060708, 0)
        buf = bytearray(13)
        fill_bytes_via_next(rng, buf)
        assert rng.draws == 2
        assert bytes(buf[8:]) == bytes([8, 7, 6, 5, 4])

    def test_fill_via_u32_chunks_consumes_partial_word(self) -> None:
        dest = bytearray(6)
        consumed, filled = fill_via_u32_chunks([0x03020100, 0x07060504, 0x0B0A0908], 0, dest, 0)
        assert (consumed, filled) == (2, 6)
        assert bytes(dest) == bytes(range(6))

    def test_via_fill_round_trip_order(self) -> None:
        rng = StepRng(0x0807060504030201, 0)
        assert next_u32_via_fill(rng) == 0x04030201
        assert next_u64_via_fill(rng) == 0x0807060504030201


class TestBlockRng:
    """Tests for the buffered block adapter."""

    def test_next_u32_walks_the_block(self) -> None:
        rng = BlockRng(CountingCore())
        assert [rng.next_u32() for _ in range(6)] == [0, 1, 2, 3, 4, 5]

    def test_next_u64_aligned(self) -> None:
        rng = BlockRng(CountingCore())
        assert rng.next_u64() == (1 << 32) | 0
        assert rng.next_u64() == (3 << 32) | 2

    def test_next_u64_straddles_block_boundary(self) -> None:
        """The last word of a block becomes the low half."""
        rng = BlockRng(CountingCore())
        for _ in range(3):
            rng.next_u32()
        assert rng.next_u64() == (4 << 32) | 3
        assert rng.next_u32() == 5

    def test_fill_bytes_discards_partial_word(self) -> None:
        rng = BlockRng(CountingCore())
        buf = bytearray(6)
        rng.fill_bytes(buf)
        assert bytes(buf) == (0).to_bytes(4, 'little') + (1).to_bytes(4, 'little')[:2]
        assert rng.next_u32() == 2

    def test_fill_bytes_spans_blocks(self) -> None:
        rng = BlockRng(CountingCore())
        buf = bytearray(24)
        rng.fill_bytes(buf)
        assert bytes(buf) == b''.join(i.to_bytes(4, 'little') for i in range(6))

    def test_reset_starts_new_block(self) -> None:
        core = CountingCore()
        rng = BlockRng(core)
        rng.next_u32()
        rng.reset()
        assert rng.next_u32() == 4
        assert core.blocks == 2


class TestRngConvenience:
    """Tests for the Rng convenience surface."""

    @given(seed=seeds)
    def test_random_in_unit_interval(self, seed: int) -> None:
        value = Pcg32.seed_from_u64(seed).random()
        assert 0.0 <= value < 1.0

    def test_gen_kinds(self, rng: Pcg32) -> None:
        assert isinstance(rng.gen(bool), bool)
        assert 0 <= rng.gen(U8) <= 255
        assert 0.0 <= rng.gen(F32) < 1.0
        assert 0 <= rng.gen(int) < 2**64

    @given(seed=seeds, low=st.integers(-1000, 1000), width=st.integers(1, 1000))
    def test_gen_range(self, seed: int, low: int, width: int) -> None:
        value = Pcg32.seed_from_u64(seed).gen_range(low, low + width)
        assert low <= value < low + width

    def test_gen_range_inclusive(self, rng: Pcg32) -> None:
        values = {rng.gen_range(1, 3, inclusive=True) for _ in range(200)}
        assert values == {1, 2, 3}

    def test_gen_bool_extremes(self, rng: Pcg32) -> None:
        assert not any(rng.gen_bool(0.0) for _ in range(100))
        assert all(rng.gen_bool(1.0) for _ in range(100))

    def test_gen_ratio(self, rng: Pcg32) -> None:
        hits = sum(rng.gen_ratio(1, 4) for _ in range(20_000))
        assert 4500 < hits < 5500

    def test_sample_and_sample_iter(self, rng: Pcg32) -> None:
        die = Uniform(1, 7)
        assert 1 <= rng.sample(die) <= 6
        rolls = list(islice(rng.sample_iter(die), 50))
        assert len(rolls) == 50
        assert all(1 <= r <= 6 for r in rolls)

    def test_fill_typed_array(self, rng: Pcg32) -> None:
        arr = array.array('I', [0] * 8)
        rng.fill(arr)
        assert any(arr)

    def test_fill_matches_fill_bytes(self) -> None:
        a = bytearray(10)
        b = bytearray(10)
        Pcg32.seed_from_u64(3).fill(a)
        Pcg32.seed_from_u64(3).fill_bytes(b)
        assert a == b

    def test_fill_empty_is_noop(self) -> None:
        rng = StepRng(0, 1)
        rng.fill(bytearray())
        assert rng.draws == 0

    @pytest.mark.parametrize('p', [-0.1, 1.5, float('nan')])
    def test_gen_bool_rejects_bad_probability(self, rng: Pcg32, p: float) -> None:
        with pytest.raises(ValueError):
            rng.gen_bool(p)
