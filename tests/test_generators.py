"""Tests for the concrete generators."""

from __future__ import annotations

import io

import pytest
from hypothesis import given
from klaw_random import (
    ChaCha8Rng,
    ChaCha12Rng,
    ChaCha20Rng,
    ChaChaCore,
    CryptoRng,
    EntropyUnavailable,
    EntropyUnavailableError,
    Err,
    OsRng,
    Pcg32,
    Pcg64,
    ReadRng,
    StdRng,
    StepRng,
    getrandom,
)

from tests.strategies import seed_bytes_16, seed_bytes_32


class TestPcg32:
    """Tests for PCG-XSH-RR 64/32."""

    def test_reference_vector(self) -> None:
        rng = Pcg32.new(42, 54)
        expected = [0xA15C02B7, 0x7B47F409, 0xBA1D3330, 0x83D2F293, 0xBFA4784B, 0xCBED606E]
        assert [rng.next_u32() for _ in expected] == expected

    def test_from_seed_layout(self) -> None:
        """The seed is state then increment, little-endian."""
        seed = (42).to_bytes(8, 'little') + ((54 << 1) | 1).to_bytes(8, 'little')
        assert Pcg32.from_seed(seed).next_u32() == 0xA15C02B7

    def test_next_u64_is_two_u32_low_first(self) -> None:
        a = Pcg32.new(42, 54)
        b = Pcg32.new(42, 54)
        lo, hi = b.next_u32(), b.next_u32()
        assert a.next_u64() == (hi << 32) | lo

    @given(seed=seed_bytes_16)
    def test_same_seed_same_stream(self, seed: bytes) -> None:
        a = Pcg32.from_seed(seed)
        b = Pcg32.from_seed(seed)
        assert [a.next_u64() for _ in range(8)] == [b.next_u64() for _ in range(8)]

    def test_streams_differ(self) -> None:
        a = Pcg32.new(42, 1)
        b = Pcg32.new(42, 2)
        assert [a.next_u32() for _ in range(4)] != [b.next_u32() for _ in range(4)]


class TestPcg64:
    """Tests for PCG-XSL-RR 128/64."""

    @given(seed=seed_bytes_32)
    def test_deterministic(self, seed: bytes) -> None:
        a = Pcg64.from_seed(seed)
        b = Pcg64.from_seed(seed)
        assert [a.next_u64() for _ in range(8)] == [b.next_u64() for _ in range(8)]

    def test_next_u32_is_low_half(self) -> None:
        a = Pcg64.seed_from_u64(9)
        b = Pcg64.seed_from_u64(9)
        assert a.next_u32() == b.next_u64() & 0xFFFF_FFFF

    def test_outputs_in_range(self) -> None:
        rng = Pcg64.seed_from_u64(1)
        assert all(0 <= rng.next_u64() < 2**64 for _ in range(100))


class TestChaCha:
    """Tests for the ChaCha block generators."""

    def test_chacha20_zero_key_keystream(self) -> None:
        rng = ChaCha20Rng.from_seed(bytes(32))
        buf = bytearray(32)
        rng.fill_bytes(buf)
        assert buf.hex() == '76b8e0ada0f13d90405d6ae55386bd28bdd219b8a08ded1aa836efcc8b770dc7'

    def test_chacha20_first_words(self) -> None:
        rng = ChaCha20Rng.from_seed(bytes(32))
        assert rng.next_u32() == 0xADE0B876
        assert rng.next_u32() == 0x903DF1A0

    def test_round_variants_differ(self) -> None:
        seed = bytes(range(32))
        outputs = {cls.from_seed(seed).next_u64() for cls in (ChaCha8Rng, ChaCha12Rng, ChaCha20Rng)}
        assert len(outputs) == 3

    def test_core_rounds(self) -> None:
        assert ChaCha8Rng.from_seed(bytes(32)).core.rounds == 8
        assert ChaCha12Rng.from_seed(bytes(32)).core.rounds == 12
        assert ChaCha20Rng.from_seed(bytes(32)).core.rounds == 20

    def test_std_rng_is_chacha12(self) -> None:
        assert StdRng is ChaCha12Rng

    def test_is_crypto(self) -> None:
        assert isinstance(ChaCha12Rng.seed_from_u64(0), CryptoRng)
        assert not isinstance(Pcg32.seed_from_u64(0), CryptoRng)

    def test_set_stream_changes_output_and_restarts(self) -> None:
        a = ChaCha20Rng.from_seed(bytes(32))
        first = a.next_u64()
        a.set_stream(1)
        assert a.core.word_pos == 0
        assert a.next_u64() != first
        b = ChaCha20Rng.from_seed(bytes(32))
        b.set_stream(1)
        a.set_stream(1)
        assert a.next_u64() == b.next_u64()

    def test_core_rejects_bad_key_and_rounds(self) -> None:
        with pytest.raises(ValueError):
            ChaChaCore(bytes(16))
        with pytest.raises(ValueError):
            ChaChaCore(bytes(32), rounds=10)

    def test_word_pos_advances_per_block(self) -> None:
        rng = ChaCha20Rng.from_seed(bytes(32))
        rng.next_u32()
        assert rng.core.word_pos == 16


class TestStepRng:
    """Tests for the mock generator."""

    def test_sequence(self) -> None:
        rng = StepRng(2, 1)
        assert [rng.next_u64() for _ in range(3)] == [2, 3, 4]

    def test_wraps_at_u64(self) -> None:
        rng = StepRng(2**64 - 1, 1)
        assert rng.next_u64() == 2**64 - 1
        assert rng.next_u64() == 0

    def test_next_u32_low_bits(self) -> None:
        assert StepRng((7 << 32) | 5, 0).next_u32() == 5


class TestReadRng:
    """Tests for the stream-backed generator."""

    def test_reads_little_endian(self) -> None:
        rng = ReadRng(io.BytesIO(bytes(range(12))))
        assert rng.next_u64() == int.from_bytes(bytes(range(8)), 'little')
        assert rng.next_u32() == int.from_bytes(bytes(range(8, 12)), 'little')

    def test_exhausted_stream_is_err(self) -> None:
        rng = ReadRng(io.BytesIO(b'\x01\x02'))
        result = rng.try_fill_bytes(bytearray(4))
        assert isinstance(result, Err)
        assert isinstance(result.error, EntropyUnavailable)

    def test_exhausted_stream_raises(self) -> None:
        rng = ReadRng(io.BytesIO(b''))
        with pytest.raises(EntropyUnavailableError):
            rng.next_u32()


class TestOsRng:
    """Tests for the entropy-backed generator."""

    def test_fills_buffer(self) -> None:
        buf = bytearray(64)
        OsRng().fill_bytes(buf)
        assert any(buf)

    def test_custom_source(self) -> None:
        rng = OsRng(lambda n: b'\xab' * n)
        assert rng.next_u32() == 0xABABABAB

    def test_failing_source_is_err(self) -> None:
        def broken(length: int) -> bytes:
            raise OSError('no entropy here')

        result = OsRng(broken).try_fill_bytes(bytearray(8))
        assert isinstance(result, Err)
        assert result.error.reason == 'no entropy here'

    def test_short_read_raises(self) -> None:
        with pytest.raises(EntropyUnavailableError, match='short read'):
            OsRng(lambda n: b'\x00').fill_bytes(bytearray(8))

    def test_getrandom(self) -> None:
        assert len(getrandom(16)) == 16
        assert getrandom(4, lambda n: b'\x01' * n) == b'\x01\x01\x01\x01'
