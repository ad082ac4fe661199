"""ChaCha stream-cipher generators.

`ChaChaCore` runs the ChaCha block function (Bernstein's original layout:
256-bit key, 64-bit block counter, 64-bit stream id) and returns each
16-word block as generator output. `ChaCha8Rng`, `ChaCha12Rng` and
`ChaCha20Rng` wrap it in a `BlockRng`; `StdRng` is the 12-round variant.
"""

from __future__ import annotations

from typing import ClassVar, Self

from klaw_random.block import BlockRng
from klaw_random.core import CryptoRng
from klaw_random.seeding import SeedableRng

__all__ = [
    'ChaCha8Rng',
    'ChaCha12Rng',
    'ChaCha20Rng',
    'ChaChaCore',
    'StdRng',
]

_MASK32 = 0xFFFF_FFFF
_MASK64 = 0xFFFF_FFFF_FFFF_FFFF
# "expand 32-byte k"
_SIGMA = (0x61707865, 0x3320646E, 0x79622D32, 0x6B206574)


def _quarter_round(x: list[int], a: int, b: int, c: int, d: int) -> None:
    x[a] = (x[a] + x[b]) & _MASK32
    t = x[d] ^ x[a]
    x[d] = ((t << 16) | (t >> 16)) & _MASK32
    x[c] = (x[c] + x[d]) & _MASK32
    t = x[b] ^ x[c]
    x[b] = ((t << 12) | (t >> 20)) & _MASK32
    x[a] = (x[a] + x[b]) & _MASK32
    t = x[d] ^ x[a]
    x[d] = ((t << 8) | (t >> 24)) & _MASK32
    x[c] = (x[c] + x[d]) & _MASK32
    t = x[b] ^ x[c]
    x[b] = ((t << 7) | (t >> 25)) & _MASK32


def chacha_block(key: tuple[int, ...], counter: int, stream: int, rounds: int) -> list[int]:
    """Compute one ChaCha block as 16 little-endian words."""
    state = [
        *_SIGMA,
        *key,
        counter & _MASK32,
        (counter >> 32) & _MASK32,
        stream & _MASK32,
        (stream >> 32) & _MASK32,
    ]
    x = state.copy()
    for _ in range(rounds // 2):
        _quarter_round(x, 0, 4, 8, 12)
        _quarter_round(x, 1, 5, 9, 13)
        _quarter_round(x, 2, 6, 10, 14)
        _quarter_round(x, 3, 7, 11, 15)
        _quarter_round(x, 0, 5, 10, 15)
        _quarter_round(x, 1, 6, 11, 12)
        _quarter_round(x, 2, 7, 8, 13)
        _quarter_round(x, 3, 4, 9, 14)
    return [(a + b) & _MASK32 for a, b in zip(x, state, strict=True)]


class ChaChaCore(SeedableRng):
    """ChaCha block core. The 32-byte seed is the cipher key.

    Attributes:
        rounds: Number of rounds (8, 12 or 20).
        stream: 64-bit stream id; distinct streams under one key never overlap.
    """

    __slots__ = ('_counter', '_key', 'rounds', 'stream')

    SEED_SIZE = 32
    DEFAULT_ROUNDS: ClassVar[int] = 20

    def __init__(self, key: bytes, rounds: int | None = None, stream: int = 0) -> None:
        if len(key) != 32:
            msg = f'ChaCha key must be 32 bytes, got {len(key)}'
            raise ValueError(msg)
        rounds = self.DEFAULT_ROUNDS if rounds is None else rounds
        if rounds not in (8, 12, 20):
            msg = f'ChaCha rounds must be 8, 12 or 20, got {rounds}'
            raise ValueError(msg)
        self._key = tuple(int.from_bytes(key[i : i + 4], 'little') for i in range(0, 32, 4))
        self._counter = 0
        self.rounds = rounds
        self.stream = stream & _MASK64

    @classmethod
    def _from_seed_bytes(cls, seed: bytes) -> Self:
        return cls(seed)

    @property
    def word_pos(self) -> int:
        """Index of the next word the core will emit."""
        return self._counter * 16

    def set_stream(self, stream: int) -> None:
        self.stream = stream & _MASK64
        self._counter = 0

    def generate(self) -> list[int]:
        block = chacha_block(self._key, self._counter, self.stream, self.rounds)
        self._counter = (self._counter + 1) & _MASK64
        return block

    def __repr__(self) -> str:
        return f'ChaChaCore(rounds={self.rounds}, stream={self.stream}, word_pos={self.word_pos})'


class _ChaCha8Core(ChaChaCore):
    __slots__ = ()
    DEFAULT_ROUNDS = 8


class _ChaCha12Core(ChaChaCore):
    __slots__ = ()
    DEFAULT_ROUNDS = 12


class _ChaChaRng(SeedableRng, CryptoRng, BlockRng[ChaChaCore]):
    __slots__ = ()

    SEED_SIZE = 32
    CORE: ClassVar[type[ChaChaCore]] = ChaChaCore

    @classmethod
    def _from_seed_bytes(cls, seed: bytes) -> Self:
        return cls(cls.CORE.from_seed(seed))

    def set_stream(self, stream: int) -> None:
        """Switch to another stream, restarting at its first block."""
        self.core.set_stream(stream)
        self.reset()


class ChaCha8Rng(_ChaChaRng):
    """ChaCha with 8 rounds: fastest, smallest security margin."""

    __slots__ = ()
    CORE = _ChaCha8Core


class ChaCha12Rng(_ChaChaRng):
    """ChaCha with 12 rounds: the default general-purpose generator."""

    __slots__ = ()
    CORE = _ChaCha12Core


class ChaCha20Rng(_ChaChaRng):
    """ChaCha with 20 rounds, matching the standard stream cipher."""

    __slots__ = ()
    CORE = ChaChaCore


StdRng = ChaCha12Rng
