"""PCG permuted congruential generators.

Small, fast, statistically strong and not cryptographically secure.

- `Pcg32`: PCG-XSH-RR, 64-bit LCG state, 32-bit output.
- `Pcg64`: PCG-XSL-RR, 128-bit LCG state, 64-bit output.

Reference: https://www.pcg-random.org/
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Self

from klaw_random.core import Rng
from klaw_random.impls import fill_bytes_via_next, next_u64_via_u32
from klaw_random.seeding import SeedableRng

if TYPE_CHECKING:
    from klaw_random.core import ByteBuffer

__all__ = ['Pcg32', 'Pcg64']

_MASK32 = 0xFFFF_FFFF
_MASK64 = 0xFFFF_FFFF_FFFF_FFFF
_MASK128 = (1 << 128) - 1
_MUL64 = 6364136223846793005
_MUL128 = 0x2360_ED05_1FC6_5DA4_4385_DF64_9FCC_F645


class Pcg32(SeedableRng, Rng):
    """PCG-XSH-RR 64/32 generator.

    The seed is 16 bytes: the initial state and the stream selector, each
    a little-endian u64.

    Example:
        ```python
        rng = Pcg32.new(42, 54)
        rng.next_u32()  # 0xa15c02b7
        ```
    """

    __slots__ = ('_increment', '_state')

    SEED_SIZE = 16

    def __init__(self, state: int, increment: int) -> None:
        # the increment selects the stream and must be odd
        self._increment = (increment | 1) & _MASK64
        self._state = (state + self._increment) & _MASK64
        self._step()

    @classmethod
    def new(cls, state: int, stream: int) -> Self:
        """Create a generator from an initial state and a stream id."""
        return cls(state & _MASK64, ((stream << 1) | 1) & _MASK64)

    @classmethod
    def _from_seed_bytes(cls, seed: bytes) -> Self:
        return cls(int.from_bytes(seed[:8], 'little'), int.from_bytes(seed[8:], 'little'))

    def _step(self) -> None:
        self._state = (self._state * _MUL64 + self._increment) & _MASK64

    def next_u32(self) -> int:
        state = self._state
        self._step()
        rot = state >> 59
        xsh = (((state >> 18) ^ state) >> 27) & _MASK32
        return ((xsh >> rot) | (xsh << (-rot & 31))) & _MASK32

    def next_u64(self) -> int:
        return next_u64_via_u32(self)

    def fill_bytes(self, dest: ByteBuffer) -> None:
        fill_bytes_via_next(self, dest)

    def __repr__(self) -> str:
        return f'Pcg32(state={self._state:#018x}, increment={self._increment:#018x})'


class Pcg64(SeedableRng, Rng):
    """PCG-XSL-RR 128/64 generator.

    The seed is 32 bytes: the initial state and the stream selector, each
    a little-endian u128.
    """

    __slots__ = ('_increment', '_state')

    SEED_SIZE = 32

    def __init__(self, state: int, increment: int) -> None:
        self._increment = (increment | 1) & _MASK128
        self._state = (state + self._increment) & _MASK128
        self._step()

    @classmethod
    def new(cls, state: int, stream: int) -> Self:
        return cls(state & _MASK128, ((stream << 1) | 1) & _MASK128)

    @classmethod
    def _from_seed_bytes(cls, seed: bytes) -> Self:
        return cls(int.from_bytes(seed[:16], 'little'), int.from_bytes(seed[16:], 'little'))

    def _step(self) -> None:
        self._state = (self._state * _MUL128 + self._increment) & _MASK128

    def next_u64(self) -> int:
        self._step()
        state = self._state
        rot = state >> 122
        xsl = ((state >> 64) ^ state) & _MASK64
        return ((xsl >> rot) | (xsl << (-rot & 63))) & _MASK64

    def next_u32(self) -> int:
        return self.next_u64() & _MASK32

    def fill_bytes(self, dest: ByteBuffer) -> None:
        fill_bytes_via_next(self, dest)

    def __repr__(self) -> str:
        return f'Pcg64(state={self._state:#034x}, increment={self._increment:#034x})'
