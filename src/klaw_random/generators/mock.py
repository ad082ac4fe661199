"""Mock generators for tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

from klaw_random.core import Rng
from klaw_random.impls import fill_bytes_via_next

if TYPE_CHECKING:
    from klaw_random.core import ByteBuffer

__all__ = ['StepRng']

_MASK64 = 0xFFFF_FFFF_FFFF_FFFF


class StepRng(Rng):
    """Yields an arithmetic sequence of 64-bit words.

    Useless as a random source, handy for pinning exact raw values in
    tests: `StepRng(0, 0)` always returns 0, `StepRng(2**64 - 1, 0)`
    always returns the maximum word.

    Example:
        ```python
        rng = StepRng(2, 1)
        [rng.next_u64() for _ in range(3)]  # [2, 3, 4]
        ```
    """

    __slots__ = ('_increment', '_value', 'draws')

    def __init__(self, initial: int, increment: int) -> None:
        self._value = initial & _MASK64
        self._increment = increment & _MASK64
        self.draws = 0

    def next_u64(self) -> int:
        result = self._value
        self._value = (self._value + self._increment) & _MASK64
        self.draws += 1
        return result

    def next_u32(self) -> int:
        return self.next_u64() & 0xFFFF_FFFF

    def fill_bytes(self, dest: ByteBuffer) -> None:
        fill_bytes_via_next(self, dest)
