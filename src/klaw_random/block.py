"""Block generators: cores that emit a block of 32-bit words per step.

Cipher-style generators (ChaCha) produce a whole block at a time.
`BlockRng` buffers one block and serves `next_u32`, `next_u64` and
`fill_bytes` from it so that no word is ever handed out twice and no
partially read word leaks into a later output.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from klaw_random.core import Rng
from klaw_random.impls import fill_via_u32_chunks

if TYPE_CHECKING:
    from klaw_random.core import ByteBuffer

__all__ = ['BlockRng', 'BlockRngCore']


class BlockRngCore(Protocol):
    """A generator core producing blocks of 32-bit words."""

    def generate(self) -> list[int]:
        """Advance the state and return the next block of words."""
        ...


class BlockRng[C: BlockRngCore](Rng):
    """Buffered `Rng` over a `BlockRngCore`.

    Attributes:
        core: The wrapped core. Replacing it (e.g. on reseed) should be
            followed by `reset()`.
    """

    __slots__ = ('_index', '_results', 'core')

    def __init__(self, core: C) -> None:
        self.core = core
        self._results: list[int] = []
        self._index = 0

    def reset(self) -> None:
        """Discard buffered words so the next output starts a fresh block."""
        self._results = []
        self._index = 0

    def generate_and_set(self, index: int) -> None:
        self._results = self.core.generate()
        self._index = index

    def next_u32(self) -> int:
        if self._index >= len(self._results):
            self.generate_and_set(0)
        value = self._results[self._index]
        self._index += 1
        return value

    def next_u64(self) -> int:
        results = self._results
        index = self._index
        length = len(results)
        if index < length - 1:
            self._index += 2
            return (results[index + 1] << 32) | results[index]
        if index >= length:
            self.generate_and_set(2)
            return (self._results[1] << 32) | self._results[0]
        # one word left in this block: it becomes the low half
        lo = results[length - 1]
        self.generate_and_set(1)
        return (self._results[0] << 32) | lo

    def fill_bytes(self, dest: ByteBuffer) -> None:
        read = 0
        length = len(dest)
        while read < length:
            if self._index >= len(self._results):
                self.generate_and_set(0)
            consumed, filled = fill_via_u32_chunks(self._results, self._index, dest, read)
            self._index += consumed
            read += filled

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self.core!r})'
