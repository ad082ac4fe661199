"""Entropy-source glue: the operating system as a fallible generator.

The entropy source collaborator is anything callable as
`source(length) -> bytes`. The default is `os.urandom`. Failures
(`OSError`, short reads) surface as `EntropyUnavailable`; nothing here
retries or assesses the quality of the source.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Protocol

from klaw_random._result import Err, Ok, Result
from klaw_random.core import CryptoRng, Rng
from klaw_random.errors import EntropyUnavailable
from klaw_random.impls import next_u32_via_fill, next_u64_via_fill

if TYPE_CHECKING:
    from klaw_random.core import ByteBuffer

__all__ = ['EntropySource', 'OsRng', 'getrandom']


class EntropySource(Protocol):
    """Fill-a-buffer entropy collaborator. May raise `OSError`."""

    def __call__(self, length: int, /) -> bytes: ...


def _source_name(source: EntropySource) -> str:
    if source is os.urandom:
        return 'os.urandom'
    return getattr(source, '__qualname__', None) or type(source).__name__


class OsRng(CryptoRng, Rng):
    """Generator that reads every output straight from the entropy source.

    Not deterministic and comparatively slow; normally used only to seed
    other generators.

    Example:
        ```python
        seed = bytearray(32)
        OsRng().fill_bytes(seed)
        ```
    """

    __slots__ = ('_source',)

    def __init__(self, source: EntropySource | None = None) -> None:
        self._source: EntropySource = source if source is not None else os.urandom

    def next_u32(self) -> int:
        return next_u32_via_fill(self)

    def next_u64(self) -> int:
        return next_u64_via_fill(self)

    def fill_bytes(self, dest: ByteBuffer) -> None:
        self.try_fill_bytes(dest).unwrap()

    def try_fill_bytes(self, dest: ByteBuffer) -> Result[None, EntropyUnavailable]:
        length = len(dest)
        if length == 0:
            return Ok(None)
        try:
            data = self._source(length)
        except (OSError, NotImplementedError) as exc:
            return Err(EntropyUnavailable(_source_name(self._source), str(exc) or type(exc).__name__))
        if len(data) != length:
            return Err(
                EntropyUnavailable(_source_name(self._source), f'short read: {len(data)} of {length} bytes')
            )
        dest[:] = data
        return Ok(None)

    def __repr__(self) -> str:
        return f'OsRng({_source_name(self._source)})'


def getrandom(length: int, source: EntropySource | None = None) -> bytes:
    """Return `length` bytes from the entropy source.

    Raises:
        EntropyUnavailableError: If the source failed.
    """
    buf = bytearray(length)
    OsRng(source).fill_bytes(buf)
    return bytes(buf)
