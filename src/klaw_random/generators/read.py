"""Generator reading its output from a binary stream."""

from __future__ import annotations

from typing import TYPE_CHECKING, BinaryIO

from klaw_random._result import Err, Ok, Result
from klaw_random.core import Rng
from klaw_random.errors import EntropyUnavailable
from klaw_random.impls import next_u32_via_fill, next_u64_via_fill

if TYPE_CHECKING:
    from klaw_random.core import ByteBuffer

__all__ = ['ReadRng']


class ReadRng(Rng):
    """Serve random bytes read from `stream`, e.g. a device or a recorded file.

    Fallible: when the stream runs dry or raises, `try_fill_bytes` returns
    `Err(EntropyUnavailable)` and `fill_bytes` raises
    `EntropyUnavailableError`. Bytes of a failed short read are lost.

    Example:
        ```python
        with open('/dev/urandom', 'rb') as f:
            rng = ReadRng(f)
            rng.next_u64()
        ```
    """

    __slots__ = ('_stream',)

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream

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
        name = getattr(self._stream, 'name', None) or type(self._stream).__name__
        try:
            data = self._stream.read(length)
        except OSError as exc:
            return Err(EntropyUnavailable(str(name), str(exc)))
        if data is None or len(data) < length:
            got = 0 if data is None else len(data)
            return Err(EntropyUnavailable(str(name), f'end of stream after {got} of {length} bytes'))
        dest[:] = data
        return Ok(None)
