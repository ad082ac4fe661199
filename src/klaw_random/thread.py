"""Thread-scoped default generator.

Each thread lazily gets its own `ReseedingRng` over a ChaCha12 core, seeded
from the operating system on first use and reseeded every
`get_config().reseed_threshold` bytes. The generator lives in
`threading.local` storage, so it is never shared between threads and is
dropped when its thread exits.

Example:
    ```python
    from klaw_random import thread_rng

    rng = thread_rng()
    rng.gen_range(0, 10)
    ```
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

from klaw_random._config import get_config
from klaw_random._logging import get_logger
from klaw_random.core import CryptoRng, Rng
from klaw_random.entropy import OsRng
from klaw_random.generators.chacha import ChaCha12Rng
from klaw_random.reseeding import ReseedingRng

if TYPE_CHECKING:
    from klaw_random.core import ByteBuffer

__all__ = ['ThreadRng', 'thread_rng']

logger = get_logger(__name__)

_local = threading.local()


def _current() -> ReseedingRng:
    """Get or create this thread's generator.

    Raises:
        EntropyUnavailableError: If the initial seed cannot be read.
    """
    rng = getattr(_local, 'rng', None)
    if rng is None:
        threshold = get_config().reseed_threshold
        core = ChaCha12Rng.CORE.from_rng(OsRng())
        rng = ReseedingRng(core, threshold, OsRng())
        _local.rng = rng
        logger.debug('thread generator created', thread=threading.current_thread().name, threshold=threshold)
    return rng


class ThreadRng(CryptoRng, Rng):
    """Handle to the calling thread's generator.

    The handle holds no state: every call resolves the generator of the
    thread making it, so a handle passed to another thread draws from
    that thread's generator.
    """

    __slots__ = ()

    def next_u32(self) -> int:
        return _current().next_u32()

    def next_u64(self) -> int:
        return _current().next_u64()

    def fill_bytes(self, dest: ByteBuffer) -> None:
        _current().fill_bytes(dest)

    def reseed(self) -> None:
        """Reseed this thread's generator from the operating system now.

        Raises:
            EntropyUnavailableError: If the entropy source failed.
        """
        _current().reseed()

    def __repr__(self) -> str:
        return 'ThreadRng()'


_handle = ThreadRng()


def thread_rng() -> ThreadRng:
    """Return the handle to the calling thread's default generator."""
    return _handle
