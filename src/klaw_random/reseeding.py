"""Periodically reseeding block generator.

`ReseedingRng` wraps a seedable block core and replaces it with a fresh
core seeded from `reseeder` after a fixed number of output bytes. This
bounds how much output any single seed produces; it is the generator
behind `thread_rng()`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from klaw_random._logging import get_logger
from klaw_random._result import Err, Ok, Result
from klaw_random.block import BlockRng

if TYPE_CHECKING:
    from typing import Self

    from klaw_random.core import RngCore
    from klaw_random.errors import EntropyUnavailable

__all__ = ['ReseedingCore', 'ReseedingRng', 'SeedableBlockCore']

logger = get_logger(__name__)

_NEVER = (1 << 63) - 1


class SeedableBlockCore(Protocol):
    """A block core that can be rebuilt from another generator."""

    def generate(self) -> list[int]: ...

    @classmethod
    def try_from_rng(cls, rng: RngCore) -> Result[Self, EntropyUnavailable]: ...


class ReseedingCore:
    """Block core that counts emitted bytes and reseeds its inner core.

    Attributes:
        inner: The current inner core.
        reseeder: Generator the replacement seeds are read from.
        threshold: Bytes between reseeds; 0 disables reseeding.
        bytes_until_reseed: Remaining budget before the next reseed.
        reseeds: Number of successful reseeds so far.
    """

    __slots__ = ('bytes_until_reseed', 'inner', 'reseeder', 'reseeds', 'threshold')

    def __init__(self, inner: SeedableBlockCore, threshold: int, reseeder: RngCore) -> None:
        if threshold < 0:
            msg = f'threshold must be non-negative, got {threshold}'
            raise ValueError(msg)
        self.inner = inner
        self.reseeder = reseeder
        self.threshold = _NEVER if threshold == 0 else threshold
        self.bytes_until_reseed = self.threshold
        self.reseeds = 0

    def reseed(self) -> Result[None, EntropyUnavailable]:
        """Replace the inner core with one seeded from the reseeder."""
        match type(self.inner).try_from_rng(self.reseeder):
            case Ok(core):
                self.inner = core
                self.bytes_until_reseed = self.threshold
                self.reseeds += 1
                logger.debug('generator reseeded', core=type(core).__name__, reseeds=self.reseeds)
                return Ok(None)
            case Err(error):
                return Err(error)

    def generate(self) -> list[int]:
        if self.bytes_until_reseed <= 0:
            return self._reseed_and_generate()
        results = self.inner.generate()
        self.bytes_until_reseed -= 4 * len(results)
        return results

    def _reseed_and_generate(self) -> list[int]:
        result = self.reseed()
        if isinstance(result, Err):
            logger.warning(
                'reseeding failed, continuing with current state',
                source=result.error.source,
                reason=result.error.reason,
            )
        results = self.inner.generate()
        self.bytes_until_reseed = self.threshold - 4 * len(results)
        return results

    def __repr__(self) -> str:
        return f'ReseedingCore({self.inner!r}, threshold={self.threshold})'


class ReseedingRng(BlockRng[ReseedingCore]):
    """Block generator that reseeds its core every `threshold` bytes.

    Automatic reseeds never raise: a failing reseeder is logged at warning
    level and the current state keeps producing output for another
    `threshold` bytes. An explicit `reseed()` raises instead.

    Args:
        core: Initial seedable block core (e.g. a ChaCha core).
        threshold: Output bytes between reseeds; 0 means never.
        reseeder: Source of fresh seeds, usually `OsRng()`.

    Example:
        ```python
        core = ChaCha12Rng.CORE.from_entropy()
        rng = ReseedingRng(core, 1024 * 64, OsRng())
        rng.next_u64()
        ```
    """

    __slots__ = ()

    def __init__(self, core: SeedableBlockCore, threshold: int, reseeder: RngCore) -> None:
        super().__init__(ReseedingCore(core, threshold, reseeder))

    def reseed(self) -> None:
        """Reseed now and discard any buffered output.

        Raises:
            EntropyUnavailableError: If the reseeder failed; the generator
                keeps its current state.
        """
        self.reset()
        self.core.reseed().unwrap()
