"""Seeding capability: construct generators from seeds or from entropy."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, ClassVar, Self

from klaw_random._logging import get_logger
from klaw_random._result import Err, Ok, Result

if TYPE_CHECKING:
    from klaw_random.core import RngCore
    from klaw_random.entropy import EntropySource
    from klaw_random.errors import EntropyUnavailable

__all__ = ['SeedableRng', 'expand_u64_seed']

logger = get_logger(__name__)

_MASK32 = 0xFFFF_FFFF
_MASK64 = 0xFFFF_FFFF_FFFF_FFFF
_PCG_MUL = 6364136223846793005
_PCG_INC = 11634580027462260723


def expand_u64_seed(state: int, size: int) -> bytes:
    """Expand a 64-bit integer into `size` seed bytes with a PCG32 stream.

    The state is advanced before each output so low-entropy inputs such as
    0 or 1 still give well-mixed seeds.
    """
    state &= _MASK64
    out = bytearray()
    while len(out) < size:
        state = (state * _PCG_MUL + _PCG_INC) & _MASK64
        xorshifted = (((state >> 18) ^ state) >> 27) & _MASK32
        rot = state >> 59
        word = ((xorshifted >> rot) | (xorshifted << (-rot & 31))) & _MASK32
        out += word.to_bytes(4, 'little')
    return bytes(out[:size])


class SeedableRng:
    """Mixin for generators that can be built from a fixed-size seed.

    Subclasses set `SEED_SIZE` and implement `_from_seed_bytes`. Two
    generators built from equal seeds produce identical output.
    """

    __slots__ = ()

    SEED_SIZE: ClassVar[int]

    @classmethod
    @abstractmethod
    def _from_seed_bytes(cls, seed: bytes) -> Self: ...

    @classmethod
    def from_seed(cls, seed: bytes | bytearray | memoryview) -> Self:
        """Create a generator from exactly `SEED_SIZE` bytes.

        Raises:
            ValueError: If the seed has the wrong length.
        """
        seed = bytes(seed)
        if len(seed) != cls.SEED_SIZE:
            msg = f'{cls.__name__} needs a {cls.SEED_SIZE}-byte seed, got {len(seed)} bytes'
            raise ValueError(msg)
        return cls._from_seed_bytes(seed)

    @classmethod
    def seed_from_u64(cls, state: int) -> Self:
        """Create a generator from a 64-bit integer.

        Convenient for tests and simulations; a 64-bit seed never carries
        more than 64 bits of entropy, whatever the generator.
        """
        return cls.from_seed(expand_u64_seed(state, cls.SEED_SIZE))

    @classmethod
    def try_from_rng(cls, rng: RngCore) -> Result[Self, EntropyUnavailable]:
        """Seed from another generator, returning `Err` if it cannot deliver."""
        seed = bytearray(cls.SEED_SIZE)
        result = rng.try_fill_bytes(seed)
        if isinstance(result, Err):
            return result
        return Ok(cls.from_seed(seed))

    @classmethod
    def from_rng(cls, rng: RngCore) -> Self:
        """Seed from another generator.

        Raises:
            EntropyUnavailableError: If `rng` is fallible and failed.
        """
        return cls.try_from_rng(rng).unwrap()

    @classmethod
    def try_from_entropy(cls, source: EntropySource | None = None) -> Result[Self, EntropyUnavailable]:
        """Seed from the entropy source, returning `Err` on failure.

        Args:
            source: Entropy source; the operating system's if None.
        """
        from klaw_random.entropy import OsRng

        result = cls.try_from_rng(OsRng(source))
        if isinstance(result, Err):
            logger.debug('entropy seeding failed', generator=cls.__name__, reason=result.error.reason)
        return result

    @classmethod
    def from_entropy(cls, source: EntropySource | None = None) -> Self:
        """Seed from the entropy source.

        There is deliberately no fallback to a weaker source.

        Raises:
            EntropyUnavailableError: If the entropy source failed.
        """
        return cls.try_from_entropy(source).unwrap()
