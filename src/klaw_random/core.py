"""Generator capability: the RngCore protocol and the Rng base class.

`RngCore` is the minimal contract for "a thing that produces random bits".
Everything else in the package (distributions, sequence algorithms) is
written against it and never looks at a concrete generator.

`Rng` is the base class concrete generators inherit from. It supplies a
default `try_fill_bytes` and the convenience surface (`gen_range`,
`gen_bool`, `sample`, ...) on top of the three primitive outputs.

Example:
    ```python
    from klaw_random import Pcg32, Uniform

    rng = Pcg32.seed_from_u64(7)
    rng.next_u32()
    rng.gen_range(1, 7)            # a die roll
    rng.sample(Uniform(0.0, 1.0))
    ```
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from klaw_random._result import Ok, Result

if TYPE_CHECKING:
    from collections.abc import Iterator

    from klaw_random.distributions.base import Distribution
    from klaw_random.errors import EntropyUnavailable
    from klaw_random.types import FloatType, IntType

__all__ = ['ByteBuffer', 'CryptoRng', 'Rng', 'RngCore']

type ByteBuffer = bytearray | memoryview


@runtime_checkable
class RngCore(Protocol):
    """Protocol for sources of raw random bits.

    All outputs advance the same underlying state. `fill_bytes` writes
    native words low byte first; the unused bytes of a partially consumed
    word are discarded.
    """

    def next_u32(self) -> int:
        """Return a uniformly random integer in `[0, 2**32)`."""
        ...

    def next_u64(self) -> int:
        """Return a uniformly random integer in `[0, 2**64)`."""
        ...

    def fill_bytes(self, dest: ByteBuffer) -> None:
        """Fill `dest` with random bytes.

        Raises:
            EntropyUnavailableError: If the generator is backed by a
                fallible source and that source failed.
        """
        ...

    def try_fill_bytes(self, dest: ByteBuffer) -> Result[None, EntropyUnavailable]:
        """Fill `dest`, reporting a source failure as `Err` instead of raising."""
        ...


class Rng(ABC):
    """Base class for generators.

    Subclasses implement `next_u32`, `next_u64` and `fill_bytes`; fallible
    generators also override `try_fill_bytes`. Output is deterministic for a
    given state unless the generator is backed by an entropy source.
    """

    __slots__ = ()

    @abstractmethod
    def next_u32(self) -> int: ...

    @abstractmethod
    def next_u64(self) -> int: ...

    @abstractmethod
    def fill_bytes(self, dest: ByteBuffer) -> None: ...

    def try_fill_bytes(self, dest: ByteBuffer) -> Result[None, EntropyUnavailable]:
        self.fill_bytes(dest)
        return Ok(None)

    # --- Convenience surface ---

    def random(self) -> float:
        """Return a float in `[0, 1)` with 53 bits of precision."""
        from klaw_random.distributions.float import f64_from_u64

        return f64_from_u64(self.next_u64())

    def gen(self, kind: IntType | FloatType | type = float) -> Any:
        """Sample a value of `kind` from the `Standard` distribution.

        Args:
            kind: `bool`, `float`/`F64`, `F32`, `int` (a `U64`) or any `IntType`.

        Example:
            ```python
            rng.gen(U8)     # 0..=255
            rng.gen(bool)
            ```
        """
        from klaw_random.distributions.standard import Standard

        return Standard(kind).sample(self)

    def gen_range(
        self,
        low: Any,
        high: Any,
        *,
        inclusive: bool = False,
        dtype: IntType | FloatType | None = None,
    ) -> Any:
        """Sample one value uniformly from `[low, high)` (or `[low, high]`).

        Raises:
            InvalidRangeError: If the range is empty or malformed.
        """
        from klaw_random.distributions.uniform import Uniform

        return Uniform.sample_single(low, high, self, inclusive=inclusive, dtype=dtype)

    def gen_bool(self, p: float) -> bool:
        """Return True with probability `p`.

        Raises:
            InvalidParameterError: If `p` is outside `[0, 1]`.
        """
        from klaw_random.distributions.bernoulli import Bernoulli

        return Bernoulli(p).sample(self)

    def gen_ratio(self, numerator: int, denominator: int) -> bool:
        """Return True with probability exactly `numerator / denominator`."""
        from klaw_random.distributions.bernoulli import Bernoulli

        return Bernoulli.from_ratio(numerator, denominator).sample(self)

    def sample[T](self, distr: Distribution[T]) -> T:
        return distr.sample(self)

    def sample_iter[T](self, distr: Distribution[T]) -> Iterator[T]:
        """Return an endless iterator of samples drawn with this generator."""
        return distr.sample_iter(self)

    def fill(self, dest: Any) -> None:
        """Fill any writable buffer (bytearray, array.array, ...) with random bytes.

        Multi-byte elements receive bytes in the canonical low-to-high order,
        which matches the element values on little-endian hosts.
        """
        view = memoryview(dest).cast('B')
        self.fill_bytes(view)


class CryptoRng:
    """Marker base for generators fit for security-sensitive use."""

    __slots__ = ()
