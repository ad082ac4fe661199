"""Distribution base class and composition."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from klaw_random.core import RngCore

__all__ = ['DistMap', 'Distribution']


class Distribution[T](ABC):
    """A probability distribution producing values of type `T`.

    Distributions are immutable after construction and hold no generator;
    the randomness comes from the `rng` passed to `sample`. The same
    distribution may be sampled from several threads at once.
    """

    __slots__ = ()

    @abstractmethod
    def sample(self, rng: RngCore) -> T:
        """Draw one value using `rng`."""

    def sample_iter(self, rng: RngCore) -> Iterator[T]:
        """Yield an endless stream of samples.

        Example:
            ```python
            from itertools import islice

            rolls = list(islice(Uniform(1, 7).sample_iter(rng), 10))
            ```
        """
        while True:
            yield self.sample(rng)

    def map[U](self, fn: Callable[[T], U]) -> DistMap[T, U]:
        """Compose with a function applied to every sample.

        Example:
            ```python
            even = Uniform(0, 50).map(lambda x: 2 * x)
            ```
        """
        return DistMap(self, fn)


class DistMap[T, U](Distribution[U]):
    """Distribution of `fn(x)` for `x` drawn from `inner`."""

    __slots__ = ('fn', 'inner')

    def __init__(self, inner: Distribution[T], fn: Callable[[T], U]) -> None:
        self.inner = inner
        self.fn = fn

    def sample(self, rng: RngCore) -> U:
        return self.fn(self.inner.sample(rng))

    def __repr__(self) -> str:
        return f'DistMap({self.inner!r}, {getattr(self.fn, "__name__", self.fn)!r})'
