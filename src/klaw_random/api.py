"""Python `random`-compatible convenience API.

Module-level functions draw from the calling thread's default generator
(`thread_rng()`); pass `rng=` to use another one. `Rand` is a stateful,
seedable instance with the same methods plus the raw `gen_*` helpers.

Functions:
    rand_u32(): Generate a random u32.
    rand_u64(): Generate a random u64.
    rand_f32(): Generate a random f32 in [0.0, 1.0).
    rand_f64(): Generate a random f64 in [0.0, 1.0).
    rand_range_u64(start, end): Generate a random integer in [start, end).

    random(): Return a random float in [0.0, 1.0).
    randint(a, b): Return a random integer N such that a <= N <= b.
    uniform(a, b): Return a random float N such that a <= N <= b.
    choice(seq): Return a random element from the non-empty sequence.
    shuffle(x): Shuffle list x in place.
    sample(population, k): Return a k-length list of unique elements.
    choices(population, weights, k): Return a k-length list with replacement.
    gauss(mu, sigma): Return a random float from a Gaussian distribution.
"""

from __future__ import annotations

import hashlib
from collections.abc import Iterable, MutableSequence, Sequence
from typing import TYPE_CHECKING

from klaw_random.distributions.float import f32_from_u32, f64_from_u64
from klaw_random.distributions.normal import StandardNormal
from klaw_random.distributions.uniform import UniformInt
from klaw_random.distributions.weighted import WeightedIndex
from klaw_random.errors import EmptyCollectionError
from klaw_random.generators.pcg import Pcg64
from klaw_random.seeding import expand_u64_seed
from klaw_random.seq import slice as _seq
from klaw_random.seq.index import gen_index
from klaw_random.thread import thread_rng
from klaw_random.types import U64

if TYPE_CHECKING:
    from klaw_random.core import RngCore
    from klaw_random.distributions.weighted import Weight

__all__ = [
    'Rand',
    'choice',
    'choices',
    'gauss',
    'rand_f32',
    'rand_f64',
    'rand_range_u64',
    'rand_u32',
    'rand_u64',
    'randint',
    'random',
    'sample',
    'shuffle',
    'uniform',
]

_MASK64 = 0xFFFF_FFFF_FFFF_FFFF
_STANDARD_NORMAL = StandardNormal()


def _resolve(rng: RngCore | None) -> RngCore:
    return thread_rng() if rng is None else rng


# --- Raw values ---


def rand_u32(*, rng: RngCore | None = None) -> int:
    return _resolve(rng).next_u32()


def rand_u64(*, rng: RngCore | None = None) -> int:
    return _resolve(rng).next_u64()


def rand_f32(*, rng: RngCore | None = None) -> float:
    """Float in `[0, 1)` with 24 bits of precision."""
    return f32_from_u32(_resolve(rng).next_u32())


def rand_f64(*, rng: RngCore | None = None) -> float:
    """Float in `[0, 1)` with 53 bits of precision."""
    return f64_from_u64(_resolve(rng).next_u64())


def rand_range_u64(start: int, end: int, *, rng: RngCore | None = None) -> int:
    """Integer in `[start, end)`, both within the u64 domain.

    Raises:
        InvalidRangeError: If `start >= end` or a bound is outside u64.
    """
    return UniformInt.sample_single(start, end, _resolve(rng), dtype=U64)


# --- random module compatible ---


def random(*, rng: RngCore | None = None) -> float:
    return f64_from_u64(_resolve(rng).next_u64())


def randint(a: int, b: int, *, rng: RngCore | None = None) -> int:
    """Integer N with `a <= N <= b`.

    Raises:
        InvalidRangeError: If `a > b` (a `ValueError`).
    """
    return UniformInt.sample_single(a, b, _resolve(rng), inclusive=True)


def uniform(a: float, b: float, *, rng: RngCore | None = None) -> float:
    """Float between `a` and `b`; the bounds may be given in either order."""
    return a + (b - a) * random(rng=rng)


def choice[T](seq: Sequence[T], *, rng: RngCore | None = None) -> T:
    """Random element of a non-empty sequence.

    Raises:
        IndexError: If `seq` is empty.
    """
    if not seq:
        msg = 'Cannot choose from an empty sequence'
        raise IndexError(msg)
    return seq[gen_index(_resolve(rng), len(seq))]


def shuffle[T](x: MutableSequence[T], *, rng: RngCore | None = None) -> None:
    _seq.shuffle(x, _resolve(rng))


def sample[T](population: Sequence[T], k: int, *, rng: RngCore | None = None) -> list[T]:
    """`k` unique elements in random order.

    Raises:
        ValueError: If `k` is negative or larger than the population.
    """
    return _seq.sample_without_replacement(population, k, _resolve(rng))


def choices[T](
    population: Sequence[T],
    weights: Iterable[Weight] | None = None,
    *,
    k: int = 1,
    rng: RngCore | None = None,
) -> list[T]:
    """`k` elements chosen with replacement, optionally weighted.

    Raises:
        EmptyCollectionError: If `population` is empty (a `ValueError`).
        ValueError: If the number of weights does not match the population.
    """
    n = len(population)
    if n == 0:
        raise EmptyCollectionError
    source = _resolve(rng)
    if weights is None:
        return [population[gen_index(source, n)] for _ in range(k)]
    distr = WeightedIndex(weights)
    if len(distr) != n:
        msg = 'The number of weights does not match the population'
        raise ValueError(msg)
    return [population[distr.sample(source)] for _ in range(k)]


def gauss(mu: float = 0.0, sigma: float = 1.0, *, rng: RngCore | None = None) -> float:
    """Normal variate with mean `mu` and standard deviation `sigma`."""
    return mu + sigma * _STANDARD_NORMAL.sample(_resolve(rng))


def _seed_bytes(a: int | str | bytes | bytearray) -> bytes:
    if isinstance(a, int):
        a = abs(a)
        while a >> 64:
            a = (a & _MASK64) ^ (a >> 64)
        return expand_u64_seed(a, Pcg64.SEED_SIZE)
    if isinstance(a, str):
        a = a.encode()
    return hashlib.sha512(bytes(a)).digest()[: Pcg64.SEED_SIZE]


class Rand:
    """Stateful generator with the `random` module's interface.

    Backed by a `Pcg64`, seeded from the operating system unless `seed` is
    given. Equal seeds give equal sequences.

    Example:
        ```python
        rng = Rand(12345)
        rng.randint(1, 6)
        rng.gen_multiple_u64(4)
        ```
    """

    __slots__ = ('_rng',)

    def __init__(self, seed: int | str | bytes | bytearray | None = None) -> None:
        self._rng: Pcg64
        self.seed(seed)

    @property
    def rng(self) -> Pcg64:
        """The underlying generator, for use with distributions."""
        return self._rng

    def seed(self, a: int | str | bytes | bytearray | None = None) -> None:
        """Reseed; None draws a fresh seed from the operating system.

        Raises:
            EntropyUnavailableError: If `a` is None and entropy is unavailable.
        """
        if a is None:
            self._rng = Pcg64.from_entropy()
        else:
            self._rng = Pcg64.from_seed(_seed_bytes(a))

    def gen_u32(self) -> int:
        return self._rng.next_u32()

    def gen_u64(self) -> int:
        return self._rng.next_u64()

    def gen_f32(self) -> float:
        return f32_from_u32(self._rng.next_u32())

    def gen_f64(self) -> float:
        return f64_from_u64(self._rng.next_u64())

    def gen_range(self, start: int, end: int) -> int:
        return UniformInt.sample_single(start, end, self._rng)

    def gen_multiple_u64(self, count: int) -> list[int]:
        return [self._rng.next_u64() for _ in range(count)]

    def gen_multiple_f64(self, count: int) -> list[float]:
        return [f64_from_u64(self._rng.next_u64()) for _ in range(count)]

    def random(self) -> float:
        return random(rng=self._rng)

    def randint(self, a: int, b: int) -> int:
        return randint(a, b, rng=self._rng)

    def uniform(self, a: float, b: float) -> float:
        return uniform(a, b, rng=self._rng)

    def choice[T](self, seq: Sequence[T]) -> T:
        return choice(seq, rng=self._rng)

    def shuffle[T](self, x: MutableSequence[T]) -> None:
        shuffle(x, rng=self._rng)

    def sample[T](self, population: Sequence[T], k: int) -> list[T]:
        return sample(population, k, rng=self._rng)

    def choices[T](self, population: Sequence[T], weights: Iterable[Weight] | None = None, *, k: int = 1) -> list[T]:
        return choices(population, weights, k=k, rng=self._rng)

    def gauss(self, mu: float = 0.0, sigma: float = 1.0) -> float:
        return gauss(mu, sigma, rng=self._rng)

    def __repr__(self) -> str:
        return f'Rand({self._rng!r})'
