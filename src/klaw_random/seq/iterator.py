"""Random selection from iterables of unknown length."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Self

from klaw_random.seq.index import gen_index

if TYPE_CHECKING:
    from klaw_random.core import RngCore

__all__ = ['ReservoirSampler', 'choose_from_iter', 'reservoir_sample']


def choose_from_iter[T](iterable: Iterable[T], rng: RngCore) -> T | None:
    """Return one uniformly chosen item in a single pass, or None if empty.

    The `i`-th item replaces the current choice with probability `1 / i`.
    """
    chosen: T | None = None
    for seen, item in enumerate(iterable, start=1):
        if seen == 1 or gen_index(rng, seen) == 0:
            chosen = item
    return chosen


class ReservoirSampler[T]:
    """Streaming uniform sample of `amount` items (Algorithm R).

    The first `amount` items are kept unconditionally. Item number `n`
    after that is admitted with probability `amount / n` and replaces a
    uniformly chosen slot, so after any number of items each one seen so
    far is held with the same probability.

    Example:
        ```python
        sampler = ReservoirSampler(3, rng)
        for line in open('huge.log'):
            sampler.feed(line)
        sampler.reservoir
        ```
    """

    __slots__ = ('_items', '_rng', 'amount', 'seen')

    def __init__(self, amount: int, rng: RngCore) -> None:
        if amount < 0:
            msg = f'reservoir size must be non-negative, got {amount}'
            raise ValueError(msg)
        self.amount = amount
        self.seen = 0
        self._rng = rng
        self._items: list[T] = []

    def feed(self, item: T) -> None:
        self.seen += 1
        if len(self._items) < self.amount:
            self._items.append(item)
            return
        if self.amount == 0:
            return
        slot = gen_index(self._rng, self.seen)
        if slot < self.amount:
            self._items[slot] = item

    def extend(self, items: Iterable[T]) -> Self:
        for item in items:
            self.feed(item)
        return self

    @property
    def reservoir(self) -> list[T]:
        """A copy of the current sample."""
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f'ReservoirSampler(amount={self.amount}, seen={self.seen})'


def reservoir_sample[T](iterable: Iterable[T], k: int, rng: RngCore) -> list[T]:
    """Uniformly sample `k` items from a stream in one pass.

    Each of the `n` items is retained with probability `k / n`. A stream of
    fewer than `k` items is returned whole, in stream order.

    Raises:
        ValueError: If `k` is negative.
    """
    return ReservoirSampler(k, rng).extend(iterable).reservoir
