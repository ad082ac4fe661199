"""Randomized operations on sequences."""

from __future__ import annotations

from collections.abc import Callable, MutableSequence, Sequence
from typing import TYPE_CHECKING

from klaw_random.distributions.weighted import WeightedIndex
from klaw_random.seq import index as _index
from klaw_random.seq.index import gen_index

if TYPE_CHECKING:
    from klaw_random.core import RngCore
    from klaw_random.distributions.weighted import Weight

__all__ = [
    'choose',
    'choose_multiple',
    'choose_multiple_weighted',
    'choose_weighted',
    'partial_shuffle',
    'sample_without_replacement',
    'shuffle',
]


def shuffle[T](seq: MutableSequence[T], rng: RngCore) -> None:
    """Shuffle `seq` in place (Fisher-Yates).

    Every permutation is equally likely; uses `len(seq) - 1` index draws.

    Example:
        ```python
        deck = list(range(52))
        shuffle(deck, rng)
        ```
    """
    for i in range(len(seq) - 1, 0, -1):
        j = gen_index(rng, i + 1)
        seq[i], seq[j] = seq[j], seq[i]


def partial_shuffle[T](seq: MutableSequence[T], amount: int, rng: RngCore) -> tuple[list[T], list[T]]:
    """Shuffle only the first `amount` positions of `seq` in place.

    After the call `seq[:amount]` is a uniformly random `amount`-permutation
    of the original elements; the order of the rest is unspecified.
    `amount` is clamped to `len(seq)`.

    Returns:
        `(chosen, rest)` as new lists.
    """
    n = len(seq)
    amount = min(max(amount, 0), n)
    for i in range(amount):
        j = i + gen_index(rng, n - i)
        seq[i], seq[j] = seq[j], seq[i]
    return list(seq[:amount]), list(seq[amount:])


def choose[T](seq: Sequence[T], rng: RngCore) -> T | None:
    """Return a uniformly random element, or None if `seq` is empty."""
    if not seq:
        return None
    return seq[gen_index(rng, len(seq))]


def choose_weighted[T](seq: Sequence[T], weight: Callable[[T], Weight], rng: RngCore) -> T:
    """Return one element, chosen with probability proportional to `weight(item)`.

    Raises:
        EmptyCollectionError: If `seq` is empty.
        InvalidWeightError: If a weight is negative, NaN or infinite.
        AllWeightsZeroError: If every weight is zero.
    """
    distr = WeightedIndex(weight(item) for item in seq)
    return seq[distr.sample(rng)]


def sample_without_replacement[T](seq: Sequence[T], k: int, rng: RngCore) -> list[T]:
    """Return `k` distinct elements of `seq` in uniformly random order.

    Runs a Fisher-Yates pass over a sparse copy of the positions, so it takes
    `k` draws and `O(k)` memory whatever `len(seq)` is. `seq` is untouched.

    Raises:
        ValueError: If `k` is negative or larger than `len(seq)`.
    """
    n = len(seq)
    if not 0 <= k <= n:
        msg = f'sample size {k} out of range for a sequence of length {n}'
        raise ValueError(msg)
    moved: dict[int, int] = {}
    picked: list[T] = []
    for i in range(k):
        j = i + gen_index(rng, n - i)
        picked.append(seq[moved.get(j, j)])
        moved[j] = moved.get(i, i)
    return picked


def choose_multiple[T](seq: Sequence[T], amount: int, rng: RngCore) -> list[T]:
    """Return `amount` distinct elements (fewer if `seq` is shorter).

    The order of the result is random but not guaranteed to be uniformly
    distributed; use `sample_without_replacement` when order matters.
    """
    amount = min(amount, len(seq))
    return [seq[i] for i in _index.sample(rng, len(seq), amount)]


def choose_multiple_weighted[T](
    seq: Sequence[T],
    amount: int,
    weight: Callable[[T], Weight],
    rng: RngCore,
) -> list[T]:
    """Return `amount` distinct elements, each pick weighted by what remains.

    Raises:
        InvalidWeightError: If a weight is negative, NaN or infinite.
        InsufficientNonZeroError: If fewer than `amount` elements have a
            positive weight.
    """
    picks = _index.sample_weighted(rng, len(seq), lambda i: weight(seq[i]), amount)
    return [seq[i] for i in picks]
