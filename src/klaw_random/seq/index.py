"""Sampling of distinct indices.

`sample` picks `amount` distinct indices from `range(length)` and chooses
between three algorithms by the relative sizes of the two:

- Floyd's combination algorithm: `amount` draws, cheap when `amount` is
  small.
- Partial Fisher-Yates over a full index list: best when `amount` is a
  large fraction of `length`.
- Rejection with a seen-set: best when `length` is huge and `amount`
  moderate.

`sample_weighted` draws indices one at a time in proportion to their
weights, removing each pick's weight from a Fenwick tree so the next draw
renormalises over what is left.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from typing import TYPE_CHECKING

from klaw_random.distributions.float import unit_half_open
from klaw_random.distributions.uniform import sample_below
from klaw_random.distributions.weighted import Weight, check_float_total
from klaw_random.errors import InsufficientNonZeroError, InvalidWeightError

if TYPE_CHECKING:
    from klaw_random.core import RngCore

__all__ = ['gen_index', 'sample', 'sample_weighted']

# (constant, per-amount) coefficients, for short and long index ranges
_INPLACE_C0 = (1.6, 10.0)
_INPLACE_C1 = (8.0 / 45.0, 70.0 / 9.0)
_REJECTION_FACTOR = (270.0, 330.0 / 9.0)
_LONG_RANGE = 500_000


def gen_index(rng: RngCore, ubound: int) -> int:
    """Uniform index in `[0, ubound)`.

    Bounds up to `2**32` are sampled from a single `next_u32` word, which
    keeps index choices identical across platforms.

    Raises:
        InvalidRangeError: If `ubound` is not positive.
    """
    return sample_below(rng, ubound)


def sample(rng: RngCore, length: int, amount: int) -> list[int]:
    """Return `amount` distinct indices from `range(length)` in random order.

    Raises:
        ValueError: If `amount > length` or either is negative.
    """
    if amount < 0 or length < 0:
        msg = f'length and amount must be non-negative, got {length} and {amount}'
        raise ValueError(msg)
    if amount > length:
        msg = f'cannot sample {amount} distinct indices from {length}'
        raise ValueError(msg)
    j = 1 if length >= _LONG_RANGE else 0
    if amount < 163:
        if amount > 11 and length < (_INPLACE_C1[j] + _INPLACE_C0[j] * amount) * amount:
            return sample_inplace(rng, length, amount)
        return sample_floyd(rng, length, amount)
    if length < _REJECTION_FACTOR[j] * amount:
        return sample_inplace(rng, length, amount)
    return sample_rejection(rng, length, amount)


def sample_floyd(rng: RngCore, length: int, amount: int) -> list[int]:
    """Floyd's algorithm followed by a shuffle of the picks."""
    indices: list[int] = []
    seen: set[int] = set()
    for j in range(length - amount, length):
        t = gen_index(rng, j + 1)
        pick = j if t in seen else t
        seen.add(pick)
        indices.append(pick)
    for i in range(len(indices) - 1, 0, -1):
        k = gen_index(rng, i + 1)
        indices[i], indices[k] = indices[k], indices[i]
    return indices


def sample_inplace(rng: RngCore, length: int, amount: int) -> list[int]:
    """Partial Fisher-Yates over `range(length)`."""
    indices = list(range(length))
    for i in range(amount):
        j = i + gen_index(rng, length - i)
        indices[i], indices[j] = indices[j], indices[i]
    del indices[amount:]
    return indices


def sample_rejection(rng: RngCore, length: int, amount: int) -> list[int]:
    """Draw until `amount` distinct values have been seen."""
    seen: set[int] = set()
    indices: list[int] = []
    while len(indices) < amount:
        pick = gen_index(rng, length)
        if pick not in seen:
            seen.add(pick)
            indices.append(pick)
    return indices


class _FenwickTree:
    """Prefix sums over mutable weights."""

    __slots__ = ('_size', '_tree')

    def __init__(self, weights: list[Weight]) -> None:
        self._size = len(weights)
        tree: list[Weight] = [0, *weights]
        for i in range(1, self._size + 1):
            parent = i + (i & -i)
            if parent <= self._size:
                tree[parent] += tree[i]
        self._tree = tree

    def add(self, index: int, delta: Weight) -> None:
        i = index + 1
        while i <= self._size:
            self._tree[i] += delta
            i += i & -i

    def find(self, target: Weight) -> int:
        """Smallest index whose inclusive prefix sum exceeds `target`."""
        pos = 0
        step = 1 << self._size.bit_length()
        while step:
            nxt = pos + step
            if nxt <= self._size and self._tree[nxt] <= target:
                pos = nxt
                target -= self._tree[nxt]
            step >>= 1
        return pos


def _nearest_positive(weights: list[Weight], index: int) -> int:
    # Favours neighbours of `index`; only reached when float drift lands the
    # target on a removed or zero weight.
    index = min(index, len(weights) - 1)
    for offset in range(len(weights)):
        for candidate in (index - offset, index + offset):
            if 0 <= candidate < len(weights) and weights[candidate] > 0:
                return candidate
    msg = 'no positive weight left'
    raise RuntimeError(msg)


def sample_weighted(
    rng: RngCore,
    length: int,
    weight: Callable[[int], Weight],
    amount: int,
) -> list[int]:
    """Pick `amount` distinct indices, each draw weighted by what remains.

    The first index is chosen with probability `weight(i) / total`; its
    weight is then removed and the next draw uses the remaining total.
    Zero-weight indices are never chosen.

    Raises:
        InvalidWeightError: If a weight is negative, NaN or infinite,
            or the float weights sum past the largest finite float.
        InsufficientNonZeroError: If fewer than `amount` weights are positive.
    """
    weights: list[Weight] = []
    for i in range(length):
        w = weight(i)
        if isinstance(w, bool) or not isinstance(w, int | float):
            raise InvalidWeightError(i, w)
        if (isinstance(w, float) and not math.isfinite(w)) or w < 0:
            raise InvalidWeightError(i, w)
        weights.append(w)
    check_float_total(weights)

    available = sum(1 for w in weights if w > 0)
    if amount > available:
        raise InsufficientNonZeroError(amount, available)

    exact = all(isinstance(w, int) for w in weights)
    tree = _FenwickTree(weights)
    total: Weight = sum(weights) if exact else math.fsum(weights)
    picks: list[int] = []
    for _ in range(amount):
        if exact:
            target: Weight = sample_below(rng, total)
        else:
            if total <= 0.0:
                total = math.fsum(weights)
            target = unit_half_open(rng) * total
        index = tree.find(target)
        if index >= length or weights[index] <= 0:
            # float rounding pushed the target past the last live weight
            index = _nearest_positive(weights, index)
        picks.append(index)
        tree.add(index, -weights[index])
        total -= weights[index]
        weights[index] = 0
    return picks
