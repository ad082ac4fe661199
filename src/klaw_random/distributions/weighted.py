"""Weighted choice of an index: `WeightedIndex`.

Construction builds the running totals of the weights once; each sample
draws a single uniform value in `[0, total)` and binary-searches the totals.
Integer weights stay integers so the selection is exact; any float weight
switches the whole table to the float engine.
"""

from __future__ import annotations

import bisect
import math
from collections.abc import Iterable, Sequence
from itertools import accumulate
from typing import TYPE_CHECKING

from klaw_random.distributions.base import Distribution
from klaw_random.distributions.uniform import UniformFloat, UniformInt
from klaw_random.errors import AllWeightsZeroError, EmptyCollectionError, InvalidWeightError

if TYPE_CHECKING:
    from klaw_random.core import RngCore

__all__ = ['WeightedIndex', 'check_float_total', 'validate_weights']

type Weight = int | float


def check_float_total(weights: Sequence[Weight]) -> None:
    """Reject float weights whose running total overflows to infinity.

    Integer-only weights are exact and never overflow.

    Raises:
        InvalidWeightError: For the weight at which the total overflows.
    """
    if all(isinstance(w, int) for w in weights):
        return
    running = 0.0
    for i, w in enumerate(weights):
        try:
            running += w
        except OverflowError:
            raise InvalidWeightError(i, w) from None
        if math.isinf(running):
            raise InvalidWeightError(i, w)


def validate_weights(weights: Iterable[Weight]) -> list[Weight]:
    """Check weights and return them as a list.

    Raises:
        EmptyCollectionError: If there are no weights.
        InvalidWeightError: If a weight is negative, NaN or infinite, or the
            float total of the weights overflows.
        AllWeightsZeroError: If every weight is zero.
    """
    checked = list(weights)
    if not checked:
        raise EmptyCollectionError
    for i, w in enumerate(checked):
        if isinstance(w, bool) or not isinstance(w, int | float):
            raise InvalidWeightError(i, w)
        if isinstance(w, float) and not math.isfinite(w):
            raise InvalidWeightError(i, w)
        if w < 0:
            raise InvalidWeightError(i, w)
    if not any(w > 0 for w in checked):
        raise AllWeightsZeroError
    check_float_total(checked)
    return checked


class WeightedIndex(Distribution[int]):
    """Sample index `i` with probability `weights[i] / sum(weights)`.

    Zero weights are allowed; their indices are never returned.

    Raises:
        EmptyCollectionError: If `weights` is empty.
        InvalidWeightError: If a weight is negative, NaN or infinite,
            or the float weights sum past the largest finite float.
        AllWeightsZeroError: If all weights are zero.

    Example:
        ```python
        items = ['a', 'b', 'c']
        dist = WeightedIndex([1, 0, 3])
        items[dist.sample(rng)]  # 'c' three times as often as 'a'
        ```
    """

    __slots__ = ('_cumulative', '_total', '_total_distr', '_weights')

    def __init__(self, weights: Iterable[Weight]) -> None:
        self._set(validate_weights(weights))

    def _set(self, weights: list[Weight]) -> None:
        totals = list(accumulate(weights))
        self._weights = weights
        self._total = totals[-1]
        # the last total is implied by the sampling range
        self._cumulative = totals[:-1]
        if all(isinstance(w, int) for w in weights):
            self._total_distr: UniformInt | UniformFloat = UniformInt(0, self._total)
        else:
            self._total = float(self._total)
            self._total_distr = UniformFloat(0.0, self._total)

    @property
    def weights(self) -> Sequence[Weight]:
        return tuple(self._weights)

    @property
    def total(self) -> Weight:
        return self._total

    def update_weights(self, updates: Iterable[tuple[int, Weight]]) -> None:
        """Replace some weights and rebuild the table.

        On error the distribution is left unchanged.

        Raises:
            IndexError: If an index is out of range.
            InvalidWeightError: If a new weight is invalid.
            AllWeightsZeroError: If the update zeroes every weight.
        """
        weights = list(self._weights)
        for index, weight in updates:
            if not 0 <= index < len(weights):
                msg = f'weight index {index} out of range'
                raise IndexError(msg)
            weights[index] = weight
        self._set(validate_weights(weights))

    def sample(self, rng: RngCore) -> int:
        chosen = self._total_distr.sample(rng)
        return bisect.bisect_right(self._cumulative, chosen)

    def __len__(self) -> int:
        return len(self._weights)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, WeightedIndex) and self._weights == other._weights

    def __hash__(self) -> int:
        return hash(('WeightedIndex', tuple(self._weights)))

    def __repr__(self) -> str:
        return f'WeightedIndex({self._weights!r})'
