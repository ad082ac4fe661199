"""Weighted index sampling in constant time with Vose's alias method."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from klaw_random.distributions.base import Distribution
from klaw_random.distributions.uniform import UniformFloat, UniformInt, sample_below
from klaw_random.distributions.weighted import Weight, validate_weights

if TYPE_CHECKING:
    from klaw_random.core import RngCore

__all__ = ['WeightedAliasIndex']


class WeightedAliasIndex(Distribution[int]):
    """Sample index `i` with probability `weights[i] / sum(weights)` in O(1).

    Construction is O(n) and splits the weights into `n` equal buckets, each
    holding at most two indices: the bucket's own index, kept with
    probability `prob[i] / total`, and an alias. A sample draws a bucket and
    one uniform value. Integer weights give an exact table.

    Prefer `WeightedIndex` when weights change or few samples are taken.

    Raises:
        EmptyCollectionError: If `weights` is empty.
        InvalidWeightError: If a weight is negative, NaN or infinite,
            or the float weights sum past the largest finite float.
        AllWeightsZeroError: If all weights are zero.
    """

    __slots__ = ('_alias', '_prob', '_total_distr', '_weights')

    def __init__(self, weights: Iterable[Weight]) -> None:
        checked = validate_weights(weights)
        n = len(checked)
        exact = all(isinstance(w, int) for w in checked)
        if exact:
            total: Weight = sum(checked)
            scaled: list[Weight] = [w * n for w in checked]
        else:
            # float tables are normalised to a total of n
            weight_sum = float(sum(checked))
            total = float(n)
            scaled = [w / weight_sum * n for w in checked]
        prob: list[Weight] = [0] * n
        alias = list(range(n))

        small = [i for i, w in enumerate(scaled) if w < total]
        large = [i for i, w in enumerate(scaled) if w >= total]
        while small and large:
            s = small.pop()
            g = large.pop()
            prob[s] = scaled[s]
            alias[s] = g
            scaled[g] = scaled[g] + scaled[s] - total
            if scaled[g] < total:
                small.append(g)
            else:
                large.append(g)

        positive = next(i for i, w in enumerate(checked) if w > 0)
        for g in large:
            prob[g] = total
        # float rounding can leave entries in `small`
        for s in small:
            if checked[s] > 0:
                prob[s] = total
            else:
                prob[s] = 0
                alias[s] = positive

        self._weights = checked
        self._prob = prob
        self._alias = alias
        self._total_distr: UniformInt | UniformFloat = (
            UniformInt(0, total) if exact else UniformFloat(0.0, total)
        )

    def sample(self, rng: RngCore) -> int:
        bucket = sample_below(rng, len(self._prob))
        if self._total_distr.sample(rng) < self._prob[bucket]:
            return bucket
        return self._alias[bucket]

    def __len__(self) -> int:
        return len(self._weights)

    def __repr__(self) -> str:
        return f'WeightedAliasIndex({self._weights!r})'
