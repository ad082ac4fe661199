"""Normal (Gaussian) distribution."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from klaw_random.distributions.base import Distribution
from klaw_random.distributions.float import unit_half_open
from klaw_random.errors import InvalidParameterError, ParameterErrorKind

if TYPE_CHECKING:
    from klaw_random.core import RngCore

__all__ = ['Normal', 'StandardNormal']


class StandardNormal(Distribution[float]):
    """N(0, 1) via the Marsaglia polar method.

    Each accepted pair yields two independent normals; only one is
    returned because distributions keep no state between samples.
    """

    __slots__ = ()

    def sample(self, rng: RngCore) -> float:
        while True:
            x = 2.0 * unit_half_open(rng) - 1.0
            y = 2.0 * unit_half_open(rng) - 1.0
            s = x * x + y * y
            if 0.0 < s < 1.0:
                return x * math.sqrt(-2.0 * math.log(s) / s)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, StandardNormal)

    def __hash__(self) -> int:
        return hash('StandardNormal')

    def __repr__(self) -> str:
        return 'StandardNormal()'


_STANDARD = StandardNormal()


class Normal(Distribution[float]):
    """N(mean, std_dev**2).

    Raises:
        InvalidParameterError: `MEAN_NOT_FINITE` or `STD_DEV_INVALID`
            (negative, NaN or infinite).

    Example:
        ```python
        heights = Normal(170.0, 8.0)
        heights.sample(rng)
        ```
    """

    __slots__ = ('mean', 'std_dev')

    def __init__(self, mean: float, std_dev: float) -> None:
        if not math.isfinite(mean):
            raise InvalidParameterError(ParameterErrorKind.MEAN_NOT_FINITE, mean)
        if not (math.isfinite(std_dev) and std_dev >= 0.0):
            raise InvalidParameterError(ParameterErrorKind.STD_DEV_INVALID, std_dev)
        self.mean = mean
        self.std_dev = std_dev

    def sample(self, rng: RngCore) -> float:
        return self.mean + self.std_dev * _STANDARD.sample(rng)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Normal) and (self.mean, self.std_dev) == (other.mean, other.std_dev)

    def __hash__(self) -> int:
        return hash(('Normal', self.mean, self.std_dev))

    def __repr__(self) -> str:
        return f'Normal(mean={self.mean}, std_dev={self.std_dev})'
