"""Gamma distribution (Marsaglia & Tsang, 2000)."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from klaw_random.distributions.base import Distribution
from klaw_random.distributions.exponential import Exp
from klaw_random.distributions.float import Open01
from klaw_random.distributions.normal import StandardNormal
from klaw_random.errors import InvalidParameterError, ParameterErrorKind

if TYPE_CHECKING:
    from klaw_random.core import RngCore

__all__ = ['Gamma']

_NORMAL = StandardNormal()
_OPEN01 = Open01()


class _LargeShape:
    """Squeeze-and-reject sampler for shape >= 1."""

    __slots__ = ('c', 'd', 'scale')

    def __init__(self, shape: float, scale: float) -> None:
        self.d = shape - 1.0 / 3.0
        self.c = 1.0 / math.sqrt(9.0 * self.d)
        self.scale = scale

    def sample(self, rng: RngCore) -> float:
        d, c = self.d, self.c
        while True:
            x = _NORMAL.sample(rng)
            v_cbrt = 1.0 + c * x
            if v_cbrt <= 0.0:
                continue
            v = v_cbrt * v_cbrt * v_cbrt
            u = _OPEN01.sample(rng)
            x_sqr = x * x
            if u < 1.0 - 0.0331 * x_sqr * x_sqr or math.log(u) < 0.5 * x_sqr + d * (1.0 - v + math.log(v)):
                return d * v * self.scale


class _SmallShape:
    """Shape < 1: Gamma(shape + 1) scaled by `u ** (1 / shape)`."""

    __slots__ = ('inv_shape', 'large')

    def __init__(self, shape: float, scale: float) -> None:
        self.inv_shape = 1.0 / shape
        self.large = _LargeShape(shape + 1.0, scale)

    def sample(self, rng: RngCore) -> float:
        u = _OPEN01.sample(rng)
        return self.large.sample(rng) * u**self.inv_shape


class Gamma(Distribution[float]):
    """Gamma distribution with the given `shape` (k) and `scale` (theta).

    `shape == 1` is sampled as an exponential, `shape < 1` through the
    boost `Gamma(shape + 1) * u ** (1 / shape)`, larger shapes with
    Marsaglia and Tsang's squeeze method.

    Raises:
        InvalidParameterError: `SHAPE_TOO_SMALL` / `SCALE_TOO_SMALL` when a
            parameter is not a positive finite number.

    Example:
        ```python
        Gamma(2.0, 5.0).sample(rng)
        ```
    """

    __slots__ = ('_impl', 'scale', 'shape')

    def __init__(self, shape: float, scale: float = 1.0) -> None:
        if not (shape > 0.0 and math.isfinite(shape)):
            raise InvalidParameterError(ParameterErrorKind.SHAPE_TOO_SMALL, shape)
        if not (scale > 0.0 and math.isfinite(scale)):
            raise InvalidParameterError(ParameterErrorKind.SCALE_TOO_SMALL, scale)
        self.shape = shape
        self.scale = scale
        if shape == 1.0:
            self._impl: Exp | _SmallShape | _LargeShape = Exp(1.0 / scale)
        elif shape < 1.0:
            self._impl = _SmallShape(shape, scale)
        else:
            self._impl = _LargeShape(shape, scale)

    def sample(self, rng: RngCore) -> float:
        return self._impl.sample(rng)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Gamma) and (self.shape, self.scale) == (other.shape, other.scale)

    def __hash__(self) -> int:
        return hash(('Gamma', self.shape, self.scale))

    def __repr__(self) -> str:
        return f'Gamma(shape={self.shape}, scale={self.scale})'
