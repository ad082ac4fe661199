"""Dirichlet distribution over the probability simplex."""

from __future__ import annotations

import math
from collections.abc import Iterable
from typing import TYPE_CHECKING

from klaw_random.distributions.base import Distribution
from klaw_random.distributions.float import Open01
from klaw_random.distributions.gamma import Gamma, _LargeShape
from klaw_random.errors import InvalidParameterError, ParameterErrorKind

if TYPE_CHECKING:
    from klaw_random.core import RngCore

__all__ = ['Dirichlet']


_OPEN01 = Open01()


class _LogGamma(Distribution[float]):
    """`log(X)` for `X ~ Gamma(shape, 1)` with `shape <= 1`.

    Uses the boost `X = Y * u ** (1 / shape)`, `Y ~ Gamma(shape + 1)`, in
    log space, so the result stays finite where `X` itself underflows to 0.
    """

    __slots__ = ('_boosted', '_inv_shape')

    def __init__(self, shape: float) -> None:
        self._boosted = _LargeShape(shape + 1.0, 1.0)
        self._inv_shape = 1.0 / shape

    def sample(self, rng: RngCore) -> float:
        log_u = math.log(_OPEN01.sample(rng)) * self._inv_shape
        return math.log(self._boosted.sample(rng)) + log_u


class Dirichlet(Distribution[list[float]]):
    """Dirichlet distribution with concentration parameters `alpha`.

    A sample is a list of `len(alpha)` non-negative floats summing to 1,
    drawn as independent `Gamma(alpha_i, 1)` variates divided by their sum.
    When any parameter is at most 1 the variates are drawn as logarithms and
    rescaled by the largest one before normalising. With very small
    parameters most components of a sample are exactly 0.0.

    Raises:
        InvalidParameterError: `ALPHA_TOO_SHORT` for fewer than two
            parameters, `ALPHA_TOO_SMALL` for a parameter that is not
            a positive finite number.

    Example:
        ```python
        Dirichlet([1.0, 2.0, 3.0]).sample(rng)  # e.g. [0.1, 0.35, 0.55]
        ```
    """

    __slots__ = ('_gammas', '_log_space', 'alpha')

    def __init__(self, alpha: Iterable[float]) -> None:
        alpha = list(alpha)
        if len(alpha) < 2:
            raise InvalidParameterError(ParameterErrorKind.ALPHA_TOO_SHORT, alpha)
        for a in alpha:
            if not (a > 0.0 and math.isfinite(a)):
                raise InvalidParameterError(ParameterErrorKind.ALPHA_TOO_SMALL, a)
        self.alpha = tuple(alpha)
        self._log_space = min(alpha) <= 1.0
        if self._log_space:
            self._gammas: list[Distribution[float]] = [
                _LogGamma(a) if a <= 1.0 else Gamma(a).map(math.log) for a in alpha
            ]
        else:
            self._gammas = [Gamma(a) for a in alpha]

    @classmethod
    def with_size(cls, alpha: float, size: int) -> Dirichlet:
        """Symmetric Dirichlet: `size` copies of one parameter.

        Raises:
            InvalidParameterError: `ALPHA_TOO_SMALL` or `SIZE_TOO_SMALL`
                (fewer than two dimensions).
        """
        if not (alpha > 0.0 and math.isfinite(alpha)):
            raise InvalidParameterError(ParameterErrorKind.ALPHA_TOO_SMALL, alpha)
        if size < 2:
            raise InvalidParameterError(ParameterErrorKind.SIZE_TOO_SMALL, size)
        return cls([alpha] * size)

    def sample(self, rng: RngCore) -> list[float]:
        samples = [g.sample(rng) for g in self._gammas]
        if self._log_space:
            # the largest term becomes exp(0) == 1, so the total is at least 1
            top = max(samples)
            samples = [math.exp(s - top) for s in samples]
        inv_total = 1.0 / sum(samples)
        return [s * inv_total for s in samples]

    def __len__(self) -> int:
        return len(self.alpha)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Dirichlet) and self.alpha == other.alpha

    def __hash__(self) -> int:
        return hash(('Dirichlet', self.alpha))

    def __repr__(self) -> str:
        return f'Dirichlet({list(self.alpha)!r})'
