"""Bernoulli distribution: a biased coin."""

from __future__ import annotations

from typing import TYPE_CHECKING

from klaw_random.distributions.base import Distribution
from klaw_random.errors import InvalidParameterError, ParameterErrorKind

if TYPE_CHECKING:
    from klaw_random.core import RngCore

__all__ = ['Bernoulli']

_SCALE = 1 << 64
# p == 1 cannot be represented as a 64-bit threshold
_ALWAYS_TRUE = _SCALE


class Bernoulli(Distribution[bool]):
    """Yields True with probability `p`.

    The probability is stored as a 64-bit integer threshold and compared
    against one `next_u64`, so precision is `2**-64`; `p == 0` never and
    `p == 1` always yields True.

    Raises:
        InvalidParameterError: If `p` is not in `[0, 1]`.

    Example:
        ```python
        coin = Bernoulli(0.3)
        coin.sample(rng)
        ```
    """

    __slots__ = ('_p_int',)

    def __init__(self, p: float) -> None:
        if not 0.0 <= p <= 1.0:
            raise InvalidParameterError(ParameterErrorKind.PROBABILITY_OUT_OF_RANGE, p)
        self._p_int = _ALWAYS_TRUE if p == 1.0 else int(p * _SCALE)

    @classmethod
    def from_ratio(cls, numerator: int, denominator: int) -> Bernoulli:
        """Probability exactly `numerator / denominator` (to 64 bits).

        Raises:
            InvalidParameterError: If the ratio is not in `[0, 1]` or the
                denominator is zero.
        """
        if denominator <= 0 or not 0 <= numerator <= denominator:
            raise InvalidParameterError(ParameterErrorKind.PROBABILITY_OUT_OF_RANGE, (numerator, denominator))
        distr = cls.__new__(cls)
        distr._p_int = _ALWAYS_TRUE if numerator == denominator else numerator * _SCALE // denominator
        return distr

    @property
    def p(self) -> float:
        return self._p_int / _SCALE

    def sample(self, rng: RngCore) -> bool:
        if self._p_int == _ALWAYS_TRUE:
            return True
        return rng.next_u64() < self._p_int

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Bernoulli) and self._p_int == other._p_int

    def __hash__(self) -> int:
        return hash(('Bernoulli', self._p_int))

    def __repr__(self) -> str:
        return f'Bernoulli(p={self.p})'
