"""Exponential distribution, built by composing a unit distribution."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from klaw_random.distributions.base import DistMap, Distribution
from klaw_random.distributions.float import OpenClosed01
from klaw_random.errors import InvalidParameterError, ParameterErrorKind

if TYPE_CHECKING:
    from klaw_random.core import RngCore

__all__ = ['Exp', 'Exp1']


def _neg_log(u: float) -> float:
    return -math.log(u)


class Exp1(DistMap[float, float]):
    """Exp(1) by inverse CDF: `-ln(u)` for `u` in `(0, 1]`.

    `u` never reaches 0, so the result is always finite.
    """

    __slots__ = ()

    def __init__(self) -> None:
        super().__init__(OpenClosed01(), _neg_log)

    def __repr__(self) -> str:
        return 'Exp1()'


_EXP1 = Exp1()


class Exp(Distribution[float]):
    """Exponential distribution with rate `lambd` (mean `1 / lambd`).

    Raises:
        InvalidParameterError: `LAMBDA_INVALID` if `lambd` is not positive.
    """

    __slots__ = ('lambd',)

    def __init__(self, lambd: float) -> None:
        if not lambd > 0.0:
            raise InvalidParameterError(ParameterErrorKind.LAMBDA_INVALID, lambd)
        self.lambd = lambd

    def sample(self, rng: RngCore) -> float:
        return _EXP1.sample(rng) / self.lambd

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Exp) and self.lambd == other.lambd

    def __hash__(self) -> int:
        return hash(('Exp', self.lambd))

    def __repr__(self) -> str:
        return f'Exp(lambd={self.lambd})'
