"""Raw-bits-to-float conversion and the unit-interval distributions.

A float in `[0, 1)` takes the top `precision` bits of a native word as a
multiple of `2**-precision` (53 bits from a u64 for F64, 24 bits from a u32
for F32), so every representable value is a multiple of the same step and
equally likely. The open and half-open variants shift that grid.
"""

from __future__ import annotations

import math
import struct
from typing import TYPE_CHECKING

from klaw_random.distributions.base import Distribution
from klaw_random.types import F32, F64, FloatType

if TYPE_CHECKING:
    from klaw_random.core import RngCore

__all__ = [
    'Open01',
    'OpenClosed01',
    'f32_from_u32',
    'f64_from_u64',
    'next_below',
    'round_f32',
    'unit_closed',
    'unit_half_open',
]

_F64_SCALE = 2.0**-53
_F32_SCALE = 2.0**-24
_F32 = struct.Struct('<f')
_U32 = struct.Struct('<I')


def f64_from_u64(raw: int) -> float:
    """Map a u64 to `[0, 1)` using its top 53 bits."""
    return (raw >> 11) * _F64_SCALE


def f32_from_u32(raw: int) -> float:
    """Map a u32 to `[0, 1)` using its top 24 bits."""
    return (raw >> 8) * _F32_SCALE


def round_f32(value: float) -> float:
    """Round to the nearest IEEE-754 binary32 value."""
    return _F32.unpack(_F32.pack(value))[0]


def next_below(value: float, ftype: FloatType = F64) -> float:
    """Largest value of `ftype` strictly less than `value`."""
    if ftype != F32:
        return math.nextafter(value, -math.inf)
    if value == 0.0:
        return -(2.0**-149)
    (bits,) = _U32.unpack(_F32.pack(value))
    bits = bits - 1 if value > 0 else bits + 1
    return _F32.unpack(_U32.pack(bits))[0]


def unit_half_open(rng: RngCore, ftype: FloatType = F64) -> float:
    """Sample `[0, 1)`."""
    if ftype == F32:
        return f32_from_u32(rng.next_u32())
    return f64_from_u64(rng.next_u64())


def unit_closed(rng: RngCore, ftype: FloatType = F64) -> float:
    """Sample `[0, 1]`: both 0 and 1 are reachable."""
    if ftype == F32:
        return round_f32((rng.next_u32() >> 8) / ((1 << 24) - 1))
    return (rng.next_u64() >> 11) / ((1 << 53) - 1)


class OpenClosed01(Distribution[float]):
    """Floats in `(0, 1]`.

    Useful wherever zero must be excluded, e.g. `-log(u)`.
    """

    __slots__ = ('ftype',)

    def __init__(self, ftype: FloatType = F64) -> None:
        self.ftype = ftype

    def sample(self, rng: RngCore) -> float:
        if self.ftype == F32:
            return ((rng.next_u32() >> 8) + 1) * _F32_SCALE
        return ((rng.next_u64() >> 11) + 1) * _F64_SCALE

    def __repr__(self) -> str:
        return f'OpenClosed01({self.ftype!r})'


class Open01(Distribution[float]):
    """Floats in `(0, 1)`: a grid offset by half a step from both ends."""

    __slots__ = ('ftype',)

    def __init__(self, ftype: FloatType = F64) -> None:
        self.ftype = ftype

    def sample(self, rng: RngCore) -> float:
        if self.ftype == F32:
            return ((rng.next_u32() >> 9) + 0.5) * 2.0**-23
        return ((rng.next_u64() >> 12) + 0.5) * 2.0**-52

    def __repr__(self) -> str:
        return f'Open01({self.ftype!r})'
