"""Uniform sampling over ranges.

Integers use Lemire's multiply-shift method with rejection: draw a
native-width word `r`, widen `m = r * W` for a range of width `W`; the
high half of `m` is the offset from `low`. Draws whose low half falls below
`(2**B - W) % W` are rejected, which removes the modulo bias exactly. The
native width `B` is 32 bits for ranges of up to `2**32` values (and for
8/16/32-bit `dtype`s), 64 bits up to `2**64`, and the next multiple of 64
beyond that. The loop has no iteration cap; each draw is accepted with
probability above one half.

Floats scale a unit value: `low + u * (high - low)`. Rounding can land on
`high`; half-open ranges clamp such results to the largest value below
`high`, closed ranges to `high` itself.

The backend is chosen by the `uniform_sampler` typeclass from the type of
`low`. Register another instance to support a new value type:

```python
@uniform_sampler.instance(Decimal)
def _decimal_sampler(low, high, *, inclusive=False, dtype=None):
    return UniformDecimal(low, high, inclusive=inclusive)
```
"""

from __future__ import annotations

import math
from datetime import timedelta
from typing import TYPE_CHECKING, Any

from klaw_random._dispatch import typeclass
from klaw_random.distributions.base import Distribution
from klaw_random.distributions.float import next_below, round_f32, unit_closed, unit_half_open
from klaw_random.errors import InvalidRangeError
from klaw_random.types import F32, F64, FloatType, IntType

if TYPE_CHECKING:
    from klaw_random.core import RngCore

__all__ = [
    'Uniform',
    'UniformDuration',
    'UniformFloat',
    'UniformInt',
    'sample_below',
    'uniform_sampler',
]

_MICROSECOND = timedelta(microseconds=1)


def _native_bits(width: int, dtype: IntType | None) -> int:
    if dtype is not None:
        return dtype.sample_bits
    if width <= 1 << 32:
        return 32
    if width <= 1 << 64:
        return 64
    return ((width - 1).bit_length() + 63) // 64 * 64


def _draw(rng: RngCore, bits: int) -> int:
    if bits == 32:
        return rng.next_u32()
    if bits == 64:
        return rng.next_u64()
    raw = 0
    for i in range(bits // 64):
        raw |= rng.next_u64() << (64 * i)
    return raw


def _lemire(rng: RngCore, width: int, bits: int, threshold: int) -> int:
    mask = (1 << bits) - 1
    while True:
        m = _draw(rng, bits) * width
        if m & mask >= threshold:
            return m >> bits


def sample_below(rng: RngCore, width: int) -> int:
    """Unbiased integer in `[0, width)`.

    Raises:
        InvalidRangeError: If `width` is not positive.
    """
    if width <= 0:
        raise InvalidRangeError(0, width)
    bits = _native_bits(width, None)
    return _lemire(rng, width, bits, ((1 << bits) - width) % width)


class UniformInt(Distribution[int]):
    """Uniform integers in `[low, high)` or `[low, high]`.

    Sampling multiplies a native-width word by the width and redraws while
    the low half of the product falls below `(2**bits - width) % width`.
    That threshold is under half of `2**bits`, so a sample takes at most 2
    draws on average; widths just above a power of two come closest.

    Args:
        low: Lower bound (inclusive).
        high: Upper bound (exclusive unless `inclusive`).
        inclusive: Include `high`.
        dtype: Pin the integer domain; bounds outside it are rejected and
            the native sampling width follows the type.

    Raises:
        InvalidRangeError: If the range is empty or leaves `dtype`'s domain.
    """

    __slots__ = ('_bits', '_threshold', 'dtype', 'high', 'inclusive', 'low', 'width')

    def __init__(self, low: int, high: int, *, inclusive: bool = False, dtype: IntType | None = None) -> None:
        last = high if inclusive else high - 1
        if low > last:
            reason = 'low must not exceed high' if inclusive else 'low must be less than high'
            raise InvalidRangeError(low, high, reason)
        if dtype is not None and not (dtype.contains(low) and dtype.contains(last)):
            raise InvalidRangeError(low, high, f'bounds outside the {dtype.name} domain')
        self.low = low
        self.high = high
        self.inclusive = inclusive
        self.dtype = dtype
        self.width = last - low + 1
        self._bits = _native_bits(self.width, dtype)
        self._threshold = ((1 << self._bits) - self.width) % self.width

    @classmethod
    def sample_single(
        cls,
        low: int,
        high: int,
        rng: RngCore,
        *,
        inclusive: bool = False,
        dtype: IntType | None = None,
    ) -> int:
        """Draw one value without keeping the distribution around."""
        return cls(low, high, inclusive=inclusive, dtype=dtype).sample(rng)

    def sample(self, rng: RngCore) -> int:
        return self.low + _lemire(rng, self.width, self._bits, self._threshold)

    def _key(self) -> tuple[Any, ...]:
        return (self.low, self.high, self.inclusive, self.dtype)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, UniformInt) and self._key() == other._key()

    def __hash__(self) -> int:
        return hash(('UniformInt', *self._key()))

    def __repr__(self) -> str:
        bracket = ']' if self.inclusive else ')'
        return f'UniformInt[{self.low}, {self.high}{bracket}'


class UniformFloat(Distribution[float]):
    """Uniform floats in `[low, high)` or `[low, high]`.

    Raises:
        InvalidRangeError: If a bound is not finite, the range is empty, or
            `high - low` overflows.
    """

    __slots__ = ('ftype', 'high', 'inclusive', 'low', 'scale')

    def __init__(self, low: float, high: float, *, inclusive: bool = False, ftype: FloatType = F64) -> None:
        if ftype == F32:
            low, high = round_f32(low), round_f32(high)
        if not (math.isfinite(low) and math.isfinite(high)):
            raise InvalidRangeError(low, high, 'bounds must be finite')
        if inclusive and low > high:
            raise InvalidRangeError(low, high, 'low must not exceed high')
        if not inclusive and low >= high:
            raise InvalidRangeError(low, high)
        scale = high - low
        if not math.isfinite(scale):
            raise InvalidRangeError(low, high, 'range width overflows')
        self.low = low
        self.high = high
        self.inclusive = inclusive
        self.ftype = ftype
        self.scale = scale

    @classmethod
    def sample_single(
        cls,
        low: float,
        high: float,
        rng: RngCore,
        *,
        inclusive: bool = False,
        ftype: FloatType = F64,
    ) -> float:
        return cls(low, high, inclusive=inclusive, ftype=ftype).sample(rng)

    def sample(self, rng: RngCore) -> float:
        if self.inclusive:
            value = self.low + unit_closed(rng, self.ftype) * self.scale
            if self.ftype == F32:
                value = round_f32(value)
            return min(value, self.high)
        value = self.low + unit_half_open(rng, self.ftype) * self.scale
        if self.ftype == F32:
            value = round_f32(value)
        if value >= self.high:
            value = next_below(self.high, self.ftype)
        return value

    def _key(self) -> tuple[Any, ...]:
        return (self.low, self.high, self.inclusive, self.ftype)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, UniformFloat) and self._key() == other._key()

    def __hash__(self) -> int:
        return hash(('UniformFloat', *self._key()))

    def __repr__(self) -> str:
        bracket = ']' if self.inclusive else ')'
        return f'UniformFloat[{self.low}, {self.high}{bracket}'


class UniformDuration(Distribution[timedelta]):
    """Uniform `timedelta`s at microsecond resolution."""

    __slots__ = ('_micros', 'high', 'inclusive', 'low')

    def __init__(self, low: timedelta, high: timedelta, *, inclusive: bool = False) -> None:
        if not isinstance(high, timedelta):
            raise InvalidRangeError(low, high, 'both bounds must be timedelta')
        self.low = low
        self.high = high
        self.inclusive = inclusive
        try:
            self._micros = UniformInt(low // _MICROSECOND, high // _MICROSECOND, inclusive=inclusive)
        except InvalidRangeError as exc:
            raise InvalidRangeError(low, high, exc.reason) from None

    def sample(self, rng: RngCore) -> timedelta:
        return timedelta(microseconds=self._micros.sample(rng))

    def __eq__(self, other: object) -> bool:
        return isinstance(other, UniformDuration) and (self.low, self.high, self.inclusive) == (
            other.low,
            other.high,
            other.inclusive,
        )

    def __hash__(self) -> int:
        return hash(('UniformDuration', self.low, self.high, self.inclusive))

    def __repr__(self) -> str:
        bracket = ']' if self.inclusive else ')'
        return f'UniformDuration[{self.low}, {self.high}{bracket}'


@typeclass
def uniform_sampler(low: Any, high: Any, *, inclusive: bool = False, dtype: Any = None) -> Distribution[Any]:
    """Build the uniform sampler for the type of `low`."""
    ...


@uniform_sampler.instance(int)
def _int_sampler(low: int, high: int, *, inclusive: bool = False, dtype: Any = None) -> UniformInt:
    if dtype is not None and not isinstance(dtype, IntType):
        msg = f'integer bounds need an IntType dtype, got {dtype!r}'
        raise TypeError(msg)
    return UniformInt(low, high, inclusive=inclusive, dtype=dtype)


@uniform_sampler.instance(float)
def _float_sampler(low: float, high: float, *, inclusive: bool = False, dtype: Any = None) -> UniformFloat:
    if dtype is not None and not isinstance(dtype, FloatType):
        msg = f'float bounds need a FloatType dtype, got {dtype!r}'
        raise TypeError(msg)
    return UniformFloat(float(low), float(high), inclusive=inclusive, ftype=dtype or F64)


@uniform_sampler.instance(timedelta)
def _duration_sampler(
    low: timedelta, high: timedelta, *, inclusive: bool = False, dtype: Any = None
) -> UniformDuration:
    return UniformDuration(low, high, inclusive=inclusive)


def _coerce(low: Any, high: Any, dtype: Any) -> tuple[Any, Any]:
    """Promote mixed int/float bounds (or int bounds with a float dtype) to float."""
    numeric = (int, float)
    if isinstance(low, numeric) and isinstance(high, numeric):
        if isinstance(dtype, FloatType) or isinstance(low, float) or isinstance(high, float):
            return float(low), float(high)
    return low, high


class Uniform[T](Distribution[T]):
    """Uniform distribution over a range of any registered value type.

    Construction validates the range and precomputes the sampling
    constants; `sample` never raises.

    Args:
        low: Lower bound (inclusive).
        high: Upper bound (exclusive unless `inclusive`).
        inclusive: Sample from `[low, high]` instead of `[low, high)`.
        dtype: `IntType` or `FloatType` pinning the value domain.

    Raises:
        InvalidRangeError: If `low >= high` (half-open) or `low > high`
            (closed), or a float bound is not finite.
        NoInstanceError: If no sampler is registered for the bounds' type.

    Example:
        ```python
        die = Uniform(1, 7)
        die.sample(rng)                     # 1..=6
        Uniform(0.0, 1.0, inclusive=True)   # [0, 1]
        Uniform(-128, 127, inclusive=True, dtype=I8)
        ```
    """

    __slots__ = ('_sampler',)

    def __init__(self, low: T, high: T, *, inclusive: bool = False, dtype: IntType | FloatType | None = None) -> None:
        low, high = _coerce(low, high, dtype)
        self._sampler: Distribution[T] = uniform_sampler(low, high, inclusive=inclusive, dtype=dtype)

    @classmethod
    def new_inclusive(cls, low: T, high: T, *, dtype: IntType | FloatType | None = None) -> Uniform[T]:
        """Uniform over the closed range `[low, high]`."""
        return cls(low, high, inclusive=True, dtype=dtype)

    @staticmethod
    def sample_single(
        low: Any,
        high: Any,
        rng: RngCore,
        *,
        inclusive: bool = False,
        dtype: IntType | FloatType | None = None,
    ) -> Any:
        """Draw one value from a range used only once.

        Raises:
            InvalidRangeError: If the range is malformed.
        """
        low, high = _coerce(low, high, dtype)
        return uniform_sampler(low, high, inclusive=inclusive, dtype=dtype).sample(rng)

    @property
    def sampler(self) -> Distribution[T]:
        """The type-specific backend (`UniformInt`, `UniformFloat`, ...)."""
        return self._sampler

    def sample(self, rng: RngCore) -> T:
        return self._sampler.sample(rng)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Uniform) and self._sampler == other._sampler

    def __hash__(self) -> int:
        return hash(self._sampler)

    def __repr__(self) -> str:
        return f'Uniform({self._sampler!r})'
