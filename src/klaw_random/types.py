"""Numeric domain descriptors.

Python integers are unbounded, so sampling code needs an explicit bit
width whenever a value should cover a machine integer's full domain
(`Standard(U32)`) or when a range must be checked against one
(`Uniform(0, 300, dtype=U8)` fails). Floats default to `F64`; `F32`
produces values exactly representable as IEEE-754 binary32.
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = [
    'F32',
    'F64',
    'I8',
    'I16',
    'I32',
    'I64',
    'I128',
    'ISIZE',
    'U8',
    'U16',
    'U32',
    'U64',
    'U128',
    'USIZE',
    'FloatType',
    'IntType',
]


@dataclass(frozen=True, slots=True)
class IntType:
    """A fixed-width integer domain.

    Attributes:
        name: Short display name, e.g. "u32".
        bits: Bit width of the domain.
        signed: Whether values are two's-complement signed.
    """

    name: str
    bits: int
    signed: bool

    @property
    def min(self) -> int:
        return -(1 << (self.bits - 1)) if self.signed else 0

    @property
    def max(self) -> int:
        return (1 << (self.bits - 1)) - 1 if self.signed else (1 << self.bits) - 1

    @property
    def mask(self) -> int:
        return (1 << self.bits) - 1

    @property
    def sample_bits(self) -> int:
        """Native word width used to sample this domain (never below 32)."""
        return max(32, self.bits)

    def contains(self, value: int) -> bool:
        return self.min <= value <= self.max

    def from_bits(self, raw: int) -> int:
        """Reinterpret the low `bits` of `raw` as a value of this type."""
        raw &= self.mask
        if self.signed and raw >> (self.bits - 1):
            return raw - (1 << self.bits)
        return raw

    def __repr__(self) -> str:
        return self.name.upper()


@dataclass(frozen=True, slots=True)
class FloatType:
    """An IEEE-754 binary floating-point format.

    Attributes:
        name: Short display name, e.g. "f64".
        bits: Storage width (32 or 64).
        fraction_bits: Explicit significand bits (23 or 52).
    """

    name: str
    bits: int
    fraction_bits: int

    @property
    def precision(self) -> int:
        """Significand precision including the implicit leading bit."""
        return self.fraction_bits + 1

    @property
    def epsilon(self) -> float:
        return 2.0 ** -self.fraction_bits

    def __repr__(self) -> str:
        return self.name.upper()


U8 = IntType('u8', 8, signed=False)
U16 = IntType('u16', 16, signed=False)
U32 = IntType('u32', 32, signed=False)
U64 = IntType('u64', 64, signed=False)
U128 = IntType('u128', 128, signed=False)
I8 = IntType('i8', 8, signed=True)
I16 = IntType('i16', 16, signed=True)
I32 = IntType('i32', 32, signed=True)
I64 = IntType('i64', 64, signed=True)
I128 = IntType('i128', 128, signed=True)
USIZE = U64
ISIZE = I64

F32 = FloatType('f32', 32, 23)
F64 = FloatType('f64', 64, 52)
