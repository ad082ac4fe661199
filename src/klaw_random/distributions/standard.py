"""The `Standard` distribution: the natural "any value" of a type."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from klaw_random.distributions.base import Distribution
from klaw_random.distributions.float import f32_from_u32, f64_from_u64
from klaw_random.types import F32, F64, U64, FloatType, IntType

if TYPE_CHECKING:
    from klaw_random.core import RngCore

__all__ = ['Standard']


def _normalize(kind: Any) -> IntType | FloatType | type[bool]:
    if kind is bool:
        return bool
    if kind is int:
        return U64
    if kind is float:
        return F64
    if isinstance(kind, IntType | FloatType):
        return kind
    msg = f'Standard has no definition for {kind!r}'
    raise TypeError(msg)


class Standard(Distribution[Any]):
    """Uniform over the whole domain of a fixed-width type.

    - `IntType`: every value of the domain equally likely; 8/16/32-bit
      types take the low bits of one `next_u32`, 128-bit types combine two
      `next_u64` words, low word first.
    - `float` / `F64` / `F32`: `[0, 1)` with full-precision steps.
    - `bool`: the top bit of one `next_u32`.

    Example:
        ```python
        Standard(U8).sample(rng)   # 0..=255
        Standard(I16).sample(rng)  # -32768..=32767
        ```
    """

    __slots__ = ('kind',)

    def __init__(self, kind: Any = float) -> None:
        self.kind = _normalize(kind)

    def sample(self, rng: RngCore) -> Any:
        kind = self.kind
        if kind is bool:
            return bool(rng.next_u32() >> 31)
        if isinstance(kind, FloatType):
            if kind == F32:
                return f32_from_u32(rng.next_u32())
            return f64_from_u64(rng.next_u64())
        if kind.bits <= 32:
            raw = rng.next_u32()
        elif kind.bits <= 64:
            raw = rng.next_u64()
        else:
            raw = 0
            for i in range((kind.bits + 63) // 64):
                raw |= rng.next_u64() << (64 * i)
        return kind.from_bits(raw)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Standard) and self.kind == other.kind

    def __hash__(self) -> int:
        return hash(('Standard', self.kind))

    def __repr__(self) -> str:
        name = 'bool' if self.kind is bool else repr(self.kind)
        return f'Standard({name})'
