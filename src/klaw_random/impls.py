"""Helpers for implementing `RngCore` in terms of one native operation.

A generator usually has one natural output (a 32-bit word, a 64-bit word
or a byte stream). These functions derive the other two from it with the
canonical little-endian byte order, so every generator fills buffers the
same way: words are emitted low byte first, and when a buffer ends inside
a word the unused high bytes of that word are dropped, never carried over
into the next call.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from klaw_random.core import ByteBuffer, RngCore

__all__ = [
    'fill_bytes_via_next',
    'fill_via_u32_chunks',
    'next_u32_via_fill',
    'next_u64_via_fill',
    'next_u64_via_u32',
]


def next_u64_via_u32(rng: RngCore) -> int:
    """Build a 64-bit word from two 32-bit words, low word first."""
    lo = rng.next_u32()
    hi = rng.next_u32()
    return (hi << 32) | lo


def fill_bytes_via_next(rng: RngCore, dest: ByteBuffer) -> None:
    """Fill `dest` from `next_u64`, using `next_u32` for a short tail.

    A tail of 1-4 bytes costs one 32-bit word, 5-7 bytes one 64-bit word.
    """
    length = len(dest)
    pos = 0
    while length - pos >= 8:
        dest[pos : pos + 8] = rng.next_u64().to_bytes(8, 'little')
        pos += 8
    remaining = length - pos
    if remaining > 4:
        dest[pos:] = rng.next_u64().to_bytes(8, 'little')[:remaining]
    elif remaining > 0:
        dest[pos:] = rng.next_u32().to_bytes(4, 'little')[:remaining]


def fill_via_u32_chunks(src: list[int], start: int, dest: ByteBuffer, offset: int) -> tuple[int, int]:
    """Copy words `src[start:]` into `dest[offset:]` as little-endian bytes.

    Returns:
        `(words_consumed, bytes_filled)`. A partially used last word counts
        as consumed.
    """
    words = min(len(src) - start, (len(dest) - offset + 3) // 4)
    data = b''.join(word.to_bytes(4, 'little') for word in src[start : start + words])
    filled = min(len(data), len(dest) - offset)
    dest[offset : offset + filled] = data[:filled]
    return words, filled


def next_u32_via_fill(rng: RngCore) -> int:
    buf = bytearray(4)
    rng.fill_bytes(buf)
    return int.from_bytes(buf, 'little')


def next_u64_via_fill(rng: RngCore) -> int:
    buf = bytearray(8)
    rng.fill_bytes(buf)
    return int.from_bytes(buf, 'little')
