"""Small distributions: `Alphanumeric` and `Slice`."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from klaw_random.distributions.base import Distribution
from klaw_random.distributions.uniform import UniformInt
from klaw_random.errors import EmptyCollectionError

if TYPE_CHECKING:
    from klaw_random.core import RngCore

__all__ = ['Alphanumeric', 'Slice']

_CHARSET = 'ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789'


class Alphanumeric(Distribution[str]):
    """Uniform single characters from `[A-Za-z0-9]`.

    Takes the top 6 bits of a `next_u32` and retries on the two values
    past the 62-character set.

    Example:
        ```python
        token = ''.join(rng.sample(Alphanumeric()) for _ in range(16))
        ```
    """

    __slots__ = ()

    def sample(self, rng: RngCore) -> str:
        while True:
            var = rng.next_u32() >> 26
            if var < len(_CHARSET):
                return _CHARSET[var]

    def __repr__(self) -> str:
        return 'Alphanumeric()'


class Slice[T](Distribution[T]):
    """Uniform choice of one element of a non-empty sequence.

    Raises:
        EmptyCollectionError: If `items` is empty.
    """

    __slots__ = ('_index', 'items')

    def __init__(self, items: Sequence[T]) -> None:
        if len(items) == 0:
            raise EmptyCollectionError
        self.items = items
        self._index = UniformInt(0, len(items))

    def sample(self, rng: RngCore) -> T:
        return self.items[self._index.sample(rng)]

    def __len__(self) -> int:
        return len(self.items)

    def __repr__(self) -> str:
        return f'Slice({self.items!r})'
