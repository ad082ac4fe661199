"""Minimal Ok/Err result type for the fallible generator API.

`Rng.try_fill_bytes` and `SeedableRng.try_from_entropy` return
`Ok(value)` or `Err(error)` where the error is one of the struct variants
from `klaw_random.errors`. Call `unwrap()` to switch to raise-based code.

Example:
    ```python
    from klaw_random import Ok, Err, OsRng

    buf = bytearray(16)
    match OsRng().try_fill_bytes(buf):
        case Ok(_):
            print(buf.hex())
        case Err(error):
            print(f'no entropy: {error.reason}')
    ```
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Never

__all__ = ['Err', 'Ok', 'Result']


@dataclass(slots=True, frozen=True)
class Ok[T]:
    """Successful outcome holding `value`."""

    value: T
    __match_args__ = ('value',)

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        """Return the contained value."""
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value

    def unwrap_err(self) -> Never:
        raise AssertionError(f'called unwrap_err() on Ok({self.value!r})')

    def map[U](self, f: Callable[[T], U]) -> Ok[U]:
        """Transform the contained value."""
        return Ok(f(self.value))

    def map_err(self, f: Callable[[Any], Any]) -> Ok[T]:
        return self

    def and_then[U, E](self, f: Callable[[T], Ok[U] | Err[E]]) -> Ok[U] | Err[E]:
        """Chain a computation that may fail."""
        return f(self.value)


@dataclass(slots=True, frozen=True)
class Err[E]:
    """Failed outcome holding `error`.

    The error is normally an error struct with a `to_exception()` method;
    plain exceptions are accepted too.
    """

    error: E
    __match_args__ = ('error',)

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> Never:
        """Raise the exception variant of the contained error.

        Raises:
            Exception: `error.to_exception()` for error structs, or the
                error itself if it is already an exception.
        """
        raise _as_exception(self.error)

    def unwrap_or[T](self, default: T) -> T:
        return default

    def unwrap_err(self) -> E:
        """Return the contained error."""
        return self.error

    def map(self, f: Callable[[Any], Any]) -> Err[E]:
        return self

    def map_err[F](self, f: Callable[[E], F]) -> Err[F]:
        """Transform the contained error."""
        return Err(f(self.error))

    def and_then(self, f: Callable[[Any], Any]) -> Err[E]:
        return self


type Result[T, E] = Ok[T] | Err[E]


def _as_exception(error: Any) -> BaseException:
    if isinstance(error, BaseException):
        return error
    to_exception = getattr(error, 'to_exception', None)
    if to_exception is not None:
        return to_exception()
    return RuntimeError(f'called unwrap() on Err({error!r})')
