"""Sampling error types: dual struct+exception for Result and raise-based code.

Struct variants are frozen `msgspec.Struct`s suitable for `Result[T, E]`
returns (e.g. `Rng.try_fill_bytes`). Exception variants are what the
constructors of distributions and the sequence helpers raise. Each side
converts to the other with `to_exception()` / `to_struct()`.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

import msgspec

__all__ = [
    'AllWeightsZero',
    'AllWeightsZeroError',
    'EmptyCollection',
    'EmptyCollectionError',
    'EntropyUnavailable',
    'EntropyUnavailableError',
    'InsufficientNonZero',
    'InsufficientNonZeroError',
    'InvalidParameter',
    'InvalidParameterError',
    'InvalidRange',
    'InvalidRangeError',
    'InvalidWeight',
    'InvalidWeightError',
    'ParameterErrorKind',
]


# --- Range Errors ---


class InvalidRange(msgspec.Struct, frozen=True, gc=False):
    """Malformed sample range - struct variant for Result[T, InvalidRange]."""

    low: Any
    high: Any
    reason: str = 'low must be less than high'

    def to_exception(self) -> InvalidRangeError:
        """Convert to exception for raise-based code."""
        return InvalidRangeError(self.low, self.high, self.reason)


class InvalidRangeError(ValueError):
    """Malformed sample range - exception variant."""

    def __init__(self, low: Any, high: Any, reason: str = 'low must be less than high') -> None:
        self.low = low
        self.high = high
        self.reason = reason
        super().__init__(f'Invalid range ({low!r}, {high!r}): {reason}')

    def to_struct(self) -> InvalidRange:
        """Convert to struct for Result-based code."""
        return InvalidRange(self.low, self.high, self.reason)


# --- Weighted Collection Errors ---


class EmptyCollection(msgspec.Struct, frozen=True, gc=False):
    """No items to choose from - struct variant."""

    def to_exception(self) -> EmptyCollectionError:
        """Convert to exception for raise-based code."""
        return EmptyCollectionError()


class EmptyCollectionError(ValueError):
    """No items to choose from - exception variant."""

    def __init__(self) -> None:
        super().__init__('Collection is empty')

    def to_struct(self) -> EmptyCollection:
        """Convert to struct for Result-based code."""
        return EmptyCollection()


class AllWeightsZero(msgspec.Struct, frozen=True, gc=False):
    """Every weight is zero - struct variant."""

    def to_exception(self) -> AllWeightsZeroError:
        """Convert to exception for raise-based code."""
        return AllWeightsZeroError()


class AllWeightsZeroError(ValueError):
    """Every weight is zero - exception variant."""

    def __init__(self) -> None:
        super().__init__('All weights are zero')

    def to_struct(self) -> AllWeightsZero:
        """Convert to struct for Result-based code."""
        return AllWeightsZero()


class InvalidWeight(msgspec.Struct, frozen=True, gc=False):
    """A weight is negative, NaN or infinite - struct variant."""

    index: int
    weight: Any

    def to_exception(self) -> InvalidWeightError:
        """Convert to exception for raise-based code."""
        return InvalidWeightError(self.index, self.weight)


class InvalidWeightError(ValueError):
    """A weight is negative, NaN or infinite - exception variant."""

    def __init__(self, index: int, weight: Any) -> None:
        self.index = index
        self.weight = weight
        super().__init__(f'Invalid weight {weight!r} at index {index}')

    def to_struct(self) -> InvalidWeight:
        """Convert to struct for Result-based code."""
        return InvalidWeight(self.index, self.weight)


class InsufficientNonZero(msgspec.Struct, frozen=True, gc=False):
    """Fewer positive weights than requested picks - struct variant."""

    requested: int
    available: int

    def to_exception(self) -> InsufficientNonZeroError:
        """Convert to exception for raise-based code."""
        return InsufficientNonZeroError(self.requested, self.available)


class InsufficientNonZeroError(ValueError):
    """Fewer positive weights than requested picks - exception variant."""

    def __init__(self, requested: int, available: int) -> None:
        self.requested = requested
        self.available = available
        super().__init__(f'Requested {requested} items but only {available} have non-zero weight')

    def to_struct(self) -> InsufficientNonZero:
        """Convert to struct for Result-based code."""
        return InsufficientNonZero(self.requested, self.available)


# --- Distribution Parameter Errors ---


class ParameterErrorKind(StrEnum):
    """What was wrong with a distribution parameter."""

    PROBABILITY_OUT_OF_RANGE = 'probability_out_of_range'
    MEAN_NOT_FINITE = 'mean_not_finite'
    STD_DEV_INVALID = 'std_dev_invalid'
    LAMBDA_INVALID = 'lambda_invalid'
    SHAPE_TOO_SMALL = 'shape_too_small'
    SCALE_TOO_SMALL = 'scale_too_small'
    ALPHA_TOO_SHORT = 'alpha_too_short'
    ALPHA_TOO_SMALL = 'alpha_too_small'
    SIZE_TOO_SMALL = 'size_too_small'


class InvalidParameter(msgspec.Struct, frozen=True, gc=False):
    """Distribution parameter rejected at construction - struct variant."""

    kind: ParameterErrorKind
    value: Any = None

    def to_exception(self) -> InvalidParameterError:
        """Convert to exception for raise-based code."""
        return InvalidParameterError(self.kind, self.value)


class InvalidParameterError(ValueError):
    """Distribution parameter rejected at construction - exception variant."""

    def __init__(self, kind: ParameterErrorKind, value: Any = None) -> None:
        self.kind = kind
        self.value = value
        super().__init__(f'Invalid distribution parameter ({kind}): {value!r}')

    def to_struct(self) -> InvalidParameter:
        """Convert to struct for Result-based code."""
        return InvalidParameter(self.kind, self.value)


# --- Entropy Errors ---


class EntropyUnavailable(msgspec.Struct, frozen=True, gc=False):
    """Entropy source failed or is exhausted - struct variant."""

    source: str
    reason: str | None = None

    def to_exception(self) -> EntropyUnavailableError:
        """Convert to exception for raise-based code."""
        return EntropyUnavailableError(self.source, self.reason)


class EntropyUnavailableError(OSError):
    """Entropy source failed or is exhausted - exception variant."""

    def __init__(self, source: str, reason: str | None = None) -> None:
        self.source = source
        self.reason = reason
        msg = f"Entropy source '{source}' unavailable"
        if reason:
            msg = f'{msg}: {reason}'
        super().__init__(msg)

    def to_struct(self) -> EntropyUnavailable:
        """Convert to struct for Result-based code."""
        return EntropyUnavailable(self.source, self.reason)
