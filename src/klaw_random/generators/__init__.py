"""Concrete bit generators.

The sampling engine is generic over `RngCore`; these are the generators
shipped with the package:

- `Pcg32`, `Pcg64`: fast, small-state, not cryptographic.
- `ChaCha8Rng`, `ChaCha12Rng`, `ChaCha20Rng` (`StdRng` = ChaCha12): cipher based.
- `StepRng`: deterministic mock for tests.
- `ReadRng`: reads bytes from a binary stream (fallible).
"""

from klaw_random.generators.chacha import ChaCha8Rng, ChaCha12Rng, ChaCha20Rng, ChaChaCore, StdRng
from klaw_random.generators.mock import StepRng
from klaw_random.generators.pcg import Pcg32, Pcg64
from klaw_random.generators.read import ReadRng

__all__ = [
    'ChaCha8Rng',
    'ChaCha12Rng',
    'ChaCha20Rng',
    'ChaChaCore',
    'Pcg32',
    'Pcg64',
    'ReadRng',
    'StdRng',
    'StepRng',
]
