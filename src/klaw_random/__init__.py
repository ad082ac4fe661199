"""klaw-random: random sampling for the Klaw ecosystem.

Turns raw pseudo-random bit streams into unbiased integers and floats over
arbitrary ranges, into values of statistical distributions, and into
randomized sequence operations (shuffles, samples, weighted picks).

Flat imports (preferred):
    from klaw_random import thread_rng, Pcg32, Uniform, WeightedIndex
    from klaw_random import shuffle, sample_without_replacement, reservoir_sample

Submodule imports (for organization):
    from klaw_random.generators import ChaCha20Rng, StepRng
    from klaw_random.distributions import Gamma, Dirichlet
    from klaw_random.seq import index
    from klaw_random.api import Rand, randint, choice
"""

# Configuration & logging
from klaw_random._config import RandomConfig, get_config, init
from klaw_random._logging import add_log_hook, clear_log_hooks, configure_logging, get_logger, remove_log_hook

# Result
from klaw_random._result import Err, Ok, Result

# Generator capability
from klaw_random.block import BlockRng, BlockRngCore
from klaw_random.core import CryptoRng, Rng, RngCore

# Distributions
from klaw_random.distributions import (
    Alphanumeric,
    Bernoulli,
    Dirichlet,
    DistMap,
    Distribution,
    Exp,
    Exp1,
    Gamma,
    Normal,
    Open01,
    OpenClosed01,
    Slice,
    Standard,
    StandardNormal,
    Uniform,
    UniformDuration,
    UniformFloat,
    UniformInt,
    WeightedAliasIndex,
    WeightedIndex,
    uniform_sampler,
)
from klaw_random.entropy import EntropySource, OsRng, getrandom

# Errors
from klaw_random.errors import (
    AllWeightsZero,
    AllWeightsZeroError,
    EmptyCollection,
    EmptyCollectionError,
    EntropyUnavailable,
    EntropyUnavailableError,
    InsufficientNonZero,
    InsufficientNonZeroError,
    InvalidParameter,
    InvalidParameterError,
    InvalidRange,
    InvalidRangeError,
    InvalidWeight,
    InvalidWeightError,
    ParameterErrorKind,
)

# Generators
from klaw_random.generators import (
    ChaCha8Rng,
    ChaCha12Rng,
    ChaCha20Rng,
    ChaChaCore,
    Pcg32,
    Pcg64,
    ReadRng,
    StdRng,
    StepRng,
)
from klaw_random.reseeding import ReseedingRng
from klaw_random.seeding import SeedableRng

# Sequence algorithms
from klaw_random.seq import (
    ReservoirSampler,
    choose,
    choose_from_iter,
    choose_multiple,
    choose_multiple_weighted,
    choose_weighted,
    gen_index,
    partial_shuffle,
    reservoir_sample,
    sample_without_replacement,
    shuffle,
)
from klaw_random.thread import ThreadRng, thread_rng

# Numeric domains
from klaw_random.types import (
    F32,
    F64,
    I8,
    I16,
    I32,
    I64,
    I128,
    ISIZE,
    U8,
    U16,
    U32,
    U64,
    U128,
    USIZE,
    FloatType,
    IntType,
)

__all__ = [
    # Numeric domains
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
    # Errors
    'AllWeightsZero',
    'AllWeightsZeroError',
    # Distributions
    'Alphanumeric',
    'Bernoulli',
    # Generator capability
    'BlockRng',
    'BlockRngCore',
    # Generators
    'ChaCha8Rng',
    'ChaCha12Rng',
    'ChaCha20Rng',
    'ChaChaCore',
    'CryptoRng',
    'Dirichlet',
    'DistMap',
    'Distribution',
    'EmptyCollection',
    'EmptyCollectionError',
    # Entropy
    'EntropySource',
    'EntropyUnavailable',
    'EntropyUnavailableError',
    # Result
    'Err',
    'Exp',
    'Exp1',
    'FloatType',
    'Gamma',
    'InsufficientNonZero',
    'InsufficientNonZeroError',
    'IntType',
    'InvalidParameter',
    'InvalidParameterError',
    'InvalidRange',
    'InvalidRangeError',
    'InvalidWeight',
    'InvalidWeightError',
    'Normal',
    'Ok',
    'Open01',
    'OpenClosed01',
    'OsRng',
    'ParameterErrorKind',
    'Pcg32',
    'Pcg64',
    # Configuration
    'RandomConfig',
    'ReadRng',
    'ReseedingRng',
    # Sequence algorithms
    'ReservoirSampler',
    'Result',
    'Rng',
    'RngCore',
    'SeedableRng',
    'Slice',
    'Standard',
    'StandardNormal',
    'StdRng',
    'StepRng',
    'ThreadRng',
    'Uniform',
    'UniformDuration',
    'UniformFloat',
    'UniformInt',
    'WeightedAliasIndex',
    'WeightedIndex',
    # Logging
    'add_log_hook',
    'choose',
    'choose_from_iter',
    'choose_multiple',
    'choose_multiple_weighted',
    'choose_weighted',
    'clear_log_hooks',
    'configure_logging',
    'gen_index',
    'get_config',
    'get_logger',
    'getrandom',
    'init',
    'partial_shuffle',
    'remove_log_hook',
    'reservoir_sample',
    'sample_without_replacement',
    'shuffle',
    'thread_rng',
    'uniform_sampler',
]
