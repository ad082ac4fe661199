"""Distributions: turn raw generator output into typed values.

Every distribution implements `sample(rng)` against the `RngCore`
protocol, is immutable after construction, and composes with `map`.
"""

from klaw_random.distributions.base import DistMap, Distribution
from klaw_random.distributions.bernoulli import Bernoulli
from klaw_random.distributions.dirichlet import Dirichlet
from klaw_random.distributions.exponential import Exp, Exp1
from klaw_random.distributions.float import Open01, OpenClosed01
from klaw_random.distributions.gamma import Gamma
from klaw_random.distributions.normal import Normal, StandardNormal
from klaw_random.distributions.other import Alphanumeric, Slice
from klaw_random.distributions.standard import Standard
from klaw_random.distributions.uniform import (
    Uniform,
    UniformDuration,
    UniformFloat,
    UniformInt,
    uniform_sampler,
)
from klaw_random.distributions.weighted import WeightedIndex
from klaw_random.distributions.weighted_alias import WeightedAliasIndex

__all__ = [
    'Alphanumeric',
    'Bernoulli',
    'DistMap',
    'Dirichlet',
    'Distribution',
    'Exp',
    'Exp1',
    'Gamma',
    'Normal',
    'Open01',
    'OpenClosed01',
    'Slice',
    'Standard',
    'StandardNormal',
    'Uniform',
    'UniformDuration',
    'UniformFloat',
    'UniformInt',
    'WeightedAliasIndex',
    'WeightedIndex',
    'uniform_sampler',
]
