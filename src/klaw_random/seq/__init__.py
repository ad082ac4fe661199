"""Sequence algorithms: shuffles, samples and weighted picks."""

from klaw_random.seq import index
from klaw_random.seq.index import gen_index
from klaw_random.seq.iterator import ReservoirSampler, choose_from_iter, reservoir_sample
from klaw_random.seq.slice import (
    choose,
    choose_multiple,
    choose_multiple_weighted,
    choose_weighted,
    partial_shuffle,
    sample_without_replacement,
    shuffle,
)

__all__ = [
    'ReservoirSampler',
    'choose',
    'choose_from_iter',
    'choose_multiple',
    'choose_multiple_weighted',
    'choose_weighted',
    'gen_index',
    'index',
    'partial_shuffle',
    'reservoir_sample',
    'sample_without_replacement',
    'shuffle',
]
