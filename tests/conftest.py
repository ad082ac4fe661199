"""Shared fixtures for klaw-random tests."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest
from klaw_random import Pcg32, _config, _logging, clear_log_hooks


@pytest.fixture
def rng() -> Pcg32:
    """A deterministically seeded generator."""
    return Pcg32.seed_from_u64(0x5EED)


@pytest.fixture
def fresh_config(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Drop the installed config so the next get_config() starts over."""
    monkeypatch.setattr(_config, '_config', None)
    monkeypatch.delenv('KLAW_RANDOM_RESEED_THRESHOLD', raising=False)
    monkeypatch.delenv('KLAW_RANDOM_LOG_LEVEL', raising=False)
    yield


@pytest.fixture
def cleanup_hooks() -> Iterator[None]:
    """Clear log hooks before and after a test."""
    clear_log_hooks()
    yield
    clear_log_hooks()


@pytest.fixture
def reset_logging() -> Iterator[None]:
    """Detach the handler configure_logging() installs on the library logger."""
    yield
    library_logger = logging.getLogger(_logging.LIBRARY_LOGGER)
    if _logging._handler is not None:
        library_logger.removeHandler(_logging._handler)
        _logging._handler = None
    library_logger.setLevel(logging.NOTSET)
    library_logger.propagate = True
