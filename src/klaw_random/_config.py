"""Library configuration: RandomConfig, init() and get_config()."""

from __future__ import annotations

import os
from dataclasses import dataclass

from klaw_random._logging import configure_logging, get_logger

__all__ = [
    'DEFAULT_RESEED_THRESHOLD',
    'RandomConfig',
    'get_config',
    'init',
]

logger = get_logger(__name__)

# Bytes a thread-local generator may emit before it reseeds from entropy.
DEFAULT_RESEED_THRESHOLD = 1024 * 64


@dataclass(frozen=True)
class RandomConfig:
    """Configuration for klaw-random.

    Attributes:
        reseed_threshold: Bytes emitted by a thread-local generator before it
            reseeds from the entropy source. Must be positive.
        log_level: Logging level (e.g., "DEBUG", "INFO"). None = silent.
        json_logs: Render logs as JSON (True) or for a console (False).
    """

    reseed_threshold: int = DEFAULT_RESEED_THRESHOLD
    log_level: str | None = None
    json_logs: bool = True

    def __post_init__(self) -> None:
        if self.reseed_threshold <= 0:
            msg = f'reseed_threshold must be positive, got {self.reseed_threshold}'
            raise ValueError(msg)

    @classmethod
    def from_env(cls) -> RandomConfig:
        """Build a config from `KLAW_RANDOM_*` environment variables.

        Unparseable values are logged and replaced by defaults.
        """
        threshold = DEFAULT_RESEED_THRESHOLD
        raw_threshold = os.environ.get('KLAW_RANDOM_RESEED_THRESHOLD', '').strip()
        if raw_threshold:
            try:
                threshold = int(raw_threshold)
            except ValueError:
                threshold = 0
            if threshold <= 0:
                logger.warning(
                    'invalid KLAW_RANDOM_RESEED_THRESHOLD, using default',
                    value=raw_threshold,
                    default=DEFAULT_RESEED_THRESHOLD,
                )
                threshold = DEFAULT_RESEED_THRESHOLD

        log_level = os.environ.get('KLAW_RANDOM_LOG_LEVEL') or None
        return cls(reseed_threshold=threshold, log_level=log_level)


_config: RandomConfig | None = None


def init(
    reseed_threshold: int | None = None,
    log_level: str | None = None,
    *,
    json_logs: bool = True,
) -> RandomConfig:
    """Install the klaw-random configuration.

    Generators already created in running threads keep the threshold they
    were built with; new thread-local generators pick up the new value.

    Args:
        reseed_threshold: Reseed interval in bytes. Read from the environment
            (or the default) if None.
        log_level: Logging level ("DEBUG", "INFO", etc.). None = silent.
        json_logs: JSON (True) or console (False) log rendering.

    Returns:
        The RandomConfig that was set.

    Example:
        ```python
        import klaw_random

        klaw_random.init(reseed_threshold=1024 * 1024, log_level='DEBUG')
        ```
    """
    global _config  # noqa: PLW0603

    if reseed_threshold is None:
        reseed_threshold = RandomConfig.from_env().reseed_threshold

    _config = RandomConfig(
        reseed_threshold=reseed_threshold,
        log_level=log_level,
        json_logs=json_logs,
    )

    if log_level is not None:
        configure_logging(log_level, json_output=json_logs)

    return _config


def get_config() -> RandomConfig:
    """Get the current configuration, reading the environment on first use."""
    global _config  # noqa: PLW0603

    if _config is None:
        _config = RandomConfig.from_env()
        if _config.log_level is not None:
            configure_logging(_config.log_level, json_output=_config.json_logs)
    return _config
