"""Structured logging for klaw-random.

Library code logs through `get_logger(__name__)`. Nothing is printed until
`configure_logging()` (or `klaw_random.init(log_level=...)`) attaches a
handler to the `klaw_random` logger namespace; the host application's root
logger is left alone.

Events the library emits:

| Event | Level | Fields |
| --- | --- | --- |
| `generator reseeded` | debug | `core`, `reseeds` |
| `reseeding failed, continuing with current state` | warning | `source`, `reason` |
| `entropy seeding failed` | debug | `generator`, `reason` |
| `thread generator created` | debug | `thread`, `threshold` |
| `invalid KLAW_RANDOM_RESEED_THRESHOLD, using default` | warning | `value` |

Hooks registered with `add_log_hook()` see every event as a dict, before
level filtering, which makes them the easiest way to assert on log output.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from typing import Any

import structlog

__all__ = [
    'add_log_hook',
    'clear_log_hooks',
    'configure_logging',
    'get_logger',
    'remove_log_hook',
]

LIBRARY_LOGGER = 'klaw_random'

type LogHook = Callable[[dict[str, Any]], None]

_log_hooks: list[LogHook] = []
_handler: logging.Handler | None = None


def _run_hooks(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    for hook in _log_hooks:
        try:
            hook(event_dict.copy())
        except Exception:  # noqa: BLE001, S112
            continue
    return event_dict


def _pre_chain() -> list[Any]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt='iso'),
        _run_hooks,
    ]


def configure_logging(level: str = 'INFO', *, json_output: bool = True) -> None:
    """Route klaw-random's structlog events to stderr.

    Calling it again replaces the handler installed by the previous call.

    Args:
        level: Threshold for the `klaw_random` loggers ("DEBUG", "INFO", ...).
        json_output: Render JSON lines when True, a console layout otherwise.
    """
    global _handler

    structlog.configure(
        processors=[
            *_pre_chain(),
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    if json_output:
        renderer: Any = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_pre_chain(),
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    library_logger = logging.getLogger(LIBRARY_LOGGER)
    if _handler is not None:
        library_logger.removeHandler(_handler)
    library_logger.addHandler(handler)
    library_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    library_logger.propagate = False
    _handler = handler


def get_logger(name: str | None = None) -> Any:
    """Return a structlog logger, by default the library's own."""
    return structlog.get_logger(name or LIBRARY_LOGGER)


def add_log_hook(hook: LogHook) -> None:
    """Call `hook` with a copy of every subsequent log event dict."""
    _log_hooks.append(hook)


def remove_log_hook(hook: LogHook) -> None:
    if hook in _log_hooks:
        _log_hooks.remove(hook)


def clear_log_hooks() -> None:
    _log_hooks.clear()
