# src/chaosdispatch/core/logging.py
"""Logging for chaosdispatch.

Library modules obtain loggers from ``get_logger``, which wraps a stdlib
logger under the ``chaosdispatch`` namespace in a structlog BoundLogger.
Events therefore travel through the stdlib logger tree: with nothing
configured they hit the package's NullHandler and stdlib's default WARNING
threshold, so importing and using the library prints nothing.

Applications that want chaosdispatch's events rendered call
``configure_logging``. It installs one handler on the ``chaosdispatch``
logger (not the root logger), so handlers the host has put on the root
logger are left alone:

    configure_logging(json_output=True, level="DEBUG", stream=sys.stderr)
    ...
    reset_logging()

Note that ``configure_logging`` also sets structlog's global processor
chain, so it is meant to be called by applications and the CLI, never from
library code.
"""

import logging
import sys
from typing import Any, TextIO

import structlog
from structlog.stdlib import ProcessorFormatter

LIBRARY_LOGGER = "chaosdispatch"


class _ChaosHandler(logging.StreamHandler):
    """StreamHandler installed by configure_logging (so it can be found and replaced)."""


def _shared_processors() -> list[Any]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
    ]


def _build_formatter(json_output: bool, stream: TextIO) -> ProcessorFormatter:
    processors: list[Any] = [ProcessorFormatter.remove_processors_meta]
    if json_output:
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=stream.isatty()))
    return ProcessorFormatter(
        processors=processors,
        foreign_pre_chain=_shared_processors(),
    )


def _detach_handlers(target: logging.Logger) -> None:
    for handler in [h for h in target.handlers if isinstance(h, _ChaosHandler)]:
        target.removeHandler(handler)
        handler.close()


def configure_logging(
    *,
    json_output: bool = False,
    level: str = "INFO",
    stream: TextIO | None = None,
    logger_name: str = LIBRARY_LOGGER,
) -> None:
    """Render chaosdispatch events to a stream.

    Calling this again replaces the handler installed by the previous call.
    Records handled here do not propagate further up, so the host's own
    handlers never see them twice.

    Args:
        json_output: If True, output JSON lines. If False, human-readable.
        level: Minimum level for the ``logger_name`` logger.
        stream: Destination for log lines (default: stdout).
        logger_name: Logger the handler is attached to. Pass ``""`` to
            attach it to the root logger instead.
    """
    log_level = getattr(logging, level.upper())
    stream = stream if stream is not None else sys.stdout

    structlog.configure(
        processors=[*_shared_processors(), ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Reconfiguration must reach loggers that were already used
        cache_logger_on_first_use=False,
    )

    handler = _ChaosHandler(stream)
    handler.setFormatter(_build_formatter(json_output, stream))

    target = logging.getLogger(logger_name)
    _detach_handlers(target)
    target.addHandler(handler)
    target.setLevel(log_level)
    if logger_name:
        target.propagate = False


def reset_logging(logger_name: str = LIBRARY_LOGGER) -> None:
    """Undo ``configure_logging`` for ``logger_name`` and restore structlog defaults."""
    target = logging.getLogger(logger_name)
    _detach_handlers(target)
    target.setLevel(logging.NOTSET if logger_name else logging.WARNING)
    target.propagate = True
    structlog.reset_defaults()


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger backed by the stdlib logger ``name``.

    Args:
        name: Logger name (typically __name__).

    Returns:
        Bound structlog logger.
    """
    logger: structlog.stdlib.BoundLogger = structlog.wrap_logger(
        logging.getLogger(name),
        wrapper_class=structlog.stdlib.BoundLogger,
    )
    return logger
