"""
Bridges to the standard library ``logging`` package.

Two directions are covered:

- ``LoggingConsole`` makes a ``logging.Logger`` usable as the console-like
  sink of the console strategy.
- ``StdlibSink`` (via ``stdlib_named`` / ``stdlib_keyed``) is an external
  structured sink: each namedlog source maps to the stdlib logger named by
  its dotted path, and the kind's category travels in ``extra``.

Usage::

    provider.configure_logger({'type': 'named', 'named': stdlib_named})
"""

import logging
from typing import Any, List, Mapping, Optional, Sequence

from .levels import LogMeta, Severity
from .source import NameKey

# Below logging.DEBUG; namedlog TRACE has no stdlib equivalent
TRACE_LEVEL = 5
logging.addLevelName(TRACE_LEVEL, "TRACE")

STDLIB_LEVELS = {
    Severity.ERROR: logging.ERROR,
    Severity.WARN: logging.WARNING,
    Severity.DEBUG: logging.DEBUG,
    Severity.TRACE: TRACE_LEVEL,
}


def _join(values: Sequence[Any]) -> str:
    return " ".join(str(v) for v in values)


class LoggingConsole:
    """Console-like sink writing to a stdlib logger.

    Pair with ``configure_logger({'type': 'console', 'ansi_colors': False,
    'console': LoggingConsole(...)})`` unless the handlers expect ANSI.
    """

    def __init__(self, logger: logging.Logger = None):
        self.logger = logger if logger is not None else logging.getLogger("namedlog")

    def error(self, *values: Any) -> None:
        self.logger.error(_join(values))

    def warn(self, *values: Any) -> None:
        self.logger.warning(_join(values))

    def info(self, *values: Any) -> None:
        self.logger.info(_join(values))

    def debug(self, *values: Any) -> None:
        self.logger.debug(_join(values))


class StdlibSink:
    """External sink over one stdlib logger.

    Args:
        logger: Target stdlib logger.
        ctx: Source context, attached to every record as ``extra['ctx']``.
            Message arguments travel as ``extra['log_args']``.
    """

    def __init__(self, logger: logging.Logger, ctx: Any = None):
        self.logger = logger
        self.ctx = ctx

    def _log(self, meta: LogMeta, message: str, args: Optional[Mapping]) -> None:
        level = STDLIB_LEVELS[meta.level]
        if not self.logger.isEnabledFor(level):
            return
        extra = {'category': meta.category, 'ctx': self.ctx, 'log_args': dict(args or {})}
        self.logger.log(level, message, extra=extra)

    def error(self, meta: LogMeta, message: str, args: Optional[Mapping] = None) -> None:
        self._log(meta, message, args)

    def warn(self, meta: LogMeta, message: str, args: Optional[Mapping] = None) -> None:
        self._log(meta, message, args)

    def debug(self, meta: LogMeta, message: str, args: Optional[Mapping] = None) -> None:
        self._log(meta, message, args)

    def trace(self, meta: LogMeta, message: str, args: Optional[Mapping] = None) -> None:
        self._log(meta, message, args)


def _logger_name(parts: List[str], base: str) -> str:
    # dots inside a segment (e.g. an IP key) must not add hierarchy levels
    parts = [p.replace(".", "_") for p in parts if p]
    return ".".join([base] + parts) if base else ".".join(parts) or "root"


def stdlib_named(names: List[str], ctx: Any = None, *, base: str = "namedlog") -> StdlibSink:
    """``named`` constructor: one stdlib logger per rendered name chain."""
    return StdlibSink(logging.getLogger(_logger_name(names, base)), ctx)


def stdlib_keyed(name_keys: List[NameKey], ctx: Any = None, *, base: str = "namedlog") -> StdlibSink:
    """``keyed`` constructor: keys are left out of the logger name."""
    return StdlibSink(logging.getLogger(_logger_name([nk.name for nk in name_keys], base)), ctx)
