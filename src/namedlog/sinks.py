"""
Sink interfaces and the default console sink.

Console-like sinks expose ``error``/``warn``/``info``/``debug`` taking any
number of values. External sinks receive the kind's LogMeta first and
expose ``error``/``warn``/``debug``/``trace``.
"""

import sys
from typing import Any, Mapping, Optional, Protocol, TextIO

from .levels import LogMeta


class ConsoleLike(Protocol):
    def error(self, *values: Any) -> None: ...

    def warn(self, *values: Any) -> None: ...

    def info(self, *values: Any) -> None: ...

    def debug(self, *values: Any) -> None: ...


class ExternalSink(Protocol):
    def error(self, meta: LogMeta, message: str, args: Optional[Mapping] = None) -> None: ...

    def warn(self, meta: LogMeta, message: str, args: Optional[Mapping] = None) -> None: ...

    def debug(self, meta: LogMeta, message: str, args: Optional[Mapping] = None) -> None: ...

    def trace(self, meta: LogMeta, message: str, args: Optional[Mapping] = None) -> None: ...


class ConsoleSink:
    """Writes each call as one space-separated line (default: stderr).

    All four methods share one stream; the level is carried by the label
    the logger puts in front of the message.
    """

    def __init__(self, file: TextIO = None):
        self.file = file

    def _write(self, values) -> None:
        print(*values, file=self.file if self.file is not None else sys.stderr)

    def error(self, *values: Any) -> None:
        self._write(values)

    def warn(self, *values: Any) -> None:
        self._write(values)

    def info(self, *values: Any) -> None:
        self._write(values)

    def debug(self, *values: Any) -> None:
        self._write(values)
