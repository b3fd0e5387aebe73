"""
Logger construction.

A Logger is an immutable record of six log callables plus ``named`` and
``with_context``. Every callable is chosen once, when the logger is
built: the sink method with the rendered label and name chain already
supplied, or a no-op for kinds the effective includes filter out. Every
callable takes ``(message, args=None)`` whichever strategy built it.

Three creation strategies exist and a provider uses exactly one at a time:

    create_console_styled   ANSI label, styled name chain, level colour
    create_console_plain    plain label and ``name#key`` chain
    create_external         methods of an externally constructed sink

Console routing: error/todo/hmm -> error, warn -> warn, debug -> info,
trace -> debug.
"""

from functools import partial
from typing import Any, Callable, Dict, Mapping, Optional

from .filtering import resolve_includes, switches
from .levels import KINDS, LEVELS
from .source import Key, LogSource
from .style import ansi_color

LogFn = Callable[..., None]

CONSOLE_METHODS = {
    'hmm': 'error',
    'todo': 'error',
    'error': 'error',
    'warn': 'warn',
    'debug': 'info',
    'trace': 'debug',
}

EXTERNAL_METHODS = {
    'hmm': 'error',
    'todo': 'error',
    'error': 'error',
    'warn': 'warn',
    'debug': 'debug',
    'trace': 'trace',
}

LABELS = {
    'hmm': 'HMM? ',
    'todo': 'TODO ',
    'error': 'ERROR',
    'warn': 'WARN ',
    'debug': 'DEBUG',
    'trace': 'TRACE',
}

LEVEL_COLORS = {
    'hmm': ansi_color(13),
    'todo': ansi_color(14),
    'error': ansi_color(9),
    'warn': ansi_color(11),
    'debug': ansi_color(15),
    'trace': ansi_color(7),
}


def filtered(source: LogSource, kind: str, message: str, args: Optional[Mapping] = None) -> None:
    """Stand-in for filtered kinds. Drops the call."""


class UtilLogger:
    """Reduced logger for utility code: the four general levels and ``named``."""

    __slots__ = ('error', 'warn', 'debug', 'trace', '_logger')

    def __init__(self, logger: 'Logger'):
        self.error = logger.error
        self.warn = logger.warn
        self.debug = logger.debug
        self.trace = logger.trace
        self._logger = logger

    def named(self, name: str, key: Optional[Key] = None) -> 'UtilLogger':
        return self._logger.named(name, key).downgrade()


class Logger:
    """Immutable logger handle.

    Args:
        source: The source chain and context this logger writes for.
        calls: One callable per kind name (live or filtered).
        enabled: The live/filtered decision per kind name.
        mint: Builds a logger for a derived source. Supplied by the provider
            so children follow the provider's current policy.
    """

    __slots__ = ('hmm', 'todo', 'error', 'warn', 'debug', 'trace',
                 '_source', '_enabled', '_mint')

    def __init__(self, source: LogSource, calls: Dict[str, LogFn],
                 enabled: Dict[str, bool], mint: Callable[[LogSource], 'Logger']):
        for name in KINDS:
            object.__setattr__(self, name, calls[name])
        object.__setattr__(self, '_source', source)
        object.__setattr__(self, '_enabled', dict(enabled))
        object.__setattr__(self, '_mint', mint)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    @property
    def ctx(self) -> Any:
        return self._source.ctx

    @property
    def source(self) -> LogSource:
        return self._source

    def is_enabled(self, kind: str) -> bool:
        """Whether calls of ``kind`` reach the sink on this logger."""
        return self._enabled[kind]

    def named(self, name: str, key: Optional[Key] = None) -> 'Logger':
        return self._mint(self._source.named(name, key))

    def with_context(self, partial_ctx: Any) -> 'Logger':
        return self._mint(self._source.with_context(partial_ctx))

    def downgrade(self) -> UtilLogger:
        return UtilLogger(self)

    def __repr__(self):
        chain = [nk.render() for nk in self._source.names]
        return f"Logger({chain!r})"


def _console_call(method, leading: tuple) -> LogFn:
    """Adapt a variadic console method to the ``(message, args=None)`` shape."""
    def log(message, args=None):
        if args is None:
            method(*leading, message)
        else:
            method(*leading, message, args)
    return log


def _bind(sink, methods: Dict[str, str], source: LogSource, enabled: Dict[str, bool],
          leading: Callable[[str], tuple], console: bool = False) -> Dict[str, LogFn]:
    calls = {}
    for kind, live in enabled.items():
        if live and console:
            calls[kind] = _console_call(getattr(sink, methods[kind]), leading(kind))
        elif live:
            calls[kind] = partial(getattr(sink, methods[kind]), *leading(kind))
        else:
            calls[kind] = partial(filtered, source, kind)
    return calls


def create_console_styled(policy, source: LogSource, mint) -> Logger:
    enabled = switches(resolve_includes(policy, source))
    style = policy.style
    # no styling work when every kind is filtered
    names = ()
    if any(enabled.values()):
        names = tuple(style.render_segment(nk) for nk in source.names)

    def leading(kind):
        color = LEVEL_COLORS[kind]
        return (color + LABELS[kind],) + names + (color,)

    calls = _bind(policy.console, CONSOLE_METHODS, source, enabled, leading, console=True)
    return Logger(source, calls, enabled, mint)


def create_console_plain(policy, source: LogSource, mint) -> Logger:
    enabled = switches(resolve_includes(policy, source))
    names = ()
    if any(enabled.values()):
        names = tuple(nk.render() for nk in source.names)

    def leading(kind):
        return (LABELS[kind],) + names

    calls = _bind(policy.console, CONSOLE_METHODS, source, enabled, leading, console=True)
    return Logger(source, calls, enabled, mint)


def create_external(policy, source: LogSource, mint) -> Logger:
    enabled = switches(resolve_includes(policy, source))
    ext = policy.create_external(source)

    def leading(kind):
        return (LEVELS[kind],)

    calls = _bind(ext, EXTERNAL_METHODS, source, enabled, leading)
    return Logger(source, calls, enabled, mint)


def named_to_keyed(named_fn, source: LogSource):
    """Adapt a ``named(names, ctx)`` constructor to take a source.

    Keys are rendered as ``name (key)`` on this path.
    """
    names = [nk.render_spaced() for nk in source.names]
    return named_fn(names, source.ctx)


def keyed_from_source(keyed_fn, source: LogSource):
    return keyed_fn(list(source.names), source.ctx)
