"""
LoggerProvider — owner of the mutable logging policy.

The provider holds one Policy for its lifetime. ``configure_logger``
switches the sink strategy, ``configure_logging`` sets levels and styling,
and ``get_logger`` mints a root logger from whatever the policy is now.

Loggers snapshot the policy when they are built. Reconfiguring does not
touch loggers that already exist; their ``named``/``with_context`` calls
go back through the provider and therefore see the new policy.

Usage::

    provider = create_logger_provider()
    provider.configure_logging(min=Severity.DEBUG, console_style={'bold': 'Service$'})
    log = provider.get_logger().named("App").named("Session", 42)
    log.debug("opened", {"user": "ada"})
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from .factory import (
    Logger, create_console_plain, create_console_styled, create_external,
    keyed_from_source, named_to_keyed,
)
from .filtering import DEFAULT_INCLUDES, Includes
from .levels import parse_level
from .sinks import ConsoleSink
from .source import LogSource, root
from .style import StyleConfig, StyleContext

STRATEGY_CONSOLE = 'console'
STRATEGY_EXTERNAL = 'external'


def _no_hook(message: str, details: Optional[dict] = None) -> None:
    pass


@dataclass
class Policy:
    """Process-wide logging policy for one provider.

    Attributes:
        includes: Defaults used when ``include`` has no opinion.
        include: Per-source override callback, or None.
        style: Active StyleContext, or None when console styling is off.
        ansi_colors: Console colour toggle from ``configure_logger``.
        strategy: 'console' or 'external'.
        console: Console-like sink for the console strategy.
        create_external: Builds the external sink for a source.
    """
    includes: Includes = DEFAULT_INCLUDES
    include: Optional[Callable[[LogSource], Any]] = None
    style: Optional[StyleContext] = field(default_factory=StyleContext)
    ansi_colors: bool = True
    strategy: str = STRATEGY_CONSOLE
    console: Any = field(default_factory=ConsoleSink)
    create_external: Optional[Callable[[LogSource], Any]] = None

    @property
    def styled(self) -> bool:
        return self.ansi_colors and self.style is not None


def _merge_options(config, options) -> dict:
    merged = dict(config) if config else {}
    merged.update(options)
    return merged


class LoggerProvider:
    """Holds the policy and mints loggers from it."""

    def __init__(self, sink=None, ctx: Any = None, debug_hook: Callable = None):
        self.policy = Policy(console=sink if sink is not None else ConsoleSink())
        self.ctx = ctx
        self._debug = debug_hook or _no_hook
        self._default_console = self.policy.console
        self._create = self._select_creator()

    def _select_creator(self):
        policy = self.policy
        if policy.strategy == STRATEGY_EXTERNAL:
            return create_external
        if policy.styled:
            return create_console_styled
        return create_console_plain

    def _mint(self, source: LogSource) -> Logger:
        return self._create(self.policy, source, self._mint)

    def configure_logger(self, config='console', **options) -> None:
        """Choose the sink strategy.

        Args:
            config: 'console', or a mapping with a ``type`` of 'console'
                (``ansi_colors``, ``console``), 'named' (``named(names, ctx)``)
                or 'keyed' (``keyed(name_keys, ctx)``). Keyword options are
                merged over the mapping.

        Raises:
            ValueError: For an unknown ``type``.
        """
        if config == STRATEGY_CONSOLE:
            config = {'type': STRATEGY_CONSOLE}
        if not isinstance(config, Mapping):
            raise ValueError(f"Unsupported logger config: {config!r}")
        config = _merge_options(config, options)
        kind = config.get('type')
        policy = self.policy

        if kind == STRATEGY_CONSOLE:
            policy.strategy = STRATEGY_CONSOLE
            policy.ansi_colors = config.get('ansi_colors', True)
            console = config.get('console')
            policy.console = console if console is not None else self._default_console
            policy.create_external = None
        elif kind == 'keyed':
            keyed = config['keyed']
            policy.strategy = STRATEGY_EXTERNAL
            policy.create_external = lambda source: keyed_from_source(keyed, source)
        elif kind == 'named':
            named = config['named']
            policy.strategy = STRATEGY_EXTERNAL
            policy.create_external = lambda source: named_to_keyed(named, source)
        else:
            raise ValueError(f"Unknown logger type '{kind}' "
                             f"(expected 'console', 'named' or 'keyed')")

        self._create = self._select_creator()
        self._debug("configure_logger", {'type': kind, 'styled': policy.styled})

    def configure_logging(self, config: Mapping = None, **options) -> None:
        """Set the minimum level, per-source overrides and console styling.

        Options left out return to their defaults (min WARN, no include
        callback, default styling). A new StyleContext is allocated every
        time, so prefixes memoized under the old style never resurface.

        Args:
            config: Mapping of options; keyword options are merged over it.
                ``min``: Severity, integer, or level name.
                ``include``: ``fn(source) -> mapping | Includes | None``.
                ``console_style``: True, False, a StyleConfig, or a mapping
                of StyleConfig fields.
        """
        config = _merge_options(config, options)
        unknown = set(config) - {'min', 'include', 'console_style'}
        if unknown:
            raise ValueError(f"Unknown logging option(s): {', '.join(sorted(unknown))}")

        policy = self.policy
        minimum = config.get('min')
        policy.includes = (DEFAULT_INCLUDES if minimum is None
                           else Includes(min=parse_level(minimum)))
        policy.include = config.get('include')
        style_config = StyleConfig.from_value(config.get('console_style', True))
        policy.style = StyleContext(style_config) if style_config is not None else None

        self._create = self._select_creator()
        self._debug("configure_logging", {
            'min': policy.includes.min,
            'include': policy.include is not None,
            'styled': policy.styled,
        })

    def get_logger(self) -> Logger:
        """Mint a fresh root logger from the current policy."""
        return self._mint(root(self.ctx))


def create_logger_provider(sink=None, ctx: Any = None, *,
                           debug_hook: Callable = None) -> LoggerProvider:
    """Create a provider with the default policy.

    Args:
        sink: Console-like sink (default: ConsoleSink writing to stderr).
        ctx: Initial root context, any shape.
        debug_hook: Called with ``(message, details)`` on reconfiguration.
    """
    return LoggerProvider(sink=sink, ctx=ctx, debug_hook=debug_hook)


# =============================================================================
# Module-level singleton
# =============================================================================

_provider: Optional[LoggerProvider] = None


def init_logging(sink=None, ctx: Any = None, *, debug_hook: Callable = None,
                 logger_config=None, logging_config: Mapping = None) -> LoggerProvider:
    """Create and install the module-level provider.

    Call once at program startup. ``logger_config`` and ``logging_config``
    are passed to the matching configure methods when given.
    """
    global _provider
    provider = create_logger_provider(sink=sink, ctx=ctx, debug_hook=debug_hook)
    if logger_config is not None:
        provider.configure_logger(logger_config)
    if logging_config is not None:
        provider.configure_logging(logging_config)
    _provider = provider
    return provider


def get_provider() -> LoggerProvider:
    """Get the module-level provider, creating a default if needed."""
    global _provider
    if _provider is None:
        _provider = LoggerProvider()
    return _provider


def get_logger() -> Logger:
    """Root logger from the module-level provider."""
    return get_provider().get_logger()
