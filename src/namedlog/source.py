"""
Logger sources: the chain of (name, key) segments from the root logger,
plus the caller's context value.

Sources are immutable. ``append`` and ``with_context`` always return a new
source; the segment tuple is shared between parent and child.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional, Tuple, Union

Key = Union[str, int]


@dataclass(frozen=True)
class NameKey:
    """One segment of a source chain."""
    name: str
    key: Optional[Key] = None

    def render(self) -> str:
        """Console form: ``name`` or ``name#key``."""
        if self.key is None:
            return self.name
        return f"{self.name}#{self.key}"

    def render_spaced(self) -> str:
        """Named-sink form: ``name`` or ``name (key)``."""
        if self.key is None:
            return self.name
        return f"{self.name} ({self.key})"


@dataclass(frozen=True)
class LogSource:
    names: Tuple[NameKey, ...] = ()
    ctx: Any = field(default=None, compare=False)

    def named(self, name: str, key: Optional[Key] = None) -> 'LogSource':
        return append(self, name, key)

    def with_context(self, partial: Any) -> 'LogSource':
        return with_context(self, partial)

    @property
    def path(self) -> Tuple[str, ...]:
        """Segment names only, keys dropped."""
        return tuple(nk.name for nk in self.names)


def root(ctx: Any = None) -> LogSource:
    return LogSource(names=(), ctx=ctx)


def append(source: LogSource, name: str, key: Optional[Key] = None) -> LogSource:
    """Return a child source with one more segment. ``source`` is untouched."""
    return LogSource(names=source.names + (NameKey(name, key),), ctx=source.ctx)


def with_context(source: LogSource, partial: Any) -> LogSource:
    """Return a source with the same segments and an updated context.

    Mapping contexts are shallow-merged with a mapping ``partial``; any
    other combination replaces the context outright.
    """
    if isinstance(source.ctx, Mapping) and isinstance(partial, Mapping):
        ctx = {**source.ctx, **partial}
    else:
        ctx = partial
    return LogSource(names=source.names, ctx=ctx)
