"""Shared test fixtures for the namedlog test suite."""

import pytest

from namedlog import create_logger_provider
from namedlog import provider as _provider_mod


# ---------------------------------------------------------------------------
# Recording sinks
# ---------------------------------------------------------------------------
class RecordingConsole:
    """Console-like sink that remembers every call as (method, values)."""

    def __init__(self):
        self.calls = []

    def error(self, *values):
        self.calls.append(("error", values))

    def warn(self, *values):
        self.calls.append(("warn", values))

    def info(self, *values):
        self.calls.append(("info", values))

    def debug(self, *values):
        self.calls.append(("debug", values))

    @property
    def methods(self):
        return [method for method, _ in self.calls]


class RecordingExternal:
    """External sink that remembers (method, meta, message, args)."""

    def __init__(self, names=None, ctx=None):
        self.names = names
        self.ctx = ctx
        self.calls = []

    def _record(self, method, meta, message, args=None):
        self.calls.append((method, meta, message, args))

    def error(self, meta, message, args=None):
        self._record("error", meta, message, args)

    def warn(self, meta, message, args=None):
        self._record("warn", meta, message, args)

    def debug(self, meta, message, args=None):
        self._record("debug", meta, message, args)

    def trace(self, meta, message, args=None):
        self._record("trace", meta, message, args)


class ExternalFactory:
    """Constructor for 'named'/'keyed' configs; keeps every sink it builds."""

    def __init__(self):
        self.built = []

    def __call__(self, names, ctx):
        sink = RecordingExternal(names, ctx)
        self.built.append(sink)
        return sink

    @property
    def last(self):
        return self.built[-1]


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def console():
    return RecordingConsole()


@pytest.fixture
def other_console():
    """A second recording console, for swapping sinks."""
    return RecordingConsole()


@pytest.fixture
def provider(console):
    """A provider with default policy writing to a recording console."""
    return create_logger_provider(sink=console)


@pytest.fixture
def plain_provider(console):
    """A provider with console styling turned off."""
    p = create_logger_provider(sink=console)
    p.configure_logging(console_style=False)
    return p


@pytest.fixture
def external():
    return ExternalFactory()


@pytest.fixture
def reset_provider_singleton():
    """Restore the module-level provider after the test."""
    old = _provider_mod._provider
    yield
    _provider_mod._provider = old
