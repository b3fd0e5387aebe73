"""Tests for namedlog.trace — the traced() decorator."""

from pathlib import Path

import pytest

from namedlog import Severity, traced


@pytest.fixture
def trace_logger(plain_provider):
    plain_provider.configure_logging(min=Severity.TRACE, console_style=False)
    return plain_provider.get_logger().named("Calc")


def _messages(console):
    return [values[-1] for _, values in console.calls]


class TestTraced:

    def test_entry_and_exit(self, trace_logger, console):
        @traced(trace_logger)
        def add(a, b):
            return a + b

        assert add(1, b=2) == 3
        messages = _messages(console)
        assert len(messages) == 2
        assert messages[0].startswith(">> ")
        assert messages[0].endswith("add(1, b=2)")
        assert messages[1].endswith("add returned: 3")
        assert console.methods == ["debug", "debug"]
        assert console.calls[0][1][:2] == ("TRACE", "Calc")

    def test_none_result_not_reported(self, trace_logger, console):
        @traced(trace_logger)
        def noop():
            return None

        noop()
        assert len(console.calls) == 1

    def test_exception_logged_and_reraised(self, trace_logger, console):
        @traced(trace_logger)
        def boom():
            raise ValueError("bad input")

        with pytest.raises(ValueError):
            boom()
        assert _messages(console)[-1].endswith("boom raised: ValueError: bad input")

    def test_long_values_abbreviated(self, trace_logger, console):
        @traced(trace_logger)
        def take(text, items, path):
            return None

        take("x" * 60, [1, 2, 3, 4], Path("a"))
        entry = _messages(console)[0]
        assert "'" + "x" * 47 + "...'" in entry
        assert "[...4 items...]" in entry
        assert "Path('a')" in entry

    def test_filtered_trace_skips_logging(self, provider, console):
        @traced(provider.get_logger())
        def add(a, b):
            return a + b

        assert add(2, 3) == 5
        assert console.calls == []

    def test_wraps_metadata(self, trace_logger):
        @traced(trace_logger)
        def documented():
            """Doc."""

        assert documented.__name__ == "documented"
        assert documented.__doc__ == "Doc."
