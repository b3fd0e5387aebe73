"""Tests for the external-sink strategy ('named' and 'keyed' configs)."""

from namedlog import LEVELS, Severity, create_logger_provider
from namedlog.source import NameKey


class TestKeyed:

    def test_receives_name_keys_and_ctx(self, console, external):
        provider = create_logger_provider(sink=console, ctx={"req": 1})
        provider.configure_logger({'type': 'keyed', 'keyed': external})
        provider.get_logger().named("App").named("Session", 42)
        assert external.last.names == [NameKey("App"), NameKey("Session", 42)]
        assert external.last.ctx == {"req": 1}

    def test_routes_with_meta(self, provider, console, external):
        provider.configure_logger({'type': 'keyed', 'keyed': external})
        provider.get_logger().named("App").warn("x", {"a": 1})
        assert external.last.calls == [("warn", LEVELS['warn'], "x", {"a": 1})]
        assert console.calls == []

    def test_error_kinds_share_method_not_meta(self, provider, external):
        provider.configure_logger({'type': 'keyed', 'keyed': external})
        log = provider.get_logger()
        log.error("e")
        log.todo("t")
        log.hmm("h")
        calls = external.last.calls
        assert [c[0] for c in calls] == ["error", "error", "error"]
        assert [c[1].category for c in calls] == ["general", "todo", "troubleshooting"]
        assert all(c[1].level is Severity.ERROR for c in calls)

    def test_debug_and_trace_methods(self, provider, external):
        provider.configure_logger({'type': 'keyed', 'keyed': external})
        provider.configure_logging(min=Severity.TRACE)
        log = provider.get_logger()
        log.debug("d")
        log.trace("t")
        assert [c[0] for c in external.last.calls] == ["debug", "trace"]

    def test_filtered_kinds_never_reach_sink(self, provider, external):
        provider.configure_logger({'type': 'keyed', 'keyed': external})
        log = provider.get_logger()
        log.debug("d")
        log.trace("t")
        assert external.last.calls == []

    def test_sink_built_once_per_logger(self, provider, external):
        provider.configure_logger({'type': 'keyed', 'keyed': external})
        log = provider.get_logger().named("App")
        built = len(external.built)
        log.warn("a")
        log.error("b")
        assert len(external.built) == built

    def test_args_keyword_on_every_kind(self, provider, external):
        provider.configure_logger({'type': 'keyed', 'keyed': external})
        provider.configure_logging(min=Severity.TRACE)
        log = provider.get_logger()
        for kind in ("hmm", "todo", "error", "warn", "debug", "trace"):
            getattr(log, kind)(kind, args={"k": kind})
        assert [(c[2], c[3]) for c in external.last.calls] == [
            (kind, {"k": kind}) for kind in ("hmm", "todo", "error", "warn", "debug", "trace")
        ]


class TestNamed:

    def test_keys_rendered_in_parentheses(self, provider, external):
        provider.configure_logger(type='named', named=external)
        provider.get_logger().named("App").named("Session", 42)
        assert external.last.names == ["App", "Session (42)"]

    def test_root_has_no_names(self, provider, external):
        provider.configure_logger({'type': 'named', 'named': external})
        provider.get_logger()
        assert external.last.names == []


class TestSwitchBack:

    def test_console_after_external(self, provider, console, external):
        provider.configure_logger({'type': 'keyed', 'keyed': external})
        provider.configure_logger("console")
        provider.get_logger().warn("x")
        assert console.methods == ["warn"]
        assert all(sink.calls == [] for sink in external.built)

    def test_external_unaffected_by_console_style(self, provider, external):
        provider.configure_logger({'type': 'keyed', 'keyed': external})
        provider.configure_logging(console_style=False)
        provider.get_logger().named("App").error("x")
        assert external.last.calls == [("error", LEVELS['error'], "x", None)]
