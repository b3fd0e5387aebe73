"""Tests for namedlog.filtering — per-source includes resolution."""

from types import SimpleNamespace

import pytest

from namedlog.filtering import DEFAULT_INCLUDES, Includes, resolve_includes, should_log, switches
from namedlog.levels import KINDS, Severity
from namedlog.source import root


def _policy(include=None, includes=DEFAULT_INCLUDES):
    return SimpleNamespace(includes=includes, include=include)


class TestResolveIncludes:

    def test_no_callback_uses_defaults(self):
        assert resolve_includes(_policy(), root()) is DEFAULT_INCLUDES

    def test_none_means_use_defaults(self):
        assert resolve_includes(_policy(lambda s: None), root()) is DEFAULT_INCLUDES

    def test_empty_override_is_present_but_changes_nothing(self):
        assert resolve_includes(_policy(lambda s: {}), root()) == DEFAULT_INCLUDES

    def test_mapping_override(self):
        result = resolve_includes(_policy(lambda s: {'min': Severity.TRACE}), root())
        assert result == Includes(min=Severity.TRACE)

    def test_mapping_override_accepts_level_names(self):
        result = resolve_includes(_policy(lambda s: {'min': 'debug'}), root())
        assert result.min is Severity.DEBUG

    def test_includes_override_used_as_is(self):
        override = Includes(min=Severity.ERROR)
        assert resolve_includes(_policy(lambda s: override), root()) is override

    def test_callback_sees_source(self):
        seen = []
        resolve_includes(_policy(lambda s: seen.append(s.path)), root().named("App"))
        assert seen == [("App",)]

    def test_per_source_decision(self):
        def include(source):
            if source.path[:1] == ("Noisy",):
                return {'min': Severity.TRACE}
            return None

        policy = _policy(include)
        assert resolve_includes(policy, root().named("Noisy").named("Inner")).min is Severity.TRACE
        assert resolve_includes(policy, root().named("Quiet")).min is Severity.WARN

    def test_unknown_override_field_raises(self):
        with pytest.raises(TypeError):
            resolve_includes(_policy(lambda s: {'max': 1}), root())

    def test_unsupported_override_type_raises(self):
        with pytest.raises(TypeError, match="got int"):
            resolve_includes(_policy(lambda s: 5), root())


class TestSwitches:

    def test_default_minimum_is_warn(self):
        assert DEFAULT_INCLUDES.min is Severity.WARN

    def test_default_switches(self):
        assert switches(DEFAULT_INCLUDES) == {
            'hmm': True, 'todo': True, 'error': True,
            'warn': True, 'debug': False, 'trace': False,
        }

    def test_trace_minimum_enables_all(self):
        assert all(switches(Includes(min=Severity.TRACE)).values())

    def test_should_log_uses_includes_min(self):
        assert should_log(Includes(min=Severity.DEBUG), KINDS['debug'])
        assert not should_log(Includes(min=Severity.DEBUG), KINDS['trace'])
