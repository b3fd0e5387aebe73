"""Configuration loading for namedlog.

Three-layer config resolution (highest priority wins):
  1. Explicit options — passed by the application
  2. Environment — NAMEDLOG_* variables (and NO_COLOR)
  3. Config file — JSON, from NAMEDLOG_CONFIG or an explicit path

Include rules use a compact spec syntax, one rule per string:

    PATH:LEVEL

    Examples:
        App:debug               # App and everything below it at DEBUG
        App.Session:trace       # more specific rule wins for sessions
        *:error                 # every source at ERROR
"""

import json
import os
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .levels import parse_level
from .provider import STRATEGY_CONSOLE

ENV_MIN = "NAMEDLOG_MIN"
ENV_INCLUDE = "NAMEDLOG_INCLUDE"
ENV_COLOR = "NAMEDLOG_COLOR"
ENV_STYLE = "NAMEDLOG_STYLE"
ENV_CONFIG = "NAMEDLOG_CONFIG"
ENV_NO_COLOR = "NO_COLOR"

_FALSE_WORDS = {"0", "false", "no", "off"}
_TRUE_WORDS = {"1", "true", "yes", "on"}


# ---------------------------------------------------------------------------
# Include rules
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class IncludeRule:
    """Minimum level for every source whose name chain starts with ``path``."""
    path: Tuple[str, ...]
    min: int

    def matches(self, names: Tuple[str, ...]) -> bool:
        return names[:len(self.path)] == self.path


def parse_include_spec(spec: str) -> IncludeRule:
    """Parse ``PATH:LEVEL`` into an IncludeRule.

    An empty PATH or ``*`` matches every source.

    Raises:
        ValueError: If the LEVEL part is missing or names no level.
    """
    path_part, sep, level_part = spec.rpartition(':')
    if not sep or not level_part.strip():
        raise ValueError(f"Include spec '{spec}' needs the form PATH:LEVEL")
    path_part = path_part.strip()
    if path_part in ('', '*'):
        path = ()
    else:
        path = tuple(p for p in path_part.split('.') if p)
    return IncludeRule(path=path, min=parse_level(level_part))


def include_from_rules(rules: List[IncludeRule]):
    """Build an ``include(source)`` callback from rules.

    The longest matching path wins; no match returns None so the provider
    defaults apply.
    """
    ordered = sorted(rules, key=lambda r: len(r.path), reverse=True)

    def include(source):
        names = source.path
        for rule in ordered:
            if rule.matches(names):
                return {'min': rule.min}
        return None

    return include


# ---------------------------------------------------------------------------
# Config loading
# ---------------------------------------------------------------------------
def load_config_file(path) -> dict:
    """Load a JSON config file, returning empty dict on error."""
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (FileNotFoundError, json.JSONDecodeError):
        return {}
    return data if isinstance(data, dict) else {}


def _split_specs(value) -> List[str]:
    if isinstance(value, str):
        return [s.strip() for s in value.split(',') if s.strip()]
    return [str(s) for s in value]


def _parse_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() not in _FALSE_WORDS


def _style_value(value):
    """Normalize a ``style`` setting into a ``console_style`` option.

    On/off words become booleans and any other string names a colour preset.
    Mappings and booleans pass through.
    """
    if not isinstance(value, str):
        return value
    word = value.strip().lower()
    if word in _FALSE_WORDS:
        return False
    if word in _TRUE_WORDS:
        return True
    return {'color': word}


def config_from_env(environ=None) -> dict:
    """Read namedlog settings from environment variables.

    Only variables that are set appear in the result.
    """
    env = os.environ if environ is None else environ
    found: Dict[str, object] = {}
    if env.get(ENV_MIN):
        found['min'] = env[ENV_MIN]
    if env.get(ENV_INCLUDE):
        found['include'] = _split_specs(env[ENV_INCLUDE])
    if env.get(ENV_COLOR):
        found['colors'] = _parse_bool(env[ENV_COLOR])
    if env.get(ENV_NO_COLOR):
        found['colors'] = False
    if env.get(ENV_STYLE):
        found['style'] = _style_value(env[ENV_STYLE])
    return found


# ---------------------------------------------------------------------------
# Config resolution
# ---------------------------------------------------------------------------
KEYS = ('min', 'include', 'colors', 'style')


def resolve_config(options: Optional[dict] = None, environ=None, path=None) -> dict:
    """Resolve config values using three-layer precedence.

    For each key in KEYS, checks (in order):
      1. ``options``
      2. Environment variables
      3. JSON config file (``path``, else NAMEDLOG_CONFIG)

    Returns a dict holding only the keys some layer provided.
    """
    options = options or {}
    env = os.environ if environ is None else environ
    env_cfg = config_from_env(env)
    file_path = path or env.get(ENV_CONFIG)
    file_cfg = load_config_file(file_path) if file_path else {}

    resolved = {}
    for key in KEYS:
        for layer in (options, env_cfg, file_cfg):
            value = layer.get(key)
            if value is not None:
                resolved[key] = value
                break
    return resolved


def apply_config(provider, resolved: dict) -> None:
    """Apply a resolved config to a provider.

    ``colors`` goes to ``configure_logger`` and is ignored unless the
    provider uses the console strategy. ``min``, ``include`` and ``style``
    go to ``configure_logging``.
    """
    if 'colors' in resolved and provider.policy.strategy == STRATEGY_CONSOLE:
        provider.configure_logger({
            'type': 'console',
            'ansi_colors': _parse_bool(resolved['colors']),
            'console': provider.policy.console,
        })

    logging_cfg = {}
    if 'min' in resolved:
        logging_cfg['min'] = parse_level(resolved['min'])
    if 'include' in resolved:
        rules = [parse_include_spec(s) for s in _split_specs(resolved['include'])]
        logging_cfg['include'] = include_from_rules(rules)
    if 'style' in resolved:
        logging_cfg['console_style'] = _style_value(resolved['style'])
    provider.configure_logging(logging_cfg)
