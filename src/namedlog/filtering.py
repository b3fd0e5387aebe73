"""
Per-source level resolution.

Each logger resolves its effective includes once, when it is built: the
provider defaults, optionally overridden by the policy's ``include``
callback for that source. The result is turned into one boolean per log
kind so the hot path never compares levels again.
"""

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Dict

from .levels import KINDS, LogKind, Severity, meets_minimum, parse_level


@dataclass(frozen=True)
class Includes:
    """Effective filtering settings for one logger."""
    min: int = Severity.WARN


DEFAULT_INCLUDES = Includes()


def resolve_includes(policy, source) -> Includes:
    """Resolve the includes for ``source`` under ``policy``.

    ``policy.include(source)`` returning ``None`` means "use the defaults".
    Any other value is an override: an ``Includes`` replaces the defaults,
    a mapping overrides the fields it names (an empty mapping changes
    nothing).
    """
    defaults = policy.includes
    include = policy.include
    if include is None:
        return defaults
    override = include(source)
    if override is None:
        return defaults
    if isinstance(override, Includes):
        return override
    if isinstance(override, Mapping):
        fields = dict(override)
        if 'min' in fields:
            fields['min'] = parse_level(fields['min'])
        return dataclasses.replace(defaults, **fields)
    raise TypeError(
        f"include() must return a mapping, Includes or None, got {type(override).__name__}"
    )


def should_log(includes: Includes, kind: LogKind) -> bool:
    return meets_minimum(kind, includes.min)


def switches(includes: Includes) -> Dict[str, bool]:
    """One precomputed live/filtered flag per kind name."""
    return {name: should_log(includes, kind) for name, kind in KINDS.items()}
