"""
Severity and category model for namedlog.

Each log call has a kind: one severity plus one category. The two live in
disjoint bit ranges of a single integer so both can be read back with a
mask, and categories never disturb severity ordering:

    bit:   6      5     4      3     |  2                1     0
           ERROR  WARN  DEBUG  TRACE |  TROUBLESHOOTING  TODO  GENERAL
    ←──────────── severity ──────────┼──────── category ─────────────→

The emit rule is simple:

    minimum <= severity_of(kind)  →  call is live

Kinds are exposed as explicit (severity, category) pairs; the packed
integer is available as ``LogKind.flags`` for callers that want it.
"""

from enum import IntEnum
from typing import Dict, NamedTuple, Union


class Severity(IntEnum):
    TRACE = 1 << 3
    DEBUG = 1 << 4
    WARN = 1 << 5
    ERROR = 1 << 6


class Category(IntEnum):
    GENERAL = 1 << 0
    TODO = 1 << 1
    TROUBLESHOOTING = 1 << 2


SEVERITY_MASK = Severity.TRACE | Severity.DEBUG | Severity.WARN | Severity.ERROR
CATEGORY_MASK = Category.GENERAL | Category.TODO | Category.TROUBLESHOOTING

CATEGORY_NAMES = {
    Category.GENERAL: 'general',
    Category.TODO: 'todo',
    Category.TROUBLESHOOTING: 'troubleshooting',
}


class LogKind(NamedTuple):
    """A severity/category pair. Ordering for filtering uses severity only."""
    severity: Severity
    category: Category

    @property
    def flags(self) -> int:
        return int(self.severity) | int(self.category)


class LogMeta(NamedTuple):
    """Passed to external sinks alongside every message."""
    category: str
    level: Severity


def encode(severity: Severity, category: Category) -> LogKind:
    """Combine one severity and one category into a LogKind."""
    return LogKind(Severity(severity), Category(category))


def severity_of(kind: Union[LogKind, int]) -> Severity:
    """Extract the severity from a LogKind or its packed flags."""
    if isinstance(kind, LogKind):
        return kind.severity
    return Severity(kind & SEVERITY_MASK)


def category_of(kind: Union[LogKind, int]) -> Category:
    """Extract the category from a LogKind or its packed flags."""
    if isinstance(kind, LogKind):
        return kind.category
    return Category(kind & CATEGORY_MASK)


def meets_minimum(kind: Union[LogKind, int], minimum: int) -> bool:
    """True when ``kind`` is at least as severe as ``minimum``.

    Only the severity takes part in the comparison, so ``todo`` and ``hmm``
    filter exactly like ``error``. With the bit layout above this is the
    same answer as ``minimum <= kind.flags`` for any Severity minimum.
    """
    return minimum <= severity_of(kind)


def meta_for(kind: LogKind) -> LogMeta:
    return LogMeta(category=CATEGORY_NAMES[kind.category], level=kind.severity)


# Call names exposed on every Logger, most severe first
KINDS: Dict[str, LogKind] = {
    'hmm': encode(Severity.ERROR, Category.TROUBLESHOOTING),
    'todo': encode(Severity.ERROR, Category.TODO),
    'error': encode(Severity.ERROR, Category.GENERAL),
    'warn': encode(Severity.WARN, Category.GENERAL),
    'debug': encode(Severity.DEBUG, Category.GENERAL),
    'trace': encode(Severity.TRACE, Category.GENERAL),
}

LEVELS: Dict[str, LogMeta] = {name: meta_for(kind) for name, kind in KINDS.items()}

_LEVEL_NAMES = {
    'trace': Severity.TRACE,
    'debug': Severity.DEBUG,
    'warn': Severity.WARN,
    'warning': Severity.WARN,
    'error': Severity.ERROR,
}


def parse_level(value: Union[str, int]) -> int:
    """Turn a level name or number into a minimum usable by meets_minimum.

    Args:
        value: A Severity, a raw integer (0 includes everything), or a
            case-insensitive name such as "trace" or "WARN".

    Returns:
        The Severity for known names, otherwise the integer unchanged.

    Raises:
        ValueError: If ``value`` is a string that names no level.
    """
    if isinstance(value, Severity):
        return value
    if isinstance(value, int):
        try:
            return Severity(value)
        except ValueError:
            return value
    text = str(value).strip()
    if text.lstrip('-').isdigit():
        return parse_level(int(text))
    try:
        return _LEVEL_NAMES[text.lower()]
    except KeyError:
        known = ', '.join(sorted(_LEVEL_NAMES))
        raise ValueError(f"Unknown log level '{value}' (expected one of: {known})") from None
