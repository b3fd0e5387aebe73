"""
ANSI styling for logger names and keys.

A StyleContext pairs one StyleConfig with the memo of prefixes and
suffixes derived from it. The provider allocates a fresh context on every
``configure_logging`` call, so nothing computed under an old configuration
can reach output produced under a new one.

Colour presets hash the first and last character codes of a name into the
256-colour palette:

    muted      22 + (first % 12) + (last % 6) * 36
    bright    130 + (first % 12) + (last % 3) * 36
    grayscale 232 + (first + last) % 24

Bold, italic and underline are applied when their predicate matches the
name. Any attribute means the styled text must be followed by a reset,
which is why the suffix is memoized separately from the prefix.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Callable, Dict, Optional, Pattern, Tuple, Union

from .source import NameKey

ESC = "\u001b["
BOLD = ESC + "1m"
ITALIC = ESC + "3m"
UNDERLINE = ESC + "4m"
RESET = ESC + "0m"


def ansi_color(index: int) -> str:
    """256-colour foreground escape."""
    return f"{ESC}38;5;{index}m"


def muted_index(first: int, last: int) -> int:
    return 22 + (first % 12) + (last % 6) * 36


def bright_index(first: int, last: int) -> int:
    return 130 + (first % 12) + (last % 3) * 36


def grayscale_index(first: int, last: int) -> int:
    return 232 + (first + last) % 24


COLOR_PRESETS: Dict[str, Callable[[int, int], int]] = {
    'muted': muted_index,
    'bright': bright_index,
    'grayscale': grayscale_index,
}

# Runs stripped by the "collapse" rule: "UserSession" -> "US"
COLLAPSE_RE = re.compile(r"[a-z\- ]+")
COLLAPSE_MIN_LENGTH = 5
DEFAULT_KEY_LIMIT = 16
ELLIPSIS = "…"

Matcher = Union[str, Pattern, Callable[[str], bool], None]


def _to_predicate(matcher: Matcher) -> Optional[Callable[[str], bool]]:
    if matcher is None:
        return None
    if isinstance(matcher, str):
        matcher = re.compile(matcher)
    if hasattr(matcher, 'search'):
        pattern = matcher
        return lambda text: pattern.search(text) is not None
    return matcher


@dataclass(frozen=True)
class StyleConfig:
    """Console styling options.

    Attributes:
        color: Preset name ('muted', 'bright', 'grayscale'), a function
            returning the colour escape for a name, or None for no colour.
        bold: Regex string, compiled pattern or predicate selecting names to bold.
        italic: Same, for italics.
        underline: Same, for underline.
        replace: 'collapse' or a function rewriting the displayed name.
        replace_key: 'truncate' or a function rewriting the displayed key.
        key_limit: Key length kept by 'truncate'.
    """
    color: Union[str, Callable[[str], str], None] = 'muted'
    bold: Matcher = None
    italic: Matcher = None
    underline: Matcher = None
    replace: Union[str, Callable[[str], str], None] = None
    replace_key: Union[str, Callable[[str], str], None] = None
    key_limit: int = DEFAULT_KEY_LIMIT

    def __post_init__(self):
        if isinstance(self.color, str) and self.color not in COLOR_PRESETS:
            raise ValueError(f"Unknown color preset '{self.color}' "
                             f"(expected one of: {', '.join(sorted(COLOR_PRESETS))})")
        if isinstance(self.replace, str) and self.replace != 'collapse':
            raise ValueError(f"Unknown replace rule '{self.replace}'")
        if isinstance(self.replace_key, str) and self.replace_key != 'truncate':
            raise ValueError(f"Unknown replace_key rule '{self.replace_key}'")

    @classmethod
    def from_value(cls, value) -> Optional['StyleConfig']:
        """Normalize a ``console_style`` option. Returns None when disabled."""
        if value is None or value is True:
            return cls()
        if value is False:
            return None
        if isinstance(value, cls):
            return value
        if isinstance(value, Mapping):
            known = {f.name for f in fields(cls)}
            unknown = set(value) - known
            if unknown:
                raise ValueError(f"Unknown style option(s): {', '.join(sorted(unknown))}")
            return cls(**value)
        raise ValueError(f"Unsupported console_style value: {value!r}")


class StyleContext:
    """One style epoch: a configuration and the memo derived from it.

    Memo writes are idempotent (the same name always yields the same
    strings within one context), so concurrent readers need no lock.
    """

    def __init__(self, config: StyleConfig = None, max_entries: int = 2048):
        self.config = config if config is not None else StyleConfig()
        self.max_entries = max_entries
        self._bold = _to_predicate(self.config.bold)
        self._italic = _to_predicate(self.config.italic)
        self._underline = _to_predicate(self.config.underline)
        self._memo: Dict[str, Tuple[str, str]] = {}
        self._reset_memo()

    def _reset_memo(self):
        # empty names (unnamed roots) never carry styling
        self._memo.clear()
        self._memo[""] = ("", "")

    def _store(self, name: str, styled: Tuple[str, str]) -> None:
        if len(self._memo) >= self.max_entries:
            self._reset_memo()
        self._memo[name] = styled

    def __len__(self):
        return len(self._memo)

    def __contains__(self, name):
        return name in self._memo

    def _color(self, name: str) -> str:
        color = self.config.color
        if color is None or not name:
            return ""
        if callable(color):
            return color(name) or ""
        index = COLOR_PRESETS[color](ord(name[0]), ord(name[-1]))
        return ansi_color(index)

    def _compute(self, name: str) -> Tuple[str, str]:
        prefix = self._color(name)
        styled = False
        if self._bold is not None and self._bold(name):
            prefix += BOLD
            styled = True
        if self._italic is not None and self._italic(name):
            prefix += ITALIC
            styled = True
        if self._underline is not None and self._underline(name):
            prefix += UNDERLINE
            styled = True
        return prefix, RESET if styled else ""

    def style(self, name: str) -> Tuple[str, str]:
        """Memoized (prefix, suffix) for ``name``."""
        found = self._memo.get(name)
        if found is not None:
            return found
        found = self._compute(name)
        self._store(name, found)
        return found

    def prefix(self, name: str) -> str:
        return self.style(name)[0]

    def suffix(self, name: str) -> str:
        return self.style(name)[1]

    def collapsed(self, name: str) -> str:
        """Display form of ``name`` under the configured replace rule."""
        rule = self.config.replace
        if rule is None:
            return name
        if rule == 'collapse':
            if len(name) < COLLAPSE_MIN_LENGTH:
                return name
            shown = COLLAPSE_RE.sub("", name)
        else:
            shown = rule(name)
        return shown or name

    def truncated_key(self, key) -> str:
        """Display form of ``#key`` under the configured replace_key rule."""
        key_str = str(key)
        original = f"#{key_str}"
        rule = self.config.replace_key
        if rule is None:
            return original
        if rule == 'truncate':
            if len(key_str) <= self.config.key_limit:
                return original
            shown = key_str[:self.config.key_limit] + ELLIPSIS
        else:
            shown = rule(key_str)
        return f"#{shown}" if shown else original

    def render(self, text: str) -> str:
        prefix, suffix = self.style(text)
        return f"{prefix}{text}{suffix}"

    def render_segment(self, segment: NameKey) -> str:
        """Styled ``name`` followed by the styled ``#key`` when present."""
        prefix, suffix = self.style(segment.name)
        out = f"{prefix}{self.collapsed(segment.name)}{suffix}"
        if segment.key is not None:
            prefix, suffix = self.style(f"#{segment.key}")
            out += f"{prefix}{self.truncated_key(segment.key)}{suffix}"
        return out
