"""
Glyph Normalization
===================

Closed glyph alphabets and the pure functions that read them.

GUARANTEES:
- Every alphabet is an immutable constant defined once, here
- Classification is case-insensitive
- Locating and parsing never raise; "not found" is None
- Unknown glyphs inside a located run read as OFF

Rendered glyphs (diff, absolute, auto) live in this module as well so the
external alphabet stays bit-exact in a single place.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Optional, Tuple
import re

from ..contracts.base import SLOT_COUNT, AutoDirective, SlotState


# =============================================================================
# INPUT ALPHABETS
# =============================================================================

# Round marks read as ON
ON_GLYPHS: str = "Oo0〇◯⭕"

# Crosses and bars read as OFF: ー(U+30FC) －(U+FF0D) -(U+002D) etc.
OFF_GLYPHS: str = "Xxー－❌✕✖×-‐−–—"

BRACKET_PAIRS: Tuple[Tuple[str, str], ...] = (
    ("[", "]"),
    ("［", "］"),
    ("【", "】"),
    ("(", ")"),
    ("（", "）"),
    ("{", "}"),
    ("｛", "｝"),
    ("<", ">"),
    ("＜", "＞"),
    ("〈", "〉"),
    ("《", "》"),
    ("「", "」"),
    ("『", "』"),
    ("〔", "〕"),
)

_ON_SET: FrozenSet[str] = frozenset(ON_GLYPHS)
_OFF_SET: FrozenSet[str] = frozenset(OFF_GLYPHS)
_OPEN_SET: FrozenSet[str] = frozenset(o for o, _ in BRACKET_PAIRS)
_CLOSE_SET: FrozenSet[str] = frozenset(c for _, c in BRACKET_PAIRS)


# =============================================================================
# OUTPUT ALPHABET
# =============================================================================

ABSOLUTE_ON = "〇"
ABSOLUTE_OFF = "ー"

DIFF_ARMED = "⭕"     # OFF -> ON
DIFF_DISARMED = "❌"  # ON -> OFF
DIFF_HELD_ON = "〇"   # ON -> ON
DIFF_HELD_OFF = "ー"  # OFF -> OFF

AUTO_HELD_OFF = "⬛"
AUTO_HELD_ON = "✅"
AUTO_SWITCHED_ON = "👉✅"
AUTO_SWITCHED_OFF = "👉⬛"

RUN_OPEN = "["
RUN_CLOSE = "]"


class GlyphClass(Enum):
    """Closed classification of a single character."""
    ON = "on"
    OFF = "off"
    OPEN = "open"
    CLOSE = "close"
    OTHER = "other"


def classify_glyph(ch: str) -> GlyphClass:
    """Classify one character against the closed alphabets."""
    if ch in _ON_SET or ch.lower() in _ON_SET:
        return GlyphClass.ON
    if ch in _OFF_SET or ch.lower() in _OFF_SET:
        return GlyphClass.OFF
    if ch in _OPEN_SET:
        return GlyphClass.OPEN
    if ch in _CLOSE_SET:
        return GlyphClass.CLOSE
    return GlyphClass.OTHER


def is_state_glyph(ch: str) -> bool:
    return classify_glyph(ch) in (GlyphClass.ON, GlyphClass.OFF)


# =============================================================================
# STATE RUN LOCATION
# =============================================================================

def _char_class(chars: str) -> str:
    return "".join(re.escape(c) for c in chars)


_STATE_CHARS = _char_class(ON_GLYPHS + ON_GLYPHS.upper() + OFF_GLYPHS + OFF_GLYPHS.upper())

BRACKETED_RUN_RE = re.compile(
    f"[{_char_class(''.join(o for o, _ in BRACKET_PAIRS))}]"
    f"([{_STATE_CHARS}\\s]+)"
    f"[{_char_class(''.join(c for _, c in BRACKET_PAIRS))}]"
)

# Exactly five glyphs, whitespace before, whitespace or end after
BARE_RUN_RE = re.compile(f"(?<=\\s)([{_STATE_CHARS}]{{{SLOT_COUNT}}})(?=\\s|$)")


@dataclass(frozen=True)
class StateRun:
    """A located literal-state run and where it sits in its line."""
    text: str
    content: str
    start: int
    end: int
    bracketed: bool

    @property
    def span(self) -> Tuple[int, int]:
        return (self.start, self.end)


def locate_state_run(line: str) -> Optional[StateRun]:
    """
    Find the literal state run in a line.

    A bracketed run wins over a bare one. Returns None when neither exists.
    """
    match = BRACKETED_RUN_RE.search(line)
    if match:
        return StateRun(
            text=match.group(0),
            content=match.group(1),
            start=match.start(),
            end=match.end(),
            bracketed=True,
        )
    match = BARE_RUN_RE.search(line)
    if match:
        return StateRun(
            text=match.group(0),
            content=match.group(1),
            start=match.start(),
            end=match.end(),
            bracketed=False,
        )
    return None


def parse_state_run(content: str) -> SlotState:
    """
    Read run content into a SlotState.

    Whitespace is skipped. Unknown glyphs read as OFF. Short runs are
    padded with OFF and long runs truncated to five slots.
    """
    flags = []
    for ch in content:
        if ch.isspace():
            continue
        flags.append(classify_glyph(ch) is GlyphClass.ON)
    flags.extend([False] * (SLOT_COUNT - len(flags)))
    return SlotState.from_flags(flags[:SLOT_COUNT])


# =============================================================================
# AUTO DIRECTIVES
# =============================================================================

AUTO_ON_RE = re.compile(r"(?:オート|AUTO)[　 ]*(?:ON|ＯＮ|オン|おん)", re.IGNORECASE)
AUTO_OFF_RE = re.compile(r"(?:オート|AUTO)[　 ]*(?:OFF|ＯＦＦ|オフ|おふ|切り?)", re.IGNORECASE)

# A lone 切 preceded by start, whitespace or punctuation and followed by
# whitespace or end. Words like 見切れ or 大切 do not match.
STANDALONE_OFF_RE = re.compile(r"(?:^|[\s!-/:-@\[-`{-~！-／：-＠［-｀｛-～'＃])切(?=\s|$)")


def detect_auto_directive(text: str) -> Optional[AutoDirective]:
    """Return the auto instruction written in text, ON taking precedence."""
    if AUTO_ON_RE.search(text):
        return AutoDirective.ON
    if AUTO_OFF_RE.search(text):
        return AutoDirective.OFF
    if STANDALONE_OFF_RE.search(text):
        return AutoDirective.OFF
    return None
