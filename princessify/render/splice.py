"""
Renderer
========

Turns slot/auto states into glyph groups and puts them back into text.

GUARANTEES:
- Glyphs come only from the output alphabet in normalization.glyphs
- A line's located state run is replaced in place, otherwise the glyph
  group is appended after one space
- Document reassembly never reorders lines
"""

from __future__ import annotations
from typing import List, Sequence
import re

from ..contracts.base import SlotState
from ..normalization.glyphs import (
    ABSOLUTE_ON, ABSOLUTE_OFF,
    DIFF_ARMED, DIFF_DISARMED, DIFF_HELD_ON, DIFF_HELD_OFF,
    AUTO_HELD_OFF, AUTO_HELD_ON, AUTO_SWITCHED_ON, AUTO_SWITCHED_OFF,
    RUN_OPEN, RUN_CLOSE,
    locate_state_run,
)


_BLANK_RUNS_RE = re.compile(r"\n{3,}")


# =============================================================================
# GLYPH GROUPS
# =============================================================================

def slot_glyph(previous: bool, current: bool) -> str:
    """Four-case transition glyph for one slot."""
    if not previous and current:
        return DIFF_ARMED
    if previous and not current:
        return DIFF_DISARMED
    if current:
        return DIFF_HELD_ON
    return DIFF_HELD_OFF


def render_absolute(state: SlotState) -> str:
    body = "".join(ABSOLUTE_ON if armed else ABSOLUTE_OFF for armed in state)
    return f"{RUN_OPEN}{body}{RUN_CLOSE}"


def render_diff(previous: SlotState, current: SlotState) -> str:
    body = "".join(slot_glyph(p, c) for p, c in zip(previous, current))
    return f"{RUN_OPEN}{body}{RUN_CLOSE}"


def render_auto(previous: bool, current: bool) -> str:
    if not previous and current:
        return AUTO_SWITCHED_ON
    if previous and not current:
        return AUTO_SWITCHED_OFF
    if current:
        return AUTO_HELD_ON
    return AUTO_HELD_OFF


def render_auto_absolute(current: bool) -> str:
    return AUTO_HELD_ON if current else AUTO_HELD_OFF


# =============================================================================
# LINE SPLICING
# =============================================================================

def splice_glyphs(line: str, glyphs: str) -> str:
    """Replace the line's state run with glyphs, or append them."""
    run = locate_state_run(line)
    if run is None:
        return f"{line} {glyphs}"
    return line[:run.start] + glyphs + line[run.end:]


def append_glyphs(line: str, glyphs: str) -> str:
    return f"{line} {glyphs}"


def mark_line(line: str, glyphs: str, marker: str) -> str:
    """Prefix marker to the left-trimmed line and append glyphs."""
    return f"{marker}{line.lstrip()} {glyphs}"


# =============================================================================
# DOCUMENT ASSEMBLY
# =============================================================================

def insert_block(lines: Sequence[str], at_index: int, block: Sequence[str]) -> List[str]:
    """Return a copy of lines with block inserted before at_index."""
    return list(lines[:at_index]) + list(block) + list(lines[at_index:])


def assemble(lines: Sequence[str]) -> str:
    return "\n".join(lines)


def compact(document: str) -> str:
    """Collapse runs of blank lines to one and strip the ends."""
    return _BLANK_RUNS_RE.sub("\n\n", document).strip()
