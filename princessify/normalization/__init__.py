"""
Normalization Layer

RESPONSIBILITY: Read author glyphs into canonical slot states
ALLOWED INPUTS: Single characters and single lines of text
OUTPUTS: GlyphClass, StateRun, SlotState, AutoDirective (immutable)

WHAT THIS LAYER MUST NOT DO:
============================
- Split documents into entries
- Know about rosters or timestamps
- Raise on malformed input (unknown glyphs read as OFF)
"""

from .glyphs import (
    ON_GLYPHS, OFF_GLYPHS, BRACKET_PAIRS, GlyphClass, StateRun,
    classify_glyph, is_state_glyph, locate_state_run, parse_state_run,
    detect_auto_directive,
)

__all__ = [
    'ON_GLYPHS',
    'OFF_GLYPHS',
    'BRACKET_PAIRS',
    'GlyphClass',
    'StateRun',
    'classify_glyph',
    'is_state_glyph',
    'locate_state_run',
    'parse_state_run',
    'detect_auto_directive',
]
