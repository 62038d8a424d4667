"""
Render Layer

RESPONSIBILITY: Glyph groups and document reassembly
ALLOWED INPUTS: SlotState pairs, auto flags, original lines
OUTPUTS: Annotated lines and documents (plain str)

WHAT THIS LAYER MUST NOT DO:
============================
- Decide which state an entry has
- Scan or classify lines
"""

from .splice import (
    slot_glyph, render_absolute, render_diff, render_auto, render_auto_absolute,
    splice_glyphs, append_glyphs, mark_line, insert_block, assemble, compact,
)

__all__ = [
    'slot_glyph',
    'render_absolute',
    'render_diff',
    'render_auto',
    'render_auto_absolute',
    'splice_glyphs',
    'append_glyphs',
    'mark_line',
    'insert_block',
    'assemble',
    'compact',
]
