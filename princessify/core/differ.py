"""
Existing-Mode Differ
====================

Renders author-supplied literal states as transitions.

RULES:
- Entry 0 is rendered absolutely, never as a diff
- An entry without literal state inherits the previous effective state
- Each slot compares previous -> current with the four-case table
- Auto glyphs appear on every entry only if some entry carries an auto
  directive; otherwise they are omitted document-wide

The caller's lines are never mutated; a new list is returned.
"""

from __future__ import annotations
from typing import List, Optional, Sequence, Tuple

from ..contracts.base import AutoDirective, SlotState
from ..contracts.events import RenderedEntry, TimelineEntry
from ..render.splice import render_absolute, render_auto, render_diff, splice_glyphs


def next_auto(previous: bool, directive: Optional[AutoDirective]) -> bool:
    if directive is AutoDirective.ON:
        return True
    if directive is AutoDirective.OFF:
        return False
    return previous


def diff_entries(entries: Sequence[TimelineEntry]) -> List[RenderedEntry]:
    """
    Compute effective states and glyph groups for every entry.

    Pure: the returned records carry the effective state; entries are
    left as scanned.
    """
    show_auto = any(entry.auto_directive is not None for entry in entries)
    rendered: List[RenderedEntry] = []

    previous = SlotState.disarmed()
    previous_auto = False

    for index, entry in enumerate(entries):
        current = entry.literal_state if entry.has_literal_state else previous
        current_auto = next_auto(previous_auto, entry.auto_directive)

        is_first = index == 0
        glyphs = render_absolute(current) if is_first else render_diff(previous, current)
        if show_auto:
            glyphs += render_auto(previous_auto, current_auto)

        rendered.append(RenderedEntry(
            entry=entry,
            previous=previous,
            current=current,
            previous_auto=previous_auto,
            current_auto=current_auto,
            is_first=is_first,
            glyphs=glyphs,
        ))

        previous = current
        previous_auto = current_auto

    return rendered


def render_existing(
    entries: Sequence[TimelineEntry],
    lines: Sequence[str]
) -> Tuple[List[str], List[RenderedEntry]]:
    """Splice each entry's glyph group into a copy of lines."""
    result = list(lines)
    rendered = diff_entries(entries)
    for record in rendered:
        result[record.entry.line_index] = splice_glyphs(record.entry.text, record.glyphs)
    return result, rendered
