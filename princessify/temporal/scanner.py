"""
Timeline Scanner
================

Splits a document into ordered TimelineEntry records.

INVARIANTS:
- Entries come out in document order (line_index strictly increasing)
- Lines that are not entries are never touched; callers pass them through
- The scanner never raises on malformed text

Two scans exist because the two modes recognise lines differently:
- scan_timeline: Existing Mode, any line with a timestamp token that also
  has the token near its start, a literal state run, or a roster name
- scan_inference_timeline: Inference Mode, lines that START with a
  timestamp plus indented sub-entries naming a roster member
"""

from __future__ import annotations
from typing import List, Optional, Sequence
import re

from ..contracts.base import Roster, SlotState, TimeMark
from ..contracts.events import TimelineEntry
from ..normalization.glyphs import detect_auto_directive, locate_state_run, parse_state_run


TIME_TOKEN_RE = re.compile(r"(\d{1,2}:\d{2})")
TIME_START_RE = re.compile(r"^(\d{1,2}:\d{2})")
LEADING_SPACE_RE = re.compile(r"^[\s　]")

# A timestamp counts as "near the start" within this many trimmed chars
TIME_NEAR_START_LIMIT = 10


def parse_time_mark(token: str) -> Optional[TimeMark]:
    """Parse 'M:SS' into a TimeMark, None if it is not a clock reading."""
    minutes, _, seconds = token.partition(":")
    if not minutes.isdigit() or not seconds.isdigit():
        return None
    try:
        return TimeMark(int(minutes), int(seconds))
    except ValueError:
        return None


def starts_with_time(text: str) -> bool:
    return TIME_START_RE.match(text.strip()) is not None


def scan_timeline(lines: Sequence[str], roster: Roster) -> List[TimelineEntry]:
    """
    Existing-Mode scan.

    The roster may be unresolved; actors are then simply not matched.
    """
    entries: List[TimelineEntry] = []

    for line_index, line in enumerate(lines):
        trimmed = line.strip()
        time_match = TIME_TOKEN_RE.search(trimmed)
        if not time_match:
            continue

        time_text = time_match.group(1)
        near_start = time_match.start() <= TIME_NEAR_START_LIMIT

        actor_slot, _ = roster.find_actor(trimmed)

        run = locate_state_run(trimmed)
        literal = parse_state_run(run.content) if run else SlotState.disarmed()

        if not (near_start or run is not None or actor_slot is not None):
            continue

        entries.append(TimelineEntry(
            line_index=line_index,
            text=line,
            time_text=time_text,
            time_mark=parse_time_mark(time_text),
            actor_slot=actor_slot,
            actor_name=roster.members[actor_slot] if actor_slot is not None else "",
            literal_state=literal,
            has_literal_state=run is not None,
            auto_directive=detect_auto_directive(trimmed),
        ))

    return entries


def scan_inference_timeline(lines: Sequence[str], roster: Roster) -> List[TimelineEntry]:
    """
    Inference-Mode scan.

    A sub-entry has no timestamp of its own, is indented, and names a
    roster member; it inherits the nearest preceding timestamp.
    """
    entries: List[TimelineEntry] = []
    last_time = ""

    for line_index, line in enumerate(lines):
        trimmed = line.strip()
        if not trimmed:
            continue

        time_match = TIME_START_RE.match(trimmed)
        if time_match:
            time_text = time_match.group(1)
            is_sub_entry = False
            last_time = time_text
        else:
            if not LEADING_SPACE_RE.match(line):
                continue
            if not roster.mentions_member(trimmed):
                continue
            time_text = last_time
            is_sub_entry = True

        actor_slot, _ = roster.find_actor(trimmed)

        entries.append(TimelineEntry(
            line_index=line_index,
            text=line,
            time_text=time_text,
            time_mark=parse_time_mark(time_text) if time_text else None,
            actor_slot=actor_slot,
            actor_name=roster.members[actor_slot] if actor_slot is not None else "",
            is_sub_entry=is_sub_entry,
            auto_directive=detect_auto_directive(trimmed),
        ))

    return entries
