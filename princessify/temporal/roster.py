"""
Roster Resolution
=================

Finds the five-member party a document is written for.

RESOLUTION ORDER:
1. Explicit directive line: a directive token followed by exactly five
   names. The first directive line always wins, even when its name count
   is wrong (the roster then stays unresolved).
2. Lenient detection only: the first non-empty, non-timestamped line with
   exactly five distinct tokens and no instruction keywords.

The roster line index is reported so the caller can blank that line.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple
import re

from ..contracts.base import SLOT_COUNT, Roster
from ..normalization.lexicon import has_instruction_keywords
from .scanner import starts_with_time


DEFAULT_DIRECTIVE_TOKENS: Tuple[str, ...] = ("@dango", "-dango")

# Half-width space, full-width space, and commas in either width
NAME_SPLIT_RE = re.compile(r"[\s　,、，]+")


class RosterSource(Enum):
    """Where a roster line came from."""
    DIRECTIVE = "directive"
    IMPLICIT = "implicit"


@dataclass(frozen=True)
class RosterResolution:
    """
    Outcome of roster detection.

    line_index is None when no roster line was found at all. A directive
    line with the wrong name count has a line_index but an unresolved roster.
    """
    roster: Roster
    line_index: Optional[int]
    source: Optional[RosterSource]

    @property
    def has_roster_line(self) -> bool:
        return self.line_index is not None

    @staticmethod
    def none() -> RosterResolution:
        return RosterResolution(roster=Roster.empty(), line_index=None, source=None)


def split_names(text: str) -> List[str]:
    return [name for name in NAME_SPLIT_RE.split(text.strip()) if name]


def _roster_from(names: List[str]) -> Roster:
    if len(names) != SLOT_COUNT or len(set(names)) != SLOT_COUNT:
        return Roster.empty()
    return Roster(members=tuple(names))


def build_directive_re(tokens: Sequence[str]) -> "re.Pattern[str]":
    alternatives = "|".join(re.escape(token) for token in tokens)
    return re.compile(rf"^(?:{alternatives})\s*(.*)")


def find_directive(lines: Sequence[str], tokens: Sequence[str] = DEFAULT_DIRECTIVE_TOKENS) -> RosterResolution:
    directive_re = build_directive_re(tokens)
    for line_index, line in enumerate(lines):
        match = directive_re.match(line.strip())
        if match:
            return RosterResolution(
                roster=_roster_from(split_names(match.group(1))),
                line_index=line_index,
                source=RosterSource.DIRECTIVE,
            )
    return RosterResolution.none()


def find_implicit_roster(lines: Sequence[str]) -> RosterResolution:
    for line_index, line in enumerate(lines):
        trimmed = line.strip()
        if not trimmed or starts_with_time(trimmed):
            continue
        if has_instruction_keywords(trimmed):
            continue
        roster = _roster_from(split_names(trimmed))
        if roster.is_resolved:
            return RosterResolution(roster=roster, line_index=line_index, source=RosterSource.IMPLICIT)
    return RosterResolution.none()


def resolve_roster(
    lines: Sequence[str],
    lenient: bool = False,
    directive_tokens: Sequence[str] = DEFAULT_DIRECTIVE_TOKENS
) -> RosterResolution:
    """Resolve the roster for one conversion. Never raises."""
    resolution = find_directive(lines, directive_tokens)
    if resolution.has_roster_line or not lenient:
        return resolution
    return find_implicit_roster(lines)
