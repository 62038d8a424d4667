"""
Temporal Layer
==============

Turns a raw document into an ordered timeline.

INVARIANTS:
- Scanning is a pure function of (lines, roster)
- Entries are produced in document order
- Nothing here raises; ambiguity is left to the mode selector

Modules:
- scanner: Existing-Mode and Inference-Mode entry scans
- roster: directive and lenient roster detection
"""

from .scanner import (
    TIME_TOKEN_RE, parse_time_mark, starts_with_time,
    scan_timeline, scan_inference_timeline,
)
from .roster import RosterResolution, RosterSource, resolve_roster, split_names

__all__ = [
    'TIME_TOKEN_RE',
    'parse_time_mark',
    'starts_with_time',
    'scan_timeline',
    'scan_inference_timeline',
    'RosterResolution',
    'RosterSource',
    'resolve_roster',
    'split_names',
]
