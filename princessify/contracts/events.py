"""
Event Contracts

Immutable records exchanged between the scanner, the engines, the
renderer and the observability layer.

DESIGN PRINCIPLES:
==================
1. Entries are produced once by the scanner and never mutated
2. Effective state is carried next to entries, never written into them
3. Demands are planned in full before any state is applied
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple

from .base import ActionKind, AutoDirective, ConvertMode, Roster, SlotState, TimeMark


# =============================================================================
# SCANNER OUTPUT
# =============================================================================

@dataclass(frozen=True)
class InlineInstructions:
    """
    Free-text instructions that apply on the line where they appear.

    arm/disarm hold slot ids in the order they were written.
    """
    arm: Tuple[int, ...] = field(default_factory=tuple)
    disarm: Tuple[int, ...] = field(default_factory=tuple)
    auto: Optional[AutoDirective] = None

    @property
    def is_empty(self) -> bool:
        return not self.arm and not self.disarm and self.auto is None


@dataclass(frozen=True)
class TimelineEntry:
    """
    One recognized timeline line.

    WHY TWO STATE FIELDS:
    literal_state is what the author wrote (zero placeholder when nothing
    was written); has_literal_state says whether to trust it. The
    effective state of an entry is computed by the engines and never
    stored here.
    """
    line_index: int
    text: str
    time_text: str
    time_mark: Optional[TimeMark]
    actor_slot: Optional[int] = None
    actor_name: str = ""
    literal_state: SlotState = field(default_factory=SlotState.disarmed)
    has_literal_state: bool = False
    is_sub_entry: bool = False
    auto_directive: Optional[AutoDirective] = None

    # Inference-mode annotations
    action: Optional[ActionKind] = None
    explicit_arms: Tuple[int, ...] = field(default_factory=tuple)
    inline: InlineInstructions = field(default_factory=InlineInstructions)


# =============================================================================
# INFERENCE PLANNING
# =============================================================================

@dataclass(frozen=True)
class Demand:
    """
    Planned mutations for one entry index.

    Application order is fixed: arms, then disarms, then auto-on, then
    auto-off. An entry that is both armed and disarmed ends disarmed.
    """
    arm: Tuple[int, ...] = field(default_factory=tuple)
    disarm: Tuple[int, ...] = field(default_factory=tuple)
    auto_on: bool = False
    auto_off: bool = False

    def with_arm(self, slot: int) -> Demand:
        if slot in self.arm:
            return self
        return Demand(self.arm + (slot,), self.disarm, self.auto_on, self.auto_off)

    def with_disarm(self, slot: int) -> Demand:
        if slot in self.disarm:
            return self
        return Demand(self.arm, self.disarm + (slot,), self.auto_on, self.auto_off)

    def with_auto_on(self) -> Demand:
        return Demand(self.arm, self.disarm, True, self.auto_off)

    def with_auto_off(self) -> Demand:
        return Demand(self.arm, self.disarm, self.auto_on, True)

    def apply(self, state: SlotState, auto: bool) -> Tuple[SlotState, bool]:
        """Return the (slots, auto) pair after this demand."""
        state = state.arm(self.arm).disarm(self.disarm)
        if self.auto_on:
            auto = True
        if self.auto_off:
            auto = False
        return state, auto

    @property
    def is_empty(self) -> bool:
        return not (self.arm or self.disarm or self.auto_on or self.auto_off)


@dataclass(frozen=True)
class RenderedEntry:
    """An entry paired with the state it was rendered with."""
    entry: TimelineEntry
    previous: SlotState
    current: SlotState
    previous_auto: bool
    current_auto: bool
    is_first: bool
    glyphs: str


# =============================================================================
# OBSERVABILITY
# =============================================================================

class AuditEventType(Enum):
    """Types of events recorded during one conversion."""
    ROSTER_RESOLVED = "roster_resolved"
    MODE_SELECTED = "mode_selected"
    DEMAND_PLANNED = "demand_planned"
    ENTRY_RENDERED = "entry_rendered"
    CONVERSION_FAILED = "conversion_failed"


@dataclass(frozen=True)
class AuditLogEntry:
    """Immutable audit log entry."""
    entry_id: str
    event_type: AuditEventType
    timestamp: datetime
    layer: str  # Which layer generated this
    action: str
    line_index: Optional[int] = None
    metadata: Tuple[Tuple[str, str], ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            'entry_id': self.entry_id,
            'event_type': self.event_type.value,
            'timestamp': self.timestamp.isoformat(),
            'layer': self.layer,
            'action': self.action,
            'line_index': self.line_index,
            'metadata': dict(self.metadata),
        }


# =============================================================================
# CONVERSION RESULT
# =============================================================================

@dataclass(frozen=True)
class ConversionResult:
    """
    Complete outcome of one conversion call.

    text is None only when lenient detection judged the input not to be
    a timeline; mode is None in that case too.
    """
    mode: Optional[ConvertMode]
    text: Optional[str]
    roster: Roster
    entry_count: int
    audit: Tuple[AuditLogEntry, ...] = field(default_factory=tuple)

    @property
    def is_timeline(self) -> bool:
        return self.text is not None

    def to_dict(self) -> dict:
        return {
            'mode': self.mode.value if self.mode else None,
            'text': self.text,
            'roster': list(self.roster.members),
            'entry_count': self.entry_count,
        }
