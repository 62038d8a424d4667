"""
Base Contracts and Shared Types

These are the foundational types used across all layers.
All types here are IMMUTABLE and represent pure data.
No behavior beyond validation, no side effects, no dependencies.

BOUNDARY ENFORCEMENT:
=====================
- This module is READ-ONLY from all layers
- Layers may import types but MUST NOT modify this module
- All types are frozen dataclasses or enums for immutability guarantee
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterable, Optional, Tuple
from enum import Enum, auto


SLOT_COUNT = 5


# =============================================================================
# ERROR STATES (Explicit, never silent)
# =============================================================================

class ErrorCode(Enum):
    """
    Explicit error codes for deterministic error handling.
    Only the mode selector produces these; every other layer degrades locally.
    """
    ROSTER_UNDETERMINED = auto()
    ROSTER_WITHOUT_TIMELINE = auto()


@dataclass(frozen=True)
class Error:
    """
    Immutable error representation with full context.
    Errors are data first; RosterUndeterminedError carries one of these.
    """
    code: ErrorCode
    message: str
    timestamp: datetime
    context: Tuple[Tuple[str, str], ...] = field(default_factory=tuple)

    @staticmethod
    def create(code: ErrorCode, message: str) -> Error:
        return Error(code=code, message=message, timestamp=datetime.now(timezone.utc))

    def with_context(self, key: str, value: str) -> Error:
        """Return new Error with additional context (immutable)."""
        return Error(
            code=self.code,
            message=self.message,
            timestamp=self.timestamp,
            context=self.context + ((key, value),)
        )


class RosterUndeterminedError(Exception):
    """
    Raised when inference is the only viable path but no 5-name roster
    can be resolved. The message is user-facing guidance text.
    """

    def __init__(self, error: Error):
        super().__init__(error.message)
        self.error = error

    @property
    def guidance(self) -> str:
        return self.error.message

    @property
    def code(self) -> ErrorCode:
        return self.error.code


# =============================================================================
# TEMPORAL TYPES
# =============================================================================

@dataclass(frozen=True, order=True)
class TimeMark:
    """
    Battle clock reading in M:SS form.

    Ordering follows the clock value, so 1:30 > 1:05. Timelines count
    down, which means document order is usually descending TimeMark order.
    """
    minutes: int
    seconds: int

    def __post_init__(self):
        if self.minutes < 0 or not 0 <= self.seconds < 60:
            raise ValueError(f"invalid clock reading {self.minutes}:{self.seconds}")

    @property
    def total_seconds(self) -> int:
        return self.minutes * 60 + self.seconds

    def __str__(self) -> str:
        return f"{self.minutes}:{self.seconds:02d}"


# =============================================================================
# ROSTER AND SLOT STATE
# =============================================================================

@dataclass(frozen=True)
class Roster:
    """
    Ordered party of exactly five members; index is the slot id.

    The unresolved roster is the empty tuple. Anything else must hold
    SLOT_COUNT distinct names.
    """
    members: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if not self.members:
            return
        if len(self.members) != SLOT_COUNT:
            raise ValueError(f"roster needs {SLOT_COUNT} members, got {len(self.members)}")
        if len(set(self.members)) != SLOT_COUNT:
            raise ValueError("roster members must be distinct")
        if any(not name for name in self.members):
            raise ValueError("roster member names must be non-empty")

    @staticmethod
    def empty() -> Roster:
        return Roster(members=())

    @property
    def is_resolved(self) -> bool:
        return len(self.members) == SLOT_COUNT

    def slot_of(self, name: str) -> Optional[int]:
        """Exact-name lookup."""
        try:
            return self.members.index(name)
        except ValueError:
            return None

    def find_actor(self, text: str) -> Tuple[Optional[int], int]:
        """
        Locate the member whose name occurs earliest in text.

        Returns (slot, position); (None, -1) when no member occurs.
        Ties on position go to the lower slot.
        """
        best_slot: Optional[int] = None
        best_pos = -1
        for slot, name in enumerate(self.members):
            pos = text.find(name)
            if pos == -1:
                continue
            if best_slot is None or pos < best_pos:
                best_slot = slot
                best_pos = pos
        return best_slot, best_pos

    def mentions_member(self, text: str) -> bool:
        return any(name in text for name in self.members)

    def __len__(self) -> int:
        return len(self.members)

    def __iter__(self):
        return iter(self.members)


@dataclass(frozen=True)
class SlotState:
    """Five armed/disarmed flags, one per roster slot."""
    slots: Tuple[bool, ...] = (False,) * SLOT_COUNT

    def __post_init__(self):
        if len(self.slots) != SLOT_COUNT:
            raise ValueError(f"SlotState needs {SLOT_COUNT} slots, got {len(self.slots)}")

    @staticmethod
    def disarmed() -> SlotState:
        return SlotState()

    @staticmethod
    def from_flags(flags: Iterable[bool]) -> SlotState:
        return SlotState(slots=tuple(bool(f) for f in flags))

    def arm(self, slots: Iterable[int]) -> SlotState:
        updated = list(self.slots)
        for slot in slots:
            updated[slot] = True
        return SlotState(slots=tuple(updated))

    def disarm(self, slots: Iterable[int]) -> SlotState:
        updated = list(self.slots)
        for slot in slots:
            updated[slot] = False
        return SlotState(slots=tuple(updated))

    def __getitem__(self, slot: int) -> bool:
        return self.slots[slot]

    def __iter__(self):
        return iter(self.slots)

    def __len__(self) -> int:
        return len(self.slots)


# =============================================================================
# CLASSIFICATION STATES (Closed world)
# =============================================================================

class ActionKind(Enum):
    """
    Closed classification of a timeline action.
    Only SET and AUTO produce look-ahead demands.
    """
    MANUAL = "manual"
    SET = "set"
    AUTO = "auto"
    ENEMY = "enemy"
    NONE = "none"


class ConvertMode(Enum):
    """Which engine produced the annotated document."""
    EXISTING = "existing"
    INFERENCE = "inference"


class AutoDirective(Enum):
    """Free-text auto instruction found on a line."""
    ON = "on"
    OFF = "off"
