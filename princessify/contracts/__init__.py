"""
Contracts Module

This module defines the explicit data types that form the contracts
between layers. All inter-layer communication MUST use these contracts.
No layer may import implementation details from another layer.

DESIGN PRINCIPLES:
==================
1. All contract types are immutable (frozen dataclasses or enums)
2. The only exception type is RosterUndeterminedError
3. Slot states always hold exactly five flags
4. Nothing here survives past a single conversion call
"""

from .base import (
    SLOT_COUNT, ErrorCode, Error, RosterUndeterminedError, TimeMark,
    Roster, SlotState, ActionKind, ConvertMode, AutoDirective,
)
from .events import (
    InlineInstructions, TimelineEntry, Demand, RenderedEntry,
    AuditEventType, AuditLogEntry, ConversionResult,
)

__all__ = [
    'SLOT_COUNT',
    'ErrorCode',
    'Error',
    'RosterUndeterminedError',
    'TimeMark',
    'Roster',
    'SlotState',
    'ActionKind',
    'ConvertMode',
    'AutoDirective',
    'InlineInstructions',
    'TimelineEntry',
    'Demand',
    'RenderedEntry',
    'AuditEventType',
    'AuditLogEntry',
    'ConversionResult',
]
