"""
Observability & Audit Layer

RESPONSIBILITY: Record what a conversion decided and why
ALLOWED INPUTS: Facts reported by the other layers
OUTPUTS: Tuple[AuditLogEntry, ...] attached to ConversionResult

WHAT THIS LAYER MUST NOT DO:
============================
- Modify conversion behavior
- Filter or interpret events (only record them)
- Outlive the conversion call that created it

BOUNDARY ENFORCEMENT:
=====================
- One AuditCollector per conversion call, never shared
- Entries are frozen; callers receive a tuple snapshot
"""

from __future__ import annotations
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple

from ..contracts.events import AuditEventType, AuditLogEntry


class AuditCollector:
    """
    Append-only audit collector for a single conversion.

    Entry ids are sequence based so two runs over the same document
    produce the same ids in the same order.
    """

    def __init__(self, layer_name: str = "engine"):
        self._layer_name = layer_name
        self._entries: List[AuditLogEntry] = []
        self._sequence: int = 0

    def record(
        self,
        event_type: AuditEventType,
        action: str,
        layer: Optional[str] = None,
        line_index: Optional[int] = None,
        metadata: Optional[Dict[str, str]] = None
    ) -> AuditLogEntry:
        """Record one event (append-only)."""
        self._sequence += 1
        entry = AuditLogEntry(
            entry_id=f"audit_{self._sequence:04d}",
            event_type=event_type,
            timestamp=datetime.now(timezone.utc),
            layer=layer or self._layer_name,
            action=action,
            line_index=line_index,
            metadata=tuple(sorted(metadata.items())) if metadata else ()
        )
        self._entries.append(entry)
        return entry

    def get_entries(self, event_type: Optional[AuditEventType] = None) -> List[AuditLogEntry]:
        """Get entries, optionally filtered by type."""
        if event_type is None:
            return list(self._entries)
        return [e for e in self._entries if e.event_type == event_type]

    def snapshot(self) -> Tuple[AuditLogEntry, ...]:
        return tuple(self._entries)

    @property
    def layer_name(self) -> str:
        return self._layer_name

    @property
    def entry_count(self) -> int:
        return len(self._entries)


__all__ = ['AuditCollector']
