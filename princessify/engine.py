"""
Engine Orchestration Module

This module provides the unified interface for converting a timeline
document while keeping the layers separate.

DESIGN PRINCIPLES:
==================
1. Layers communicate ONLY through contracts
2. Roster, entries, demands and audit trail are built fresh per call
3. A converter holds immutable configuration and nothing else
4. All decisions are traceable through the per-call audit trail
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Tuple
import logging

from .contracts.base import ConvertMode, Roster, RosterUndeterminedError
from .contracts.events import AuditEventType, ConversionResult, RenderedEntry
from .core.differ import render_existing
from .core.inference import InferenceEngine
from .core.mode import select_mode
from .observability import AuditCollector
from .render.splice import assemble
from .temporal.roster import DEFAULT_DIRECTIVE_TOKENS, resolve_roster
from .temporal.scanner import scan_inference_timeline, scan_timeline

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConverterConfig:
    """Static configuration shared by every call on a converter."""
    directive_tokens: Tuple[str, ...] = DEFAULT_DIRECTIVE_TOKENS
    opening_time: str = "1:30"
    opening_label: str = "開始"
    manual_marker: str = "🌟"

    def __post_init__(self):
        if not self.directive_tokens:
            raise ValueError("at least one directive token is required")


@dataclass(frozen=True)
class ConvertOptions:
    """
    Per-call options.

    channel_mode enables lenient detection: an implicit roster line is
    accepted and non-timelines yield None instead of passing through.
    """
    channel_mode: bool = False


class Princessify:
    """
    Timeline annotator.

    LAYER FLOW:
    ===========
    1. Roster: directive or lenient implicit line
    2. Temporal: Existing-Mode scan over the document
    3. Mode: decision table (may raise RosterUndeterminedError)
    4. Core: Existing-Mode differ or Inference engine
    5. Render: glyphs spliced back into a copy of the lines

    Safe to reuse and to share: nothing from one call survives into the next.
    """

    def __init__(self, config: Optional[ConverterConfig] = None):
        self._config = config or ConverterConfig()
        self._inference = InferenceEngine(
            opening_time=self._config.opening_time,
            opening_label=self._config.opening_label,
            manual_marker=self._config.manual_marker,
        )

    @property
    def config(self) -> ConverterConfig:
        return self._config

    def convert(self, document: str, options: Optional[ConvertOptions] = None) -> Optional[str]:
        """
        Annotate a document.

        Returns None only under lenient detection when the input is not a
        timeline. Raises RosterUndeterminedError on the mode selector's
        fail states.
        """
        return self.run(document, options).text

    def run(self, document: str, options: Optional[ConvertOptions] = None) -> ConversionResult:
        """Annotate a document and return the full result with audit trail."""
        options = options or ConvertOptions()
        lenient = options.channel_mode
        audit = AuditCollector(layer_name="engine")
        lines: List[str] = document.split("\n")

        resolution = resolve_roster(lines, lenient=lenient, directive_tokens=self._config.directive_tokens)
        if resolution.line_index is not None:
            lines[resolution.line_index] = ""
            audit.record(
                AuditEventType.ROSTER_RESOLVED,
                action="roster_line",
                layer="temporal",
                line_index=resolution.line_index,
                metadata={
                    "source": resolution.source.value if resolution.source else "",
                    "resolved": str(resolution.roster.is_resolved).lower(),
                    "members": " ".join(resolution.roster.members),
                }
            )

        entries = scan_timeline(lines, resolution.roster)

        try:
            mode = select_mode(resolution, entries, lenient=lenient)
        except RosterUndeterminedError as exc:
            audit.record(
                AuditEventType.CONVERSION_FAILED,
                action=exc.code.name,
                layer="core",
                metadata=dict(exc.error.context)
            )
            logger.info("Roster undetermined (%s, lenient=%s)", exc.code.name, lenient)
            raise

        if mode is None:
            audit.record(AuditEventType.MODE_SELECTED, action="not_a_timeline", layer="core")
            logger.debug("Input is not a timeline; nothing to convert")
            return ConversionResult(
                mode=None,
                text=None,
                roster=resolution.roster,
                entry_count=0,
                audit=audit.snapshot()
            )

        audit.record(
            AuditEventType.MODE_SELECTED,
            action=mode.value,
            layer="core",
            metadata={"entries": str(len(entries))}
        )

        if mode is ConvertMode.EXISTING:
            result_lines, rendered = render_existing(entries, lines)
            text = assemble(result_lines)
            entry_count = len(entries)
        else:
            inference_entries = scan_inference_timeline(lines, resolution.roster)
            outcome = self._inference.infer(
                lines,
                inference_entries,
                resolution.roster,
                resolution.line_index,
            )
            for index, demand in outcome.demands:
                audit.record(
                    AuditEventType.DEMAND_PLANNED,
                    action="demand",
                    layer="core",
                    line_index=outcome.entries[index].line_index,
                    metadata={
                        "arm": ",".join(str(s) for s in demand.arm),
                        "disarm": ",".join(str(s) for s in demand.disarm),
                        "auto_on": str(demand.auto_on).lower(),
                        "auto_off": str(demand.auto_off).lower(),
                    }
                )
            rendered = list(outcome.rendered)
            text = outcome.text
            entry_count = len(outcome.entries)

        self._record_rendered(audit, rendered)
        logger.debug("Converted %d entries in %s mode", entry_count, mode.value)

        return ConversionResult(
            mode=mode,
            text=text,
            roster=resolution.roster,
            entry_count=entry_count,
            audit=audit.snapshot()
        )

    def _record_rendered(self, audit: AuditCollector, rendered: List[RenderedEntry]) -> None:
        for record in rendered:
            metadata = {"glyphs": record.glyphs}
            if record.entry.action is not None:
                metadata["action"] = record.entry.action.value
            audit.record(
                AuditEventType.ENTRY_RENDERED,
                action="render",
                layer="render",
                line_index=record.entry.line_index,
                metadata=metadata
            )


_default_converter = Princessify()


def convert(document: str, options: Optional[ConvertOptions] = None) -> Optional[str]:
    """Module-level convenience wrapper around a shared stateless converter."""
    return _default_converter.convert(document, options)


def roster_of(document: str, options: Optional[ConvertOptions] = None) -> Roster:
    """The roster a conversion of document would use (never raises)."""
    options = options or ConvertOptions()
    return resolve_roster(
        document.split("\n"),
        lenient=options.channel_mode,
        directive_tokens=_default_converter.config.directive_tokens,
    ).roster
