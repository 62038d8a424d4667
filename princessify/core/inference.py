"""
Inference Engine
================

Infers slot and auto transitions for a timeline that carries no literal
state.

ALGORITHM:
==========
0. Classify every entry (pure function -> ActionKind) and parse its
   free-text instructions.
1. Pass 1 builds an index-addressed demand table in document order.
   A SET action by slot s at entry i arms s at i-1 and disarms s at i.
   Index -1 does not exist: the initial state is seeded separately from
   the instruction lines between the roster line and the first entry.
2. Pass 2 applies the table from the initial state: arms, then disarms,
   then auto-on, then auto-off, rendering each entry with the four-case
   diff rule. No entry is revisited after it is rendered.

GUARANTEES:
- Classification and planning are pure functions of their inputs
- Explicit free-text auto directives anywhere suppress every inferred
  AUTO transition
- The caller's lines are copied, never mutated
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Sequence, Tuple

from ..contracts.base import ActionKind, AutoDirective, Roster, SlotState
from ..contracts.events import Demand, InlineInstructions, RenderedEntry, TimelineEntry
from ..normalization.glyphs import detect_auto_directive
from ..normalization.lexicon import (
    ENEMY_ACTION_RE, SET_TOKEN_PREFIX, AUTO_TOKENS, IN_PROGRESS_RE,
    HERE_ARM_RE, RELEASE_RE, ARM_RE, NAME_LIST_SPLIT_RE, first_token,
)
from ..render.splice import (
    render_absolute, render_auto, render_auto_absolute, render_diff,
    append_glyphs, mark_line, insert_block, assemble, compact,
)


# =============================================================================
# CLASSIFICATION
# =============================================================================

def classify_action(text_after_actor: str, full_line: str) -> ActionKind:
    """
    Classify one action.

    text_after_actor is the line text following the actor's name (empty
    when no actor was found); full_line is the whole line.
    """
    if ENEMY_ACTION_RE.match(full_line.strip()):
        return ActionKind.ENEMY
    token = first_token(text_after_actor)
    if token.startswith(SET_TOKEN_PREFIX):
        return ActionKind.SET
    if token.upper() in AUTO_TOKENS:
        return ActionKind.AUTO
    if IN_PROGRESS_RE.match(token):
        return ActionKind.NONE
    return ActionKind.MANUAL


def text_after_actor(entry: TimelineEntry) -> str:
    if not entry.actor_name:
        return ""
    trimmed = entry.text.strip()
    return trimmed[trimmed.find(entry.actor_name) + len(entry.actor_name):]


# =============================================================================
# FREE-TEXT INSTRUCTIONS
# =============================================================================

def expand_names(compound: str, roster: Roster) -> List[int]:
    """Split a comma-joined name list into known slots, in order."""
    slots = []
    for name in NAME_LIST_SPLIT_RE.split(compound):
        slot = roster.slot_of(name.strip())
        if slot is not None:
            slots.append(slot)
    return slots


def parse_explicit_arms(text: str, roster: Roster) -> Tuple[int, ...]:
    """Slots named by 'ここでNAMEセット' patterns."""
    slots = []
    for match in HERE_ARM_RE.finditer(text):
        slot = roster.slot_of(match.group(1))
        if slot is not None:
            slots.append(slot)
    return tuple(slots)


def parse_inline_instructions(text: str, roster: Roster) -> InlineInstructions:
    """Same-line arm, disarm and auto instructions written in free text."""
    disarm: List[int] = []
    for match in RELEASE_RE.finditer(text):
        disarm.extend(expand_names(match.group(1), roster))

    arm: List[int] = []
    for match in ARM_RE.finditer(text):
        arm.extend(expand_names(match.group(1), roster))

    return InlineInstructions(
        arm=tuple(arm),
        disarm=tuple(disarm),
        auto=detect_auto_directive(text),
    )


def annotate_entries(entries: Sequence[TimelineEntry], roster: Roster) -> List[TimelineEntry]:
    """Return copies of entries carrying action kind and instructions."""
    annotated = []
    for entry in entries:
        trimmed = entry.text.strip()
        annotated.append(replace(
            entry,
            action=classify_action(text_after_actor(entry), trimmed),
            explicit_arms=parse_explicit_arms(trimmed, roster),
            inline=parse_inline_instructions(trimmed, roster),
        ))
    return annotated


# =============================================================================
# INITIAL STATE
# =============================================================================

@dataclass(frozen=True)
class InitialState:
    """Seed for pass 2, folded from the pre-timeline instruction block."""
    slots: SlotState
    auto: bool
    has_auto_directive: bool


def seed_initial_state(lines: Sequence[str], start: int, stop: int, roster: Roster) -> InitialState:
    """
    Fold instruction lines in [start, stop) into the starting state.

    All arms apply before all disarms, and auto-off wins over auto-on,
    matching per-entry demand application.
    """
    demand = Demand()
    for line in lines[start:stop]:
        trimmed = line.strip()
        if not trimmed:
            continue
        inline = parse_inline_instructions(trimmed, roster)
        for slot in inline.arm:
            demand = demand.with_arm(slot)
        for slot in inline.disarm:
            demand = demand.with_disarm(slot)
        if inline.auto is AutoDirective.ON:
            demand = demand.with_auto_on()
        elif inline.auto is AutoDirective.OFF:
            demand = demand.with_auto_off()

    slots, auto = demand.apply(SlotState.disarmed(), False)
    return InitialState(
        slots=slots,
        auto=auto,
        has_auto_directive=demand.auto_on or demand.auto_off,
    )


# =============================================================================
# PASS 1: DEMAND PLANNING
# =============================================================================

class DemandTable:
    """Index-addressed demands; missing indices mean 'no demand'."""

    def __init__(self):
        self._demands: Dict[int, Demand] = {}

    def get(self, index: int) -> Demand:
        return self._demands.get(index, Demand())

    def update(self, index: int, demand: Demand) -> None:
        self._demands[index] = demand

    def items(self) -> List[Tuple[int, Demand]]:
        return sorted(self._demands.items())

    def __len__(self) -> int:
        return len(self._demands)


def has_explicit_auto(entries: Sequence[TimelineEntry], initial: InitialState) -> bool:
    return initial.has_auto_directive or any(e.inline.auto is not None for e in entries)


def plan_demands(entries: Sequence[TimelineEntry], suppress_auto_actions: bool) -> DemandTable:
    """Build the demand table for annotated entries."""
    table = DemandTable()

    for i, entry in enumerate(entries):
        if entry.action is ActionKind.SET and entry.actor_slot is not None:
            if i > 0:
                table.update(i - 1, table.get(i - 1).with_arm(entry.actor_slot))
            table.update(i, table.get(i).with_disarm(entry.actor_slot))

        if entry.action is ActionKind.AUTO and not suppress_auto_actions:
            if i > 0:
                table.update(i - 1, table.get(i - 1).with_auto_on())
            table.update(i, table.get(i).with_auto_off())

        demand = table.get(i)
        for slot in entry.explicit_arms:
            demand = demand.with_arm(slot)
        for slot in entry.inline.arm:
            demand = demand.with_arm(slot)
        for slot in entry.inline.disarm:
            demand = demand.with_disarm(slot)
        if entry.inline.auto is AutoDirective.ON:
            demand = demand.with_auto_on()
        elif entry.inline.auto is AutoDirective.OFF:
            demand = demand.with_auto_off()
        if not demand.is_empty:
            table.update(i, demand)

    return table


# =============================================================================
# PASS 2: DEMAND APPLICATION
# =============================================================================

def apply_demands(
    entries: Sequence[TimelineEntry],
    table: DemandTable,
    initial: InitialState,
    show_auto: bool
) -> List[RenderedEntry]:
    """Walk entries once, applying each entry's demand before rendering it."""
    rendered: List[RenderedEntry] = []
    state = initial.slots
    auto = initial.auto

    for i, entry in enumerate(entries):
        previous, previous_auto = state, auto
        state, auto = table.get(i).apply(state, auto)

        glyphs = render_diff(previous, state)
        if show_auto:
            glyphs += render_auto(previous_auto, auto)

        rendered.append(RenderedEntry(
            entry=entry,
            previous=previous,
            current=state,
            previous_auto=previous_auto,
            current_auto=auto,
            is_first=False,
            glyphs=glyphs,
        ))

    return rendered


# =============================================================================
# ENGINE
# =============================================================================

@dataclass(frozen=True)
class InferenceOutcome:
    """Everything one inference run produced."""
    text: str
    entries: Tuple[TimelineEntry, ...]
    rendered: Tuple[RenderedEntry, ...]
    demands: Tuple[Tuple[int, Demand], ...]
    initial: InitialState
    opening_line: Optional[str]


class InferenceEngine:
    """
    Two-pass inference over an annotated timeline.

    GUARANTEES:
    ===========
    1. No hidden state between calls; only rendering settings are stored
    2. Output depends only on (lines, roster, roster line index)
    """

    def __init__(self, opening_time: str = "1:30", opening_label: str = "開始", manual_marker: str = "🌟"):
        self._opening_time = opening_time
        self._opening_label = opening_label
        self._manual_marker = manual_marker

    def infer(
        self,
        lines: Sequence[str],
        entries: Sequence[TimelineEntry],
        roster: Roster,
        roster_line_index: int
    ) -> InferenceOutcome:
        """
        Annotate entries and render the document.

        lines must already have the roster line blanked.
        """
        working = list(lines)
        annotated = annotate_entries(entries, roster)

        first_line = annotated[0].line_index if annotated else len(working)
        initial = seed_initial_state(working, roster_line_index + 1, first_line, roster)

        explicit_auto = has_explicit_auto(annotated, initial)
        show_auto = explicit_auto or any(e.action is ActionKind.AUTO for e in annotated)

        table = plan_demands(annotated, suppress_auto_actions=explicit_auto)
        rendered = apply_demands(annotated, table, initial, show_auto)

        for record in rendered:
            entry = record.entry
            if entry.action is ActionKind.MANUAL and not entry.is_sub_entry:
                working[entry.line_index] = mark_line(entry.text, record.glyphs, self._manual_marker)
            else:
                working[entry.line_index] = append_glyphs(entry.text, record.glyphs)

        opening_line = None
        if annotated:
            opening_line = self.render_opening(initial, show_auto)
            working = insert_block(working, first_line, ["", opening_line, ""])

        return InferenceOutcome(
            text=compact(assemble(working)),
            entries=tuple(annotated),
            rendered=tuple(rendered),
            demands=tuple(table.items()),
            initial=initial,
            opening_line=opening_line,
        )

    def render_opening(self, initial: InitialState, show_auto: bool) -> str:
        """Synthesized first entry, always absolute."""
        glyphs = render_absolute(initial.slots)
        if show_auto:
            glyphs += render_auto_absolute(initial.auto)
        return f"{self._opening_time} {self._opening_label} {glyphs}"
