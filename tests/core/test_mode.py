"""
Mode Selector Tests
===================

One test per row of the decision table, plus guidance selection.
"""

import pytest

from princessify.contracts.base import ConvertMode, ErrorCode, Roster, RosterUndeterminedError, SlotState
from princessify.contracts.events import TimelineEntry
from princessify.core.mode import select_mode, DIRECTIVE_GUIDE, CHANNEL_GUIDE
from princessify.temporal.roster import RosterResolution, RosterSource


RESOLVED = Roster(members=("A", "B", "C", "D", "E"))


def make_entry(line_index: int = 1, literal: bool = False) -> TimelineEntry:
    """Factory for scanned entries."""
    return TimelineEntry(
        line_index=line_index,
        text="1:20 A",
        time_text="1:20",
        time_mark=None,
        literal_state=SlotState.disarmed(),
        has_literal_state=literal,
    )


def directive(roster: Roster = RESOLVED) -> RosterResolution:
    return RosterResolution(roster=roster, line_index=0, source=RosterSource.DIRECTIVE)


def implicit() -> RosterResolution:
    return RosterResolution(roster=RESOLVED, line_index=0, source=RosterSource.IMPLICIT)


class TestDecisionTable:

    def test_literal_state_wins(self):
        assert select_mode(directive(), [make_entry(literal=True)]) is ConvertMode.EXISTING
        assert select_mode(RosterResolution.none(), [make_entry(literal=True)]) is ConvertMode.EXISTING

    def test_literal_state_beats_broken_directive(self):
        broken = directive(Roster.empty())
        assert select_mode(broken, [make_entry(), make_entry(2, literal=True)]) is ConvertMode.EXISTING

    def test_roster_without_entries_raises(self):
        with pytest.raises(RosterUndeterminedError) as exc_info:
            select_mode(directive(), [])
        assert exc_info.value.code is ErrorCode.ROSTER_WITHOUT_TIMELINE

    def test_resolved_roster_selects_inference(self):
        assert select_mode(directive(), [make_entry()]) is ConvertMode.INFERENCE
        assert select_mode(implicit(), [make_entry()], lenient=True) is ConvertMode.INFERENCE

    def test_unresolved_roster_raises(self):
        with pytest.raises(RosterUndeterminedError) as exc_info:
            select_mode(directive(Roster.empty()), [make_entry()])
        assert exc_info.value.code is ErrorCode.ROSTER_UNDETERMINED

    def test_no_roster_with_entries_raises(self):
        with pytest.raises(RosterUndeterminedError) as exc_info:
            select_mode(RosterResolution.none(), [make_entry()])
        assert exc_info.value.code is ErrorCode.ROSTER_UNDETERMINED

    def test_nothing_strict_passes_through(self):
        assert select_mode(RosterResolution.none(), []) is ConvertMode.EXISTING

    def test_nothing_lenient_is_not_a_timeline(self):
        assert select_mode(RosterResolution.none(), [], lenient=True) is None


class TestGuidance:
    """Which guide text accompanies a failure."""

    def test_strict_gets_directive_guide(self):
        with pytest.raises(RosterUndeterminedError) as exc_info:
            select_mode(RosterResolution.none(), [make_entry()])
        assert exc_info.value.guidance == DIRECTIVE_GUIDE
        assert "@dango" in exc_info.value.guidance

    def test_lenient_gets_channel_guide(self):
        with pytest.raises(RosterUndeterminedError) as exc_info:
            select_mode(RosterResolution.none(), [make_entry()], lenient=True)
        assert exc_info.value.guidance == CHANNEL_GUIDE

    def test_wrong_count_directive_always_gets_directive_guide(self):
        with pytest.raises(RosterUndeterminedError) as exc_info:
            select_mode(directive(Roster.empty()), [make_entry()], lenient=True)
        assert exc_info.value.guidance == DIRECTIVE_GUIDE

    def test_context_recorded(self):
        with pytest.raises(RosterUndeterminedError) as exc_info:
            select_mode(directive(Roster.empty()), [make_entry()])
        context = dict(exc_info.value.error.context)
        assert context["lenient"] == "false"
        assert context["roster_line"] == "0"
