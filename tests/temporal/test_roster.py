"""
Roster Resolution Tests
=======================

INVARIANTS TESTED:
1. The first directive line wins, even with a wrong name count
2. Implicit rosters are only considered under lenient detection
3. Duplicate names never resolve a roster
4. Actor lookup picks the earliest occurrence
"""

import pytest

from princessify.contracts.base import Roster
from princessify.temporal.roster import (
    RosterSource, split_names, resolve_roster, find_implicit_roster,
)


PARTY = ("ヴルム", "ルイズ", "ユイ", "クローチェ", "アングレ")


class TestDirectiveRoster:
    """Explicit @dango lines."""

    def test_directive_resolves(self):
        lines = ["", "@dango ヴルム ルイズ ユイ クローチェ アングレ", "1:20 ユイ"]
        resolution = resolve_roster(lines)
        assert resolution.roster.members == PARTY
        assert resolution.line_index == 1
        assert resolution.source is RosterSource.DIRECTIVE

    def test_alternate_token(self):
        resolution = resolve_roster(["-dango A B C D E"])
        assert resolution.roster.members == ("A", "B", "C", "D", "E")

    def test_wrong_count_keeps_line_index(self):
        resolution = resolve_roster(["@dango A B C D", "1:20 A"])
        assert resolution.has_roster_line
        assert resolution.line_index == 0
        assert not resolution.roster.is_resolved

    def test_first_directive_wins(self):
        resolution = resolve_roster(["@dango A B C", "@dango A B C D E"])
        assert resolution.line_index == 0
        assert not resolution.roster.is_resolved

    def test_duplicate_names_unresolved(self):
        resolution = resolve_roster(["@dango A A B C D"])
        assert resolution.has_roster_line
        assert not resolution.roster.is_resolved

    def test_mixed_separators(self):
        assert split_names("A、B,C　D，E") == ["A", "B", "C", "D", "E"]

    def test_custom_tokens(self):
        resolution = resolve_roster(["!party A B C D E"], directive_tokens=("!party",))
        assert resolution.roster.is_resolved

    def test_no_directive(self):
        resolution = resolve_roster(["A B C D E", "1:20 A"])
        assert not resolution.has_roster_line
        assert resolution.source is None


class TestImplicitRoster:
    """Lenient detection of a bare roster line."""

    def test_lenient_finds_first_five_names(self):
        resolution = resolve_roster(["", "A B C D E", "1:20 A"], lenient=True)
        assert resolution.roster.members == ("A", "B", "C", "D", "E")
        assert resolution.line_index == 1
        assert resolution.source is RosterSource.IMPLICIT

    def test_directive_preferred_when_lenient(self):
        resolution = resolve_roster(["V W X Y Z", "@dango A B C D E"], lenient=True)
        assert resolution.line_index == 1
        assert resolution.source is RosterSource.DIRECTIVE

    def test_skips_timestamped_lines(self):
        assert not find_implicit_roster(["1:20 A B C D"]).has_roster_line

    def test_skips_instruction_lines(self):
        resolution = find_implicit_roster(["A B C D Eセット", "V W X Y Z"])
        assert resolution.roster.members == ("V", "W", "X", "Y", "Z")

    def test_skips_wrong_counts(self):
        assert not find_implicit_roster(["A B C D", "A B C D E F"]).has_roster_line


class TestRoster:
    """Roster value type."""

    def test_empty_is_unresolved(self):
        assert not Roster.empty().is_resolved
        assert len(Roster.empty()) == 0

    @pytest.mark.parametrize("members", [("A", "B"), ("A", "A", "B", "C", "D"), ("A", "", "B", "C", "D")])
    def test_invalid_members_rejected(self, members):
        with pytest.raises(ValueError):
            Roster(members=members)

    def test_slot_of(self):
        roster = Roster(members=PARTY)
        assert roster.slot_of("ユイ") == 2
        assert roster.slot_of("ペコリーヌ") is None

    def test_find_actor_earliest_occurrence(self):
        roster = Roster(members=PARTY)
        assert roster.find_actor("1:04 ユイ ヴルムの後") == (2, 5)

    def test_find_actor_tie_goes_to_lower_slot(self):
        roster = Roster(members=("ユイ", "ユイカ", "ペコ", "キャル", "コッコロ"))
        assert roster.find_actor("1:00 ユイカ") == (0, 5)

    def test_find_actor_missing(self):
        assert Roster(members=PARTY).find_actor("1:00 敵UB") == (None, -1)
