"""
End-to-End Conversion Tests
===========================

Full documents through Princessify.convert / Princessify.run.

INVARIANTS TESTED:
1. Existing and Inference modes produce the documented glyphs
2. Boundary cases raise RosterUndeterminedError, never anything else
3. A converter keeps nothing between calls
4. The audit trail follows the conversion step by step
"""

import pytest

from princessify import (
    Princessify, ConverterConfig, ConvertOptions, ConvertMode, ErrorCode,
    RosterUndeterminedError, convert, roster_of,
)
from princessify.contracts.events import AuditEventType
from princessify.core.mode import CHANNEL_GUIDE, DIRECTIVE_GUIDE

from .fixtures import (
    EXISTING_PARTY_DOC, EXISTING_PARTY_EXPECTED,
    EXISTING_ARMING_DOC, EXISTING_ARMING_EXPECTED,
    EXISTING_AUTO_DOC, EXISTING_AUTO_EXPECTED,
    INFERENCE_DOC, INFERENCE_EXPECTED,
    CHANNEL_DOC, CHANNEL_EXPECTED,
)


CHANNEL = ConvertOptions(channel_mode=True)


class TestExistingMode:

    def test_disarm_transitions(self):
        assert convert(EXISTING_PARTY_DOC) == EXISTING_PARTY_EXPECTED

    def test_arm_transitions(self):
        assert convert(EXISTING_ARMING_DOC) == EXISTING_ARMING_EXPECTED

    def test_auto_directives_and_bare_runs(self):
        assert convert(EXISTING_AUTO_DOC) == EXISTING_AUTO_EXPECTED

    def test_rerun_is_stable(self):
        once = convert(EXISTING_AUTO_DOC)
        assert convert(once) == once

    def test_directive_line_blanked(self):
        text = convert("@dango A B C D E\n1:20 A [OXXXX]")
        assert text == "\n1:20 A [〇ーーーー]"


class TestInferenceMode:

    def test_directive_roster(self):
        assert convert(INFERENCE_DOC) == INFERENCE_EXPECTED

    def test_channel_roster(self):
        assert convert(CHANNEL_DOC, CHANNEL) == CHANNEL_EXPECTED

    def test_result_fields(self):
        result = Princessify().run(INFERENCE_DOC)
        assert result.mode is ConvertMode.INFERENCE
        assert result.roster.members == ("A", "B", "C", "D", "E")
        assert result.entry_count == 2
        assert result.is_timeline
        assert result.to_dict()["mode"] == "inference"

    def test_custom_config(self):
        converter = Princessify(ConverterConfig(directive_tokens=("!pt",), manual_marker="*"))
        text = converter.convert("!pt A B C D E\n1:20 A")
        assert text == "1:30 開始 [ーーーーー]\n\n*1:20 A [ーーーーー]"

    def test_empty_directive_tokens_rejected(self):
        with pytest.raises(ValueError):
            ConverterConfig(directive_tokens=())


class TestBoundaries:
    """The mode selector's fail states and pass-throughs."""

    def test_plain_text_strict_passes_through(self):
        assert convert("hello\nworld") == "hello\nworld"

    def test_plain_text_channel_is_not_a_timeline(self):
        result = Princessify().run("hello world", CHANNEL)
        assert result.text is None
        assert result.mode is None
        assert not result.is_timeline

    def test_roster_without_timeline(self):
        with pytest.raises(RosterUndeterminedError) as exc_info:
            convert("@dango A B C D E\nよろしく")
        assert exc_info.value.code is ErrorCode.ROSTER_WITHOUT_TIMELINE

    def test_wrong_member_count(self):
        with pytest.raises(RosterUndeterminedError) as exc_info:
            convert("@dango A B C D\n1:20 A", CHANNEL)
        assert exc_info.value.code is ErrorCode.ROSTER_UNDETERMINED
        assert exc_info.value.guidance == DIRECTIVE_GUIDE

    def test_timeline_without_roster_strict(self):
        with pytest.raises(RosterUndeterminedError) as exc_info:
            convert(CHANNEL_DOC)
        assert exc_info.value.guidance == DIRECTIVE_GUIDE

    def test_timeline_without_roster_channel(self):
        with pytest.raises(RosterUndeterminedError) as exc_info:
            convert("1:20 A\n1:10 B", CHANNEL)
        assert exc_info.value.guidance == CHANNEL_GUIDE


class TestStatelessness:

    def test_reuse_gives_identical_results(self):
        converter = Princessify()
        first = converter.convert(INFERENCE_DOC)
        converter.convert("@dango V W X Y Z\n1:20 V\n1:10 W #x")
        assert converter.convert(INFERENCE_DOC) == first

    def test_roster_does_not_leak(self):
        converter = Princessify()
        converter.convert(INFERENCE_DOC)
        with pytest.raises(RosterUndeterminedError):
            converter.convert("1:20 A\n1:10 B #mark")

    def test_roster_of(self):
        assert roster_of(INFERENCE_DOC).members == ("A", "B", "C", "D", "E")
        assert not roster_of(CHANNEL_DOC).is_resolved
        assert roster_of(CHANNEL_DOC, CHANNEL).members[0] == "クルル"


class TestAuditTrail:

    def test_inference_events(self):
        result = Princessify().run(INFERENCE_DOC)
        types = [entry.event_type for entry in result.audit]
        assert types == [
            AuditEventType.ROSTER_RESOLVED,
            AuditEventType.MODE_SELECTED,
            AuditEventType.DEMAND_PLANNED,
            AuditEventType.DEMAND_PLANNED,
            AuditEventType.ENTRY_RENDERED,
            AuditEventType.ENTRY_RENDERED,
        ]
        assert [entry.entry_id for entry in result.audit][:2] == ["audit_0001", "audit_0002"]

    def test_render_metadata(self):
        result = Princessify().run(INFERENCE_DOC)
        rendered = [e for e in result.audit if e.event_type is AuditEventType.ENTRY_RENDERED]
        assert dict(rendered[1].metadata) == {"action": "set", "glyphs": "[ー❌ーーー]"}
        assert rendered[1].line_index == 2

    def test_existing_mode_has_no_demands(self):
        result = Princessify().run(EXISTING_ARMING_DOC)
        assert result.mode is ConvertMode.EXISTING
        assert all(e.event_type is not AuditEventType.DEMAND_PLANNED for e in result.audit)

    def test_to_dict(self):
        entry = Princessify().run(INFERENCE_DOC).audit[0]
        data = entry.to_dict()
        assert data["event_type"] == "roster_resolved"
        assert data["metadata"]["source"] == "directive"
