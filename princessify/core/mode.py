"""
Mode Selector
=============

Chooses how a document is converted.

DECISION TABLE:
===============
literal state | roster line | roster resolved | entries | outcome
yes           | -           | -               | -       | EXISTING
no            | yes         | -               | no      | raise ROSTER_WITHOUT_TIMELINE
no            | yes         | yes             | yes     | INFERENCE
no            | yes         | no              | yes     | raise ROSTER_UNDETERMINED
no            | no          | -               | yes     | raise ROSTER_UNDETERMINED
no            | no          | -               | no      | lenient: None, strict: EXISTING

This is the ONLY place in the package that raises.
"""

from __future__ import annotations
from typing import Optional, Sequence

from ..contracts.base import ConvertMode, Error, ErrorCode, RosterUndeterminedError
from ..contracts.events import TimelineEntry
from ..temporal.roster import RosterResolution, RosterSource


DIRECTIVE_GUIDE = "\n".join([
    '推論モードにはパーティーメンバー5人の指定が必要です。',
    '@dango の後にスペース区切りで左から順に5人のキャラ名を記述してください。',
    '',
    '例: @dango キャラ1 キャラ2 キャラ3 キャラ4 キャラ5',
])

CHANNEL_GUIDE = "\n".join([
    'パーティーメンバー5人の指定が必要です。',
    '1行目にスペース区切りで左から順に5人のキャラ名を記述してください。',
    '',
    '例:',
    'キャラ1 キャラ2 キャラ3 キャラ4 キャラ5',
    '',
    '1:20 キャラ1 手動発動',
    '1:10 キャラ2 #通常cl',
])


def build_guide_error(code: ErrorCode, lenient: bool, resolution: RosterResolution) -> RosterUndeterminedError:
    """
    Pick the guidance text for a failure.

    A directive whose name count is wrong always gets the directive guide,
    since the author already knows about directives.
    """
    if resolution.source is RosterSource.DIRECTIVE and not resolution.roster.is_resolved:
        message = DIRECTIVE_GUIDE
    else:
        message = CHANNEL_GUIDE if lenient else DIRECTIVE_GUIDE
    error = Error.create(code, message).with_context("lenient", str(lenient).lower())
    if resolution.line_index is not None:
        error = error.with_context("roster_line", str(resolution.line_index))
    return RosterUndeterminedError(error)


def select_mode(
    resolution: RosterResolution,
    entries: Sequence[TimelineEntry],
    lenient: bool = False
) -> Optional[ConvertMode]:
    """
    Apply the decision table.

    Returns None only under lenient detection, for input that is not a
    timeline at all.
    """
    if any(entry.has_literal_state for entry in entries):
        return ConvertMode.EXISTING

    if resolution.has_roster_line:
        if not entries:
            raise build_guide_error(ErrorCode.ROSTER_WITHOUT_TIMELINE, lenient, resolution)
        if resolution.roster.is_resolved:
            return ConvertMode.INFERENCE
        raise build_guide_error(ErrorCode.ROSTER_UNDETERMINED, lenient, resolution)

    if entries:
        raise build_guide_error(ErrorCode.ROSTER_UNDETERMINED, lenient, resolution)

    return None if lenient else ConvertMode.EXISTING
