"""
Core Conversion Engines

RESPONSIBILITY: Mode selection, Existing-Mode diffing, inference
ALLOWED INPUTS: TimelineEntry sequences and roster resolutions
OUTPUTS: RenderedEntry records and annotated lines

WHAT THIS LAYER MUST NOT DO:
============================
- Keep roster or entry state between calls
- Mutate entries or the caller's lines
- Raise anywhere except the mode selector
"""

from .mode import select_mode, DIRECTIVE_GUIDE, CHANNEL_GUIDE
from .differ import diff_entries, render_existing
from .inference import (
    classify_action, parse_explicit_arms, parse_inline_instructions,
    annotate_entries, seed_initial_state, plan_demands, apply_demands,
    DemandTable, InitialState, InferenceEngine, InferenceOutcome,
)

__all__ = [
    'select_mode',
    'DIRECTIVE_GUIDE',
    'CHANNEL_GUIDE',
    'diff_entries',
    'render_existing',
    'classify_action',
    'parse_explicit_arms',
    'parse_inline_instructions',
    'annotate_entries',
    'seed_initial_state',
    'plan_demands',
    'apply_demands',
    'DemandTable',
    'InitialState',
    'InferenceEngine',
    'InferenceOutcome',
]
