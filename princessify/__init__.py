"""
Princessify: Timeline Readiness Annotator

Annotates a clan-battle timeline with per-entry readiness state: five
slot flags (one per party member) plus the auto-mode flag.

LAYER STRUCTURE:
================

1. CONTRACTS (contracts/)
   - Immutable types shared by every layer
   - The single exception type, RosterUndeterminedError

2. NORMALIZATION LAYER (normalization/)
   - Responsibility: glyph alphabets, state runs, lexical rule tables
   - MUST NOT: know about documents, rosters or timestamps

3. TEMPORAL LAYER (temporal/)
   - Responsibility: roster resolution and timeline scanning
   - MUST NOT: decide modes or render

4. CORE (core/)
   - Responsibility: mode selection, Existing-Mode diffing, inference
   - MUST NOT: keep state between calls

5. RENDER LAYER (render/)
   - Responsibility: glyph groups, splicing, document reassembly

6. OBSERVABILITY (observability/)
   - Responsibility: per-call audit trail

CONSTRAINTS ENFORCED:
=====================
- Immutability-first: contracts are frozen dataclasses
- Deterministic: identical inputs always produce identical outputs
- Stateless: a converter may be reused; no roster survives a call
- Explicit errors: only the mode selector raises
"""

from .contracts.base import ConvertMode, ErrorCode, RosterUndeterminedError
from .contracts.events import ConversionResult
from .engine import ConvertOptions, ConverterConfig, Princessify, convert, roster_of

__version__ = "0.1.0"

__all__ = [
    'Princessify',
    'ConverterConfig',
    'ConvertOptions',
    'ConversionResult',
    'ConvertMode',
    'ErrorCode',
    'RosterUndeterminedError',
    'convert',
    'roster_of',
]
