"""
Lexicon
=======

Named lexical rule tables used by action classification, by roster
detection and by free-text instruction parsing. Each table is a compiled
pattern or a frozen set so it can be tested on its own.
"""

from __future__ import annotations
from typing import FrozenSet
import re


# =============================================================================
# ACTION CLASSIFICATION
# =============================================================================

# Timestamp, whitespace, then the enemy-action marker. Anchored so a
# marker inside a trailing comment does not count.
ENEMY_ACTION_RE = re.compile(r"^\d{1,2}:\d{2}[\s　]+敵UB")

SET_TOKEN_PREFIX = "#"

AUTO_TOKENS: FrozenSet[str] = frozenset({"AUTO", "オート"})

# "UB in progress" annotation; the action is already under way
IN_PROGRESS_RE = re.compile(r"^[uU][bB]中$")

TOKEN_SPLIT_RE = re.compile(r"[\s　]+")


def first_token(text: str) -> str:
    """First whitespace-delimited token, or the empty string."""
    tokens = TOKEN_SPLIT_RE.split(text.strip())
    return tokens[0] if tokens else ""


# =============================================================================
# FREE-TEXT INSTRUCTIONS
# =============================================================================

# ここでNAMEセット: arm NAME on this very line
HERE_ARM_RE = re.compile(r"ここで(\S+?)(?:set|SET|セット)")

# NAMES解除: disarm each name
RELEASE_RE = re.compile(r"(\S+?)解除")

# NAMESセット: arm each name, unless already captured by HERE_ARM_RE
ARM_RE = re.compile(r"(?<!ここで)(\S+?)(?:セット|SET|set)")

NAME_LIST_SPLIT_RE = re.compile(r"[、,]")

# Lines carrying any of these are instructions, never an implicit roster
INSTRUCTION_KEYWORDS_RE = re.compile(
    r"(?:セット|SET|set|解除|オートオン|オートオフ|AUTO[　 ]*O(?:N|FF))",
    re.IGNORECASE,
)


def has_instruction_keywords(text: str) -> bool:
    return INSTRUCTION_KEYWORDS_RE.search(text) is not None
