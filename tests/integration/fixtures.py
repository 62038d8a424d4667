"""
Integration Test Fixtures

Fixed documents and their expected conversions.
All fixtures are explicit - no random generation.
"""


# =============================================================================
# EXISTING MODE
# =============================================================================

EXISTING_PARTY_DOC = "\n".join([
    "",
    "@party A B C D E",
    "",
    "1:30 開始 [◯ー◯◯ー]",
    "1:20 C [◯ー◯ーー]",
    "1:10 A [ーー◯ーー]",
    "",
])

EXISTING_PARTY_EXPECTED = "\n".join([
    "",
    "@party A B C D E",
    "",
    "1:30 開始 [〇ー〇〇ー]",
    "1:20 C [〇ー〇❌ー]",
    "1:10 A [❌ー〇ーー]",
    "",
])

EXISTING_ARMING_DOC = "\n".join([
    "1:30 開始 [ーーーーー]",
    "1:20 A [◯ーーーー]",
    "1:10 B [◯◯ーーー]",
])

EXISTING_ARMING_EXPECTED = "\n".join([
    "1:30 開始 [ーーーーー]",
    "1:20 A [⭕ーーーー]",
    "1:10 B [〇⭕ーーー]",
])

EXISTING_AUTO_DOC = "\n".join([
    "@party ヴルム ルイズ ユイ クローチェ アングレ",
    "",
    "1:13 ヴルム [OOOOX]",
    "1:05 ルイズ [XOOXX]",
    "1:04 ユイ ユイが左向いたら",
    "1:00 ヴルム [XOOOX]",
    "0:52 クローチェ オートオン",
    "0:47 ヴルム",
    "0:43 ユイ オートオフ",
])

EXISTING_AUTO_EXPECTED = "\n".join([
    "@party ヴルム ルイズ ユイ クローチェ アングレ",
    "",
    "1:13 ヴルム [〇〇〇〇ー]⬛",
    "1:05 ルイズ [❌〇〇❌ー]⬛",
    "1:04 ユイ ユイが左向いたら [ー〇〇ーー]⬛",
    "1:00 ヴルム [ー〇〇⭕ー]⬛",
    "0:52 クローチェ オートオン [ー〇〇〇ー]👉✅",
    "0:47 ヴルム [ー〇〇〇ー]✅",
    "0:43 ユイ オートオフ [ー〇〇〇ー]👉⬛",
])


# =============================================================================
# INFERENCE MODE
# =============================================================================

INFERENCE_DOC = "\n".join([
    "@dango A B C D E",
    "1:20 A",
    "1:10 B #mark",
])

INFERENCE_EXPECTED = "\n".join([
    "1:30 開始 [ーーーーー]",
    "",
    "🌟1:20 A [ー⭕ーーー]",
    "1:10 B #mark [ー❌ーーー]",
])

CHANNEL_DOC = "\n".join([
    "クルル リノ ユイ ペコ キャル",
    "",
    "1:20 クルル 手動発動",
    "1:10 リノ #通常cl",
])

CHANNEL_EXPECTED = "\n".join([
    "1:30 開始 [ーーーーー]",
    "",
    "🌟1:20 クルル 手動発動 [ー⭕ーーー]",
    "1:10 リノ #通常cl [ー❌ーーー]",
])
