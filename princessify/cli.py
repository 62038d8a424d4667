"""
Princessify CLI
===============

Command-line access to the converter.

COMMANDS:
- convert:  Annotate a timeline document
- classify: Show how inference classifies each timeline line

USAGE:
    python -m princessify.cli convert [FILE] [--channel] [--audit]
    python -m princessify.cli classify [FILE] --roster A B C D E
"""
import argparse
import sys
from typing import List, Optional

from .contracts.base import Roster, RosterUndeterminedError
from .core.inference import annotate_entries
from .engine import ConvertOptions, Princessify
from .temporal.scanner import scan_inference_timeline

EXIT_OK = 0
EXIT_NOT_TIMELINE = 1
EXIT_ROSTER_UNDETERMINED = 2


def read_document(path: Optional[str]) -> str:
    """Read FILE, or stdin when no file (or '-') is given."""
    if not path or path == "-":
        return sys.stdin.read()
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def cmd_convert(args) -> int:
    """Annotate a document."""
    document = read_document(args.file)
    converter = Princessify()

    try:
        result = converter.run(document, ConvertOptions(channel_mode=args.channel))
    except RosterUndeterminedError as exc:
        print(exc.guidance, file=sys.stderr)
        return EXIT_ROSTER_UNDETERMINED

    if result.text is None:
        print("[*] Input does not look like a timeline.", file=sys.stderr)
        return EXIT_NOT_TIMELINE

    print(result.text)

    if args.audit:
        print(f"[*] Mode: {result.mode.value}, entries: {result.entry_count}", file=sys.stderr)
        for entry in result.audit:
            line = "-" if entry.line_index is None else entry.line_index
            details = " ".join(f"{k}={v}" for k, v in entry.metadata)
            print(f"    {entry.entry_id} | {entry.event_type.value:<17} | {line} | {details}", file=sys.stderr)

    return EXIT_OK


def cmd_classify(args) -> int:
    """Dump the inference classification of each timeline line."""
    document = read_document(args.file)
    try:
        roster = Roster(members=tuple(args.roster))
    except ValueError as ve:
        print(f"[FAIL] {ve}", file=sys.stderr)
        return EXIT_ROSTER_UNDETERMINED

    lines = document.split("\n")
    entries = annotate_entries(scan_inference_timeline(lines, roster), roster)

    print("LINE | TIME | SUB | ACTOR | ACTION")
    print("-" * 60)
    for entry in entries:
        sub = "yes" if entry.is_sub_entry else ""
        actor = entry.actor_name or "?"
        print(f"{entry.line_index:<4} | {entry.time_text:<4} | {sub:<3} | {actor} | {entry.action.value}")
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Timeline readiness annotator")
    subparsers = parser.add_subparsers(dest="command")

    convert_parser = subparsers.add_parser("convert", help="Annotate a timeline")
    convert_parser.add_argument("file", nargs="?", help="Input file (default: stdin)")
    convert_parser.add_argument("--channel", action="store_true", help="Lenient roster/timeline detection")
    convert_parser.add_argument("--audit", action="store_true", help="Print the audit trail to stderr")

    classify_parser = subparsers.add_parser("classify", help="Show action classification")
    classify_parser.add_argument("file", nargs="?", help="Input file (default: stdin)")
    classify_parser.add_argument("--roster", nargs=5, required=True, metavar="NAME", help="Five party members")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "convert":
        return cmd_convert(args)
    if args.command == "classify":
        return cmd_classify(args)
    parser.print_help()
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
