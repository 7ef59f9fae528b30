#!/usr/bin/env python3
"""Convert a segment JSONL file into plain text or interlinear encoding.

Input is one JSON object per line, ``{"text": ...}`` for plain runs and
``{"text": ..., "ruby": ...}`` for rubied runs.

Output formats:
    plain        Base text only, glosses dropped
    interlinear  Rubied runs wrapped in U+FFF9 / U+FFFA / U+FFFB markers
    jsonl        Normalized segment JSONL (adjacent plain runs merged)

Usage::

    python3 scripts/ruby_encode.py segments.jsonl --format interlinear
    python3 scripts/ruby_encode.py segments.jsonl --format plain --output out.txt
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import orjson

sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from ruby_string import RubyString, load_ruby_string, ruby_string_to_records

log = logging.getLogger("ruby_encode")

FORMATS = ("plain", "interlinear", "jsonl")


def render(rs: RubyString, fmt: str) -> str:
    """Render a RubyString in one of FORMATS."""
    if fmt == "plain":
        return rs.to_plain_text()
    if fmt == "interlinear":
        return rs.to_interlinear_encoding()
    if fmt == "jsonl":
        lines = [orjson.dumps(r).decode("utf-8") for r in ruby_string_to_records(rs)]
        return "".join(line + "\n" for line in lines)
    raise ValueError(f"unknown format {fmt!r}, expected one of {FORMATS}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Render a segment JSONL file as plain or interlinear text",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("input", type=Path, help="Path to segment JSONL file")
    parser.add_argument(
        "--format", choices=FORMATS, default="interlinear",
        help="Output format (default: interlinear)",
    )
    parser.add_argument(
        "--output", type=Path, default=None,
        help="Write output here instead of stdout",
    )
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not args.input.exists():
        log.error("Input not found: %s", args.input)
        return 1

    try:
        rs = load_ruby_string(args.input)
    except (OSError, ValueError) as exc:
        log.error("Failed to load %s: %s", args.input, exc)
        return 1
    log.debug(
        "Loaded %s: %d chars, %d rubies",
        args.input, len(rs.packed_text), len(rs.placements),
    )

    out = render(rs, args.format)
    if args.output is None:
        sys.stdout.write(out)
    else:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(out, encoding="utf-8")
        log.info("Wrote %s output to %s", args.format, args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
