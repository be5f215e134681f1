from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Sequence

import rtf2text
from rtf2text.extractors.data_types import ExtractionInterface
from rtf2text.extractors.serialization import serialize_extraction

NEWLINES = {
    "lf": "\n",
    "crlf": "\r\n",
    "cr": "\r",
}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rtf2text",
        description="Extract the text of an RTF file and emit it to stdout (or JSON with --json).",
    )
    parser.add_argument(
        "path",
        type=Path,
        help="Path to the RTF file to extract.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Emit structured JSON (text, paragraphs, styles, metadata) instead of plain text.",
    )
    parser.add_argument(
        "--newline",
        choices=sorted(NEWLINES),
        default="lf",
        help="Line break written for paragraphs, line breaks and table rows (default: lf).",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log parser progress to stderr.",
    )
    return parser


def _serialize_results(results: list[ExtractionInterface]) -> dict | list[dict]:
    if len(results) == 1:
        return serialize_extraction(results[0])
    return [serialize_extraction(result) for result in results]


def _serialize_full_text(results: list[ExtractionInterface]) -> str:
    return "\n\n".join(result.get_full_text().rstrip() for result in results).rstrip()


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    try:
        args, unknown = parser.parse_known_args(argv)
    except SystemExit as exc:
        code = exc.code if isinstance(exc.code, int) else 1
        return code

    if unknown:
        unknown_str = " ".join(unknown)
        print(
            f"rtf2text: warning: unsupported arguments: {unknown_str}",
            file=sys.stderr,
        )
        return 1

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr)

    try:
        results = list(rtf2text.read_file(args.path, newline=NEWLINES[args.newline]))
        if not results:
            raise RuntimeError(f"No extraction results for {args.path}")
        if args.json:
            payload = _serialize_results(results)
            json.dump(payload, sys.stdout)
            sys.stdout.write("\n")
        else:
            sys.stdout.write(_serialize_full_text(results))
            sys.stdout.write("\n")
        return 0
    except Exception as exc:
        print(f"rtf2text: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
