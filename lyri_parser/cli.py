"""Command-line checker for lyric files.

WHY: Authors want to know whether their lyric files parse before a site
build fails on them. The CLI runs the full parser over files or folders
and reports every broken file instead of stopping at the first one.

HOW: Uses argparse to accept paths and transform options. Directories
are expanded with collect_lyric_files(). Files are parsed concurrently
by parse_files() with one shared LyricParser. Status messages go to
stderr; with --json the validated documents are printed to stdout.

RULES:
- Positional arguments: one or more files or directories
- Transform order: validation, ruby-formatter, auto-line-break
- --no-split disables the line splitter entirely
- Exit code 0 when every file parses, 1 when any fails, 2 when no files found
- Status output goes to stderr (not stdout)
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional

from lyri_parser import __version__
from lyri_parser.config import CLI_MAX_LINE_LENGTH, LOG_LEVEL
from lyri_parser.loader import collect_lyric_files, parse_files
from lyri_parser.parser import LyricParser
from lyri_parser.transforms import (
    AnnotationCheckTransform,
    AnnotationFormatTransform,
    LineSplitTransform,
)


def _status(msg: str) -> None:
    """Print a status message to stderr so stdout stays pipeable."""
    print(msg, file=sys.stderr, flush=True)


def _expand_paths(raw_paths: List[str]) -> List[Path]:
    """Turn CLI path arguments into a de-duplicated list of files."""
    files: List[Path] = []
    seen = set()
    for raw in raw_paths:
        path = Path(raw)
        candidates = collect_lyric_files(path) if path.is_dir() else [path]
        for candidate in candidates:
            key = candidate.resolve()
            if key not in seen:
                seen.add(key)
                files.append(candidate)
    return files


def build_transforms(args: argparse.Namespace) -> List[Any]:
    """Build the transform list selected by the CLI flags, in run order."""
    transforms: List[Any] = [
        AnnotationCheckTransform(),
        AnnotationFormatTransform(strip_trailing_digit=args.strip_tone_digits),
    ]
    if not args.no_split:
        transforms.append(LineSplitTransform(
            max_length=args.max_length,
            break_on_punctuation=args.break_on_punctuation,
        ))
    return transforms


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError("must be at least 1")
    return number


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    Kept separate from main() so tests can inspect defaults without
    touching the file system.
    """
    parser = argparse.ArgumentParser(
        prog="lyri-check",
        description="Parse and validate lyric files (.yaml, .yml, .md).",
    )

    parser.add_argument(
        "paths",
        nargs="+",
        help="Lyric files or directories to check.",
    )

    parser.add_argument(
        "--max-length",
        type=_positive_int,
        default=CLI_MAX_LINE_LENGTH,
        help="Maximum characters per line before splitting (default: %(default)s).",
    )

    parser.add_argument(
        "--break-on-punctuation",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Split lines after clause-ending punctuation (default: %(default)s).",
    )

    parser.add_argument(
        "--no-split",
        action="store_true",
        help="Do not split long lines.",
    )

    parser.add_argument(
        "--strip-tone-digits",
        action="store_true",
        help="Remove trailing tone numbers (1-6) from annotations.",
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the parsed documents as JSON to stdout.",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show INFO level log messages.",
    )

    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s {}".format(__version__),
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for ``lyri-check`` and ``python -m lyri_parser``.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Always exits via sys.exit with the documented exit code
    """
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else LOG_LEVEL,
        format="%(levelname)s %(name)s: %(message)s",
    )

    files = _expand_paths(args.paths)
    if not files:
        _status("No lyric files found.")
        sys.exit(2)

    parser = LyricParser(build_transforms(args))
    results = parse_files(files, parser)

    failed = [r for r in results if not r.ok]
    for result in results:
        if result.ok:
            _status("OK    {} ({} lines)".format(result.path, len(result.document.lines)))
        else:
            _status("FAIL  {}: {}".format(result.path, result.error))

    if args.json:
        payload = {
            str(r.path): r.document.to_dict()
            for r in results if r.ok
        }
        print(json.dumps(payload, ensure_ascii=False, indent=2))

    _status("")
    _status("Checked {} file(s): {} ok, {} failed".format(
        len(results), len(results) - len(failed), len(failed),
    ))
    sys.exit(1 if failed else 0)


if __name__ == "__main__":
    main()
