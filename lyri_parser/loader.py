"""File discovery and batch parsing around the LyricParser.

WHY: The parser itself only sees strings. Building a site, or checking a
folder of lyrics, needs the surrounding chores: find the lyric files,
read them, parse many at once, keep going when one is broken, and derive
URL slugs from titles.

HOW: collect_lyric_files() walks a directory for *.yaml, *.yml and *.md
while skipping build/documentation folders and project files.
parse_files() parses files on a thread pool with one shared parser and
returns one ParseResult per path, in input order.

RULES:
- Files are read as UTF-8
- A failing file never stops the batch; its error is kept on its result
- Only ParseError and OSError are collected; anything else propagates
- Discovery output is sorted for stable builds
"""

from __future__ import annotations

import fnmatch
import logging
import re
import unicodedata
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional

from lyri_parser.config import IGNORED_DIRECTORIES, IGNORED_FILENAMES, LYRIC_FILE_PATTERNS
from lyri_parser.core.ir import Document
from lyri_parser.errors import ParseError
from lyri_parser.parser import LyricParser

logger = logging.getLogger(__name__)

_SLUG_INVALID_RE = re.compile(r"[^a-z0-9\u4e00-\u9fa5]")
_SLUG_DASHES_RE = re.compile(r"-+")


@dataclass
class ParseResult:
    """Outcome of parsing one file: a Document or the error that stopped it."""

    path: Path
    document: Optional[Document] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _is_ignored(path: Path, root: Path) -> bool:
    relative = path.relative_to(root)
    if any(part in IGNORED_DIRECTORIES for part in relative.parts[:-1]):
        return True
    if len(relative.parts) > 1:
        return False
    # project files are only skipped at the top level
    name = relative.name
    return name in IGNORED_FILENAMES or fnmatch.fnmatch(name, "*.config.*")


def collect_lyric_files(src_dir: str | Path) -> List[Path]:
    """Find lyric files under src_dir, skipping build and project files.

    Args:
        src_dir: Directory to search recursively.

    Returns:
        Sorted list of absolute paths.
    """
    root = Path(src_dir).resolve()
    logger.debug("Searching for lyric files in %s", root)

    found = set()
    for pattern in LYRIC_FILE_PATTERNS:
        for path in root.rglob(pattern):
            if path.is_file() and not _is_ignored(path, root):
                found.add(path)

    files = sorted(found)
    logger.info("Found %d lyric files in %s", len(files), root)
    return files


def parse_file(path: str | Path, parser: Optional[LyricParser] = None) -> Document:
    """Read a file as UTF-8 and parse it.

    Raises:
        OSError: If the file cannot be read.
        ParseError: If the content does not parse or validate.
    """
    parser = parser or LyricParser()
    path = Path(path)
    return parser.parse(path.read_text(encoding="utf-8"), str(path))


def parse_files(
    paths: Iterable[str | Path],
    parser: Optional[LyricParser] = None,
    max_workers: Optional[int] = None,
) -> List[ParseResult]:
    """Parse many files concurrently, collecting per-file errors.

    Args:
        paths: Files to parse.
        parser: Shared parser; its transforms must be stateless.
        max_workers: Thread pool size (ThreadPoolExecutor default if None).

    Returns:
        One ParseResult per path, in the order given.
    """
    parser = parser or LyricParser()
    path_list = [Path(p) for p in paths]

    def _parse_one(path: Path) -> ParseResult:
        try:
            return ParseResult(path=path, document=parse_file(path, parser))
        except (ParseError, OSError) as exc:
            logger.error("Failed to parse %s: %s", path, exc)
            return ParseResult(path=path, error=exc)

    if not path_list:
        return []
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        return list(pool.map(_parse_one, path_list))


def generate_slug(title: str) -> str:
    """Derive a URL slug from a song title.

    Lowercases, drops combining marks, keeps a-z, 0-9 and CJK ideographs,
    and turns everything else into single dashes.
    """
    text = unicodedata.normalize("NFD", title.lower())
    text = "".join(ch for ch in text if not unicodedata.combining(ch))
    text = _SLUG_INVALID_RE.sub("-", text)
    text = _SLUG_DASHES_RE.sub("-", text)
    return text.strip("-")
