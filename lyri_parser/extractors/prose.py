"""Prose-With-Embedded-Block Extractor: Markdown with front matter.

WHY: Authors who want to write about a song keep the metadata in a YAML
front matter preamble, free prose in the body, and the line data in a
fenced ```yaml block inside that body.

HOW: Three steps:
  1. split_front_matter() separates the `---` delimited preamble from the body.
  2. Metadata and the four render toggles are read from the preamble.
  3. find_embedded_block() locates the first ```yaml fence in the body;
     its `lines` list becomes the Document lines.

RULES:
- language defaults to PROSE_DEFAULT_LANGUAGE ("zh-CN"), not the YAML default
- showTranslation defaults to True here (False in the YAML format)
- Malformed preamble → FormatError (fatal)
- Missing block → WARNING, zero lines
- Malformed block → WARNING, zero lines (not fatal, unlike the preamble)
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional, Tuple

from lyri_parser.config import PROSE_DEFAULT_LANGUAGE, PROSE_SHOW_TRANSLATION
from lyri_parser.core.ir import Document, Line
from lyri_parser.errors import FormatError
from lyri_parser.extractors.common import load_yaml_mapping, read_lines, read_meta, read_options

logger = logging.getLogger(__name__)

_DELIMITER_RE = re.compile(r"^---[ \t]*$")

# First ```yaml (or ```yml) fence; the block ends at the next line opening with ```
_EMBEDDED_BLOCK_RE = re.compile(
    r"^```[ \t]*ya?ml[ \t]*\n(.*?)^```",
    re.MULTILINE | re.DOTALL,
)


def split_front_matter(raw_text: str, source: str = "") -> Tuple[str, str]:
    """Split a document into (preamble, body).

    A document not opening with `---` has an empty preamble.

    Raises:
        FormatError: If the opening delimiter is never closed.
    """
    text = raw_text.lstrip("\ufeff").replace("\r\n", "\n")
    lines = text.split("\n")
    if not lines or not _DELIMITER_RE.match(lines[0]):
        return "", text

    for i in range(1, len(lines)):
        if _DELIMITER_RE.match(lines[i]):
            return "\n".join(lines[1:i]), "\n".join(lines[i + 1:])

    raise FormatError("Failed to parse front matter: missing closing '---'", source)


def find_embedded_block(body: str) -> Optional[str]:
    """Return the content of the first ```yaml fenced block, or None."""
    match = _EMBEDDED_BLOCK_RE.search(body)
    if match is None:
        return None
    return match.group(1)


def _read_embedded_lines(body: str, source: str) -> List[Line]:
    block = find_embedded_block(body)
    if block is None:
        logger.warning("No YAML block found in markdown file %s", source or "<string>")
        return []

    try:
        data = load_yaml_mapping(block, source, "YAML block")
        return read_lines(data.get("lines"), source, "lines")
    except FormatError as exc:
        logger.warning("Ignoring malformed YAML block in %s: %s", source or "<string>", exc.message)
        return []


def extract_prose(raw_text: str, source: str = "") -> Document:
    """Extract a Document from a Markdown file with an embedded YAML block.

    Args:
        raw_text: The complete file content.
        source: Identifier used in error and warning messages.

    Returns:
        Document with metadata from the preamble and lines from the first
        embedded YAML block (empty when there is no usable block).

    Raises:
        FormatError: If the front matter preamble is malformed.
    """
    preamble, body = split_front_matter(raw_text, source)
    data = load_yaml_mapping(preamble, source, "front matter")

    meta = read_meta(data, PROSE_DEFAULT_LANGUAGE)
    lines = _read_embedded_lines(body, source)
    logger.debug("Parsed markdown %s: title=%r, %d lines", source, meta.title, len(lines))

    return Document(
        meta=meta,
        lines=lines,
        options=read_options(data, PROSE_SHOW_TRANSLATION),
        source=source,
    )
