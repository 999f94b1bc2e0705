"""Format detection by source identifier.

WHY: The two lyric formats need different extractors, and the only thing
the caller always has is a file name or path.

HOW: Compare the lowercased extension against STRUCTURED_EXTENSIONS.
Anything else, including no extension, is a prose document.

RULES:
- Pure function of the identifier string; no I/O
- Never raises; unknown extensions fall back to PROSE_WITH_EMBEDDED_BLOCK
"""

from __future__ import annotations

import enum
import logging
import posixpath

from lyri_parser.config import STRUCTURED_EXTENSIONS

logger = logging.getLogger(__name__)


class SourceFormat(str, enum.Enum):
    """The two supported lyric document formats."""

    STRUCTURED_BLOCK = "structured_block"
    PROSE_WITH_EMBEDDED_BLOCK = "prose_with_embedded_block"


def detect_format(source: str) -> SourceFormat:
    """Classify a source identifier (path or file name) into a SourceFormat."""
    # Windows separators are normalised so "C:\\a\\b.yml" keeps its extension
    name = posixpath.basename(str(source).replace("\\", "/"))
    ext = posixpath.splitext(name)[1].lower()
    fmt = (
        SourceFormat.STRUCTURED_BLOCK
        if ext in STRUCTURED_EXTENSIONS
        else SourceFormat.PROSE_WITH_EMBEDDED_BLOCK
    )
    logger.debug("Detected %s as %s", source, fmt.value)
    return fmt
