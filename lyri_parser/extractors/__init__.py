"""Extractor registry - one extraction function per source format.

WHY: The parser dispatches on the detected SourceFormat. A central dict
keeps that dispatch in one place; the formats share no base class, only
the signature `(raw_text, source) -> Document`.

RULES:
- Every SourceFormat member has exactly one entry
- Extractors are pure functions of their arguments (logging aside)
"""

from __future__ import annotations

from typing import Callable, Dict

from lyri_parser.core.detect import SourceFormat
from lyri_parser.core.ir import Document
from lyri_parser.extractors.prose import extract_prose
from lyri_parser.extractors.structured import extract_structured

Extractor = Callable[[str, str], Document]

EXTRACTORS: Dict[SourceFormat, Extractor] = {
    SourceFormat.STRUCTURED_BLOCK: extract_structured,
    SourceFormat.PROSE_WITH_EMBEDDED_BLOCK: extract_prose,
}
