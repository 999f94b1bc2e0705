"""Annotation check transform ("validation").

WHY: A misaligned annotation list is easiest to diagnose before the
line splitter cuts it into pieces. This pass reports mismatches early
without failing the parse; the Structural Validator is the fatal check.

RULES:
- Never modifies the document
- Logs one WARNING per mismatched line, with its 1-based number
- Lines whose ruby is not a list are skipped, never raised on
"""

from __future__ import annotations

import logging

from lyri_parser.core.ir import Document
from lyri_parser.core.text import char_count
from lyri_parser.transforms.base import BaseTransform

logger = logging.getLogger(__name__)


class AnnotationCheckTransform(BaseTransform):
    """Warn about lines whose annotation count differs from their character count."""

    name = "validation"

    def transform_document(self, document: Document) -> Document:
        for number, line in enumerate(document.lines, start=1):
            # malformed ruby is left for the Structural Validator to reject
            if not isinstance(line.annotation, list) or not line.annotation:
                continue
            if not isinstance(line.text, str):
                continue
            chars = char_count(line.text)
            tokens = len(line.annotation)
            if tokens != chars:
                logger.warning(
                    'Line %d annotation count mismatch: "%s" (%d characters, %d annotations)',
                    number, line.text, chars, tokens,
                )
        return document
