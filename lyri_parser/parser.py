"""LyricParser - detection, extraction, transforms and validation in one call.

WHY: Callers (a site builder, the CLI, tests) want one entry point that
turns raw file text into a Document they can trust, or an error they can
report per file.

HOW: parse() runs four stages strictly in sequence:
  1. detect_format(source) picks the format from the extension.
  2. The matching extractor from EXTRACTORS builds the Document.
  3. The Pipeline applies every registered transform in order.
  4. validate() enforces the structural invariants.

RULES:
- Either a fully valid Document is returned or a ParseError (or an error
  raised by a transform) propagates; no best-guess results
- Transforms are registered before parse(); registration order is run order
- A LyricParser may be shared across threads when its transforms are stateless
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from lyri_parser.core.detect import detect_format
from lyri_parser.core.ir import Document
from lyri_parser.core.validator import validate
from lyri_parser.extractors import EXTRACTORS
from lyri_parser.transforms.pipeline import Pipeline

logger = logging.getLogger(__name__)


class LyricParser:
    """Parse lyric documents through a configurable transform pipeline."""

    def __init__(self, transforms: Optional[Iterable[Any]] = None) -> None:
        self.pipeline = Pipeline(transforms)

    def register_transform(self, unit: Any) -> None:
        """Append one transform unit to the pipeline."""
        self.pipeline.register(unit)

    def register_transforms(self, units: Iterable[Any]) -> None:
        """Append several transform units, keeping their order."""
        self.pipeline.register_all(units)

    def parse(self, raw_text: str, source: str) -> Document:
        """Parse raw lyric text into a validated Document.

        Args:
            raw_text: The complete file content.
            source: File path or name; its extension selects the format.

        Returns:
            The validated Document.

        Raises:
            FormatError: If the text does not match its format's syntax.
            ValidationError: If the transformed document breaks an invariant.
        """
        fmt = detect_format(source)
        document = EXTRACTORS[fmt](raw_text, source)
        document = self.pipeline.run(document)
        validate(document)
        logger.info(
            "Parsed %s: title=%r, %d lines",
            source, document.meta.title, len(document.lines),
        )
        return document


def create_parser(transforms: Optional[Iterable[Any]] = None) -> LyricParser:
    """Create a LyricParser with the given transforms registered in order."""
    return LyricParser(transforms)


def parse(raw_text: str, source: str) -> Document:
    """Parse with a fresh parser that has no transforms registered."""
    return LyricParser().parse(raw_text, source)
