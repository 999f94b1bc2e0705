"""Structured-Block Extractor: whole-file YAML lyric documents.

WHY: The simplest authoring format is one YAML file holding metadata,
an `options` mapping and a `lyrics` list. This module turns that file
into the Document IR.

HOW: Load the whole text with yaml.safe_load, then read metadata from
the top level, RenderOptions from `options` and lines from `lyrics`.

RULES:
- title defaults to "Untitled", language to STRUCTURED_DEFAULT_LANGUAGE ("zh-jyut")
- showTranslation defaults to False (the prose format defaults to True)
- Malformed YAML raises FormatError and is never recovered here
- An empty file is an empty mapping: every default applies, zero lines
"""

from __future__ import annotations

from lyri_parser.config import STRUCTURED_DEFAULT_LANGUAGE, STRUCTURED_SHOW_TRANSLATION
from lyri_parser.core.ir import Document
from lyri_parser.errors import FormatError
from lyri_parser.extractors.common import load_yaml_mapping, read_lines, read_meta, read_options


def extract_structured(raw_text: str, source: str = "") -> Document:
    """Extract a Document from a whole-file YAML lyric document.

    Args:
        raw_text: The complete file content.
        source: Identifier used in error messages.

    Returns:
        Document with metadata, unvalidated lines and render options.

    Raises:
        FormatError: If the YAML is malformed or not shaped as expected.
    """
    data = load_yaml_mapping(raw_text, source, "YAML")

    options = data.get("options") or {}
    if not isinstance(options, dict):
        raise FormatError(f"'options' must be a mapping, got {type(options).__name__}", source)

    return Document(
        meta=read_meta(data, STRUCTURED_DEFAULT_LANGUAGE),
        lines=read_lines(data.get("lyrics"), source, "lyrics"),
        options=read_options(options, STRUCTURED_SHOW_TRANSLATION),
        source=source,
    )
