"""Structural Validator - the final, fatal-on-violation invariant check.

WHY: Extractors trust the author's line shapes and transforms only
rewrite what they understand. Before a Document leaves the parser
something has to guarantee it is usable: required metadata present,
every line has text, annotations align with graphemes, timings make
sense. This is the single source of truth; nothing downstream re-checks.

HOW: Metadata first, then one pass over the lines in order. For each
line: empty text, value types (jsonschema against LINE_SCHEMA),
alignment, timing. The first failing line is the one reported.

RULES:
- Meta: title non-empty, then language non-empty, then meta/options types
- Each line in order: text non-empty, types, alignment, timing finite and
  non-negative, timing start < end
- Alignment only applies to a non-empty annotation list
- Alignment counts graphemes (core.text.char_count), not code points
- Returns None on success; never coerces or repairs
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any, Dict

import jsonschema

from lyri_parser.core.ir import Document, Line, Timing
from lyri_parser.core.text import char_count
from lyri_parser.errors import ValidationError

_STRING_LIST = {"type": "array", "items": {"type": "string"}}
# YAML reads titles like 1979 as numbers
_SCALAR = {"type": ["string", "number"]}

LINE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["text"],
    "properties": {
        "text": {"type": "string"},
        "ruby": _STRING_LIST,
        "translation": {
            "type": "object",
            "additionalProperties": {"type": "string"},
        },
        "notes": {"type": "string"},
        "timing": {
            "type": "object",
            "required": ["start", "end"],
            "properties": {
                "start": {"type": "number"},
                "end": {"type": "number"},
            },
        },
    },
}

DOCUMENT_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["meta", "options"],
    "properties": {
        "meta": {
            "type": "object",
            "required": ["title", "language", "tags"],
            "properties": {
                "title": _SCALAR,
                "language": {"type": "string"},
                "artist": _SCALAR,
                "album": _SCALAR,
                "tags": _STRING_LIST,
                "created": _SCALAR,
                "updated": _SCALAR,
            },
        },
        "options": {
            "type": "object",
            "properties": {
                "showTranslation": {"type": "boolean"},
                "showTiming": {"type": "boolean"},
                "layout": {"enum": ["vertical", "horizontal"]},
                "showToneMarks": {"type": "boolean"},
            },
        },
    },
}

jsonschema.Draft7Validator.check_schema(DOCUMENT_SCHEMA)
jsonschema.Draft7Validator.check_schema(LINE_SCHEMA)
_DOCUMENT_VALIDATOR = jsonschema.Draft7Validator(DOCUMENT_SCHEMA)
_LINE_VALIDATOR = jsonschema.Draft7Validator(LINE_SCHEMA)


def _location(error: jsonschema.ValidationError, prefix: str = "") -> str:
    parts = [prefix] if prefix else []
    parts.extend(str(p) for p in error.absolute_path)
    return ".".join(parts) or "document"


def _check_document_shape(document: Document) -> None:
    """Raise ValidationError for the first type error in meta or options."""
    instance = {"meta": document.meta.to_dict(), "options": document.options.to_dict()}
    error = jsonschema.exceptions.best_match(_DOCUMENT_VALIDATOR.iter_errors(instance))
    if error is not None:
        raise ValidationError(f"Invalid value at {_location(error)}: {error.message}")


def _as_timing(value: Any) -> Any:
    # transforms may hand back a plain mapping instead of a Timing
    if isinstance(value, Mapping):
        return Timing(start=value.get("start"), end=value.get("end"))
    return value


def _check_line(number: int, line: Line) -> None:
    text = line.text
    if not text:
        raise ValidationError(f"Line {number}: text must not be empty", line_number=number, text=text)

    error = jsonschema.exceptions.best_match(_LINE_VALIDATOR.iter_errors(line.to_dict()))
    if error is not None:
        location = _location(error, prefix=f"lines.{number - 1}")
        raise ValidationError(
            f"Line {number}: invalid value at {location}: {error.message} ({text!r})",
            line_number=number,
            text=text,
        )

    if line.annotation:
        chars = char_count(text)
        tokens = len(line.annotation)
        if tokens != chars:
            raise ValidationError(
                f"Line {number}: annotation count ({tokens}) does not match "
                f"character count ({chars}): \"{text}\"",
                line_number=number,
                text=text,
                char_count=chars,
                annotation_count=tokens,
            )

    timing = _as_timing(line.timing)
    if timing is not None:
        if not (math.isfinite(timing.start) and math.isfinite(timing.end)):
            raise ValidationError(
                f"Line {number}: timing must be a finite number "
                f"(start={timing.start}, end={timing.end}): \"{text}\"",
                line_number=number,
                text=text,
            )
        if timing.start < 0 or timing.end < 0:
            raise ValidationError(
                f"Line {number}: timing must not be negative "
                f"(start={timing.start}, end={timing.end}): \"{text}\"",
                line_number=number,
                text=text,
            )
        if timing.start >= timing.end:
            raise ValidationError(
                f"Line {number}: timing start must be before end "
                f"(start={timing.start}, end={timing.end}): \"{text}\"",
                line_number=number,
                text=text,
            )


def validate(document: Document) -> None:
    """Validate a Document, raising ValidationError on the first violation.

    Args:
        document: The Document produced by the transform pipeline.

    Raises:
        ValidationError: If the document violates a shape rule or a
            structural invariant. Line errors name the 1-based line and
            quote its text.
    """
    if not document.meta.title:
        raise ValidationError("Song title must not be empty")
    if not document.meta.language:
        raise ValidationError("Song language must not be empty")

    _check_document_shape(document)

    for number, line in enumerate(document.lines, start=1):
        _check_line(number, line)
