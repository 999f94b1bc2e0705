"""Field readers shared by both extractors.

WHY: The two formats differ in where the data lives (top level vs.
front matter + embedded block) and in two default literals, but read
metadata, options and line lists the same way. Sharing the readers keeps
the per-format modules down to "find the data, pick the defaults".

RULES:
- Metadata defaults apply when a key is absent or falsy
- Option defaults apply only when a key is absent or null
- Line entries are copied verbatim; only non-mapping entries are rejected
- YAML dates in created/updated become ISO strings (they are opaque strings)
"""

from __future__ import annotations

import datetime
from collections.abc import Mapping, Sequence
from typing import Any, List

import yaml

from lyri_parser.config import (
    DEFAULT_LAYOUT,
    DEFAULT_SHOW_TIMING,
    DEFAULT_SHOW_TONE_MARKS,
    DEFAULT_TITLE,
)
from lyri_parser.core.ir import Layout, Line, Meta, RenderOptions
from lyri_parser.errors import FormatError


def load_yaml_mapping(text: str, source: str, what: str) -> dict:
    """Parse YAML text that must hold a mapping (or nothing at all).

    Raises:
        FormatError: On YAML syntax errors or a non-mapping top level.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise FormatError(f"Failed to parse {what}: {exc}", source) from exc
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise FormatError(
            f"Failed to parse {what}: expected a mapping, got {type(data).__name__}",
            source,
        )
    return dict(data)


def _opaque(value: Any) -> Any:
    if isinstance(value, (datetime.date, datetime.datetime)):
        return value.isoformat()
    return value


def read_meta(data: Mapping[str, Any], default_language: str) -> Meta:
    return Meta(
        title=data.get("title") or DEFAULT_TITLE,
        language=data.get("language") or default_language,
        artist=data.get("artist"),
        album=data.get("album"),
        tags=data.get("tags") or [],
        created=_opaque(data.get("created")),
        updated=_opaque(data.get("updated")),
    )


def _default(value: Any, fallback: Any) -> Any:
    return fallback if value is None else value


def read_options(data: Mapping[str, Any], show_translation_default: bool) -> RenderOptions:
    """Read the four render toggles from a mapping with per-format defaults."""
    layout = _default(data.get("layout"), DEFAULT_LAYOUT)
    try:
        layout = Layout(layout)
    except ValueError:
        # kept as written; the validator rejects it
        pass
    return RenderOptions(
        show_translation=_default(data.get("showTranslation"), show_translation_default),
        show_timing=_default(data.get("showTiming"), DEFAULT_SHOW_TIMING),
        layout=layout,
        show_tone_marks=_default(data.get("showToneMarks"), DEFAULT_SHOW_TONE_MARKS),
    )


def read_lines(entries: Any, source: str, key: str) -> List[Line]:
    """Turn an author line list into Line objects.

    Raises:
        FormatError: If the list is not a sequence or an entry is not a mapping.
    """
    if entries is None:
        return []
    if isinstance(entries, (str, bytes)) or not isinstance(entries, Sequence):
        raise FormatError(f"'{key}' must be a list, got {type(entries).__name__}", source)

    lines = []
    for index, entry in enumerate(entries, start=1):
        if not isinstance(entry, Mapping):
            raise FormatError(
                f"'{key}' entry {index} must be a mapping, got {type(entry).__name__}",
                source,
            )
        lines.append(Line.from_mapping(entry))
    return lines
