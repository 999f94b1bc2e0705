"""Intermediate representation dataclasses for parsed lyric documents.

WHY: Lyric files come in two shapes (whole-file YAML, Markdown with front
matter and an embedded YAML block). Transforms, the validator and any
downstream renderer should not care which shape a file had. The IR is
the single, well-typed form that every stage reads and writes.

HOW: Five dataclasses and one enum form a hierarchy:
  Timing        - optional start/end interval of a line
  Line          - one lyric line: text, per-character annotation, extras
  Meta          - document-level metadata (title, language, tags, ...)
  RenderOptions - presentation hints for the renderer
  Document      - Meta + ordered Lines + RenderOptions

RULES:
- Line values are stored as the author wrote them; the validator enforces types
- annotation[i] belongs to the i-th grapheme of text, never to a code unit
- Transforms return new Documents/Lines (dataclasses.replace), not mutated ones
- to_dict() uses the author-facing key names (ruby, notes, showTranslation, ...)
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from lyri_parser.config import (
    DEFAULT_LAYOUT,
    DEFAULT_SHOW_TIMING,
    DEFAULT_SHOW_TONE_MARKS,
    STRUCTURED_SHOW_TRANSLATION,
)


class Layout(str, enum.Enum):
    """Layout orientation hint for renderers."""

    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"


@dataclass(frozen=True)
class Timing:
    """Time interval of a line, in seconds.

    RULES:
    - start >= 0, end >= 0 and start < end (checked by the validator, not here)
    """

    start: Any
    end: Any

    def to_dict(self) -> Dict[str, Any]:
        return {"start": self.start, "end": self.end}


@dataclass
class Line:
    """A single lyric line.

    WHY: Every stage of the pipeline works line by line; the line is the
    unit the alignment invariant is defined on.

    RULES:
    - text: user-perceived characters (grapheme clusters count, not code points)
    - annotation: one token per grapheme of text, or None
    - translation: language tag → translated line, or None
    - note: free-text note, or None
    - timing: Timing, or the raw author value when it was not a mapping
    """

    text: Any
    annotation: Optional[List[Any]] = None
    translation: Optional[Dict[str, Any]] = None
    note: Optional[Any] = None
    timing: Optional[Any] = None

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "Line":
        """Build a Line from an author mapping without coercing any value."""
        timing = raw.get("timing")
        if isinstance(timing, Mapping):
            timing = Timing(start=timing.get("start"), end=timing.get("end"))
        return cls(
            text=raw.get("text", ""),
            annotation=raw.get("ruby"),
            translation=raw.get("translation"),
            note=raw.get("notes"),
            timing=timing,
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"text": self.text}
        if self.annotation is not None:
            out["ruby"] = list(self.annotation) if isinstance(self.annotation, list) else self.annotation
        if self.translation is not None:
            out["translation"] = dict(self.translation) if isinstance(self.translation, Mapping) else self.translation
        if self.note is not None:
            out["notes"] = self.note
        if self.timing is not None:
            out["timing"] = self.timing.to_dict() if isinstance(self.timing, Timing) else self.timing
        return out


@dataclass
class Meta:
    """Document-level metadata.

    RULES:
    - title and language must be non-empty after extraction (validator)
    - tags keeps author order and may be empty
    - created / updated are opaque strings, never parsed as dates
    """

    title: Any
    language: Any
    artist: Optional[Any] = None
    album: Optional[Any] = None
    tags: List[Any] = field(default_factory=list)
    created: Optional[Any] = None
    updated: Optional[Any] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"title": self.title, "language": self.language}
        for key in ("artist", "album", "created", "updated"):
            value = getattr(self, key)
            if value is not None:
                out[key] = value
        out["tags"] = list(self.tags) if isinstance(self.tags, list) else self.tags
        return out


@dataclass(frozen=True)
class RenderOptions:
    """Presentation hints consumed by renderers; no invariant ties them to lines."""

    show_translation: bool = STRUCTURED_SHOW_TRANSLATION
    show_timing: bool = DEFAULT_SHOW_TIMING
    layout: Layout = Layout(DEFAULT_LAYOUT)
    show_tone_marks: bool = DEFAULT_SHOW_TONE_MARKS

    def to_dict(self) -> Dict[str, Any]:
        layout = self.layout.value if isinstance(self.layout, Layout) else self.layout
        return {
            "showTranslation": self.show_translation,
            "showTiming": self.show_timing,
            "layout": layout,
            "showToneMarks": self.show_tone_marks,
        }


@dataclass
class Document:
    """The complete intermediate representation of one lyric file.

    WHY: This is what extractors produce, what every transform receives and
    returns, and what the validator signs off on before it reaches a caller.

    RULES:
    - meta: exactly one Meta
    - lines: ordered; may be empty (prose file without an embedded block)
    - options: RenderOptions with per-format defaults already applied
    - source: the identifier the document was parsed from ("" if unknown)
    """

    meta: Meta
    lines: List[Line] = field(default_factory=list)
    options: RenderOptions = field(default_factory=RenderOptions)
    source: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Plain JSON-compatible form using the author-facing key names."""
        return {
            "meta": self.meta.to_dict(),
            "lines": [line.to_dict() for line in self.lines],
            "options": self.options.to_dict(),
        }
