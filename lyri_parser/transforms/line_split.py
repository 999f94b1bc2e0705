"""Line-splitting transform ("auto-line-break").

WHY: Long lyric lines overflow vertical layouts. Splitting them by hand
means also splitting the per-character annotation list, which authors
get wrong. This transform does both in lock-step so every segment keeps
one annotation per character.

HOW: Lines longer than max_length graphemes are walked one grapheme at a
time. A segment is closed when it reaches max_length graphemes or, with
break_on_punctuation, right after a clause-ending mark (。！？，、；：).
The annotation list is sliced with the same indices as the text.

RULES:
- Lines with max_length graphemes or fewer pass through unchanged
- Concatenating segment texts reproduces the original text exactly
- Concatenating segment annotations reproduces the original annotation
- A segment with an empty annotation slice gets annotation=None
- A line whose annotation is not a list is returned unsplit
- translation, note and timing are copied onto every segment unchanged
"""

from __future__ import annotations

import dataclasses
from typing import List, Optional

from lyri_parser.config import (
    BREAK_PUNCTUATION,
    LINE_SPLIT_BREAK_ON_PUNCTUATION,
    LINE_SPLIT_MAX_LENGTH,
)
from lyri_parser.core.ir import Line
from lyri_parser.core.text import graphemes
from lyri_parser.transforms.base import BaseTransform


class LineSplitTransform(BaseTransform):
    """Split lines longer than max_length graphemes into several lines."""

    name = "auto-line-break"

    def __init__(
        self,
        max_length: int = LINE_SPLIT_MAX_LENGTH,
        break_on_punctuation: bool = LINE_SPLIT_BREAK_ON_PUNCTUATION,
    ) -> None:
        if max_length < 1:
            raise ValueError(f"max_length must be at least 1, got {max_length}")
        self.max_length = max_length
        self.break_on_punctuation = break_on_punctuation

    def transform_line(self, line: Line) -> List[Line]:
        if not isinstance(line.text, str):
            return [line]
        if line.annotation is not None and not isinstance(line.annotation, list):
            # non-list ruby passes through whole
            return [line]
        chars = graphemes(line.text)
        if len(chars) <= self.max_length:
            return [line]
        return [
            self._segment(line, chars, start, end)
            for start, end in self._boundaries(chars)
        ]

    def _boundaries(self, chars: List[str]) -> List[tuple]:
        """Greedy (start, end) grapheme index pairs covering chars."""
        bounds = []
        start = 0
        for i, char in enumerate(chars):
            length = i - start + 1
            if length >= self.max_length or (
                self.break_on_punctuation and char in BREAK_PUNCTUATION
            ):
                bounds.append((start, i + 1))
                start = i + 1
        if start < len(chars):
            bounds.append((start, len(chars)))
        return bounds

    @staticmethod
    def _segment(line: Line, chars: List[str], start: int, end: int) -> Line:
        annotation: Optional[list] = None
        if isinstance(line.annotation, list):
            # surplus tokens of a misaligned line stay on the last segment
            stop = None if end == len(chars) else end
            annotation = line.annotation[start:stop] or None
        return dataclasses.replace(
            line,
            text="".join(chars[start:end]),
            annotation=annotation,
        )
