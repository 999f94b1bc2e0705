"""Annotation-formatting transform ("ruby-formatter").

WHY: Romanization is often typed with tone numbers ("nei5 hou2"). Some
sites show them, some strip them, some convert them to diacritics. This
transform rewrites each annotation token without touching the text.

HOW: Every string token goes through two optional steps:
  1. strip_trailing_digit - drop a single trailing tone digit 1-6.
  2. apply_tone_marks - hand the token to a caller-supplied converter
     (numeral → diacritic). Without a converter this step is a no-op.

RULES:
- Token count never changes, so alignment is preserved
- The digit is only stripped when not preceded by another digit, which
  makes repeated application a no-op ("nei5" → "nei" → "nei")
- Non-string tokens are passed through for the validator to reject
"""

from __future__ import annotations

import dataclasses
import re
from typing import Any, Callable, Optional

from lyri_parser.core.ir import Line
from lyri_parser.transforms.base import BaseTransform

_TONE_DIGIT_RE = re.compile(r"(?<![0-9])[1-6]$")


def strip_tone_digit(token: str) -> str:
    """Remove one trailing tone digit (1-6) from a romanization token."""
    return _TONE_DIGIT_RE.sub("", token)


class AnnotationFormatTransform(BaseTransform):
    """Rewrite annotation tokens one by one."""

    name = "ruby-formatter"

    def __init__(
        self,
        strip_trailing_digit: bool = False,
        apply_tone_marks: bool = True,
        tone_mark_converter: Optional[Callable[[str], str]] = None,
    ) -> None:
        self.strip_trailing_digit = strip_trailing_digit
        self.apply_tone_marks = apply_tone_marks
        self.tone_mark_converter = tone_mark_converter

    def format_token(self, token: Any) -> Any:
        if not isinstance(token, str):
            return token
        if self.strip_trailing_digit:
            token = strip_tone_digit(token)
        if self.apply_tone_marks and self.tone_mark_converter is not None:
            token = self.tone_mark_converter(token)
        return token

    def transform_line(self, line: Line) -> Line:
        if not isinstance(line.annotation, list):
            return line
        return dataclasses.replace(
            line,
            annotation=[self.format_token(token) for token in line.annotation],
        )
