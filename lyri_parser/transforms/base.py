"""Transform unit contract for the pipeline.

WHY: Site builders, themes and users plug their own rewrites into the
parser (splitting long lines, formatting romanization, diagnostics).
The pipeline must run any of them in order without knowing what they do.

HOW: A transform unit is any object with a `name` and at least one of
two capabilities:
  transform_document(document) -> Document
  transform_line(line) -> Line | list[Line]
BaseTransform is a convenience base that declares both capabilities as
absent (None); subclasses define the methods they support. Capability
detection is by attribute, so plain objects work too.

RULES:
- Units hold only immutable configuration; no per-document state
- Units return new Documents/Lines rather than mutating their input
- A line rewrite may return a list (including an empty one) to split or drop lines
- To add a built-in unit: subclass BaseTransform, set `name`, register it
  in TRANSFORMS in transforms/__init__.py
"""

from __future__ import annotations

from typing import Any, Callable, List, Optional, Union

from lyri_parser.core.ir import Document, Line

LineResult = Union[Line, List[Line]]


class BaseTransform:
    """Base for transform units; subclasses implement one or both capabilities."""

    name: str = ""

    transform_document: Optional[Callable[[Document], Document]] = None
    transform_line: Optional[Callable[[Line], LineResult]] = None

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r}>"


def document_capability(unit: Any) -> Optional[Callable[[Document], Document]]:
    """Return the unit's document rewrite, or None when it has none."""
    hook = getattr(unit, "transform_document", None)
    return hook if callable(hook) else None


def line_capability(unit: Any) -> Optional[Callable[[Line], LineResult]]:
    """Return the unit's line rewrite, or None when it has none."""
    hook = getattr(unit, "transform_line", None)
    return hook if callable(hook) else None
