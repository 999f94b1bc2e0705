"""Ordered transform pipeline.

WHY: Transforms depend on each other's output (a splitter should see
formatted annotations, a diagnostic pass should see the original lines),
so they must run one after another in the order the caller chose.

HOW: Pipeline keeps a list of registered units. run() threads the
working Document through each unit: first its document rewrite (if any),
then its line rewrite mapped over every line with list results flattened.

RULES:
- Registration order is execution order; nothing is reordered
- Each unit receives the previous unit's output, never the original
- Exceptions raised by a unit propagate unchanged
- The pipeline holds no per-document state; one instance may be shared
  across threads as long as its units are stateless
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Any, Iterable, List, Optional

from lyri_parser.core.ir import Document, Line
from lyri_parser.transforms.base import document_capability, line_capability

logger = logging.getLogger(__name__)


def _unit_name(unit: Any) -> str:
    return getattr(unit, "name", "") or type(unit).__name__


class Pipeline:
    """An ordered sequence of transform units."""

    def __init__(self, units: Optional[Iterable[Any]] = None) -> None:
        self._units: List[Any] = []
        if units:
            self.register_all(units)

    def register(self, unit: Any) -> None:
        """Append a unit to the end of the pipeline.

        Raises:
            TypeError: If the unit exposes neither capability.
        """
        if document_capability(unit) is None and line_capability(unit) is None:
            raise TypeError(
                f"Transform {_unit_name(unit)!r} implements neither "
                "transform_document nor transform_line"
            )
        self._units.append(unit)

    def register_all(self, units: Iterable[Any]) -> None:
        for unit in units:
            self.register(unit)

    @property
    def transforms(self) -> List[Any]:
        """Registered units in execution order (a copy)."""
        return list(self._units)

    def get(self, name: str) -> Optional[Any]:
        """First registered unit with the given name, or None."""
        for unit in self._units:
            if getattr(unit, "name", None) == name:
                return unit
        return None

    def __len__(self) -> int:
        return len(self._units)

    def run(self, document: Document) -> Document:
        """Apply every registered unit in order and return the final Document."""
        for unit in self._units:
            name = _unit_name(unit)

            rewrite = document_capability(unit)
            if rewrite is not None:
                document = rewrite(document)
                logger.debug("Transform %s rewrote document (%d lines)", name, len(document.lines))

            rewrite_line = line_capability(unit)
            if rewrite_line is not None:
                lines: List[Line] = []
                for line in document.lines:
                    result = rewrite_line(line)
                    if isinstance(result, list):
                        lines.extend(result)
                    else:
                        lines.append(result)
                document = dataclasses.replace(document, lines=lines)
                logger.debug("Transform %s rewrote lines (%d lines)", name, len(lines))

        return document
