"""Transform registry - built-in pipeline units by name.

WHY: Configuration files and the CLI refer to built-in transforms by
name. A central dict makes lookup trivial and gives third-party code one
place to see what ships with the parser.

HOW: TRANSFORMS maps names to transform *classes* (not instances).
build_transform() instantiates one with keyword options.

RULES:
- Keys equal each class's `name` attribute
- Third-party units do not need to be registered here to run in a Pipeline
"""

from __future__ import annotations

from typing import Any, Dict

from lyri_parser.transforms.annotation import AnnotationFormatTransform
from lyri_parser.transforms.base import BaseTransform
from lyri_parser.transforms.line_split import LineSplitTransform
from lyri_parser.transforms.pipeline import Pipeline
from lyri_parser.transforms.validation import AnnotationCheckTransform

TRANSFORMS: Dict[str, type] = {
    LineSplitTransform.name: LineSplitTransform,
    AnnotationFormatTransform.name: AnnotationFormatTransform,
    AnnotationCheckTransform.name: AnnotationCheckTransform,
}


def build_transform(name: str, **options: Any) -> BaseTransform:
    """Instantiate a built-in transform by name.

    Raises:
        KeyError: If no built-in transform has that name.
    """
    try:
        cls = TRANSFORMS[name]
    except KeyError:
        raise KeyError(
            f"Unknown transform '{name}'. Available: {', '.join(TRANSFORMS)}"
        ) from None
    return cls(**options)


__all__ = [
    "AnnotationCheckTransform",
    "AnnotationFormatTransform",
    "BaseTransform",
    "LineSplitTransform",
    "Pipeline",
    "TRANSFORMS",
    "build_transform",
]
