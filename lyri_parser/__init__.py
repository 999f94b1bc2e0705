"""Lyri parser - lyric document parsing and transformation pipeline.

WHY: Lyric sites are written as YAML files or Markdown files with an
embedded YAML block, with a romanization token under every character.
Renderers need one validated shape regardless of the source format, and
site owners need to plug in their own rewrites.

HOW: Four-stage pipeline - detect (by extension), extract (per-format
function into the Document IR), transform (ordered pluggable units),
validate (fatal structural invariants). Each stage is independently
testable.

RULES:
- parse() returns a fully valid Document or raises; never a partial result
- Every transform consumes and produces the same Document IR
- Adding a transform = one new unit registered on the parser, no core changes
"""

__version__ = "0.1.0"

from lyri_parser.core.detect import SourceFormat, detect_format
from lyri_parser.core.ir import Document, Layout, Line, Meta, RenderOptions, Timing
from lyri_parser.core.validator import validate
from lyri_parser.errors import FormatError, ParseError, ValidationError
from lyri_parser.parser import LyricParser, create_parser, parse

__all__ = [
    "Document",
    "FormatError",
    "Layout",
    "Line",
    "LyricParser",
    "Meta",
    "ParseError",
    "RenderOptions",
    "SourceFormat",
    "Timing",
    "ValidationError",
    "create_parser",
    "detect_format",
    "parse",
    "validate",
]
