"""Exception types raised by the lyric parsing pipeline.

WHY: Callers (the loader, the CLI, a site builder) need to tell a file
that is not valid YAML/front matter apart from a file that parses but
breaks a structural invariant, while still catching both with one clause.

HOW: ParseError is the common base. FormatError covers syntax problems
found during extraction. ValidationError covers invariant violations
found by the Structural Validator and carries the offending line context.

RULES:
- Fatal for the document; never retried or partially recovered
- FormatError keeps the underlying parser message
- ValidationError line numbers are 1-based
"""

from __future__ import annotations


class ParseError(Exception):
    """Base class for every fatal error raised while parsing a document."""


class FormatError(ParseError):
    """Raised when raw text does not match the syntax of its detected format.

    WHY: A malformed YAML file or front matter block cannot be turned into
    a Document at all; the author has to fix the syntax first.

    HOW: Raised by the extractors, usually chained from a yaml.YAMLError.

    RULES:
    - source: the identifier the text was parsed under (may be empty)
    - message: the underlying parser message, unmodified
    """

    def __init__(self, message: str, source: str = "") -> None:
        self.message = message
        self.source = source
        prefix = f"{source}: " if source else ""
        super().__init__(f"{prefix}{message}")


class ValidationError(ParseError):
    """Raised when a syntactically valid document breaks a structural invariant.

    WHY: Authors need an actionable message: which line, what text, and for
    alignment problems the two counts that disagree.

    HOW: Raised by core.validator.validate() after the transform pipeline.

    RULES:
    - line_number: 1-based index into Document.lines, or None for meta errors
    - text: the literal line text involved, or None
    - char_count / annotation_count: set only for alignment failures
    """

    def __init__(
        self,
        message: str,
        line_number: int | None = None,
        text: object = None,
        char_count: int | None = None,
        annotation_count: int | None = None,
    ) -> None:
        self.message = message
        self.line_number = line_number
        self.text = text
        self.char_count = char_count
        self.annotation_count = annotation_count
        super().__init__(message)
