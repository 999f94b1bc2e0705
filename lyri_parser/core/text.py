"""Grapheme-cluster helpers shared by the line splitter and the validator.

WHY: Lyric text is mostly CJK, often with combining marks or emoji. The
alignment invariant is "one annotation per user-perceived character", so
counting str code points would reject valid lines (e.g. a base letter
plus a combining tone mark) and split them in the wrong place.

HOW: The third-party `regex` module implements Unicode extended grapheme
clusters via the \\X pattern. Both public helpers use the same pattern so
the splitter and the validator can never disagree about a count.

RULES:
- graphemes("".join(graphemes(s))) == graphemes(s)
- char_count(s) == len(graphemes(s))
"""

from __future__ import annotations

from typing import List

import regex

_GRAPHEME_RE = regex.compile(r"\X")


def graphemes(text: str) -> List[str]:
    """Split text into extended grapheme clusters."""
    return _GRAPHEME_RE.findall(text)


def char_count(text: str) -> int:
    """Number of user-perceived characters in text."""
    return len(graphemes(text))
