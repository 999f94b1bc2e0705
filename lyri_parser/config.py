"""Configuration constants, format defaults, and .env loading.

WHY: Both extractors, the line splitter, the loader and the CLI share a
handful of literal defaults. Keeping them as plain module constants makes
them easy to find and lets tests assert against the exact values instead
of repeating magic strings.

HOW: python-dotenv loads the .env file on import. Format defaults are
fixed constants. Only outer-layer knobs (log level, CLI line length) can
be overridden from the environment.

RULES:
- The two default language tags differ per format on purpose; never unify them
- The two show-translation defaults differ per format on purpose
- Format defaults are NOT overridable from the environment
- LYRI_LOG_LEVEL and LYRI_MAX_LINE_LENGTH only affect the CLI
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

# Load .env from the project root (where the script is run from)
load_dotenv()

# ---------------------------------------------------------------------------
# Format detection
# ---------------------------------------------------------------------------

STRUCTURED_EXTENSIONS: frozenset[str] = frozenset({".yaml", ".yml"})
"""Extensions (lowercase, with dot) classified as whole-file YAML."""

LYRIC_FILE_PATTERNS: tuple[str, ...] = ("*.yaml", "*.yml", "*.md")

IGNORED_DIRECTORIES: frozenset[str] = frozenset({
    "node_modules", "dist", ".git", "docs", "examples",
})

IGNORED_FILENAMES: frozenset[str] = frozenset({
    "README.md", "DESIGN.md", "TODO.md", "ARCHITECTURE.md",
    "COMPLETE_DESIGN.md", "pnpm-lock.yaml", "package.json",
})

# ---------------------------------------------------------------------------
# Extraction defaults
# ---------------------------------------------------------------------------

DEFAULT_TITLE = "Untitled"
STRUCTURED_DEFAULT_LANGUAGE = "zh-jyut"
PROSE_DEFAULT_LANGUAGE = "zh-CN"

STRUCTURED_SHOW_TRANSLATION = False
PROSE_SHOW_TRANSLATION = True
DEFAULT_SHOW_TIMING = False
DEFAULT_LAYOUT = "vertical"
DEFAULT_SHOW_TONE_MARKS = True

# ---------------------------------------------------------------------------
# Built-in transform defaults
# ---------------------------------------------------------------------------

LINE_SPLIT_MAX_LENGTH = 20
LINE_SPLIT_BREAK_ON_PUNCTUATION = True

BREAK_PUNCTUATION: frozenset[str] = frozenset("。！？，、；：")
"""Sentence/clause-ending marks that force a break in the line splitter."""

# ---------------------------------------------------------------------------
# Outer-layer overrides
# ---------------------------------------------------------------------------

LOG_LEVEL = os.getenv("LYRI_LOG_LEVEL", "WARNING").upper()


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(
            f"{name} must be an integer, got {raw!r}. "
            "Fix or remove it in the .env file."
        ) from None


CLI_MAX_LINE_LENGTH = _env_int("LYRI_MAX_LINE_LENGTH", LINE_SPLIT_MAX_LENGTH)
