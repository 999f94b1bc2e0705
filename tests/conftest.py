"""Shared test fixtures for the lyri_parser test suite.

WHY: Extractor, parser and CLI tests need the same sample lyric files in
both formats. Centralizing them here keeps every test working from the
same known-good inputs.

HOW: Module constants hold the raw sample texts; fixtures return them and
build small Documents for transform and validator tests.

RULES:
- Sample lines are correctly aligned (one ruby token per character)
- Fixtures return fresh objects so tests may modify them freely
"""

from typing import List

import pytest

from lyri_parser.core.ir import Document, Line, Meta, RenderOptions, Timing


SAMPLE_YAML = """\
title: 海闊天空
artist: Beyond
album: 樂與怒
language: zh-jyut
tags: [rock, cantopop]
created: 2024-01-05
options:
  showTranslation: true
  layout: horizontal
lyrics:
  - text: 今天我
    ruby: [gam1, tin1, ngo5]
    translation:
      en: Today I
    timing: {start: 0.5, end: 2.0}
  - text: 寒夜裡看雪飄過
    ruby: [hon4, je6, leoi5, hon3, syut3, piu1, gwo3]
    notes: opening line
"""

SAMPLE_MARKDOWN = """\
---
title: 你好
artist: Someone
tags:
  - demo
showTiming: true
---

# 你好

A short greeting song.

```yaml
lines:
  - text: 你好
    ruby: [nei5, hou2]
  - text: 再見
    ruby: [zoi3, gin3]
```

Some closing words.
"""


@pytest.fixture
def sample_yaml():
    return SAMPLE_YAML


@pytest.fixture
def sample_markdown():
    return SAMPLE_MARKDOWN


@pytest.fixture
def make_document():
    """Return a builder wrapping lines in a Document with minimal valid metadata."""

    def build(lines: List[Line], title: str = "Song", language: str = "zh-CN") -> Document:
        return Document(
            meta=Meta(title=title, language=language),
            lines=list(lines),
            options=RenderOptions(),
            source="test.yaml",
        )

    return build


@pytest.fixture
def aligned_line():
    return Line(
        text="你好",
        annotation=["nei5", "hou2"],
        translation={"en": "Hello"},
        note="greeting",
        timing=Timing(start=1.0, end=2.5),
    )
