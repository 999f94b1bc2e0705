"""Unit tests for the IR dataclasses and grapheme helpers."""

from lyri_parser.core.ir import Document, Layout, Line, Meta, RenderOptions, Timing
from lyri_parser.core.text import char_count, graphemes


class TestLineMapping:
    def test_from_mapping_uses_author_keys(self):
        line = Line.from_mapping({
            "text": "你好",
            "ruby": ["nei5", "hou2"],
            "translation": {"en": "Hello"},
            "notes": "greeting",
            "timing": {"start": 1, "end": 2},
        })
        assert line == Line(
            text="你好",
            annotation=["nei5", "hou2"],
            translation={"en": "Hello"},
            note="greeting",
            timing=Timing(start=1, end=2),
        )

    def test_missing_text_is_empty(self):
        assert Line.from_mapping({}).text == ""

    def test_to_dict_omits_absent_fields(self):
        assert Line(text="一").to_dict() == {"text": "一"}


class TestDocumentToDict:
    def test_round_trip_shape(self, aligned_line):
        doc = Document(
            meta=Meta(title="A", language="zh-CN", artist="B"),
            lines=[aligned_line],
            options=RenderOptions(layout=Layout.HORIZONTAL),
        )
        assert doc.to_dict() == {
            "meta": {"title": "A", "language": "zh-CN", "artist": "B", "tags": []},
            "lines": [{
                "text": "你好",
                "ruby": ["nei5", "hou2"],
                "translation": {"en": "Hello"},
                "notes": "greeting",
                "timing": {"start": 1.0, "end": 2.5},
            }],
            "options": {
                "showTranslation": False,
                "showTiming": False,
                "layout": "horizontal",
                "showToneMarks": True,
            },
        }


class TestGraphemes:
    def test_cjk(self):
        assert graphemes("你好") == ["你", "好"]

    def test_combining_mark(self):
        assert char_count("e\u0301") == 1

    def test_flag_emoji(self):
        assert char_count("\U0001F1ED\U0001F1F0") == 1

    def test_empty(self):
        assert char_count("") == 0
