"""End-to-end tests for LyricParser.parse().

WHY: parse() is the single entry point site builders call. These tests
run detection, extraction, transforms and validation together on real
file texts, including the documented concrete scenarios.

HOW: Raw strings go in, Documents (or errors) come out; no files on disk.

RULES:
- Every successful result is checked against the alignment invariant.
"""

import logging

import pytest

import lyri_parser
from lyri_parser import FormatError, LyricParser, ParseError, ValidationError, create_parser, parse
from lyri_parser.core.text import char_count
from lyri_parser.transforms import (
    AnnotationCheckTransform,
    AnnotationFormatTransform,
    LineSplitTransform,
)


def _assert_aligned(document):
    for line in document.lines:
        if line.annotation:
            assert len(line.annotation) == char_count(line.text)


class TestConcreteScenarios:
    def test_minimal_structured_document(self):
        doc = parse('title: "Song"\nlanguage: "zh-CN"\nlyrics: []', "song.yaml")
        assert doc.meta.title == "Song"
        assert doc.meta.language == "zh-CN"
        assert doc.lines == []
        assert doc.options.show_translation is False

    def test_aligned_annotation_passes(self):
        raw = "title: A\nlyrics:\n  - text: 你好\n    ruby: [nei5, hou2]\n"
        doc = parse(raw, "a.yaml")
        assert doc.lines[0].annotation == ["nei5", "hou2"]

    def test_misaligned_annotation_fails(self):
        raw = "title: A\nlyrics:\n  - text: 你好\n    ruby: [nei5]\n"
        with pytest.raises(ValidationError) as exc_info:
            parse(raw, "a.yaml")
        assert exc_info.value.line_number == 1
        assert (exc_info.value.char_count, exc_info.value.annotation_count) == (2, 1)

    def test_split_six_characters(self):
        parser = LyricParser([LineSplitTransform(max_length=3)])
        doc = parser.parse("lyrics:\n  - text: 一二三四五六\n", "a.yml")
        assert [line.text for line in doc.lines] == ["一二三", "四五六"]

    @pytest.mark.parametrize("end,ok", [(5, False), (6, True)])
    def test_timing_boundary(self, end, ok):
        raw = "lyrics:\n  - text: 一\n    timing: {{start: 5, end: {}}}\n".format(end)
        if ok:
            assert parse(raw, "a.yaml").lines[0].timing.end == 6
        else:
            with pytest.raises(ValidationError):
                parse(raw, "a.yaml")

    @pytest.mark.parametrize("value", [".nan", ".inf", "-.inf"])
    def test_non_finite_timing_fails(self, value):
        raw = "lyrics:\n  - text: 一\n    timing: {{start: {}, end: 1}}\n".format(value)
        with pytest.raises(ValidationError, match="finite"):
            parse(raw, "a.yaml")

    def test_first_failing_line_is_reported(self):
        raw = (
            "lyrics:\n"
            "  - text: 你好\n"
            "    ruby: [nei5]\n"
            "  - text: 一\n"
            "  - text: ''\n"
        )
        with pytest.raises(ValidationError) as exc_info:
            parse(raw, "a.yaml")
        assert exc_info.value.line_number == 1
        assert exc_info.value.annotation_count == 1


class TestFormats:
    def test_structured_sample(self, sample_yaml):
        doc = parse(sample_yaml, "songs/sample.yaml")
        assert doc.meta.title == "海闊天空"
        assert len(doc.lines) == 2
        _assert_aligned(doc)

    def test_prose_sample(self, sample_markdown):
        doc = parse(sample_markdown, "songs/sample.md")
        assert doc.meta.language == "zh-CN"
        assert doc.options.show_translation is True
        assert [line.text for line in doc.lines] == ["你好", "再見"]

    def test_default_divergence(self):
        assert parse("---\n---\n", "empty.md").options.show_translation is True
        assert parse("", "empty.yaml").options.show_translation is False

    def test_prose_without_block_parses_with_warning(self, caplog):
        with caplog.at_level(logging.WARNING):
            doc = parse("---\ntitle: Only prose\n---\nNothing to see.\n", "a.md")
        assert doc.lines == []
        assert "No YAML block found" in caplog.text

    def test_unknown_extension_is_prose(self):
        doc = parse("---\ntitle: T\n---\n```yaml\nlines:\n  - text: 一\n```\n", "notes.txt")
        assert doc.meta.title == "T"
        assert len(doc.lines) == 1

    def test_malformed_yaml_propagates(self):
        with pytest.raises(FormatError):
            parse("lyrics: [", "a.yaml")

    def test_errors_share_a_base(self):
        with pytest.raises(ParseError):
            parse("lyrics: [", "a.yaml")


class TestWithTransforms:
    def test_register_transform_methods(self):
        parser = create_parser()
        parser.register_transform(AnnotationCheckTransform())
        parser.register_transforms([AnnotationFormatTransform(strip_trailing_digit=True)])
        assert [t.name for t in parser.pipeline.transforms] == ["validation", "ruby-formatter"]

    def test_full_chain_keeps_alignment(self):
        parser = create_parser([
            AnnotationCheckTransform(),
            AnnotationFormatTransform(strip_trailing_digit=True),
            LineSplitTransform(max_length=4),
        ])
        raw = (
            "title: A\n"
            "lyrics:\n"
            "  - text: 寒夜裡看雪飄過\n"
            "    ruby: [hon4, je6, leoi5, hon3, syut3, piu1, gwo3]\n"
            "    translation: {en: Watching snow drift in the cold night}\n"
        )
        doc = parser.parse(raw, "a.yaml")
        assert [line.text for line in doc.lines] == ["寒夜裡看", "雪飄過"]
        assert doc.lines[0].annotation == ["hon", "je", "leoi", "hon"]
        assert doc.lines[1].translation == {"en": "Watching snow drift in the cold night"}
        _assert_aligned(doc)

    def test_mismatch_warns_then_fails(self, caplog):
        parser = create_parser([AnnotationCheckTransform()])
        raw = "lyrics:\n  - text: 你好\n    ruby: [nei5]\n"
        with caplog.at_level(logging.WARNING):
            with pytest.raises(ValidationError):
                parser.parse(raw, "a.yaml")
        assert "mismatch" in caplog.text

    def test_transform_error_propagates_unwrapped(self):
        class Broken:
            name = "broken"

            def transform_line(self, line):
                raise KeyError("missing")

        with pytest.raises(KeyError):
            create_parser([Broken()]).parse("lyrics:\n  - text: 一\n", "a.yaml")

    def test_transform_cannot_sneak_invalid_document_through(self):
        class Blank:
            name = "blank"

            def transform_line(self, line):
                return line.__class__(text="")

        with pytest.raises(ValidationError, match="empty"):
            create_parser([Blank()]).parse("lyrics:\n  - text: 一\n", "a.yaml")


class TestMalformedRuby:
    """A ruby value that is not a list reaches the validator as a ValidationError."""

    FULL_CHAIN = [
        AnnotationCheckTransform(),
        AnnotationFormatTransform(strip_trailing_digit=True),
        LineSplitTransform(max_length=2),
    ]

    @pytest.mark.parametrize("ruby", ["jat1 ji6 saam1 sei3", "5", "{jat: 1}"])
    def test_full_chain_fails_with_validation_error(self, ruby):
        raw = "lyrics:\n  - text: 一二三四\n    ruby: {}\n".format(ruby)
        with pytest.raises(ValidationError, match="ruby") as exc_info:
            create_parser(self.FULL_CHAIN).parse(raw, "a.yaml")
        assert exc_info.value.line_number == 1

    def test_splitter_keeps_the_malformed_line(self):
        raw = "lyrics:\n  - text: 一二三四\n    ruby: jat1 ji6 saam1 sei3\n"
        with pytest.raises(ValidationError, match="ruby"):
            LyricParser([LineSplitTransform(max_length=2)]).parse(raw, "a.yaml")

    def test_short_line_with_string_ruby_fails(self):
        raw = "lyrics:\n  - text: 你好\n    ruby: nei5 hou2\n"
        with pytest.raises(ValidationError, match="ruby"):
            create_parser(self.FULL_CHAIN).parse(raw, "a.yaml")


def test_package_exports():
    assert lyri_parser.__version__
    assert lyri_parser.parse is parse
