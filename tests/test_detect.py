"""Unit tests for format detection.

RULES:
- Detection is a pure function of the identifier; no files are created.
"""

import pytest

from lyri_parser.core.detect import SourceFormat, detect_format


class TestStructuredExtensions:
    """.yaml and .yml, in any case, are whole-file YAML documents."""

    @pytest.mark.parametrize("source", [
        "song.yaml", "song.yml", "SONG.YAML", "lyrics/song.Yml", "/abs/path/a.b.yaml",
    ])
    def test_yaml_extensions(self, source):
        assert detect_format(source) is SourceFormat.STRUCTURED_BLOCK

    def test_windows_path(self):
        assert detect_format("C:\\lyrics\\song.yml") is SourceFormat.STRUCTURED_BLOCK


class TestProseFallback:
    """Everything else is a prose document; detection never fails."""

    @pytest.mark.parametrize("source", [
        "song.md", "song.markdown", "song.txt", "song", "", "yaml", ".yaml.md",
    ])
    def test_fallback_to_prose(self, source):
        assert detect_format(source) is SourceFormat.PROSE_WITH_EMBEDDED_BLOCK

    def test_directory_named_like_yaml(self):
        assert detect_format("songs.yaml/readme") is SourceFormat.PROSE_WITH_EMBEDDED_BLOCK
