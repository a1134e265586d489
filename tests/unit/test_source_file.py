"""
Source File Tests
"""

import pytest

from codegraph_tiers.syntax.source_file import SourceFile


class TestSourceFile:
    """Test loading and byte-offset slicing."""

    def test_from_file(self, tmp_path):
        """Test loading from disk keeps path and grammar."""
        path = tmp_path / "app.js"
        path.write_text("on: server\nrun()\n", encoding="utf-8")

        source = SourceFile.from_file(path)

        assert source.file_path == str(path)
        assert source.language == "javascript"
        assert source.content == "on: server\nrun()\n"

    def test_from_file_language_override(self, tmp_path):
        """Test explicit grammar name."""
        path = tmp_path / "App.vue"
        path.write_text("<script></script>\n", encoding="utf-8")

        source = SourceFile.from_file(path, language="html")

        assert source.language == "html"

    def test_from_file_missing(self, tmp_path):
        """Test missing file raises."""
        with pytest.raises(FileNotFoundError):
            SourceFile.from_file(tmp_path / "missing.js")

    def test_slice_uses_byte_offsets(self):
        """Test slicing past multi-byte characters."""
        source = SourceFile.from_content("u.js", "const café = 1\n")

        start = source.data.index(b"= 1")

        assert source.byte_size == len("const café = 1\n") + 1
        assert source.slice(start, start + 3) == "= 1"
