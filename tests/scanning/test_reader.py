"""Tests for scanning/reader.py."""

import pytest

from codegauge.exceptions import DecodeError, UnreadableFileWarning
from codegauge.scanning import read_source_file

ONE_MB = 1024 * 1024


class TestReadSourceFile:
    def test_reads_text_and_counts_lines(self, make_project):
        root = make_project({"a.ts": "let a = 1;\nlet b = 2;\n"})
        source = read_source_file(root, "a.ts", ONE_MB)
        assert source.path == "a.ts"
        assert source.line_count == 2
        assert source.text.startswith("let a")

    def test_final_line_without_newline_counts(self, make_project):
        root = make_project({"a.ts": "let a = 1;\nlet b = 2;"})
        assert read_source_file(root, "a.ts", ONE_MB).line_count == 2

    def test_byte_order_mark_is_stripped(self, make_project):
        root = make_project({"a.ts": "\ufefflet a = 1;\n".encode("utf-8")})
        assert read_source_file(root, "a.ts", ONE_MB).text == "let a = 1;\n"

    def test_empty_file_has_zero_lines(self, make_project):
        root = make_project({"empty.ts": ""})
        assert read_source_file(root, "empty.ts", ONE_MB).line_count == 0

    def test_invalid_utf8_raises_decode_error(self, make_project):
        root = make_project({"bad.ts": b"let a = '\xff\xfe';\n"})
        with pytest.raises(DecodeError) as exc_info:
            read_source_file(root, "bad.ts", ONE_MB)
        assert exc_info.value.filepath == "bad.ts"
        assert isinstance(exc_info.value, UnreadableFileWarning)

    def test_oversized_file_is_unreadable(self, make_project):
        root = make_project({"big.ts": "x;\n" * 100})
        with pytest.raises(UnreadableFileWarning) as exc_info:
            read_source_file(root, "big.ts", 10)
        assert "exceeds limit" in exc_info.value.reason

    def test_missing_file_is_unreadable(self, tmp_path):
        with pytest.raises(UnreadableFileWarning):
            read_source_file(tmp_path, "gone.ts", ONE_MB)
