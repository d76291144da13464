"""Unit tests for checksums and content normalization."""

import pytest
from voidui.crypto.canonicalize import canonicalize_content, normalize_line_endings, split_lines, join_lines
from voidui.crypto.checksum import (
    compute_checksum,
    compute_file_checksum,
    checksums_match,
    format_checksum
)
from voidui.models import CHECKSUM_RE


class TestCanonicalization:
    """Test normalization applied before hashing."""

    def test_crlf_normalized(self):
        assert normalize_line_endings("a\r\nb\r\n") == "a\nb\n"

    def test_lone_cr_untouched(self):
        assert normalize_line_endings("a\rb") == "a\rb"

    def test_bytes_decoded(self):
        assert canonicalize_content("héllo\r\n".encode("utf-8")) == "héllo\n"

    def test_split_keeps_trailing_empty_line(self):
        assert split_lines("a\nb\n") == ["a", "b", ""]
        assert join_lines(split_lines("a\nb\n")) == "a\nb\n"


class TestChecksum:
    """Test checksum computation."""

    def test_known_digests(self):
        assert compute_checksum("") == (
            "sha256:e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
        )
        assert compute_checksum("hello") == (
            "sha256:2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824"
        )

    def test_format(self):
        checksum = compute_checksum("export const x = 1")
        assert CHECKSUM_RE.fullmatch(checksum)

    def test_deterministic(self):
        assert compute_checksum("same content") == compute_checksum("same content")

    def test_line_endings_ignored(self):
        """The same file checked out on Windows and Unix checksums equally."""
        assert compute_checksum("a\r\nb\r\n") == compute_checksum("a\nb\n")

    def test_other_whitespace_matters(self):
        assert compute_checksum("a \n") != compute_checksum("a\n")
        assert compute_checksum("a\n") != compute_checksum("a")

    def test_str_and_bytes_agree(self):
        assert compute_checksum("ünïcode") == compute_checksum("ünïcode".encode("utf-8"))

    def test_invalid_utf8_does_not_raise(self, tmp_path):
        """Undecodable bytes are replaced, not fatal."""
        path = tmp_path / "button.tsx"
        path.write_bytes(b"const x = \"\xff\"\n")

        assert compute_file_checksum(path) == compute_checksum("const x = \"\ufffd\"\n")

    def test_file_checksum(self, tmp_path):
        path = tmp_path / "button.tsx"
        path.write_bytes(b"line one\r\nline two\r\n")

        assert compute_file_checksum(path) == compute_checksum("line one\nline two\n")

    def test_checksums_match(self):
        checksum = compute_checksum("x")
        assert checksums_match(checksum, compute_checksum("x"))
        assert not checksums_match(checksum, compute_checksum("y"))

    def test_format_checksum(self):
        checksum = compute_checksum("hello")
        assert format_checksum(checksum) == "sha256:2cf24d...8b9824"

    @pytest.mark.parametrize("value", ["not-a-checksum", "sha256:abc"])
    def test_format_checksum_passthrough(self, value):
        assert format_checksum(value) == value
