"""Unit tests for input decoding and size limits."""

import logging

import pytest

from bbcode2html.exceptions import EncodingError, InputTooLargeError
from bbcode2html.utils.inputs import decode_input, enforce_input_size, normalize_line_endings


@pytest.mark.unit
class TestDecodeInput:
    """Tests for decode_input."""

    def test_str_passthrough(self) -> None:
        """Test valid text is returned unchanged."""
        assert decode_input("héllo") == "héllo"

    @pytest.mark.parametrize("wrap", [bytes, bytearray, memoryview])
    def test_binary_types(self, wrap) -> None:
        """Test every binary type is decoded as UTF-8."""
        assert decode_input(wrap("héllo".encode("utf-8"))) == "héllo"

    def test_invalid_utf8(self) -> None:
        """Test invalid bytes raise EncodingError with the byte offset."""
        with pytest.raises(EncodingError) as exc_info:
            decode_input(b"abc\xc3(")
        assert exc_info.value.position == 3
        assert isinstance(exc_info.value.original_error, UnicodeDecodeError)

    def test_lone_surrogate(self) -> None:
        """Test unencodable text raises EncodingError."""
        with pytest.raises(EncodingError) as exc_info:
            decode_input("ab\udc80")
        assert exc_info.value.position == 2

    def test_unsupported_type(self) -> None:
        """Test non-text input raises TypeError."""
        with pytest.raises(TypeError):
            decode_input(42)  # type: ignore[arg-type]


@pytest.mark.unit
class TestInputSize:
    """Tests for enforce_input_size."""

    def test_under_limit(self) -> None:
        """Test short input is untouched."""
        assert enforce_input_size("abc", 3, "truncate") == ("abc", False)

    def test_no_limit(self) -> None:
        """Test None disables the limit."""
        assert enforce_input_size("x" * 100, None, "reject") == ("x" * 100, False)

    def test_truncate(self, caplog) -> None:
        """Test truncate mode cuts the input and logs a warning."""
        with caplog.at_level(logging.WARNING, logger="bbcode2html"):
            assert enforce_input_size("abcdef", 4, "truncate") == ("abcd", True)
        assert "truncating" in caplog.text

    def test_reject(self) -> None:
        """Test reject mode raises InputTooLargeError."""
        with pytest.raises(InputTooLargeError) as exc_info:
            enforce_input_size("abcdef", 4, "reject")
        assert exc_info.value.limit == 4
        assert exc_info.value.actual == 6


@pytest.mark.unit
def test_normalize_line_endings() -> None:
    """Test CRLF and lone CR become LF."""
    assert normalize_line_endings("a\r\nb\rc\nd") == "a\nb\nc\nd"
    assert normalize_line_endings("unchanged") == "unchanged"
