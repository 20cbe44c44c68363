"""Unit tests for framing utilities."""

from __future__ import annotations

import pytest

from nmeacomm.exceptions import FramingError
from nmeacomm.framing import frame_sentence, unframe_sentence, validate_sentence


class TestFrameSentence:
    """Test sentence framing."""

    def test_frame(self) -> None:
        """Test marker, checksum and terminator."""
        assert frame_sentence("GPGGA,42,123.456,STRING") == b"$GPGGA,42,123.456,STRING*40\r\n"

    def test_frame_bytes(self) -> None:
        """Test bytes input."""
        assert frame_sentence(b"GPACK,1") == b"$GPACK,1*43\r\n"

    @pytest.mark.parametrize("body", ["$GPACK,1", "GPACK*1", "GPACK,1\r\n"])
    def test_reserved_characters(self, body: str) -> None:
        """Test error on bodies containing framing characters."""
        with pytest.raises(ValueError):
            frame_sentence(body)


class TestUnframeSentence:
    """Test sentence unframing."""

    def test_unframe(self, gga_sentence: bytes) -> None:
        """Test that the body is returned."""
        assert unframe_sentence(gga_sentence) == b"GPGGA,42,123.456,STRING"

    def test_unframe_without_terminator(self) -> None:
        """Test that CRLF is optional."""
        assert unframe_sentence("$GPACK,1*43") == b"GPACK,1"

    def test_roundtrip(self) -> None:
        """Test frame then unframe."""
        body = b"GTGGA,1,43.340000,HELLO"
        assert unframe_sentence(frame_sentence(body)) == body

    def test_missing_checksum(self) -> None:
        """Test missing suffix with and without require_checksum."""
        with pytest.raises(FramingError, match="Missing checksum"):
            unframe_sentence(b"$GPACK,1\r\n")
        assert unframe_sentence(b"$GPACK,1\r\n", require_checksum=False) == b"GPACK,1"


class TestFramingErrors:
    """Test framing error handling."""

    def test_unframe_empty_data(self) -> None:
        """Test error on empty input."""
        with pytest.raises(FramingError, match="empty"):
            unframe_sentence(b"")

    def test_missing_marker(self) -> None:
        """Test error on input without '$'."""
        with pytest.raises(FramingError, match="start with"):
            unframe_sentence(b"GPACK,1*43\r\n")

    def test_checksum_mismatch(self) -> None:
        """Test error on a wrong checksum."""
        with pytest.raises(FramingError, match="computed 40, sentence claims 1B"):
            unframe_sentence(b"$GPGGA,42,123.456,STRING*1B\r\n")

    @pytest.mark.parametrize("suffix", [b"*4", b"*403", b"*ZZ"])
    def test_malformed_suffix(self, suffix: bytes) -> None:
        """Test error on suffixes that are not two hex digits."""
        with pytest.raises(FramingError, match="2 hex digits"):
            unframe_sentence(b"$GPGGA,42" + suffix)


class TestValidateSentence:
    """Test whole-sentence validation."""

    def test_valid(self, gga_sentence: bytes) -> None:
        """Test a well-formed sentence."""
        assert validate_sentence(gga_sentence)
        assert validate_sentence(b"$GPGGA*56\r\n")

    @pytest.mark.parametrize(
        "data",
        [
            b"$GPGGA,42,123.456,STRING*40",
            b"$GPGGA,42,123.456,STRING*1B\r\n",
            b"$GPGGA,42,123.456,STRING\r\n",
            b"GPGGA,42,123.456,STRING*40\r\n",
            b"NOTANMEA",
            b"",
        ],
    )
    def test_invalid(self, data: bytes) -> None:
        """Test sentences failing one of the checks."""
        assert not validate_sentence(data)

    def test_short_header(self) -> None:
        """Test that the header must be talker plus message code."""
        assert not validate_sentence(frame_sentence("GPGG,1"))
        assert not validate_sentence(frame_sentence("GPGGAX,1"))
