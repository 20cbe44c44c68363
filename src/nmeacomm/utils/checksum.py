"""NMEA 0183 checksum implementation.

The checksum is the XOR of every byte between the leading '$' and the '*'
checksum delimiter, written on the wire as two uppercase hex digits.
"""

from __future__ import annotations

_STAR = ord("*")


def nmea_checksum(data: bytes | bytearray | memoryview, length: int | None = None) -> int:
    """Calculate the NMEA checksum of a sentence.

    Byte 0 is assumed to be the '$' marker and is skipped. Accumulation stops at
    the first '*' or after ``length`` bytes, whichever comes first.

    Args:
        data: Sentence bytes, starting with '$'
        length: Number of valid bytes in ``data`` (default: all of it)

    Returns:
        8-bit checksum value

    Example:
        >>> nmea_checksum(b"$GPGLL,5300.97914,N,00259.98174,E,125926,A*28")
        40
    """
    if length is None or length > len(data):
        length = len(data)

    checksum = 0
    for byte in memoryview(data).cast("B")[1:length]:
        if byte == _STAR:
            break
        checksum ^= byte

    return checksum


def format_checksum(value: int) -> str:
    """Format a checksum as the two uppercase hex digits used on the wire.

    Args:
        value: Checksum value (0-255)

    Returns:
        Two-character hex string

    Raises:
        ValueError: If value does not fit in one byte
    """
    if not 0 <= value <= 0xFF:
        raise ValueError(f"Checksum must be 0-255, got {value}")
    return f"{value:02X}"


def verify_checksum(data: bytes | bytearray | memoryview, expected: int | str | bytes) -> bool:
    """Verify the checksum of a sentence.

    Args:
        data: Sentence bytes starting with '$' (anything from '*' on is ignored)
        expected: Expected checksum as an int or as two hex digits

    Returns:
        True if checksum matches, False otherwise

    Example:
        >>> verify_checksum(b"$GPGLL,5300.97914,N,00259.98174,E,125926,A", "28")
        True
    """
    if isinstance(expected, (bytes, str)):
        text = expected.decode("ascii") if isinstance(expected, bytes) else expected
        if len(text) != 2:
            raise ValueError(f"Checksum must be 2 hex digits, got {text!r}")
        expected = int(text, 16)

    return nmea_checksum(data) == expected
