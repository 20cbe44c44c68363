"""Wire-level constants and header validation for NMEA 0183 sentences.

A sentence looks like ``$TTMMM,field_1,...,field_N*CC\\r\\n`` where ``TT`` is
the talker, ``MMM`` the message code and ``CC`` the checksum.
"""

from __future__ import annotations

from ..exceptions import HeaderError

START = "$"
DELIMITER = ","
CHECKSUM_DELIMITER = "*"
TERMINATOR = "\r\n"

TALKER_LENGTH = 2
MESSAGE_CODE_LENGTH = 3
MAX_SENTENCE_LENGTH = 82

# '*HH\r\n'
SUFFIX_LENGTH = 1 + 2 + len(TERMINATOR)

# Characters that cannot appear inside a field or header token
RESERVED = frozenset(START + DELIMITER + CHECKSUM_DELIMITER + TERMINATOR)

# Trailing bytes dropped before parsing: CR, LF, NUL and C whitespace
TRAILING_JUNK = " \t\n\v\f\r\x00"


def _validate_token(kind: str, value: str, length: int) -> str:
    if not isinstance(value, str):
        raise HeaderError(f"{kind} must be a str, got {type(value).__name__}")
    if len(value) != length:
        raise HeaderError(f"{kind} must be exactly {length} chars, got {value!r}")
    if not value.isascii() or any(c in RESERVED or not c.isprintable() for c in value):
        raise HeaderError(f"{kind} must be printable ASCII without delimiters, got {value!r}")
    return value


def validate_talker(talker: str) -> str:
    """Check that ``talker`` is a 2-character printable ASCII token.

    Returns:
        The talker, unchanged

    Raises:
        HeaderError: If the talker has the wrong length or characters
    """
    return _validate_token("talker", talker, TALKER_LENGTH)


def validate_message_code(message_code: str) -> str:
    """Check that ``message_code`` is a 3-character printable ASCII token.

    Returns:
        The message code, unchanged

    Raises:
        HeaderError: If the message code has the wrong length or characters
    """
    return _validate_token("message code", message_code, MESSAGE_CODE_LENGTH)
