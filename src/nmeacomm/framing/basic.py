"""Sentence framing utilities.

This module wraps an already-assembled sentence body (``TTMMM,f1,...,fN``) in
NMEA framing and strips it off again, without field-level parsing:

- ``$`` start marker
- ``*HH`` checksum suffix
- ``\\r\\n`` terminator
"""

from __future__ import annotations

from ..codec.sentence import (
    CHECKSUM_DELIMITER,
    MESSAGE_CODE_LENGTH,
    START,
    TALKER_LENGTH,
    TERMINATOR,
)
from ..exceptions import FramingError
from ..utils.checksum import format_checksum, nmea_checksum

_START = START.encode("ascii")
_STAR = CHECKSUM_DELIMITER.encode("ascii")
_TERMINATOR = TERMINATOR.encode("ascii")


def _as_bytes(data: bytes | bytearray | memoryview | str) -> bytes:
    if isinstance(data, str):
        return data.encode("ascii")
    return bytes(data)


def frame_sentence(body: bytes | str) -> bytes:
    """Frame a sentence body with marker, checksum and terminator.

    Args:
        body: Sentence body without '$', e.g. ``"GPGGA,42,123.456,STRING"``

    Returns:
        Framed sentence

    Raises:
        ValueError: If body contains '$', '*', CR or LF

    Example:
        >>> frame_sentence("GPGGA,42,123.456,STRING")
        b'$GPGGA,42,123.456,STRING*40\\r\\n'
    """
    raw = _as_bytes(body)
    for reserved in (_START, _STAR, b"\r", b"\n"):
        if reserved in raw:
            raise ValueError(f"Sentence body must not contain {reserved!r}")

    result = bytearray(_START)
    result.extend(raw)
    checksum = nmea_checksum(result)
    result.extend(_STAR + format_checksum(checksum).encode("ascii") + _TERMINATOR)
    return bytes(result)


def unframe_sentence(
    framed: bytes | bytearray | memoryview | str,
    *,
    require_checksum: bool = True,
) -> bytes:
    """Strip the framing from a sentence and verify its checksum.

    Trailing CR/LF is optional.

    Args:
        framed: Framed sentence
        require_checksum: If True, a ``*HH`` suffix must be present

    Returns:
        The body between '$' and '*'

    Raises:
        FramingError: If the marker is missing, the checksum suffix is missing
            (when required) or malformed, or the checksum does not match

    Example:
        >>> unframe_sentence(b"$GPGGA,42,123.456,STRING*40\\r\\n")
        b'GPGGA,42,123.456,STRING'
    """
    raw = _as_bytes(framed)
    if not raw:
        raise FramingError("Cannot unframe empty data")
    if not raw.startswith(_START):
        raise FramingError(f"Sentence must start with {START!r}")

    if raw.endswith(_TERMINATOR):
        raw = raw[: -len(_TERMINATOR)]

    star = raw.rfind(_STAR)
    if star == -1:
        if require_checksum:
            raise FramingError("Missing checksum suffix")
        return raw[len(_START) :]

    claimed = raw[star + 1 :]
    if len(claimed) != 2:
        raise FramingError(f"Checksum suffix must be 2 hex digits, got {claimed!r}")
    try:
        expected = int(claimed, 16)
    except ValueError as e:
        raise FramingError(f"Checksum suffix must be 2 hex digits, got {claimed!r}") from e

    body = raw[:star]
    actual = nmea_checksum(body)
    if actual != expected:
        raise FramingError(
            f"Checksum verification failed: computed {actual:02X}, sentence claims {expected:02X}"
        )

    return body[len(_START) :]


def validate_sentence(data: bytes | bytearray | memoryview | str) -> bool:
    """Check that data is one complete, well-formed sentence.

    A valid sentence starts with ``$`` followed by a 2-character talker and
    3-character message code, carries a correct ``*HH`` checksum, and ends with
    ``\\r\\n``.

    Returns:
        True if all checks pass, False otherwise
    """
    raw = _as_bytes(data)
    if not raw.endswith(_TERMINATOR):
        return False

    try:
        body = unframe_sentence(raw, require_checksum=True)
    except FramingError:
        return False

    header = body.split(b",", 1)[0]
    return len(header) == TALKER_LENGTH + MESSAGE_CODE_LENGTH and header.isalnum()
