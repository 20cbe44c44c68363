"""NMEA sentence encoder.

This module provides SentenceEncoder, which appends typed fields to a
caller-owned buffer and finalizes the sentence with its checksum, and the
encode() helper that builds a complete sentence from an AnyMessage.
"""

from __future__ import annotations

import enum
import logging
from typing import TYPE_CHECKING, Any

from ..config import CodecConfig, FloatFormat
from ..exceptions import CapacityError, EmptyMessageError, EncodeError
from ..models.fields import Register32
from ..utils.checksum import format_checksum, nmea_checksum
from .sentence import (
    CHECKSUM_DELIMITER,
    DELIMITER,
    RESERVED,
    START,
    SUFFIX_LENGTH,
    TERMINATOR,
    validate_message_code,
    validate_talker,
)

if TYPE_CHECKING:
    from ..any_message import AnyMessage

logger = logging.getLogger(__name__)

INT32_MIN = -(1 << 31)
INT32_MAX = (1 << 31) - 1
UINT32_MAX = (1 << 32) - 1

_COMMA = ord(DELIMITER)


class Manipulator(enum.Enum):
    """Stream manipulators accepted by SentenceEncoder.write()."""

    HEX = "hex"
    DEC = "dec"
    EMPTY_FIELD = "empty"


HEX = Manipulator.HEX
DEC = Manipulator.DEC
EMPTY_FIELD = Manipulator.EMPTY_FIELD


class SentenceEncoder:
    """Writes one NMEA sentence into a caller-owned buffer.

    The header (``$`` + talker + message code + ``,``) is written on
    construction. Every field append writes the field text followed by a comma;
    end_message() drops the last comma and appends ``*HH\\r\\n``.

    The encoder borrows ``buffer`` and must not outlive it. Writes are atomic:
    when a field does not fit, CapacityError is raised and nothing is written.

    Example:
        >>> buf = bytearray(82)
        >>> enc = SentenceEncoder(buf, "GT", "GGA")
        >>> enc.write(1, 43.34, "HELLO").end_message()
        b'$GTGGA,1,43.340000,HELLO*23\\r\\n'
    """

    def __init__(
        self,
        buffer: bytearray | memoryview,
        talker: str,
        message_code: str,
        *,
        config: CodecConfig | None = None,
    ) -> None:
        """Initialize the encoder and write the sentence header.

        Args:
            buffer: Writable buffer receiving the sentence
            talker: 2-character talker ID
            message_code: 3-character message code
            config: Codec configuration (default: CodecConfig())

        Raises:
            TypeError: If buffer is read-only
            HeaderError: If talker or message code has the wrong length
            CapacityError: If the header does not fit in buffer
        """
        view = memoryview(buffer)
        if view.readonly:
            raise TypeError("SentenceEncoder requires a writable buffer")

        self._buffer = view.cast("B")
        self._talker = validate_talker(talker)
        self._message_code = validate_message_code(message_code)
        self._config = config if config is not None else CodecConfig()

        self._length = 0
        self._base = 10
        self._float_format = self._config.float_format
        self._float_precision = self._config.float_precision
        self._checksum: int | None = None

        self._write_header()

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def talker(self) -> str:
        return self._talker

    @property
    def message_code(self) -> str:
        return self._message_code

    @property
    def capacity(self) -> int:
        """Total size of the borrowed buffer in bytes."""
        return len(self._buffer)

    @property
    def length(self) -> int:
        """Number of bytes written so far."""
        return self._length

    @property
    def remaining(self) -> int:
        return len(self._buffer) - self._length

    @property
    def base(self) -> int:
        """Current integer base (10 or 16)."""
        return self._base

    @property
    def float_format(self) -> FloatFormat:
        return self._float_format

    @property
    def float_precision(self) -> int:
        return self._float_precision

    @property
    def finalized(self) -> bool:
        """True once end_message() has appended the checksum suffix."""
        return self._checksum is not None

    @property
    def checksum(self) -> int | None:
        """Checksum of the finalized sentence, or None before end_message()."""
        return self._checksum

    def getvalue(self) -> bytes:
        """Return a copy of the bytes written so far."""
        return bytes(self._buffer[: self._length])

    def reset(self) -> SentenceEncoder:
        """Discard everything written and start a fresh sentence.

        The talker, message code and format modes are kept.
        """
        self._length = 0
        self._checksum = None
        self._write_header()
        return self

    # ------------------------------------------------------------------
    # Mode manipulators
    # ------------------------------------------------------------------

    def hex(self) -> SentenceEncoder:
        """Switch integer fields to ``0xHHHH`` hex text."""
        self._base = 16
        return self

    def dec(self) -> SentenceEncoder:
        """Switch integer fields to decimal text."""
        self._base = 10
        return self

    def set_float_format(
        self, float_format: FloatFormat, precision: int | None = None
    ) -> SentenceEncoder:
        """Set the format (and optionally precision) of subsequent float fields."""
        if not isinstance(float_format, FloatFormat):
            raise EncodeError(f"Expected a FloatFormat, got {float_format!r}")
        if precision is not None:
            if not 0 <= precision <= 17:
                raise EncodeError(f"Float precision must be 0-17, got {precision}")
            self._float_precision = precision
        self._float_format = float_format
        return self

    # ------------------------------------------------------------------
    # Field appends
    # ------------------------------------------------------------------

    def write(self, *values: Any) -> SentenceEncoder:
        """Append each value as a field, dispatching on its type.

        Supported values: int, float, str, bool (as 0/1), enum members (as
        their value), Register32, None (empty field), and the manipulators
        HEX, DEC, EMPTY_FIELD and FloatFormat members.

        Returns:
            The encoder, for chaining

        Raises:
            EncodeError: If a value has an unsupported type or is invalid
            CapacityError: If a field does not fit
        """
        for value in values:
            self._write_one(value)
        return self

    def _write_one(self, value: Any) -> None:
        if value is None or value is EMPTY_FIELD:
            self.write_empty()
        elif value is HEX:
            self.hex()
        elif value is DEC:
            self.dec()
        elif isinstance(value, FloatFormat):
            self.set_float_format(value)
        elif isinstance(value, Register32):
            self.write_register(value)
        elif isinstance(value, bool):
            self.write_int(int(value))
        elif isinstance(value, enum.Enum):
            if isinstance(value.value, bool) or not isinstance(value.value, int):
                raise EncodeError(f"Enum {value!r} has a non-integer value")
            self.write_int(value.value)
        elif isinstance(value, int):
            self.write_int(value)
        elif isinstance(value, float):
            self.write_float(value)
        elif isinstance(value, str):
            self.write_str(value)
        else:
            raise EncodeError(f"Unsupported field type: {type(value).__name__}")

    def write_int(self, value: int) -> SentenceEncoder:
        """Append an integer field in the current base.

        Decimal mode takes signed 32-bit values, the range read_int() accepts.
        Hex mode also takes unsigned values up to 0xFFFFFFFF and writes ``0x``
        followed by at least ``hex_width`` uppercase digits; negative values
        use their 32-bit two's-complement form.

        Raises:
            EncodeError: If value does not fit the current base's range
        """
        if isinstance(value, bool) or not isinstance(value, int):
            raise EncodeError(f"Expected int, got {type(value).__name__}")
        if value < INT32_MIN or value > UINT32_MAX:
            raise EncodeError(f"Integer {value} does not fit in 32 bits")

        if self._base == 16:
            text = f"0x{value & UINT32_MAX:0{self._config.hex_width}X}"
        else:
            if value > INT32_MAX:
                raise EncodeError(
                    f"Integer {value} does not fit in signed 32 bits; use hex mode"
                )
            text = str(value)

        self._append_field(text)
        return self

    def write_float(self, value: float) -> SentenceEncoder:
        """Append a floating point field in the current float format."""
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise EncodeError(f"Expected float, got {type(value).__name__}")

        text = f"{float(value):.{self._float_precision}{self._float_format.value}}"
        self._append_field(text)
        return self

    def write_str(self, value: str) -> SentenceEncoder:
        """Append a string field byte-for-byte.

        Raises:
            EncodeError: If the text is not ASCII or contains ',', '*', '$',
                CR or LF
        """
        if not isinstance(value, str):
            raise EncodeError(f"Expected str, got {type(value).__name__}")
        if not value.isascii():
            raise EncodeError(f"String field must be ASCII, got {value!r}")
        bad = sorted(set(value) & RESERVED)
        if bad:
            raise EncodeError(f"String field {value!r} contains reserved characters {bad!r}")

        self._append_field(value)
        return self

    def write_register(self, value: Register32) -> SentenceEncoder:
        """Append a register through the integer path."""
        return self.write_int(value.to_uint())

    def write_empty(self) -> SentenceEncoder:
        """Append an empty field (a lone comma)."""
        self._append_field("")
        return self

    # ------------------------------------------------------------------
    # Framing
    # ------------------------------------------------------------------

    def end_message(self) -> bytes:
        """Finalize the sentence with ``*HH\\r\\n``.

        Drops one trailing comma, computes the checksum over everything
        written, and appends the suffix. Calling it again returns the same
        sentence without writing.

        Returns:
            The complete sentence

        Raises:
            CapacityError: If the 5-byte suffix does not fit
        """
        if self._checksum is not None or self._length == 0:
            return self.getvalue()

        end = self._length
        if self._buffer[end - 1] == _COMMA:
            end -= 1

        available = len(self._buffer) - end
        if available < SUFFIX_LENGTH:
            logger.debug(
                "No room for checksum suffix: need %d bytes, have %d", SUFFIX_LENGTH, available
            )
            raise CapacityError(
                f"Buffer too small for checksum suffix: need {SUFFIX_LENGTH} bytes, "
                f"have {available}",
                required=SUFFIX_LENGTH,
                available=available,
            )

        self._length = end
        checksum = nmea_checksum(self._buffer, self._length)
        self._put(f"{CHECKSUM_DELIMITER}{format_checksum(checksum)}{TERMINATOR}")
        self._checksum = checksum

        sentence = self.getvalue()
        logger.debug("Finalized sentence: %r", sentence)
        return sentence

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _write_header(self) -> None:
        self._reserve(START + self._talker + self._message_code + DELIMITER, "header")

    def _append_field(self, text: str) -> None:
        if self._checksum is not None:
            raise EncodeError("Cannot append fields after end_message()")
        self._reserve(text + DELIMITER, "field")

    def _reserve(self, text: str, what: str) -> None:
        required = len(text)
        available = len(self._buffer) - self._length
        if required > available:
            logger.debug("No room for %s %r: need %d bytes, have %d", what, text, required, available)
            raise CapacityError(
                f"Buffer too small for {what}: need {required} bytes, have {available}",
                required=required,
                available=available,
            )
        self._put(text)

    def _put(self, text: str) -> None:
        data = text.encode("ascii")
        self._buffer[self._length : self._length + len(data)] = data
        self._length += len(data)


def encode(
    message: AnyMessage,
    *,
    buffer: bytearray | memoryview | None = None,
    config: CodecConfig | None = None,
) -> bytes:
    """Encode an AnyMessage as a complete NMEA sentence.

    The message's checksum and size caches are updated with the result.

    Args:
        message: Message to encode (must hold a payload)
        buffer: Output buffer (default: a new buffer of config.max_sentence_length)
        config: Codec configuration

    Returns:
        The sentence bytes, including checksum and CRLF

    Raises:
        EmptyMessageError: If message holds no payload
        CapacityError: If the sentence does not fit the buffer
        EncodeError: If a payload field cannot be written

    Examples:
        ```python
        from nmeacomm import AnyMessage, encode

        msg = AnyMessage("GP", GGAMessage(i=1, d=43.34, s="HELLO"))
        sentence = encode(msg)  # b'$GPGGA,1,43.340000,HELLO*..\\r\\n'
        ```
    """
    if message.is_empty():
        raise EmptyMessageError("Cannot encode an empty AnyMessage")

    config = config if config is not None else CodecConfig()
    if buffer is None:
        buffer = bytearray(config.max_sentence_length)

    encoder = SentenceEncoder(buffer, message.talker, message.message_code, config=config)
    message.serialize_payload(encoder)
    sentence = encoder.end_message()

    message.checksum = encoder.checksum
    message.size = len(sentence)
    return sentence
