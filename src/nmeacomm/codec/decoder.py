"""NMEA sentence decoder.

This module provides SentenceDecoder, which parses one complete sentence on
construction and then hands out its fields one at a time, and the decode()
helper that turns a sentence into an AnyMessage in a single strict call.
"""

from __future__ import annotations

import enum
import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, TypeVar

from ..config import CodecConfig
from ..exceptions import DecodeError, HeaderError
from ..models.fields import Register32
from ..utils.checksum import nmea_checksum
from .encoder import INT32_MAX, INT32_MIN, UINT32_MAX
from .sentence import (
    CHECKSUM_DELIMITER,
    DELIMITER,
    MESSAGE_CODE_LENGTH,
    START,
    TALKER_LENGTH,
    TRAILING_JUNK,
)

if TYPE_CHECKING:
    from ..any_message import AnyMessage

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=enum.Enum)

# At most 19 significant digits; larger values fail the range check anyway
_INT_RE = re.compile(r"-?0*[0-9]{1,19}")
_UINT_RE = re.compile(r"0*[0-9]{1,19}")
_HEX_RE = re.compile(r"(?:0[xX])?([0-9A-Fa-f]{1,8})")
_FLOAT_RE = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf(?:inity)?|nan)",
    re.IGNORECASE,
)
_HEX_DIGITS = frozenset("0123456789ABCDEFabcdef")


@dataclass(frozen=True)
class FieldError:
    """A field that could not be read.

    Attributes:
        index: Position of the field in the sentence (0 is the header token)
        text: Field text, or None when reading past the last field
        expected: What the reader expected (e.g. "int", "register")
        reason: Human-readable explanation
    """

    index: int
    text: str | None
    expected: str
    reason: str

    def __str__(self) -> str:
        return f"field {self.index} ({self.expected}): {self.reason}"


class SentenceDecoder:
    """Reads the fields of one NMEA sentence in order.

    The whole sentence is parsed on construction: trailing CR/LF/NUL/whitespace
    is dropped, the ``*HH`` checksum is checked, and the text between ``$`` and
    ``*`` is split on commas. Field 0 is the combined talker + message code
    token; reads start at field 1.

    Parse problems never raise. A sentence without a leading ``$`` yields no
    fields at all, and each read that runs out of fields or meets text of the
    wrong shape returns a zero value and appends a FieldError to ``errors``.
    Check ``has_error`` after a batch of reads.

    The decoder borrows ``data`` and must not outlive it.

    Example:
        >>> dec = SentenceDecoder(b"$GPGGA,42,123.456,STRING*40\\r\\n")
        >>> dec.talker, dec.message_code, dec.checksum_valid
        ('GP', 'GGA', True)
        >>> dec.read_int(), dec.read_float(), dec.read_str()
        (42, 123.456, 'STRING')
        >>> dec.has_error
        False
    """

    def __init__(self, data: bytes | bytearray | memoryview | str) -> None:
        """Parse a sentence.

        Args:
            data: One complete sentence candidate; str characters outside
                latin-1 become ``?``
        """
        if isinstance(data, str):
            data = data.encode("latin-1", errors="replace")
        self._data = memoryview(data).cast("B")

        self._checksum = 0
        self._checksum_present = False
        self._checksum_valid = False
        self._fields: list[str] = []
        self._talker: str | None = None
        self._message_code: str | None = None
        self._index = 1
        self._errors: list[FieldError] = []

        self._parse()

    def _parse(self) -> None:
        # latin-1 keeps a one-to-one mapping between bytes and characters
        text = bytes(self._data).decode("latin-1").rstrip(TRAILING_JUNK)

        star = text.rfind(CHECKSUM_DELIMITER)
        if star != -1 and star + 3 <= len(text):
            digits = text[star + 1 : star + 3]
            if all(c in _HEX_DIGITS for c in digits):
                self._checksum = int(digits, 16)
                self._checksum_present = True
                self._checksum_valid = nmea_checksum(self._data, star + 1) == self._checksum

        if not text.startswith(START):
            logger.debug("Sentence does not start with %r: %r", START, text[:16])
            return

        first_star = text.find(CHECKSUM_DELIMITER)
        if first_star != -1:
            text = text[:first_star]

        self._fields = text[len(START) :].split(DELIMITER)

        header = self._fields[0]
        if len(header) >= TALKER_LENGTH + MESSAGE_CODE_LENGTH:
            self._talker = header[:TALKER_LENGTH]
            self._message_code = header[TALKER_LENGTH : TALKER_LENGTH + MESSAGE_CODE_LENGTH]

        logger.debug(
            "Parsed sentence %s%s: %d fields, checksum %s",
            self._talker,
            self._message_code,
            len(self._fields),
            "valid" if self._checksum_valid else "invalid",
        )

    # ------------------------------------------------------------------
    # Sentence properties
    # ------------------------------------------------------------------

    @property
    def talker(self) -> str | None:
        """2-character talker, or None if the header token was too short."""
        return self._talker

    @property
    def message_code(self) -> str | None:
        """3-character message code, or None if the header token was too short."""
        return self._message_code

    @property
    def size(self) -> int:
        """Length of the raw input in bytes."""
        return len(self._data)

    @property
    def field_count(self) -> int:
        """Number of fields including the header token (0 if unparseable)."""
        return len(self._fields)

    @property
    def fields(self) -> tuple[str, ...]:
        return tuple(self._fields)

    @property
    def fields_remaining(self) -> int:
        """Number of fields not yet consumed."""
        return max(0, len(self._fields) - self._index)

    @property
    def checksum(self) -> int:
        """Checksum claimed by the sentence (0 if absent)."""
        return self._checksum

    @property
    def checksum_present(self) -> bool:
        return self._checksum_present

    @property
    def checksum_valid(self) -> bool:
        """True if a ``*HH`` suffix was present and matches the sentence."""
        return self._checksum_valid

    @property
    def errors(self) -> list[FieldError]:
        """Field errors recorded since construction or the last reset()."""
        return list(self._errors)

    @property
    def has_error(self) -> bool:
        return bool(self._errors)

    def reset(self) -> None:
        """Rewind to the first field after the header and clear recorded errors."""
        self._index = 1
        self._errors.clear()

    def flag_error(self, expected: str, reason: str, index: int | None = None) -> None:
        """Record a data error found by a payload reader.

        Args:
            expected: What was expected
            reason: Explanation
            index: Field index (default: the field most recently consumed)
        """
        if index is None:
            index = max(0, self._index - 1)
        text = self._fields[index] if index < len(self._fields) else None
        self._record(index, text, expected, reason)

    def _record(self, index: int, text: str | None, expected: str, reason: str) -> None:
        error = FieldError(index=index, text=text, expected=expected, reason=reason)
        logger.debug("Field error: %s", error)
        self._errors.append(error)

    # ------------------------------------------------------------------
    # Field access
    # ------------------------------------------------------------------

    def peek(self) -> str | None:
        """Return the next field without consuming it, or None if exhausted."""
        if self._index >= len(self._fields):
            return None
        return self._fields[self._index]

    def next_field(self) -> str | None:
        """Consume and return the next raw field.

        Returns:
            Field text, or None (with an error recorded) if no fields remain
        """
        if self._index >= len(self._fields):
            self._record(self._index, None, "field", "no more fields")
            return None

        field = self._fields[self._index]
        self._index += 1
        return field

    def _next_matching(self, pattern: re.Pattern[str], expected: str) -> str | None:
        index = self._index
        field = self.next_field()
        if field is None:
            return None
        if not field:
            self._record(index, field, expected, "empty field")
            return None
        if pattern.fullmatch(field) is None:
            self._record(index, field, expected, f"invalid {expected} text {field!r}")
            return None
        return field

    def read_int(self) -> int:
        """Read a signed 32-bit decimal integer (0 on error)."""
        index = self._index
        field = self._next_matching(_INT_RE, "int")
        if field is None:
            return 0
        value = int(field)
        if not INT32_MIN <= value <= INT32_MAX:
            self._record(index, field, "int", f"{value} out of 32-bit range")
            return 0
        return value

    def read_uint(self) -> int:
        """Read an unsigned 32-bit decimal integer (0 on error)."""
        index = self._index
        field = self._next_matching(_UINT_RE, "uint")
        if field is None:
            return 0
        value = int(field)
        if value > UINT32_MAX:
            self._record(index, field, "uint", f"{value} out of 32-bit range")
            return 0
        return value

    def read_float(self) -> float:
        """Read a floating point number (0.0 on error)."""
        field = self._next_matching(_FLOAT_RE, "float")
        if field is None:
            return 0.0
        return float(field)

    def read_register(self) -> Register32:
        """Read a register written as hex, with optional ``0x`` prefix (Register32(0) on error)."""
        field = self._next_matching(_HEX_RE, "register")
        if field is None:
            return Register32(0)
        value = int(field[2:] if field[:2] in ("0x", "0X") else field, 16)
        return Register32(value)

    def read_str(self) -> str:
        """Read a field as text; only fails when no fields remain ("" then)."""
        field = self.next_field()
        return "" if field is None else field

    def read_bool(self) -> bool:
        """Read ``0`` or ``1`` as a boolean (False on error)."""
        index = self._index
        field = self._next_matching(_UINT_RE, "bool")
        if field is None:
            return False
        if field not in ("0", "1"):
            self._record(index, field, "bool", f"expected 0 or 1, got {field!r}")
            return False
        return field == "1"

    def read_enum(self, enum_type: type[E]) -> E | None:
        """Read an integer field and map it onto ``enum_type`` (None on error)."""
        index = self._index
        errors_before = len(self._errors)
        raw = self.read_int()
        if len(self._errors) > errors_before:
            return None
        try:
            return enum_type(raw)
        except ValueError:
            self._record(
                index, self._fields[index], enum_type.__name__, f"{raw} is not a valid member"
            )
            return None

    def read(self, kind: type[Any]) -> Any:
        """Read the next field as ``kind``.

        Args:
            kind: int, float, str, bool, Register32 or an Enum subclass

        Raises:
            TypeError: If kind is not a supported field type
        """
        if kind is bool:
            return self.read_bool()
        if isinstance(kind, type) and issubclass(kind, enum.Enum):
            return self.read_enum(kind)
        if kind is int:
            return self.read_int()
        if kind is float:
            return self.read_float()
        if kind is str:
            return self.read_str()
        if kind is Register32:
            return self.read_register()
        raise TypeError(f"Unsupported field type: {kind!r}")


def decode(
    payload: Any,
    data: bytes | bytearray | memoryview | str,
    *,
    config: CodecConfig | None = None,
) -> AnyMessage:
    """Decode a complete sentence into an AnyMessage.

    Unlike SentenceDecoder, this helper is strict: anything short of a clean
    decode raises DecodeError.

    Args:
        payload: Payload type (instantiated with no arguments) or a template
            instance to decode into (it is copied, not modified)
        data: Sentence bytes
        config: Codec configuration (require_checksum is honored)

    Returns:
        An AnyMessage holding the decoded payload

    Raises:
        DecodeError: If the sentence is malformed, the checksum is missing or
            wrong (when required), the message code does not match the payload
            type's code, or any field fails to decode
        SchemaError: If payload type cannot be carried by AnyMessage

    Examples:
        ```python
        from nmeacomm import decode

        msg = decode(GGAMessage, b"$GPGGA,42,123.456,STRING*40\\r\\n")
        gga = msg.get(GGAMessage)
        ```
    """
    from ..any_message import AnyMessage
    from ..registry import message_code_for

    config = config if config is not None else CodecConfig()
    decoder = SentenceDecoder(data)

    if decoder.field_count == 0:
        raise DecodeError(f"Not an NMEA sentence: missing {START!r} marker")
    if decoder.talker is None or decoder.message_code is None:
        raise DecodeError(f"Malformed header token {decoder.fields[0]!r}")
    if config.require_checksum and not decoder.checksum_valid:
        if decoder.checksum_present:
            raise DecodeError(f"Checksum mismatch: sentence claims {decoder.checksum:02X}")
        raise DecodeError("Missing checksum")

    payload_type = payload if isinstance(payload, type) else type(payload)
    expected_code = message_code_for(payload_type, required=False)
    if expected_code is not None and expected_code != decoder.message_code:
        raise DecodeError(
            f"Message code mismatch: sentence is {decoder.message_code}, "
            f"{payload_type.__name__} expects {expected_code}"
        )

    value = payload() if isinstance(payload, type) else payload
    try:
        message = AnyMessage(decoder.talker, value, message_code=decoder.message_code)
    except HeaderError as e:
        raise DecodeError(f"Malformed header token {decoder.fields[0]!r}: {e}") from e
    message.deserialize_payload(decoder)

    if decoder.has_error:
        details = "; ".join(str(e) for e in decoder.errors)
        raise DecodeError(f"Failed to decode {payload_type.__name__}: {details}", decoder.errors)

    if decoder.fields_remaining:
        logger.debug(
            "%d unread fields after decoding %s", decoder.fields_remaining, payload_type.__name__
        )

    message.checksum = decoder.checksum
    message.size = decoder.size
    return message
