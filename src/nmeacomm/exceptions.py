"""Exception hierarchy for nmeacomm.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from NmeacommError for easy catching of any nmeacomm-specific error.

Data-shaped problems met while reading a sentence (bad field text, missing
fields, checksum mismatch) are recorded on the SentenceDecoder instead of being
raised. The exceptions below cover programming errors and the strict one-shot
helpers.
"""

from __future__ import annotations

from typing import Any, Sequence


class NmeacommError(Exception):
    """Base exception for all nmeacomm errors."""

    pass


class SchemaError(NmeacommError):
    """Raised when a payload type cannot be carried by the codec.

    Examples:
        - Payload type has no write/read routine
        - No message code trait for a payload type
        - Unsupported field annotation on a SentenceMessage
    """

    pass


class EncodeError(NmeacommError):
    """Raised when encoding a sentence fails.

    Examples:
        - Integer outside the 32-bit range
        - String field containing a delimiter
        - Write after the sentence was finalized
    """

    pass


class CapacityError(EncodeError):
    """Raised when the output buffer has no room for the next write.

    Nothing is written when this is raised, so the buffer still holds a
    consistent prefix of the sentence.

    Attributes:
        required: Bytes the write needed
        available: Bytes left in the buffer
    """

    def __init__(self, message: str, *, required: int, available: int) -> None:
        super().__init__(message)
        self.required = required
        self.available = available


class DecodeError(NmeacommError):
    """Raised by the strict decode helper when a sentence cannot be decoded.

    Examples:
        - Missing '$' marker
        - Checksum mismatch
        - Field text that does not match the expected type

    Attributes:
        errors: Field errors collected by the decoder, if any
    """

    def __init__(self, message: str, errors: Sequence[Any] = ()) -> None:
        super().__init__(message)
        self.errors = list(errors)


class FramingError(NmeacommError):
    """Raised when sentence framing is invalid.

    Examples:
        - Missing '$' start marker
        - Missing or malformed '*HH' checksum suffix
        - Checksum mismatch
    """

    pass


class HeaderError(NmeacommError, ValueError):
    """Raised when a talker or message code has the wrong shape."""

    pass


class PayloadTypeError(NmeacommError, TypeError):
    """Raised when a message payload is accessed as the wrong type."""

    pass


class EmptyMessageError(NmeacommError):
    """Raised when (de)serializing through a message that holds no payload."""

    pass
