"""Payload registry for nmeacomm.

This module lets types that know nothing about nmeacomm be carried by
AnyMessage. A type qualifies in one of two ways:

- It defines ``write_payload(self, encoder)`` and ``read_payload(self, decoder)``
  methods (SentenceMessage subclasses do).
- Free write/read functions are registered for it with register_payload().

The registry also holds the 3-letter message code trait used when an
AnyMessage is built without an explicit message code.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional

from .codec.sentence import validate_message_code
from .exceptions import HeaderError, SchemaError
from .models.base import SentenceMessage
from .models.schema import MessageSchema

PayloadWriter = Callable[[Any, Any], None]
PayloadReader = Callable[[Any, Any], Any]


@dataclass(frozen=True)
class PayloadCodec:
    """Write/read routines and message code trait of one payload type.

    Attributes:
        payload_type: The payload class
        write: ``write(value, encoder)`` writes the payload fields
        read: ``read(value, decoder)`` reads the payload fields into value; it
            may return a replacement value instead (for immutable payloads)
        message_code: Default 3-letter message code, if any
    """

    payload_type: type
    write: PayloadWriter
    read: PayloadReader
    message_code: Optional[str] = None


# Global registry: payload type -> codec
PAYLOAD_REGISTRY: dict[type, PayloadCodec] = {}


def register_payload(
    payload_type: type,
    *,
    write: PayloadWriter,
    read: PayloadReader,
    message_code: str | None = None,
) -> PayloadCodec:
    """Register free write/read functions for a payload type.

    Args:
        payload_type: Class to register
        write: ``write(value, encoder)``
        read: ``read(value, decoder)``, optionally returning a replacement value
        message_code: Default message code for this type

    Returns:
        The registered PayloadCodec

    Raises:
        ValueError: If the type is already registered with different functions
        HeaderError: If message_code is not exactly 3 characters

    Example:
        >>> @dataclasses.dataclass
        ... class RMCMessage:
        ...     a: int = 7
        ...     b: float = 3.14
        >>> def write_rmc(msg, enc):
        ...     enc.write(msg.a, msg.b)
        >>> def read_rmc(msg, dec):
        ...     msg.a = dec.read_int()
        ...     msg.b = dec.read_float()
        >>> register_payload(RMCMessage, write=write_rmc, read=read_rmc, message_code="RMC")
    """
    if not callable(write) or not callable(read):
        raise TypeError("write and read must be callable")
    if message_code is not None:
        validate_message_code(message_code)

    codec = PayloadCodec(payload_type, write, read, message_code)

    existing = PAYLOAD_REGISTRY.get(payload_type)
    if existing is not None:
        if existing == codec:
            # Already registered, no-op
            return existing
        raise ValueError(
            f"{payload_type.__name__} is already registered. "
            f"Call unregister_payload() first to replace it."
        )

    PAYLOAD_REGISTRY[payload_type] = codec
    return codec


def unregister_payload(payload_type: type) -> None:
    """Remove a payload type from the registry (no-op if absent)."""
    PAYLOAD_REGISTRY.pop(payload_type, None)


def _write_method(value: Any, encoder: Any) -> None:
    value.write_payload(encoder)


def _read_method(value: Any, decoder: Any) -> Any:
    return value.read_payload(decoder)


def payload_codec_for(payload_type: type) -> PayloadCodec:
    """Resolve the write/read routines for a payload type.

    Registered functions take precedence over methods.

    Raises:
        SchemaError: If the type has neither registered functions nor
            write_payload/read_payload methods
    """
    codec = PAYLOAD_REGISTRY.get(payload_type)
    if codec is not None:
        return codec

    has_write = callable(getattr(payload_type, "write_payload", None))
    has_read = callable(getattr(payload_type, "read_payload", None))
    if not (has_write and has_read):
        missing = [
            name
            for name, present in (("write_payload", has_write), ("read_payload", has_read))
            if not present
        ]
        raise SchemaError(
            f"{payload_type.__name__} cannot be carried by AnyMessage: missing "
            f"{' and '.join(missing)}. Define the methods or call register_payload()."
        )

    # Declarative models must have a usable field layout
    if issubclass(payload_type, SentenceMessage):
        MessageSchema.from_model(payload_type)

    return PayloadCodec(
        payload_type,
        _write_method,
        _read_method,
        getattr(payload_type, "nmea_message_code", None),
    )


def message_code_for(payload_type: type, *, required: bool = True) -> str | None:
    """Look up the message code trait of a payload type.

    Args:
        payload_type: Payload class
        required: Raise instead of returning None when no code is known

    Returns:
        The 3-letter code, or None if unknown and not required

    Raises:
        SchemaError: If required and the type has no code, or the code is not
            exactly 3 characters
    """
    codec = PAYLOAD_REGISTRY.get(payload_type)
    code = codec.message_code if codec is not None else None
    if code is None:
        code = getattr(payload_type, "nmea_message_code", None)

    if code is None:
        if required:
            raise SchemaError(
                f"No message code known for {payload_type.__name__}. Pass message_code=, "
                f"set nmea_message_code, or register one with register_payload()."
            )
        return None

    try:
        return validate_message_code(code)
    except HeaderError as e:
        raise SchemaError(f"Invalid message code trait on {payload_type.__name__}: {e}") from e
