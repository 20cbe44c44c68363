"""nmeacomm: NMEA 0183 Sentence Codec

A Python library for writing and reading NMEA 0183 style sentences
(``$TTMMM,f1,...,fN*HH\\r\\n``) and for carrying unrelated payload types in a
single type-erased message container.

Key Features:
- Streaming sentence encoder with hex/decimal and float format modes
- Tolerant sentence decoder that records field errors instead of raising
- Pydantic-based declarative payloads
- AnyMessage container for payloads with no common base class

Quick Start:
    >>> from typing import ClassVar
    >>> from nmeacomm import AnyMessage, SentenceMessage, encode, decode
    >>>
    >>> class GGAMessage(SentenceMessage):
    ...     i: int = 42
    ...     d: float = 123.456
    ...     s: str = "STRING"
    ...     nmea_message_code: ClassVar[str | None] = "GGA"
    >>>
    >>> sentence = encode(AnyMessage("GP", GGAMessage(i=1, d=43.34, s="HELLO")))
    >>> decoded = decode(GGAMessage, sentence).get(GGAMessage)
"""

from __future__ import annotations

from .any_message import AnyMessage
from .codec import (
    DEC,
    EMPTY_FIELD,
    HEX,
    FieldError,
    SentenceDecoder,
    SentenceEncoder,
    decode,
    encode,
)
from .config import CodecConfig, FloatFormat
from .exceptions import (
    CapacityError,
    DecodeError,
    EmptyMessageError,
    EncodeError,
    FramingError,
    HeaderError,
    NmeacommError,
    PayloadTypeError,
    SchemaError,
)
from .framing import frame_sentence, unframe_sentence, validate_sentence
from .models import (
    FieldSchema,
    MemoryClass,
    MessageResult,
    MessageSchema,
    Register32,
    SentenceMessage,
)
from .registry import register_payload, unregister_payload
from .utils import format_checksum, nmea_checksum, verify_checksum

__version__ = "0.1.0"

__all__ = [
    # Core API
    "AnyMessage",
    "SentenceMessage",
    "encode",
    "decode",
    # Streams
    "SentenceEncoder",
    "SentenceDecoder",
    "FieldError",
    "HEX",
    "DEC",
    "EMPTY_FIELD",
    # Configuration
    "CodecConfig",
    "FloatFormat",
    # Field types
    "Register32",
    "MessageResult",
    "MemoryClass",
    # Schema
    "MessageSchema",
    "FieldSchema",
    # Registry
    "register_payload",
    "unregister_payload",
    # Exceptions
    "NmeacommError",
    "SchemaError",
    "EncodeError",
    "CapacityError",
    "DecodeError",
    "FramingError",
    "HeaderError",
    "PayloadTypeError",
    "EmptyMessageError",
    # Framing
    "frame_sentence",
    "unframe_sentence",
    "validate_sentence",
    # Checksum
    "nmea_checksum",
    "format_checksum",
    "verify_checksum",
    # Version
    "__version__",
]
