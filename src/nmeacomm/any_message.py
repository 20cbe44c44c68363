"""Type-erased NMEA message container.

AnyMessage owns exactly one payload of any type that can write its fields to a
SentenceEncoder and read them back from a SentenceDecoder, plus the sentence
metadata (talker, message code, cached checksum and size). Unrelated payload
types therefore share one container type without a common base class.

Design:
- The payload sits behind a small capability interface (_PayloadConcept:
  clone / type / write / read) owned by exactly one container.
- _PayloadModel implements that interface for any concrete type by forwarding
  to the write/read routines resolved in nmeacomm.registry.
- Copying deep-clones the payload; take() moves it and empties the source.
"""

from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from .codec.sentence import validate_message_code, validate_talker
from .exceptions import EmptyMessageError, HeaderError, PayloadTypeError, SchemaError
from .registry import PayloadCodec, message_code_for, payload_codec_for

if TYPE_CHECKING:
    from .codec.decoder import SentenceDecoder
    from .codec.encoder import SentenceEncoder

T = TypeVar("T")

NoneType = type(None)

_MISSING: Any = object()


class _PayloadConcept(ABC):
    """Capability interface every held payload is accessed through."""

    @abstractmethod
    def clone(self) -> _PayloadConcept: ...

    @property
    @abstractmethod
    def type(self) -> type: ...

    @property
    @abstractmethod
    def value(self) -> Any: ...

    @abstractmethod
    def write(self, encoder: SentenceEncoder) -> None: ...

    @abstractmethod
    def read(self, decoder: SentenceDecoder) -> None: ...


class _PayloadModel(_PayloadConcept, Generic[T]):
    """Adapter holding one payload of type T and forwarding to its codec."""

    __slots__ = ("_value", "_codec")

    def __init__(self, value: T, codec: PayloadCodec) -> None:
        self._value = value
        self._codec = codec

    def clone(self) -> _PayloadModel[T]:
        return _PayloadModel(copy.deepcopy(self._value), self._codec)

    @property
    def type(self) -> type:
        return type(self._value)

    @property
    def value(self) -> T:
        return self._value

    def write(self, encoder: SentenceEncoder) -> None:
        self._codec.write(self._value, encoder)

    def read(self, decoder: SentenceDecoder) -> None:
        replacement = self._codec.read(self._value, decoder)
        if replacement is not None:
            if type(replacement) is not type(self._value):
                raise PayloadTypeError(
                    f"Reader for {type(self._value).__name__} returned "
                    f"{type(replacement).__name__}"
                )
            self._value = replacement


class AnyMessage:
    """A value holding one NMEA payload of any supported type.

    A message is either empty (no payload, no talker or code, checksum and
    size 0) or holds exactly one payload with a valid talker and message code.

    Construction:
        ``AnyMessage()``
            Empty message.
        ``AnyMessage(talker, value, message_code="GGA")``
            Explicit message code.
        ``AnyMessage(talker, value)``
            Message code taken from the payload type's trait (its
            ``nmea_message_code`` attribute or its registry entry).

    The container stores a deep copy of ``value``; later changes to the
    original do not affect it.

    Examples:
        ```python
        from nmeacomm import AnyMessage, SentenceEncoder

        msg = AnyMessage("GT", GGAMessage(i=1, d=43.34, s="HELLO"), message_code="GGA")

        buf = bytearray(82)
        enc = SentenceEncoder(buf, msg.talker, msg.message_code)
        msg.serialize_payload(enc)   # payload fields only
        sentence = enc.end_message()  # framing and checksum

        gga = msg.get(GGAMessage)
        ```
    """

    __slots__ = ("_self", "_talker", "_message_code", "_checksum", "_size")

    def __init__(
        self,
        talker: str | None = None,
        value: Any = _MISSING,
        *,
        message_code: str | None = None,
    ) -> None:
        """Create an empty message or a message holding a copy of ``value``.

        Args:
            talker: 2-character talker ID
            value: Payload to copy into the message
            message_code: 3-character message code (default: payload type trait)

        Raises:
            HeaderError: If talker or message code has the wrong length
            SchemaError: If the payload type has no write/read routines, or no
                message code is given and the type has no trait
            ValueError: If only some of talker/value are given
        """
        self._self: _PayloadConcept | None = None
        self._talker: str | None = None
        self._message_code: str | None = None
        self._checksum = 0
        self._size = 0

        if talker is None and value is _MISSING:
            if message_code is not None:
                raise ValueError("message_code given without talker and value")
            return
        if talker is None or value is _MISSING:
            raise ValueError("AnyMessage needs both a talker and a value (or neither)")
        if isinstance(value, AnyMessage):
            raise SchemaError("An AnyMessage cannot hold another AnyMessage")

        payload_type = type(value)
        codec = payload_codec_for(payload_type)
        if message_code is None:
            message_code = message_code_for(payload_type)

        self._talker = validate_talker(talker)
        self._message_code = validate_message_code(message_code)
        self._self = _PayloadModel(copy.deepcopy(value), codec)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    def is_empty(self) -> bool:
        """True if no payload is held."""
        return self._self is None

    def __bool__(self) -> bool:
        return self._self is not None

    def reset(self) -> None:
        """Release the payload and clear all metadata."""
        self._self = None
        self._talker = None
        self._message_code = None
        self._checksum = 0
        self._size = 0

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------

    @property
    def talker(self) -> str | None:
        return self._talker

    @talker.setter
    def talker(self, talker: str) -> None:
        self._require_payload("talker")
        self._talker = validate_talker(talker)

    @property
    def message_code(self) -> str | None:
        return self._message_code

    @message_code.setter
    def message_code(self, message_code: str) -> None:
        self._require_payload("message code")
        self._message_code = validate_message_code(message_code)

    @property
    def checksum(self) -> int:
        """Checksum of the sentence this message was last encoded to or decoded from."""
        return self._checksum

    @checksum.setter
    def checksum(self, checksum: int) -> None:
        self._require_payload("checksum")
        if isinstance(checksum, bool) or not isinstance(checksum, int) or not 0 <= checksum <= 0xFF:
            raise ValueError(f"Checksum must be an int 0-255, got {checksum!r}")
        self._checksum = checksum

    @property
    def size(self) -> int:
        """Size in bytes of the sentence this message was last encoded to or decoded from."""
        return self._size

    @size.setter
    def size(self, size: int) -> None:
        self._require_payload("size")
        if isinstance(size, bool) or not isinstance(size, int) or size < 0:
            raise ValueError(f"Size must be a non-negative int, got {size!r}")
        self._size = size

    def _require_payload(self, what: str) -> None:
        # An empty message keeps cleared metadata
        if self._self is None:
            raise EmptyMessageError(f"Cannot set {what} on an empty AnyMessage")

    def validate_header(self) -> None:
        """Check that talker and message code are set.

        Raises:
            HeaderError: If either is missing
        """
        if self._talker is None:
            raise HeaderError("talker not set")
        if self._message_code is None:
            raise HeaderError("message code not set")

    # ------------------------------------------------------------------
    # Type queries / access
    # ------------------------------------------------------------------

    @property
    def type(self) -> type:
        """Type of the held payload, or NoneType when empty."""
        return self._self.type if self._self is not None else NoneType

    def is_type(self, payload_type: type) -> bool:
        """True if the held payload is exactly of ``payload_type``."""
        return self._self is not None and self._self.type is payload_type

    def try_get(self, payload_type: type[T]) -> T | None:
        """Return the held payload if it is a ``payload_type``, else None.

        The returned object is the payload itself; mutating it changes the
        message.
        """
        payload = self._self
        if payload is None or payload.type is not payload_type:
            return None
        return payload.value

    def get(self, payload_type: type[T]) -> T:
        """Return the held payload.

        Raises:
            PayloadTypeError: If the message is empty or holds another type
        """
        payload = self.try_get(payload_type)
        if payload is None:
            raise PayloadTypeError(
                f"AnyMessage holds {self.type.__name__}, not {payload_type.__name__}"
            )
        return payload

    # ------------------------------------------------------------------
    # Payload serialization (no framing here)
    # ------------------------------------------------------------------

    def serialize_payload(self, encoder: SentenceEncoder) -> None:
        """Write the payload fields to ``encoder``.

        Header and checksum belong to the encoder's own lifecycle; call
        ``encoder.end_message()`` afterwards.

        Raises:
            EmptyMessageError: If no payload is held
        """
        if self._self is None:
            raise EmptyMessageError("Cannot serialize an empty AnyMessage")
        self._self.write(encoder)

    def deserialize_payload(self, decoder: SentenceDecoder) -> None:
        """Read the payload fields from ``decoder`` into the held payload.

        Data errors are recorded on the decoder; check ``decoder.has_error``.

        Raises:
            EmptyMessageError: If no payload is held
        """
        if self._self is None:
            raise EmptyMessageError("Cannot deserialize into an empty AnyMessage")
        self._self.read(decoder)

    # ------------------------------------------------------------------
    # Copy / move
    # ------------------------------------------------------------------

    def copy(self) -> AnyMessage:
        """Return an independent copy with a deep clone of the payload."""
        other = AnyMessage()
        other._self = self._self.clone() if self._self is not None else None
        other._talker = self._talker
        other._message_code = self._message_code
        other._checksum = self._checksum
        other._size = self._size
        return other

    def __copy__(self) -> AnyMessage:
        return self.copy()

    def __deepcopy__(self, memo: dict[int, Any]) -> AnyMessage:
        return self.copy()

    def take(self) -> AnyMessage:
        """Move payload and metadata into a new message, leaving this one empty."""
        other = AnyMessage()
        other._self = self._self
        other._talker = self._talker
        other._message_code = self._message_code
        other._checksum = self._checksum
        other._size = self._size
        self.reset()
        return other

    def __repr__(self) -> str:
        if self._self is None:
            return "AnyMessage()"
        return (
            f"AnyMessage(talker={self._talker!r}, message_code={self._message_code!r}, "
            f"value={self._self.value!r})"
        )
