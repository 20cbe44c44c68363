"""Base message class for declarative sentence payloads.

This module provides the SentenceMessage class. Subclasses declare their
fields with ordinary Pydantic annotations; the fields are written to and read
from a sentence in declaration order.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar

from pydantic import BaseModel, ConfigDict, ValidationError

from .schema import KIND_ENUM, KIND_REGISTER, MessageSchema

if TYPE_CHECKING:
    from ..codec.decoder import SentenceDecoder
    from ..codec.encoder import SentenceEncoder


class SentenceMessage(BaseModel):
    """Base class for payloads described by their fields.

    Supported annotations are int, float, str, bool, Register32, int-valued
    Enum subclasses, and Optional versions of those (None is written as an
    empty field, and an empty field reads back as None). Register32 fields
    are always written in hex.

    An empty string is also written as an empty field, so an Optional[str]
    set to "" reads back as None. Use a plain str field when "" must survive
    a round trip.

    Example:
        >>> from typing import ClassVar
        >>> class GGAMessage(SentenceMessage):
        ...     i: int = 42
        ...     d: float = 123.456
        ...     s: str = "STRING"
        ...
        ...     nmea_message_code: ClassVar[str | None] = "GGA"

    Attributes:
        nmea_message_code: 3-letter message code used when an AnyMessage is
            built without an explicit code (optional)
    """

    model_config = ConfigDict(
        # Validate on assignment so decoded values respect field constraints
        validate_assignment=True,
        # Forbid extra fields not defined in schema
        extra="forbid",
    )

    nmea_message_code: ClassVar[str | None] = None

    def write_payload(self, encoder: SentenceEncoder) -> None:
        """Write every field, in declaration order, to ``encoder``.

        Register32 fields are written in hex so read_register() gets them back
        unchanged; the encoder's base is restored afterwards.
        """
        schema = MessageSchema.from_model(type(self))
        for field_schema in schema.fields:
            value = getattr(self, field_schema.name)
            if field_schema.kind == KIND_REGISTER and value is not None:
                base = encoder.base
                encoder.hex()
                try:
                    encoder.write(value)
                finally:
                    if base == 10:
                        encoder.dec()
            else:
                encoder.write(value)

    def read_payload(self, decoder: SentenceDecoder) -> None:
        """Read every field, in declaration order, from ``decoder``.

        A field that fails to parse, or whose value the model rejects, is
        recorded on the decoder and keeps its current value.
        """
        schema = MessageSchema.from_model(type(self))
        for field_schema in schema.fields:
            if field_schema.optional and decoder.peek() == "":
                decoder.next_field()
                self._assign(decoder, field_schema.name, None)
                continue

            errors_before = len(decoder.errors)
            if field_schema.kind == KIND_ENUM:
                value: Any = decoder.read_enum(field_schema.enum_type)
            else:
                value = decoder.read(field_schema.python_type)
            if len(decoder.errors) > errors_before:
                continue

            self._assign(decoder, field_schema.name, value)

    def _assign(self, decoder: SentenceDecoder, name: str, value: Any) -> None:
        try:
            setattr(self, name, value)
        except ValidationError as e:
            decoder.flag_error(name, f"rejected by {type(self).__name__}: {e.errors()[0]['msg']}")
