"""NMEA sentence codec for nmeacomm.

This module provides the streaming sentence encoder and decoder, the one-shot
encode/decode helpers, and the sentence layout constants.
"""

from __future__ import annotations

from .decoder import FieldError, SentenceDecoder, decode
from .encoder import DEC, EMPTY_FIELD, HEX, Manipulator, SentenceEncoder, encode
from .sentence import (
    MAX_SENTENCE_LENGTH,
    MESSAGE_CODE_LENGTH,
    TALKER_LENGTH,
    validate_message_code,
    validate_talker,
)

__all__ = [
    "encode",
    "decode",
    "SentenceEncoder",
    "SentenceDecoder",
    "FieldError",
    "Manipulator",
    "HEX",
    "DEC",
    "EMPTY_FIELD",
    "MAX_SENTENCE_LENGTH",
    "TALKER_LENGTH",
    "MESSAGE_CODE_LENGTH",
    "validate_talker",
    "validate_message_code",
]
