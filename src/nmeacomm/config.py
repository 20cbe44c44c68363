"""Codec configuration.

This module provides the configuration dataclass shared by the sentence
encoder and the one-shot encode/decode helpers.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


class FloatFormat(enum.Enum):
    """Text format used for floating point fields.

    Members:
        FIXED: Fixed-point notation, e.g. ``43.340000``
        SCIENTIFIC: Exponent notation, e.g. ``4.334000E+01``
        GENERAL: Shortest of the two, e.g. ``43.34``
    """

    FIXED = "f"
    SCIENTIFIC = "E"
    GENERAL = "G"


@dataclass
class CodecConfig:
    """Configuration for sentence encoding and decoding.

    Attributes:
        max_sentence_length: Size of the buffer allocated by the one-shot
            ``encode`` helper (default 82, the NMEA 0183 limit including
            '$' and CRLF). Streams given a caller buffer use that buffer's size.

        float_format: Initial float format of a new encoder (default FIXED).

        float_precision: Digits after the decimal point for float fields
            (default 6, matching C's ``%f``).

        hex_width: Minimum number of hex digits written for integers in hex
            mode (default 4, giving ``0x002A``).

        require_checksum: If True (default), ``decode`` rejects sentences
            without a valid ``*HH`` suffix.

    Examples:
        ```python
        from nmeacomm import CodecConfig, FloatFormat

        # Compact floats, lenient decoding
        config = CodecConfig(
            float_format=FloatFormat.GENERAL,
            float_precision=8,
            require_checksum=False,
        )
        ```
    """

    max_sentence_length: int = 82
    float_format: FloatFormat = FloatFormat.FIXED
    float_precision: int = 6
    hex_width: int = 4
    require_checksum: bool = True

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        # '$' + talker + code + '*HH' + CRLF
        if self.max_sentence_length < 11:
            raise ValueError(
                f"max_sentence_length must be >= 11, got {self.max_sentence_length}"
            )

        if not isinstance(self.float_format, FloatFormat):
            raise ValueError(f"float_format must be a FloatFormat, got {self.float_format!r}")

        if not 0 <= self.float_precision <= 17:
            raise ValueError(f"float_precision must be 0-17, got {self.float_precision}")

        if not 1 <= self.hex_width <= 8:
            raise ValueError(f"hex_width must be 1-8, got {self.hex_width}")
