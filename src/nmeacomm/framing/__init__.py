"""Sentence framing utilities for nmeacomm.

This module provides utilities for adding and removing the NMEA start marker,
checksum suffix and terminator around a sentence body.
"""

from __future__ import annotations

from .basic import frame_sentence, unframe_sentence, validate_sentence

__all__ = [
    "frame_sentence",
    "unframe_sentence",
    "validate_sentence",
]
