"""Utility functions for nmeacomm.

This module provides the NMEA checksum helpers.
"""

from __future__ import annotations

from .checksum import format_checksum, nmea_checksum, verify_checksum

__all__ = [
    "nmea_checksum",
    "format_checksum",
    "verify_checksum",
]
