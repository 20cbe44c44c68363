"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from typing import Iterator

import pytest

from nmeacomm import registry


@pytest.fixture(autouse=True)
def restore_registry() -> Iterator[None]:
    """Undo payload registrations made by a test."""
    saved = dict(registry.PAYLOAD_REGISTRY)
    yield
    registry.PAYLOAD_REGISTRY.clear()
    registry.PAYLOAD_REGISTRY.update(saved)


@pytest.fixture
def buffer() -> bytearray:
    """Output buffer of the maximum NMEA sentence length."""
    return bytearray(82)


@pytest.fixture
def gga_sentence() -> bytes:
    """Well-formed sentence with a valid checksum."""
    return b"$GPGGA,42,123.456,STRING*40\r\n"
