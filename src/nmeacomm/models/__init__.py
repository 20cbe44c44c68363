"""Payload modeling for nmeacomm.

This module provides the SentenceMessage base class, its schema introspection,
and the field value types with a dedicated wire form.
"""

from __future__ import annotations

from .base import SentenceMessage
from .fields import MemoryClass, MessageResult, Register32
from .schema import FieldSchema, MessageSchema

__all__ = [
    "SentenceMessage",
    "Register32",
    "MessageResult",
    "MemoryClass",
    "MessageSchema",
    "FieldSchema",
]
