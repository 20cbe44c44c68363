"""Field value types.

This module provides the value types that have a dedicated wire form in
sentence fields: the 32-bit register (hex text) and the small enumerations
shared by command/acknowledge style messages (integer text).
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

REGISTER_MAX = 0xFFFFFFFF


@dataclass(frozen=True)
class Register32:
    """A 32-bit unsigned register value.

    Registers are written through the integer path of the encoder, so they
    should be written in hex mode to be read back with ``read_register()``.

    Example:
        >>> reg = Register32(0x0010).with_bit(0, True)
        >>> reg.to_uint()
        17
        >>> reg.bit(4)
        True
    """

    value: int = 0

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError(f"Register32 value must be an int, got {type(self.value).__name__}")
        if not 0 <= self.value <= REGISTER_MAX:
            raise ValueError(f"Register32 value must be 0-0x{REGISTER_MAX:X}, got {self.value}")

    def to_uint(self) -> int:
        """Return the register as an unsigned integer."""
        return self.value

    def __int__(self) -> int:
        return self.value

    def bit(self, index: int) -> bool:
        """Return whether bit ``index`` (0 = LSB) is set."""
        self._check_index(index)
        return bool((self.value >> index) & 1)

    def with_bit(self, index: int, on: bool) -> Register32:
        """Return a copy with bit ``index`` set or cleared."""
        self._check_index(index)
        if on:
            return Register32(self.value | (1 << index))
        return Register32(self.value & ~(1 << index))

    @staticmethod
    def _check_index(index: int) -> None:
        if not 0 <= index < 32:
            raise IndexError(f"Register bit index must be 0-31, got {index}")

    def __str__(self) -> str:
        return f"0x{self.value:08X}"


class MessageResult(enum.IntEnum):
    """Outcome carried by acknowledge messages."""

    NACK = 0
    ACK = 1


class MemoryClass(enum.IntEnum):
    """Where a setting is stored by the receiving device."""

    VOLATILE = 1
    NONVOLATILE = 2
