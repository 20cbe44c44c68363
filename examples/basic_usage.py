#!/usr/bin/env python3
"""Basic usage example for nmeacomm.

This example demonstrates:
1. Writing a sentence field by field with SentenceEncoder
2. Reading it back with SentenceDecoder
3. Carrying unrelated payload types in AnyMessage
4. One-shot encode/decode
"""

from __future__ import annotations

from typing import ClassVar, Optional

from nmeacomm import (
    DEC,
    HEX,
    AnyMessage,
    MemoryClass,
    Register32,
    SentenceDecoder,
    SentenceEncoder,
    SentenceMessage,
    decode,
    encode,
    register_payload,
)


class GGAMessage(SentenceMessage):
    """Position-style message with three fields."""

    i: int = 42
    d: float = 123.456
    s: str = "STRING"

    nmea_message_code: ClassVar[Optional[str]] = "GGA"


class RMCMessage:
    """A payload type with no nmeacomm base class."""

    def __init__(self, a: int = 7, b: float = 3.14) -> None:
        self.a = a
        self.b = b


def write_rmc(msg: RMCMessage, encoder: SentenceEncoder) -> None:
    encoder.write(msg.a, msg.b)


def read_rmc(msg: RMCMessage, decoder: SentenceDecoder) -> None:
    msg.a = decoder.read_int()
    msg.b = decoder.read_float()


register_payload(RMCMessage, write=write_rmc, read=read_rmc, message_code="RMC")


def main() -> None:
    """Run the basic usage example."""
    print("=" * 60)
    print("nmeacomm Basic Usage Example")
    print("=" * 60)
    print()

    # Stream API
    print("1. Writing a sentence field by field...")
    buf = bytearray(82)
    enc = SentenceEncoder(buf, "GT", "GGA")
    enc.write(1, 43.34, "HELLO", HEX, Register32(0x11), DEC, MemoryClass.NONVOLATILE)
    sentence = enc.end_message()
    print(f"   Sentence: {sentence!r}")
    print(f"   Checksum: {enc.checksum:02X}")
    print()

    print("2. Reading it back...")
    dec = SentenceDecoder(sentence)
    print(f"   Talker: {dec.talker}, code: {dec.message_code}, valid: {dec.checksum_valid}")
    print(f"   int={dec.read_int()} float={dec.read_float()} str={dec.read_str()!r}")
    print(f"   register={dec.read_register()} memory={dec.read_enum(MemoryClass)!r}")
    print(f"   Errors: {dec.errors}")
    print()

    # Type-erased container
    print("3. Carrying unrelated payload types...")
    outbox = [
        AnyMessage("GP", GGAMessage(i=1, d=43.34, s="HELLO")),
        AnyMessage("GP", RMCMessage()),
    ]
    for msg in outbox:
        print(f"   {msg.type.__name__:<12} -> {encode(msg)!r}")
    print()

    # Decode
    print("4. Decoding a received sentence...")
    received = decode(GGAMessage, b"$GPGGA,42,123.456,STRING*40\r\n")
    gga = received.get(GGAMessage)
    print(f"   {received.talker}{received.message_code}: i={gga.i} d={gga.d} s={gga.s!r}")
    print()

    # A corrupted sentence still parses, with its checksum flagged
    dec = SentenceDecoder(b"$GPGGA,42,123.456,STRING*1B\r\n")
    print(f"5. Corrupted sentence: checksum valid = {dec.checksum_valid}")
    print()

    print("=" * 60)
    print("Example complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
