"""End-to-end integration tests."""

from __future__ import annotations

from typing import ClassVar, Optional

import pytest
from pydantic import Field

from nmeacomm import (
    AnyMessage,
    CodecConfig,
    MemoryClass,
    MessageResult,
    Register32,
    SentenceDecoder,
    SentenceEncoder,
    SentenceMessage,
    decode,
    encode,
    frame_sentence,
    register_payload,
    validate_sentence,
)
from nmeacomm.exceptions import CapacityError, DecodeError, EmptyMessageError, PayloadTypeError


class GGAMessage(SentenceMessage):
    """Three-field position-style payload."""

    i: int = 42
    d: float = 123.456
    s: str = "STRING"

    nmea_message_code: ClassVar[Optional[str]] = "GGA"


class AckMessage(SentenceMessage):
    """Acknowledge for a configuration command."""

    result: MessageResult = MessageResult.NACK
    command_id: int = Field(default=0, ge=0, le=0xFFFF)

    nmea_message_code: ClassVar[Optional[str]] = "ACK"


class ConfigCommand(SentenceMessage):
    """Write a device register to volatile or non-volatile memory."""

    memory: MemoryClass = MemoryClass.VOLATILE
    register: Register32 = Register32(0)
    reboot: bool = False

    nmea_message_code: ClassVar[Optional[str]] = "CFG"


class RMCMessage:
    """Payload type that knows nothing about nmeacomm."""

    def __init__(self, a: int = 7, b: float = 3.14) -> None:
        self.a = a
        self.b = b

    def __eq__(self, other: object) -> bool:
        return isinstance(other, RMCMessage) and (self.a, self.b) == (other.a, other.b)


def write_rmc(msg: RMCMessage, encoder: SentenceEncoder) -> None:
    encoder.write(msg.a, msg.b)


def read_rmc(msg: RMCMessage, decoder: SentenceDecoder) -> None:
    msg.a = decoder.read_int()
    msg.b = decoder.read_float()


class TestScenarios:
    """Reference scenarios for the codec and container."""

    def test_encode_and_decode_fields(self, buffer: bytearray) -> None:
        """Encode GT/GGA with int, double and string fields, then decode them."""
        enc = SentenceEncoder(buffer, "GT", "GGA")
        sentence = enc.write(1, 43.34, "HELLO").end_message()

        assert sentence == b"$GTGGA,1,43.340000,HELLO*23\r\n"

        dec = SentenceDecoder(sentence)
        assert dec.checksum_valid
        assert dec.read_int() == 1
        assert dec.read_float() == 43.34
        assert dec.read_str() == "HELLO"
        assert not dec.has_error

    def test_decode_not_nmea(self) -> None:
        """Input without '$' has no fields and no header."""
        dec = SentenceDecoder("NOTANMEA")

        assert dec.field_count == 0
        assert dec.talker is None
        assert dec.message_code is None

    def test_decode_with_wrong_checksum(self) -> None:
        """Header and fields are still available when the checksum is wrong."""
        dec = SentenceDecoder(b"$GPGGA,42,123.456,STRING*1B\r\n")

        assert dec.talker == "GP"
        assert dec.message_code == "GGA"
        assert dec.fields_remaining == 3
        assert dec.read_int() == 42
        assert not dec.checksum_valid

    def test_serialize_empty_container(self, buffer: bytearray) -> None:
        """Serializing an empty container fails and writes nothing."""
        enc = SentenceEncoder(buffer, "GP", "GGA")
        before = enc.getvalue()

        with pytest.raises(EmptyMessageError):
            AnyMessage().serialize_payload(enc)

        assert enc.getvalue() == before

    def test_container_with_deduced_code(self) -> None:
        """The message code is deduced from the payload type."""
        msg = AnyMessage("MW", GGAMessage(i=1, d=43.34, s="HELLO"))

        assert msg.talker == "MW"
        assert msg.message_code == "GGA"
        assert msg.is_type(GGAMessage)


class TestOneShotHelpers:
    """Test encode() and decode() end to end."""

    def test_encode(self) -> None:
        """Test encoding a container and caching checksum and size."""
        msg = AnyMessage("GT", GGAMessage(i=1, d=43.34, s="HELLO"))
        sentence = encode(msg)

        assert sentence == b"$GTGGA,1,43.340000,HELLO*23\r\n"
        assert msg.checksum == 0x23
        assert msg.size == len(sentence)

    def test_encode_empty(self) -> None:
        """Test error when encoding an empty container."""
        with pytest.raises(EmptyMessageError):
            encode(AnyMessage())

    def test_encode_too_long(self) -> None:
        """Test error when the sentence exceeds the buffer."""
        msg = AnyMessage("GP", GGAMessage(s="X" * 80))
        with pytest.raises(CapacityError):
            encode(msg)

    def test_encode_into_caller_buffer(self) -> None:
        """Test encoding into a caller-owned buffer."""
        buf = bytearray(100)
        sentence = encode(AnyMessage("GP", GGAMessage()), buffer=buf)

        assert bytes(buf[: len(sentence)]) == sentence

    def test_decode(self, gga_sentence: bytes) -> None:
        """Test decoding into a payload type."""
        msg = decode(GGAMessage, gga_sentence)

        assert msg.talker == "GP"
        assert msg.message_code == "GGA"
        assert msg.checksum == 0x40
        assert msg.size == len(gga_sentence)
        assert msg.get(GGAMessage) == GGAMessage(i=42, d=123.456, s="STRING")

    def test_decode_template_is_not_modified(self, gga_sentence: bytes) -> None:
        """Test decoding with a template instance."""
        template = GGAMessage(i=0)
        msg = decode(template, gga_sentence)

        assert template.i == 0
        assert msg.get(GGAMessage).i == 42

    def test_decode_rejects_bad_checksum(self) -> None:
        """Test that decode() enforces the checksum by default."""
        data = b"$GPGGA,42,123.456,STRING*1B\r\n"
        with pytest.raises(DecodeError, match="Checksum mismatch"):
            decode(GGAMessage, data)

        lenient = CodecConfig(require_checksum=False)
        assert decode(GGAMessage, data, config=lenient).get(GGAMessage).i == 42

    def test_decode_missing_checksum(self) -> None:
        """Test that a missing checksum is rejected by default."""
        with pytest.raises(DecodeError, match="Missing checksum"):
            decode(GGAMessage, b"$GPGGA,42,123.456,STRING\r\n")

    def test_decode_not_nmea(self) -> None:
        """Test error on input without '$'."""
        with pytest.raises(DecodeError, match="missing"):
            decode(GGAMessage, b"NOTANMEA")

    def test_decode_short_header(self) -> None:
        """Test error on a header token without talker and code."""
        with pytest.raises(DecodeError, match="Malformed header"):
            decode(GGAMessage, frame_sentence("GP,1"))

    def test_decode_code_mismatch(self) -> None:
        """Test error when the sentence is for another message type."""
        with pytest.raises(DecodeError, match="Message code mismatch"):
            decode(AckMessage, frame_sentence("GPGGA,1,0"))

    def test_decode_field_errors(self) -> None:
        """Test that field errors are raised with details."""
        with pytest.raises(DecodeError) as exc_info:
            decode(GGAMessage, frame_sentence("GPGGA,abc,1.0"))

        errors = exc_info.value.errors
        assert [e.index for e in errors] == [1, 3]
        assert errors[0].expected == "int"
        assert errors[1].reason == "no more fields"


class TestMessageExchange:
    """Test a command/acknowledge exchange between two devices."""

    def test_config_command_roundtrip(self) -> None:
        """Test a command with enum, register and bool fields."""
        command = ConfigCommand(
            memory=MemoryClass.NONVOLATILE,
            register=Register32(0).with_bit(0, True).with_bit(7, True),
            reboot=True,
        )
        sentence = encode(AnyMessage("PX", command))

        assert sentence == frame_sentence("PXCFG,2,0x0081,1")
        assert validate_sentence(sentence)

        received = decode(ConfigCommand, sentence).get(ConfigCommand)
        assert received == command
        assert received.register.bit(7)

    def test_ack_roundtrip(self) -> None:
        """Test acknowledge messages."""
        sentence = encode(AnyMessage("PX", AckMessage(result=MessageResult.ACK, command_id=12)))
        assert sentence == frame_sentence("PXACK,1,12")

        ack = decode(AckMessage, sentence).get(AckMessage)
        assert ack.result is MessageResult.ACK
        assert ack.command_id == 12

    def test_ack_out_of_range_value(self) -> None:
        """Test that model constraints apply to decoded values."""
        with pytest.raises(DecodeError, match="rejected by AckMessage"):
            decode(AckMessage, frame_sentence("PXACK,1,70000"))

    def test_mixed_payloads_in_one_list(self) -> None:
        """Test unrelated payload types behind one container type."""
        register_payload(RMCMessage, write=write_rmc, read=read_rmc, message_code="RMC")

        outbox = [
            AnyMessage("GP", GGAMessage(i=1, d=2.0, s="X")),
            AnyMessage("GP", RMCMessage(a=7, b=3.14)),
            AnyMessage("PX", AckMessage(result=MessageResult.ACK, command_id=3)),
        ]
        sentences = [encode(msg) for msg in outbox]

        assert sentences[0] == b"$GPGGA,1,2.000000,X*0F\r\n"
        assert sentences[1] == b"$GPRMC,7,3.140000*64\r\n"

        inbox = [
            decode(GGAMessage, sentences[0]),
            decode(RMCMessage, sentences[1]),
            decode(AckMessage, sentences[2]),
        ]
        assert [m.message_code for m in inbox] == ["GGA", "RMC", "ACK"]
        assert inbox[1].get(RMCMessage) == RMCMessage(a=7, b=3.14)
        with pytest.raises(PayloadTypeError):
            inbox[1].get(GGAMessage)

    def test_copy_independence(self) -> None:
        """Test that a copied container can be changed independently."""
        original = decode(GGAMessage, b"$GPGGA,42,123.456,STRING*40\r\n")
        clone = original.copy()
        clone.get(GGAMessage).s = "CHANGED"

        assert original.get(GGAMessage).s == "STRING"
        assert encode(original) == b"$GPGGA,42,123.456000,STRING*70\r\n"
