"""
Unit tests for packet framing

Tests frame.py building, decoding and stream parsing
"""

import unittest

from monitors.water_monitor.libs.wm_protocol.constants import MessageKind, PAYLOAD_SIZES
from monitors.water_monitor.libs.wm_protocol.crc import CRC8
from monitors.water_monitor.libs.wm_protocol.exceptions import (
    CRCError, DecodeError, PayloadSizeError, TruncatedPacketError, UnknownMessageError
)
from monitors.water_monitor.libs.wm_protocol.frame import (
    Packet, PacketBuilder, PacketParser, ParseResult
)


def payload_for(kind):
    return bytes((i * 7 + 3) & 0xFF for i in range(kind.payload_size))


class TestRegistry(unittest.TestCase):
    """Test message kind sizes"""

    def test_payload_sizes(self):
        self.assertEqual(MessageKind.PARAMETERS.payload_size, 76)
        self.assertEqual(MessageKind.SET_MOTOR_DIRECTIONS.payload_size, 1)
        self.assertEqual(MessageKind.REQUEST_PARAMETERS.payload_size, 0)
        self.assertEqual(MessageKind.ACKNOWLEDGE.payload_size, 0)
        self.assertEqual(MessageKind.CONTROLS_REPORT.payload_size, 18)
        self.assertEqual(MessageKind.REQUEST_CONTROLS.payload_size, 0)

    def test_every_kind_has_size(self):
        self.assertEqual(set(PAYLOAD_SIZES), set(MessageKind))

    def test_name_of(self):
        self.assertEqual(MessageKind.name_of(4), "CONTROLS_REPORT")
        self.assertEqual(MessageKind.name_of(0x42), "Unknown(0x42)")


class TestPacketBuilder(unittest.TestCase):
    """Test packet building"""

    def test_build_request_parameters(self):
        self.assertEqual(PacketBuilder.build_request_parameters(), bytes([0x02, 0xFD]))

    def test_build_acknowledge(self):
        self.assertEqual(PacketBuilder.build_acknowledge(), bytes([0x03, 0x56]))

    def test_build_layout(self):
        payload = payload_for(MessageKind.CONTROLS_REPORT)
        data = PacketBuilder.build(MessageKind.CONTROLS_REPORT, payload)

        self.assertEqual(len(data), 1 + 18 + 1)
        self.assertEqual(data[0], MessageKind.CONTROLS_REPORT)
        self.assertEqual(data[1:-1], payload)
        self.assertEqual(data[-1], CRC8.calculate(data[:-1]))

    def test_build_set_motor_directions(self):
        data = PacketBuilder.build_set_motor_directions([True, False, False, True])
        self.assertEqual(data[:2], bytes([MessageKind.SET_MOTOR_DIRECTIONS, 0b1001]))

    def test_wrong_payload_size_rejected(self):
        with self.assertRaises(PayloadSizeError):
            PacketBuilder.build(MessageKind.PARAMETERS, bytes(75))
        with self.assertRaises(PayloadSizeError):
            PacketBuilder.build(MessageKind.ACKNOWLEDGE, b'\x00')

    def test_payload_size_error_is_value_error(self):
        with self.assertRaises(ValueError):
            Packet(MessageKind.SET_MOTOR_DIRECTIONS, b'')

    def test_packet_with_wrong_checksum_rejected(self):
        with self.assertRaises(CRCError):
            Packet(MessageKind.ACKNOWLEDGE, b'', checksum=0x00)


class TestPacketDecode(unittest.TestCase):
    """Test one-shot decoding"""

    def test_round_trip_every_kind(self):
        for kind in MessageKind:
            payload = payload_for(kind)
            packet = PacketParser.decode(PacketBuilder.build(kind, payload))

            self.assertEqual(packet.kind, kind)
            self.assertEqual(packet.payload, payload)
            self.assertEqual(packet.checksum, CRC8.calculate(bytes([kind]) + payload))

    def test_trailing_bytes_ignored(self):
        data = PacketBuilder.build_acknowledge() + b'\xde\xad'
        self.assertEqual(PacketParser.decode(data).kind, MessageKind.ACKNOWLEDGE)

    def test_checksum_byte_flip_rejected(self):
        data = bytearray(PacketBuilder.build(MessageKind.PARAMETERS, payload_for(MessageKind.PARAMETERS)))
        data[-1] ^= 0xFF
        with self.assertRaises(CRCError):
            PacketParser.decode(bytes(data))

    def test_single_bit_flips_rejected(self):
        for kind in (MessageKind.PARAMETERS, MessageKind.CONTROLS_REPORT,
                     MessageKind.SET_MOTOR_DIRECTIONS):
            data = PacketBuilder.build(kind, payload_for(kind))
            # Payload and checksum bytes
            for index in range(1, len(data)):
                for bit in range(8):
                    corrupted = bytearray(data)
                    corrupted[index] ^= 1 << bit
                    with self.assertRaises(CRCError):
                        PacketParser.decode(bytes(corrupted))

    def test_unknown_kind(self):
        with self.assertRaises(UnknownMessageError) as ctx:
            PacketParser.decode(b'\x09\x00')
        self.assertEqual(ctx.exception.tag, 0x09)

    def test_truncated(self):
        data = PacketBuilder.build(MessageKind.CONTROLS_REPORT, payload_for(MessageKind.CONTROLS_REPORT))
        with self.assertRaises(TruncatedPacketError) as ctx:
            PacketParser.decode(data[:-1])
        self.assertEqual(ctx.exception.expected, 20)
        self.assertEqual(ctx.exception.received, 19)

    def test_empty(self):
        with self.assertRaises(DecodeError):
            PacketParser.decode(b'')


class TestPacketParser(unittest.TestCase):
    """Test stream parsing"""

    def setUp(self):
        self.parser = PacketParser()

    def test_parse_empty(self):
        self.assertEqual(self.parser.parse(), (ParseResult.INCOMPLETE, None, 0))

    def test_parse_split_packet(self):
        data = PacketBuilder.build(MessageKind.CONTROLS_REPORT, payload_for(MessageKind.CONTROLS_REPORT))
        self.parser.feed(data[:7])
        result, packet, consumed = self.parser.parse()
        self.assertEqual(result, ParseResult.INCOMPLETE)
        self.assertIsNone(packet)

        self.parser.feed(data[7:])
        result, packet, consumed = self.parser.parse()
        self.assertEqual(result, ParseResult.OK)
        self.assertEqual(packet.kind, MessageKind.CONTROLS_REPORT)
        self.assertEqual(consumed, len(data))
        self.assertEqual(self.parser.buffer_size, 0)

    def test_parse_resyncs_after_garbage(self):
        ack = PacketBuilder.build_acknowledge()
        req = PacketBuilder.build_request_controls()
        self.parser.feed(b'\xff' + ack + req)

        self.assertEqual(self.parser.parse(), (ParseResult.FORMAT_ERROR, None, 1))

        result, packet, _ = self.parser.parse()
        self.assertEqual(result, ParseResult.OK)
        self.assertEqual(packet.kind, MessageKind.ACKNOWLEDGE)

        result, packet, _ = self.parser.parse()
        self.assertEqual(result, ParseResult.OK)
        self.assertEqual(packet.kind, MessageKind.REQUEST_CONTROLS)

        self.assertEqual(self.parser.parse()[0], ParseResult.INCOMPLETE)

    def test_parse_crc_error_drops_packet(self):
        bad = bytearray(PacketBuilder.build_set_motor_directions([True] * 4))
        bad[-1] ^= 0x01
        self.parser.feed(bytes(bad) + PacketBuilder.build_acknowledge())

        self.assertEqual(self.parser.parse(), (ParseResult.CRC_ERROR, None, 3))
        result, packet, _ = self.parser.parse()
        self.assertEqual(result, ParseResult.OK)
        self.assertEqual(packet.kind, MessageKind.ACKNOWLEDGE)

    def test_clear(self):
        self.parser.feed(b'\x00\x01\x02')
        self.parser.clear()
        self.assertEqual(self.parser.buffer_size, 0)


if __name__ == '__main__':
    unittest.main()
