"""
Packet parsing and building.

Packet Format: [KIND][PAYLOAD...][CRC]
- KIND: Message kind tag (see MessageKind)
- PAYLOAD: Fixed size per kind (0-76 bytes), no length byte on the wire
- CRC: CRC-8 (poly 0xAB) of KIND+PAYLOAD
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Sequence, Tuple

from .constants import MessageKind
from .crc import CRC8
from .exceptions import (
    CRCError, PayloadSizeError, TruncatedPacketError, UnknownMessageError
)
from .payloads import MotorDirections


class ParseResult(Enum):
    """Packet parse result codes."""
    OK = 0
    INCOMPLETE = 1
    CRC_ERROR = 2
    FORMAT_ERROR = 3


def kind_of(tag: int) -> MessageKind:
    """Look up a message kind, raising UnknownMessageError for foreign tags."""
    try:
        return MessageKind(tag)
    except ValueError:
        raise UnknownMessageError(tag) from None


@dataclass
class Packet:
    """Protocol packet structure."""
    kind: MessageKind
    payload: bytes = field(default_factory=bytes)
    checksum: Optional[int] = None

    def __post_init__(self):
        self.kind = kind_of(self.kind)
        if isinstance(self.payload, (list, tuple, bytearray)):
            self.payload = bytes(self.payload)
        if len(self.payload) != self.kind.payload_size:
            raise PayloadSizeError(self.kind, self.kind.payload_size, len(self.payload))

        computed = CRC8.calculate(bytes([self.kind]) + self.payload)
        if self.checksum is None:
            self.checksum = computed
        elif self.checksum != computed:
            raise CRCError(computed, self.checksum)

    @property
    def payload_len(self) -> int:
        return len(self.payload)

    def to_bytes(self) -> bytes:
        """Serialize to wire format."""
        return bytes([self.kind]) + self.payload + bytes([self.checksum])


class PacketBuilder:
    """Builds packets for transmission."""

    @staticmethod
    def build(kind: int, payload: bytes = b"") -> bytes:
        """
        Build complete packet with CRC.

        Args:
            kind: Message kind tag
            payload: Payload bytes, exactly the size declared for `kind`

        Returns:
            Complete packet bytes ready for transmission

        Raises:
            PayloadSizeError: If payload length does not match the kind
        """
        return Packet(kind, payload).to_bytes()

    @staticmethod
    def build_request_parameters() -> bytes:
        """Build REQUEST_PARAMETERS packet."""
        return PacketBuilder.build(MessageKind.REQUEST_PARAMETERS)

    @staticmethod
    def build_request_controls() -> bytes:
        """Build REQUEST_CONTROLS packet."""
        return PacketBuilder.build(MessageKind.REQUEST_CONTROLS)

    @staticmethod
    def build_acknowledge() -> bytes:
        """Build ACKNOWLEDGE packet."""
        return PacketBuilder.build(MessageKind.ACKNOWLEDGE)

    @staticmethod
    def build_set_motor_directions(directions: Sequence[bool]) -> bytes:
        """Build SET_MOTOR_DIRECTIONS packet."""
        return PacketBuilder.build(
            MessageKind.SET_MOTOR_DIRECTIONS,
            MotorDirections(*directions).to_bytes()
        )


class PacketParser:
    """Parses packets from a buffer or byte stream."""

    def __init__(self):
        self._buffer = bytearray()

    @staticmethod
    def decode(data: bytes) -> Packet:
        """
        Decode one packet from the start of a buffer.

        Args:
            data: Bytes beginning with a message kind tag

        Returns:
            Decoded Packet

        Raises:
            UnknownMessageError: Tag is not a known message kind
            TruncatedPacketError: Buffer shorter than tag + payload + CRC
            CRCError: Trailing checksum does not match
        """
        if not data:
            raise TruncatedPacketError(1, 0)

        kind = kind_of(data[0])
        expected_size = 1 + kind.payload_size + 1
        if len(data) < expected_size:
            raise TruncatedPacketError(expected_size, len(data))

        calc_crc = CRC8.calculate(bytes(data[:expected_size - 1]))
        recv_crc = data[expected_size - 1]
        if calc_crc != recv_crc:
            raise CRCError(calc_crc, recv_crc)

        return Packet(kind, bytes(data[1:expected_size - 1]), recv_crc)

    def feed(self, data: bytes) -> None:
        """Add data to parse buffer."""
        self._buffer.extend(data)

    def parse(self) -> Tuple[ParseResult, Optional[Packet], int]:
        """
        Attempt to parse a packet from the buffer.

        Returns:
            Tuple of (result, packet, consumed_bytes)
            - result: ParseResult indicating success or error type
            - packet: Parsed Packet object if successful, None otherwise
            - consumed_bytes: Number of bytes consumed from buffer
        """
        if not self._buffer:
            return (ParseResult.INCOMPLETE, None, 0)

        # Unknown tag: resync one byte at a time
        try:
            kind = kind_of(self._buffer[0])
        except UnknownMessageError:
            self._buffer = self._buffer[1:]
            return (ParseResult.FORMAT_ERROR, None, 1)

        expected_size = 1 + kind.payload_size + 1
        if len(self._buffer) < expected_size:
            return (ParseResult.INCOMPLETE, None, 0)

        calc_crc = CRC8.calculate(bytes(self._buffer[:expected_size - 1]))
        recv_crc = self._buffer[expected_size - 1]

        if calc_crc != recv_crc:
            self._buffer = self._buffer[expected_size:]
            return (ParseResult.CRC_ERROR, None, expected_size)

        payload = bytes(self._buffer[1:expected_size - 1])
        self._buffer = self._buffer[expected_size:]
        return (ParseResult.OK, Packet(kind, payload, recv_crc), expected_size)

    def clear(self) -> None:
        """Clear parse buffer."""
        self._buffer = bytearray()

    @property
    def buffer_size(self) -> int:
        """Get current buffer size."""
        return len(self._buffer)
