"""
High-level protocol client.

Provides a simple API for talking to the Water Monitor over one transport.
"""

import logging
from typing import Optional, Sequence

from .constants import (
    DEVICE_SERIAL_NUMBER, MessageKind, READINGS_SIZE, REQUEST_READINGS
)
from .exceptions import DeviceNotFoundError, UnexpectedMessageError
from .frame import Packet, PacketBuilder, PacketParser, kind_of
from .locator import locate
from .payloads import Controls, MotorDirections, Parameters
from .sensors import Readings
from .transport import SerialTransport

logger = logging.getLogger(__name__)


class WaterMonitorClient:
    """High-level client for the Water Monitor protocol."""

    def __init__(self, transport: SerialTransport):
        """
        Initialize client.

        Args:
            transport: Open serial transport
        """
        self.transport = transport

    def read_all(self) -> Readings:
        """
        Request and decode one readings report.

        Returns:
            Readings with per-channel values or sensor errors

        Raises:
            ConnectionError: If the write or read failed
            ShortReadError: If fewer than 20 bytes arrived
        """
        self.transport.flush()
        self.transport.send(REQUEST_READINGS)
        data = self.transport.receive_exact(READINGS_SIZE)

        readings = Readings.from_bytes(data)
        logger.debug(f"Readings: {readings}")
        return readings

    def exchange(
        self,
        kind: int,
        payload: bytes = b"",
        expected: Optional[int] = None
    ) -> Packet:
        """
        Send a framed packet and wait for the framed reply.

        Args:
            kind: Message kind to send
            payload: Payload for `kind`
            expected: Expected reply kind (None accepts any)

        Returns:
            Received Packet

        Raises:
            DecodeError: If the reply is malformed or fails its CRC
            UnexpectedMessageError: If the reply kind differs from `expected`
        """
        packet = PacketBuilder.build(kind, payload)
        self.transport.flush()
        logger.debug(f"Sending {MessageKind.name_of(kind)}: {packet.hex()}")
        self.transport.send(packet)

        # Tag first; its kind fixes how many bytes follow
        tag = self.transport.receive_exact(1)
        size = kind_of(tag[0]).payload_size
        rest = self.transport.receive_exact(size + 1)

        reply = PacketParser.decode(tag + rest)
        logger.debug(f"Received {reply.kind.name}, "
                     f"payload={reply.payload.hex() if reply.payload else 'none'}")

        if expected is not None and reply.kind != expected:
            raise UnexpectedMessageError(expected, reply.kind)
        return reply

    def request_parameters(self) -> Parameters:
        """Request the PARAMETERS report."""
        packet = self.exchange(MessageKind.REQUEST_PARAMETERS,
                               expected=MessageKind.PARAMETERS)
        return Parameters.from_bytes(packet.payload)

    def request_controls(self) -> Controls:
        """Request the CONTROLS_REPORT."""
        packet = self.exchange(MessageKind.REQUEST_CONTROLS,
                               expected=MessageKind.CONTROLS_REPORT)
        controls = Controls.from_bytes(packet.payload)
        logger.info(f"Controls: {controls}")
        return controls

    def set_motor_directions(self, directions: Sequence[bool]) -> None:
        """
        Set spin direction of motors 1-4 and wait for ACKNOWLEDGE.

        Args:
            directions: Four booleans, True for clockwise
        """
        payload = MotorDirections(*directions).to_bytes()
        self.exchange(MessageKind.SET_MOTOR_DIRECTIONS, payload,
                      expected=MessageKind.ACKNOWLEDGE)
        logger.info(f"Motor directions set: {list(directions)}")


def poll_once(
    serial_number: str = DEVICE_SERIAL_NUMBER,
    baudrate: int = 9600,
    timeout: float = 1.0
) -> Readings:
    """
    One complete hardware round-trip: locate, request, decode, close.

    Raises:
        DeviceNotFoundError: If no port reports `serial_number`
        WMProtocolError: On any transport failure
    """
    transport = locate(serial_number, baudrate=baudrate, timeout=timeout)
    if transport is None:
        raise DeviceNotFoundError(serial_number)

    with transport:
        return WaterMonitorClient(transport).read_all()
