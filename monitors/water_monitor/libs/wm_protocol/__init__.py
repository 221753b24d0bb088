"""
WM Protocol - Python implementation of the Water Monitor serial protocol.

This package provides:
- Protocol constants and the message registry
- CRC-8 calculation
- Packet parsing and building
- Serial transport and device discovery
- High-level protocol client
- Readings decoding and the polling cache
"""

from .constants import (
    DEVICE_SERIAL_NUMBER, REQUEST_READINGS, READINGS_SIZE, OK_MARKER,
    CRC_POLY, REFRESH_INTERVAL, PAYLOAD_SIZES, MessageKind, SensorError
)
from .crc import CRC8
from .exceptions import (
    WMProtocolError, FrameError, PayloadSizeError, DecodeError, CRCError,
    UnknownMessageError, TruncatedPacketError, UnexpectedMessageError,
    ConnectionError, DeviceNotFoundError, ShortReadError
)
from .frame import Packet, PacketBuilder, PacketParser, ParseResult
from .payloads import Parameters, MotorDirections, Controls
from .sensors import CHANNEL_LAYOUT, ChannelField, Readings
from .transport import SerialTransport
from .locator import find_port, locate
from .client import WaterMonitorClient, poll_once
from .cache import CacheEntry, ReadingsCache

__version__ = "1.0.0"
__all__ = [
    # Constants
    "DEVICE_SERIAL_NUMBER", "REQUEST_READINGS", "READINGS_SIZE", "OK_MARKER",
    "CRC_POLY", "REFRESH_INTERVAL", "PAYLOAD_SIZES", "MessageKind", "SensorError",
    # CRC
    "CRC8",
    # Exceptions
    "WMProtocolError", "FrameError", "PayloadSizeError", "DecodeError",
    "CRCError", "UnknownMessageError", "TruncatedPacketError",
    "UnexpectedMessageError", "ConnectionError", "DeviceNotFoundError",
    "ShortReadError",
    # Packets
    "Packet", "PacketBuilder", "PacketParser", "ParseResult",
    "Parameters", "MotorDirections", "Controls",
    # Sensors
    "CHANNEL_LAYOUT", "ChannelField", "Readings",
    # Transport
    "SerialTransport", "find_port", "locate",
    # Client
    "WaterMonitorClient", "poll_once",
    # Cache
    "CacheEntry", "ReadingsCache",
]
