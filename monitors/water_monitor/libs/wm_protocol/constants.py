"""
Protocol constants matching the Water Monitor firmware.

All multi-byte values on the wire use big-endian byte order.
"""

from enum import Enum, IntEnum

# USB serial number reported by the instrument
DEVICE_SERIAL_NUMBER = "WM"

# Fixed request sent to the instrument to trigger a readings report
REQUEST_READINGS = bytes([100, 150, 200])

# Readings report: 4 channels x (validity byte + float32)
READINGS_SIZE = 20

# Validity byte preceding each channel value
OK_MARKER = 0xAA

# Polynomial for the packet checksum
CRC_POLY = 0xAB

# Minimum time between two hardware round-trips, in seconds
REFRESH_INTERVAL = 0.2

PARAMETERS_SIZE = 76
CONTROLS_SIZE = 18
MAX_PAYLOAD = PARAMETERS_SIZE

# Message kind + payload + checksum
MAX_PACKET = MAX_PAYLOAD + 2


class MessageKind(IntEnum):
    """Message kinds sharing the framed packet format."""
    PARAMETERS = 0x00
    SET_MOTOR_DIRECTIONS = 0x01
    REQUEST_PARAMETERS = 0x02
    ACKNOWLEDGE = 0x03
    CONTROLS_REPORT = 0x04
    REQUEST_CONTROLS = 0x05

    @property
    def payload_size(self) -> int:
        """Fixed payload length for this kind."""
        return PAYLOAD_SIZES[self]

    @classmethod
    def name_of(cls, tag: int) -> str:
        """Get message name from tag."""
        try:
            return cls(tag).name
        except ValueError:
            return f"Unknown(0x{tag:02X})"


PAYLOAD_SIZES = {
    MessageKind.PARAMETERS: PARAMETERS_SIZE,
    MessageKind.SET_MOTOR_DIRECTIONS: 1,
    MessageKind.REQUEST_PARAMETERS: 0,
    MessageKind.ACKNOWLEDGE: 0,
    MessageKind.CONTROLS_REPORT: CONTROLS_SIZE,
    MessageKind.REQUEST_CONTROLS: 0,
}

assert set(PAYLOAD_SIZES) == set(MessageKind), "every MessageKind needs a payload size"


class SensorError(Enum):
    """Per-channel sensor error states."""
    BUS_FAULT = "BusFault"
    NOT_CONNECTED = "NotConnected"
    BAD_MEASUREMENT = "BadMeasurement"
