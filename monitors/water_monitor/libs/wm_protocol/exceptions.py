"""
Custom exceptions for the Water Monitor protocol.
"""

from .constants import MessageKind


class WMProtocolError(Exception):
    """Base exception for Water Monitor protocol errors."""
    pass


class FrameError(WMProtocolError):
    """Packet parsing or building error."""
    pass


class PayloadSizeError(FrameError, ValueError):
    """Payload length does not match the size declared for its kind."""

    def __init__(self, kind: int, expected: int, received: int):
        self.kind = kind
        self.expected = expected
        self.received = received
        super().__init__(
            f"{MessageKind.name_of(kind)} payload must be {expected} bytes, got {received}"
        )


class DecodeError(FrameError):
    """Received bytes could not be decoded into a packet."""
    pass


class CRCError(DecodeError):
    """CRC verification failed."""

    def __init__(self, expected: int, received: int):
        self.expected = expected
        self.received = received
        super().__init__(
            f"CRC mismatch: expected 0x{expected:02X}, received 0x{received:02X}"
        )


class UnknownMessageError(DecodeError):
    """Message kind tag is not part of the protocol."""

    def __init__(self, tag: int):
        self.tag = tag
        super().__init__(f"Unknown message kind 0x{tag:02X}")


class TruncatedPacketError(DecodeError):
    """Buffer ends before the declared payload and checksum."""

    def __init__(self, expected: int, received: int):
        self.expected = expected
        self.received = received
        super().__init__(f"Packet truncated: need {expected} bytes, got {received}")


class UnexpectedMessageError(FrameError):
    """Device answered with a different message kind than requested."""

    def __init__(self, expected: int, received: int):
        self.expected = expected
        self.received = received
        super().__init__(
            f"Expected {MessageKind.name_of(expected)}, "
            f"received {MessageKind.name_of(received)}"
        )


class ConnectionError(WMProtocolError):
    """Serial connection error."""
    pass


class DeviceNotFoundError(ConnectionError):
    """No serial endpoint reports the instrument's serial number."""

    def __init__(self, serial_number: str):
        self.serial_number = serial_number
        super().__init__(f"No serial device with serial number {serial_number!r}")


class ShortReadError(WMProtocolError):
    """Fewer bytes arrived than requested before the read timed out."""

    def __init__(self, expected: int, received: int, timeout: float):
        self.expected = expected
        self.received = received
        self.timeout = timeout
        super().__init__(
            f"Short read: expected {expected} bytes, got {received} within {timeout}s"
        )
