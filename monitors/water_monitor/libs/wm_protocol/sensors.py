"""
Sensor data structures.

A readings report is 20 bytes: four 5-byte channel fields, each a validity
byte followed by a big-endian float32.
"""

from dataclasses import dataclass
from typing import Any, Dict, NamedTuple, Union
import struct

from .constants import OK_MARKER, READINGS_SIZE, SensorError

ChannelValue = Union[float, SensorError]


class ChannelField(NamedTuple):
    """Location of one channel inside the readings report."""
    name: str       # Readings attribute
    key: str        # JSON key
    offset: int
    length: int


CHANNEL_LAYOUT = (
    ChannelField("temperature", "T", 0, 5),
    ChannelField("ph", "pH", 5, 5),
    ChannelField("orp", "ORP", 10, 5),
    ChannelField("ec", "ec", 15, 5),
)

assert CHANNEL_LAYOUT[-1].offset + CHANNEL_LAYOUT[-1].length == READINGS_SIZE


def decode_channel(field: bytes) -> ChannelValue:
    """Decode a single validity byte + float32 field."""
    if field[0] != OK_MARKER:
        return SensorError.BAD_MEASUREMENT
    return struct.unpack('>f', field[1:5])[0]


def encode_channel(value: ChannelValue) -> bytes:
    """Encode a channel value; errors are sent with a zeroed value."""
    if isinstance(value, SensorError):
        return bytes(5)
    return bytes([OK_MARKER]) + struct.pack('>f', value)


@dataclass(frozen=True)
class Readings:
    """Latest values of the four instrument channels."""
    temperature: ChannelValue
    ph: ChannelValue
    orp: ChannelValue
    ec: ChannelValue

    @classmethod
    def default(cls) -> 'Readings':
        """Readings before the instrument has ever answered."""
        return cls(
            temperature=SensorError.NOT_CONNECTED,
            ph=SensorError.NOT_CONNECTED,
            orp=SensorError.NOT_CONNECTED,
            ec=SensorError.NOT_CONNECTED,
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> 'Readings':
        """
        Decode a 20-byte readings report.

        Each channel is decoded independently; a channel whose validity byte
        is not OK_MARKER becomes SensorError.BAD_MEASUREMENT.

        Raises:
            ValueError: If fewer than 20 bytes are given
        """
        if len(data) < READINGS_SIZE:
            raise ValueError(f"Readings need {READINGS_SIZE} bytes, got {len(data)}")

        values = {
            ch.name: decode_channel(data[ch.offset:ch.offset + ch.length])
            for ch in CHANNEL_LAYOUT
        }
        return cls(**values)

    def to_bytes(self) -> bytes:
        """Serialize to the instrument's report format."""
        return b''.join(encode_channel(getattr(self, ch.name)) for ch in CHANNEL_LAYOUT)

    def to_dict(self) -> Dict[str, Any]:
        """
        JSON-ready form: each channel is {"Ok": value} or {"Err": name}.
        """
        result = {}
        for ch in CHANNEL_LAYOUT:
            value = getattr(self, ch.name)
            if isinstance(value, SensorError):
                result[ch.key] = {"Err": value.value}
            else:
                result[ch.key] = {"Ok": value}
        return result

    @property
    def all_ok(self) -> bool:
        """Check if every channel holds a measurement."""
        return not any(
            isinstance(getattr(self, ch.name), SensorError) for ch in CHANNEL_LAYOUT
        )

    def __repr__(self) -> str:
        def fmt(value: ChannelValue) -> str:
            if isinstance(value, SensorError):
                return value.value
            return f"{value:.3f}"

        return (f"Readings(T={fmt(self.temperature)}, pH={fmt(self.ph)}, "
                f"ORP={fmt(self.orp)}, ec={fmt(self.ec)})")
