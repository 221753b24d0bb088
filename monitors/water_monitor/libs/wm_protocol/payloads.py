"""
Payload structures for the framed message kinds.

All multi-byte values use big-endian byte order.
"""

from dataclasses import astuple, dataclass, fields
import struct

from .constants import CONTROLS_SIZE, PARAMETERS_SIZE


@dataclass
class Parameters:
    """First-order flight state reported by the PARAMETERS message."""
    # Position
    s_x: float = 0.0
    s_y: float = 0.0
    s_z_msl: float = 0.0
    s_z_agl: float = 0.0

    s_pitch: float = 0.0
    s_roll: float = 0.0
    s_yaw: float = 0.0

    # Velocity
    v_x: float = 0.0
    v_y: float = 0.0
    v_z: float = 0.0

    v_pitch: float = 0.0
    v_roll: float = 0.0
    v_yaw: float = 0.0

    # Acceleration
    a_x: float = 0.0
    a_y: float = 0.0
    a_z: float = 0.0

    a_pitch: float = 0.0
    a_roll: float = 0.0
    a_yaw: float = 0.0

    FORMAT = '>19f'

    def to_bytes(self) -> bytes:
        """Serialize to big-endian bytes."""
        return struct.pack(self.FORMAT, *astuple(self))

    @classmethod
    def from_bytes(cls, data: bytes) -> 'Parameters':
        """Deserialize from big-endian bytes (19 float32 values)."""
        return cls(*struct.unpack(cls.FORMAT, data[:PARAMETERS_SIZE]))


assert struct.calcsize(Parameters.FORMAT) == PARAMETERS_SIZE
assert len(fields(Parameters)) == 19


@dataclass
class MotorDirections:
    """Spin direction per motor; True is clockwise."""
    motor_1: bool = False
    motor_2: bool = False
    motor_3: bool = False
    motor_4: bool = False

    def to_bytes(self) -> bytes:
        """Pack motors 1-4 into bits 0-3 of a single byte."""
        packed = 0
        for bit, clockwise in enumerate(astuple(self)):
            if clockwise:
                packed |= 1 << bit
        return bytes([packed])

    @classmethod
    def from_bytes(cls, data: bytes) -> 'MotorDirections':
        packed = data[0]
        return cls(*(bool(packed & (1 << bit)) for bit in range(4)))


@dataclass
class Controls:
    """Control channel data reported by the CONTROLS_REPORT message."""
    roll: float        # -1. to 1.
    pitch: float       # -1. to 1.
    throttle: float    # 0. to 1., or -1. to 1. on auto-centering sticks
    yaw: float         # -1. to 1.
    arm_status: int
    input_mode: int

    FORMAT = '>ffffBB'

    def to_bytes(self) -> bytes:
        """Serialize to big-endian bytes."""
        return struct.pack(self.FORMAT, *astuple(self))

    @classmethod
    def from_bytes(cls, data: bytes) -> 'Controls':
        """Deserialize from big-endian bytes."""
        return cls(*struct.unpack(cls.FORMAT, data[:CONTROLS_SIZE]))

    def __repr__(self) -> str:
        return (f"Controls(roll={self.roll:.2f}, pitch={self.pitch:.2f}, "
                f"throttle={self.throttle:.2f}, yaw={self.yaw:.2f}, "
                f"arm=0x{self.arm_status:02X}, mode=0x{self.input_mode:02X})")


assert struct.calcsize(Controls.FORMAT) == CONTROLS_SIZE
