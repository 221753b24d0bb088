"""
CRC-8 calculation for packet checksums.

Polynomial 0xAB, MSB first, initial value 0x00, no final XOR.
"""

from .constants import CRC_POLY


def _build_table(poly: int) -> tuple:
    table = []
    for value in range(256):
        crc = value
        for _ in range(8):
            if crc & 0x80:
                crc = ((crc << 1) ^ poly) & 0xFF
            else:
                crc = (crc << 1) & 0xFF
        table.append(crc)
    return tuple(table)


class CRC8:
    """Table-driven CRC-8 using the protocol polynomial."""

    POLY = CRC_POLY
    TABLE = _build_table(CRC_POLY)

    @classmethod
    def calculate(cls, data: bytes) -> int:
        """
        Calculate CRC-8 over a byte sequence.

        Args:
            data: Bytes to checksum

        Returns:
            Checksum value (0-255)
        """
        crc = 0
        for byte in data:
            crc = cls.TABLE[crc ^ byte]
        return crc

    @classmethod
    def verify(cls, data: bytes, expected: int) -> bool:
        """Check data against an expected checksum."""
        return cls.calculate(data) == expected
