"""
Serial transport layer.

Blocking request/response I/O over a single serial endpoint. Reads are
exact-length: a read that times out early is reported as ShortReadError.
"""

import serial
import logging
from typing import Optional

from .exceptions import ConnectionError, ShortReadError

logger = logging.getLogger(__name__)


class SerialTransport:
    """Serial communication transport layer."""

    def __init__(
        self,
        port: str,
        baudrate: int = 9600,
        timeout: float = 1.0
    ):
        """
        Initialize serial transport.

        Args:
            port: Serial port name (e.g., '/dev/ttyACM0' or 'COM3')
            baudrate: Baud rate (default: 9600)
            timeout: Read and write timeout in seconds
        """
        self.port = port
        self.baudrate = baudrate
        self.timeout = timeout
        self._serial: Optional[serial.Serial] = None

    def open(self) -> None:
        """Open serial port."""
        try:
            self._serial = serial.Serial(
                port=self.port,
                baudrate=self.baudrate,
                bytesize=serial.EIGHTBITS,
                parity=serial.PARITY_NONE,
                stopbits=serial.STOPBITS_ONE,
                timeout=self.timeout,
                write_timeout=self.timeout
            )
            logger.info(f"Opened serial port {self.port} at {self.baudrate} bps")

        except (serial.SerialException, OSError) as e:
            self._serial = None
            raise ConnectionError(f"Failed to open {self.port}: {e}") from e

    def close(self) -> None:
        """Close serial port."""
        if self._serial:
            try:
                self._serial.close()
            except (serial.SerialException, OSError) as e:
                logger.warning(f"Error closing {self.port}: {e}")
            self._serial = None
            logger.info(f"Closed serial port {self.port}")

    def send(self, data: bytes) -> int:
        """
        Send data over serial port.

        Args:
            data: Bytes to send

        Returns:
            Number of bytes sent

        Raises:
            ConnectionError: If port is not open, or the write failed or
                was partial
        """
        if not self._serial or not self._serial.is_open:
            raise ConnectionError("Serial port not open")

        try:
            count = self._serial.write(data)
            self._serial.flush()
        except (serial.SerialException, OSError) as e:
            raise ConnectionError(f"Send failed: {e}") from e

        logger.debug(f"TX ({count} bytes): {data.hex(' ')}")
        if count != len(data):
            raise ConnectionError(f"Partial write: {count} of {len(data)} bytes")
        return count

    def receive_exact(self, count: int) -> bytes:
        """
        Read exactly `count` bytes.

        Args:
            count: Number of bytes to read

        Returns:
            Received bytes

        Raises:
            ConnectionError: If port is not open or the read failed
            ShortReadError: If the timeout expired before `count` bytes arrived
        """
        if not self._serial or not self._serial.is_open:
            raise ConnectionError("Serial port not open")

        try:
            data = self._serial.read(count)
        except (serial.SerialException, OSError) as e:
            raise ConnectionError(f"Receive failed: {e}") from e

        logger.debug(f"RX ({len(data)} bytes): {data.hex(' ')}")
        if len(data) != count:
            raise ShortReadError(count, len(data), self.timeout)
        return bytes(data)

    def flush(self) -> None:
        """Discard any pending input and output."""
        if self._serial and self._serial.is_open:
            try:
                self._serial.reset_input_buffer()
                self._serial.reset_output_buffer()
            except (serial.SerialException, OSError) as e:
                raise ConnectionError(f"Flush failed: {e}") from e

    @property
    def is_open(self) -> bool:
        """Check if port is open."""
        return self._serial is not None and self._serial.is_open

    def __enter__(self) -> 'SerialTransport':
        if not self.is_open:
            self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __repr__(self) -> str:
        status = "open" if self.is_open else "closed"
        return f"SerialTransport({self.port}, {self.baudrate}, {status})"
