"""
Serial endpoint discovery.

The instrument is identified solely by the serial number in its USB
descriptor.
"""

import logging
from typing import Iterable, Optional

import serial.tools.list_ports

from .constants import DEVICE_SERIAL_NUMBER
from .transport import SerialTransport

logger = logging.getLogger(__name__)


def find_port(
    serial_number: str = DEVICE_SERIAL_NUMBER,
    ports: Optional[Iterable] = None
) -> Optional[str]:
    """
    Find the device path of the instrument.

    Args:
        serial_number: USB serial number to match
        ports: Port info objects to search (default: all visible ports)

    Returns:
        Device path of the first match, or None
    """
    if ports is None:
        ports = serial.tools.list_ports.comports()

    for port_info in ports:
        # Non-USB ports carry no vid/serial_number
        if getattr(port_info, "vid", None) is None:
            continue
        if getattr(port_info, "serial_number", None) != serial_number:
            continue
        logger.debug(f"Found {serial_number!r} on {port_info.device}")
        return port_info.device

    logger.debug(f"No serial port with serial number {serial_number!r}")
    return None


def locate(
    serial_number: str = DEVICE_SERIAL_NUMBER,
    baudrate: int = 9600,
    timeout: float = 1.0,
    ports: Optional[Iterable] = None
) -> Optional[SerialTransport]:
    """
    Find the instrument and open a transport to it.

    Returns:
        Open SerialTransport, or None when no port matches

    Raises:
        ConnectionError: If a matching port was found but could not be opened
    """
    device = find_port(serial_number, ports)
    if device is None:
        return None

    transport = SerialTransport(device, baudrate=baudrate, timeout=timeout)
    transport.open()
    return transport
