"""
Water Monitor Driver Module

Async driver for the AnyLeaf Water Monitor. Wraps the wm_protocol polling
cache; every read goes through ReadingsCache so HTTP clients never talk to
the serial port directly.
"""

import functools
import logging
from typing import Any, Callable, Dict, Optional

from .base import BaseDriver
from ..libs.wm_protocol import (
    DEVICE_SERIAL_NUMBER,
    REFRESH_INTERVAL,
    Readings,
    ReadingsCache,
    find_port,
    poll_once,
)

logger = logging.getLogger(__name__)


class WaterMonitorDriver(BaseDriver):
    """
    Water Monitor driver.

    Attributes:
        serial_number: USB serial number identifying the instrument
        baudrate: Communication speed
        timeout: Serial read/write timeout in seconds
        refresh_interval: Minimum seconds between hardware round-trips
    """

    def __init__(
        self,
        name: str = "WaterMonitorDriver",
        config: Optional[Dict[str, Any]] = None,
        refresh: Optional[Callable[[], Readings]] = None
    ):
        """
        Initialize Water Monitor driver.

        Args:
            name: Driver name
            config: Configuration with keys:
                - serial_number: USB serial number (default: "WM")
                - baudrate: Baud rate (default: 9600)
                - timeout: Serial timeout (default: 1.0)
                - refresh_interval: Cache interval (default: 0.2)
            refresh: Round-trip function (default: poll_once with the
                configured port settings)
        """
        super().__init__(name=name, config=config)

        self.serial_number: str = self.config.get("serial_number", DEVICE_SERIAL_NUMBER)
        self.baudrate: int = self.config.get("baudrate", 9600)
        self.timeout: float = self.config.get("timeout", 1.0)
        self.refresh_interval: float = self.config.get("refresh_interval", REFRESH_INTERVAL)

        if refresh is None:
            refresh = functools.partial(
                poll_once,
                self.serial_number,
                baudrate=self.baudrate,
                timeout=self.timeout,
            )
        self._refresh = refresh
        self._cache: Optional[ReadingsCache] = None
        self._device: Optional[str] = None

    async def connect(self) -> bool:
        """
        Create the readings cache and look for the instrument.

        The cache is created even when the instrument is absent; reads then
        report NOT_CONNECTED until it is plugged in.

        Returns:
            bool: True if the instrument is attached
        """
        self._cache = ReadingsCache(self._refresh, self.refresh_interval)

        self._device = await self._run_sync(find_port, self.serial_number)
        self._connected = self._device is not None

        if self._connected:
            logger.info(f"Water Monitor found on {self._device}")
        else:
            logger.warning(f"Can't find the Water Monitor (serial number {self.serial_number!r})")
        return self._connected

    async def disconnect(self) -> None:
        """Drop the cache; no serial handle is held between reads."""
        self._cache = None
        self._device = None
        self._connected = False
        logger.info("Water Monitor driver stopped")

    async def read(self) -> Readings:
        """
        Get current readings, refreshing from the instrument when stale.

        Returns:
            Readings (cached, fresh, or NOT_CONNECTED defaults)
        """
        if not self._cache:
            raise RuntimeError("Driver not connected")

        return await self._run_sync(self._cache.get_current_readings)

    async def identify(self) -> str:
        """
        Return instrument identification string.

        Returns:
            str: Name and serial port
        """
        if self._device:
            return f"AnyLeaf,WaterMonitor,{self.serial_number},{self._device}"
        return f"AnyLeaf,WaterMonitor,{self.serial_number},Unknown"
