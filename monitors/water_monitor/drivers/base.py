"""
Base Driver Module

Abstract base class for instrument drivers used by the bridge.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class BaseDriver(ABC):
    """
    Abstract base driver class.

    Drivers wrap blocking serial libraries behind coroutines so the HTTP
    event loop is never blocked on device I/O.

    Attributes:
        name: Driver identifier name
        config: Configuration dictionary
    """

    def __init__(
        self,
        name: str = "BaseDriver",
        config: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize driver.

        Args:
            name: Driver identifier name
            config: Configuration dictionary (serial_number, baudrate, etc.)
        """
        self.name = name
        self.config = config or {}
        self._connected = False

    @abstractmethod
    async def connect(self) -> bool:
        """
        Prepare the driver and probe for the instrument.

        Returns:
            bool: True if the instrument was found
        """
        ...

    @abstractmethod
    async def disconnect(self) -> None:
        """Release driver resources."""
        ...

    @abstractmethod
    async def read(self) -> Any:
        """Return the instrument's current values."""
        ...

    async def identify(self) -> str:
        """
        Return device identification string.

        Returns:
            str: Device ID string
        """
        return "Unknown"

    async def is_connected(self) -> bool:
        """
        Check connection status.

        Returns:
            bool: True if the instrument was found on connect
        """
        return self._connected

    async def _run_sync(self, func, *args, **kwargs) -> Any:
        """Run a blocking function in the default executor."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, lambda: func(*args, **kwargs))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r}, connected={self._connected})"
