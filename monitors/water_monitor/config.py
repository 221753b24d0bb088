"""
Bridge configuration.

Values come from a JSON object (CLI --config) with defaults for every key.
"""

from dataclasses import asdict, dataclass, fields
import json
from typing import Any, Dict, Optional

from .libs.wm_protocol import DEVICE_SERIAL_NUMBER, REFRESH_INTERVAL


@dataclass
class BridgeConfig:
    """Settings for the serial side and the HTTP side of the bridge."""

    # Instrument
    serial_number: str = DEVICE_SERIAL_NUMBER
    baudrate: int = 9600
    timeout: float = 1.0
    refresh_interval: float = REFRESH_INTERVAL

    # HTTP
    host: str = "0.0.0.0"
    port: int = 8000
    static_dir: Optional[str] = None

    log_level: str = "INFO"

    def __post_init__(self):
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")
        if self.refresh_interval <= 0:
            raise ValueError("refresh_interval must be positive")
        if not 0 < self.port < 65536:
            raise ValueError(f"Invalid HTTP port: {self.port}")
        self.log_level = self.log_level.upper()

    @classmethod
    def from_dict(cls, config: Optional[Dict[str, Any]] = None) -> 'BridgeConfig':
        """Build from a dictionary; unknown keys are ignored."""
        config = config or {}
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in config.items() if k in known})

    @classmethod
    def from_json(cls, text: Optional[str]) -> 'BridgeConfig':
        """Build from a JSON object string (empty means defaults)."""
        if not text:
            return cls()
        data = json.loads(text)
        if not isinstance(data, dict):
            raise ValueError("Config JSON must be an object")
        return cls.from_dict(data)

    def driver_config(self) -> Dict[str, Any]:
        """Subset of settings consumed by WaterMonitorDriver."""
        data = asdict(self)
        return {
            key: data[key]
            for key in ("serial_number", "baudrate", "timeout", "refresh_interval")
        }
