"""
Hardware drivers for the water monitor bridge.
"""

from .base import BaseDriver
from .water_monitor import WaterMonitorDriver

__all__ = ["BaseDriver", "WaterMonitorDriver"]
