"""
Water Monitor Bridge Package

Serves readings from the AnyLeaf Water Monitor (USB serial) over HTTP.
"""

from .config import BridgeConfig
from .drivers import WaterMonitorDriver
from .server import create_app

__all__ = ["BridgeConfig", "WaterMonitorDriver", "create_app"]
