"""
Monitors Package

Bridges between attached instruments and client software. Each monitor is a
self-contained package with its own protocol library, drivers and server.

Available monitors:
- water_monitor: AnyLeaf Water Monitor (temperature, pH, ORP, conductivity)
"""

__all__ = ["water_monitor"]
