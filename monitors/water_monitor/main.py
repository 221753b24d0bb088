#!/usr/bin/env python3
"""
Water Monitor Bridge - CLI Entry Point

Starts the HTTP server that serves cached Water Monitor readings.

Usage:
    python -m monitors.water_monitor.main
    python -m monitors.water_monitor.main --port 80 --static ./static
    python -m monitors.water_monitor.main --config '{"serial_number": "WM", "refresh_interval": 0.5}'
"""

import argparse
from dataclasses import asdict
import logging
import socket
import sys
from typing import List, Optional

import uvicorn

from .config import BridgeConfig
from .drivers.water_monitor import WaterMonitorDriver
from .server import create_app

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> BridgeConfig:
    """Build the configuration from --config JSON plus flag overrides."""
    parser = argparse.ArgumentParser(description="Serve Water Monitor readings over HTTP")
    parser.add_argument("--config", help="JSON object with configuration values")
    parser.add_argument("--host", help="HTTP bind address")
    parser.add_argument("--port", type=int, help="HTTP port")
    parser.add_argument("--static", dest="static_dir", help="Directory with the web UI")
    parser.add_argument("--log-level", dest="log_level",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        type=str.upper)
    args = parser.parse_args(argv)

    try:
        config = asdict(BridgeConfig.from_json(args.config))
        for key in ("host", "port", "static_dir", "log_level"):
            value = getattr(args, key)
            if value is not None:
                config[key] = value
        return BridgeConfig.from_dict(config)
    except (ValueError, TypeError) as e:
        parser.error(f"Invalid configuration: {e}")


def _local_address() -> str:
    try:
        return socket.gethostbyname(socket.gethostname())
    except OSError:
        return "(Problem finding IP address)"


def main(argv: Optional[List[str]] = None) -> int:
    config = parse_args(argv)

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    driver = WaterMonitorDriver(config=config.driver_config())
    app = create_app(driver, static_dir=config.static_dir)

    logger.info(
        f"Water Monitor bridge starting. Open http://localhost:{config.port} on this "
        f"computer, or http://{_local_address()}:{config.port} from another device "
        f"on this network."
    )

    uvicorn.run(
        app,
        host=config.host,
        port=config.port,
        log_level="warning",
        access_log=False,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
