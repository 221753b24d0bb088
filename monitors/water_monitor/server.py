"""
HTTP surface of the bridge.

GET /api/readings returns the cached instrument readings as JSON:

    {"T": {"Ok": 24.9}, "pH": {"Ok": 7.02},
     "ORP": {"Err": "BadMeasurement"}, "ec": {"Err": "NotConnected"}}
"""

from __future__ import annotations

from contextlib import asynccontextmanager
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from .drivers.base import BaseDriver

logger = logging.getLogger(__name__)


def create_app(driver: BaseDriver, static_dir: Optional[str] = None) -> FastAPI:
    """
    Build the FastAPI app around a driver.

    The driver is connected on startup and disconnected on shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await driver.connect()
        logger.info(f"Serving readings from {await driver.identify()}")
        try:
            yield
        finally:
            await driver.disconnect()

    app = FastAPI(title="Water Monitor Bridge", lifespan=lifespan)
    app.state.driver = driver

    @app.get("/api/readings")
    async def view_readings() -> Dict[str, Any]:
        """Readings, served from cache unless older than the refresh interval."""
        readings = await driver.read()
        return readings.to_dict()

    # Mounted last so /api routes take precedence
    if static_dir:
        directory = Path(static_dir).resolve()
        app.mount("/", StaticFiles(directory=directory, html=True), name="static")

    return app
