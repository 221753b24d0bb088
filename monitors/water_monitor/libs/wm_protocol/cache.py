"""
Polling cache for instrument readings.

Every reader of the instrument goes through ReadingsCache, so concurrent
callers share one hardware round-trip per refresh interval.
"""

from dataclasses import dataclass
import logging
import threading
import time
from typing import Callable, Optional

from .constants import REFRESH_INTERVAL
from .exceptions import WMProtocolError
from .sensors import Readings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheEntry:
    """Last successful readings and when they were captured (monotonic s)."""
    readings: Readings
    captured_at: float


class ReadingsCache:
    """
    Staleness-gated cache in front of a blocking refresh function.

    Policy:
    - Fresh (last refresh attempt younger than the interval): serve the
      cached readings, no hardware access.
    - Stale: run `refresh` once. Success replaces the entry; failure keeps
      the previous entry, including its captured_at.

    Attempts are rate limited whether or not they succeed, so an unplugged
    instrument is probed at most once per interval.
    """

    def __init__(
        self,
        refresh: Callable[[], Readings],
        refresh_interval: float = REFRESH_INTERVAL,
        clock: Callable[[], float] = time.monotonic
    ):
        """
        Initialize cache.

        Args:
            refresh: Performs one hardware round-trip; raises WMProtocolError
                on transport or protocol failure
            refresh_interval: Minimum seconds between round-trips
            clock: Monotonic time source
        """
        if refresh_interval <= 0:
            raise ValueError("refresh_interval must be positive")

        self._refresh = refresh
        self.refresh_interval = refresh_interval
        self._clock = clock
        self._lock = threading.Lock()
        self._entry: Optional[CacheEntry] = None
        self._last_attempt: Optional[float] = None

    def get_current_readings(self) -> Readings:
        """
        Return the latest readings, refreshing from hardware if stale.

        Never raises for transport or protocol failures; before the first
        successful refresh every channel is SensorError.NOT_CONNECTED.
        """
        with self._lock:
            now = self._clock()
            if self._is_stale_locked(now):
                self._last_attempt = now
                self._try_refresh_locked(now)
            return self._readings_locked()

    def is_stale(self) -> bool:
        """Check whether the next call would hit the hardware."""
        with self._lock:
            return self._is_stale_locked(self._clock())

    def invalidate(self) -> None:
        """Force the next call to refresh."""
        with self._lock:
            self._last_attempt = None

    @property
    def entry(self) -> Optional[CacheEntry]:
        """Last successful entry, or None."""
        return self._entry

    # ---------- Internal helpers ----------

    def _is_stale_locked(self, now: float) -> bool:
        if self._last_attempt is None:
            return True
        return (now - self._last_attempt) >= self.refresh_interval

    def _try_refresh_locked(self, now: float) -> None:
        try:
            readings = self._refresh()
        except WMProtocolError as e:
            logger.warning(f"Problem getting readings; serving cached values: {e}")
            return

        self._entry = CacheEntry(readings, now)

    def _readings_locked(self) -> Readings:
        if self._entry is None:
            return Readings.default()
        return self._entry.readings
