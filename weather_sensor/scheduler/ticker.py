"""Tick source and event channel driving the polling loop."""

import enum
import logging
import threading
from typing import Optional


class TickEvent(enum.Enum):
    """Events delivered to the polling loop."""
    TICK = "tick"
    STOP = "stop"


class TickChannel:
    """Single-slot channel between the ticker, signal handlers and the loop.

    Holds at most one pending tick; offering a tick while one is pending is a
    no-op, so a slow loop never builds a backlog. A stop request always wins
    over a pending tick.
    """

    def __init__(self) -> None:
        # Re-entrant: signal handlers run on the main thread, possibly while it waits here
        self._condition = threading.Condition(threading.RLock())
        self._tick_pending = False
        self._stop_signal: Optional[int] = None
        self._stopped = False

    def offer_tick(self) -> bool:
        """Mark a tick as pending.

        Returns:
            True if the tick was queued, False if one was already pending
        """
        with self._condition:
            if self._tick_pending:
                return False
            self._tick_pending = True
            self._condition.notify_all()
            return True

    def request_stop(self, signum: Optional[int] = None) -> None:
        """Ask the loop to exit, recording the signal that triggered it."""
        with self._condition:
            self._stopped = True
            if self._stop_signal is None:
                self._stop_signal = signum
            self._condition.notify_all()

    @property
    def stop_requested(self) -> bool:
        return self._stopped

    @property
    def stop_signal(self) -> Optional[int]:
        """Signal number recorded by the first stop request, if any."""
        return self._stop_signal

    def wait(self, timeout: Optional[float] = None) -> Optional[TickEvent]:
        """Block until a tick or a stop request is available.

        Args:
            timeout: Maximum seconds to wait (None waits forever)

        Returns:
            TickEvent.STOP, TickEvent.TICK, or None if the timeout expired
        """
        with self._condition:
            self._condition.wait_for(lambda: self._stopped or self._tick_pending, timeout)

            if self._stopped:
                return TickEvent.STOP
            if self._tick_pending:
                self._tick_pending = False
                return TickEvent.TICK
            return None


class Ticker(threading.Thread):
    """Background thread offering one tick per interval to a channel."""

    def __init__(self, channel: TickChannel, interval: float) -> None:
        """Initialize the ticker.

        Args:
            channel: Channel receiving the ticks
            interval: Seconds between ticks
        """
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")

        super().__init__(name="weather-sensor-ticker", daemon=True)
        self.channel = channel
        self.interval = interval
        self.logger = logging.getLogger(__name__)
        self._halt = threading.Event()

    def run(self) -> None:
        while not self._halt.wait(self.interval):
            if not self.channel.offer_tick():
                self.logger.debug("Previous tick still pending, skipping")

    def stop(self) -> None:
        """Stop emitting ticks."""
        self._halt.set()
