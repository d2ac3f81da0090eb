"""
ExpiryScheduler - Background sweep that completes expired auctions.

A single daemon thread wakes up every `interval` seconds and asks the
store to close every auction whose window has elapsed. The thread waits on
a threading.Event, which doubles as the cancellation token: `stop()` sets
it, the wait returns early, and the loop exits without starting another
sweep. A sweep already in progress is allowed to finish.

States:
- RUNNING: entered at construction, the thread is sweeping
- STOPPED: terminal, a new scheduler must be built to sweep again

A failed sweep is logged and counted; it never ends the loop.
"""

import threading
import time
from enum import IntEnum
from typing import Callable, Optional

from auctioneer.core.auction.expiry import DurationResolver
from auctioneer.core.storage.base import AuctionStore
from auctioneer.utils.logger import get_logger

logger = get_logger("scheduler")


# =============================================================================
# Constants
# =============================================================================

DEFAULT_SWEEP_INTERVAL = 5.0  # seconds


class SchedulerState(IntEnum):
    """Lifecycle of an expiry scheduler."""
    RUNNING = 0
    STOPPED = 1


# =============================================================================
# Expiry Scheduler
# =============================================================================


class ExpiryScheduler:
    """
    Periodically closes expired auctions in a store.

    The scheduler only holds a reference to the store; every closure is a
    mutation of the store's own records and is visible to the next read.
    """

    def __init__(
        self,
        store: AuctionStore,
        resolver: DurationResolver,
        interval: float = DEFAULT_SWEEP_INTERVAL,
        clock: Callable[[], float] = time.time,
        name: str = "expiry-scheduler",
    ):
        """
        Build the scheduler and start sweeping immediately.

        Args:
            store: Store whose expired auctions are closed
            resolver: Supplies the auction duration for each sweep
            interval: Seconds between sweeps
            clock: Returns the current time in epoch seconds
            name: Name of the background thread
        """
        if interval <= 0:
            raise ValueError(f"Sweep interval must be positive, got {interval}")

        self.store = store
        self.resolver = resolver
        self.interval = interval
        self.clock = clock

        self.sweep_count = 0
        self.error_count = 0
        self.last_error: Optional[BaseException] = None

        self._stop_event = threading.Event()
        self._lock = threading.Lock()
        self._state = SchedulerState.RUNNING

        self._thread = threading.Thread(target=self._run, name=name, daemon=True)
        self._thread.start()

        logger.info(f"Expiry scheduler started (interval={interval}s)")

    @property
    def state(self) -> SchedulerState:
        with self._lock:
            return self._state

    @property
    def is_running(self) -> bool:
        return self.state == SchedulerState.RUNNING

    def sweep_now(self) -> int:
        """
        Run one sweep on the calling thread.

        Returns:
            Number of auctions closed

        Raises:
            StorageWriteError: If the store's bulk update fails
        """
        now = int(self.clock())
        duration = self.resolver.resolve()

        logger.debug(f"Checking for expired auctions (now={now}, duration={duration})")
        closed = self.store.close_expired(now, duration)

        with self._lock:
            self.sweep_count += 1
        return closed

    def stop(self, timeout: Optional[float] = None) -> None:
        """
        Stop sweeping and wait for the background thread to exit.

        Later calls are no-ops.

        Args:
            timeout: Seconds to wait for an in-flight sweep (None waits)
        """
        with self._lock:
            if self._state == SchedulerState.STOPPED:
                return
            self._state = SchedulerState.STOPPED

        self._stop_event.set()
        if self._thread is threading.current_thread():
            # Called from a sweep; the loop exits once the sweep returns
            logger.info("Expiry scheduler stopping")
            return

        self._thread.join(timeout)
        if self._thread.is_alive():
            logger.warning("Expiry scheduler thread still running after stop timeout")
        else:
            logger.info("Expiry scheduler stopped")

    def _run(self) -> None:
        # wait() returns True as soon as stop() sets the event
        while not self._stop_event.wait(self.interval):
            self._sweep_safely()

        logger.debug("Expiry scheduler loop exited")

    def _sweep_safely(self) -> None:
        try:
            self.sweep_now()
        except Exception as e:
            with self._lock:
                self.error_count += 1
                self.last_error = e
            logger.exception(f"Expiry sweep failed: {e}")
