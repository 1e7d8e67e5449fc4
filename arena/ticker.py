# arena/ticker.py
"""Background tick loop with tick-duration tracking."""

import logging
import threading
import time
from collections import deque

import numpy as np

logger = logging.getLogger(__name__)

TICK_WINDOW = 25
DEFAULT_TICK_DELAY = 40


class Ticker:
    """Runs ``step_fn`` every ``tick_delay`` milliseconds on a daemon thread.

    Each tick holds ``lock`` for its whole duration. ``stop()`` never
    joins, so it is safe to call while that lock is held; the thread
    notices its stop event before the next tick and exits.
    """

    def __init__(self, step_fn, tick_delay=DEFAULT_TICK_DELAY, lock=None, window=TICK_WINDOW):
        self.step_fn = step_fn
        self.tick_delay = tick_delay
        self.lock = lock if lock is not None else threading.RLock()
        self.tick_count = 0
        self.thread = None
        self._durations = deque(maxlen=window)
        self._stop_event = None

    @property
    def is_running(self):
        return self._stop_event is not None and not self._stop_event.is_set()

    @property
    def average_tick_time(self):
        """Mean duration of the recent ticks in milliseconds."""
        if not self._durations:
            return 0.0
        return float(np.mean(self._durations))

    def start(self):
        """Start ticking in a background thread"""
        if self.is_running:
            return False

        self._stop_event = threading.Event()
        self.thread = threading.Thread(
            target=self._run_loop, args=(self._stop_event,), name="arena-ticker"
        )
        self.thread.daemon = True
        self.thread.start()
        logger.debug("Ticker started")
        return True

    def stop(self):
        """Stop ticking"""
        if not self.is_running:
            return False

        self._stop_event.set()
        logger.debug("Ticker stopped")
        return True

    def join(self, timeout=1.0):
        if self.thread and self.thread is not threading.current_thread():
            self.thread.join(timeout=timeout)

    def step(self):
        """Run a single tick synchronously.

        Returns:
            float: Tick duration in milliseconds
        """
        with self.lock:
            start = time.perf_counter()
            self.step_fn()
            duration = (time.perf_counter() - start) * 1000.0
        self._durations.append(duration)
        self.tick_count += 1
        return duration

    def _run_loop(self, stop_event):
        """Internal method to run the tick loop"""
        next_tick = time.monotonic()
        while not stop_event.is_set():
            try:
                with self.lock:
                    if stop_event.is_set():
                        break
                    duration = self.step()
                if duration > self.tick_delay:
                    logger.warning(f"Tick took {duration:.2f} ms (target {self.tick_delay} ms)")
                next_tick += self.tick_delay / 1000.0
            except Exception as e:
                logger.error(f"Error in tick: {e}", exc_info=True)
                next_tick = time.monotonic() + DEFAULT_TICK_DELAY / 1000.0

            delay = next_tick - time.monotonic()
            if delay < 0:
                next_tick = time.monotonic()
                delay = 0
            stop_event.wait(delay)
