"""
Debounce Timer

A single cancellable pending call. Every schedule() replaces the pending
timer, so a burst of triggers collapses into one call made `delay`
seconds after the last trigger.
"""

from __future__ import annotations

import functools
import logging
import threading
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class DebounceTimer:
    """
    Usage:
        timer = DebounceTimer(1.5, recheck)
        timer.schedule()   # on every trigger
        timer.cancel()     # on teardown

    The callback reads whatever state it needs when it fires; nothing is
    captured at schedule time.
    """

    def __init__(
        self,
        delay: float,
        callback: Callable[[], None],
        timer_factory: Callable[..., threading.Timer] = threading.Timer,
    ):
        """
        Args:
            delay: Seconds between the last schedule() and the call
            callback: Called with no arguments when the timer fires
            timer_factory: threading.Timer-compatible constructor
                (interval, function) returning an object with start()
                and cancel()
        """
        self.delay = delay
        self.callback = callback
        self._timer_factory = timer_factory
        self._timer: Optional[threading.Timer] = None
        self._generation = 0
        self._lock = threading.Lock()

    def schedule(self) -> None:
        """(Re)start the countdown, superseding any pending call."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._generation += 1
            timer = self._timer_factory(
                self.delay, functools.partial(self._fire, self._generation)
            )
            timer.daemon = True
            self._timer = timer
        timer.start()

    def cancel(self) -> None:
        """Drop the pending call, if any."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            self._generation += 1

    @property
    def pending(self) -> bool:
        return self._timer is not None

    def _fire(self, generation: int) -> None:
        with self._lock:
            # A superseded timer can still fire if cancel() lost the race
            if generation != self._generation:
                logger.debug("Dropped superseded timer %d", generation)
                return
            self._timer = None
        self.callback()
