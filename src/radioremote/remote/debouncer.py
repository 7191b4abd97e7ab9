"""Trailing-edge debounce for volume knob pulses."""

import logging
import threading
from collections.abc import Callable
from typing import Protocol

logger = logging.getLogger(__name__)

# Volume change per knob detent (percent)
VOLUME_STEP = 5


class TimerHandle(Protocol):
    """The subset of ``threading.Timer`` the debouncer uses."""

    def start(self) -> None: ...

    def cancel(self) -> None: ...


TimerFactory = Callable[[float, Callable[[], None]], TimerHandle]


def _thread_timer(interval: float, function: Callable[[], None]) -> TimerHandle:
    timer = threading.Timer(interval, function)
    timer.daemon = True
    return timer


class VolumeDebouncer:
    """
    Aggregates bursts of volume pulses into one volume change.

    Each pulse adds +5 or -5 to a running total and restarts a single-shot
    timer. When the timer fires (no pulse for ``window`` seconds) the total
    is emitted through the callback and reset to zero. A burst that nets to
    zero still emits a zero amount.

    Thread Safety:
        Pulses may arrive from the serial reader thread while the timer
        thread is firing. The total and the timer handle are guarded by a
        lock, and every timer carries a generation number: a timer that was
        superseded by a newer pulse never emits, even if it was already
        running when it got cancelled.
    """

    def __init__(
        self,
        on_volume: Callable[[int], None],
        window: float = 0.5,
        timer_factory: TimerFactory | None = None,
    ):
        """
        Initialize the debouncer.

        Args:
            on_volume: Called with the accumulated amount when a burst ends
            window: Quiet period in seconds before the burst is emitted
            timer_factory: Creates single-shot timers (defaults to threading.Timer)
        """
        self._on_volume = on_volume
        self._window = window
        self._timer_factory = timer_factory or _thread_timer
        self._lock = threading.Lock()
        self._total = 0
        self._generation = 0
        self._timer: TimerHandle | None = None

    @property
    def pending_amount(self) -> int:
        """Amount accumulated since the last emission."""
        with self._lock:
            return self._total

    def on_pulse(self, direction_up: bool) -> None:
        """Register one knob detent and restart the quiet-period timer."""
        with self._lock:
            self._total += VOLUME_STEP if direction_up else -VOLUME_STEP
            self._generation += 1
            generation = self._generation

            if self._timer is not None:
                self._timer.cancel()
            self._timer = self._timer_factory(self._window, lambda: self._fire(generation))
            self._timer.start()

    def cancel(self) -> None:
        """Drop the pending burst without emitting it."""
        with self._lock:
            self._generation += 1
            self._total = 0
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    def _fire(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation:
                return
            amount = self._total
            self._total = 0
            self._timer = None

        logger.debug(f"Volume burst finished: {amount:+d}")
        try:
            self._on_volume(amount)
        except Exception as e:
            logger.error(f"Error in volume callback: {e}", exc_info=True)
