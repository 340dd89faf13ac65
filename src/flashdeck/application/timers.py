"""
Feedback timers.

After a correct answer the game auto-advances when a countdown runs out.
After a wrong answer the answer buttons stay disabled for a short window.
Both the completion callback and the recurring countdown tick must be
cancelled together on reset so no stale callback fires after the card has
changed.
"""

import logging
import threading
from collections.abc import Callable
from typing import Protocol

from flashdeck.domain.constants import (
    AUTO_CLOSE_DURATION,
    BUTTON_DISABLE_DURATION,
    COUNTDOWN_INTERVAL,
)

logger = logging.getLogger(__name__)


class Cancellable(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> Cancellable: ...


class ThreadingScheduler:
    """Runs callbacks on ``threading.Timer`` threads."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> Cancellable:
        timer = threading.Timer(delay, callback)
        timer.daemon = True
        timer.start()
        return timer


class FeedbackTimers:
    """
    Auto-advance timer with a countdown display value.

    ``countdown`` holds the whole seconds left; it is 0 while idle.
    """

    def __init__(
        self,
        auto_close_duration: float = AUTO_CLOSE_DURATION,
        countdown_interval: float = COUNTDOWN_INTERVAL,
        button_disable_duration: float = BUTTON_DISABLE_DURATION,
        scheduler: Scheduler | None = None,
    ):
        self.auto_close_duration = auto_close_duration
        self.countdown_interval = countdown_interval
        self.button_disable_duration = button_disable_duration
        self.scheduler = scheduler or ThreadingScheduler()
        self.countdown = 0
        self._lock = threading.Lock()
        self._auto_close: Cancellable | None = None
        self._tick: Cancellable | None = None
        self._enable_buttons: Cancellable | None = None
        self._generation = 0
        self._button_window = 0
        self._auto_close_pending = False
        self._buttons_disabled = False

    @property
    def is_pending(self) -> bool:
        return self._auto_close_pending

    @property
    def buttons_disabled(self) -> bool:
        return self._buttons_disabled

    # Callbacks are scheduled outside the lock; a scheduler may run them
    # synchronously.

    def start_auto_close(self, callback: Callable[[], None]) -> None:
        """Call ``callback`` after the auto-close duration, replacing any pending timer."""
        self.clear()
        with self._lock:
            self._generation += 1
            generation = self._generation
            self.countdown = int(round(self.auto_close_duration))
            self._auto_close_pending = True

        self._schedule_tick(generation)
        auto_close = self.scheduler.call_later(
            self.auto_close_duration, lambda: self._on_complete(generation, callback)
        )
        with self._lock:
            if generation == self._generation:
                self._auto_close = auto_close
                return
        auto_close.cancel()

    def _schedule_tick(self, generation: int) -> None:
        tick = self.scheduler.call_later(
            self.countdown_interval, lambda: self._on_tick(generation)
        )
        with self._lock:
            if generation == self._generation:
                self._tick = tick
                return
        tick.cancel()

    def _on_tick(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation:
                return
            self.countdown = max(0, self.countdown - 1)
            if self.countdown == 0:
                self._tick = None
                return
        self._schedule_tick(generation)

    def _on_complete(self, generation: int, callback: Callable[[], None]) -> None:
        with self._lock:
            if generation != self._generation:
                return
            self._auto_close = None
            self._auto_close_pending = False
        logger.debug("[timers] Auto-close fired")
        callback()

    def clear(self) -> None:
        """Cancel every pending timer: completion, countdown tick and button window."""
        with self._lock:
            self._generation += 1
            pending = [self._auto_close, self._tick, self._enable_buttons]
            self._auto_close = None
            self._tick = None
            self._enable_buttons = None
            self._auto_close_pending = False
            self._buttons_disabled = False
            self.countdown = 0
        for timer in pending:
            if timer is not None:
                timer.cancel()

    def disable_buttons(self, on_enable: Callable[[], None] | None = None) -> None:
        """Keep ``buttons_disabled`` set for the button-disable window."""
        with self._lock:
            generation = self._generation
            self._button_window += 1
            window = self._button_window
            previous = self._enable_buttons
            self._enable_buttons = None
            self._buttons_disabled = True
        if previous is not None:
            previous.cancel()

        enable = self.scheduler.call_later(
            self.button_disable_duration, lambda: self._on_enable(generation, window, on_enable)
        )
        with self._lock:
            if generation == self._generation and window == self._button_window:
                if self._buttons_disabled:
                    self._enable_buttons = enable
                return
        enable.cancel()

    def _on_enable(
        self, generation: int, window: int, on_enable: Callable[[], None] | None
    ) -> None:
        with self._lock:
            if generation != self._generation or window != self._button_window:
                return
            self._enable_buttons = None
            self._buttons_disabled = False
        if on_enable is not None:
            on_enable()
