"""Last-call-wins delayed evaluation for search-as-you-type."""

from __future__ import annotations

from typing import Callable, Protocol

from ace_order.config import SEARCH_DEBOUNCE_SECONDS


class Stoppable(Protocol):
    def stop(self) -> None: ...


Scheduler = Callable[[float, Callable[[], None]], Stoppable]


class Debouncer:
    """Run only the most recently scheduled callback, ``delay`` seconds after it was scheduled.

    ``schedule`` is any timer factory returning a handle with ``stop()``,
    such as ``App.set_timer`` in Textual.
    """

    def __init__(self, schedule: Scheduler, delay: float = SEARCH_DEBOUNCE_SECONDS) -> None:
        self.delay = delay
        self._schedule = schedule
        self._pending: Stoppable | None = None

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def call(self, callback: Callable[[], None]) -> None:
        self.cancel()
        handle: Stoppable | None = None

        def fire() -> None:
            if self._pending is not handle:
                return
            self._pending = None
            callback()

        handle = self._schedule(self.delay, fire)
        self._pending = handle

    def cancel(self) -> None:
        if self._pending is None:
            return
        pending, self._pending = self._pending, None
        pending.stop()
