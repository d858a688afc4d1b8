"""
Cancelable deferred work for the feedback dwell.

Provides:
- Scheduler protocol: schedule(delay, callback) -> handle with cancel()
- ThreadingScheduler: real timers on daemon threads
- ManualScheduler: caller-driven clock, for tests and polling presenters
- NullScheduler: never fires (auto-advance disabled)
"""

import threading
import time
from dataclasses import dataclass, field
from typing import Callable, Optional, Protocol


class ScheduledHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def schedule(self, delay: float, callback: Callable[[], None]) -> ScheduledHandle: ...


# -----------------------------------------------------------------------------
# Threading timers
# -----------------------------------------------------------------------------

class ThreadingScheduler:
    """Run callbacks on threading.Timer daemon threads."""

    def schedule(self, delay: float, callback: Callable[[], None]) -> threading.Timer:
        timer = threading.Timer(delay, callback)
        timer.daemon = True
        timer.start()
        return timer


# -----------------------------------------------------------------------------
# Manual clock
# -----------------------------------------------------------------------------

@dataclass
class ManualHandle:
    due: float
    callback: Callable[[], None]
    cancelled: bool = False
    fired: bool = False

    def cancel(self):
        self.cancelled = True

    @property
    def pending(self) -> bool:
        return not (self.cancelled or self.fired)


@dataclass
class ManualScheduler:
    """
    Scheduler whose callbacks run only when the caller asks.

    Due times are measured on ``clock`` (default: time.monotonic).
    """
    clock: Callable[[], float] = time.monotonic
    _handles: list[ManualHandle] = field(default_factory=list, init=False, repr=False)

    def schedule(self, delay: float, callback: Callable[[], None]) -> ManualHandle:
        handle = ManualHandle(due=self.clock() + delay, callback=callback)
        self._handles.append(handle)
        return handle

    @property
    def pending(self) -> list[ManualHandle]:
        return [h for h in self._handles if h.pending]

    def run_due(self, now: Optional[float] = None) -> int:
        """Fire every pending callback whose due time has passed. Returns the count fired."""
        now = self.clock() if now is None else now
        return self._fire([h for h in self.pending if h.due <= now])

    def fire_all(self) -> int:
        """Fire every pending callback regardless of due time."""
        return self._fire(self.pending)

    def _fire(self, handles: list[ManualHandle]) -> int:
        fired = 0
        for handle in sorted(handles, key=lambda h: h.due):
            # an earlier callback may have cancelled this one
            if not handle.pending:
                continue
            handle.fired = True
            handle.callback()
            fired += 1
        self._handles = [h for h in self._handles if h.pending]
        return fired


# -----------------------------------------------------------------------------
# Disabled
# -----------------------------------------------------------------------------

class _NullHandle:
    def cancel(self):
        pass


class NullScheduler:
    """Accepts callbacks and never runs them."""

    def schedule(self, delay: float, callback: Callable[[], None]) -> _NullHandle:
        return _NullHandle()
