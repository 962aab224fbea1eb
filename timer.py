"""Once-per-second round timer driven by a tk-style scheduler.

Any object with ``after(ms, callback) -> job`` and ``after_cancel(job)``
works as the scheduler; a ``tkinter.Tk`` root is the usual one.
"""

from settings import TICK_MS


class RoundTimer:
    def __init__(self, scheduler, on_tick, interval_ms: int = TICK_MS):
        self.scheduler = scheduler
        self.on_tick = on_tick
        self.interval_ms = interval_ms
        self.job = None

    @property
    def running(self) -> bool:
        return self.job is not None

    def start(self):
        self.stop()
        self.job = self.scheduler.after(self.interval_ms, self._tick)

    def stop(self):
        if self.job is None:
            return
        self.scheduler.after_cancel(self.job)
        self.job = None

    def _tick(self):
        if self.job is None:
            return
        self.job = self.scheduler.after(self.interval_ms, self._tick)
        self.on_tick()
