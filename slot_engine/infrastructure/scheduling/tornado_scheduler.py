"""Tornado IOLoop scheduler implementation"""
from typing import Any, Callable

from tornado.ioloop import IOLoop, PeriodicCallback

from slot_engine.application.ports.scheduler_port import SchedulerPort


class TornadoScheduler(SchedulerPort):
    """Timers on the current IOLoop; all callbacks run on the loop thread"""

    def __init__(self, io_loop: IOLoop = None):
        self._io_loop = io_loop

    @property
    def io_loop(self) -> IOLoop:
        return self._io_loop or IOLoop.current()

    def call_later(self, delay: float, callback: Callable[[], None]) -> Any:
        return self.io_loop.call_later(delay, callback)

    def cancel(self, handle: Any) -> None:
        self.io_loop.remove_timeout(handle)

    def start_ticker(self, interval: float, callback: Callable[[], None]) -> Any:
        ticker = PeriodicCallback(callback, interval * 1000)
        ticker.start()
        return ticker

    def stop_ticker(self, handle: Any) -> None:
        handle.stop()
