"""Scheduler port (interface)"""
from abc import ABC, abstractmethod
from typing import Any, Callable


class SchedulerPort(ABC):
    """Port for cancellable delayed and periodic callbacks"""

    @abstractmethod
    def call_later(self, delay: float, callback: Callable[[], None]) -> Any:
        """Run callback once after `delay` seconds, returns a handle"""
        pass

    @abstractmethod
    def cancel(self, handle: Any) -> None:
        """Cancel a pending call_later handle"""
        pass

    @abstractmethod
    def start_ticker(self, interval: float, callback: Callable[[], None]) -> Any:
        """Run callback every `interval` seconds until stopped, returns a handle"""
        pass

    @abstractmethod
    def stop_ticker(self, handle: Any) -> None:
        """Stop a running ticker"""
        pass
