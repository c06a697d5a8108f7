"""Change feed port (interface)"""
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict

ChangeCallback = Callable[[Dict[str, Any]], None]


class ChangeFeedPort(ABC):
    """Port for table-keyed change notifications"""

    @abstractmethod
    def subscribe(self, table: str, callback: ChangeCallback) -> Callable[[], None]:
        """Register a callback for changes on `table`, returns an unsubscribe callable"""
        pass

    @abstractmethod
    def publish(self, table: str, change: Dict[str, Any]) -> None:
        """Notify subscribers of `table`"""
        pass
