"""In-process change feed keyed by table name"""
import logging
from collections import defaultdict
from typing import Any, Callable, Dict, List

import sentry_sdk

from slot_engine.application.ports.change_feed_port import ChangeCallback, ChangeFeedPort

logger = logging.getLogger(__name__)


class InMemoryChangeFeed(ChangeFeedPort):
    """Synchronous fan-out of table changes to local subscribers"""

    def __init__(self):
        self.subscribers: Dict[str, List[ChangeCallback]] = defaultdict(list)

    def subscribe(self, table: str, callback: ChangeCallback) -> Callable[[], None]:
        self.subscribers[table].append(callback)

        def unsubscribe():
            if callback in self.subscribers[table]:
                self.subscribers[table].remove(callback)

        return unsubscribe

    def publish(self, table: str, change: Dict[str, Any]) -> None:
        for callback in list(self.subscribers.get(table, ())):
            try:
                callback(change)
            except Exception as e:
                # Subscribers are isolated from each other
                logger.error(f"Change subscriber for {table} failed: {e}")
                sentry_sdk.capture_exception(e)
