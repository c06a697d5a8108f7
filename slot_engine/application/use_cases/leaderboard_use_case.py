"""Leaderboard use case"""
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

import sentry_sdk

from slot_engine.application.ports.account_repository_port import AccountRepositoryPort
from slot_engine.application.ports.change_feed_port import ChangeFeedPort

logger = logging.getLogger(__name__)

LEADERBOARD_SIZE = 10
USERS_TABLE = "users"


@dataclass(frozen=True)
class LeaderboardEntry:
    rank: int
    id: str
    username: str
    balance: int

    def to_dict(self, current_user_id: Optional[str] = None) -> dict:
        return {
            "rank": self.rank,
            "id": self.id,
            "username": self.username,
            "balance": self.balance,
            "is_current_user": self.id == current_user_id
        }


class LeaderboardUseCase:
    """Top players by balance, refreshed on every change to the users table"""

    def __init__(self, account_repository: AccountRepositoryPort, change_feed: Optional[ChangeFeedPort] = None):
        self.account_repository = account_repository
        self.change_feed = change_feed
        self.entries: List[LeaderboardEntry] = []
        self.error: Optional[str] = None

    def refresh(self) -> List[LeaderboardEntry]:
        try:
            accounts = self.account_repository.top_by_balance(LEADERBOARD_SIZE)
        except Exception as e:
            logger.error(f"Failed to load leaderboard: {e}")
            sentry_sdk.capture_exception(e)
            self.error = "leaderboard unavailable"
            return self.entries

        self.entries = [
            LeaderboardEntry(rank=i + 1, id=a.id, username=a.username, balance=a.balance)
            for i, a in enumerate(accounts)
        ]
        self.error = None
        return self.entries

    def subscribe(self) -> Callable[[], None]:
        """Re-run the query whenever the users table changes"""
        if self.change_feed is None:
            return lambda: None
        return self.change_feed.subscribe(USERS_TABLE, lambda change: self.refresh())

    def get(self, current_user_id: Optional[str] = None) -> dict:
        result = {"entries": [e.to_dict(current_user_id) for e in self.entries]}
        if self.error:
            result["error"] = self.error
        return result
