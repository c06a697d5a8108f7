"""MongoDB balance repository implementation"""
import time
import logging
from typing import Optional
from pymongo.database import Database
from pymongo.errors import PyMongoError

from slot_engine.application.ports.balance_repository_port import BalanceRepositoryPort
from slot_engine.application.ports.change_feed_port import ChangeFeedPort
from slot_engine.domain.exceptions import NotFoundError, StoreError

logger = logging.getLogger(__name__)


class MongoBalanceRepository(BalanceRepositoryPort):
    """MongoDB implementation of balance repository over the users collection"""

    def __init__(self, db: Database, change_feed: Optional[ChangeFeedPort] = None):
        self.db = db
        self.collection = db.users
        self.change_feed = change_feed

    def read_balance(self, account_id: str) -> int:
        """Get user balance from MongoDB"""
        try:
            user = self.collection.find_one({"id": account_id}, {"balance": 1})
        except PyMongoError as e:
            raise StoreError(f"Failed to read balance: {e}") from e

        if user is None:
            raise NotFoundError(f"Unknown user: {account_id}")
        return int(user.get('balance', 0))

    def write_balance(self, account_id: str, balance: int) -> bool:
        """Set user balance, False when no row was updated or the store failed"""
        try:
            result = self.collection.update_one(
                {"id": account_id},
                {"$set": {"balance": balance, "updated_at": time.time()}}
            )
        except PyMongoError as e:
            logger.error(f"Failed to write balance for {account_id}: {e}")
            return False

        if result.matched_count != 1:
            logger.warning(f"Balance write matched no user: {account_id}")
            return False

        if self.change_feed:
            self.change_feed.publish("users", {"type": "UPDATE", "id": account_id, "balance": balance})
        return True
