"""MongoDB account repository implementation"""
import logging
from typing import List, Optional
from pymongo import DESCENDING
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError

from slot_engine.application.ports.account_repository_port import AccountRepositoryPort
from slot_engine.application.ports.change_feed_port import ChangeFeedPort
from slot_engine.domain.entities.account import Account
from slot_engine.domain.exceptions import ConflictError, StoreError

logger = logging.getLogger(__name__)


class MongoAccountRepository(AccountRepositoryPort):
    """MongoDB implementation of account repository"""

    def __init__(self, db: Database, change_feed: Optional[ChangeFeedPort] = None):
        self.db = db
        self.collection = db.users
        self.change_feed = change_feed

    def ensure_indexes(self) -> None:
        self.collection.create_index("id", unique=True)
        self.collection.create_index("username", unique=True)
        self.collection.create_index([("balance", DESCENDING)])

    def get(self, account_id: str) -> Optional[Account]:
        return self._find_one({"id": account_id})

    def find_by_username(self, username: str) -> Optional[Account]:
        return self._find_one({"username": username})

    def find_by_credentials(self, username: str, password: str) -> Optional[Account]:
        return self._find_one({"username": username, "password": password})

    def insert(self, account: Account) -> Account:
        try:
            self.collection.insert_one(account.to_dict())
        except DuplicateKeyError as e:
            raise ConflictError(f"username already taken: {account.username}") from e
        except PyMongoError as e:
            raise StoreError(f"Failed to insert account: {e}") from e

        if self.change_feed:
            self.change_feed.publish("users", {"type": "INSERT", "id": account.id})
        return account

    def top_by_balance(self, limit: int = 10) -> List[Account]:
        try:
            cursor = (
                self.collection
                .find({}, {"_id": 0, "id": 1, "username": 1, "balance": 1})
                .sort("balance", DESCENDING)
                .limit(limit)
            )
            return [Account.from_dict(doc) for doc in cursor]
        except PyMongoError as e:
            raise StoreError(f"Failed to query leaderboard: {e}") from e

    def _find_one(self, query: dict) -> Optional[Account]:
        try:
            doc = self.collection.find_one(query)
        except PyMongoError as e:
            raise StoreError(f"Failed to read account: {e}") from e
        return Account.from_dict(doc) if doc else None
