"""Account repository port (interface)"""
from abc import ABC, abstractmethod
from typing import List, Optional

from slot_engine.domain.entities.account import Account


class AccountRepositoryPort(ABC):
    """Port for player account storage"""

    @abstractmethod
    def get(self, account_id: str) -> Optional[Account]:
        """Read account by key"""
        pass

    @abstractmethod
    def find_by_username(self, username: str) -> Optional[Account]:
        """Read account by username"""
        pass

    @abstractmethod
    def find_by_credentials(self, username: str, password: str) -> Optional[Account]:
        """Read account whose username and password both match"""
        pass

    @abstractmethod
    def insert(self, account: Account) -> Account:
        """Insert a new account"""
        pass

    @abstractmethod
    def top_by_balance(self, limit: int = 10) -> List[Account]:
        """Accounts sorted by balance descending, at most `limit`"""
        pass
