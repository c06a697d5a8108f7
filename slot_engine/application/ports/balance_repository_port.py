"""Balance repository port (interface)"""
from abc import ABC, abstractmethod


class BalanceRepositoryPort(ABC):
    """Port for user balance management"""

    @abstractmethod
    def read_balance(self, account_id: str) -> int:
        """Get user balance"""
        pass

    @abstractmethod
    def write_balance(self, account_id: str, balance: int) -> bool:
        """Store user balance, returns False when the write did not land"""
        pass
