"""Player account entity"""
from dataclasses import dataclass, field
from typing import Optional
import time
import uuid


@dataclass
class Account:
    """Player account row"""

    username: str
    password: str
    balance: int = 1000
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: float = field(default_factory=time.time)
    updated_at: Optional[float] = None

    def to_dict(self) -> dict:
        """Convert to dictionary for storage"""
        return {
            "id": self.id,
            "username": self.username,
            "password": self.password,
            "balance": self.balance,
            "created_at": self.created_at,
            "updated_at": self.updated_at
        }

    def to_public_dict(self) -> dict:
        """Account view safe to return to clients"""
        return {
            "id": self.id,
            "username": self.username,
            "balance": self.balance
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Account':
        """Create from stored dictionary"""
        return cls(
            id=data["id"],
            username=data.get("username", ""),
            password=data.get("password", ""),
            balance=int(data.get("balance", 0)),
            created_at=data.get("created_at", time.time()),
            updated_at=data.get("updated_at")
        )
