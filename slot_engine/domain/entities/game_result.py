"""Game round entity"""
from dataclasses import dataclass, field
from typing import List, Optional
import time


@dataclass
class GameResult:
    """Domain entity representing a settled slot round"""

    user_id: str
    bet: int
    symbols: List[str]
    match_count: int
    symbol: Optional[str]
    payout: int
    balance_after: int
    timestamp: float = field(default_factory=time.time)
    id: Optional[str] = None

    @property
    def win(self) -> bool:
        return self.payout > 0

    @property
    def balance_change(self) -> int:
        """Calculate net balance change"""
        return -self.bet + self.payout

    def to_dict(self) -> dict:
        """Convert to dictionary for storage"""
        return {
            "user_id": self.user_id,
            "bet": self.bet,
            "symbols": self.symbols,
            "match_count": self.match_count,
            "symbol": self.symbol,
            "win": self.win,
            "payout": self.payout,
            "balance_after": self.balance_after,
            "timestamp": self.timestamp,
            "_id": self.id
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'GameResult':
        """Create from dictionary"""
        return cls(
            user_id=data.get("user_id"),
            bet=data.get("bet", 0),
            symbols=data.get("symbols", []),
            match_count=data.get("match_count", 0),
            symbol=data.get("symbol"),
            payout=data.get("payout", 0),
            balance_after=data.get("balance_after", 0),
            timestamp=data.get("timestamp", time.time()),
            id=str(data.get("_id")) if data.get("_id") else None
        )
