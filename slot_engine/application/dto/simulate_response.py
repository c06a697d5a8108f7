"""RTP simulation response DTO"""
from dataclasses import dataclass, field
from typing import Dict


@dataclass
class SimulateResponse:
    """Response DTO for RTP simulation"""

    spins: int
    bet: int
    total_bet: int
    total_paid: int
    rtp_percent: float
    hit_rate_percent: float
    match_counts: Dict[str, int] = field(default_factory=dict)
    symbol_frequencies: Dict[str, float] = field(default_factory=dict)

    def to_snake_case(self) -> dict:
        """Convert to snake_case dictionary (REST API)"""
        return {
            "spins": self.spins,
            "bet": self.bet,
            "total_bet": self.total_bet,
            "total_paid": self.total_paid,
            "rtp_percent": self.rtp_percent,
            "hit_rate_percent": self.hit_rate_percent,
            "match_counts": self.match_counts,
            "symbol_frequencies": self.symbol_frequencies
        }
