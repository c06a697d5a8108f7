"""RTP simulation request DTO"""
from dataclasses import dataclass


@dataclass
class SimulateRequest:
    """Request DTO for RTP simulation"""

    spins: int = 10000
    bet: int = 10

    @classmethod
    def from_snake_case(cls, data: dict) -> 'SimulateRequest':
        """Create from snake_case dictionary (REST API)"""
        return cls(
            spins=int(data.get('spins', 10000)),
            bet=int(data.get('bet', 10))
        )
