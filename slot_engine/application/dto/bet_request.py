"""Bet change request DTO"""
from dataclasses import dataclass
from typing import Optional

from slot_engine.domain.exceptions import ValidationError


@dataclass
class BetRequest:
    """Request DTO for a bet change, either an amount or a share of credits"""

    amount: Optional[int] = None
    ratio: Optional[float] = None

    @classmethod
    def from_snake_case(cls, data: dict) -> 'BetRequest':
        """Create from snake_case dictionary (REST API)"""
        amount = data.get('amount')
        ratio = data.get('ratio')
        if (amount is None) == (ratio is None):
            raise ValidationError("exactly one of amount or ratio is required")
        try:
            return cls(
                amount=int(amount) if amount is not None else None,
                ratio=float(ratio) if ratio is not None else None
            )
        except (TypeError, ValueError) as e:
            raise ValidationError(f"invalid bet: {e}") from e
