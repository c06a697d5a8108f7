"""Slot machine symbols configuration"""
from dataclasses import dataclass
from fractions import Fraction
from typing import Dict, List


@dataclass
class SlotSymbols:
    """Slot machine symbol configuration with weights, payouts and match tables"""

    SYMBOLS: List[str] = None
    WEIGHTS: Dict[str, int] = None
    PAYOUTS: Dict[str, Fraction] = None
    MATCH_PROBABILITIES: Dict[int, int] = None
    MATCH_MULTIPLIERS: Dict[int, int] = None

    def __post_init__(self):
        if self.SYMBOLS is None:
            self.SYMBOLS = ['🍒', '🍋', '🍊', '🍇', '🔔', '⭐', '💎']

        # Higher payout symbols get the lowest weights
        if self.WEIGHTS is None:
            self.WEIGHTS = {
                '🍒': 25,  # most frequent
                '🍋': 20,
                '🍊': 18,
                '🍇': 15,
                '🔔': 12,
                '⭐': 9,
                '💎': 1    # rarest
            }

        # Base payout per unit bet on a 3-symbol match
        if self.PAYOUTS is None:
            self.PAYOUTS = {
                '🍒': Fraction('0.3'),
                '🍋': Fraction('0.5'),
                '🍊': Fraction('0.7'),
                '🍇': Fraction(1),
                '🔔': Fraction(2),
                '⭐': Fraction(5),
                '💎': Fraction(10)
            }
        else:
            self.PAYOUTS = {s: Fraction(str(p)) for s, p in self.PAYOUTS.items()}

        # Percent chance of each payline match count, count=1 never happens
        if self.MATCH_PROBABILITIES is None:
            self.MATCH_PROBABILITIES = {
                0: 30,
                2: 25,
                3: 20,
                4: 15,
                5: 10   # jackpot
            }

        if self.MATCH_MULTIPLIERS is None:
            self.MATCH_MULTIPLIERS = {
                3: 1,
                4: 3,
                5: 10
            }

    def weight_of(self, symbol: str) -> int:
        """Get draw weight for a symbol"""
        return self.WEIGHTS[symbol]

    def payout_of(self, symbol: str) -> Fraction:
        """Get base payout multiplier for a symbol"""
        return self.PAYOUTS[symbol]

    def multiplier_for(self, count: int) -> int:
        """Get match-count multiplier (0 for counts that never pay)"""
        return self.MATCH_MULTIPLIERS.get(count, 0)

    def to_dict(self) -> dict:
        """Paytable view for clients"""
        return {
            "symbols": list(self.SYMBOLS),
            "payouts": {s: float(p) for s, p in self.PAYOUTS.items()},
            "match_multipliers": {str(c): m for c, m in self.MATCH_MULTIPLIERS.items()}
        }
