"""Payout calculation for decided outcomes"""
import math
from typing import Optional

from slot_engine.domain.entities.slot_symbols import SlotSymbols
from slot_engine.domain.entities.spin_outcome import EffectTier, SpinOutcome, WinResult


class PayoutCalculator:
    """Maps an outcome and a bet to a credited amount"""

    def __init__(self, slot_symbols: SlotSymbols = None):
        self.slot_symbols = slot_symbols or SlotSymbols()

    def compute_win(self, outcome: SpinOutcome, bet: int) -> Optional[WinResult]:
        """Return the win for `outcome`, or None when it does not pay

        Two-symbol matches are a near miss and pay nothing. The payout is
        floored on the exact rational product, so it never exceeds it.
        """
        if outcome.match_count < 3 or outcome.symbol is None:
            return None

        multiplier = self.slot_symbols.multiplier_for(outcome.match_count)
        base = self.slot_symbols.payout_of(outcome.symbol)
        payout = math.floor(base * multiplier * bet)

        return WinResult(
            symbol=outcome.symbol,
            count=outcome.match_count,
            payout=payout,
            positions=tuple(range(outcome.match_count))
        )


def effect_tier_for(count: int) -> EffectTier:
    if count >= 5:
        return EffectTier.MEGA
    if count >= 4:
        return EffectTier.GREAT
    return EffectTier.NORMAL
