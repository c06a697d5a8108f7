"""Slot outcome generation

The outcome of a spin is decided up front from the match probability table,
then expanded into a full 3x5 display grid that shows exactly that outcome on
the payline.
"""
import random
from typing import Optional

from slot_engine.domain.entities.slot_symbols import SlotSymbols
from slot_engine.domain.entities.spin_outcome import (
    PAYLINE_ROW,
    REELS,
    ROWS,
    Grid,
    SpinOutcome,
    empty_grid,
)


class OutcomeGenerator:
    """Weighted random draws over the configured symbol set"""

    def __init__(self, slot_symbols: SlotSymbols = None, rng: random.Random = None):
        self.slot_symbols = slot_symbols or SlotSymbols()
        self.rng = rng or random.Random()

    def draw_weighted_symbol(self, excluding: Optional[str] = None) -> str:
        """Draw a symbol with probability proportional to its weight"""
        candidates = [s for s in self.slot_symbols.SYMBOLS if s != excluding]
        total_weight = sum(self.slot_symbols.weight_of(s) for s in candidates)
        remaining = self.rng.random() * total_weight

        for symbol in candidates:
            remaining -= self.slot_symbols.weight_of(symbol)
            if remaining <= 0:
                return symbol

        # Float accumulation can leave a sliver unassigned
        return candidates[-1]

    def draw_uniform_symbol(self) -> str:
        """Draw any symbol with equal probability (reel cycling only)"""
        return self.rng.choice(self.slot_symbols.SYMBOLS)

    def decide_match_count(self) -> int:
        """Pick a payline match count from the probability table"""
        draw = self.rng.random() * 100
        cumulative = 0

        for count, probability in self.slot_symbols.MATCH_PROBABILITIES.items():
            cumulative += probability
            if draw < cumulative:
                return count

        # Table sums to less than 100: the residue means no match
        return 0

    def decide_outcome(self) -> SpinOutcome:
        match_count = self.decide_match_count()
        if match_count == 0:
            return SpinOutcome.no_match()
        return SpinOutcome(match_count=match_count, symbol=self.draw_weighted_symbol())

    def build_grid(self, outcome: SpinOutcome) -> Grid:
        """Expand an outcome into the final display grid"""
        grid = empty_grid()
        line = grid[PAYLINE_ROW]

        if outcome.match_count == 0 or outcome.symbol is None:
            # First two columns differ so no streak can appear
            line[0] = self.draw_weighted_symbol()
            line[1] = self.draw_weighted_symbol(excluding=line[0])
            for col in range(2, REELS):
                line[col] = self.draw_weighted_symbol()
        else:
            for col in range(outcome.match_count):
                line[col] = outcome.symbol
            # Keep the streak from running past match_count
            for col in range(outcome.match_count, REELS):
                line[col] = self.draw_weighted_symbol(excluding=outcome.symbol)

        for row in range(ROWS):
            if row == PAYLINE_ROW:
                continue
            for col in range(REELS):
                grid[row][col] = self.draw_weighted_symbol()

        return grid
