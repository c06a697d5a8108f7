"""Spin outcome value objects"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

REELS = 5
ROWS = 3
PAYLINE_ROW = 1

Grid = List[List[str]]


class EffectTier(str, Enum):
    """Visual effect level surfaced with a win"""

    NONE = "none"
    NORMAL = "normal"
    GREAT = "great"
    MEGA = "mega"


@dataclass(frozen=True)
class SpinOutcome:
    """Decision made at spin start: how many payline symbols match, and which"""

    match_count: int
    symbol: Optional[str] = None

    def __post_init__(self):
        if self.match_count not in (0, 2, 3, 4, 5):
            raise ValueError(f"Invalid match count: {self.match_count}")
        if (self.match_count == 0) != (self.symbol is None):
            raise ValueError("symbol must be set iff match_count > 0")

    @classmethod
    def no_match(cls) -> 'SpinOutcome':
        return cls(match_count=0, symbol=None)


@dataclass(frozen=True)
class WinResult:
    """Paying streak on the payline"""

    symbol: str
    count: int
    payout: int
    positions: Tuple[int, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "symbol": self.symbol,
            "count": self.count,
            "payout": self.payout,
            "positions": list(self.positions)
        }


def empty_grid() -> Grid:
    return [[''] * REELS for _ in range(ROWS)]


def copy_grid(grid: Grid) -> Grid:
    return [list(row) for row in grid]


def payline(grid: Grid) -> List[str]:
    """Symbols on the only row with payout semantics"""
    return list(grid[PAYLINE_ROW])
