"""Reel animation timing configuration"""
from dataclasses import dataclass


@dataclass(frozen=True)
class SpinTiming:
    """Timing constants for the reel animation, in seconds"""

    spin_duration: float = 1.5      # until column 0 stops
    reel_delay: float = 0.2         # between later column stops
    suspense_delay: float = 2.0     # extra pause before confirming a streak
    flash_duration: float = 0.6
    settle_delay: float = 0.1       # grace after the last column stops
    tick_interval: float = 0.05     # cosmetic symbol cycling

    def stop_delay(self, column: int, match_count: int) -> float:
        """Delay before stopping `column`, measured from the previous stop"""
        delay = self.spin_duration if column == 0 else self.reel_delay
        # Column 2 pauses on a 2+ streak, column 3 on 3+, column 4 on 4+
        if column >= 2 and match_count >= column:
            delay += self.suspense_delay
        return delay
