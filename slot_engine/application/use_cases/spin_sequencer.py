"""Spin sequencing use case

One sequencer drives the rounds of one player. A round is decided in full
when the spin is accepted; everything after that is a timed replay of the
decision: five column stops scheduled one after another, then settlement.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List, Optional

import sentry_sdk
from sentry_sdk import start_span

from slot_engine.application.ports.scheduler_port import SchedulerPort
from slot_engine.domain.entities.player_state import PlayerState
from slot_engine.domain.entities.spin_outcome import (
    REELS,
    ROWS,
    EffectTier,
    Grid,
    SpinOutcome,
    WinResult,
    copy_grid,
)
from slot_engine.domain.entities.spin_timing import SpinTiming
from slot_engine.domain.services.outcome_generator import OutcomeGenerator
from slot_engine.domain.services.payout_calculator import PayoutCalculator, effect_tier_for
from slot_engine.metrics import BusinessMetrics

logger = logging.getLogger(__name__)

MANUAL_SPIN_KEY = "Space"


class SpinState(str, Enum):
    IDLE = "idle"
    SPINNING = "spinning"
    SETTLING = "settling"


@dataclass(frozen=True)
class RoundPlan:
    """Everything decided when a spin is accepted"""

    bet: int
    outcome: SpinOutcome
    final_grid: Grid
    win: Optional[WinResult]

    @property
    def match_count(self) -> int:
        return self.outcome.match_count


class SpinSequencer:
    """State machine Idle -> Spinning -> Settling -> Idle for one player"""

    def __init__(
        self,
        player: PlayerState,
        scheduler: SchedulerPort,
        generator: OutcomeGenerator = None,
        payout_calculator: PayoutCalculator = None,
        timing: SpinTiming = None,
        on_balance_changed: Optional[Callable[[int], None]] = None,
        on_round_settled: Optional[Callable[[RoundPlan, int], None]] = None,
        on_round_won: Optional[Callable[[WinResult], None]] = None
    ):
        self.player = player
        self.scheduler = scheduler
        self.generator = generator or OutcomeGenerator()
        self.payout_calculator = payout_calculator or PayoutCalculator(self.generator.slot_symbols)
        self.timing = timing or SpinTiming()
        self.on_balance_changed = on_balance_changed
        self.on_round_settled = on_round_settled
        self.on_round_won = on_round_won

        self.state = SpinState.IDLE
        self.grid: Grid = self.generator.build_grid(SpinOutcome.no_match())
        self.spinning_reels: List[bool] = [False] * REELS
        self.matched_positions: List[int] = []
        self.match_flash = False
        self.effect_tier = EffectTier.NONE
        self.last_win: Optional[int] = None
        self.win_result: Optional[WinResult] = None
        self.show_popup = False
        self.destroyed = False

        self._plan: Optional[RoundPlan] = None
        self._tickers: List[Any] = [None] * REELS
        self._pending: Any = None
        self._flash_handle: Any = None

    @property
    def is_spinning(self) -> bool:
        return self.state is not SpinState.IDLE

    def spin(self) -> bool:
        """Start a round; returns False when the entry guard rejects it"""
        if self.destroyed or self.is_spinning:
            BusinessMetrics.track_rejected("busy")
            return False

        bet = self.player.bet
        if bet <= 0 or self.player.credits < bet:
            logger.debug(f"Spin rejected for {self.player.user_id}: bet {bet}, credits {self.player.credits}")
            BusinessMetrics.track_rejected("insufficient_credits")
            return False

        self.state = SpinState.SPINNING
        self.last_win = None
        self.win_result = None
        self.show_popup = False
        self.matched_positions = []
        self.match_flash = False
        self.effect_tier = EffectTier.NONE

        # House takes the bet before anything is revealed
        self.player.credits -= bet
        self._notify_balance()

        with start_span(op="game.rng", description="Decide spin outcome") as span:
            outcome = self.generator.decide_outcome()
            final_grid = self.generator.build_grid(outcome)
            win = self.payout_calculator.compute_win(outcome, bet)
            span.set_data("match_count", outcome.match_count)
            span.set_data("payout", win.payout if win else 0)

        self._plan = RoundPlan(bet=bet, outcome=outcome, final_grid=final_grid, win=win)
        BusinessMetrics.track_spin(outcome.match_count, bet)
        logger.info(
            f"Spin decided for {self.player.user_id}: match_count={outcome.match_count} "
            f"symbol={outcome.symbol} payout={win.payout if win else 0}"
        )

        self.spinning_reels = [True] * REELS
        for reel in range(REELS):
            self._tickers[reel] = self.scheduler.start_ticker(
                self.timing.tick_interval, self._make_scrambler(reel)
            )

        self._schedule_stop(0)
        return True

    def handle_key(self, key: str) -> bool:
        """Keyboard shortcut, same guard as spin()"""
        if key != MANUAL_SPIN_KEY:
            return False
        return self.spin()

    def confirm_win(self) -> bool:
        """Dismiss the win popup and tell collaborators about the win"""
        if not self.show_popup or self.win_result is None:
            return False

        win = self.win_result
        self.show_popup = False
        self.effect_tier = EffectTier.NONE
        if self.on_round_won:
            self.on_round_won(win)
        return True

    def destroy(self) -> None:
        """Tear down; an in-flight round is abandoned without settlement"""
        if self.destroyed:
            return
        self.destroyed = True

        abandoned = self._plan
        self._cancel_all()
        self._plan = None
        self.spinning_reels = [False] * REELS
        self.state = SpinState.IDLE

        if abandoned is not None:
            BusinessMetrics.ABANDONED_ROUNDS.inc()
            logger.warning(f"Round abandoned for {self.player.user_id}, bet {abandoned.bet} forfeited")

    def snapshot(self) -> dict:
        """Serializable view of the visible round state"""
        return {
            "state": self.state.value,
            "credits": self.player.credits,
            "bet": self.player.bet,
            "out_of_sync": self.player.out_of_sync,
            "grid": copy_grid(self.grid),
            "spinning_reels": list(self.spinning_reels),
            "matched_positions": list(self.matched_positions),
            "match_flash": self.match_flash,
            "effect_tier": self.effect_tier.value,
            "last_win": self.last_win,
            "win_result": self.win_result.to_dict() if self.win_result else None,
            "show_popup": self.show_popup
        }

    def _make_scrambler(self, reel: int) -> Callable[[], None]:
        def scramble():
            if not self.spinning_reels[reel]:
                return
            for row in range(ROWS):
                self.grid[row][reel] = self.generator.draw_uniform_symbol()
        return scramble

    def _schedule_stop(self, reel: int) -> None:
        delay = self.timing.stop_delay(reel, self._plan.match_count)
        self._pending = self.scheduler.call_later(delay, lambda: self._stop_reel(reel))

    def _stop_reel(self, reel: int) -> None:
        self._pending = None
        plan = self._plan
        if plan is None:
            return

        ticker = self._tickers[reel]
        if ticker is not None:
            self.scheduler.stop_ticker(ticker)
            self._tickers[reel] = None

        for row in range(ROWS):
            self.grid[row][reel] = plan.final_grid[row][reel]
        self.spinning_reels[reel] = False

        stopped = reel + 1
        if stopped >= 3 and plan.match_count >= stopped:
            self._flash(list(range(stopped)))

        if reel < REELS - 1:
            self._schedule_stop(reel + 1)
        else:
            self._pending = self.scheduler.call_later(self.timing.settle_delay, self._settle)

    def _flash(self, positions: List[int]) -> None:
        if self._flash_handle is not None:
            self.scheduler.cancel(self._flash_handle)
        self.match_flash = True
        self.matched_positions = positions
        self._flash_handle = self.scheduler.call_later(self.timing.flash_duration, self._end_flash)

    def _end_flash(self) -> None:
        self._flash_handle = None
        self.match_flash = False

    def _settle(self) -> None:
        self._pending = None
        plan = self._plan
        if plan is None:
            return

        self.state = SpinState.SETTLING
        try:
            with start_span(op="game.settle", description="Settle round") as span:
                win = plan.win
                if win is not None:
                    self.matched_positions = list(win.positions)
                    self.player.credits += win.payout
                    self._notify_balance()
                    BusinessMetrics.track_payout(win.payout)

                    if win.count >= 3:
                        self.last_win = win.payout
                        self.win_result = win
                        self.show_popup = True
                        self.effect_tier = effect_tier_for(win.count)

                span.set_data("payout", win.payout if win else 0)
                span.set_data("balance", self.player.credits)

            if self.on_round_settled:
                self.on_round_settled(plan, self.player.credits)
        finally:
            self._plan = None
            self.state = SpinState.IDLE

    def _notify_balance(self) -> None:
        if self.on_balance_changed is None:
            return
        try:
            self.on_balance_changed(self.player.credits)
        except Exception as e:
            # In-memory credits stay authoritative
            logger.error(f"Balance change hook failed for {self.player.user_id}: {e}")
            sentry_sdk.capture_exception(e)
            self.player.out_of_sync = True

    def _cancel_all(self) -> None:
        for reel, ticker in enumerate(self._tickers):
            if ticker is not None:
                self.scheduler.stop_ticker(ticker)
                self._tickers[reel] = None
        if self._pending is not None:
            self.scheduler.cancel(self._pending)
            self._pending = None
        if self._flash_handle is not None:
            self.scheduler.cancel(self._flash_handle)
            self._flash_handle = None
        self.match_flash = False
