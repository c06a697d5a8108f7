"""Game session use case

A session owns the authoritative in-memory balance of one logged-in player,
persists every balance change through the balance repository and forwards
round events to the collaborators (round history, publisher, leaderboard).
"""
import math
import logging
from typing import Callable, Dict, Optional

import sentry_sdk
from sentry_sdk import start_span

from slot_engine.application.ports.account_repository_port import AccountRepositoryPort
from slot_engine.application.ports.balance_repository_port import BalanceRepositoryPort
from slot_engine.application.ports.game_repository_port import GameRepositoryPort
from slot_engine.application.ports.message_publisher_port import MessagePublisherPort
from slot_engine.application.ports.scheduler_port import SchedulerPort
from slot_engine.application.use_cases.leaderboard_use_case import LeaderboardUseCase
from slot_engine.application.use_cases.spin_sequencer import RoundPlan, SpinSequencer
from slot_engine.domain.entities.account import Account
from slot_engine.domain.entities.game_result import GameResult
from slot_engine.domain.entities.player_state import PlayerState
from slot_engine.domain.entities.spin_outcome import WinResult, payline
from slot_engine.domain.entities.spin_timing import SpinTiming
from slot_engine.domain.exceptions import ConflictError, NotFoundError, StoreError, ValidationError
from slot_engine.domain.services.outcome_generator import OutcomeGenerator
from slot_engine.metrics import BusinessMetrics

logger = logging.getLogger(__name__)

MIN_BET = 10
BET_STEP = 10


class GameSession:
    """Balance holder for one player"""

    def __init__(
        self,
        account: Account,
        balance_repository: BalanceRepositoryPort,
        scheduler: SchedulerPort,
        game_repository: Optional[GameRepositoryPort] = None,
        message_publisher: Optional[MessagePublisherPort] = None,
        leaderboard: Optional[LeaderboardUseCase] = None,
        generator: OutcomeGenerator = None,
        timing: SpinTiming = None,
        default_bet: int = MIN_BET
    ):
        self.balance_repository = balance_repository
        self.game_repository = game_repository
        self.message_publisher = message_publisher
        self.leaderboard = leaderboard

        self.player = PlayerState(
            user_id=account.id,
            username=account.username,
            credits=balance_repository.read_balance(account.id),
            bet=default_bet
        )
        self.sequencer = SpinSequencer(
            player=self.player,
            scheduler=scheduler,
            generator=generator,
            timing=timing,
            on_balance_changed=self.notify_balance_changed,
            on_round_settled=self._record_round,
            on_round_won=self.on_round_won
        )

    @property
    def user_id(self) -> str:
        return self.player.user_id

    def spin(self) -> bool:
        return self.sequencer.spin()

    def handle_key(self, key: str) -> bool:
        return self.sequencer.handle_key(key)

    def confirm_win(self) -> bool:
        return self.sequencer.confirm_win()

    def set_bet(self, amount: int) -> bool:
        """Set the bet, capped at the current credits"""
        if amount <= 0:
            raise ValidationError("bet must be positive")
        if self.sequencer.is_spinning:
            return False
        self.player.bet = max(MIN_BET, min(amount, self.player.credits))
        return True

    def set_bet_ratio(self, ratio: float) -> bool:
        """Set the bet to a share of the credits, rounded down to the bet step"""
        if not 0 < ratio <= 1:
            raise ValidationError("ratio must be in (0, 1]")
        if self.sequencer.is_spinning:
            return False
        stepped = math.floor(self.player.credits * ratio / BET_STEP) * BET_STEP
        self.player.bet = max(MIN_BET, stepped)
        return True

    def sync_balance(self, balance: int) -> bool:
        """Apply an externally edited balance; refused while a round is in flight"""
        if balance < 0:
            raise ValidationError("balance must not be negative")
        if self.sequencer.is_spinning:
            return False
        self.player.credits = balance
        self.player.out_of_sync = False
        return True

    def notify_balance_changed(self, new_balance: int) -> None:
        """Persist the balance after a debit or credit"""
        with start_span(op="db.balance", description="Write user balance") as span:
            span.set_data("new_balance", new_balance)
            try:
                written = self.balance_repository.write_balance(self.user_id, new_balance)
            except Exception as e:
                logger.error(f"Balance write raised for {self.user_id}: {e}")
                sentry_sdk.capture_exception(e)
                written = False

        if written:
            self.player.out_of_sync = False
            return

        self.player.out_of_sync = True
        BusinessMetrics.BALANCE_WRITE_FAILURES.inc()
        logger.error(f"Balance {new_balance} for {self.user_id} not persisted, session out of sync")

    def reconcile(self) -> bool:
        """Retry persisting the in-memory balance"""
        self.notify_balance_changed(self.player.credits)
        return not self.player.out_of_sync

    def on_round_won(self, win: WinResult) -> None:
        if self.leaderboard:
            self.leaderboard.refresh()
        if self.message_publisher:
            try:
                self.message_publisher.publish_round_won(self.user_id, win.to_dict())
            except Exception as e:
                logger.error(f"Failed to publish win: {e}")

    def close(self) -> None:
        self.sequencer.destroy()

    def snapshot(self) -> dict:
        data = self.sequencer.snapshot()
        data["user_id"] = self.user_id
        data["username"] = self.player.username
        return data

    def _record_round(self, plan: RoundPlan, balance_after: int) -> None:
        game = GameResult(
            user_id=self.user_id,
            bet=plan.bet,
            symbols=payline(plan.final_grid),
            match_count=plan.match_count,
            symbol=plan.outcome.symbol,
            payout=plan.win.payout if plan.win else 0,
            balance_after=balance_after
        )

        if self.game_repository:
            try:
                with start_span(op="db.insert", description="Store game result") as span:
                    span.set_data("db.system", "mongodb")
                    span.set_data("db.collection", "games")
                    game = self.game_repository.save(game)
            except Exception as e:
                logger.error(f"Failed to store round for {self.user_id}: {e}")
                sentry_sdk.capture_exception(e)

        if self.message_publisher:
            try:
                self.message_publisher.publish_game_result(game.to_dict())
            except Exception as e:
                logger.error(f"Failed to publish round: {e}")


class GameSessionRegistry:
    """At most one live session per user"""

    def __init__(
        self,
        account_repository: AccountRepositoryPort,
        session_factory: Callable[[Account], GameSession],
        balance_repository: Optional[BalanceRepositoryPort] = None
    ):
        self.account_repository = account_repository
        self.session_factory = session_factory
        self.balance_repository = balance_repository
        self.sessions: Dict[str, GameSession] = {}

    def open_session(self, user_id: str) -> GameSession:
        session = self.sessions.get(user_id)
        if session is not None:
            return session

        account = self.account_repository.get(user_id)
        if account is None:
            raise NotFoundError(f"Unknown user: {user_id}")

        session = self.session_factory(account)
        self.sessions[user_id] = session
        logger.info(f"Opened session for {account.username}")
        return session

    def get(self, user_id: str) -> GameSession:
        session = self.sessions.get(user_id)
        if session is None:
            raise NotFoundError(f"No session for user: {user_id}")
        return session

    def close_session(self, user_id: str) -> bool:
        session = self.sessions.pop(user_id, None)
        if session is None:
            return False
        session.close()
        logger.info(f"Closed session for {user_id}")
        return True

    def close_all(self) -> None:
        for user_id in list(self.sessions):
            self.close_session(user_id)

    def adjust_balance(self, user_id: str, balance: int) -> int:
        """External balance edit, routed through the live session when there is one"""
        if balance < 0:
            raise ValidationError("balance must not be negative")

        session = self.sessions.get(user_id)
        if session is not None:
            if not session.sync_balance(balance):
                raise ConflictError(f"Round in flight for user: {user_id}")
            session.notify_balance_changed(balance)
            logger.info(f"Balance of {user_id} set to {balance} in live session")
            return balance

        if self.account_repository.get(user_id) is None:
            raise NotFoundError(f"Unknown user: {user_id}")
        if self.balance_repository is None or not self.balance_repository.write_balance(user_id, balance):
            raise StoreError(f"Balance of {user_id} not persisted")
        logger.info(f"Balance of {user_id} set to {balance}")
        return balance
