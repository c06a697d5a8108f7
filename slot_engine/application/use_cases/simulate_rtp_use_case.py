"""Monte Carlo RTP simulation use case"""
import logging

import numpy as np
import sentry_sdk
from sentry_sdk import start_span

from slot_engine.application.dto.simulate_request import SimulateRequest
from slot_engine.application.dto.simulate_response import SimulateResponse
from slot_engine.domain.exceptions import ValidationError
from slot_engine.domain.services.outcome_generator import OutcomeGenerator
from slot_engine.domain.services.payout_calculator import PayoutCalculator

logger = logging.getLogger(__name__)

MAX_SPINS = 1_000_000
MATCH_COUNTS = (0, 2, 3, 4, 5)


class SimulateRtpUseCase:
    """Runs the outcome engine without animation or balance to estimate RTP"""

    def __init__(self, generator: OutcomeGenerator = None, payout_calculator: PayoutCalculator = None):
        self.generator = generator or OutcomeGenerator()
        self.payout_calculator = payout_calculator or PayoutCalculator(self.generator.slot_symbols)

    def execute(self, request: SimulateRequest) -> SimulateResponse:
        if not 1 <= request.spins <= MAX_SPINS:
            raise ValidationError(f"spins must be between 1 and {MAX_SPINS}")
        if request.bet <= 0:
            raise ValidationError("bet must be positive")

        symbols = self.generator.slot_symbols.SYMBOLS

        with start_span(op="sim.rounds", description="Simulate rounds") as span:
            payouts = np.zeros(request.spins, dtype=np.int64)
            match_counts = np.zeros(request.spins, dtype=np.int64)
            for i in range(request.spins):
                outcome = self.generator.decide_outcome()
                win = self.payout_calculator.compute_win(outcome, request.bet)
                match_counts[i] = outcome.match_count
                payouts[i] = win.payout if win else 0
            span.set_data("spins", request.spins)

        with start_span(op="sim.symbols", description="Sample symbol frequencies"):
            draws = np.array([
                symbols.index(self.generator.draw_weighted_symbol())
                for _ in range(request.spins)
            ])
            symbol_counts = np.bincount(draws, minlength=len(symbols))

        total_bet = request.bet * request.spins
        total_paid = int(payouts.sum())
        by_count = np.bincount(match_counts, minlength=max(MATCH_COUNTS) + 1)

        response = SimulateResponse(
            spins=request.spins,
            bet=request.bet,
            total_bet=total_bet,
            total_paid=total_paid,
            rtp_percent=round(total_paid / total_bet * 100, 4),
            hit_rate_percent=round(float(np.count_nonzero(payouts)) / request.spins * 100, 4),
            match_counts={str(c): int(by_count[c]) for c in MATCH_COUNTS},
            symbol_frequencies={
                s: round(float(symbol_counts[i]) / request.spins, 6) for i, s in enumerate(symbols)
            }
        )

        sentry_sdk.set_tag("sim.rtp", str(response.rtp_percent))
        logger.info(f"Simulated {request.spins} spins: RTP {response.rtp_percent}%")
        return response
