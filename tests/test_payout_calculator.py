from fractions import Fraction

import pytest

from slot_engine.domain.entities.slot_symbols import SlotSymbols
from slot_engine.domain.entities.spin_outcome import EffectTier, SpinOutcome
from slot_engine.domain.services.payout_calculator import PayoutCalculator, effect_tier_for


@pytest.fixture
def calculator():
    return PayoutCalculator(SlotSymbols())


@pytest.mark.parametrize("outcome", [
    SpinOutcome.no_match(),
    SpinOutcome(match_count=2, symbol='💎'),
])
def test_no_win_below_three(calculator, outcome):
    assert calculator.compute_win(outcome, 100) is None


def test_three_cherries(calculator):
    win = calculator.compute_win(SpinOutcome(match_count=3, symbol='🍒'), 10)
    assert win.payout == 3
    assert win.count == 3
    assert win.positions == (0, 1, 2)


def test_four_bells(calculator):
    win = calculator.compute_win(SpinOutcome(match_count=4, symbol='🔔'), 10)
    assert win.payout == 60
    assert win.positions == (0, 1, 2, 3)


def test_five_diamonds(calculator):
    win = calculator.compute_win(SpinOutcome(match_count=5, symbol='💎'), 10)
    assert win.payout == 1000
    assert win.positions == (0, 1, 2, 3, 4)


def test_payout_is_floored_on_exact_product(calculator):
    # 0.3 * 3 * 10 is exactly 9; binary floats would give 8.999...
    win = calculator.compute_win(SpinOutcome(match_count=4, symbol='🍒'), 10)
    assert win.payout == 9

    win = calculator.compute_win(SpinOutcome(match_count=3, symbol='🍒'), 15)
    assert win.payout == 4


def test_payout_never_exceeds_exact_product(calculator):
    symbols = calculator.slot_symbols
    for symbol in symbols.SYMBOLS:
        for count in (3, 4, 5):
            for bet in (10, 15, 33, 70, 125):
                win = calculator.compute_win(SpinOutcome(match_count=count, symbol=symbol), bet)
                exact = symbols.payout_of(symbol) * symbols.multiplier_for(count) * bet
                assert win.payout <= exact < win.payout + 1


def test_payouts_are_stored_as_exact_rationals():
    symbols = SlotSymbols(PAYOUTS={'🍒': 0.3})
    assert symbols.payout_of('🍒') == Fraction(3, 10)


@pytest.mark.parametrize("count, tier", [
    (3, EffectTier.NORMAL),
    (4, EffectTier.GREAT),
    (5, EffectTier.MEGA),
])
def test_effect_tiers(count, tier):
    assert effect_tier_for(count) is tier
