import random
from collections import Counter

import pytest

from slot_engine.domain.entities.slot_symbols import SlotSymbols
from slot_engine.domain.entities.spin_outcome import PAYLINE_ROW, REELS, ROWS, SpinOutcome
from slot_engine.domain.services.outcome_generator import OutcomeGenerator


class _FixedRandom(random.Random):
    def __init__(self, value):
        super().__init__(0)
        self.value = value

    def random(self):
        return self.value


def _generator(seed=1234, symbols=None):
    return OutcomeGenerator(slot_symbols=symbols or SlotSymbols(), rng=random.Random(seed))


def test_weighted_draws_converge_to_configured_weights():
    gen = _generator()
    draws = 200_000
    counts = Counter(gen.draw_weighted_symbol() for _ in range(draws))
    total_weight = sum(gen.slot_symbols.WEIGHTS.values())

    for symbol, weight in gen.slot_symbols.WEIGHTS.items():
        expected = weight / total_weight
        assert counts[symbol] / draws == pytest.approx(expected, abs=0.005)


def test_weighted_draws_follow_custom_weights():
    symbols = SlotSymbols(SYMBOLS=['A', 'B'], WEIGHTS={'A': 3, 'B': 1}, PAYOUTS={'A': 1, 'B': 2})
    gen = _generator(seed=99, symbols=symbols)
    draws = 50_000
    counts = Counter(gen.draw_weighted_symbol() for _ in range(draws))
    assert counts['A'] / draws == pytest.approx(0.75, abs=0.01)


def test_excluded_symbol_is_never_drawn():
    gen = _generator()
    for symbol in gen.slot_symbols.SYMBOLS:
        for _ in range(2000):
            assert gen.draw_weighted_symbol(excluding=symbol) != symbol


def test_rounding_remainder_falls_back_to_last_candidate():
    # A draw at the very top of the range can survive the subtraction loop
    gen = OutcomeGenerator(rng=_FixedRandom(1.0 + 1e-12))
    assert gen.draw_weighted_symbol() == gen.slot_symbols.SYMBOLS[-1]
    assert gen.draw_weighted_symbol(excluding='💎') == '⭐'


@pytest.mark.parametrize("draw, expected", [
    (0.0, 0),
    (0.2999, 0),
    (0.30, 2),
    (0.5499, 2),
    (0.55, 3),
    (0.75, 4),
    (0.90, 5),
    (0.9999, 5),
])
def test_match_count_buckets_follow_table_order(draw, expected):
    gen = OutcomeGenerator(rng=_FixedRandom(draw))
    assert gen.decide_match_count() == expected


def test_match_count_defaults_to_zero_when_table_is_short():
    symbols = SlotSymbols(MATCH_PROBABILITIES={2: 10, 3: 10})
    gen = OutcomeGenerator(slot_symbols=symbols, rng=_FixedRandom(0.5))
    assert gen.decide_match_count() == 0


def test_match_count_never_one():
    gen = _generator()
    seen = {gen.decide_match_count() for _ in range(5000)}
    assert seen <= {0, 2, 3, 4, 5}
    assert 1 not in seen


def test_outcome_symbol_present_iff_matches():
    gen = _generator()
    for _ in range(2000):
        outcome = gen.decide_outcome()
        if outcome.match_count == 0:
            assert outcome.symbol is None
        else:
            assert outcome.symbol in gen.slot_symbols.SYMBOLS


def test_no_match_grid_starts_with_two_different_symbols():
    gen = _generator()
    for _ in range(2000):
        grid = gen.build_grid(SpinOutcome.no_match())
        line = grid[PAYLINE_ROW]
        assert line[0] != line[1]


@pytest.mark.parametrize("count", [2, 3, 4, 5])
def test_matched_grid_has_left_aligned_run_of_exact_length(count):
    gen = _generator(seed=count)
    for symbol in gen.slot_symbols.SYMBOLS:
        for _ in range(200):
            grid = gen.build_grid(SpinOutcome(match_count=count, symbol=symbol))
            line = grid[PAYLINE_ROW]
            assert line[:count] == [symbol] * count
            if count < REELS:
                assert line[count] != symbol


def test_grid_is_fully_populated():
    gen = _generator()
    grid = gen.build_grid(SpinOutcome(match_count=3, symbol='🍒'))
    assert len(grid) == ROWS
    for row in grid:
        assert len(row) == REELS
        assert all(cell in gen.slot_symbols.SYMBOLS for cell in row)


def test_invalid_outcomes_are_rejected():
    with pytest.raises(ValueError):
        SpinOutcome(match_count=1, symbol='🍒')
    with pytest.raises(ValueError):
        SpinOutcome(match_count=3, symbol=None)
    with pytest.raises(ValueError):
        SpinOutcome(match_count=0, symbol='🍒')
