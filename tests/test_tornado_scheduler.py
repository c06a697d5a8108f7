import asyncio
import time

from tornado.testing import AsyncTestCase, gen_test

from slot_engine.application.use_cases.spin_sequencer import SpinSequencer, SpinState
from slot_engine.domain.entities.player_state import PlayerState
from slot_engine.domain.entities.spin_outcome import PAYLINE_ROW, SpinOutcome
from slot_engine.domain.entities.spin_timing import SpinTiming
from slot_engine.infrastructure.scheduling.tornado_scheduler import TornadoScheduler
from tests._fakes import FixedOutcomeGenerator

FAST = SpinTiming(
    spin_duration=0.02,
    reel_delay=0.01,
    suspense_delay=0.02,
    flash_duration=0.01,
    settle_delay=0.01,
    tick_interval=0.005
)


async def _wait_for(predicate, timeout=2.0):
    deadline = time.monotonic() + timeout
    while not predicate():
        if time.monotonic() > deadline:
            raise AssertionError("condition not reached")
        await asyncio.sleep(0.005)


class TornadoSchedulerTest(AsyncTestCase):

    @gen_test
    async def test_call_later_and_cancel(self):
        scheduler = TornadoScheduler()
        fired = []
        scheduler.call_later(0.01, lambda: fired.append("a"))
        handle = scheduler.call_later(0.01, lambda: fired.append("b"))
        scheduler.cancel(handle)
        await asyncio.sleep(0.05)
        self.assertEqual(fired, ["a"])

    @gen_test
    async def test_ticker_runs_until_stopped(self):
        scheduler = TornadoScheduler()
        ticks = []
        ticker = scheduler.start_ticker(0.005, lambda: ticks.append(1))
        await asyncio.sleep(0.05)
        scheduler.stop_ticker(ticker)
        count = len(ticks)
        self.assertGreater(count, 0)
        await asyncio.sleep(0.03)
        self.assertEqual(len(ticks), count)

    @gen_test
    async def test_sequencer_round_on_io_loop(self):
        player = PlayerState(user_id="u1", username="alice", credits=1000, bet=10)
        seq = SpinSequencer(
            player,
            TornadoScheduler(),
            generator=FixedOutcomeGenerator(SpinOutcome(match_count=5, symbol='💎')),
            timing=FAST
        )

        self.assertTrue(seq.spin())
        self.assertFalse(seq.spin())
        await _wait_for(lambda: seq.state is SpinState.IDLE)

        self.assertEqual(player.credits, 1990)
        self.assertEqual(seq.grid[PAYLINE_ROW], ['💎'] * 5)
        self.assertTrue(seq.show_popup)

    @gen_test
    async def test_destroy_stops_all_timers(self):
        player = PlayerState(user_id="u1", username="alice", credits=1000, bet=10)
        seq = SpinSequencer(
            player,
            TornadoScheduler(),
            generator=FixedOutcomeGenerator(SpinOutcome(match_count=3, symbol='🍒')),
            timing=FAST
        )
        seq.spin()
        await asyncio.sleep(0.025)
        seq.destroy()
        frozen = [list(row) for row in seq.grid]

        await asyncio.sleep(0.1)
        self.assertEqual(seq.grid, frozen)
        self.assertEqual(player.credits, 990)
