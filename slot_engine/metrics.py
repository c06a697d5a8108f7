"""Prometheus business metrics for the slot engine"""
from prometheus_client import Counter


class BusinessMetrics:
    """Counters exported on /metrics"""

    SPINS = Counter(
        'slot_spins_total',
        'Accepted spins by predetermined match count',
        ['match_count']
    )
    REJECTED_SPINS = Counter(
        'slot_rejected_spins_total',
        'Spin attempts rejected by the entry guard',
        ['reason']
    )
    BET_VOLUME = Counter('slot_bet_volume_total', 'Credits wagered')
    PAYOUT_VOLUME = Counter('slot_payout_volume_total', 'Credits paid out')
    ABANDONED_ROUNDS = Counter(
        'slot_abandoned_rounds_total',
        'Rounds torn down before settlement'
    )
    BALANCE_WRITE_FAILURES = Counter(
        'slot_balance_write_failures_total',
        'Balance writes that did not reach the store'
    )

    @classmethod
    def track_spin(cls, match_count: int, bet: int) -> None:
        cls.SPINS.labels(match_count=str(match_count)).inc()
        cls.BET_VOLUME.inc(bet)

    @classmethod
    def track_rejected(cls, reason: str) -> None:
        cls.REJECTED_SPINS.labels(reason=reason).inc()

    @classmethod
    def track_payout(cls, payout: int) -> None:
        cls.PAYOUT_VOLUME.inc(payout)
