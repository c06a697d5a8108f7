from .handlers import (
    BetHandler,
    ConfirmWinHandler,
    HealthHandler,
    InputHandler,
    LeaderboardHandler,
    LoginHandler,
    MetricsHandler,
    PaytableHandler,
    PlayerBalanceHandler,
    PlayerStatsHandler,
    ReconcileHandler,
    RegisterHandler,
    SessionHandler,
    SessionsHandler,
    SimulateHandler,
    SpinHandler
)

__all__ = [
    'BetHandler',
    'ConfirmWinHandler',
    'HealthHandler',
    'InputHandler',
    'LeaderboardHandler',
    'LoginHandler',
    'MetricsHandler',
    'PaytableHandler',
    'PlayerBalanceHandler',
    'PlayerStatsHandler',
    'ReconcileHandler',
    'RegisterHandler',
    'SessionHandler',
    'SessionsHandler',
    'SimulateHandler',
    'SpinHandler'
]
