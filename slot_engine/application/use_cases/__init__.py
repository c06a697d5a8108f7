from .authenticate_use_case import AuthenticateUseCase
from .game_session import GameSession, GameSessionRegistry
from .leaderboard_use_case import LeaderboardUseCase
from .simulate_rtp_use_case import SimulateRtpUseCase
from .spin_sequencer import SpinSequencer, SpinState

__all__ = [
    'AuthenticateUseCase',
    'GameSession',
    'GameSessionRegistry',
    'LeaderboardUseCase',
    'SimulateRtpUseCase',
    'SpinSequencer',
    'SpinState'
]
