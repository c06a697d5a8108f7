from .auth_request import RegisterRequest, LoginRequest
from .bet_request import BetRequest
from .simulate_request import SimulateRequest
from .simulate_response import SimulateResponse

__all__ = [
    'RegisterRequest',
    'LoginRequest',
    'BetRequest',
    'SimulateRequest',
    'SimulateResponse'
]
