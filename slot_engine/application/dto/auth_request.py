"""Authentication request DTOs"""
from dataclasses import dataclass


@dataclass
class RegisterRequest:
    """Request DTO for account registration"""

    username: str
    pin: str
    confirm_pin: str

    @classmethod
    def from_snake_case(cls, data: dict) -> 'RegisterRequest':
        """Create from snake_case dictionary (REST API)"""
        return cls(
            username=str(data.get('username', '')).strip(),
            pin=str(data.get('pin', '')),
            confirm_pin=str(data.get('confirm_pin', ''))
        )


@dataclass
class LoginRequest:
    """Request DTO for login"""

    username: str
    pin: str

    @classmethod
    def from_snake_case(cls, data: dict) -> 'LoginRequest':
        """Create from snake_case dictionary (REST API)"""
        return cls(
            username=str(data.get('username', '')).strip(),
            pin=str(data.get('pin', ''))
        )
