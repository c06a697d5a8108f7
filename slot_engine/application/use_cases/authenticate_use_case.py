"""Account registration and login use case"""
import re
import logging

from slot_engine.application.ports.account_repository_port import AccountRepositoryPort
from slot_engine.domain.entities.account import Account
from slot_engine.domain.exceptions import AuthenticationError, ConflictError, ValidationError

logger = logging.getLogger(__name__)

PIN_PATTERN = re.compile(r'^\d{4}$')
MIN_USERNAME_LENGTH = 3


class AuthenticateUseCase:
    """Direct credential check against the users table"""

    def __init__(self, account_repository: AccountRepositoryPort, starting_balance: int = 1000):
        self.account_repository = account_repository
        self.starting_balance = starting_balance

    def register(self, username: str, pin: str, confirm_pin: str) -> Account:
        if len(username) < MIN_USERNAME_LENGTH:
            raise ValidationError(f"username must be at least {MIN_USERNAME_LENGTH} characters")
        if not PIN_PATTERN.match(pin):
            raise ValidationError("pin must be exactly 4 digits")
        if pin != confirm_pin:
            raise ValidationError("pins do not match")

        if self.account_repository.find_by_username(username) is not None:
            raise ConflictError(f"username already taken: {username}")

        account = self.account_repository.insert(
            Account(username=username, password=pin, balance=self.starting_balance)
        )
        logger.info(f"Registered {username}")
        return account

    def login(self, username: str, pin: str) -> Account:
        account = self.account_repository.find_by_credentials(username, pin)
        if account is None:
            raise AuthenticationError("invalid username or pin")
        return account
