from .account_repository_port import AccountRepositoryPort
from .balance_repository_port import BalanceRepositoryPort
from .change_feed_port import ChangeFeedPort
from .game_repository_port import GameRepositoryPort
from .message_publisher_port import MessagePublisherPort
from .scheduler_port import SchedulerPort

__all__ = [
    'AccountRepositoryPort',
    'BalanceRepositoryPort',
    'ChangeFeedPort',
    'GameRepositoryPort',
    'MessagePublisherPort',
    'SchedulerPort'
]
