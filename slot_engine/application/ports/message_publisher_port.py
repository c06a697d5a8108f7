"""Message publisher port (interface)"""
from abc import ABC, abstractmethod
from typing import Dict, Any


class MessagePublisherPort(ABC):
    """Port for publishing game events"""

    @abstractmethod
    def publish_game_result(self, game_data: Dict[str, Any]) -> None:
        """Publish settled round for analytics"""
        pass

    @abstractmethod
    def publish_round_won(self, user_id: str, win_data: Dict[str, Any]) -> None:
        """Publish a confirmed win so collaborators can refresh"""
        pass
