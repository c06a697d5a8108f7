"""Per-session player state"""
from dataclasses import dataclass


@dataclass
class PlayerState:
    """Credit balance and bet owned by a game session

    The session passes this object by reference into its sequencer; the
    sequencer debits at spin start and credits at settlement.
    """

    user_id: str
    username: str
    credits: int
    bet: int = 10
    out_of_sync: bool = False

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "username": self.username,
            "credits": self.credits,
            "bet": self.bet,
            "out_of_sync": self.out_of_sync
        }
