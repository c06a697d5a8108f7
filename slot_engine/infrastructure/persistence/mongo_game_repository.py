"""MongoDB game repository implementation"""
import time
import logging
from typing import Optional, Dict, Any
from pymongo.database import Database
from pymongo.errors import PyMongoError

from slot_engine.domain.entities.game_result import GameResult
from slot_engine.application.ports.game_repository_port import GameRepositoryPort

logger = logging.getLogger(__name__)


class MongoGameRepository(GameRepositoryPort):
    """MongoDB implementation of round history repository"""

    def __init__(self, db: Database):
        self.db = db
        self.collection = db.games

    def save(self, game: GameResult) -> GameResult:
        """Save game result to MongoDB"""
        data = game.to_dict()
        data.pop("_id")
        result = self.collection.insert_one(data)
        game.id = str(result.inserted_id)
        return game

    def get_session_stats(self, user_id: str, hours: int = 1) -> Optional[Dict[str, Any]]:
        """Get session statistics for RTP calculation"""
        try:
            cutoff_time = time.time() - (hours * 3600)
            pipeline = [
                {
                    "$match": {
                        "user_id": user_id,
                        "timestamp": {"$gte": cutoff_time}
                    }
                },
                {
                    "$group": {
                        "_id": None,
                        "total_bets": {"$sum": "$bet"},
                        "total_payouts": {"$sum": "$payout"},
                        "game_count": {"$sum": 1}
                    }
                }
            ]
            result = list(self.collection.aggregate(pipeline))
        except PyMongoError as e:
            logger.error(f"Error getting session stats: {e}")
            return None

        if not result:
            return None

        stats = result[0]
        stats.pop("_id", None)
        total_bets = stats.get("total_bets", 0)
        stats["rtp_percent"] = round(stats.get("total_payouts", 0) / total_bets * 100, 2) if total_bets else 0.0
        return stats
