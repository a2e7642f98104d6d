"""
Global leaderboard aggregation
"""
import logging
from collections import defaultdict
from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session

from app.models import Attempt
from app.repositories.attempt_repository import AttemptRepository, attempt_repository
from app.utils.cache import CacheService, cache_service

logger = logging.getLogger(__name__)


class LeaderboardService:
    """
    Ranks users by the sum of their attempt scores

    Ties on total score are ordered by username.
    """

    def __init__(
        self,
        attempts: Optional[AttemptRepository] = None,
        cache: Optional[CacheService] = None
    ):
        self.attempts = attempts or attempt_repository
        self.cache = cache or cache_service

    def get_global_leaderboard(self, db: Session, limit: int = 10) -> List[Dict[str, Any]]:
        """
        Get the top `limit` users

        Args:
            db: Database session
            limit: Number of entries to return

        Returns:
            List of {user_id, username, total_score, quizzes_attempted, average_percentage}
        """
        cache_key = self.cache.leaderboard_key(limit)
        cached = self.cache.get(cache_key)
        if cached is not None:
            return cached

        attempts = self.attempts.find_all_with_users(db)
        leaderboard = self.aggregate(attempts)[:limit]

        self.cache.set(cache_key, leaderboard)
        return leaderboard

    def aggregate(self, attempts: List[Attempt]) -> List[Dict[str, Any]]:
        """Group attempts by user and rank the totals"""

        user_stats = defaultdict(lambda: {"username": "", "total_score": 0, "count": 0, "total_percentage": 0.0})

        for attempt in attempts:
            stats = user_stats[str(attempt.user_id)]
            stats["username"] = attempt.user.username
            stats["total_score"] += attempt.score
            stats["count"] += 1
            stats["total_percentage"] += attempt.percentage

        leaderboard = [
            {
                "user_id": user_id,
                "username": stats["username"],
                "total_score": stats["total_score"],
                "quizzes_attempted": stats["count"],
                "average_percentage": round(stats["total_percentage"] / stats["count"], 2)
            }
            for user_id, stats in user_stats.items()
        ]

        leaderboard.sort(key=lambda entry: (-entry["total_score"], entry["username"]))

        logger.debug(f"Leaderboard aggregated over {len(attempts)} attempts, {len(leaderboard)} users")
        return leaderboard


# Global instance
leaderboard_service = LeaderboardService()
