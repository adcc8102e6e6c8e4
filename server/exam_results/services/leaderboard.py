"""
Leaderboard collaborator.

Rank and percentile belong to a cohort service this project does not have
yet. PlaceholderLeaderboard keeps the page populated and marks its numbers as
placeholders.
"""
from abc import ABC, abstractmethod

from exam_results.schemas import RankInfo
from exam_results.services.statistics import round_half_up


class LeaderboardService(ABC):
    """Source of rank/percentile for an attempt."""

    @abstractmethod
    async def ranking(self, exam_id: str, score_percent: int) -> RankInfo:
        pass


class PlaceholderLeaderboard(LeaderboardService):
    """Fixed rank and a score-based percentile; not real cohort data."""

    rank: int = 12
    total_participants: int = 263

    async def ranking(self, exam_id: str, score_percent: int) -> RankInfo:
        return RankInfo(
            rank=self.rank,
            total_participants=self.total_participants,
            percentile=max(95, round_half_up(score_percent * 0.95)),
            is_placeholder=True,
        )


# Singleton instance
leaderboard_service = PlaceholderLeaderboard()
