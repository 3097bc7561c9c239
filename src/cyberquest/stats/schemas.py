"""Dashboard stats response model."""

from __future__ import annotations

from pydantic import Field

from cyberquest.schemas import ApiModel


class UserStatsResponse(ApiModel):
    total_score: int
    rank: int
    streak: int
    avg_score: int
    completed_quizzes: int
    completed_activities: int
    completed_labs: int
    completed_challenges: int
    time_spent_hours: float
    weekly_scores: list[int] = Field(min_length=7, max_length=7)
