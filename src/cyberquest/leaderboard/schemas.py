"""Leaderboard response models."""

from __future__ import annotations

from cyberquest.schemas import ApiModel


class LeaderboardEntry(ApiModel):
    rank: int
    id: int
    username: str
    first_name: str
    last_name: str
    total_score: int
    streak: int
    team: str | None = None


class RankResponse(ApiModel):
    rank: int
