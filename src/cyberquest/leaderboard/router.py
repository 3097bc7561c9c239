"""Leaderboard and rank endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from cyberquest.config import get_settings
from cyberquest.database import get_session
from cyberquest.errors import ValidationError
from cyberquest.leaderboard.schemas import LeaderboardEntry, RankResponse
from cyberquest.leaderboard.service import get_leaderboard, get_user_rank
from cyberquest.schemas import PathId

router = APIRouter(prefix="/api", tags=["Leaderboard"])


@router.get("/leaderboard", response_model=list[LeaderboardEntry])
async def leaderboard(
    limit: int | None = Query(None, ge=0),
    db: AsyncSession = Depends(get_session),
) -> list[LeaderboardEntry]:
    """Top users by total score, tied users sharing a rank."""
    settings = get_settings()
    if limit is None:
        limit = settings.leaderboard_default_limit
    if limit > settings.leaderboard_max_limit:
        raise ValidationError(
            f"Limit must be at most {settings.leaderboard_max_limit}",
            fields=["limit"],
        )
    entries = await get_leaderboard(db, limit)
    return [
        LeaderboardEntry(
            rank=e["rank"],
            id=e["user"].id,
            username=e["user"].username,
            first_name=e["user"].first_name,
            last_name=e["user"].last_name,
            total_score=e["user"].total_score,
            streak=e["user"].streak,
            team=e["user"].team,
        )
        for e in entries
    ]


@router.get("/user/{user_id}/rank", response_model=RankResponse)
async def user_rank(
    user_id: PathId,
    db: AsyncSession = Depends(get_session),
) -> RankResponse:
    return RankResponse(rank=await get_user_rank(db, user_id))
