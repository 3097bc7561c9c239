"""User dashboard stats endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from cyberquest.database import get_session
from cyberquest.schemas import PathId
from cyberquest.stats.schemas import UserStatsResponse
from cyberquest.stats.service import get_user_stats

router = APIRouter(prefix="/api/user", tags=["Stats"])


@router.get("/{user_id}/stats", response_model=UserStatsResponse)
async def user_stats(
    user_id: PathId,
    db: AsyncSession = Depends(get_session),
) -> UserStatsResponse:
    """Score, rank, completion counts and the trailing 7-day histogram."""
    stats = await get_user_stats(db, user_id)
    return UserStatsResponse(**stats)
