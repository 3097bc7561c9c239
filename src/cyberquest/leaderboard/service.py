"""Ranking Engine: a user's position by total score."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import func, select

from cyberquest.db.models import User
from cyberquest.errors import ValidationError
from cyberquest.leaderboard.ranking import assign_competition_ranks, competition_rank
from cyberquest.users.service import get_user

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession


async def get_user_rank(db: AsyncSession, user_id: int) -> int:
    """1 + the number of users with a strictly greater total score."""
    user = await get_user(db, user_id)
    result = await db.execute(
        select(func.count()).select_from(User).where(User.total_score > user.total_score)
    )
    return competition_rank(int(result.scalar_one()))


async def get_leaderboard(db: AsyncSession, limit: int) -> list[dict[str, Any]]:
    """Top ``limit`` users with their competition ranks."""
    if limit < 0:
        raise ValidationError("Limit must be non-negative", fields=["limit"])
    if limit == 0:
        return []

    result = await db.execute(
        select(User)
        .order_by(User.total_score.desc(), User.id.asc())
        .limit(limit)
        .execution_options(populate_existing=True)
    )
    users = {u.id: u for u in result.scalars().all()}
    entries = [{"id": u.id, "total_score": u.total_score} for u in users.values()]
    ranked = assign_competition_ranks(entries)
    return [{"user": users[e["id"]], "rank": e["rank"]} for e in ranked]
