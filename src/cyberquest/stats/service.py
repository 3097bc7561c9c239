"""Stats Aggregator: dashboard summary for one user.

Combines the Score Ledger with the four result-record tables. Everything
is computed on each call; nothing is cached.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any
from zoneinfo import ZoneInfo

from sqlalchemy import func, select

from cyberquest.config import get_settings
from cyberquest.db.models import ActivityResult, CyberLabResult, QuizResult, TeamProgress
from cyberquest.leaderboard.service import get_user_rank
from cyberquest.stats.day_utils import bucket_scores, round_half_up, seconds_to_hours, window_bounds
from cyberquest.users.service import get_user

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

RECORD_MODELS = (QuizResult, ActivityResult, CyberLabResult, TeamProgress)


async def _totals(db: AsyncSession, model: Any, user_id: int) -> tuple[int, int, int]:  # noqa: ANN401
    """(record count, score sum, time_spent sum) for one record kind."""
    result = await db.execute(
        select(
            func.count(model.id),
            func.coalesce(func.sum(model.score), 0),
            func.coalesce(func.sum(model.time_spent), 0),
        ).where(model.user_id == user_id)
    )
    count, score_sum, time_sum = result.one()
    return int(count), int(score_sum), int(time_sum)


async def _window_records(
    db: AsyncSession,
    user_id: int,
    start: datetime,
    end: datetime,
) -> list[tuple[datetime, int]]:
    records: list[tuple[datetime, int]] = []
    for model in RECORD_MODELS:
        result = await db.execute(
            select(model.completed_at, model.score).where(
                model.user_id == user_id,
                model.completed_at >= start,
                model.completed_at < end,
            )
        )
        records.extend((row.completed_at, row.score) for row in result.all())
    return records


async def get_user_stats(
    db: AsyncSession,
    user_id: int,
    now: datetime | None = None,
) -> dict[str, Any]:
    """Aggregate a user's ledger, rank and result history.

    Raises:
        NotFoundError: If no user has this id.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    tz = ZoneInfo(get_settings().timezone)

    user = await get_user(db, user_id)
    rank = await get_user_rank(db, user_id)

    quizzes = await _totals(db, QuizResult, user_id)
    activities = await _totals(db, ActivityResult, user_id)
    labs = await _totals(db, CyberLabResult, user_id)
    challenges = await _totals(db, TeamProgress, user_id)

    start, end = window_bounds(now, tz)
    weekly = bucket_scores(await _window_records(db, user_id, start, end), now, tz)

    return {
        "total_score": user.total_score,
        "rank": rank,
        "streak": user.streak,
        "avg_score": round_half_up(quizzes[1] + activities[1], quizzes[0] + activities[0]),
        "completed_quizzes": quizzes[0],
        "completed_activities": activities[0],
        "completed_labs": labs[0],
        "completed_challenges": challenges[0],
        "time_spent_hours": seconds_to_hours(sum(t[2] for t in (quizzes, activities, labs, challenges))),
        "weekly_scores": weekly,
    }
