"""User management business logic.

Users come into existence only through ``get_or_create_user``. Every other
lookup raises NotFoundError on a miss.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING

import structlog
from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError

from cyberquest.database import unit_of_work
from cyberquest.db.models import Achievement, User
from cyberquest.errors import NotFoundError, ValidationError

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

logger = structlog.get_logger()

TEAMS = ("red", "white")


async def get_user(db: AsyncSession, user_id: int) -> User:
    """Load a user with fresh column values."""
    result = await db.execute(
        select(User).where(User.id == user_id).execution_options(populate_existing=True)
    )
    user = result.scalar_one_or_none()
    if user is None:
        raise NotFoundError.for_entity("User", user_id)
    return user


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    result = await db.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


async def _username_taken(db: AsyncSession, username: str) -> bool:
    result = await db.execute(select(User.id).where(User.username == username))
    return result.scalar_one_or_none() is not None


async def get_or_create_user(
    db: AsyncSession,
    email: str,
    username: str,
    first_name: str,
    last_name: str,
) -> tuple[User, bool]:
    """
    Get the user registered under ``email``, or create one.

    Returns:
        Tuple of (user, created) where created is True if a new user was made.

    Raises:
        ValidationError: If another user already holds ``username``.
    """
    user = await get_user_by_email(db, email)
    if user is not None:
        return user, False

    if await _username_taken(db, username):
        raise ValidationError("Username already taken", fields=["username"])

    user = User(
        email=email,
        username=username,
        first_name=first_name,
        last_name=last_name,
        total_score=0,
        streak=0,
        created_at=datetime.now(timezone.utc),
    )
    try:
        async with unit_of_work(db, "create_user", email=email):
            db.add(user)
            try:
                await db.flush()
            except IntegrityError as exc:
                raise ValidationError("Username already taken", fields=["username"]) from exc
    except ValidationError:
        # A concurrent request may have registered this email first.
        existing = await get_user_by_email(db, email)
        if existing is None:
            raise
        logger.info("user_create_raced", user_id=existing.id, email=email)
        return existing, False

    logger.info("user_created", user_id=user.id, username=username)
    return user, True


async def set_team(db: AsyncSession, user_id: int, team: str | None) -> None:
    """Select the red or white team, or leave teams with None."""
    if team is not None and team not in TEAMS:
        raise ValidationError(f"Unknown team: {team}", fields=["team"])
    async with unit_of_work(db, "set_team", user_id=user_id):
        result = await db.execute(
            update(User)
            .where(User.id == user_id)
            .values(team=team)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            raise NotFoundError.for_entity("User", user_id)
    logger.info("team_selected", user_id=user_id, team=team)


async def get_team(db: AsyncSession, user_id: int) -> str | None:
    user = await get_user(db, user_id)
    return user.team


async def set_streak(db: AsyncSession, user_id: int, streak: int) -> User:
    """Overwrite the externally computed day streak."""
    if streak < 0:
        raise ValidationError("Streak must be non-negative", fields=["streak"])
    async with unit_of_work(db, "set_streak", user_id=user_id):
        result = await db.execute(
            update(User)
            .where(User.id == user_id)
            .values(streak=streak, last_activity=datetime.now(timezone.utc))
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            raise NotFoundError.for_entity("User", user_id)
    return await get_user(db, user_id)


# ---------------------------------------------------------------------------
# Achievements
# ---------------------------------------------------------------------------


async def list_achievements(db: AsyncSession, user_id: int) -> list[Achievement]:
    """Achievements for a user, newest first."""
    await get_user(db, user_id)
    result = await db.execute(
        select(Achievement)
        .where(Achievement.user_id == user_id)
        .order_by(Achievement.earned_at.desc(), Achievement.id.desc())
    )
    return list(result.scalars().all())


async def create_achievement(
    db: AsyncSession,
    user_id: int,
    type: str,  # noqa: A002
    title: str,
    description: str | None = None,
    icon_name: str | None = None,
) -> Achievement:
    await get_user(db, user_id)
    async with unit_of_work(db, "create_achievement", user_id=user_id):
        achievement = Achievement(
            user_id=user_id,
            type=type,
            title=title,
            description=description,
            icon_name=icon_name,
            earned_at=datetime.now(timezone.utc),
        )
        db.add(achievement)
        await db.flush()
    logger.info("achievement_earned", user_id=user_id, title=title)
    return achievement
