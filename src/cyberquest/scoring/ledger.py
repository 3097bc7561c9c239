"""Score Ledger: the per-user cumulative ``total_score``.

The total only ever moves through a single SQL-side increment, so two
concurrent completions for the same user are both counted. There is no
decrement. The ledger never creates users.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING

from sqlalchemy import update

from cyberquest.db.models import User
from cyberquest.errors import NotFoundError, ValidationError

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession


async def increment_score(
    db: AsyncSession,
    user_id: int,
    amount: int,
    now: datetime | None = None,
) -> None:
    """Add ``amount`` to the user's total and stamp ``last_activity``.

    Runs inside the caller's transaction; nothing is committed here.

    Raises:
        ValidationError: If amount is negative.
        NotFoundError: If no user has this id.
    """
    if amount < 0:
        raise ValidationError("Score increment must be non-negative", fields=["score"])
    if now is None:
        now = datetime.now(timezone.utc)

    result = await db.execute(
        update(User)
        .where(User.id == user_id)
        .values(total_score=User.total_score + amount, last_activity=now)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        raise NotFoundError.for_entity("User", user_id)
