"""Result recording: append an immutable result record and credit the ledger.

Each ``record_*`` call validates its input against the subject's maximum
obtainable score, then writes the record and the ledger increment in one
transaction. If either write fails, neither is kept.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, TypeVar

import structlog
from sqlalchemy import select

from cyberquest.catalog.service import (
    LAB_MAX_QUESTIONS,
    get_activity,
    get_team_challenge,
    lab_max_score,
    quiz_max_score,
)
from cyberquest.database import unit_of_work
from cyberquest.db.models import ActivityResult, CyberLabResult, QuizResult, TeamChallenge, TeamProgress
from cyberquest.errors import ValidationError
from cyberquest.scoring.ledger import increment_score
from cyberquest.users.service import get_user

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

logger = structlog.get_logger()

RecordT = TypeVar("RecordT", QuizResult, ActivityResult, TeamProgress, CyberLabResult)

LAB_TYPES = ("phishing", "malware", "social_engineering")


def _check_score(score: int, max_score: int) -> None:
    if score < 0:
        raise ValidationError("Score must be non-negative", fields=["score"])
    if score > max_score:
        raise ValidationError(f"Score {score} exceeds maximum of {max_score}", fields=["score"])


def _check_answers(correct_answers: int, total_questions: int) -> None:
    if correct_answers > total_questions:
        raise ValidationError(
            "Correct answers cannot exceed total questions",
            fields=["correctAnswers", "totalQuestions"],
        )


async def _append(db: AsyncSession, record: RecordT, kind: str, now: datetime) -> RecordT:
    """Credit the ledger and insert the record atomically."""
    async with unit_of_work(db, "record_result", kind=kind, user_id=record.user_id):
        await increment_score(db, record.user_id, record.score, now=now)
        db.add(record)
        await db.flush()
    logger.info(
        "score_recorded",
        kind=kind,
        record_id=record.id,
        user_id=record.user_id,
        score=record.score,
    )
    return record


async def record_quiz_result(
    db: AsyncSession,
    user_id: int,
    quiz_id: int,
    score: int,
    total_questions: int,
    correct_answers: int,
    time_spent: int = 0,
    now: datetime | None = None,
) -> QuizResult:
    _check_answers(correct_answers, total_questions)
    _check_score(score, await quiz_max_score(db, quiz_id))
    now = now or datetime.now(timezone.utc)
    record = QuizResult(
        user_id=user_id,
        quiz_id=quiz_id,
        score=score,
        total_questions=total_questions,
        correct_answers=correct_answers,
        time_spent=time_spent,
        completed_at=now,
    )
    return await _append(db, record, "quiz", now)


async def record_activity_result(
    db: AsyncSession,
    user_id: int,
    activity_id: int,
    score: int,
    time_spent: int = 0,
    game_state: dict[str, Any] | None = None,
    now: datetime | None = None,
) -> ActivityResult:
    activity = await get_activity(db, activity_id)
    _check_score(score, activity.max_score)
    now = now or datetime.now(timezone.utc)
    record = ActivityResult(
        user_id=user_id,
        activity_id=activity_id,
        score=score,
        time_spent=time_spent,
        game_state=game_state,
        completed_at=now,
    )
    return await _append(db, record, "activity", now)


async def record_team_progress(
    db: AsyncSession,
    user_id: int,
    challenge_id: int,
    score: int,
    completed: bool = False,
    time_spent: int = 0,
    attempts: int = 1,
    now: datetime | None = None,
) -> TeamProgress:
    if attempts < 1:
        raise ValidationError("Attempts must be at least 1", fields=["attempts"])
    challenge = await get_team_challenge(db, challenge_id)
    _check_score(score, challenge.max_score)
    now = now or datetime.now(timezone.utc)
    record = TeamProgress(
        user_id=user_id,
        challenge_id=challenge_id,
        score=score,
        completed=completed,
        time_spent=time_spent,
        attempts=attempts,
        completed_at=now,
    )
    return await _append(db, record, "team_challenge", now)


async def record_lab_result(
    db: AsyncSession,
    user_id: int,
    lab_type: str,
    score: int,
    total_questions: int,
    correct_answers: int,
    time_spent: int = 0,
    now: datetime | None = None,
) -> CyberLabResult:
    if lab_type not in LAB_TYPES:
        raise ValidationError(f"Unknown lab type: {lab_type}", fields=["labType"])
    if total_questions > LAB_MAX_QUESTIONS:
        raise ValidationError(
            f"A lab has at most {LAB_MAX_QUESTIONS} questions", fields=["totalQuestions"]
        )
    _check_answers(correct_answers, total_questions)
    _check_score(score, lab_max_score(total_questions))
    now = now or datetime.now(timezone.utc)
    record = CyberLabResult(
        user_id=user_id,
        lab_type=lab_type,
        score=score,
        total_questions=total_questions,
        correct_answers=correct_answers,
        time_spent=time_spent,
        completed_at=now,
    )
    return await _append(db, record, "lab", now)


# ---------------------------------------------------------------------------
# Per-user listings (newest first)
# ---------------------------------------------------------------------------


async def list_quiz_results(db: AsyncSession, user_id: int) -> list[QuizResult]:
    await get_user(db, user_id)
    result = await db.execute(
        select(QuizResult)
        .where(QuizResult.user_id == user_id)
        .order_by(QuizResult.completed_at.desc(), QuizResult.id.desc())
    )
    return list(result.scalars().all())


async def list_activity_results(db: AsyncSession, user_id: int) -> list[ActivityResult]:
    await get_user(db, user_id)
    result = await db.execute(
        select(ActivityResult)
        .where(ActivityResult.user_id == user_id)
        .order_by(ActivityResult.completed_at.desc(), ActivityResult.id.desc())
    )
    return list(result.scalars().all())


async def list_lab_results(db: AsyncSession, user_id: int) -> list[CyberLabResult]:
    await get_user(db, user_id)
    result = await db.execute(
        select(CyberLabResult)
        .where(CyberLabResult.user_id == user_id)
        .order_by(CyberLabResult.completed_at.desc(), CyberLabResult.id.desc())
    )
    return list(result.scalars().all())


async def list_team_progress(db: AsyncSession, user_id: int, team: str | None = None) -> list[TeamProgress]:
    """Team-challenge attempts for a user, optionally limited to one team."""
    await get_user(db, user_id)
    query = select(TeamProgress).where(TeamProgress.user_id == user_id)
    if team is not None:
        query = query.join(TeamChallenge, TeamProgress.challenge_id == TeamChallenge.id).where(
            TeamChallenge.team == team
        )
    result = await db.execute(query.order_by(TeamProgress.completed_at.desc(), TeamProgress.id.desc()))
    return list(result.scalars().all())
