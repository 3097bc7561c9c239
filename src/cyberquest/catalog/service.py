"""Catalog lookups: quizzes, questions, mini-game activities, team challenges."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import func, select

from cyberquest.db.models import Activity, Question, Quiz, TeamChallenge
from cyberquest.errors import NotFoundError, ValidationError

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

# A cyber lab awards this many points per correct answer.
LAB_POINTS_PER_CORRECT_ANSWER = 10
LAB_MAX_QUESTIONS = 100


async def list_quizzes(db: AsyncSession) -> list[Quiz]:
    result = await db.execute(select(Quiz).order_by(Quiz.id))
    return list(result.scalars().all())


async def get_quiz(db: AsyncSession, quiz_id: int) -> Quiz:
    quiz = await db.get(Quiz, quiz_id)
    if quiz is None:
        raise NotFoundError.for_entity("Quiz", quiz_id)
    return quiz


async def list_questions(db: AsyncSession, quiz_id: int) -> list[Question]:
    """Questions of a quiz in presentation order."""
    await get_quiz(db, quiz_id)
    result = await db.execute(
        select(Question).where(Question.quiz_id == quiz_id).order_by(Question.order, Question.id)
    )
    return list(result.scalars().all())


async def quiz_max_score(db: AsyncSession, quiz_id: int) -> int:
    """Highest obtainable quiz score: the sum of its question points."""
    await get_quiz(db, quiz_id)
    result = await db.execute(
        select(func.coalesce(func.sum(Question.points), 0)).where(Question.quiz_id == quiz_id)
    )
    return int(result.scalar_one())


async def list_activities(db: AsyncSession) -> list[Activity]:
    result = await db.execute(select(Activity).order_by(Activity.id))
    return list(result.scalars().all())


async def get_activity(db: AsyncSession, activity_id: int) -> Activity:
    activity = await db.get(Activity, activity_id)
    if activity is None:
        raise NotFoundError.for_entity("Activity", activity_id)
    return activity


async def list_team_challenges(db: AsyncSession, team: str) -> list[TeamChallenge]:
    """Challenges for one team, newest first."""
    if team not in ("red", "white"):
        raise ValidationError(f"Unknown team: {team}", fields=["team"])
    result = await db.execute(
        select(TeamChallenge)
        .where(TeamChallenge.team == team)
        .order_by(TeamChallenge.created_at.desc(), TeamChallenge.id.desc())
    )
    return list(result.scalars().all())


async def get_team_challenge(db: AsyncSession, challenge_id: int) -> TeamChallenge:
    challenge = await db.get(TeamChallenge, challenge_id)
    if challenge is None:
        raise NotFoundError.for_entity("Team challenge", challenge_id)
    return challenge


def lab_max_score(total_questions: int) -> int:
    return total_questions * LAB_POINTS_PER_CORRECT_ANSWER
