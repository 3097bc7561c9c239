"""Catalog router: quizzes, questions, activities, team challenges, seeding."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from cyberquest.catalog.schemas import (
    ActivityResponse,
    QuestionResponse,
    QuizResponse,
    SeedResponse,
    TeamChallengeResponse,
)
from cyberquest.catalog.seed import seed_catalog
from cyberquest.catalog.service import (
    get_activity,
    get_quiz,
    list_activities,
    list_questions,
    list_quizzes,
    list_team_challenges,
)
from cyberquest.database import get_session
from cyberquest.schemas import PathId, Team

router = APIRouter(prefix="/api", tags=["Catalog"])


@router.get("/quizzes", response_model=list[QuizResponse])
async def quizzes(db: AsyncSession = Depends(get_session)) -> list[QuizResponse]:
    return [QuizResponse.model_validate(q) for q in await list_quizzes(db)]


@router.get("/quiz/{quiz_id}", response_model=QuizResponse)
async def quiz(quiz_id: PathId, db: AsyncSession = Depends(get_session)) -> QuizResponse:
    return QuizResponse.model_validate(await get_quiz(db, quiz_id))


@router.get("/quiz/{quiz_id}/questions", response_model=list[QuestionResponse])
async def quiz_questions(quiz_id: PathId, db: AsyncSession = Depends(get_session)) -> list[QuestionResponse]:
    """Questions in presentation order."""
    return [QuestionResponse.model_validate(q) for q in await list_questions(db, quiz_id)]


@router.get("/activities", response_model=list[ActivityResponse])
async def activities(db: AsyncSession = Depends(get_session)) -> list[ActivityResponse]:
    return [ActivityResponse.model_validate(a) for a in await list_activities(db)]


@router.get("/activity/{activity_id}", response_model=ActivityResponse)
async def activity(activity_id: PathId, db: AsyncSession = Depends(get_session)) -> ActivityResponse:
    return ActivityResponse.model_validate(await get_activity(db, activity_id))


@router.get("/team-challenges/{team}", response_model=list[TeamChallengeResponse])
async def team_challenges(team: Team, db: AsyncSession = Depends(get_session)) -> list[TeamChallengeResponse]:
    return [TeamChallengeResponse.model_validate(c) for c in await list_team_challenges(db, team)]


@router.post("/seed", response_model=SeedResponse)
async def seed(db: AsyncSession = Depends(get_session)) -> SeedResponse:
    """Load the stock cybersecurity content (idempotent)."""
    user = await seed_catalog(db)
    return SeedResponse(message="Cybersecurity learning data created successfully", user_id=user.id)
