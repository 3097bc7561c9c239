"""Result submission router: quiz, activity, team-challenge and lab completions."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from cyberquest.database import get_session
from cyberquest.schemas import PathId, Team
from cyberquest.scoring.schemas import (
    ActivityResultCreate,
    ActivityResultResponse,
    CyberLabResultCreate,
    CyberLabResultResponse,
    QuizResultCreate,
    QuizResultResponse,
    TeamProgressCreate,
    TeamProgressResponse,
)
from cyberquest.scoring.service import (
    list_activity_results,
    list_lab_results,
    list_quiz_results,
    list_team_progress,
    record_activity_result,
    record_lab_result,
    record_quiz_result,
    record_team_progress,
)

router = APIRouter(prefix="/api", tags=["Results"])


# ---------------------------------------------------------------------------
# Submissions
# ---------------------------------------------------------------------------


@router.post("/quiz/result", response_model=QuizResultResponse, status_code=201)
async def submit_quiz_result(
    body: QuizResultCreate,
    db: AsyncSession = Depends(get_session),
) -> QuizResultResponse:
    """Record a completed quiz and credit its score."""
    record = await record_quiz_result(
        db,
        user_id=body.user_id,
        quiz_id=body.quiz_id,
        score=body.score,
        total_questions=body.total_questions,
        correct_answers=body.correct_answers,
        time_spent=body.time_spent,
    )
    return QuizResultResponse.model_validate(record)


@router.post("/activity/result", response_model=ActivityResultResponse, status_code=201)
async def submit_activity_result(
    body: ActivityResultCreate,
    db: AsyncSession = Depends(get_session),
) -> ActivityResultResponse:
    """Record a completed mini-game and credit its score."""
    record = await record_activity_result(
        db,
        user_id=body.user_id,
        activity_id=body.activity_id,
        score=body.score,
        time_spent=body.time_spent,
        game_state=body.game_state,
    )
    return ActivityResultResponse.model_validate(record)


@router.post("/team-progress", response_model=TeamProgressResponse, status_code=201)
async def submit_team_progress(
    body: TeamProgressCreate,
    db: AsyncSession = Depends(get_session),
) -> TeamProgressResponse:
    """Record a team-challenge attempt and credit its score."""
    record = await record_team_progress(
        db,
        user_id=body.user_id,
        challenge_id=body.challenge_id,
        score=body.score,
        completed=body.completed,
        time_spent=body.time_spent,
        attempts=body.attempts,
    )
    return TeamProgressResponse.model_validate(record)


@router.post("/cyber-lab-results", response_model=CyberLabResultResponse, status_code=201)
async def submit_lab_result(
    body: CyberLabResultCreate,
    db: AsyncSession = Depends(get_session),
) -> CyberLabResultResponse:
    """Record a completed cyber lab and credit its score."""
    record = await record_lab_result(
        db,
        user_id=body.user_id,
        lab_type=body.lab_type,
        score=body.score,
        total_questions=body.total_questions,
        correct_answers=body.correct_answers,
        time_spent=body.time_spent,
    )
    return CyberLabResultResponse.model_validate(record)


# ---------------------------------------------------------------------------
# History
# ---------------------------------------------------------------------------


@router.get("/user/{user_id}/quiz-results", response_model=list[QuizResultResponse])
async def get_quiz_results(
    user_id: PathId,
    db: AsyncSession = Depends(get_session),
) -> list[QuizResultResponse]:
    records = await list_quiz_results(db, user_id)
    return [QuizResultResponse.model_validate(r) for r in records]


@router.get("/user/{user_id}/activity-results", response_model=list[ActivityResultResponse])
async def get_activity_results(
    user_id: PathId,
    db: AsyncSession = Depends(get_session),
) -> list[ActivityResultResponse]:
    records = await list_activity_results(db, user_id)
    return [ActivityResultResponse.model_validate(r) for r in records]


@router.get("/user/{user_id}/cyber-lab-results", response_model=list[CyberLabResultResponse])
async def get_lab_results(
    user_id: PathId,
    db: AsyncSession = Depends(get_session),
) -> list[CyberLabResultResponse]:
    records = await list_lab_results(db, user_id)
    return [CyberLabResultResponse.model_validate(r) for r in records]


@router.get("/user/{user_id}/team-progress", response_model=list[TeamProgressResponse])
async def get_team_progress(
    user_id: PathId,
    team: Team | None = Query(None),
    db: AsyncSession = Depends(get_session),
) -> list[TeamProgressResponse]:
    records = await list_team_progress(db, user_id, team=team)
    return [TeamProgressResponse.model_validate(r) for r in records]
