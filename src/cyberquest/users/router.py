"""User management router: get-or-create, profile, team, streak, achievements."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from cyberquest.database import get_session
from cyberquest.db.models import User
from cyberquest.schemas import PathId
from cyberquest.users.schemas import (
    AchievementResponse,
    StreakUpdateRequest,
    TeamResponse,
    TeamUpdateRequest,
    UserCreateRequest,
    UserResponse,
)
from cyberquest.users.service import (
    get_or_create_user,
    get_team,
    get_user,
    list_achievements,
    set_streak,
    set_team,
)

router = APIRouter(prefix="/api", tags=["Users"])


def _user_response(user: User) -> UserResponse:
    """Build a UserResponse from a User model."""
    return UserResponse(
        id=user.id,
        username=user.username,
        first_name=user.first_name,
        last_name=user.last_name,
        email=user.email,
        total_score=user.total_score,
        streak=user.streak,
        team=user.team,
        last_activity=user.last_activity,
        created_at=user.created_at,
    )


@router.post("/users", response_model=UserResponse, status_code=201)
async def register_user(
    body: UserCreateRequest,
    response: Response,
    db: AsyncSession = Depends(get_session),
) -> UserResponse:
    """Get the user with this email, or create one. 200 when it already existed."""
    user, created = await get_or_create_user(
        db,
        email=body.email,
        username=body.username,
        first_name=body.first_name,
        last_name=body.last_name,
    )
    if not created:
        response.status_code = 200
    return _user_response(user)


@router.get("/user/{user_id}", response_model=UserResponse)
async def get_profile(
    user_id: PathId,
    db: AsyncSession = Depends(get_session),
) -> UserResponse:
    return _user_response(await get_user(db, user_id))


# ---------------------------------------------------------------------------
# Team & streak
# ---------------------------------------------------------------------------


@router.get("/user/{user_id}/team", response_model=TeamResponse)
async def get_user_team(
    user_id: PathId,
    db: AsyncSession = Depends(get_session),
) -> TeamResponse:
    return TeamResponse(team=await get_team(db, user_id))


@router.post("/user/{user_id}/team", response_model=TeamResponse)
async def select_team(
    user_id: PathId,
    body: TeamUpdateRequest,
    db: AsyncSession = Depends(get_session),
) -> TeamResponse:
    """Join the red or white team, or leave with ``{"team": null}``."""
    await set_team(db, user_id, body.team)
    return TeamResponse(team=body.team)


@router.put("/user/{user_id}/streak", response_model=UserResponse)
async def update_streak(
    user_id: PathId,
    body: StreakUpdateRequest,
    db: AsyncSession = Depends(get_session),
) -> UserResponse:
    return _user_response(await set_streak(db, user_id, body.streak))


# ---------------------------------------------------------------------------
# Achievements
# ---------------------------------------------------------------------------


@router.get("/user/{user_id}/achievements", response_model=list[AchievementResponse])
async def achievements(
    user_id: PathId,
    db: AsyncSession = Depends(get_session),
) -> list[AchievementResponse]:
    return [AchievementResponse.model_validate(a) for a in await list_achievements(db, user_id)]
