"""Request/response schemas for user endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import EmailStr, Field

from cyberquest.schemas import ApiModel, NonNegativeInt, Team


class UserCreateRequest(ApiModel):
    email: EmailStr
    username: str = Field(min_length=3, max_length=64)
    first_name: str = Field(min_length=1, max_length=64)
    last_name: str = Field(min_length=1, max_length=64)


class UserResponse(ApiModel):
    id: int
    username: str
    first_name: str
    last_name: str
    email: str
    total_score: int
    streak: int
    team: Team | None = None
    last_activity: datetime | None = None
    created_at: datetime


class TeamUpdateRequest(ApiModel):
    team: Team | None = None


class TeamResponse(ApiModel):
    team: Team | None = None


class StreakUpdateRequest(ApiModel):
    streak: NonNegativeInt


class AchievementResponse(ApiModel):
    id: int
    user_id: int
    type: str
    title: str
    description: str | None = None
    icon_name: str | None = None
    earned_at: datetime
