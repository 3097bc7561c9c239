"""Request/response models for completed-attempt result records."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any

from pydantic import Field

from cyberquest.catalog.service import LAB_MAX_QUESTIONS
from cyberquest.schemas import ApiModel, EntityId, LabType, NonNegativeInt, PositiveInt


# --- Requests ---


class QuizResultCreate(ApiModel):
    user_id: EntityId
    quiz_id: EntityId
    score: NonNegativeInt
    total_questions: NonNegativeInt
    correct_answers: NonNegativeInt
    time_spent: NonNegativeInt = 0


class ActivityResultCreate(ApiModel):
    user_id: EntityId
    activity_id: EntityId
    score: NonNegativeInt
    time_spent: NonNegativeInt = 0
    game_state: dict[str, Any] | None = None


class TeamProgressCreate(ApiModel):
    user_id: EntityId
    challenge_id: EntityId
    score: NonNegativeInt
    completed: bool = False
    time_spent: NonNegativeInt = 0
    attempts: PositiveInt = 1


class CyberLabResultCreate(ApiModel):
    user_id: EntityId
    lab_type: LabType
    score: NonNegativeInt
    total_questions: Annotated[int, Field(ge=0, le=LAB_MAX_QUESTIONS, strict=True)]
    correct_answers: NonNegativeInt
    time_spent: NonNegativeInt = 0


# --- Responses ---


class QuizResultResponse(ApiModel):
    id: int
    user_id: int
    quiz_id: int
    score: int
    total_questions: int
    correct_answers: int
    time_spent: int
    completed_at: datetime


class ActivityResultResponse(ApiModel):
    id: int
    user_id: int
    activity_id: int
    score: int
    time_spent: int
    game_state: dict[str, Any] | None = None
    completed_at: datetime


class TeamProgressResponse(ApiModel):
    id: int
    user_id: int
    challenge_id: int
    score: int
    completed: bool
    time_spent: int
    attempts: int
    completed_at: datetime


class CyberLabResultResponse(ApiModel):
    id: int
    user_id: int
    lab_type: str
    score: int
    total_questions: int
    correct_answers: int
    time_spent: int
    completed_at: datetime
