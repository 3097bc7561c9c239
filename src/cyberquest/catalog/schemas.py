"""Catalog response models."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from cyberquest.schemas import ApiModel


class QuizResponse(ApiModel):
    id: int
    title: str
    description: str | None = None
    category: str
    difficulty: str
    time_limit: int
    created_at: datetime


class QuestionResponse(ApiModel):
    id: int
    quiz_id: int
    question_text: str
    options: list[str]
    correct_answer: int
    points: int
    order: int


class ActivityResponse(ApiModel):
    id: int
    title: str
    description: str | None = None
    type: str
    category: str
    difficulty: str
    time_estimate: str | None = None
    game_data: dict[str, Any] | None = None
    max_score: int
    image_url: str | None = None
    is_new: bool
    is_popular: bool
    created_at: datetime


class TeamChallengeResponse(ApiModel):
    id: int
    title: str
    description: str | None = None
    team: str
    category: str
    difficulty: str
    type: str
    content: dict[str, Any] | None = None
    max_score: int
    unlock_level: int
    created_at: datetime


class SeedResponse(ApiModel):
    message: str
    user_id: int
