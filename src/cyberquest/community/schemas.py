"""Community forum request/response models."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from cyberquest.schemas import ApiModel, EntityId


class PostCreate(ApiModel):
    user_id: EntityId
    content: str = Field(max_length=5000)
    tags: list[str] = Field(default_factory=list, max_length=20)


class PostResponse(ApiModel):
    id: int
    user_id: int
    username: str
    content: str
    tags: list[str]
    likes: int
    comment_count: int
    created_at: datetime


class CommentCreate(ApiModel):
    post_id: EntityId
    user_id: EntityId
    content: str = Field(max_length=2000)


class CommentResponse(ApiModel):
    id: int
    post_id: int
    user_id: int
    username: str
    content: str
    created_at: datetime
