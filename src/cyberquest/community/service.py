"""Community Engagement Store: posts, likes and comments.

``likes`` and ``comment_count`` only move through SQL-side increments.
Likes are not deduplicated per user.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING

import structlog
from sqlalchemy import select, update

from cyberquest.database import unit_of_work
from cyberquest.db.models import CommunityPost, PostComment
from cyberquest.errors import NotFoundError, ValidationError
from cyberquest.users.service import get_user

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

logger = structlog.get_logger()


def _require_content(content: str) -> str:
    if not content or not content.strip():
        raise ValidationError("Content must not be empty", fields=["content"])
    return content


async def get_post(db: AsyncSession, post_id: int) -> CommunityPost:
    result = await db.execute(
        select(CommunityPost).where(CommunityPost.id == post_id).execution_options(populate_existing=True)
    )
    post = result.scalar_one_or_none()
    if post is None:
        raise NotFoundError.for_entity("Post", post_id)
    return post


async def list_posts(db: AsyncSession, limit: int = 50) -> list[CommunityPost]:
    """Most recent posts first."""
    if limit < 0:
        raise ValidationError("Limit must be non-negative", fields=["limit"])
    result = await db.execute(
        select(CommunityPost)
        .order_by(CommunityPost.created_at.desc(), CommunityPost.id.desc())
        .limit(limit)
        .execution_options(populate_existing=True)
    )
    return list(result.scalars().all())


async def create_post(
    db: AsyncSession,
    user_id: int,
    content: str,
    tags: list[str] | None = None,
) -> CommunityPost:
    _require_content(content)
    user = await get_user(db, user_id)
    async with unit_of_work(db, "create_post", user_id=user_id):
        post = CommunityPost(
            user_id=user.id,
            username=user.username,
            content=content,
            tags=list(tags or []),
            likes=0,
            comment_count=0,
            created_at=datetime.now(timezone.utc),
        )
        db.add(post)
        await db.flush()
    logger.info("post_created", post_id=post.id, user_id=user_id)
    return post


async def like_post(db: AsyncSession, post_id: int) -> None:
    """Increment the like counter by one."""
    async with unit_of_work(db, "like_post", post_id=post_id):
        result = await db.execute(
            update(CommunityPost)
            .where(CommunityPost.id == post_id)
            .values(likes=CommunityPost.likes + 1)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            raise NotFoundError.for_entity("Post", post_id)
    logger.info("post_liked", post_id=post_id)


async def add_comment(db: AsyncSession, post_id: int, user_id: int, content: str) -> PostComment:
    """Insert a comment and bump the post's comment count in one transaction.

    Raises:
        ValidationError: If the content is empty or whitespace.
        NotFoundError: If the post or the user does not exist.
    """
    _require_content(content)
    user = await get_user(db, user_id)

    async with unit_of_work(db, "add_comment", post_id=post_id, user_id=user_id):
        result = await db.execute(
            update(CommunityPost)
            .where(CommunityPost.id == post_id)
            .values(comment_count=CommunityPost.comment_count + 1)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            raise NotFoundError.for_entity("Post", post_id)
        comment = PostComment(
            post_id=post_id,
            user_id=user.id,
            username=user.username,
            content=content,
            created_at=datetime.now(timezone.utc),
        )
        db.add(comment)
        await db.flush()
    logger.info("comment_added", comment_id=comment.id, post_id=post_id, user_id=user_id)
    return comment


async def list_comments(db: AsyncSession, post_id: int) -> list[PostComment]:
    """Comments on a post, newest first."""
    await get_post(db, post_id)
    result = await db.execute(
        select(PostComment)
        .where(PostComment.post_id == post_id)
        .order_by(PostComment.created_at.desc(), PostComment.id.desc())
    )
    return list(result.scalars().all())
