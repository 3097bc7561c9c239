"""Community forum router: posts, likes, comments."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from cyberquest.community.schemas import CommentCreate, CommentResponse, PostCreate, PostResponse
from cyberquest.community.service import add_comment, create_post, like_post, list_comments, list_posts
from cyberquest.database import get_session
from cyberquest.schemas import PathId, SuccessResponse

router = APIRouter(prefix="/api", tags=["Community"])


@router.get("/community-posts", response_model=list[PostResponse])
async def posts(
    limit: int = Query(50, ge=0, le=500),
    db: AsyncSession = Depends(get_session),
) -> list[PostResponse]:
    """Most recent posts first."""
    return [PostResponse.model_validate(p) for p in await list_posts(db, limit)]


@router.post("/community-posts", response_model=PostResponse, status_code=201)
async def new_post(
    body: PostCreate,
    db: AsyncSession = Depends(get_session),
) -> PostResponse:
    post = await create_post(db, user_id=body.user_id, content=body.content, tags=body.tags)
    return PostResponse.model_validate(post)


@router.post("/community-posts/{post_id}/like", response_model=SuccessResponse)
async def like(
    post_id: PathId,
    db: AsyncSession = Depends(get_session),
) -> SuccessResponse:
    await like_post(db, post_id)
    return SuccessResponse()


@router.get("/community-posts/{post_id}/comments", response_model=list[CommentResponse])
async def comments(
    post_id: PathId,
    db: AsyncSession = Depends(get_session),
) -> list[CommentResponse]:
    return [CommentResponse.model_validate(c) for c in await list_comments(db, post_id)]


@router.post("/post-comments", response_model=CommentResponse, status_code=201)
async def new_comment(
    body: CommentCreate,
    db: AsyncSession = Depends(get_session),
) -> CommentResponse:
    comment = await add_comment(db, post_id=body.post_id, user_id=body.user_id, content=body.content)
    return CommentResponse.model_validate(comment)
