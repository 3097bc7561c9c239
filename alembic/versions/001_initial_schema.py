"""Initial schema: users, catalog, result records, community.

Creates users and achievements, the quiz/activity/team-challenge catalog,
the four result-record tables, and the community posts and comments.

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-19
"""

from collections.abc import Sequence

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from alembic import op

revision: str = "001_initial_schema"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _timestamp(name: str, nullable: bool = False) -> sa.Column:
    return sa.Column(name, sa.DateTime(timezone=True), server_default=sa.text("NOW()"), nullable=nullable)


def upgrade() -> None:
    """Create all tables."""
    # --- Users ---
    op.create_table(
        "users",
        sa.Column("id", sa.BigInteger(), sa.Identity(), primary_key=True),
        sa.Column("username", sa.String(64), nullable=False, unique=True),
        sa.Column("first_name", sa.String(64), nullable=False),
        sa.Column("last_name", sa.String(64), nullable=False),
        sa.Column("email", sa.String(320), nullable=False, unique=True),
        sa.Column("total_score", sa.BigInteger(), server_default="0", nullable=False),
        sa.Column("streak", sa.Integer(), server_default="0", nullable=False),
        sa.Column("team", sa.String(8), nullable=True),
        sa.Column("last_activity", sa.DateTime(timezone=True), nullable=True),
        _timestamp("created_at"),
        sa.CheckConstraint("total_score >= 0", name="ck_users_total_score_non_negative"),
        sa.CheckConstraint("team IS NULL OR team IN ('red', 'white')", name="ck_users_team"),
    )
    # Ranking counts users above a score
    op.create_index("ix_users_total_score", "users", [sa.text("total_score DESC"), "id"])

    op.create_table(
        "achievements",
        sa.Column("id", sa.BigInteger(), sa.Identity(), primary_key=True),
        sa.Column("user_id", sa.BigInteger(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("type", sa.String(16), nullable=False),
        sa.Column("title", sa.String(128), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("icon_name", sa.String(64), nullable=True),
        _timestamp("earned_at"),
    )
    op.create_index("ix_achievements_user_id", "achievements", ["user_id"])

    # --- Catalog ---
    op.create_table(
        "quizzes",
        sa.Column("id", sa.BigInteger(), sa.Identity(), primary_key=True),
        sa.Column("title", sa.String(128), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("category", sa.String(64), nullable=False),
        sa.Column("difficulty", sa.String(16), nullable=False),
        sa.Column("time_limit", sa.Integer(), server_default="60", nullable=False),
        _timestamp("created_at"),
    )

    op.create_table(
        "questions",
        sa.Column("id", sa.BigInteger(), sa.Identity(), primary_key=True),
        sa.Column("quiz_id", sa.BigInteger(), sa.ForeignKey("quizzes.id", ondelete="CASCADE"), nullable=False),
        sa.Column("question_text", sa.Text(), nullable=False),
        sa.Column("options", postgresql.JSONB(), nullable=False),
        sa.Column("correct_answer", sa.Integer(), nullable=False),
        sa.Column("points", sa.Integer(), server_default="10", nullable=False),
        sa.Column("order", sa.Integer(), nullable=False),
    )
    op.create_index("ix_questions_quiz_id", "questions", ["quiz_id"])

    op.create_table(
        "activities",
        sa.Column("id", sa.BigInteger(), sa.Identity(), primary_key=True),
        sa.Column("title", sa.String(128), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("type", sa.String(32), nullable=False),
        sa.Column("category", sa.String(64), nullable=False),
        sa.Column("difficulty", sa.String(16), nullable=False),
        sa.Column("time_estimate", sa.String(32), nullable=True),
        sa.Column("game_data", postgresql.JSONB(), nullable=True),
        sa.Column("max_score", sa.Integer(), server_default="100", nullable=False),
        sa.Column("image_url", sa.Text(), nullable=True),
        sa.Column("is_new", sa.Boolean(), server_default="false", nullable=False),
        sa.Column("is_popular", sa.Boolean(), server_default="false", nullable=False),
        _timestamp("created_at"),
    )

    op.create_table(
        "team_challenges",
        sa.Column("id", sa.BigInteger(), sa.Identity(), primary_key=True),
        sa.Column("title", sa.String(128), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("team", sa.String(8), nullable=False),
        sa.Column("category", sa.String(64), nullable=False),
        sa.Column("difficulty", sa.String(16), nullable=False),
        sa.Column("type", sa.String(16), nullable=False),
        sa.Column("content", postgresql.JSONB(), nullable=True),
        sa.Column("max_score", sa.Integer(), server_default="100", nullable=False),
        sa.Column("unlock_level", sa.Integer(), server_default="1", nullable=False),
        _timestamp("created_at"),
        sa.CheckConstraint("team IN ('red', 'white')", name="ck_team_challenges_team"),
    )
    op.create_index("ix_team_challenges_team", "team_challenges", ["team"])

    # --- Result records ---
    op.create_table(
        "user_quiz_results",
        sa.Column("id", sa.BigInteger(), sa.Identity(), primary_key=True),
        sa.Column("user_id", sa.BigInteger(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("quiz_id", sa.BigInteger(), sa.ForeignKey("quizzes.id"), nullable=False),
        sa.Column("score", sa.Integer(), nullable=False),
        sa.Column("total_questions", sa.Integer(), nullable=False),
        sa.Column("correct_answers", sa.Integer(), nullable=False),
        sa.Column("time_spent", sa.Integer(), server_default="0", nullable=False),
        _timestamp("completed_at"),
        sa.CheckConstraint("score >= 0", name="ck_quiz_results_score"),
        sa.CheckConstraint("correct_answers <= total_questions", name="ck_quiz_results_correct"),
    )

    op.create_table(
        "user_activity_results",
        sa.Column("id", sa.BigInteger(), sa.Identity(), primary_key=True),
        sa.Column("user_id", sa.BigInteger(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("activity_id", sa.BigInteger(), sa.ForeignKey("activities.id"), nullable=False),
        sa.Column("score", sa.Integer(), nullable=False),
        sa.Column("time_spent", sa.Integer(), server_default="0", nullable=False),
        sa.Column("game_state", postgresql.JSONB(), nullable=True),
        _timestamp("completed_at"),
        sa.CheckConstraint("score >= 0", name="ck_activity_results_score"),
    )

    op.create_table(
        "user_team_progress",
        sa.Column("id", sa.BigInteger(), sa.Identity(), primary_key=True),
        sa.Column("user_id", sa.BigInteger(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("challenge_id", sa.BigInteger(), sa.ForeignKey("team_challenges.id"), nullable=False),
        sa.Column("score", sa.Integer(), nullable=False),
        sa.Column("completed", sa.Boolean(), server_default="false", nullable=False),
        sa.Column("time_spent", sa.Integer(), server_default="0", nullable=False),
        sa.Column("attempts", sa.Integer(), server_default="1", nullable=False),
        _timestamp("completed_at"),
        sa.CheckConstraint("score >= 0", name="ck_team_progress_score"),
    )

    op.create_table(
        "cyber_lab_results",
        sa.Column("id", sa.BigInteger(), sa.Identity(), primary_key=True),
        sa.Column("user_id", sa.BigInteger(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("lab_type", sa.String(32), nullable=False),
        sa.Column("score", sa.Integer(), nullable=False),
        sa.Column("total_questions", sa.Integer(), nullable=False),
        sa.Column("correct_answers", sa.Integer(), nullable=False),
        sa.Column("time_spent", sa.Integer(), server_default="0", nullable=False),
        _timestamp("completed_at"),
        sa.CheckConstraint("score >= 0", name="ck_lab_results_score"),
        sa.CheckConstraint("correct_answers <= total_questions", name="ck_lab_results_correct"),
    )

    for table in ("user_quiz_results", "user_activity_results", "user_team_progress", "cyber_lab_results"):
        op.create_index(f"ix_{table}_user_id", table, ["user_id"])
        op.create_index(f"ix_{table}_completed_at", table, ["completed_at"])

    # --- Community ---
    op.create_table(
        "community_posts",
        sa.Column("id", sa.BigInteger(), sa.Identity(), primary_key=True),
        sa.Column("user_id", sa.BigInteger(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("username", sa.String(64), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("tags", postgresql.JSONB(), server_default=sa.text("'[]'::jsonb"), nullable=False),
        sa.Column("likes", sa.Integer(), server_default="0", nullable=False),
        sa.Column("comment_count", sa.Integer(), server_default="0", nullable=False),
        _timestamp("created_at"),
    )
    op.create_index("ix_community_posts_created_at", "community_posts", ["created_at"])

    op.create_table(
        "post_comments",
        sa.Column("id", sa.BigInteger(), sa.Identity(), primary_key=True),
        sa.Column("post_id", sa.BigInteger(), sa.ForeignKey("community_posts.id", ondelete="CASCADE"), nullable=False),
        sa.Column("user_id", sa.BigInteger(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("username", sa.String(64), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        _timestamp("created_at"),
    )
    op.create_index("ix_post_comments_post_id", "post_comments", ["post_id"])


def downgrade() -> None:
    """Drop all tables in reverse dependency order."""
    op.drop_table("post_comments")
    op.drop_table("community_posts")
    op.drop_table("cyber_lab_results")
    op.drop_table("user_team_progress")
    op.drop_table("user_activity_results")
    op.drop_table("user_quiz_results")
    op.drop_table("team_challenges")
    op.drop_table("activities")
    op.drop_table("questions")
    op.drop_table("quizzes")
    op.drop_table("achievements")
    op.drop_table("users")
