"""Stats Aggregator tests: service-level with fixed clocks, plus the endpoint."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from cyberquest.catalog.seed import seed_catalog
from cyberquest.config import get_settings
from cyberquest.errors import NotFoundError
from cyberquest.scoring.service import (
    record_activity_result,
    record_lab_result,
    record_quiz_result,
    record_team_progress,
)
from cyberquest.stats.service import get_user_stats
from cyberquest.users.service import get_or_create_user, set_streak

NOW = datetime(2026, 3, 10, 18, 0, tzinfo=timezone.utc)


async def _learner(db: AsyncSession, name: str = "statler") -> int:
    user, _ = await get_or_create_user(db, f"{name}@example.com", name, "Stat", "Tester")
    return user.id


class TestUserStats:
    @pytest.mark.asyncio
    async def test_fresh_user(self, db_session: AsyncSession):
        user_id = await _learner(db_session)
        stats = await get_user_stats(db_session, user_id, now=NOW)
        assert stats == {
            "total_score": 0,
            "rank": 1,
            "streak": 0,
            "avg_score": 0,
            "completed_quizzes": 0,
            "completed_activities": 0,
            "completed_labs": 0,
            "completed_challenges": 0,
            "time_spent_hours": 0.0,
            "weekly_scores": [0, 0, 0, 0, 0, 0, 0],
        }

    @pytest.mark.asyncio
    async def test_unknown_user(self, db_session: AsyncSession):
        with pytest.raises(NotFoundError):
            await get_user_stats(db_session, 404, now=NOW)

    @pytest.mark.asyncio
    async def test_three_quizzes_same_day(self, db_session: AsyncSession):
        """Scores 10, 20, 30 on one day land in one bucket."""
        await seed_catalog(db_session)
        user_id = await _learner(db_session)
        for hour, score in ((9, 10), (11, 20), (14, 30)):
            await record_quiz_result(
                db_session, user_id, 3, score=score, total_questions=5, correct_answers=1,
                now=NOW.replace(hour=hour),
            )

        stats = await get_user_stats(db_session, user_id, now=NOW)
        assert stats["weekly_scores"] == [0, 0, 0, 0, 0, 0, 60]
        assert stats["completed_quizzes"] == 3
        assert stats["avg_score"] == 20

    @pytest.mark.asyncio
    async def test_weekly_sum_matches_window(self, db_session: AsyncSession):
        """Only records from the trailing 7 calendar days are counted."""
        await seed_catalog(db_session)
        user_id = await _learner(db_session)
        scores_by_days_ago = {0: 5, 1: 10, 3: 15, 6: 20, 7: 40, 12: 50}
        for days_ago, score in scores_by_days_ago.items():
            await record_lab_result(
                db_session, user_id, "phishing", score=score, total_questions=5, correct_answers=5,
                now=NOW - timedelta(days=days_ago),
            )

        stats = await get_user_stats(db_session, user_id, now=NOW)
        assert stats["weekly_scores"] == [20, 0, 0, 15, 0, 10, 5]
        assert sum(stats["weekly_scores"]) == 5 + 10 + 15 + 20
        assert stats["total_score"] == sum(scores_by_days_ago.values())
        assert stats["completed_labs"] == 6

    @pytest.mark.asyncio
    async def test_all_kinds_feed_histogram_and_time(self, db_session: AsyncSession):
        await seed_catalog(db_session)
        user_id = await _learner(db_session)
        await record_quiz_result(db_session, user_id, 1, score=40, total_questions=5, correct_answers=4, time_spent=1800, now=NOW)
        await record_activity_result(db_session, user_id, 1, score=55, time_spent=1800, now=NOW)
        await record_lab_result(db_session, user_id, "malware", score=30, total_questions=3, correct_answers=3, time_spent=900, now=NOW)
        await record_team_progress(db_session, user_id, 1, score=25, completed=True, time_spent=900, now=NOW)
        await set_streak(db_session, user_id, 4)

        stats = await get_user_stats(db_session, user_id, now=NOW)
        assert stats["total_score"] == 150
        assert stats["weekly_scores"][6] == 150
        assert stats["time_spent_hours"] == 1.5
        # Mean over quiz + activity records only: (40 + 55) / 2 = 47.5
        assert stats["avg_score"] == 48
        assert stats["completed_activities"] == 1
        assert stats["completed_challenges"] == 1
        assert stats["streak"] == 4

    @pytest.mark.asyncio
    async def test_days_follow_configured_timezone(
        self, db_session: AsyncSession, monkeypatch: pytest.MonkeyPatch
    ):
        await seed_catalog(db_session)
        user_id = await _learner(db_session)
        # 20:00 UTC on the 9th is already the 10th in Tokyo.
        await record_lab_result(
            db_session, user_id, "phishing", score=30, total_questions=3, correct_answers=3,
            now=datetime(2026, 3, 9, 20, 0, tzinfo=timezone.utc),
        )
        later = datetime(2026, 3, 10, 3, 0, tzinfo=timezone.utc)

        assert (await get_user_stats(db_session, user_id, now=later))["weekly_scores"][5] == 30

        monkeypatch.setenv("CQ_TIMEZONE", "Asia/Tokyo")
        get_settings.cache_clear()
        assert (await get_user_stats(db_session, user_id, now=later))["weekly_scores"][6] == 30

    @pytest.mark.asyncio
    async def test_rank_reflects_other_users(self, db_session: AsyncSession):
        leader = await _learner(db_session, "leader")
        trailer = await _learner(db_session, "trailer")
        await record_lab_result(db_session, leader, "phishing", score=50, total_questions=5, correct_answers=5)
        await record_lab_result(db_session, trailer, "phishing", score=10, total_questions=1, correct_answers=1)

        assert (await get_user_stats(db_session, leader, now=NOW))["rank"] == 1
        assert (await get_user_stats(db_session, trailer, now=NOW))["rank"] == 2


class TestStatsEndpoint:
    @pytest.mark.asyncio
    async def test_camel_case_payload(self, seeded_client: AsyncClient, make_user) -> None:
        user = await make_user("dashboard")
        await seeded_client.post("/api/quiz/result", json={
            "userId": user["id"], "quizId": 2, "score": 45, "totalQuestions": 5, "correctAnswers": 3, "timeSpent": 360,
        })

        response = await seeded_client.get(f"/api/user/{user['id']}/stats")
        assert response.status_code == 200
        data = response.json()
        assert data["totalScore"] == 45
        assert data["rank"] == 1
        assert data["avgScore"] == 45
        assert data["completedQuizzes"] == 1
        assert data["timeSpentHours"] == 0.1
        assert len(data["weeklyScores"]) == 7
        assert data["weeklyScores"][6] == 45

    @pytest.mark.asyncio
    async def test_unknown_user(self, client: AsyncClient) -> None:
        response = await client.get("/api/user/999/stats")
        assert response.status_code == 404
        assert response.json()["kind"] == "not_found"
