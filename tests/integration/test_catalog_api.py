"""Catalog endpoints and the idempotent seed."""

from __future__ import annotations

import pytest
from httpx import AsyncClient


class TestSeed:
    @pytest.mark.asyncio
    async def test_seed_is_idempotent(self, client: AsyncClient) -> None:
        first = await client.post("/api/seed")
        second = await client.post("/api/seed")
        assert first.status_code == 200
        assert first.json()["message"] == "Cybersecurity learning data created successfully"
        assert second.json()["userId"] == first.json()["userId"]

        assert len((await client.get("/api/quizzes")).json()) == 3
        assert len((await client.get("/api/activities")).json()) == 4

        demo = (await client.get(f"/api/user/{first.json()['userId']}")).json()
        assert demo["username"] == "cybersec_learner"
        assert demo["email"] == "alex@cybersec.learn"


class TestQuizzes:
    @pytest.mark.asyncio
    async def test_list_and_get(self, seeded_client: AsyncClient) -> None:
        quizzes = (await seeded_client.get("/api/quizzes")).json()
        assert [q["difficulty"] for q in quizzes] == ["easy", "medium", "hard"]
        assert quizzes[0]["timeLimit"] == 45

        quiz = (await seeded_client.get(f"/api/quiz/{quizzes[1]['id']}")).json()
        assert quiz["title"] == "Network Security & Threats"

    @pytest.mark.asyncio
    async def test_questions_in_order(self, seeded_client: AsyncClient) -> None:
        questions = (await seeded_client.get("/api/quiz/1/questions")).json()
        assert [q["order"] for q in questions] == [1, 2, 3, 4, 5]
        assert all(q["points"] == 10 for q in questions)
        assert questions[0]["options"][questions[0]["correctAnswer"]] == "Secure"

    @pytest.mark.asyncio
    async def test_unknown_quiz(self, seeded_client: AsyncClient) -> None:
        assert (await seeded_client.get("/api/quiz/99")).status_code == 404
        assert (await seeded_client.get("/api/quiz/99/questions")).status_code == 404


class TestActivities:
    @pytest.mark.asyncio
    async def test_activity_detail(self, seeded_client: AsyncClient) -> None:
        activity = (await seeded_client.get("/api/activity/2")).json()
        assert activity["type"] == "number_puzzle"
        assert activity["maxScore"] == 150
        assert activity["isPopular"] is True
        assert len(activity["gameData"]["puzzles"]) == 3

    @pytest.mark.asyncio
    async def test_unknown_activity(self, seeded_client: AsyncClient) -> None:
        response = await seeded_client.get("/api/activity/50")
        assert response.status_code == 404
        assert response.json()["detail"] == "Activity 50 not found"


class TestTeamChallenges:
    @pytest.mark.asyncio
    async def test_by_team(self, seeded_client: AsyncClient) -> None:
        red = (await seeded_client.get("/api/team-challenges/red")).json()
        white = (await seeded_client.get("/api/team-challenges/white")).json()
        assert len(red) == 3
        assert len(white) == 3
        assert {c["team"] for c in red} == {"red"}

    @pytest.mark.asyncio
    async def test_unknown_team(self, seeded_client: AsyncClient) -> None:
        response = await seeded_client.get("/api/team-challenges/purple")
        assert response.status_code == 422
        assert response.json()["fields"] == ["team"]
