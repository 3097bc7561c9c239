"""Service-level tests for result recording and the score ledger."""

from __future__ import annotations

import itertools
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from cyberquest.catalog.seed import seed_catalog
from cyberquest.db.models import CyberLabResult, Quiz, QuizResult, TeamChallenge
from cyberquest.errors import NotFoundError, StorageError, ValidationError
from cyberquest.scoring.ledger import increment_score
from cyberquest.scoring.service import (
    list_quiz_results,
    list_team_progress,
    record_activity_result,
    record_lab_result,
    record_quiz_result,
    record_team_progress,
)
from cyberquest.users.service import get_or_create_user, get_user


async def _learner(db: AsyncSession, name: str = "learner"):
    user, _ = await get_or_create_user(db, f"{name}@example.com", name, name.capitalize(), "Tester")
    return user


async def _quiz_id(db: AsyncSession, difficulty: str) -> int:
    result = await db.execute(select(Quiz.id).where(Quiz.difficulty == difficulty))
    return result.scalar_one()


async def _count(db: AsyncSession, model) -> int:
    return (await db.execute(select(func.count()).select_from(model))).scalar_one()


class TestLedger:
    @pytest.mark.asyncio
    async def test_increment_unknown_user(self, db_session: AsyncSession):
        with pytest.raises(NotFoundError):
            await increment_score(db_session, 9999, 10)

    @pytest.mark.asyncio
    async def test_negative_increment_rejected(self, db_session: AsyncSession):
        user = await _learner(db_session)
        with pytest.raises(ValidationError):
            await increment_score(db_session, user.id, -1)

    @pytest.mark.asyncio
    async def test_increment_stamps_last_activity(self, db_session: AsyncSession):
        user = await _learner(db_session)
        stamp = datetime(2026, 5, 1, 9, 30, tzinfo=timezone.utc)
        await increment_score(db_session, user.id, 15, now=stamp)
        await db_session.commit()
        fresh = await get_user(db_session, user.id)
        assert fresh.total_score == 15
        assert fresh.last_activity.replace(tzinfo=timezone.utc) == stamp

    @pytest.mark.asyncio
    async def test_total_grows_past_int32(self, db_session: AsyncSession):
        user = await _learner(db_session)
        await increment_score(db_session, user.id, 2**31 - 1)
        await increment_score(db_session, user.id, 2**31 - 1)
        await db_session.commit()
        assert (await get_user(db_session, user.id)).total_score == 2**32 - 2


class TestRecordQuizResult:
    """A new user completing a quiz is credited exactly the quiz score."""

    @pytest.mark.asyncio
    async def test_new_user_scores_80(self, db_session: AsyncSession):
        await seed_catalog(db_session)
        user = await _learner(db_session)
        quiz_id = await _quiz_id(db_session, "hard")

        record = await record_quiz_result(
            db_session, user_id=user.id, quiz_id=quiz_id, score=80, total_questions=5, correct_answers=4, time_spent=120
        )

        assert record.id is not None
        assert record.score == 80
        assert (await get_user(db_session, user.id)).total_score == 80
        results = await list_quiz_results(db_session, user.id)
        assert [r.score for r in results] == [80]

    @pytest.mark.asyncio
    async def test_score_above_quiz_max_rejected(self, db_session: AsyncSession):
        await seed_catalog(db_session)
        user = await _learner(db_session)
        easy = await _quiz_id(db_session, "easy")  # 5 questions x 10 points
        with pytest.raises(ValidationError) as exc_info:
            await record_quiz_result(db_session, user.id, easy, score=51, total_questions=5, correct_answers=5)
        assert exc_info.value.fields == ["score"]
        assert await _count(db_session, QuizResult) == 0

    @pytest.mark.asyncio
    async def test_correct_answers_above_total_rejected(self, db_session: AsyncSession):
        await seed_catalog(db_session)
        user = await _learner(db_session)
        easy = await _quiz_id(db_session, "easy")
        with pytest.raises(ValidationError):
            await record_quiz_result(db_session, user.id, easy, score=10, total_questions=3, correct_answers=4)

    @pytest.mark.asyncio
    async def test_unknown_quiz(self, db_session: AsyncSession):
        user = await _learner(db_session)
        with pytest.raises(NotFoundError):
            await record_quiz_result(db_session, user.id, 404, score=0, total_questions=1, correct_answers=0)


class TestLedgerAdditivity:
    """The total is the sum of credited scores regardless of event order."""

    @pytest.mark.asyncio
    async def test_all_orderings_give_same_total(self, db_session: AsyncSession):
        await seed_catalog(db_session)
        quiz_id = await _quiz_id(db_session, "medium")
        scores = [15, 30, 75]

        for n, ordering in enumerate(itertools.permutations(scores)):
            user = await _learner(db_session, f"perm{n}")
            for score in ordering:
                await record_quiz_result(db_session, user.id, quiz_id, score=score, total_questions=5, correct_answers=1)
            assert (await get_user(db_session, user.id)).total_score == sum(scores)

    @pytest.mark.asyncio
    async def test_mixed_kinds_accumulate(self, db_session: AsyncSession):
        await seed_catalog(db_session)
        user = await _learner(db_session)
        quiz_id = await _quiz_id(db_session, "easy")
        challenge_id = (await db_session.execute(select(TeamChallenge.id).limit(1))).scalar_one()

        await record_quiz_result(db_session, user.id, quiz_id, score=40, total_questions=5, correct_answers=4)
        await record_activity_result(db_session, user.id, activity_id=1, score=90, time_spent=300)
        await record_team_progress(db_session, user.id, challenge_id, score=60, completed=True)
        await record_lab_result(db_session, user.id, "phishing", score=30, total_questions=5, correct_answers=3)

        assert (await get_user(db_session, user.id)).total_score == 220


class TestAtomicPairing:
    """A record and its ledger increment are kept together or not at all."""

    @pytest.mark.asyncio
    async def test_unknown_user_leaves_no_record(self, db_session: AsyncSession):
        await seed_catalog(db_session)
        quiz_id = await _quiz_id(db_session, "easy")
        with pytest.raises(NotFoundError):
            await record_quiz_result(db_session, 9999, quiz_id, score=10, total_questions=5, correct_answers=1)
        assert await _count(db_session, QuizResult) == 0

    @pytest.mark.asyncio
    async def test_failed_insert_rolls_back_increment(
        self, db_session: AsyncSession, monkeypatch: pytest.MonkeyPatch
    ):
        await seed_catalog(db_session)
        user_id = (await _learner(db_session)).id
        quiz_id = await _quiz_id(db_session, "easy")

        async def failing_flush(self, *args, **kwargs):
            raise OperationalError("INSERT", {}, Exception("disk I/O error"))

        monkeypatch.setattr(AsyncSession, "flush", failing_flush)
        with pytest.raises(StorageError):
            await record_quiz_result(db_session, user_id, quiz_id, score=10, total_questions=5, correct_answers=1)
        monkeypatch.undo()

        assert (await get_user(db_session, user_id)).total_score == 0
        assert await _count(db_session, QuizResult) == 0


class TestOtherKinds:
    @pytest.mark.asyncio
    async def test_activity_max_score(self, db_session: AsyncSession):
        await seed_catalog(db_session)
        user = await _learner(db_session)
        # Security Term Scramble: max 100
        with pytest.raises(ValidationError):
            await record_activity_result(db_session, user.id, activity_id=1, score=101)

    @pytest.mark.asyncio
    async def test_lab_max_is_ten_per_question(self, db_session: AsyncSession):
        user = await _learner(db_session)
        record = await record_lab_result(db_session, user.id, "malware", score=50, total_questions=5, correct_answers=5)
        assert record.score == 50
        with pytest.raises(ValidationError):
            await record_lab_result(db_session, user.id, "malware", score=51, total_questions=5, correct_answers=5)

    @pytest.mark.asyncio
    async def test_lab_question_count_capped(self, db_session: AsyncSession):
        user = await _learner(db_session)
        with pytest.raises(ValidationError) as exc_info:
            await record_lab_result(db_session, user.id, "phishing", score=0, total_questions=101, correct_answers=0)
        assert exc_info.value.fields == ["totalQuestions"]
        assert await _count(db_session, CyberLabResult) == 0

    @pytest.mark.asyncio
    async def test_unknown_lab_type(self, db_session: AsyncSession):
        user = await _learner(db_session)
        with pytest.raises(ValidationError):
            await record_lab_result(db_session, user.id, "ddos", score=0, total_questions=1, correct_answers=0)

    @pytest.mark.asyncio
    async def test_team_progress_filtered_by_team(self, db_session: AsyncSession):
        await seed_catalog(db_session)
        user = await _learner(db_session)
        red = (await db_session.execute(select(TeamChallenge.id).where(TeamChallenge.team == "red").limit(1))).scalar_one()
        white = (await db_session.execute(select(TeamChallenge.id).where(TeamChallenge.team == "white").limit(1))).scalar_one()

        base = datetime(2026, 4, 1, 12, 0, tzinfo=timezone.utc)
        await record_team_progress(db_session, user.id, red, score=10, now=base)
        await record_team_progress(db_session, user.id, white, score=20, now=base + timedelta(minutes=1))

        everything = await list_team_progress(db_session, user.id)
        assert [p.score for p in everything] == [20, 10]  # newest first
        only_red = await list_team_progress(db_session, user.id, team="red")
        assert [p.challenge_id for p in only_red] == [red]

    @pytest.mark.asyncio
    async def test_zero_attempts_rejected(self, db_session: AsyncSession):
        await seed_catalog(db_session)
        user = await _learner(db_session)
        with pytest.raises(ValidationError):
            await record_team_progress(db_session, user.id, 1, score=0, attempts=0)
