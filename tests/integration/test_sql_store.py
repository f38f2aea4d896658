"""SQL record store against an in-memory SQLite database."""

from __future__ import annotations

import random
from collections.abc import AsyncGenerator
from datetime import datetime, timezone

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from cq.db.base import Base
from cq.errors import StoreUnavailable, UnknownQuestion
from cq.gamification.seed import seed_catalog
from cq.quiz.schemas import SubmittedAnswer
from cq.quiz.service import QuizService
from cq.store.records import STATS_ID, Kind, Progress, Stats, Topic
from cq.store.sql import SqlStore
from tests.conftest import FrozenClock, add_achievements

SQLITE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def sql_store() -> AsyncGenerator[SqlStore, None]:
    engine = create_async_engine(SQLITE_URL, poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield SqlStore(async_sessionmaker(engine, expire_on_commit=False))
    await engine.dispose()


class TestSqlStoreBasics:
    @pytest.mark.asyncio
    async def test_put_assigns_id_and_get_round_trips(self, sql_store):
        topic = await sql_store.put(Kind.TOPIC, Topic(name="Japanese", country="Japan", total_questions=4))
        assert topic.id is not None
        fetched = await sql_store.get(Kind.TOPIC, topic.id)
        assert fetched == topic

    @pytest.mark.asyncio
    async def test_put_replaces_by_key(self, sql_store):
        topic = await sql_store.put(Kind.TOPIC, Topic(name="T", country="C"))
        await sql_store.put(Kind.PROGRESS, Progress(topic_id=topic.id, best_score=100))
        await sql_store.put(Kind.PROGRESS, Progress(topic_id=topic.id, best_score=300))
        rows = await sql_store.list(Kind.PROGRESS)
        assert len(rows) == 1
        assert rows[0].best_score == 300

    @pytest.mark.asyncio
    async def test_list_filters(self, sql_store):
        await seed_catalog(sql_store)
        topics = await sql_store.list(Kind.TOPIC)
        egypt = next(t for t in topics if t.country == "Egypt")
        questions = await sql_store.list(Kind.QUESTION, topic_id=egypt.id)
        assert len(questions) == 2
        assert all(q.topic_id == egypt.id for q in questions)

    @pytest.mark.asyncio
    async def test_missing_returns_none(self, sql_store):
        assert await sql_store.get(Kind.STATS, STATS_ID) is None

    @pytest.mark.asyncio
    async def test_ping(self, sql_store):
        assert await sql_store.ping() is True


class TestSqlStoreTransaction:
    @pytest.mark.asyncio
    async def test_commit(self, sql_store):
        async with sql_store.transaction():
            await sql_store.put(Kind.STATS, Stats(total_score=10))
            # Reads inside the transaction see its own writes
            assert (await sql_store.get(Kind.STATS, STATS_ID)).total_score == 10
        assert (await sql_store.get(Kind.STATS, STATS_ID)).total_score == 10

    @pytest.mark.asyncio
    async def test_rollback_on_error(self, sql_store):
        await sql_store.put(Kind.STATS, Stats(total_score=10))
        with pytest.raises(RuntimeError):
            async with sql_store.transaction():
                await sql_store.put(Kind.STATS, Stats(total_score=999))
                await sql_store.put(Kind.TOPIC, Topic(name="Ghost", country="Nowhere"))
                raise RuntimeError("boom")
        assert (await sql_store.get(Kind.STATS, STATS_ID)).total_score == 10
        assert await sql_store.list(Kind.TOPIC) == []


class TestSqlStoreFailures:
    @pytest.mark.asyncio
    async def test_missing_tables_surface_as_store_unavailable(self):
        engine = create_async_engine(SQLITE_URL, poolclass=StaticPool)
        store = SqlStore(async_sessionmaker(engine, expire_on_commit=False))
        try:
            with pytest.raises(StoreUnavailable):
                await store.list(Kind.TOPIC)
            with pytest.raises(StoreUnavailable):
                async with store.transaction():
                    await store.put(Kind.STATS, Stats())
        finally:
            await engine.dispose()


class TestQuizOnSql:
    @pytest.mark.asyncio
    async def test_submission_persists(self, sql_store):
        await seed_catalog(sql_store)
        clock = FrozenClock(datetime(2026, 3, 2, 12, 0, 0, tzinfo=timezone.utc))
        service = QuizService(sql_store, rng=random.Random(3), clock=clock)
        japan = next(t for t in await sql_store.list(Kind.TOPIC) if t.country == "Japan")
        questions = await sql_store.list(Kind.QUESTION, topic_id=japan.id)

        answers = [SubmittedAnswer(question_id=q.id, answer=q.correct_answer) for q in questions]
        result = await service.submit_quiz(japan.id, answers, 200)

        assert result.points_earned == 400 + 100 + 200
        assert result.new_level == "Intermediate"
        assert {a.requirement for a in result.new_achievements} == {
            "complete_first_challenge",
            "perfect_score",
            "speed_completion",
        }
        progress = await sql_store.get(Kind.PROGRESS, japan.id)
        assert progress.questions_completed == 4
        stats = await sql_store.get(Kind.STATS, STATS_ID)
        assert stats.challenges_completed == 1
        assert stats.streak == 1
        assert len(await sql_store.list(Kind.UNLOCKED_ACHIEVEMENT)) == 3

    @pytest.mark.asyncio
    async def test_rejected_submission_writes_nothing(self, sql_store):
        await add_achievements(sql_store)
        topic = await sql_store.put(Kind.TOPIC, Topic(name="T", country="C"))
        service = QuizService(sql_store)
        with pytest.raises(UnknownQuestion):
            await service.submit_quiz(topic.id, [SubmittedAnswer(question_id=424242, answer="A")], 10)
        assert await sql_store.list(Kind.PROGRESS) == []
        assert await sql_store.get(Kind.STATS, STATS_ID) is None
