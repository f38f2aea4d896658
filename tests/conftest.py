"""Shared test fixtures."""

from __future__ import annotations

import random
from collections.abc import AsyncGenerator
from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from cq.gamification.seed import seed_catalog
from cq.main import create_app
from cq.quiz.schemas import SubmittedAnswer
from cq.quiz.service import QuizService
from cq.storage import close_store, set_store
from cq.store.base import RecordStore
from cq.store.memory import MemoryStore
from cq.store.records import Achievement, Kind, Question, Topic


class FrozenClock:
    """Clock that only moves when told to."""

    def __init__(self, start: datetime) -> None:
        self.current = start

    def now(self) -> datetime:
        return self.current

    def advance(self, **kwargs: float) -> None:
        self.current += timedelta(**kwargs)


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock(datetime(2026, 3, 2, 12, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest_asyncio.fixture
async def store() -> MemoryStore:
    """Empty in-memory store."""
    return MemoryStore()


@pytest_asyncio.fixture
async def seeded_store() -> MemoryStore:
    """In-memory store holding the shipped catalog."""
    s = MemoryStore()
    await seed_catalog(s)
    return s


async def add_topic(
    store: MemoryStore,
    name: str = "Test Culture",
    n_questions: int = 8,
    total_questions: int | None = None,
    difficulty: int = 1,
) -> tuple[Topic, list[Question]]:
    """Create a topic with ``n_questions`` questions whose correct answer is always "A"."""
    topic = await store.put(
        Kind.TOPIC,
        Topic(name=name, country=name, total_questions=total_questions or n_questions),
    )
    questions = []
    for i in range(n_questions):
        q = await store.put(
            Kind.QUESTION,
            Question(
                topic_id=topic.id,
                type="trivia",
                prompt=f"{name} question {i + 1}?",
                options=["A", "B", "C", "D"],
                correct_answer="A",
                cultural_fact=f"Fact {i + 1} about {name}.",
                difficulty=difficulty,
            ),
        )
        questions.append(q)
    return topic, questions


def answers_for(questions: list[Question], correct: int | None = None, time_spent: float = 1000) -> list[SubmittedAnswer]:
    """Answer every question; the first ``correct`` answers are right, the rest wrong."""
    if correct is None:
        correct = len(questions)
    return [
        SubmittedAnswer(question_id=q.id, answer="A" if i < correct else "B", time_spent=time_spent)
        for i, q in enumerate(questions)
    ]


ACHIEVEMENTS = [
    ("Cultural Explorer", "complete_first_challenge", 100),
    ("Perfect Score", "perfect_score", 250),
    ("Culture Master", "complete_culture", 500),
    ("Global Citizen", "explore_5_cultures", 750),
    ("Speed Learner", "speed_completion", 200),
]


async def add_achievements(store: RecordStore) -> list[Achievement]:
    return [
        await store.put(
            Kind.ACHIEVEMENT,
            Achievement(title=title, description=title, points=points, icon="*", requirement=req),
        )
        for title, req, points in ACHIEVEMENTS
    ]


@pytest_asyncio.fixture
async def quiz_store(store: MemoryStore) -> MemoryStore:
    """Store with the five standard achievements and no topics yet."""
    await add_achievements(store)
    return store


@pytest.fixture
def service(quiz_store: MemoryStore, rng: random.Random, clock: FrozenClock) -> QuizService:
    return QuizService(quiz_store, rng=rng, clock=clock)


@pytest_asyncio.fixture
async def client(seeded_store: MemoryStore) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client over the app, backed by a freshly seeded in-memory store.

    ASGITransport does not run the lifespan, so the store is installed directly
    and Redis stays unconfigured (no rate limiting, no pub/sub).
    """
    set_store(seeded_store)
    app = create_app()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    await close_store()
