"""Random question selection for a quiz session."""

from __future__ import annotations

import random

from cq.errors import NotFound
from cq.quiz.schemas import QuestionView
from cq.store.base import RecordStore
from cq.store.records import Kind, Question


class QuestionSelector:
    """Picks a uniform-random, non-repeating subset of a topic's questions.

    The answer key never leaves this class: callers receive QuestionView
    objects. The random source is re-rolled on every call; pass a seeded
    ``random.Random`` (or call ``reseed``) for deterministic tests.
    """

    def __init__(self, store: RecordStore, rng: random.Random | None = None) -> None:
        self.store = store
        self.rng = rng or random.Random()  # noqa: S311

    def reseed(self, seed: int | None) -> None:
        self.rng.seed(seed)

    async def select_questions(self, topic_id: int, count: int) -> list[QuestionView]:
        """Return ``min(count, available)`` questions of the topic in random order."""
        questions = await self._pick(topic_id, count)
        return [QuestionView.model_validate(q.model_dump()) for q in questions]

    async def _pick(self, topic_id: int, count: int) -> list[Question]:
        if count < 1:
            msg = f"count must be at least 1, got {count}"
            raise ValueError(msg)
        if await self.store.get(Kind.TOPIC, topic_id) is None:
            raise NotFound(f"Topic {topic_id} not found")

        questions = await self.store.list(Kind.QUESTION, topic_id=topic_id)
        return self.rng.sample(questions, k=min(count, len(questions)))
