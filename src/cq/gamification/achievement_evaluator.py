"""Achievement evaluator: unlocks achievements whose requirement newly holds."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from cq.clock import Clock
from cq.store.base import RecordStore
from cq.store.records import Achievement, Kind, Progress, Stats, Topic, UnlockedAchievement

logger = logging.getLogger(__name__)

# Completion bar used when a progress record's topic cannot be found.
FALLBACK_TOPIC_QUESTIONS = 8
SPEED_COMPLETION_SECONDS = 300
EXPLORER_TOPIC_COUNT = 5

PERFECT_SCORE_BASES = ("session", "running")


@dataclass(frozen=True)
class SessionContext:
    """Facts about the submission being evaluated that Stats does not carry."""

    total_time: float
    accuracy: int


@dataclass(frozen=True)
class EvaluationContext:
    stats: Stats
    progress: Sequence[Progress]
    topics: dict[int, Topic] = field(default_factory=dict)
    session: SessionContext | None = None
    perfect_score_basis: str = "session"


def _complete_first_challenge(ctx: EvaluationContext) -> bool:
    return ctx.stats.challenges_completed >= 1


def _perfect_score(ctx: EvaluationContext) -> bool:
    if ctx.perfect_score_basis == "running":
        return ctx.stats.accuracy == 100
    return ctx.session is not None and ctx.session.accuracy == 100


def _complete_culture(ctx: EvaluationContext) -> bool:
    for p in ctx.progress:
        topic = ctx.topics.get(p.topic_id)
        bar = topic.total_questions if topic is not None else FALLBACK_TOPIC_QUESTIONS
        if p.questions_completed >= bar:
            return True
    return False


def _explore_5_cultures(ctx: EvaluationContext) -> bool:
    return ctx.stats.cultures_explored >= EXPLORER_TOPIC_COUNT


def _speed_completion(ctx: EvaluationContext) -> bool:
    return ctx.session is not None and ctx.session.total_time < SPEED_COMPLETION_SECONDS


REQUIREMENT_PREDICATES: dict[str, Callable[[EvaluationContext], bool]] = {
    "complete_first_challenge": _complete_first_challenge,
    "perfect_score": _perfect_score,
    "complete_culture": _complete_culture,
    "explore_5_cultures": _explore_5_cultures,
    "speed_completion": _speed_completion,
}


class AchievementEvaluator:
    """Tests every not-yet-unlocked achievement against the predicate table.

    Achievements are visited in ascending id order, so the returned list is
    deterministic. An achievement with an UnlockedAchievement record is
    skipped, which makes repeated evaluation idempotent.
    """

    def __init__(self, store: RecordStore, clock: Clock, perfect_score_basis: str = "session") -> None:
        if perfect_score_basis not in PERFECT_SCORE_BASES:
            msg = f"perfect_score_basis must be one of {PERFECT_SCORE_BASES}, got {perfect_score_basis!r}"
            raise ValueError(msg)
        self.store = store
        self.clock = clock
        self.perfect_score_basis = perfect_score_basis

    async def evaluate(
        self,
        stats: Stats,
        progress: Sequence[Progress],
        session: SessionContext | None = None,
    ) -> list[Achievement]:
        """Unlock and return the achievements whose requirement newly holds."""
        unlocked_ids = {u.achievement_id for u in await self.store.list(Kind.UNLOCKED_ACHIEVEMENT)}
        topics = {t.id: t for t in await self.store.list(Kind.TOPIC)}
        ctx = EvaluationContext(
            stats=stats,
            progress=progress,
            topics=topics,
            session=session,
            perfect_score_basis=self.perfect_score_basis,
        )

        newly_unlocked: list[Achievement] = []
        for achievement in await self.store.list(Kind.ACHIEVEMENT):
            if achievement.id in unlocked_ids:
                continue

            predicate = REQUIREMENT_PREDICATES.get(achievement.requirement)
            if predicate is None:
                logger.warning(
                    "Unknown achievement requirement %r (achievement %s)",
                    achievement.requirement,
                    achievement.id,
                )
                continue

            if predicate(ctx):
                await self.store.put(
                    Kind.UNLOCKED_ACHIEVEMENT,
                    UnlockedAchievement(achievement_id=achievement.id, unlocked_at=self.clock.now()),
                )
                unlocked_ids.add(achievement.id)
                newly_unlocked.append(achievement)
                logger.info("Achievement unlocked: %s", achievement.requirement)

        return newly_unlocked
