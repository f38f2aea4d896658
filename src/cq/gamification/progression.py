"""Progression updater: merges one graded quiz into Progress and Stats."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime

from cq.gamification.level_thresholds import compute_topic_level
from cq.gamification.streak_service import advance_streak, get_play_day
from cq.quiz.schemas import DetailedAnswer
from cq.quiz.scoring import round_half_up
from cq.store.base import RecordStore
from cq.store.records import (
    STATS_ID,
    Kind,
    Progress,
    ProgressUpdate,
    Stats,
    StatsUpdate,
    Topic,
    merge_progress,
    merge_stats,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProgressionResult:
    progress: Progress
    stats: Stats
    previous_level: str
    first_visit: bool

    @property
    def level_up(self) -> bool:
        return self.progress.level != self.previous_level


async def get_or_create_stats(store: RecordStore) -> Stats:
    """Load the Stats singleton, creating the zeroed record on first use."""
    stats = await store.get(Kind.STATS, STATS_ID)
    if stats is None:
        stats = await store.put(Kind.STATS, Stats())
    return stats


def running_accuracy(previous_accuracy: int, previous_count: int, new_accuracy: int) -> int:
    """Submission-weighted mean accuracy, weighted by the count *before* this submission."""
    return round_half_up((previous_accuracy * previous_count + new_accuracy) / (previous_count + 1))


async def apply_submission(
    store: RecordStore,
    topic: Topic,
    answers: Sequence[DetailedAnswer],
    accuracy: int,
    points_earned: int,
    now: datetime,
) -> ProgressionResult:
    """Merge one quiz result into the topic's Progress and the global Stats.

    Must run inside ``store.transaction()``: the progress put and the stats
    put are two writes that only together form a consistent state.
    """
    existing = await store.get(Kind.PROGRESS, topic.id)
    previous_level = existing.level if existing is not None else compute_topic_level(0)
    previous_completed = existing.questions_completed if existing is not None else 0
    previous_best = existing.best_score if existing is not None else 0
    previous_total = existing.total_points if existing is not None else 0

    # High-water mark of a single session's size, capped at the topic's bank size
    questions_completed = min(max(previous_completed, len(answers)), topic.total_questions)

    progress = merge_progress(
        existing,
        topic.id,
        ProgressUpdate(
            questions_completed=questions_completed,
            best_score=max(previous_best, points_earned),
            total_points=previous_total + points_earned,
            level=compute_topic_level(questions_completed),
            last_played=now,
        ),
    )
    progress = await store.put(Kind.PROGRESS, progress)

    stats = await get_or_create_stats(store)
    explored = len(await store.list(Kind.PROGRESS))
    played_on = get_play_day(now)
    stats = merge_stats(
        stats,
        StatsUpdate(
            total_score=stats.total_score + points_earned,
            accuracy=running_accuracy(stats.accuracy, stats.challenges_completed, accuracy),
            challenges_completed=stats.challenges_completed + 1,
            cultures_explored=explored,
            streak=advance_streak(stats.streak, stats.last_played_on, played_on),
            last_played_on=played_on,
        ),
    )
    stats = await store.put(Kind.STATS, stats)

    if progress.level != previous_level:
        logger.info(
            "Topic %s level up: %s -> %s", topic.id, previous_level, progress.level
        )

    return ProgressionResult(
        progress=progress,
        stats=stats,
        previous_level=previous_level,
        first_visit=existing is None,
    )
